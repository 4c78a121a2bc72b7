"""Tests for replacing citation nodes with formatted text."""
import pytest

from citesplice.core.extractor import extract_citations
from citesplice.core.models import FormattedQueue
from citesplice.core.rewriter import rewrite_citations
from citesplice.exceptions import QueueDesyncError, QueueUnderflowError

from tests.builders import Cite, Header, Para, Space, Str, citation


class TestRewriteCitations:
    """Citation nodes become RawInline nodes, everything else is kept."""

    def test_results_consumed_in_order(self):
        blocks = [
            Para(Str("A"), Space(), Cite(citation("a"), citation("b"))),
            Para(Cite(citation("c"))),
        ]
        queue = FormattedQueue(["(A <i>x</i>)", " (B) ", "(C &amp; D)"])
        result = rewrite_citations(blocks, queue)

        assert result[0]["c"][2] == {"t": "RawInline", "c": ["markdown", "(A *x*); (B)"]}
        assert result[0]["c"][:2] == [Str("A"), Space()]
        assert result[1]["c"][0] == {"t": "RawInline", "c": ["markdown", "(C & D)"]}
        assert queue.consumed == 3

    def test_input_tree_unchanged(self):
        blocks = [Para(Cite(citation("a")))]
        rewrite_citations(blocks, FormattedQueue(["(A)"]))
        assert blocks[0]["c"][0]["t"] == "Cite"

    def test_counts_match_extraction(self):
        blocks = [
            Header("Intro"),
            {"t": "Div", "c": [["", [], []], [Para(Cite(citation("a"), citation("b")))]]},
            Para(Cite(citation("a"))),
        ]
        count = len(extract_citations(blocks))
        queue = FormattedQueue([f"r{i}" for i in range(count)])
        rewrite_citations(blocks, queue)
        assert queue.consumed == count == 3

    def test_custom_format_and_separator(self):
        result = rewrite_citations(
            [Cite(citation("a"), citation("b"))],
            FormattedQueue(["x", "y"]),
            raw_format="latex",
            separator=", ",
        )
        assert result == [{"t": "RawInline", "c": ["latex", "x, y"]}]

    def test_already_rendered_document_is_untouched(self):
        blocks = [Para({"t": "RawInline", "c": ["markdown", "(Doe 2020)"]})]
        assert rewrite_citations(blocks, FormattedQueue()) == blocks


class TestQueueContract:
    """Extraction and rewriting must stay in step."""

    def test_underflow(self):
        with pytest.raises(QueueUnderflowError):
            rewrite_citations([Cite(citation("a"), citation("b"))], FormattedQueue(["x"]))

    def test_leftover_results(self):
        with pytest.raises(QueueDesyncError):
            rewrite_citations([Cite(citation("a"))], FormattedQueue(["x", "y"]))

    def test_leftover_allowed_without_drain(self):
        queue = FormattedQueue(["x", "y"])
        rewrite_citations([Cite(citation("a"))], queue, drain=False)
        assert len(queue) == 1
