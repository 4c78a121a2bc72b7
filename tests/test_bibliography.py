"""Tests for bibliography placement."""
from citesplice.config import DEFAULT_BIBLIOGRAPHY_HEADINGS
from citesplice.core.bibliography import (
    bibliography_blocks,
    find_bibliography_heading,
    insert_bibliography,
)

from tests.builders import Header, Para, Str, words


class StaticEngine:
    def __init__(self, fragments):
        self.fragments = fragments
        self.requests = 0

    def build_bibliography(self):
        self.requests += 1
        return {}, self.fragments


class TestFindHeading:
    """Only exact top-level heading titles count."""

    def test_english_heading(self):
        blocks = [Header("Intro"), Para(Str("x")), Header("Bibliography")]
        assert find_bibliography_heading(blocks, DEFAULT_BIBLIOGRAPHY_HEADINGS) == 2

    def test_japanese_heading(self):
        blocks = [Header("参考文献", level=2)]
        assert find_bibliography_heading(blocks, DEFAULT_BIBLIOGRAPHY_HEADINGS) == 0

    def test_first_match_wins(self):
        blocks = [Header("Bibliography"), Header("参考文献")]
        assert find_bibliography_heading(blocks, DEFAULT_BIBLIOGRAPHY_HEADINGS) == 0

    def test_title_must_match_exactly(self):
        blocks = [Header("bibliography"), Header("Bibliography and notes"), Header("References")]
        assert find_bibliography_heading(blocks, DEFAULT_BIBLIOGRAPHY_HEADINGS) is None

    def test_identifier_alone_does_not_match(self):
        blocks = [Header("References", identifier="Bibliography")]
        assert find_bibliography_heading(blocks, DEFAULT_BIBLIOGRAPHY_HEADINGS) is None

    def test_paragraph_text_is_not_a_heading(self):
        blocks = [Para(*words("Bibliography"))]
        assert find_bibliography_heading(blocks, DEFAULT_BIBLIOGRAPHY_HEADINGS) is None


class TestInsertBibliography:
    """Entries are spliced right after the heading."""

    def test_inserted_after_heading(self):
        engine = StaticEngine(['<div class="csl-entry">Doe, J. <i>Cities</i>.</div>', "Roe &amp; Poe"])
        blocks = [Header("Bibliography"), Header("Appendix")]
        result = insert_bibliography(blocks, engine, DEFAULT_BIBLIOGRAPHY_HEADINGS)

        assert result[0] == blocks[0]
        assert result[1] == {"t": "Para", "c": [{"t": "RawInline", "c": ["markdown", "Doe, J. *Cities*."]}]}
        assert result[2] == {"t": "Para", "c": [{"t": "RawInline", "c": ["markdown", "Roe & Poe"]}]}
        assert result[3] == blocks[1]

    def test_no_heading_is_a_no_op(self):
        engine = StaticEngine(["entry"])
        blocks = [Header("Intro"), Para(Str("x"))]
        assert insert_bibliography(blocks, engine, DEFAULT_BIBLIOGRAPHY_HEADINGS) == blocks
        assert engine.requests == 0

    def test_bibliography_blocks_format(self):
        assert bibliography_blocks(["a"], raw_format="html") == [
            {"t": "Para", "c": [{"t": "RawInline", "c": ["html", "a"]}]}
        ]
