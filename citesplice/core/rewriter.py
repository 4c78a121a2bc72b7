"""Replacement of citation nodes with rendered text."""
import logging
from typing import Any

from .extractor import citation_entries
from .formatting import render_fragment
from .models import FormattedQueue
from .nodes import is_cite, raw_inline

logger = logging.getLogger(__name__)


def rewrite_citations(
    tree: Any,
    queue: FormattedQueue,
    raw_format: str = "markdown",
    separator: str = "; ",
    drain: bool = True,
) -> Any:
    """Return a copy of ``tree`` with every ``Cite`` node rendered.

    The walk order matches ``extract_citations``. Each citation node takes
    as many results from the front of ``queue`` as it has occurrences and
    becomes a single ``RawInline`` node.

    Args:
        tree: Block list or any JSON value from the document
        queue: Formatted results in occurrence order
        raw_format: Format tag of the generated ``RawInline`` nodes
        separator: Text placed between occurrences of one node
        drain: Require the queue to be empty afterwards

    Raises:
        QueueUnderflowError: If the queue runs out early
        QueueDesyncError: If ``drain`` is set and results are left over
    """
    rewritten = _rewrite(tree, queue, raw_format, separator)
    if drain:
        queue.assert_drained()
    logger.debug(f"Placed {queue.consumed} formatted citation(s)")
    return rewritten


def _rewrite(value: Any, queue: FormattedQueue, raw_format: str, separator: str) -> Any:
    if isinstance(value, list):
        return [_rewrite(item, queue, raw_format, separator) for item in value]
    if isinstance(value, dict):
        if is_cite(value):
            count = len(citation_entries(value))
            texts = [render_fragment(text) for text in queue.take(count)]
            return raw_inline(raw_format, separator.join(texts))
        return {
            key: _rewrite(item, queue, raw_format, separator)
            for key, item in value.items()
        }
    return value
