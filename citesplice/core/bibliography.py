"""Bibliography assembly and placement."""
import logging
from typing import Any, Dict, List, Optional, Sequence

from .formatting import render_fragment
from .nodes import header_title, is_header, para, raw_inline

logger = logging.getLogger(__name__)


def find_bibliography_heading(blocks: Sequence[Any], titles: Sequence[str]) -> Optional[int]:
    """Index of the first top-level heading whose title is in ``titles``."""
    for index, block in enumerate(blocks):
        if is_header(block) and header_title(block) in titles:
            return index
    return None


def bibliography_blocks(fragments: Sequence[str], raw_format: str = "markdown") -> List[Dict[str, Any]]:
    """Wrap each bibliography fragment in its own paragraph."""
    return [para([raw_inline(raw_format, render_fragment(fragment))]) for fragment in fragments]


def insert_bibliography(
    blocks: List[Any],
    engine,
    titles: Sequence[str],
    raw_format: str = "markdown",
) -> List[Any]:
    """Splice the engine's bibliography after the bibliography heading.

    Without a matching heading the blocks are returned unchanged and the
    engine is not asked for a bibliography.

    Args:
        blocks: Top-level document blocks
        engine: FormattingEngine holding the registered items
        titles: Recognized bibliography heading titles
        raw_format: Format tag of the generated ``RawInline`` nodes

    Returns:
        New block list
    """
    heading_index = find_bibliography_heading(blocks, titles)
    if heading_index is None:
        logger.info("No bibliography heading found; bibliography not inserted")
        return list(blocks)

    _, fragments = engine.build_bibliography()
    entries = bibliography_blocks(fragments, raw_format)
    logger.info(f"Inserting {len(entries)} bibliography entries after block {heading_index}")
    return list(blocks[: heading_index + 1]) + entries + list(blocks[heading_index + 1 :])
