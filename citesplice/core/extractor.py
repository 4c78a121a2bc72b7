"""Citation extraction from a Pandoc JSON tree."""
import logging
import re
from typing import Any, Dict, List, Optional

from ..exceptions import MalformedCitationError
from .models import ExtractionResult
from .nodes import is_cite, node_type

logger = logging.getLogger(__name__)

# One leading "[" or trailing "]" plus the whitespace next to it
_BRACKETS = re.compile(r"^\[\s*|\s*\]$")


def citation_entries(node: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Return the citation list of a ``Cite`` node (``c[0]``).

    Raises:
        MalformedCitationError: If the node has no citation list
    """
    content = node.get("c")
    if not isinstance(content, list) or not content or not isinstance(content[0], list):
        raise MalformedCitationError(f"Cite node without a citation list: {node!r:.200}")
    return content[0]


def suffix_fragments(citation: Dict[str, Any]) -> List[str]:
    """Bracket-stripped text of the ``Str`` nodes in a citation suffix."""
    suffix = citation.get("citationSuffix") or []
    return [
        _BRACKETS.sub("", part.get("c", ""))
        for part in suffix
        if node_type(part) == "Str"
    ]


def _citation_id(citation: Any) -> str:
    if not isinstance(citation, dict) or not isinstance(citation.get("citationId"), str):
        raise MalformedCitationError(f"Citation without citationId: {citation!r:.200}")
    return citation["citationId"]


def extract_citations(tree: Any, result: Optional[ExtractionResult] = None) -> ExtractionResult:
    """Collect citation occurrences in document order.

    The walk is depth-first and left-to-right over lists and dict values in
    key order. ``rewrite_citations`` walks the tree the same way, which is
    what keeps formatted results aligned with their nodes.

    Args:
        tree: Block list, node or any JSON value from the document
        result: Accumulator to extend (a new one is created when omitted)

    Returns:
        ExtractionResult with globally indexed occurrences
    """
    if result is None:
        result = ExtractionResult()
    _walk(tree, result)
    logger.debug(f"Extracted {len(result)} citation occurrence(s)")
    return result


def _walk(value: Any, result: ExtractionResult) -> None:
    if isinstance(value, list):
        for item in value:
            _walk(item, result)
    elif isinstance(value, dict):
        if is_cite(value):
            for citation in citation_entries(value):
                result.add(_citation_id(citation), suffix_fragments(citation))
            return
        for item in value.values():
            _walk(item, result)


def collect_citation_ids(value: Any) -> List[str]:
    """Ids of all citation occurrences under ``value``, in document order.

    Used for the ``nocite`` metadata field, whose entries are never rendered.
    """
    return [occurrence.item_id for occurrence in extract_citations(value).occurrences]
