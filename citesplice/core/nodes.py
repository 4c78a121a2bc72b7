"""Helpers for Pandoc JSON AST nodes.

Nodes are the plain dicts produced by ``pandoc -t json``: ``{"t": tag, "c":
content}``. Only the citation and heading variants get special handling;
every other node is walked generically.
"""
from typing import Any, Dict, List

CITE = "Cite"
HEADER = "Header"
PARA = "Para"
RAW_INLINE = "RawInline"

_SPACE_TAGS = {"Space", "SoftBreak", "LineBreak"}


def node_type(node: Any) -> str:
    """Return the type tag of ``node`` or an empty string for non-nodes."""
    if isinstance(node, dict):
        tag = node.get("t")
        if isinstance(tag, str):
            return tag
    return ""


def is_cite(node: Any) -> bool:
    return node_type(node) == CITE


def is_header(node: Any) -> bool:
    return node_type(node) == HEADER


def stringify(value: Any) -> str:
    """Flatten inline content (or meta values) to plain text."""
    if isinstance(value, list):
        return "".join(stringify(item) for item in value)
    if not isinstance(value, dict):
        return ""

    tag = node_type(value)
    if tag in ("Str", "MetaString"):
        content = value.get("c")
        return content if isinstance(content, str) else ""
    if tag in _SPACE_TAGS:
        return " "
    if tag in ("Code", "Math", "RawInline"):
        content = value.get("c") or []
        return content[-1] if content and isinstance(content[-1], str) else ""
    return stringify(value.get("c"))


def header_title(block: Dict[str, Any]) -> str:
    """Plain-text title of a ``Header`` block (``[level, attr, inlines]``)."""
    content = block.get("c")
    if not isinstance(content, list) or len(content) < 3:
        return ""
    return stringify(content[2])


def raw_inline(fmt: str, text: str) -> Dict[str, Any]:
    return {"t": RAW_INLINE, "c": [fmt, text]}


def para(inlines: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"t": PARA, "c": inlines}
