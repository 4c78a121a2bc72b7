"""Conversion of engine HTML fragments to lightweight markup."""

_REPLACEMENTS = (
    ("<i>", "*"),
    ("</i>", "*"),
    ('<div class="csl-entry">', ""),
    ("</div>", ""),
    ("&ndash;", "--"),
    ("&mdash;", "---"),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
)


def normalize_fragment(text: str) -> str:
    """Turn an HTML citation or bibliography fragment into markdown text.

    Italics become ``*...*``, the ``csl-entry`` wrapper is removed and the
    dash, ampersand and angle-bracket entities are unescaped. Nothing else in
    the text is touched.
    """
    for old, new in _REPLACEMENTS:
        text = text.replace(old, new)
    return text


def render_fragment(text: str) -> str:
    """Trim and normalize a single engine fragment."""
    return normalize_fragment(text.strip())
