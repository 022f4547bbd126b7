"""Text formatting for WordprocessingML markup.

Table cell text is XML-escaped; paragraph section text and column header
names are emitted verbatim.  The two policies are kept as separate
functions because callers rely on the verbatim behaviour to inject inline
markup into paragraphs.
"""

from __future__ import annotations

from typing import Any

# Ampersand must come first so later entities are not escaped twice.
_ENTITIES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


def escape(s: str) -> str:
    """Replace the five XML special characters with entity references."""
    for char, entity in _ENTITIES:
        s = s.replace(char, entity)
    return s


def format_cell_text(value: Any) -> str:
    """Stringify and escape a table body value; ``None`` becomes ``""``."""
    if value is None:
        return ""
    return escape(str(value))


def format_paragraph_text(value: Any) -> str:
    """Stringify paragraph or header text without escaping."""
    if value is None:
        return ""
    return str(value)
