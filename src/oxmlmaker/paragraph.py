"""Paragraph section renderer."""

from __future__ import annotations

from typing import Optional

from oxmlmaker.escaping import format_paragraph_text


def render_paragraph(text: Optional[str]) -> str:
    """Return a ``w:p`` fragment with a single run holding *text*.

    The text is not escaped, so ``<`` and ``&`` reach the markup as-is.
    """
    return (
        "<w:p>\n"
        "  <w:r>\n"
        f"    <w:t>{format_paragraph_text(text)}</w:t>\n"
        "  </w:r>\n"
        "</w:p>\n"
    )
