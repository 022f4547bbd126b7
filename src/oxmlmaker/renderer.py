"""WordprocessingML document renderer - converts a content model to DOCX.

This module turns a :class:`~oxmlmaker.model.ContentModel` into the
``word/document.xml`` part and packages it with the fixed auxiliary parts
into a ``.docx`` archive that Word and LibreOffice can open.

Sections are rendered independently and joined in order; the page size
and margins close the body in a ``w:sectPr`` block.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional

from oxmlmaker.errors import ConfigurationError
from oxmlmaker.model import (
    ContentModel,
    PageMargin,
    PageSize,
    ParagraphSection,
    SectionKind,
    Table,
    TableSection,
)
from oxmlmaker.package import PartSet, build_package, write_package
from oxmlmaker.paragraph import render_paragraph
from oxmlmaker.table_handler import TableHandler

logger = logging.getLogger(__name__)

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"

XML_PROLOG = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'

_PAGE_SIZE_FIELDS = ("width", "height")
_PAGE_MARGIN_FIELDS = ("top", "right", "bottom", "left", "header", "footer", "gutter")


def _require_fields(obj: Any, name: str, fields: tuple[str, ...]) -> None:
    if obj is None:
        raise ConfigurationError(f"Missing {name}")
    missing = [f for f in fields if getattr(obj, f, None) is None]
    if missing:
        raise ConfigurationError(f"Missing {name} fields", ", ".join(missing))


class DocxRenderer:
    """Render a :class:`ContentModel` to ``document.xml`` text or DOCX bytes."""

    def __init__(self, table_handler: Optional[TableHandler] = None) -> None:
        self.tables: TableHandler = table_handler or TableHandler()

    # ======================================================================
    # Public API
    # ======================================================================

    def render(self, model: ContentModel, parts: Optional[PartSet] = None) -> bytes:
        """Return a complete DOCX file as *bytes* for *model*."""
        return build_package(self.render_document(model), parts)

    def render_to_file(
        self,
        model: ContentModel,
        path: str | Path,
        parts: Optional[PartSet] = None,
    ) -> Path:
        """Render and atomically write to *path*."""
        return write_package(self.render(model, parts), path)

    def render_document(self, model: ContentModel) -> str:
        """Return the ``word/document.xml`` content for *model*.

        Raises:
            ConfigurationError: page size or a margin field is missing.
        """
        _require_fields(model.page_size, "page_size", _PAGE_SIZE_FIELDS)
        _require_fields(model.page_margin, "page_margin", _PAGE_MARGIN_FIELDS)

        body = self.render_sections(model.sections)
        return (
            f"{XML_PROLOG}\n"
            f'<w:document xmlns:w="{W_NS}">\n'
            "  <w:body>\n"
            f"{body}\n"
            "    <w:sectPr>\n"
            f"      {self._page_size(model.page_size)}\n"
            f"      {self._page_margin(model.page_margin)}\n"
            "    </w:sectPr>\n"
            "  </w:body>\n"
            "</w:document>\n"
        )

    def render_sections(self, sections: Iterable[Any]) -> str:
        """Render *sections* in order, joined by newlines."""
        return "\n".join(self.iter_sections(sections))

    def iter_sections(self, sections: Iterable[Any]) -> Iterator[str]:
        """Yield the markup fragment of each section lazily."""
        for section in sections:
            yield self._render_section(section)

    # ======================================================================
    # Section dispatch
    # ======================================================================

    def _render_section(self, section: Any) -> str:
        kind = getattr(section, "kind", None)
        if not isinstance(kind, SectionKind):
            logger.debug("Skipping unrecognized section %r", section)
            return ""
        handler = getattr(self, f"_render_{kind.value}")
        return handler(section)

    def _render_paragraph(self, section: ParagraphSection) -> str:
        return render_paragraph(section.text)

    def _render_table(self, section: TableSection) -> str:
        if not isinstance(section.table, Table):
            logger.debug("Skipping table section without a table: %r", section)
            return ""
        return self.tables.render_table(section.table)

    def _render_empty(self, _section: Any) -> str:
        return ""

    # ======================================================================
    # Section properties
    # ======================================================================

    @staticmethod
    def _page_size(size: PageSize) -> str:
        return f'<w:pgSz w:w="{size.width}" w:h="{size.height}"/>'

    @staticmethod
    def _page_margin(margin: PageMargin) -> str:
        return (
            f'<w:pgMar w:top="{margin.top}" w:right="{margin.right}"'
            f' w:bottom="{margin.bottom}" w:left="{margin.left}"'
            f' w:header="{margin.header}" w:footer="{margin.footer}"'
            f' w:gutter="{margin.gutter}"/>'
        )
