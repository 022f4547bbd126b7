"""WordprocessingML table renderer.

Converts a :class:`~oxmlmaker.model.Table` into a ``w:tbl`` fragment:

- a fixed table property block (style, width, borders, layout)
- one grid column per table column
- a bold, centered header row built from the column names
- one body row per record, grouped, with per-cell vertical merging and
  multi-line splitting

Rendering never fails on record data: a field that cannot be read renders
as an empty cell.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Optional

from oxmlmaker.escaping import format_cell_text, format_paragraph_text
from oxmlmaker.model import CellSpec, Column, Table

logger = logging.getLogger(__name__)

LINE_SEPARATOR = ", "


class TableHandler:
    """Renders :class:`Table` models to ``w:tbl`` markup."""

    def __init__(self) -> None:
        """Initialize table handler with default formatting values."""
        self.default_col_width = 2000  # dxa
        self.default_font_size = 22  # half-points
        self.multi_line_font_size = 22
        self.table_width = 10468  # dxa
        self.table_style = "DefaultTable"
        self.border_color = "666666"
        self.border_size = 4
        self.table_look = "0600"

    def render_table(self, table: Table) -> str:
        """Convert *table* to a ``w:tbl`` string.

        Args:
            table: Table model with columns, a row template and record groups

        Returns:
            Markup for the complete table element
        """
        font_size = self._font_size(table)
        parts: list[str] = []
        a = parts.append

        a("<w:tbl>")
        a(self._table_properties())
        a("<w:tblGrid>")
        a("\n".join(self._grid_col(col) for col in table.columns))
        a("</w:tblGrid>")
        a(self._header_row(table.columns, font_size))
        a("\n".join(self._body_rows(table, font_size)))
        a("</w:tbl>")

        return "\n".join(parts)

    # ------------------------------------------------------------------
    # Fixed structure
    # ------------------------------------------------------------------

    def _table_properties(self) -> str:
        border = (
            f'w:color="{self.border_color}" w:val="single"'
            f' w:sz="{self.border_size}" w:space="0"'
        )
        sides = ("top", "left", "bottom", "right", "insideH", "insideV")
        borders = "\n".join(f"    <w:{side} {border}/>" for side in sides)
        return (
            "  <w:tblPr>\n"
            f'    <w:tblStyle w:val="{self.table_style}"/>\n'
            f'    <w:tblW w:w="{self.table_width}" w:type="dxa"/>\n'
            '    <w:tblInd w:w="0" w:type="dxa"/>\n'
            "    <w:tblBorders>\n"
            f"{borders}\n"
            "    </w:tblBorders>\n"
            '    <w:tblLayout w:type="fixed"/>\n'
            f'    <w:tblLook w:val="{self.table_look}"/>\n'
            "  </w:tblPr>"
        )

    def _grid_col(self, column: Column) -> str:
        return f'<w:gridCol w:w="{self._width(column.width)}"/>'

    # ------------------------------------------------------------------
    # Header
    # ------------------------------------------------------------------

    def _header_row(self, columns: list[Column], font_size: int) -> str:
        cells = "\n".join(self._header_cell(col, font_size) for col in columns)
        return (
            "<w:tr>\n"
            "  <w:tblPrEx>\n"
            "    <w:tblCellMar>\n"
            '      <w:top w:w="0" w:type="dxa"/>\n'
            '      <w:bottom w:w="0" w:type="dxa"/>\n'
            "    </w:tblCellMar>\n"
            "  </w:tblPrEx>\n"
            "  <w:trPr>\n"
            '    <w:tblAlign w:val="center"/>\n'
            "  </w:trPr>\n"
            f"{cells}\n"
            "</w:tr>"
        )

    def _header_cell(self, column: Column, font_size: int) -> str:
        return (
            "<w:tc>\n"
            "  <w:tcPr>\n"
            f'    <w:tcW w:w="{self._width(column.width)}"/>\n'
            "  </w:tcPr>\n"
            "  <w:p>\n"
            "    <w:pPr>\n"
            '      <w:jc w:val="center"/>\n'
            "      <w:rPr>\n"
            "        <w:b/>\n"
            "      </w:rPr>\n"
            "    </w:pPr>\n"
            "    <w:r>\n"
            "      <w:rPr>\n"
            "        <w:b/>\n"
            f'        <w:sz w:val="{font_size}"/>\n'
            "      </w:rPr>\n"
            f"      <w:t>{format_paragraph_text(column.name)}</w:t>\n"
            "    </w:r>\n"
            "  </w:p>\n"
            "</w:tc>"
        )

    # ------------------------------------------------------------------
    # Body
    # ------------------------------------------------------------------

    def _body_rows(self, table: Table, font_size: int) -> Iterator[str]:
        for records in table.groups.values():
            # Merge position restarts with every group.
            for index, record in enumerate(records):
                yield self._render_row(table.row_template, record, index, font_size)

    def _render_row(
        self,
        row_template: list[CellSpec],
        record: Any,
        index: int,
        font_size: int,
    ) -> str:
        """Render one record as a ``w:tr``.

        Args:
            row_template: Cell specs applied to the record, in order
            record: The data record
            index: Position of the record within its group
            font_size: Run size for single-line cells
        """
        cells = "\n".join(
            self._render_cell(spec, record, index, font_size) for spec in row_template
        )
        return f"<w:tr>\n{cells}\n</w:tr>"

    def _render_cell(self, spec: CellSpec, record: Any, index: int, font_size: int) -> str:
        width = self._width(spec.width)
        value = self._extract_value(spec, record)

        if spec.multi_line:
            return (
                "<w:tc>\n"
                "  <w:tcPr>\n"
                f'    <w:tcW w:w="{width}" w:type="dxa"/>\n'
                '    <w:vAlign w:val="center"/>\n'
                "  </w:tcPr>\n"
                f"{self._multi_line_content(value)}\n"
                "</w:tc>"
            )

        merge = self._v_merge_tag(spec, index)
        merge_line = f"    {merge}\n" if merge else ""
        return (
            "<w:tc>\n"
            "  <w:tcPr>\n"
            f'    <w:tcW w:w="{width}" w:type="dxa"/>\n'
            f"{merge_line}"
            '    <w:vAlign w:val="center"/>\n'
            "  </w:tcPr>\n"
            "  <w:p>\n"
            "    <w:pPr>\n"
            '      <w:jc w:val="center"/>\n'
            "    </w:pPr>\n"
            "    <w:r>\n"
            f'      <w:rPr><w:sz w:val="{font_size}"/></w:rPr>\n'
            f"      <w:t>{format_cell_text(value)}</w:t>\n"
            "    </w:r>\n"
            "  </w:p>\n"
            "</w:tc>"
        )

    def _v_merge_tag(self, spec: CellSpec, index: int) -> str:
        if not spec.vertical_merge:
            return ""
        state = "restart" if index == 0 else "continue"
        return f'<w:vMerge w:val="{state}"/>'

    def _multi_line_content(self, value: Any) -> str:
        """One centered paragraph per ``", "``-separated segment of *value*."""
        return "\n".join(self._line_paragraph(line) for line in self._split_lines(value))

    def _line_paragraph(self, line: str) -> str:
        return (
            "  <w:p>\n"
            "    <w:pPr>\n"
            '      <w:spacing w:after="0"/>\n'
            '      <w:jc w:val="center"/>\n'
            "    </w:pPr>\n"
            "    <w:r>\n"
            f'      <w:rPr><w:sz w:val="{self.multi_line_font_size}"/></w:rPr>\n'
            f"      <w:t>{format_cell_text(line)}</w:t>\n"
            "    </w:r>\n"
            "  </w:p>"
        )

    @staticmethod
    def _split_lines(value: Any) -> list[str]:
        if value is None:
            return [""]
        text = str(value)
        if not text.strip():
            return [""]
        lines = text.split(LINE_SEPARATOR)
        # Trailing empty segments are dropped, but at least one line is kept.
        while len(lines) > 1 and lines[-1] == "":
            lines.pop()
        return lines

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _extract_value(self, spec: CellSpec, record: Any) -> Any:
        try:
            value = spec.field_selector(record)
        except Exception:
            logger.debug(
                "Field extraction failed for %r on %r",
                getattr(spec.field_selector, "__name__", spec.field_selector),
                record,
                exc_info=True,
            )
            return ""
        return "" if value is None else value

    def _width(self, width: Optional[int]) -> int:
        return self.default_col_width if width is None else width

    def _font_size(self, table: Table) -> int:
        return self.default_font_size if table.font_size is None else table.font_size
