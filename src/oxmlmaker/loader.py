"""Build a :class:`~oxmlmaker.model.ContentModel` from plain data.

Accepts the hash-shaped parameters used by document generators::

    {
        "sections": [
            {"paragraph": {"text": "Report"}},
            {"table": {
                "columns": [{"name": "Name", "width": 3000}],
                "rows": [{"cells": [{"value": "name", "v_merge": True}]}],
                "data": {"0": [{"name": "Alice"}]},
                "font_size": 20,
            }},
        ],
        "page_size": {"width": 11906, "height": 16838},
        "page_margin": {"top": 1440, ...},
    }

The Python spellings (``row_template``, ``groups``, ``vertical_merge``,
``multi_line``) are accepted as well.  Payloads of the wrong type raise
:class:`~oxmlmaker.errors.ModelError` here, at load time, never during
rendering.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from oxmlmaker.errors import ModelError
from oxmlmaker.model import (
    CellSpec,
    Column,
    ContentModel,
    EmptySection,
    PageMargin,
    PageSize,
    ParagraphSection,
    Section,
    Table,
    TableSection,
)

_SECTION_KEYS = ("paragraph", "table")
_MARGIN_FIELDS = ("top", "right", "bottom", "left", "header", "footer", "gutter")


def _require_mapping(value: Any, what: str) -> Mapping:
    if not isinstance(value, Mapping):
        raise ModelError(f"{what} must be a mapping", f"got {type(value).__name__}")
    return value


def _require_list(value: Any, what: str) -> list:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ModelError(f"{what} must be a list", f"got {type(value).__name__}")
    return list(value)


def _require_flag(data: Mapping, *keys: str) -> bool:
    value = _first_of(data, *keys)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ModelError(f"Cell flag {keys[0]} must be a boolean", repr(value))
    return value


def _first_of(data: Mapping, *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return default


class ModelLoader:
    """Convert nested mappings into an immutable content model."""

    # -- public API ---------------------------------------------------------

    def load(self, data: Mapping) -> ContentModel:
        """Return a :class:`ContentModel` for the parameter mapping *data*."""
        data = _require_mapping(data, "Document parameters")
        sections_raw = _require_list(data.get("sections"), "sections")

        return ContentModel(
            sections=[self._convert_section(s) for s in sections_raw],
            page_size=self._convert_page_size(data.get("page_size")),
            page_margin=self._convert_page_margin(data.get("page_margin")),
        )

    def loads(self, text: str) -> ContentModel:
        """Parse JSON *text* and load it."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ModelError("Invalid JSON content model", str(exc)) from exc
        return self.load(data)

    def load_file(self, path: str | Path, *, encoding: str = "utf-8") -> ContentModel:
        """Read a JSON content model from *path*."""
        return self.loads(Path(path).read_text(encoding=encoding))

    # -- sections -----------------------------------------------------------

    def _convert_section(self, section: Any) -> Section:
        section = _require_mapping(section, "Section")
        for key in _SECTION_KEYS:
            payload = section.get(key)
            if payload is not None:
                handler = getattr(self, f"_handle_{key}")
                return handler(payload)
        return EmptySection()

    def _handle_paragraph(self, payload: Any) -> ParagraphSection:
        payload = _require_mapping(payload, "Paragraph data")
        return ParagraphSection(text=payload.get("text"))

    def _handle_table(self, payload: Any) -> TableSection:
        return TableSection(table=self.convert_table(payload))

    # -- tables -------------------------------------------------------------

    def convert_table(self, payload: Any) -> Table:
        payload = _require_mapping(payload, "Table data")

        columns = [
            self._convert_column(c) for c in _require_list(payload.get("columns"), "Table columns")
        ]

        cells_raw = _first_of(payload, "row_template")
        if cells_raw is None:
            rows = _require_list(payload.get("rows"), "Table rows")
            # Only the first row definition is used as the template.
            cells_raw = _require_mapping(rows[0], "Row").get("cells") if rows else None
        row_template = [self._convert_cell(c) for c in _require_list(cells_raw, "Row cells")]

        groups_raw = _first_of(payload, "groups", "data", default={})
        if isinstance(groups_raw, (list, tuple)):
            groups = {0: list(groups_raw)}
        else:
            groups = {
                key: _require_list(records, f"Records of group {key!r}")
                for key, records in _require_mapping(groups_raw, "Table data groups").items()
            }

        return Table(
            columns=columns,
            row_template=row_template,
            groups=groups,
            font_size=payload.get("font_size"),
        )

    def _convert_column(self, column: Any) -> Column:
        if isinstance(column, Column):
            return column
        column = _require_mapping(column, "Column")
        return Column(name=column.get("name", ""), width=column.get("width"))

    def _convert_cell(self, cell: Any) -> CellSpec:
        if isinstance(cell, CellSpec):
            return cell
        cell = _require_mapping(cell, "Cell")
        selector = _first_of(cell, "field_selector", "value", "field")
        if selector is None:
            raise ModelError("Cell must name the field it renders", repr(dict(cell)))
        return CellSpec(
            field_selector=selector,
            width=cell.get("width"),
            vertical_merge=_require_flag(cell, "vertical_merge", "v_merge"),
            multi_line=_require_flag(cell, "multi_line", "new_line"),
        )

    # -- geometry -----------------------------------------------------------

    def _convert_page_size(self, value: Any) -> Optional[PageSize]:
        if value is None:
            return None
        if isinstance(value, PageSize):
            return value
        value = _require_mapping(value, "page_size")
        return PageSize(width=value.get("width"), height=value.get("height"))

    def _convert_page_margin(self, value: Any) -> Optional[PageMargin]:
        if value is None:
            return None
        if isinstance(value, PageMargin):
            return value
        value = _require_mapping(value, "page_margin")
        return PageMargin(**{name: value.get(name) for name in _MARGIN_FIELDS})
