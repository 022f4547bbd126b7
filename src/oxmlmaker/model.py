"""Content model consumed by the renderers.

A :class:`ContentModel` is an ordered list of sections plus page geometry.
Sections form a closed union (:class:`ParagraphSection`,
:class:`TableSection`, :class:`EmptySection`) tagged with a
:class:`SectionKind`, so the composer dispatches on the tag instead of
inspecting payload types.

All geometry values are twentieths of a point (dxa) and are passed through
to the markup verbatim.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, ClassVar, Optional, Union

from oxmlmaker.errors import ModelError

FieldSelector = Callable[[Any], Any]


# ---------------------------------------------------------------------------
# Field selectors
# ---------------------------------------------------------------------------

def select_field(name: str) -> FieldSelector:
    """Return a selector reading *name* from a record.

    Mappings are read by key, any other object by attribute.  An absent
    field yields ``None``.
    """

    def _select(record: Any) -> Any:
        if isinstance(record, Mapping):
            return record.get(name)
        return getattr(record, name, None)

    _select.field_name = name  # type: ignore[attr-defined]
    _select.__name__ = f"select_{name}"
    return _select


# ---------------------------------------------------------------------------
# Page geometry
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PageSize:
    width: Optional[int] = None
    height: Optional[int] = None


@dataclass(frozen=True)
class PageMargin:
    top: Optional[int] = None
    right: Optional[int] = None
    bottom: Optional[int] = None
    left: Optional[int] = None
    header: Optional[int] = None
    footer: Optional[int] = None
    gutter: Optional[int] = None


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Column:
    """Header/grid column; ``width`` falls back to the renderer default."""

    name: str = ""
    width: Optional[int] = None


@dataclass(frozen=True)
class CellSpec:
    """How one column of every data record is projected into a cell."""

    field_selector: FieldSelector
    width: Optional[int] = None
    vertical_merge: bool = False
    multi_line: bool = False

    def __post_init__(self) -> None:
        selector = self.field_selector
        if isinstance(selector, str):
            object.__setattr__(self, "field_selector", select_field(selector))
        elif not callable(selector):
            raise ModelError(
                "Cell field selector must be a field name or a callable",
                repr(selector),
            )


@dataclass(frozen=True)
class Table:
    columns: list[Column] = field(default_factory=list)
    row_template: list[CellSpec] = field(default_factory=list)
    groups: dict[Any, list[Any]] = field(default_factory=dict)
    font_size: Optional[int] = None


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

class SectionKind(Enum):
    PARAGRAPH = "paragraph"
    TABLE = "table"
    EMPTY = "empty"


@dataclass(frozen=True)
class ParagraphSection:
    text: str = ""

    kind: ClassVar[SectionKind] = SectionKind.PARAGRAPH

    def __post_init__(self) -> None:
        if self.text is None:
            object.__setattr__(self, "text", "")
        elif not isinstance(self.text, str):
            raise ModelError(
                "Paragraph text must be a string",
                f"got {type(self.text).__name__}",
            )


@dataclass(frozen=True)
class TableSection:
    table: Table

    kind: ClassVar[SectionKind] = SectionKind.TABLE


@dataclass(frozen=True)
class EmptySection:
    """A section carrying neither a paragraph nor a table."""

    kind: ClassVar[SectionKind] = SectionKind.EMPTY


Section = Union[ParagraphSection, TableSection, EmptySection]


@dataclass(frozen=True)
class ContentModel:
    sections: list[Section] = field(default_factory=list)
    page_size: Optional[PageSize] = None
    page_margin: Optional[PageMargin] = None
