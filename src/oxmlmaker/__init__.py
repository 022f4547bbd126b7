"""oxmlmaker - render paragraphs and data tables into DOCX packages."""

__version__ = "0.1.0"

from oxmlmaker.converter import Converter
from oxmlmaker.errors import (
    ConfigurationError,
    ModelError,
    OxmlMakerError,
    PackageWriteError,
)
from oxmlmaker.model import (
    CellSpec,
    Column,
    ContentModel,
    EmptySection,
    PageMargin,
    PageSize,
    ParagraphSection,
    Table,
    TableSection,
    select_field,
)
from oxmlmaker.renderer import DocxRenderer


__all__ = [
    "CellSpec",
    "Column",
    "ConfigurationError",
    "ContentModel",
    "Converter",
    "DocxRenderer",
    "EmptySection",
    "ModelError",
    "OxmlMakerError",
    "PackageWriteError",
    "PageMargin",
    "PageSize",
    "ParagraphSection",
    "Table",
    "TableSection",
    "__version__",
    "select_field",
]
