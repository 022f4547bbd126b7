"""OOXML package assembly.

A ``.docx`` file is a ZIP archive.  The generated ``word/document.xml`` is
combined with a fixed set of auxiliary parts (at minimum
``[Content_Types].xml`` and ``_rels/.rels``) supplied as a *part set*: a
mapping of archive path to content.
"""

from __future__ import annotations

import io
import logging
import os
import tempfile
import zipfile
from collections.abc import Mapping
from pathlib import Path
from typing import Optional, Union

from oxmlmaker.errors import PackageWriteError

logger = logging.getLogger(__name__)

PartSet = Mapping[str, Union[bytes, str]]

DOCUMENT_PART = "word/document.xml"
CONTENT_TYPES_PART = "[Content_Types].xml"
RELS_PART = "_rels/.rels"

DOCX_MEDIA_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)


def _part_name(path: str) -> str:
    """Normalise an archive path to forward slashes, no leading slash."""
    return path.replace("\\", "/").lstrip("/")


def _as_bytes(content: Union[bytes, str]) -> bytes:
    if isinstance(content, str):
        return content.encode("utf-8")
    return bytes(content)


# ---------------------------------------------------------------------------
# Fixed parts
# ---------------------------------------------------------------------------

def _build_content_types_xml() -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
        '<Default Extension="rels"'
        ' ContentType="application/vnd.openxmlformats-package.relationships+xml"/>'
        '<Default Extension="xml" ContentType="application/xml"/>'
        '<Override PartName="/word/document.xml"'
        ' ContentType="application/vnd.openxmlformats-officedocument'
        '.wordprocessingml.document.main+xml"/>'
        '</Types>'
    )


def _build_rels_xml() -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        '<Relationships'
        ' xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
        '<Relationship Id="rId1"'
        ' Type="http://schemas.openxmlformats.org/officeDocument/2006/'
        'relationships/officeDocument"'
        ' Target="word/document.xml"/>'
        '</Relationships>'
    )


def default_parts() -> dict[str, bytes]:
    """Return the minimal part set for a single-part word document."""
    return {
        CONTENT_TYPES_PART: _build_content_types_xml().encode("utf-8"),
        RELS_PART: _build_rels_xml().encode("utf-8"),
    }


def load_parts(directory: str | Path) -> dict[str, bytes]:
    """Read every file under *directory* into a part set.

    Hidden files (``_rels/.rels``) are included.  A missing directory gives
    an empty part set.
    """
    root = Path(directory)
    if not root.is_dir():
        logger.warning("Template directory not found: %s", root)
        return {}

    parts: dict[str, bytes] = {}
    for path in sorted(root.rglob("*")):
        if path.is_file():
            parts[path.relative_to(root).as_posix()] = path.read_bytes()
    logger.debug("Loaded %d template parts from %s", len(parts), root)
    return parts


# ---------------------------------------------------------------------------
# Archive
# ---------------------------------------------------------------------------

def build_package(document_xml: str, parts: Optional[PartSet] = None) -> bytes:
    """Zip *parts* and *document_xml* into ``.docx`` bytes.

    A ``word/document.xml`` entry in *parts* is replaced by *document_xml*.
    """
    entries: dict[str, bytes] = {}
    for path, content in (parts or {}).items():
        name = _part_name(path)
        if not name or name == DOCUMENT_PART:
            continue
        # Later spellings of the same part name win.
        entries[name] = _as_bytes(content)

    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, content in entries.items():
            zf.writestr(name, content)
        zf.writestr(DOCUMENT_PART, document_xml.encode("utf-8"))

    return buf.getvalue()


def write_package(data: bytes, path: str | Path) -> Path:
    """Write *data* to *path* atomically.

    The bytes go to a temporary file next to *path* which replaces the
    destination only after a complete write.  The temporary file is removed
    on any failure.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
    except OSError as exc:
        raise PackageWriteError(f"Cannot write package to {path}", str(exc)) from exc

    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, path)
    except OSError as exc:
        Path(tmp_name).unlink(missing_ok=True)
        raise PackageWriteError(f"Cannot write package to {path}", str(exc)) from exc
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info("Wrote %d bytes to %s", len(data), path)
    return path
