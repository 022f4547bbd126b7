"""FastAPI web service for content-model to DOCX rendering.

Endpoints::

    GET  /health        Health check.
    POST /render        Send a JSON content model, receive .docx bytes.
    POST /render/file   Upload a .json content model, receive .docx back.

Run::

    uvicorn oxmlmaker.server:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote

from fastapi import Body, FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from oxmlmaker import __version__
from oxmlmaker.converter import Converter
from oxmlmaker.errors import ConfigurationError, ModelError
from oxmlmaker.package import DOCX_MEDIA_TYPE

app = FastAPI(
    title="oxmlmaker",
    description="Content model to DOCX rendering service",
    version=__version__,
)


def _content_disposition(filename: str) -> str:
    """Build Content-Disposition header, RFC 5987 for non-ASCII names."""
    try:
        filename.encode("ascii")
        return f'attachment; filename="{filename}"'
    except UnicodeEncodeError:
        encoded = quote(filename)
        return f"attachment; filename*=UTF-8''{encoded}"


def _render(params: Any, filename: str) -> Response:
    try:
        docx_bytes = Converter().convert_data(params)
    except (ModelError, ConfigurationError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return Response(
        content=docx_bytes,
        media_type=DOCX_MEDIA_TYPE,
        headers={"Content-Disposition": _content_disposition(filename)},
    )


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


@app.post("/render")
async def render(params: dict[str, Any] = Body(...)) -> Response:
    """Render a JSON content model (``sections``, ``page_size``, ``page_margin``)."""
    return _render(params, "document.docx")


@app.post("/render/file")
async def render_file(
    file: UploadFile = File(...),
    encoding: str = Form("utf-8"),
) -> Response:
    """Upload a JSON content model file and receive DOCX back.

    - **file**: content model (.json)
    - **encoding**: Source file encoding
    """
    raw = await file.read()
    try:
        params = json.loads(raw.decode(encoding))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise HTTPException(status_code=422, detail=f"Invalid content model: {exc}") from exc

    filename = (file.filename or "document.json").rsplit(".", 1)[0] + ".docx"
    return _render(params, filename)
