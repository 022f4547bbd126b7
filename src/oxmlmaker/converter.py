"""High-level content-model-to-DOCX orchestrator.

Ties together the loader, the template parts, the renderer and the
publisher into a single public API.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Optional, Union

from oxmlmaker.loader import ModelLoader
from oxmlmaker.model import ContentModel
from oxmlmaker.package import default_parts, load_parts, write_package
from oxmlmaker.publisher import Publisher
from oxmlmaker.renderer import DocxRenderer

logger = logging.getLogger(__name__)


class Converter:
    """Convert content models to DOCX format.

    Usage::

        converter = Converter(public_dir="public")
        converter.create("report.docx", {"sections": [...], ...})

        # or just the bytes
        docx_bytes = converter.convert_data(params)
    """

    def __init__(
        self,
        template_dir: Optional[Union[str, Path]] = None,
        public_dir: Optional[Union[str, Path]] = None,
        app_root: Optional[Union[str, Path]] = None,
    ) -> None:
        self.template_dir = Path(template_dir) if template_dir else None
        self.loader = ModelLoader()
        self.renderer = DocxRenderer()
        self.publisher = Publisher(public_dir=public_dir, app_root=app_root)

    def parts(self) -> dict[str, bytes]:
        """Fixed package parts: the template directory if set, else the defaults."""
        if self.template_dir is None:
            return default_parts()
        return load_parts(self.template_dir)

    def convert_model(self, model: ContentModel) -> bytes:
        """Render *model* to DOCX bytes."""
        return self.renderer.render(model, self.parts())

    def convert_data(self, params: Union[Mapping, ContentModel]) -> bytes:
        """Load plain parameters (or a ready model) and render them.

        Args:
            params: Parameter mapping with ``sections``, ``page_size`` and
                ``page_margin``.

        Returns:
            DOCX file content as bytes.
        """
        return self.convert_model(self._as_model(params))

    def convert_text(self, json_text: str) -> bytes:
        """Render a JSON content model given as text."""
        return self.convert_model(self.loader.loads(json_text))

    def convert_file(
        self,
        input_path: str | Path,
        output_path: str | Path,
        *,
        encoding: str = "utf-8",
    ) -> Path:
        """Read a JSON content model file and write the DOCX output.

        Args:
            input_path: Path to the input ``.json`` file.
            output_path: Path for the output ``.docx`` file.
            encoding: Text encoding of the source file.
        """
        model = self.loader.load_file(input_path, encoding=encoding)
        return write_package(self.convert_model(model), output_path)

    def create(self, filename: str, params: Union[Mapping, ContentModel]) -> Path:
        """Render *params* and publish it as *filename* in the public directory."""
        data = self.convert_data(params)
        target = self.publisher.publish(data, filename)
        logger.info("Created %s (%d bytes)", target, len(data))
        return target

    def _as_model(self, params: Union[Mapping, ContentModel]) -> ContentModel:
        if isinstance(params, ContentModel):
            return params
        return self.loader.load(params)
