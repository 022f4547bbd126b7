"""Publishing finished documents to a public directory.

The destination defaults to ``./public``.  Applications serving the files
from their own root pass that root explicitly; nothing is auto-detected.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from oxmlmaker.package import write_package

logger = logging.getLogger(__name__)

PUBLIC_DIR_NAME = "public"


def resolve_public_dir(
    public_dir: Optional[str | Path] = None,
    app_root: Optional[str | Path] = None,
) -> Path:
    """Return the directory documents are published to.

    An explicit *public_dir* wins, then ``<app_root>/public``, then
    ``public`` relative to the working directory.
    """
    if public_dir is not None:
        return Path(public_dir)
    if app_root is not None:
        return Path(app_root) / PUBLIC_DIR_NAME
    return Path(PUBLIC_DIR_NAME)


class Publisher:
    """Atomically place document bytes into the public directory."""

    def __init__(
        self,
        public_dir: Optional[str | Path] = None,
        app_root: Optional[str | Path] = None,
    ) -> None:
        self.public_dir = resolve_public_dir(public_dir, app_root)

    def destination(self, filename: str) -> Path:
        name = Path(filename).name
        if not name:
            raise ValueError(f"Invalid document filename: {filename!r}")
        return self.public_dir / name

    def publish(self, data: bytes, filename: str) -> Path:
        """Write *data* as *filename* under the public directory.

        The directory is created when missing.
        """
        target = self.destination(filename)
        write_package(data, target)
        logger.info("Published %s", target)
        return target
