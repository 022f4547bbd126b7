"""Exceptions raised by oxmlmaker.

Rendering never raises for bad record data or unknown sections; those are
masked by the renderers.  The classes below cover the cases the caller has
to handle: bad input at construction time, missing page geometry, and
failures while writing the archive.
"""

from __future__ import annotations

from typing import Optional


class OxmlMakerError(Exception):
    """Base exception for oxmlmaker errors."""

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ModelError(OxmlMakerError, TypeError):
    """Content model input has the wrong shape or type."""


class ConfigurationError(OxmlMakerError):
    """A required page geometry field is missing."""


class PackageWriteError(OxmlMakerError, OSError):
    """The archive could not be written to its destination."""
