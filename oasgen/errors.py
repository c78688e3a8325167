"""Failure taxonomy for a generation run.

ScanFailure is fatal for the whole run. ParseFailure and WriteFailure are
isolated to the document being processed. SchemaShapeFailure never escapes
the loader: the offending node degrades to ``any`` and the failure is kept
on ``Document.issues`` so it can be reported as a warning.
"""

from __future__ import annotations

from pathlib import Path


class GenerationError(Exception):
    """Base class for all generator failures."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.path}: {self.message}"


class ScanFailure(GenerationError):
    """The root directory could not be enumerated."""


class ParseFailure(GenerationError):
    """A document could not be turned into the Document model."""


class WriteFailure(GenerationError):
    """The filesystem rejected a write or mkdir."""


class SchemaShapeFailure(GenerationError):
    """A schema or property matched no known shape."""

    def __init__(self, message: str, location: str) -> None:
        super().__init__(message)
        self.location = location

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"
