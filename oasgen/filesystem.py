"""Filesystem capability used by the pipeline.

The pipeline only talks to the ``FileSystem`` protocol, so tests can swap
in an in-memory implementation.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    def walk(self, root: Path) -> Iterator[Path]:
        """Yield every file below ``root``, recursively, in a stable order."""
        ...

    def read_text(self, path: Path) -> str: ...

    def write_text(self, path: Path, content: str) -> None: ...

    def mkdir(self, directory: Path) -> None: ...


class LocalFileSystem:
    """``FileSystem`` backed by pathlib. Text is always UTF-8."""

    def walk(self, root: Path) -> Iterator[Path]:
        # iterdir raises OSError on an unreadable root; let it propagate
        for entry in sorted(Path(root).iterdir(), key=lambda p: p.name):
            if entry.is_dir():
                yield from self.walk(entry)
            elif entry.is_file():
                yield entry

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def write_text(self, path: Path, content: str) -> None:
        path.write_text(content, encoding="utf-8")

    def mkdir(self, directory: Path) -> None:
        directory.mkdir(parents=True, exist_ok=True)


def write_files(fs: FileSystem, files: dict[Path, str]) -> None:
    """Write generated files, creating parent directories as needed.

    Args:
        fs: Target filesystem.
        files: Mapping of file paths to their content.
    """
    for path, content in files.items():
        fs.mkdir(path.parent)
        fs.write_text(path, content)
