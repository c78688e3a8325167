"""Shared fixtures: in-memory filesystem, recording reporter, sample specs.

The pipeline only sees the FileSystem and Reporter protocols, so these
doubles let tests run generation without touching disk or the terminal.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Filesystem double
# ---------------------------------------------------------------------------

class InMemoryFileSystem:
    """FileSystem keeping files in a dict.

    Paths listed in ``read_only`` (or beneath them) reject writes with
    PermissionError.
    """

    def __init__(self, files: dict[str | Path, str] | None = None) -> None:
        self.files: dict[Path, str] = {Path(p): text for p, text in (files or {}).items()}
        self.dirs: set[Path] = set()
        self.read_only: set[Path] = set()

    def _is_dir(self, path: Path) -> bool:
        return path in self.dirs or any(path in f.parents for f in self.files)

    def walk(self, root: Path) -> Iterator[Path]:
        root = Path(root)
        if not self._is_dir(root):
            raise FileNotFoundError(f"No such directory: {root}")
        for path in sorted(self.files, key=lambda p: p.parts):
            if root in path.parents:
                yield path

    def read_text(self, path: Path) -> str:
        try:
            return self.files[Path(path)]
        except KeyError:
            raise FileNotFoundError(f"No such file: {path}") from None

    def _check_writable(self, path: Path) -> None:
        if path in self.read_only or any(p in self.read_only for p in path.parents):
            raise PermissionError(f"Permission denied: {path}")

    def write_text(self, path: Path, content: str) -> None:
        self._check_writable(Path(path))
        self.files[Path(path)] = content

    def mkdir(self, directory: Path) -> None:
        self._check_writable(Path(directory))
        self.dirs.add(Path(directory))


# ---------------------------------------------------------------------------
# Reporter double
# ---------------------------------------------------------------------------

class RecordingReporter:
    """Reporter that stores (level, message) pairs."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def at(self, level: str) -> list[str]:
        return [message for lvl, message in self.messages if lvl == level]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def petstore_yaml() -> str:
    return (FIXTURES / "petstore.yaml").read_text(encoding="utf-8")


@pytest.fixture
def memory_fs(petstore_yaml) -> InMemoryFileSystem:
    """A tree with two valid documents and one that is not YAML at all."""
    return InMemoryFileSystem({
        "/specs/petstore.yaml": petstore_yaml,
        "/specs/nested/users-api.yml": (FIXTURES / "users-api.yml").read_text(encoding="utf-8"),
        "/specs/nested/broken.yaml": "paths: [unclosed\n",
        "/specs/README.md": "# not a spec\n",
    })


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def fs_factory():
    """The InMemoryFileSystem class, for tests that build their own tree."""
    return InMemoryFileSystem
