"""File access used by discovery and merging.

Discovery and merging only touch the disk through a ``FileSystem`` so they
can be exercised against an in-memory tree.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    """Minimal read-only filesystem interface."""

    def is_file(self, path: Path) -> bool:
        """Return whether ``path`` exists and is a regular file."""
        ...

    def is_dir(self, path: Path) -> bool:
        """Return whether ``path`` exists and is a directory."""
        ...

    def list_dir(self, path: Path) -> list[str]:
        """Return sorted entry names of ``path``.

        Raises:
            OSError: If the directory is missing or cannot be listed.
        """
        ...

    def read_text(self, path: Path) -> str:
        """Return the UTF-8 content of ``path``.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the content is not valid UTF-8.
        """
        ...


class LocalFileSystem:
    """``FileSystem`` backed by ``pathlib``. Follows symlinks."""

    def is_file(self, path: Path) -> bool:
        try:
            return path.is_file()
        except OSError:
            return False

    def is_dir(self, path: Path) -> bool:
        try:
            return path.is_dir()
        except OSError:
            return False

    def list_dir(self, path: Path) -> list[str]:
        return sorted(entry.name for entry in path.iterdir())

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")
