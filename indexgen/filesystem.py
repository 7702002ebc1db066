"""Filesystem access used by the index pipeline."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from .models import IndexGenError


class FileSystem(ABC):
    """Contract for the disk operations the pipeline performs."""

    @abstractmethod
    def read(self, path: Path) -> str:
        """Return the text stored at ``path``."""

    @abstractmethod
    def write(self, path: Path, text: str) -> None:
        """Replace the contents of ``path`` with ``text``."""

    @abstractmethod
    def scandir(self, path: Path) -> List[Path]:
        """Return every file below ``path``, descending into subdirectories."""

    @abstractmethod
    def is_file(self, path: Path) -> bool:
        """Return True when ``path`` names an existing regular file."""

    @abstractmethod
    def find_up(self, start: Path, name: str) -> Path | None:
        """Return the nearest file called ``name`` in ``start`` or its ancestors."""


class LocalFileSystem(FileSystem):
    """FileSystem backed by the real disk."""

    def read(self, path: Path) -> str:
        try:
            return Path(path).read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise IndexGenError(f"{path} is not valid UTF-8 text: {exc}") from exc

    def write(self, path: Path, text: str) -> None:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")

    def scandir(self, path: Path) -> List[Path]:
        root = Path(path)
        if not root.exists():
            raise FileNotFoundError(f"Input directory not found: {path}")
        if not root.is_dir():
            raise NotADirectoryError(f"Input path is not a directory: {path}")

        files: List[Path] = []
        for dirpath, _dirnames, filenames in os.walk(root):
            current_dir = Path(dirpath)
            files.extend(current_dir / filename for filename in filenames)
        return files

    def is_file(self, path: Path) -> bool:
        return Path(path).is_file()

    def find_up(self, start: Path, name: str) -> Path | None:
        current = Path(start).expanduser().resolve()
        for directory in (current, *current.parents):
            candidate = directory / name
            if self.is_file(candidate):
                return candidate
        return None


__all__ = ["FileSystem", "LocalFileSystem"]
