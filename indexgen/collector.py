"""Collect the module files an index should cover."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List

from .config import DEFAULT_TEST_FILE, IndexGenError
from .filesystem import FileSystem
from .logging import get_logger

logger = get_logger("collector")


def _sort_key(path: Path) -> str:
    return str(path).lower()


class FileCollector:
    """Walks the input directory and keeps files matching the test pattern."""

    def __init__(self, fs: FileSystem, pattern: str = DEFAULT_TEST_FILE) -> None:
        self._fs = fs
        try:
            self._pattern = re.compile(pattern, re.IGNORECASE)
        except re.error as exc:
            raise IndexGenError(f"Invalid file test pattern {pattern!r}: {exc}") from exc

    def matches(self, path: Path) -> bool:
        return self._pattern.search(str(path)) is not None

    def collect(self, indir: Path) -> List[Path]:
        """Return matching files below ``indir`` sorted case-insensitively."""
        logger.info("Scanning directory: %s", indir)
        files = [path for path in self._fs.scandir(indir) if self.matches(path)]
        logger.info("Files found: %d", len(files))
        return sorted(files, key=_sort_key)


__all__ = ["FileCollector"]
