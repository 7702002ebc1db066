from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.memory_fs import MemoryFileSystem
from tests._fixtures.package_builder import PackageBuilder

CLASS_MODULE = """
/**
 * Application user.
 *
 * @class User
 */
class User {}

module.exports = User;
"""

PLAIN_MODULE = """
function slugify(text) {
    return text.toLowerCase();
}

module.exports = { slugify };
"""


@pytest.fixture
def package_builder(tmp_path: Path) -> PackageBuilder:
    """Provide a package builder rooted at the pytest tmp_path."""
    return PackageBuilder(tmp_path)


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    """In-memory package with one class module and one plain module."""
    return MemoryFileSystem(
        {
            "/work/pkg/src/models/user.js": CLASS_MODULE,
            "/work/pkg/src/utils/helpers.js": PLAIN_MODULE,
        }
    )


@pytest.fixture(autouse=True)
def _reset_indexgen_logger() -> Iterator[None]:
    """Undo configure_logging() so caplog keeps seeing indexgen records."""
    yield
    logger = logging.getLogger("indexgen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
