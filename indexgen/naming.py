"""Derive dotted paths and export identifiers from module file paths."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List

from .filesystem import FileSystem
from .models import ResolvedName

INDEX_STEM = "index"

# A line opening with ``class `` or a doc comment tag such as `` * @class Foo``.
CLASS_PATTERN = re.compile(r"(^|\*\s*@)class ", re.MULTILINE)

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_HUMP_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_SEPARATORS = re.compile(r"[\W_]+")


def capitalize(text: str) -> str:
    """Upper-case the first character of ``text``."""
    return text[:1].upper() + text[1:]


def split_words(text: str) -> List[str]:
    """Break camelCase humps and separator runs into lower-case words.

    ``fooBar``, ``foo-bar`` and ``foo_bar`` all yield ``["foo", "bar"]``;
    acronyms stay together, so ``HTTPServer`` yields ``["http", "server"]``.
    """
    spaced = _ACRONYM_BOUNDARY.sub(r"\1-\2", text)
    spaced = _HUMP_BOUNDARY.sub(r"\1-\2", spaced)
    return [word for word in _SEPARATORS.split(spaced.lower()) if word]


def camelize(text: str, capitalize_first: bool = True) -> str:
    """Convert ``text`` to camelCase, or PascalCase when ``capitalize_first``."""
    words = split_words(text)
    if not words:
        return ""
    head, *tail = words
    if capitalize_first:
        head = capitalize(head)
    return head + "".join(capitalize(word) for word in tail)


def declares_class(text: str) -> bool:
    return CLASS_PATTERN.search(text) is not None


def is_index_file(path: Path) -> bool:
    """Return True for a previously generated index, whatever its extension."""
    return path.stem.lower() == INDEX_STEM


def resolve_name(
    path: Path, indir: Path, module_prefix: str, fs: FileSystem
) -> ResolvedName | None:
    """Return the dotted path and identifier for ``path``, or None to skip it.

    Directory segments become lower camelCase keys. The file segment is
    upper-cased only when the file declares a class. The identifier joins
    ``module_prefix`` with every segment capitalized.
    """
    if is_index_file(path):
        return None

    is_class = declares_class(fs.read(path))
    parts = Path(path).relative_to(indir).parts
    segments = [camelize(part, capitalize_first=False) for part in parts[:-1]]
    segments.append(camelize(Path(path).stem, capitalize_first=is_class))

    dotted_path = ".".join(segments)
    identifier = module_prefix + "".join(capitalize(segment) for segment in segments)
    return ResolvedName(dotted_path=dotted_path, identifier=identifier, is_class=is_class)


__all__ = [
    "CLASS_PATTERN",
    "camelize",
    "capitalize",
    "declares_class",
    "is_index_file",
    "resolve_name",
    "split_words",
]
