"""Nested mapping and import list assembly for the generated index."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from .logging import get_logger
from .models import ImportEntry, ResolvedName

logger = get_logger("assembler")


def set_path(mapping: Dict[str, Any], dotted_path: str, value: str) -> None:
    """Store ``value`` under ``dotted_path``, creating intermediate levels on demand."""
    *parents, leaf = dotted_path.split(".")
    node = mapping
    for key in parents:
        child = node.get(key)
        if not isinstance(child, dict):
            if child is not None:
                logger.warning("Replacing %s with a nested level for %s", child, dotted_path)
            child = {}
            node[key] = child
        node = child
    if isinstance(node.get(leaf), dict):
        logger.warning("Replacing nested level %s with %s", dotted_path, value)
    node[leaf] = value


def format_mapping(mapping: Dict[str, Any]) -> str:
    """Render ``mapping`` as an indented object literal with unquoted keys."""
    text = json.dumps(mapping, indent=4, ensure_ascii=False)
    return text.replace('"', "").replace(":", " :") + ";"


class MappingAssembler:
    """Collects resolved modules into the nested mapping and the import list."""

    def __init__(self) -> None:
        self.classes: Dict[str, Any] = {}
        self.imports: List[ImportEntry] = []
        self._sources: Dict[str, str] = {}

    def add(self, resolved: ResolvedName, relative_file: str) -> ImportEntry:
        previous = self._sources.get(resolved.dotted_path)
        if previous is not None:
            # Both files stay imported; the mapping keeps the later one.
            logger.warning(
                "%s and %s both resolve to %s; keeping %s",
                previous,
                relative_file,
                resolved.dotted_path,
                relative_file,
            )
        self._sources[resolved.dotted_path] = relative_file

        set_path(self.classes, resolved.dotted_path, resolved.identifier)
        entry = ImportEntry(name=resolved.identifier, file=relative_file)
        self.imports.append(entry)
        return entry

    def finalize(self) -> List[ImportEntry]:
        """Pad every import name to the width of the longest one."""
        if not self.imports:
            return self.imports
        width = max(len(entry.name) for entry in self.imports)
        for entry in self.imports:
            entry.spaces = " " * (width - len(entry.name))
        return self.imports

    def format(self) -> str:
        return format_mapping(self.classes)


__all__ = ["MappingAssembler", "format_mapping", "set_path"]
