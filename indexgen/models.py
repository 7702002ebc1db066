"""Core data models shared across indexgen components."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List


class IndexGenError(RuntimeError):
    """Base error for failures while building an index."""


@dataclass(frozen=True)
class ResolvedName:
    """Logical location and export name derived for one module file."""

    dotted_path: str
    identifier: str
    is_class: bool


@dataclass
class ImportEntry:
    """A module imported by the generated index."""

    name: str
    file: str
    spaces: str = ""


@dataclass
class IndexResult:
    """Outcome of a single index build."""

    outfile: Path
    content: str
    classes: Dict[str, Any] = field(default_factory=dict)
    imports: List[ImportEntry] = field(default_factory=list)
    written: bool = False
