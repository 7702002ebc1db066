"""Configuration resolution for indexgen (CLI options merged with package.json)."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

import yaml

from .filesystem import FileSystem
from .logging import get_logger
from .models import IndexGenError

logger = get_logger("config")

MANIFEST_NAME = "package.json"
DEFAULT_EXTENSION = "js"
DEFAULT_TEST_FILE = r"\.(m?js|es\d?)$"
TEMPLATES_DIR = Path(__file__).with_name("templates")

_DEFAULT_TEMPLATES = {
    "js": "node.j2",
    "mjs": "es6.j2",
}

_YAML_SUFFIXES = {".yml", ".yaml"}


class ManifestError(IndexGenError):
    """Raised when the manifest file cannot be read or parsed."""


@dataclass(frozen=True)
class IndexConfig:
    """Settings for one index build, resolved once per run."""

    indir: Path
    extension: str = DEFAULT_EXTENSION
    tpl: Optional[Path] = None
    name: str = ""
    description: str = ""
    header: str = ""
    footer: str = ""
    test_file: str = DEFAULT_TEST_FILE
    package: Optional[Path] = None
    save: bool = False

    @property
    def output_file(self) -> Path:
        return self.indir / f"index.{self.extension}"


def default_template(extension: str) -> Path | None:
    """Return the bundled template for ``extension``, if there is one."""
    name = _DEFAULT_TEMPLATES.get(extension)
    return TEMPLATES_DIR / name if name else None


def resolve_config(options: Mapping[str, Any], fs: FileSystem) -> IndexConfig:
    """Build the run configuration from parsed CLI options and the manifest.

    Manifest keys overwrite the matching CLI values unconditionally.
    """
    values = _coerce_values(
        {key: value for key, value in options.items() if value is not None},
        source="command line",
    )
    if "indir" not in values:
        raise IndexGenError("An input directory is required")

    package = values.get("package")
    if package is None:
        package = find_manifest(values["indir"], fs)
        if package is not None:
            values["package"] = package

    if package is not None:
        manifest_values = load_manifest(package, fs)
        logger.debug("Merging %d keys from %s", len(manifest_values), package)
        values.update(manifest_values)

    if values.get("tpl") is None:
        extension = values.get("extension", DEFAULT_EXTENSION)
        template = default_template(extension)
        if template is None:
            logger.debug("No bundled template for extension '%s'", extension)
        else:
            values["tpl"] = template

    return IndexConfig(**values)


def find_manifest(indir: Path, fs: FileSystem) -> Path | None:
    """Return the nearest package.json above ``indir``, ignoring the filesystem root."""
    found = fs.find_up(indir, MANIFEST_NAME)
    if found is None or found.parent == Path(found.anchor):
        return None
    logger.debug("Found manifest %s", found)
    return found


def load_manifest(path: Path, fs: FileSystem) -> Dict[str, Any]:
    """Return the configuration values carried by the manifest at ``path``."""
    try:
        text = fs.read(path)
    except OSError as exc:
        raise ManifestError(f"Unable to read manifest {path}: {exc}") from exc

    data = _parse_manifest(path, text)
    if not isinstance(data, dict):
        raise ManifestError(f"{path} must contain a mapping at the root")

    selected = {key: data[key] for key in _MANIFEST_KEYS if key in data}
    renamed = {_MANIFEST_KEYS[key]: value for key, value in selected.items()}
    values = _coerce_values(renamed, source=str(path))
    if "test_file" in values:
        try:
            re.compile(values["test_file"])
        except re.error as exc:
            raise ManifestError(f"{path}: invalid testFile pattern {values['test_file']!r}: {exc}") from exc
    return values


def _parse_manifest(path: Path, text: str) -> Any:
    if Path(path).suffix.lower() in _YAML_SUFFIXES:
        try:
            return yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ManifestError(f"Failed to parse {path}: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Failed to parse {path}: {exc}") from exc


def _coerce_values(raw: Mapping[str, Any], *, source: str) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for key, value in raw.items():
        coerce = _COERCERS.get(key)
        if coerce is None:
            continue
        coerced = coerce(value)
        if coerced is None:
            logger.debug("Ignoring %s value %r from %s", key, value, source)
            continue
        values[key] = coerced
    return values


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_path(value: Any) -> Optional[Path]:
    if isinstance(value, Path):
        return value
    text = _as_str(value)
    return Path(text) if text else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


# Manifest keys use the original camelCase spelling.
_MANIFEST_KEYS = {
    "description": "description",
    "extension": "extension",
    "footer": "footer",
    "header": "header",
    "indir": "indir",
    "name": "name",
    "package": "package",
    "save": "save",
    "testFile": "test_file",
    "tpl": "tpl",
}

_COERCERS: Dict[str, Callable[[Any], Any]] = {
    "indir": _as_path,
    "extension": _as_str,
    "tpl": _as_path,
    "name": _as_str,
    "description": _as_str,
    "header": _as_str,
    "footer": _as_str,
    "test_file": _as_str,
    "package": _as_path,
    "save": _as_bool,
}
