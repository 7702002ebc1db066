"""Registers an ``index`` script in the host project's package.json."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import MANIFEST_NAME, IndexGenError, ManifestError
from .filesystem import FileSystem, LocalFileSystem
from .logging import configure_logging, get_logger

logger = get_logger("postinstall")

DEFAULT_INDEX_SCRIPT = "indexgen -i src/ -s"


def register_index_script(
    package_file: Path, fs: FileSystem, command: str = DEFAULT_INDEX_SCRIPT
) -> bool:
    """Add ``scripts.index`` to ``package_file`` unless one is already set.

    Returns True when the file was rewritten.
    """
    try:
        data = json.loads(fs.read(package_file))
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Failed to parse {package_file}: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError(f"{package_file} must contain a mapping at the root")

    scripts = data.get("scripts")
    if scripts is None:
        scripts = {}
    elif not isinstance(scripts, dict):
        raise ManifestError(f"{package_file}: 'scripts' must be a mapping")
    if scripts.get("index"):
        logger.debug("%s already defines an index script", package_file)
        return False

    scripts["index"] = command
    data["scripts"] = scripts
    fs.write(package_file, json.dumps(data, indent=4, ensure_ascii=False))
    logger.info("Added index script to %s", package_file)
    return True


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="indexgen-postinstall",
        description="Add an `index` script running indexgen to the project's package.json.",
    )
    parser.add_argument(
        "package",
        nargs="?",
        help="Path to package.json (defaults to the nearest one above the working directory).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Increase log verbosity for troubleshooting.",
    )
    return parser


def main(argv: list[str] | None = None, *, fs: FileSystem | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=bool(args.verbose), stream=sys.stderr)

    fs = fs if fs is not None else LocalFileSystem()
    if args.package:
        package_file: Path | None = Path(args.package)
    else:
        package_file = fs.find_up(Path.cwd(), MANIFEST_NAME)
    if package_file is None or not fs.is_file(package_file):
        logger.info("No %s found; nothing to register", MANIFEST_NAME)
        return

    try:
        changed = register_index_script(package_file, fs)
    except (IndexGenError, OSError) as exc:
        parser.exit(1, f"indexgen-postinstall failed: {exc}\n")

    if changed:
        print(f"{package_file}\nscripts\n    index\n        {DEFAULT_INDEX_SCRIPT}\n")


if __name__ == "__main__":
    main(sys.argv[1:])
