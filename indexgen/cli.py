"""CLI entrypoint for the indexgen command."""

from __future__ import annotations

import argparse
import sys
from typing import Any, Dict

from .builder import IndexBuilder
from .config import IndexGenError, resolve_config
from .filesystem import LocalFileSystem
from .logging import configure_logging, get_logger

logger = get_logger("cli")

_CONFIG_OPTIONS = (
    "description",
    "extension",
    "footer",
    "header",
    "indir",
    "name",
    "package",
    "save",
    "tpl",
)


def _build_parser() -> argparse.ArgumentParser:
    # -h is taken by --header, so help is only reachable as --help.
    parser = argparse.ArgumentParser(
        prog="indexgen",
        description="Generate the index file of a package built from ECMAScript or CommonJS modules.",
        add_help=False,
    )
    parser.add_argument(
        "--help",
        action="help",
        default=argparse.SUPPRESS,
        help="Show this help message and exit.",
    )
    parser.add_argument("-d", "--description", help="Description placed in the generated file.")
    parser.add_argument("-e", "--extension", help="Extension of the generated file (js or mjs select a bundled template).")
    parser.add_argument("-f", "--footer", help="Text placed at the end of the document.")
    parser.add_argument("-h", "--header", help="Text placed at the start of the document.")
    parser.add_argument("-i", "--indir", help="Directory holding the source code (required).")
    parser.add_argument("-n", "--name", help="Module name, used as the identifier prefix.")
    parser.add_argument("-p", "--package", help="Path to the package.json file to merge.")
    parser.add_argument(
        "-s",
        "--save",
        action="store_true",
        help="Write the file instead of printing it to the console.",
    )
    parser.add_argument("-t", "--tpl", help="Path of the template used to render the file.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    return parser


def _config_options(args: argparse.Namespace) -> Dict[str, Any]:
    return {name: getattr(args, name) for name in _CONFIG_OPTIONS}


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for indexgen."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.indir:
        parser.print_help()
        parser.exit(0)

    configure_logging(verbose=bool(args.verbose), stream=sys.stderr)
    logger.debug("Applying command-line options")

    fs = LocalFileSystem()
    try:
        config = resolve_config(_config_options(args), fs)
        result = IndexBuilder(fs).build(config)
    except (IndexGenError, OSError) as exc:
        parser.exit(1, f"indexgen failed: {exc}\nRun with --verbose for more details.\n")

    if not result.written:
        outfile = str(result.outfile)
        # content already ends with a newline
        print(f"{outfile}\n{'-' * len(outfile)}\n{result.content}", end="")


if __name__ == "__main__":
    main(sys.argv[1:])
