"""Pipeline orchestration for a single index build."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import Callable

from .assembler import MappingAssembler
from .collector import FileCollector
from .config import IndexConfig
from .filesystem import FileSystem, LocalFileSystem
from .logging import get_logger
from .models import IndexResult
from .naming import camelize, resolve_name
from .renderer import IndexRenderer

logger = get_logger("builder")


def _utc_now() -> datetime:
    return datetime.now(UTC)


def format_timestamp(moment: datetime) -> str:
    """Return ``moment`` as an ISO-8601 UTC string with millisecond precision."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class IndexBuilder:
    """Coordinates collection, naming, assembly and rendering of the index."""

    def __init__(
        self,
        fs: FileSystem | None = None,
        *,
        renderer: IndexRenderer | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.fs = fs or LocalFileSystem()
        self.renderer = renderer or IndexRenderer(self.fs)
        self._clock = clock or _utc_now

    def build(self, config: IndexConfig) -> IndexResult:
        """Render the index for ``config`` and write it when ``config.save`` is set."""
        assembler = self.assemble(config)
        content = self.renderer.render(
            config,
            content=assembler.format(),
            imports=assembler.imports,
            classes=assembler.classes,
            created=format_timestamp(self._clock()),
        )

        outfile = config.output_file
        if config.save:
            self.fs.write(outfile, content)
            logger.info("Index written to %s", outfile)

        return IndexResult(
            outfile=outfile,
            content=content,
            classes=assembler.classes,
            imports=assembler.imports,
            written=config.save,
        )

    def assemble(self, config: IndexConfig) -> MappingAssembler:
        indir = Path(config.indir)
        collector = FileCollector(self.fs, config.test_file)
        module_prefix = camelize(config.name)

        assembler = MappingAssembler()
        for path in collector.collect(indir):
            resolved = resolve_name(path, indir, module_prefix, self.fs)
            if resolved is None:
                logger.debug("Skipping %s", path)
                continue
            relative = path.relative_to(indir).as_posix()
            logger.debug("%s -> %s (%s)", relative, resolved.dotted_path, resolved.identifier)
            assembler.add(resolved, relative)
        assembler.finalize()

        if assembler.imports:
            logger.info("Files to import: %d", len(assembler.imports))
        else:
            logger.info("No files to import.")
        return assembler


__all__ = ["IndexBuilder", "format_timestamp"]
