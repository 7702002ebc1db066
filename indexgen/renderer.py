"""Renders the index file from Jinja templates."""

from __future__ import annotations

from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Sequence

from jinja2 import Environment, FileSystemLoader, TemplateError

from .config import TEMPLATES_DIR, IndexConfig, IndexGenError
from .filesystem import FileSystem
from .logging import get_logger
from .models import ImportEntry
from .naming import camelize

logger = get_logger("renderer")


class RenderError(IndexGenError):
    """Raised when the index template cannot be loaded or rendered."""


class IndexRenderer:
    """Feeds the assembled mapping and imports into the configured template.

    Templates are read through the injected filesystem; ``{% include %}``
    lookups resolve against ``templates_dir`` so custom templates can reuse
    the bundled ``partials/header.j2``.
    """

    def __init__(self, fs: FileSystem, templates_dir: Path | None = None) -> None:
        self._fs = fs
        self.templates_dir = templates_dir or TEMPLATES_DIR
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(
        self,
        config: IndexConfig,
        *,
        content: str,
        imports: Sequence[ImportEntry],
        classes: Dict[str, Any],
        created: str,
    ) -> str:
        if config.tpl is None:
            raise RenderError(
                f"No template available for extension '{config.extension}'; pass --tpl"
            )
        logger.debug("Rendering with template %s", config.tpl)
        try:
            source = self._fs.read(config.tpl)
        except OSError as exc:
            raise RenderError(f"Unable to read template {config.tpl}: {exc}") from exc

        context = self._build_context(config)
        context.update(
            content=content,
            imports=list(imports),
            classes=classes,
            created=created,
        )
        try:
            rendered = self._env.from_string(source).render(context)
        except TemplateError as exc:
            raise RenderError(f"Failed to render {config.tpl}: {exc}") from exc
        return rendered.strip() + "\n"

    @staticmethod
    def _build_context(config: IndexConfig) -> Dict[str, Any]:
        context: Dict[str, Any] = {field.name: getattr(config, field.name) for field in fields(config)}
        context["module"] = camelize(config.name)
        return context


__all__ = ["IndexRenderer", "RenderError"]
