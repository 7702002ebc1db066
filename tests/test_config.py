"""Tests for indexgen.config."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from indexgen.config import (
    DEFAULT_TEST_FILE,
    TEMPLATES_DIR,
    IndexConfig,
    IndexGenError,
    ManifestError,
    default_template,
    find_manifest,
    load_manifest,
    resolve_config,
)
from tests._fixtures.memory_fs import MemoryFileSystem


def _options(**overrides: object) -> dict[str, object]:
    options: dict[str, object] = {
        "description": None,
        "extension": None,
        "footer": None,
        "header": None,
        "indir": "/work/pkg/src",
        "name": None,
        "package": None,
        "save": False,
        "tpl": None,
    }
    options.update(overrides)
    return options


def test_resolve_config_defaults_without_manifest() -> None:
    config = resolve_config(_options(), MemoryFileSystem())

    assert isinstance(config, IndexConfig)
    assert config.indir == Path("/work/pkg/src")
    assert config.extension == "js"
    assert config.tpl == TEMPLATES_DIR / "node.j2"
    assert config.name == ""
    assert config.description == ""
    assert config.header == ""
    assert config.footer == ""
    assert config.test_file == DEFAULT_TEST_FILE
    assert config.package is None
    assert config.save is False
    assert config.output_file == Path("/work/pkg/src/index.js")


def test_resolve_config_keeps_cli_values() -> None:
    config = resolve_config(
        _options(name="demo", description="Demo package", header="// head", footer="// foot", save=True),
        MemoryFileSystem(),
    )

    assert config.name == "demo"
    assert config.description == "Demo package"
    assert config.header == "// head"
    assert config.footer == "// foot"
    assert config.save is True


def test_resolve_config_requires_indir() -> None:
    with pytest.raises(IndexGenError, match="input directory"):
        resolve_config(_options(indir=None), MemoryFileSystem())


def test_resolve_config_selects_template_by_extension() -> None:
    fs = MemoryFileSystem()

    assert resolve_config(_options(extension="mjs"), fs).tpl == TEMPLATES_DIR / "es6.j2"
    assert resolve_config(_options(extension="ts"), fs).tpl is None
    assert resolve_config(_options(extension="ts", tpl="/tpl/ts.j2"), fs).tpl == Path("/tpl/ts.j2")


def test_default_template_known_extensions() -> None:
    assert default_template("js") == TEMPLATES_DIR / "node.j2"
    assert default_template("mjs") == TEMPLATES_DIR / "es6.j2"
    assert default_template("cjs") is None
    assert (TEMPLATES_DIR / "node.j2").is_file()
    assert (TEMPLATES_DIR / "es6.j2").is_file()
    assert (TEMPLATES_DIR / "partials" / "header.j2").is_file()


def test_resolve_config_manifest_overwrites_cli_values() -> None:
    fs = MemoryFileSystem(
        {
            "/work/pkg/package.json": json.dumps(
                {
                    "name": "@demo/widgets",
                    "description": "From manifest",
                    "version": "1.0.0",
                    "dependencies": {"left-pad": "^1.0.0"},
                }
            )
        }
    )

    config = resolve_config(_options(name="cli-name", description="From CLI", header="// kept"), fs)

    assert config.package == Path("/work/pkg/package.json")
    assert config.name == "@demo/widgets"
    assert config.description == "From manifest"
    assert config.header == "// kept"


def test_resolve_config_manifest_can_switch_extension_and_pattern() -> None:
    fs = MemoryFileSystem(
        {"/work/pkg/package.json": json.dumps({"extension": "mjs", "testFile": r"\.mjs$", "save": True})}
    )

    config = resolve_config(_options(), fs)

    assert config.extension == "mjs"
    assert config.tpl == TEMPLATES_DIR / "es6.j2"
    assert config.test_file == r"\.mjs$"
    assert config.save is True


def test_resolve_config_uses_explicit_package() -> None:
    fs = MemoryFileSystem(
        {
            "/work/pkg/package.json": json.dumps({"name": "nearest"}),
            "/elsewhere/meta.json": json.dumps({"name": "explicit"}),
        }
    )

    config = resolve_config(_options(package="/elsewhere/meta.json"), fs)

    assert config.package == Path("/elsewhere/meta.json")
    assert config.name == "explicit"


def test_resolve_config_reads_yaml_manifest() -> None:
    fs = MemoryFileSystem(
        {
            "/work/indexgen.yml": """
                name: yaml-widgets
                footer: "// end"
                save: yes
            """
        }
    )

    config = resolve_config(_options(package="/work/indexgen.yml"), fs)

    assert config.name == "yaml-widgets"
    assert config.footer == "// end"
    assert config.save is True


def test_find_manifest_ignores_filesystem_root() -> None:
    fs = MemoryFileSystem({"/package.json": "{}"})

    assert find_manifest(Path("/work/pkg/src"), fs) is None


def test_find_manifest_prefers_nearest() -> None:
    fs = MemoryFileSystem({"/work/package.json": "{}", "/work/pkg/package.json": "{}"})

    assert find_manifest(Path("/work/pkg/src"), fs) == Path("/work/pkg/package.json")


def test_load_manifest_ignores_unusable_values() -> None:
    fs = MemoryFileSystem(
        {"/work/package.json": json.dumps({"name": {"nested": True}, "description": 42, "save": "maybe"})}
    )

    values = load_manifest(Path("/work/package.json"), fs)

    assert values == {"description": "42"}


def test_load_manifest_reports_malformed_json() -> None:
    fs = MemoryFileSystem({"/work/package.json": "{ not json"})

    with pytest.raises(ManifestError, match="/work/package.json"):
        load_manifest(Path("/work/package.json"), fs)


def test_load_manifest_rejects_non_mapping() -> None:
    fs = MemoryFileSystem({"/work/package.json": "[1, 2]"})

    with pytest.raises(ManifestError, match="mapping"):
        load_manifest(Path("/work/package.json"), fs)


def test_load_manifest_reports_missing_file() -> None:
    with pytest.raises(ManifestError, match="/work/missing.json"):
        load_manifest(Path("/work/missing.json"), MemoryFileSystem())


def test_config_is_immutable() -> None:
    config = resolve_config(_options(), MemoryFileSystem())

    with pytest.raises(AttributeError):
        config.name = "changed"  # type: ignore[misc]


def test_load_manifest_rejects_invalid_test_pattern() -> None:
    fs = MemoryFileSystem({"/work/package.json": json.dumps({"testFile": "(js"})})

    with pytest.raises(ManifestError, match=r"/work/package.json: invalid testFile"):
        load_manifest(Path("/work/package.json"), fs)
