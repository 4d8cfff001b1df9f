from __future__ import annotations

from pathlib import Path

import pytest

from webbundle.config import load_effective_config


def _write_config(root: Path, lines: list[str]) -> None:
    (root / "webbundle.toml").write_text("\n".join(lines), encoding="utf-8")


def test_invalid_section_type_raises_value_error(tmp_path: Path) -> None:
    _write_config(tmp_path, ['resources = "not-a-table"'])

    with pytest.raises(ValueError, match="section 'resources'"):
        load_effective_config(tmp_path)


def test_invalid_debug_type_raises_value_error(tmp_path: Path) -> None:
    _write_config(tmp_path, ["[settings]", 'debug = "yes"'])

    with pytest.raises(ValueError, match="settings.debug"):
        load_effective_config(tmp_path)


def test_bundle_without_mappings_is_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, ["[bundles.app]", 'id = "/app.js"'])

    with pytest.raises(ValueError, match="bundles.app.mappings"):
        load_effective_config(tmp_path)


def test_bundle_without_id_is_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, ["[bundles.app]", 'mappings = ["js/"]'])

    with pytest.raises(ValueError, match="bundles.app.id"):
        load_effective_config(tmp_path)


def test_extension_is_required_when_id_has_none(tmp_path: Path) -> None:
    _write_config(tmp_path, ["[bundles.app]", 'id = "/bundles/app"', 'mappings = ["js/"]'])

    with pytest.raises(ValueError, match="bundles.app.file_extension"):
        load_effective_config(tmp_path)


def test_unknown_bundle_field_is_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        ["[bundles.app]", 'id = "/app.js"', 'mappings = ["js/"]', "minify = true"],
    )

    with pytest.raises(ValueError, match="unknown fields: minify"):
        load_effective_config(tmp_path)


def test_unknown_dependency_is_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        ["[bundles.app]", 'id = "/app.js"', 'mappings = ["js/"]', 'dependencies = ["lib"]'],
    )

    with pytest.raises(ValueError, match="unknown bundle 'lib'"):
        load_effective_config(tmp_path)


def test_invalid_variant_default_is_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        [
            "[bundles.app]",
            'id = "/app.js"',
            'mappings = ["js/"]',
            "[bundles.app.variants]",
            'locale = { values = ["en", "fr"], default = "de" }',
        ],
    )

    with pytest.raises(ValueError, match="bundles.app.variants.locale"):
        load_effective_config(tmp_path)


def test_marker_file_names_must_differ(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        ["[resources]", 'sort_file_name = ".meta"', 'licenses_file_name = ".meta"'],
    )

    with pytest.raises(ValueError, match="must differ"):
        load_effective_config(tmp_path)
