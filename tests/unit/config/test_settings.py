"""Tests for folio.config.settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from folio.config.settings import CONFIG_FILENAME, FolioConfig, RenderSettings
from folio.exceptions import ConfigValidationError
from folio.render.theme import Theme


def test_defaults_resolve_against_site_root(tmp_path: Path):
    config = FolioConfig.load(tmp_path)

    assert config.paths.abs_content_dir == tmp_path / "content" / "projects"
    assert config.paths.abs_index_path == tmp_path / "public" / "data" / "posts.json"
    assert config.api.filter_precomputed is False
    assert config.render.theme is Theme.DARK


def test_toml_file_overrides_defaults(tmp_path: Path):
    (tmp_path / CONFIG_FILENAME).write_text(
        '[paths]\ncontent_dir = "posts"\n\n[render]\ntheme = "light"\nwiden_factor = 1.25\n',
        encoding="utf-8",
    )

    config = FolioConfig.load(tmp_path)

    assert config.paths.abs_content_dir == tmp_path / "posts"
    assert config.render.theme is Theme.LIGHT
    assert config.render.widen_factor == 1.25


def test_environment_overrides_toml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    (tmp_path / CONFIG_FILENAME).write_text("[server]\nport = 9000\nhost = \"0.0.0.0\"\n", encoding="utf-8")
    monkeypatch.setenv("FOLIO_SERVER__PORT", "9100")

    config = FolioConfig.load(tmp_path)

    assert config.server.port == 9100
    assert config.server.host == "0.0.0.0"


def test_absolute_paths_are_kept(tmp_path: Path):
    elsewhere = tmp_path / "elsewhere"
    (tmp_path / CONFIG_FILENAME).write_text(f'[paths]\nindex_path = "{elsewhere.as_posix()}/i.json"\n')

    config = FolioConfig.load(tmp_path)

    assert config.paths.abs_index_path == elsewhere / "i.json"


def test_invalid_toml_raises_config_error(tmp_path: Path):
    (tmp_path / CONFIG_FILENAME).write_text("[paths\n", encoding="utf-8")

    with pytest.raises(ConfigValidationError):
        FolioConfig.load(tmp_path)


def test_invalid_value_raises_config_error(tmp_path: Path):
    (tmp_path / CONFIG_FILENAME).write_text("[render]\nwiden_factor = -1\n", encoding="utf-8")

    with pytest.raises(ConfigValidationError) as excinfo:
        FolioConfig.load(tmp_path)

    assert excinfo.value.errors


def test_content_extensions_are_normalized():
    settings = RenderSettings(content_extensions=("MD", ".Mdx"))

    assert settings.content_extensions == (".md", ".mdx")
