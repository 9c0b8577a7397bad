"""Runtime configuration for Folio.

Settings are read from ``.folio.toml`` in the site root and may be overridden
with environment variables using the ``FOLIO_SECTION__KEY`` pattern
(e.g. ``FOLIO_API__FILTER_PRECOMPUTED=true``).

Priority (highest to lowest):

1. Environment variables
2. ``.folio.toml``
3. Defaults
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from folio.exceptions import ConfigValidationError
from folio.render.theme import Theme

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".folio.toml"
DEFAULT_CONTENT_EXTENSIONS = (".md", ".mdx")


def _deep_merge(destination: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Merge source into destination, with source values overwriting."""
    for key, value in source.items():
        if isinstance(value, Mapping) and key in destination and isinstance(destination[key], Mapping):
            destination[key] = _deep_merge(dict(destination[key]), dict(value))
        else:
            destination[key] = value
    return destination


class PathsSettings(BaseModel):
    """Path configuration.

    All paths are relative to ``site_root`` unless absolute.
    """

    site_root: Path = Field(default_factory=Path.cwd, description="Root directory of the site")
    content_dir: Path = Field(default=Path("content/projects"), description="Project write-ups")
    public_dir: Path = Field(default=Path("public"), description="Served static assets root")
    index_path: Path = Field(
        default=Path("public/data/posts.json"),
        description="Aggregated JSON index written by the indexer",
    )
    site_file: Path = Field(default=Path("site.yaml"), description="Site profile (person, social, work)")

    @property
    def abs_content_dir(self) -> Path:
        return self._resolve(self.content_dir)

    @property
    def abs_public_dir(self) -> Path:
        return self._resolve(self.public_dir)

    @property
    def abs_index_path(self) -> Path:
        return self._resolve(self.index_path)

    @property
    def abs_site_file(self) -> Path:
        return self._resolve(self.site_file)

    def _resolve(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.site_root / path


class ApiSettings(BaseModel):
    """Delivery API behaviour."""

    filter_precomputed: bool = Field(
        default=False,
        description="Apply the exclude filter to the precomputed index as well as to live scans",
    )


class RenderSettings(BaseModel):
    """Structured renderer options."""

    theme: Theme = Field(default=Theme.DARK, description="Colour theme used by tables and figures")
    widen_factor: float = Field(default=1.1, gt=0, description="Multiplier for the central table columns")
    wide_breakpoint_px: int = Field(default=1024, gt=0, description="Viewport width of the wide layout")
    tablet_breakpoint_px: int = Field(default=640, gt=0, description="Viewport width of the tablet layout")
    log_missing_images: bool = Field(default=False, description="Log images skipped for lack of a source")
    content_extensions: tuple[str, ...] = Field(default=DEFAULT_CONTENT_EXTENSIONS)

    @field_validator("content_extensions")
    @classmethod
    def _normalize_extensions(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(ext if ext.startswith(".") else f".{ext}" for ext in (e.lower() for e in value))


class ServerSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False


class FolioConfig(BaseSettings):
    """Root configuration for Folio."""

    paths: PathsSettings = Field(default_factory=PathsSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    render: RenderSettings = Field(default_factory=RenderSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="FOLIO_",
        env_nested_delimiter="__",
    )

    @classmethod
    def load(cls, site_root: Path | None = None) -> FolioConfig:
        """Load configuration from ``.folio.toml`` and environment variables."""
        root_path = site_root if site_root is not None else Path.cwd()
        config_file = root_path / CONFIG_FILENAME

        file_settings: dict[str, Any] = {}
        if config_file.is_file():
            with config_file.open("rb") as f:
                try:
                    file_settings = tomllib.load(f)
                except tomllib.TOMLDecodeError as exc:
                    raise ConfigValidationError(config_file, [{"msg": str(exc)}]) from exc
            logger.debug("Loaded configuration from %s", config_file)

        # pydantic-settings gives __init__ arguments precedence over the
        # environment, so the environment is read first and merged on top.
        try:
            env_settings = cls().model_dump(exclude_unset=True)
            merged = _deep_merge(file_settings, env_settings)
            merged.setdefault("paths", {})["site_root"] = root_path
            return cls.model_validate(merged)
        except ValidationError as exc:
            raise ConfigValidationError(config_file, exc.errors()) from exc


def load_folio_config(site_root: Path | None = None) -> FolioConfig:
    """Convenience wrapper around :meth:`FolioConfig.load`."""
    return FolioConfig.load(site_root)
