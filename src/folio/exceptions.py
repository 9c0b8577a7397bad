"""Centralized exceptions for the Folio application."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any


class FolioError(Exception):
    """Base exception for all Folio errors."""


class ContentError(FolioError):
    """Base exception for content indexing errors."""


class MalformedFrontmatterError(ContentError):
    """Raised when a content file's front matter cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed front matter in {path}: {reason}")


class DuplicateSlugError(ContentError):
    """Raised when two content files resolve to the same slug."""

    def __init__(self, slug: str, paths: Sequence[Path]) -> None:
        self.slug = slug
        self.paths = list(paths)
        joined = ", ".join(str(p) for p in self.paths)
        super().__init__(f"Duplicate slug '{slug}' produced by: {joined}")


class ConfigError(FolioError):
    """Base exception for all configuration-related errors."""


class ConfigValidationError(ConfigError):
    """Raised when a configuration file fails validation."""

    def __init__(self, source: Path, errors: Sequence[dict[str, Any]] | None = None) -> None:
        self.source = source
        self.errors = list(errors or [])
        super().__init__(f"Configuration in {source} failed validation with {len(self.errors)} error(s).")


class RenderError(FolioError):
    """Base exception for rendering errors."""


class InvalidBlockError(RenderError):
    """Raised when a structured block (``techtable``, ``image``) cannot be parsed."""

    def __init__(self, kind: str, reason: str) -> None:
        self.kind = kind
        self.reason = reason
        super().__init__(f"Invalid {kind} block: {reason}")
