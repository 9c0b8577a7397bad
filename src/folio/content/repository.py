"""Read path for project documents.

The precomputed JSON artifact is preferred; when it is absent the content
directory is scanned on demand. The exclusion filter only applies to the
live scan unless ``api.filter_precomputed`` is enabled.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from folio.config.settings import FolioConfig
from folio.content.indexer import scan_documents
from folio.content.models import ContentIndex, Document

logger = logging.getLogger(__name__)


def parse_exclude(raw: str | Iterable[str] | None) -> list[str]:
    """Split a comma-separated exclusion list.

    >>> parse_exclude(" a, b ,,c ")
    ['a', 'b', 'c']
    """
    if raw is None:
        return []
    parts = raw.split(",") if isinstance(raw, str) else list(raw)
    return [part.strip() for part in parts if part and part.strip()]


class ProjectRepository:
    """Access to the project documents of one site."""

    def __init__(
        self,
        content_dir: Path,
        index_path: Path,
        *,
        extensions: Iterable[str] = (".md", ".mdx"),
        filter_precomputed: bool = False,
    ) -> None:
        self.content_dir = content_dir
        self.index_path = index_path
        self.extensions = tuple(extensions)
        self.filter_precomputed = filter_precomputed

    @classmethod
    def from_config(cls, config: FolioConfig) -> ProjectRepository:
        return cls(
            config.paths.abs_content_dir,
            config.paths.abs_index_path,
            extensions=config.render.content_extensions,
            filter_precomputed=config.api.filter_precomputed,
        )

    @property
    def has_artifact(self) -> bool:
        return self.index_path.is_file()

    def read_artifact(self) -> Any:
        with self.index_path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    def scan(self, exclude: Iterable[str] = ()) -> ContentIndex:
        index = ContentIndex(posts=scan_documents(self.content_dir, self.extensions))
        return index.without(set(exclude))

    def projects_payload(self, exclude: Iterable[str] = ()) -> Any:
        """Return the API payload.

        With the artifact present its JSON is returned as stored and
        ``exclude`` is ignored (unless ``filter_precomputed``).
        """
        excluded = list(exclude)
        if self.has_artifact:
            payload = self.read_artifact()
            if self.filter_precomputed and excluded:
                payload = _filter_payload(payload, set(excluded))
            return payload
        logger.debug("No index at %s; scanning %s", self.index_path, self.content_dir)
        return self.scan(excluded).to_payload()

    def load_index(self) -> ContentIndex:
        """Return the validated index for page rendering (artifact first)."""
        if self.has_artifact:
            return ContentIndex.model_validate(self.read_artifact())
        return self.scan()

    def get(self, slug: str) -> Document | None:
        return self.load_index().get(slug)


def _filter_payload(payload: Any, excluded: set[str]) -> Any:
    if not isinstance(payload, dict) or not isinstance(payload.get("posts"), list):
        return payload
    posts = [post for post in payload["posts"] if not (isinstance(post, dict) and post.get("slug") in excluded)]
    return {**payload, "posts": posts}
