"""Build-time content indexer.

Scans the project directory, parses each write-up's front matter and writes
the aggregated ``{"posts": [...]}`` JSON artifact that the site serves.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from folio.config.settings import DEFAULT_CONTENT_EXTENSIONS, FolioConfig
from folio.content.frontmatter import parse_frontmatter_file
from folio.content.models import ContentIndex, Document, ProjectMetadata
from folio.exceptions import DuplicateSlugError, MalformedFrontmatterError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class IndexResult:
    """Outcome of an indexer run."""

    source_dir: Path
    output_path: Path
    written: bool
    post_count: int = 0


def iter_content_files(content_dir: Path, extensions: Iterable[str] = DEFAULT_CONTENT_EXTENSIONS) -> list[Path]:
    """List eligible files directly inside ``content_dir``, sorted by name."""
    wanted = {ext.lower() for ext in extensions}
    return sorted(
        (path for path in content_dir.iterdir() if path.is_file() and path.suffix.lower() in wanted),
        key=lambda p: p.name,
    )


def load_document(path: Path) -> Document:
    """Parse one content file into a :class:`Document`.

    Raises:
        MalformedFrontmatterError: If the front matter is not valid YAML or a
            recognized key has the wrong shape (e.g. ``team: Alice``).

    """
    metadata, body = parse_frontmatter_file(path)
    try:
        project = ProjectMetadata.from_frontmatter(metadata)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise MalformedFrontmatterError(path, problems) from exc
    return Document(slug=path.stem, metadata=project, content=body)


def scan_documents(
    content_dir: Path,
    extensions: Iterable[str] = DEFAULT_CONTENT_EXTENSIONS,
) -> list[Document]:
    """Parse every content file in ``content_dir``.

    A missing directory yields an empty list. Malformed front matter raises
    :class:`~folio.exceptions.MalformedFrontmatterError`.

    Raises:
        DuplicateSlugError: If two files share a stem (``a.md`` and ``a.mdx``).

    """
    if not content_dir.is_dir():
        return []

    documents: list[Document] = []
    seen: dict[str, Path] = {}
    for path in iter_content_files(content_dir, extensions):
        if path.stem in seen:
            raise DuplicateSlugError(path.stem, [seen[path.stem], path])
        seen[path.stem] = path
        documents.append(load_document(path))
    return documents


def build_index(
    content_dir: Path,
    extensions: Iterable[str] = DEFAULT_CONTENT_EXTENSIONS,
) -> ContentIndex | None:
    """Return the aggregated index, or ``None`` if ``content_dir`` does not exist."""
    if not content_dir.is_dir():
        return None
    return ContentIndex(posts=scan_documents(content_dir, extensions))


def write_index(index: ContentIndex, output_path: Path) -> None:
    """Write ``index`` as JSON, replacing any previous artifact atomically."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = index.to_json()
    fd, tmp_name = tempfile.mkstemp(prefix=f".{output_path.name}.", suffix=".tmp", dir=output_path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(payload)
        os.replace(tmp_name, output_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def run_indexer(config: FolioConfig) -> IndexResult:
    """Index the configured content directory into the configured artifact."""
    source_dir = config.paths.abs_content_dir
    output_path = config.paths.abs_index_path

    index = build_index(source_dir, config.render.content_extensions)
    if index is None:
        logger.info("Content directory %s does not exist; nothing to index", source_dir)
        return IndexResult(source_dir=source_dir, output_path=output_path, written=False)

    write_index(index, output_path)
    logger.info("Indexed %d document(s) into %s", len(index.posts), output_path)
    return IndexResult(
        source_dir=source_dir,
        output_path=output_path,
        written=True,
        post_count=len(index.posts),
    )
