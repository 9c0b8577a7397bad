"""Strict YAML front-matter parsing for content files.

Unlike a lenient reader, a malformed header is an error here: a broken
document must stop the index build rather than silently lose its metadata.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import frontmatter
import yaml

from folio.exceptions import MalformedFrontmatterError

logger = logging.getLogger(__name__)


def parse_frontmatter(content: str, *, source: Path) -> tuple[dict[str, Any], str]:
    """Parse YAML front matter using python-frontmatter.

    Args:
        content: Markdown content that may include front matter.
        source: File the content came from, used in error messages.

    Returns:
        Tuple of (metadata dict, body string). A file without front matter
        yields an empty dict and the whole content as body.

    Raises:
        MalformedFrontmatterError: If the YAML is invalid or not a mapping.

    """
    try:
        parsed = frontmatter.loads(content)
    except (yaml.YAMLError, ValueError) as exc:
        raise MalformedFrontmatterError(source, str(exc)) from exc

    raw_metadata = parsed.metadata
    if raw_metadata is None:
        raw_metadata = {}
    if not isinstance(raw_metadata, dict):
        raise MalformedFrontmatterError(source, f"expected a mapping, got {type(raw_metadata).__name__}")

    body = parsed.content if isinstance(parsed.content, str) else str(parsed.content)
    return dict(raw_metadata), body


def parse_frontmatter_file(path: Path, *, encoding: str = "utf-8") -> tuple[dict[str, Any], str]:
    """Read a Markdown file and parse its front matter.

    Raises:
        OSError: If the file cannot be read.
        MalformedFrontmatterError: If the front matter is invalid.

    """
    content = path.read_text(encoding=encoding)
    return parse_frontmatter(content, source=path)
