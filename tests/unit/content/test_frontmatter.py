"""Tests for folio.content.frontmatter."""

from __future__ import annotations

from pathlib import Path

import pytest

from folio.content.frontmatter import parse_frontmatter
from folio.exceptions import MalformedFrontmatterError


def test_parses_metadata_and_body():
    metadata, body = parse_frontmatter("---\ntitle: Hi\ntag: [a]\n---\nHello\n", source=Path("x.md"))

    assert metadata == {"title": "Hi", "tag": ["a"]}
    assert body == "Hello"


def test_document_without_front_matter_has_empty_metadata():
    metadata, body = parse_frontmatter("Just text", source=Path("x.md"))

    assert metadata == {}
    assert body == "Just text"


def test_invalid_yaml_names_the_file():
    with pytest.raises(MalformedFrontmatterError, match="bad.md"):
        parse_frontmatter("---\ntitle: [oops\n---\n", source=Path("bad.md"))
