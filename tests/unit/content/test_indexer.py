"""Tests for folio.content.indexer."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from folio.config.settings import FolioConfig
from folio.content.indexer import build_index, iter_content_files, run_indexer, scan_documents, write_index
from folio.content.models import ContentIndex
from folio.exceptions import DuplicateSlugError, MalformedFrontmatterError

RECOGNIZED_KEYS = {"title", "publishedAt", "summary", "images", "image", "tag", "team", "link"}


def test_index_contains_one_entry_per_eligible_file(config: FolioConfig):
    result = run_indexer(config)

    assert result.written
    assert result.post_count == 3
    payload = json.loads(config.paths.abs_index_path.read_text(encoding="utf-8"))
    assert [post["slug"] for post in payload["posts"]] == ["alpha", "beta", "gamma"]


def test_every_metadata_key_is_present_with_defaults(config: FolioConfig):
    run_indexer(config)
    payload = json.loads(config.paths.abs_index_path.read_text(encoding="utf-8"))

    for post in payload["posts"]:
        assert set(post) == {"slug", "metadata", "content"}
        assert set(post["metadata"]) == RECOGNIZED_KEYS

    gamma = payload["posts"][2]["metadata"]
    assert gamma["title"] == "Gamma"
    assert gamma["images"] == []
    assert gamma["team"] == []
    assert gamma["summary"] == ""


def test_yaml_dates_are_serialized_as_iso_strings(config: FolioConfig):
    index = build_index(config.paths.abs_content_dir)

    assert index is not None
    assert index.get("alpha").metadata.published_at == "2024-01-15"


def test_body_excludes_front_matter(config: FolioConfig):
    index = build_index(config.paths.abs_content_dir)

    body = index.get("alpha").content
    assert "title: Alpha" not in body
    assert body.startswith("# Models & Metrics")


def test_team_members_keep_extra_keys(write_project, tmp_path: Path):
    write_project("delta.md", "---\nteam:\n  - name: Bo\n    role: Lead\n---\nBody\n")

    (doc,) = scan_documents(tmp_path / "content" / "projects")

    member = doc.to_payload()["metadata"]["team"][0]
    assert member == {"name": "Bo", "avatar": "", "role": "Lead"}


def test_only_md_and_mdx_files_are_indexed(write_project, tmp_path: Path):
    write_project("a.md", "---\ntitle: A\n---\n")
    write_project("b.MDX", "---\ntitle: B\n---\n")
    write_project("notes.txt", "ignored")
    (tmp_path / "content" / "projects" / "nested.md").mkdir()

    files = iter_content_files(tmp_path / "content" / "projects")

    assert [f.name for f in files] == ["a.md", "b.MDX"]


def test_rebuilding_unchanged_sources_is_byte_identical(config: FolioConfig):
    run_indexer(config)
    first = config.paths.abs_index_path.read_bytes()
    run_indexer(config)

    assert config.paths.abs_index_path.read_bytes() == first


def test_missing_content_directory_writes_nothing(tmp_path: Path):
    config = FolioConfig.load(tmp_path)

    result = run_indexer(config)

    assert not result.written
    assert not config.paths.abs_index_path.exists()
    assert build_index(tmp_path / "missing") is None
    assert scan_documents(tmp_path / "missing") == []


def test_malformed_front_matter_aborts_without_touching_previous_index(config: FolioConfig, write_project):
    run_indexer(config)
    previous = config.paths.abs_index_path.read_bytes()
    write_project("broken.md", "---\ntitle: [unclosed\n---\nBody\n")

    with pytest.raises(MalformedFrontmatterError) as excinfo:
        run_indexer(config)

    assert excinfo.value.path.name == "broken.md"
    assert config.paths.abs_index_path.read_bytes() == previous


def test_wrongly_typed_metadata_is_reported_as_malformed(write_project, tmp_path: Path):
    write_project("solo.md", "---\ntitle: Solo\nteam: Alice\n---\nBody\n")

    with pytest.raises(MalformedFrontmatterError) as excinfo:
        scan_documents(tmp_path / "content" / "projects")

    assert excinfo.value.path.name == "solo.md"
    assert "team" in excinfo.value.reason


def test_duplicate_slugs_are_rejected(write_project, tmp_path: Path):
    write_project("same.md", "---\ntitle: One\n---\n")
    write_project("same.mdx", "---\ntitle: Two\n---\n")

    with pytest.raises(DuplicateSlugError) as excinfo:
        scan_documents(tmp_path / "content" / "projects")

    assert excinfo.value.slug == "same"


def test_write_index_leaves_no_temp_files(tmp_path: Path):
    output = tmp_path / "public" / "data" / "posts.json"

    write_index(ContentIndex(), output)

    assert json.loads(output.read_text(encoding="utf-8")) == {"posts": []}
    assert [p.name for p in output.parent.iterdir()] == ["posts.json"]


def test_unicode_is_written_unescaped(write_project, tmp_path: Path):
    write_project("cafe.md", "---\ntitle: Café\n---\n")
    output = tmp_path / "posts.json"

    write_index(build_index(tmp_path / "content" / "projects"), output)

    assert '"Café"' in output.read_text(encoding="utf-8")
