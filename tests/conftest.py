from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from folio.config.settings import FolioConfig
from folio.config.site import SiteProfile, load_site_profile
from folio.web.app import create_app

ALPHA = """---
title: Alpha
publishedAt: 2024-01-15
summary: First project
images:
  - /images/alpha-1.png
  - /images/alpha-2.png
tag: [ml, vision]
team:
  - name: Ada
    avatar: /images/ada.png
---
# Models & Metrics

Some **bold** text.
"""

BETA = """---
title: Beta
summary: Second project
---
Body of beta.
"""

GAMMA = """---
title: Gamma
---
Body of gamma.
"""

SITE_YAML = """\
person:
  first_name: Jane
  last_name: Doe
  role: Engineer
work:
  hidden_projects: [gamma]
  wide_image_slugs: [alpha]
experience:
  experiences:
    - company: Acme
      role: Researcher
      timeframe: 2020 - 2022
      achievements: [Shipped things]
studies:
  institutions:
    - name: University
      description: Computer Science
"""


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ambient FOLIO_* variables out of the tests."""
    for key in list(os.environ):
        if key.startswith("FOLIO_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def write_project(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a project file into the default content directory."""
    content_dir = tmp_path / "content" / "projects"

    def _write(name: str, text: str) -> Path:
        content_dir.mkdir(parents=True, exist_ok=True)
        path = content_dir / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def site_root(tmp_path: Path, write_project: Callable[[str, str], Path]) -> Path:
    """A site with three projects and a profile."""
    write_project("alpha.md", ALPHA)
    write_project("beta.mdx", BETA)
    write_project("gamma.md", GAMMA)
    (tmp_path / "site.yaml").write_text(SITE_YAML, encoding="utf-8")
    return tmp_path


@pytest.fixture
def config(site_root: Path) -> FolioConfig:
    return FolioConfig.load(site_root)


@pytest.fixture
def site(config: FolioConfig) -> SiteProfile:
    return load_site_profile(config.paths.abs_site_file)


@pytest.fixture
def client(config: FolioConfig, site: SiteProfile) -> TestClient:
    return TestClient(create_app(config, site))
