"""Tests for the server-rendered pages."""

from __future__ import annotations

from fastapi.testclient import TestClient

from folio.config.site import ExperienceSection
from folio.web.app import create_app


def test_home_lists_visible_projects(client: TestClient):
    response = client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert 'href="/work/alpha"' in response.text
    assert 'href="/work/beta"' in response.text
    # Hidden in site.yaml.
    assert 'href="/work/gamma"' not in response.text


def test_home_carousel_carries_timer_settings(client: TestClient):
    response = client.get("/")

    assert 'data-interval="5000"' in response.text
    assert 'data-pause-on-hover="true"' in response.text
    assert response.text.count('class="carousel-slide') == 2


def test_work_page(client: TestClient):
    response = client.get("/work")

    assert response.status_code == 200
    assert "<title>Projects | Jane Doe&#39;s Portfolio</title>" in response.text


def test_project_page_renders_body(client: TestClient):
    response = client.get("/work/alpha")

    assert response.status_code == 200
    assert 'id="models-and-metrics"' in response.text
    assert "<strong>bold</strong>" in response.text
    assert "project-wide" in response.text
    # Related projects exclude the page itself and hidden projects.
    related = response.text.split('class="related-projects"', 1)[1]
    assert 'href="/work/beta"' in related
    assert 'href="/work/alpha"' not in related
    assert 'href="/work/gamma"' not in related


def test_hidden_project_is_still_reachable_directly(client: TestClient):
    assert client.get("/work/gamma").status_code == 200


def test_unknown_project_is_404(client: TestClient):
    assert client.get("/work/nope").status_code == 404


def test_experience_page(client: TestClient):
    response = client.get("/experience")

    assert response.status_code == 200
    assert "Acme" in response.text
    assert "Computer Science" in response.text


def test_legacy_experience_redirects(client: TestClient):
    response = client.get("/experience-legacy", follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"] == "/experience"


def test_hidden_experience_shows_notice(config, site):
    hidden = site.model_copy(update={"experience": ExperienceSection(display=False)})
    client = TestClient(create_app(config, hidden))

    response = client.get("/experience")

    assert "currently hidden" in response.text
    assert "Acme" not in response.text
