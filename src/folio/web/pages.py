"""Server-rendered pages."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import HTMLResponse, RedirectResponse

from folio.config.settings import FolioConfig
from folio.config.site import SiteProfile
from folio.content.models import ContentIndex, Document
from folio.content.repository import ProjectRepository
from folio.exceptions import FolioError
from folio.render.markdown import ContentRenderer
from folio.templating import TemplateLoader
from folio.web.dependencies import get_config, get_renderer, get_repository, get_site, get_templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])


def _load_index(repository: ProjectRepository) -> ContentIndex:
    try:
        return repository.load_index()
    except (FolioError, OSError, ValueError):
        logger.warning("Could not load project index; rendering without projects", exc_info=True)
        return ContentIndex()


def visible_projects(
    index: ContentIndex,
    site: SiteProfile,
    *,
    exclude: tuple[str, ...] = (),
    limit: int | None = None,
) -> list[Document]:
    """Projects not hidden by the site profile, minus ``exclude``, in index order."""
    posts = index.without(set(site.work.hidden_projects) | set(exclude)).posts
    return posts if limit is None else posts[:limit]


def _page(templates: TemplateLoader, name: str, site: SiteProfile, config: FolioConfig, **context: Any) -> HTMLResponse:
    html = templates.render_template(name, site=site, theme=config.render.theme.value, **context)
    return HTMLResponse(html)


@router.get("/", response_class=HTMLResponse)
def home(
    site: SiteProfile = Depends(get_site),
    config: FolioConfig = Depends(get_config),
    repository: ProjectRepository = Depends(get_repository),
    templates: TemplateLoader = Depends(get_templates),
) -> HTMLResponse:
    featured = visible_projects(_load_index(repository), site, limit=site.home.featured_count)
    return _page(templates, "pages/home.html.jinja", site, config, projects=featured)


@router.get("/work", response_class=HTMLResponse)
def work(
    site: SiteProfile = Depends(get_site),
    config: FolioConfig = Depends(get_config),
    repository: ProjectRepository = Depends(get_repository),
    templates: TemplateLoader = Depends(get_templates),
) -> HTMLResponse:
    projects = visible_projects(_load_index(repository), site)
    return _page(templates, "pages/work.html.jinja", site, config, projects=projects)


@router.get("/work/{slug}", response_class=HTMLResponse)
def project(
    slug: str,
    site: SiteProfile = Depends(get_site),
    config: FolioConfig = Depends(get_config),
    repository: ProjectRepository = Depends(get_repository),
    renderer: ContentRenderer = Depends(get_renderer),
    templates: TemplateLoader = Depends(get_templates),
) -> HTMLResponse:
    index = _load_index(repository)
    post = index.get(slug)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")

    wide = post.slug in site.work.wide_image_slugs
    body = renderer.render(post.content, wide_images=wide)
    related = visible_projects(index, site, exclude=(post.slug,), limit=site.work.related_count)
    return _page(
        templates,
        "pages/project.html.jinja",
        site,
        config,
        post=post,
        body=body,
        wide_images=wide,
        related=related,
    )


@router.get("/experience", response_class=HTMLResponse)
def experience(
    site: SiteProfile = Depends(get_site),
    config: FolioConfig = Depends(get_config),
    templates: TemplateLoader = Depends(get_templates),
) -> HTMLResponse:
    return _page(templates, "pages/experience.html.jinja", site, config, section=site.experience)


@router.get("/experience-legacy")
def experience_legacy() -> RedirectResponse:
    return RedirectResponse(url="/experience")
