"""Application factory.

Builds the FastAPI app, loads the configuration and site profile once, and
wires up the API and page routers.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from folio import __version__
from folio.config.settings import FolioConfig, load_folio_config
from folio.config.site import SiteProfile, load_site_profile
from folio.content.repository import ProjectRepository
from folio.render.markdown import ContentRenderer
from folio.templating import TemplateLoader, default_loader
from folio.web.api import router as api_router
from folio.web.pages import router as pages_router

logger = logging.getLogger(__name__)


def create_app(
    config: FolioConfig | None = None,
    site: SiteProfile | None = None,
    *,
    templates: TemplateLoader | None = None,
) -> FastAPI:
    """Create the site application.

    Args:
        config: Runtime configuration; loaded from the working directory if omitted.
        site: Site profile; loaded from ``paths.site_file`` if omitted.
        templates: Template loader; the packaged templates by default.

    """
    config = config or load_folio_config()
    site = site or load_site_profile(config.paths.abs_site_file)
    templates = templates or default_loader()

    app = FastAPI(title=site.site_title, version=__version__, docs_url=None, redoc_url=None)
    app.state.config = config
    app.state.site = site
    app.state.templates = templates
    app.state.repository = ProjectRepository.from_config(config)
    app.state.renderer = ContentRenderer(config.render, templates)

    app.include_router(api_router)
    app.include_router(pages_router)
    app.mount(
        "/assets",
        StaticFiles(directory=config.paths.abs_public_dir, check_dir=False),
        name="assets",
    )

    logger.debug("Serving content from %s", config.paths.abs_content_dir)
    return app
