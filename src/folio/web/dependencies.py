"""Request-scoped accessors for the objects created by the app factory."""

from __future__ import annotations

from fastapi import Request

from folio.config.settings import FolioConfig
from folio.config.site import SiteProfile
from folio.content.repository import ProjectRepository
from folio.render.markdown import ContentRenderer
from folio.templating import TemplateLoader


def get_config(request: Request) -> FolioConfig:
    return request.app.state.config


def get_site(request: Request) -> SiteProfile:
    return request.app.state.site


def get_repository(request: Request) -> ProjectRepository:
    return request.app.state.repository


def get_renderer(request: Request) -> ContentRenderer:
    return request.app.state.renderer


def get_templates(request: Request) -> TemplateLoader:
    return request.app.state.templates
