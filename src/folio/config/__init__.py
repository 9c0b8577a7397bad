"""Configuration for Folio: runtime settings and the site profile."""

from folio.config.settings import (
    ApiSettings,
    FolioConfig,
    PathsSettings,
    RenderSettings,
    ServerSettings,
    load_folio_config,
)
from folio.config.site import SiteProfile, load_site_profile

__all__ = [
    "ApiSettings",
    "FolioConfig",
    "PathsSettings",
    "RenderSettings",
    "ServerSettings",
    "SiteProfile",
    "load_folio_config",
    "load_site_profile",
]
