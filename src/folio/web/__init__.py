"""FastAPI application serving the site pages and the projects API."""

from folio.web.app import create_app

__all__ = ["create_app"]
