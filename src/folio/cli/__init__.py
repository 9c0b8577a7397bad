"""Command-line interface for Folio."""

from folio.cli.main import app

__all__ = ["app"]
