"""Structured rendering of project write-ups."""

from folio.render.images import ImageSpec, build_figure, resolve_sizes
from folio.render.slugs import extract_text, heading_slug
from folio.render.tables import TechRow, TechTable, build_table, distribute_column_widths, format_header
from folio.render.theme import Theme

__all__ = [
    "ImageSpec",
    "TechRow",
    "TechTable",
    "Theme",
    "build_figure",
    "build_table",
    "distribute_column_widths",
    "extract_text",
    "format_header",
    "heading_slug",
    "resolve_sizes",
]
