"""Jinja2 template loading for rendered blocks and pages.

Provides centralized template loading with the custom filters used by the
``blocks/`` and ``pages/`` templates.
"""

from __future__ import annotations

from datetime import date, datetime
from functools import lru_cache
from importlib.resources import files
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape

from folio.render.slugs import heading_slug


def format_date(value: Any, format_str: str = "%B %d, %Y") -> str:
    """Format an ISO date string (or date) for display.

    Strings that do not parse as ISO dates are returned unchanged.
    """
    if isinstance(value, datetime):
        return value.strftime(format_str)
    if isinstance(value, date):
        return value.strftime(format_str)
    if not value:
        return ""
    try:
        return datetime.fromisoformat(str(value)).strftime(format_str)
    except ValueError:
        return str(value)


def format_percent(value: float, precision: int = 4) -> str:
    text = f"{value:.{precision}f}".rstrip("0").rstrip(".")
    return f"{text}%"


class TemplateLoader:
    """Loads and renders the package's Jinja2 templates."""

    def __init__(self, template_dir: Path | None = None) -> None:
        if template_dir is None:
            template_dir = Path(str(files("folio").joinpath("templates")))
        self.template_dir = template_dir

        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=select_autoescape(["html", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._register_filters()

    def _register_filters(self) -> None:
        self.env.filters["format_date"] = format_date
        self.env.filters["percent"] = format_percent
        self.env.filters["slugify"] = heading_slug

    def load_template(self, template_name: str) -> Template:
        return self.env.get_template(template_name)

    def render_template(self, template_name: str, **context: Any) -> str:
        return self.load_template(template_name).render(**context)


@lru_cache(maxsize=1)
def default_loader() -> TemplateLoader:
    """Shared loader for the packaged templates."""
    return TemplateLoader()
