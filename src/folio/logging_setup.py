"""Logging for the folio CLI and the web server.

Every ``folio`` command calls :func:`configure_logging` from the Typer
callback. ``folio serve`` starts uvicorn with ``log_config=None``, so uvicorn's
loggers propagate to the same root handler instead of installing their own.
Log records and the CLI's Rich messages share one stderr console, which keeps
stdout clean for ``folio render`` output.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Final

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["console", "configure_logging"]

LOG_LEVEL_ENV: Final[str] = "FOLIO_LOG_LEVEL"
DEFAULT_LEVEL_NAME: Final[str] = "INFO"

# Floor levels for chatty third-party loggers, applied relative to the root level.
_LOGGER_FLOORS: Final[Mapping[str, int]] = {
    "uvicorn.access": logging.WARNING,
    "markdown_it": logging.INFO,
}

console = Console(stderr=True)


def _resolve_level(level_name: str | None = None) -> int:
    name = (level_name or os.getenv(LOG_LEVEL_ENV) or DEFAULT_LEVEL_NAME).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _folio_handler(root: logging.Logger) -> RichHandler | None:
    for handler in root.handlers:
        if isinstance(handler, RichHandler) and getattr(handler, "_folio_managed", False):
            return handler
    return None


def configure_logging(level_name: str | None = None) -> None:
    """Install the Rich handler on the root logger and set levels.

    Safe to call repeatedly; later calls only adjust levels.

    Args:
        level_name: Level such as ``"debug"``; falls back to ``FOLIO_LOG_LEVEL``
            and then ``INFO``. Unknown names mean ``INFO``.

    """
    root = logging.getLogger()
    level = _resolve_level(level_name)

    if _folio_handler(root) is None:
        root.handlers.clear()
        # Markup stays off: log messages carry file paths and user content.
        handler = RichHandler(console=console, rich_tracebacks=True, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._folio_managed = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    root.setLevel(level)
    for name, floor in _LOGGER_FLOORS.items():
        logging.getLogger(name).setLevel(max(level, floor))

    logging.captureWarnings(True)
