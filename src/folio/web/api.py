"""JSON endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse

from folio.content.repository import ProjectRepository, parse_exclude
from folio.web.dependencies import get_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["projects"])


@router.get("/projects")
def list_projects(
    exclude: str | None = Query(default=None, description="Comma-separated slugs to omit"),
    repository: ProjectRepository = Depends(get_repository),
) -> JSONResponse:
    """Return ``{"posts": [...]}``; content errors degrade to an empty list."""
    try:
        payload = repository.projects_payload(parse_exclude(exclude))
    except Exception:
        logger.warning("Could not load projects; serving an empty list", exc_info=True)
        payload = {"posts": []}
    return JSONResponse(content=payload)


@router.get("/rss")
def rss_feed() -> Response:
    # The blog was retired; the feed stays gone.
    return Response(status_code=404)
