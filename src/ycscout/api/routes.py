"""API routes for YC Scout."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ycscout.api.deps import get_app_settings, get_browser_provider, get_client_factory, get_event_bus
from ycscout.browser.base import BrowserProvider, ExtractionClientFactory
from ycscout.monitoring.event_bus import EventBus
from ycscout.scout.runner import run_scout
from ycscout.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_QUERY_ERROR = "Missing query parameter (?query=...)"
GENERIC_SCOUT_ERROR = "Something went wrong with the scout request."


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/api/investor_scout")
async def investor_scout(
    query: str | None = Query(None, description="Free-text description of the companies to find."),
    provider: BrowserProvider = Depends(get_browser_provider),
    client_factory: ExtractionClientFactory = Depends(get_client_factory),
    settings: Settings = Depends(get_app_settings),
    bus: EventBus = Depends(get_event_bus),
) -> JSONResponse:
    """Return up to ``scout.requested_count`` YC companies matching *query*.

    Always answers with a JSON envelope: the success envelope on 200,
    ``{"error": ...}`` on 400 (missing query) and 500 (any upstream failure).
    """
    if not query:
        return JSONResponse(status_code=400, content={"error": MISSING_QUERY_ERROR})

    try:
        result = await run_scout(
            query,
            provider=provider,
            client_factory=client_factory,
            settings=settings,
            bus=bus,
        )
    except Exception as exc:
        logger.exception("Scout request failed for query %r", query)
        return JSONResponse(status_code=500, content={"error": str(exc) or GENERIC_SCOUT_ERROR})

    return JSONResponse(status_code=200, content=result.to_envelope())
