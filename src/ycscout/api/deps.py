"""FastAPI dependencies for the scout endpoints.

Tests replace these through ``app.dependency_overrides``.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator

from fastapi import Depends, Request

from ycscout.browser.base import BrowserProvider, ExtractionClientFactory
from ycscout.browser.factory import create_browser_provider, extraction_client_factory
from ycscout.monitoring.event_bus import EventBus
from ycscout.settings import Settings

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was built with."""
    return request.app.state.settings


async def get_browser_provider(
    settings: Settings = Depends(get_app_settings),
) -> AsyncIterator[BrowserProvider]:
    """Yield a per-request browser provider and close its HTTP client afterwards."""
    provider = create_browser_provider(settings)
    try:
        yield provider
    finally:
        try:
            await provider.aclose()
        except Exception:
            logger.warning("Failed to close browser provider", exc_info=True)


def get_client_factory(settings: Settings = Depends(get_app_settings)) -> ExtractionClientFactory:
    return extraction_client_factory(settings)


def get_event_bus(request: Request) -> EventBus:
    """Return the application-wide event bus."""
    return request.app.state.event_bus
