"""Factories for building browser providers and extraction clients from settings.

Credentials are read from ``Settings`` once and passed explicitly into the
SDK constructors; nothing in the browser layer reads the process
environment.
"""

from __future__ import annotations

import logging

from ycscout.browser.base import BrowserProvider, BrowserSession, ExtractionClient, ExtractionClientFactory
from ycscout.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_browser_provider(settings: Settings | None = None) -> BrowserProvider:
    """Create the Kernel-backed browser provider.

    Args:
        settings: Settings to read from. Defaults to ``get_settings()``.

    Returns:
        A configured ``BrowserProvider``.
    """
    from ycscout.browser.kernel_provider import KernelBrowserProvider

    settings = settings or get_settings()
    kernel = settings.kernel
    logger.debug("Creating Kernel provider: headless=%s stealth=%s", kernel.headless, kernel.stealth)
    return KernelBrowserProvider(
        api_key=kernel.api_key,
        headless=kernel.headless,
        stealth=kernel.stealth,
        timeout_seconds=kernel.timeout_seconds,
    )


def create_extraction_client(session: BrowserSession, settings: Settings | None = None) -> ExtractionClient:
    """Create a Stagehand client attached to *session*.

    Args:
        session: The provisioned browser to attach to.
        settings: Settings to read from. Defaults to ``get_settings()``.

    Returns:
        An uninitialised ``ExtractionClient``; call ``init()`` before use.
    """
    from ycscout.browser.stagehand_client import StagehandExtractionClient

    settings = settings or get_settings()
    extraction = settings.extraction
    logger.info("Created extraction client: model=%s session=%s", extraction.model_name, session.session_id)
    return StagehandExtractionClient(
        session.cdp_ws_url,
        model_name=extraction.model_name,
        model_api_key=extraction.model_api_key,
        dom_settle_timeout_ms=extraction.dom_settle_timeout_ms,
        verbose=extraction.verbose,
    )


def extraction_client_factory(settings: Settings | None = None) -> ExtractionClientFactory:
    """Bind *settings* into a one-argument ``ExtractionClientFactory``."""

    def _factory(session: BrowserSession) -> ExtractionClient:
        return create_extraction_client(session, settings)

    return _factory
