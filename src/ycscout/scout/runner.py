"""Run one scout: acquire a browser, extract matching companies, release.

Provisioning and the browser work are bounded by ``scout.timeout_sec`` so
a hung navigation or extraction cannot hold a hosted browser slot
indefinitely. Cleanup runs outside that limit and always completes.
"""

from __future__ import annotations

import asyncio
import logging
import time
from uuid import uuid4

from ycscout.browser.base import BrowserProvider, ExtractionClientFactory
from ycscout.exceptions import ScoutTimeoutError
from ycscout.models.company import CompanyList, ScoutResult
from ycscout.monitoring.event_bus import EventBus, EventType
from ycscout.scout.prompts import build_instruction
from ycscout.scout.session import browser_session
from ycscout.settings import Settings, get_settings

logger = logging.getLogger(__name__)


async def run_scout(
    query: str,
    *,
    provider: BrowserProvider,
    client_factory: ExtractionClientFactory,
    settings: Settings | None = None,
    bus: EventBus | None = None,
) -> ScoutResult:
    """Find companies in the YC directory matching *query*.

    The returned list is whatever the extraction model produced: it is not
    truncated, padded, or filtered, so ``returned_count`` may differ from
    ``requested_count``.

    Args:
        query: Free-text description of the companies wanted.
        provider: Browser provider to provision the session from.
        client_factory: Builds the extraction client for the session.
        settings: Settings to use. Defaults to ``get_settings()``.
        bus: Event bus for lifecycle events.

    Returns:
        A ``ScoutResult`` carrying the query verbatim.

    Raises:
        ValueError: If *query* is empty.
        ScoutTimeoutError: If provisioning and extraction exceed ``scout.timeout_sec``.
    """
    if not query:
        raise ValueError("query must be a non-empty string")

    settings = settings or get_settings()
    scout_id = uuid4().hex[:12]
    bus = (bus or EventBus()).bind(scout_id)

    await bus.emit(EventType.SCOUT_STARTED, {"query": query})

    try:
        return await _scout(query, provider=provider, client_factory=client_factory, settings=settings, bus=bus)
    except Exception as exc:
        await bus.emit(EventType.SCOUT_FAILED, {"error": str(exc), "error_type": type(exc).__name__})
        raise


async def _scout(
    query: str,
    *,
    provider: BrowserProvider,
    client_factory: ExtractionClientFactory,
    settings: Settings,
    bus: EventBus,
) -> ScoutResult:
    scout = settings.scout
    loop = asyncio.get_running_loop()
    start = time.monotonic()
    # 0 disables the limit.
    deadline = loop.time() + scout.timeout_sec if scout.timeout_sec > 0 else None

    try:
        async with browser_session(provider, client_factory, bus, deadline=deadline) as (session, client):
            async with asyncio.timeout_at(deadline):
                await client.init()
                await client.goto(scout.directory_url)
                # Fixed settle delay; the directory renders client-side.
                await client.wait(scout.settle_ms)
                await bus.emit(EventType.PAGE_LOADED, {"url": scout.directory_url})

                instruction = build_instruction(query, scout.requested_count)
                extracted = await client.extract(instruction, CompanyList)
    except TimeoutError:
        if deadline is None or loop.time() < deadline:
            raise
        raise ScoutTimeoutError(scout.timeout_sec) from None

    result = ScoutResult(
        query=query,
        companies=list(extracted.companies),
        requested_count=scout.requested_count,
        session_id=session.session_id,
        elapsed_ms=(time.monotonic() - start) * 1000,
    )
    if result.returned_count != result.requested_count:
        logger.warning(
            "Extraction returned %d of %d requested companies for query %r",
            result.returned_count,
            result.requested_count,
            query,
        )
    await bus.emit(
        EventType.EXTRACTION_COMPLETED,
        {"returned_count": result.returned_count, "requested_count": result.requested_count},
    )
    logger.info("Scout %s finished in %.0fms", bus.scout_id, result.elapsed_ms)
    return result
