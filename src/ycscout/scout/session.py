"""Scoped acquisition of a remote browser plus its extraction client.

``browser_session`` guarantees that a provisioned browser is released on
every exit path (success, error, timeout, cancellation). Cleanup is
best-effort: each step is attempted independently, failures are logged and
emitted as ``CLEANUP_FAILED`` events, and nothing raised during cleanup
replaces the exception (or result) of the body.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from ycscout.browser.base import BrowserProvider, BrowserSession, ExtractionClient, ExtractionClientFactory
from ycscout.monitoring.event_bus import EventBus, EventType

logger = logging.getLogger(__name__)


@asynccontextmanager
async def browser_session(
    provider: BrowserProvider,
    client_factory: ExtractionClientFactory,
    bus: EventBus | None = None,
    *,
    deadline: float | None = None,
) -> AsyncIterator[tuple[BrowserSession, ExtractionClient]]:
    """Provision a browser, attach a client, and tear both down on exit.

    The client is yielded uninitialised; ``init()`` is the caller's first
    step so that an init failure still goes through cleanup.

    Args:
        provider: Where to provision the browser.
        client_factory: Builds the extraction client for the new session.
        bus: Optional event bus for lifecycle and cleanup events.
        deadline: Event-loop time after which ``create()`` is abandoned with
            ``TimeoutError``. Cleanup is never bounded by it.

    Yields:
        ``(session, client)``.
    """
    bus = bus or EventBus()

    # A failed create() leaves nothing to release.
    async with asyncio.timeout_at(deadline):
        session = await provider.create()
    await bus.emit(EventType.SESSION_CREATED, {"session_id": session.session_id})

    client: ExtractionClient | None = None
    try:
        client = client_factory(session)
        yield session, client
    finally:
        # Nested so that delete still runs if close() is cancelled.
        try:
            if client is not None:
                await _close_client(client, session, bus)
        finally:
            await _delete_session(provider, session, bus)


async def _close_client(client: ExtractionClient, session: BrowserSession, bus: EventBus) -> None:
    try:
        await client.close()
    except Exception as exc:
        logger.warning("Failed to close extraction client for session %s", session.session_id, exc_info=True)
        await bus.emit(
            EventType.CLEANUP_FAILED,
            {"step": "client_close", "session_id": session.session_id, "error": str(exc)},
        )


async def _delete_session(provider: BrowserProvider, session: BrowserSession, bus: EventBus) -> None:
    try:
        await provider.delete(session.session_id)
    except Exception as exc:
        logger.warning("Failed to delete browser session %s", session.session_id, exc_info=True)
        await bus.emit(
            EventType.CLEANUP_FAILED,
            {"step": "session_delete", "session_id": session.session_id, "error": str(exc)},
        )
    else:
        await bus.emit(EventType.SESSION_RELEASED, {"session_id": session.session_id})
