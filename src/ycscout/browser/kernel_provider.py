"""Kernel hosted-browser provider.

Provisions Chromium instances on Kernel's cloud and exposes their CDP
websocket URL. Each live browser occupies one slot in the account's
concurrent-session quota until ``delete()`` is called.
"""

from __future__ import annotations

import logging

from kernel import AsyncKernel

from ycscout.browser.base import BrowserProvider, BrowserSession

logger = logging.getLogger(__name__)


class KernelBrowserProvider(BrowserProvider):
    """``BrowserProvider`` backed by the Kernel API.

    Args:
        api_key: Kernel API key.
        headless: Launch without a GUI (no live view).
        stealth: Enable Kernel's anti-bot stealth mode.
        timeout_seconds: Idle timeout after which Kernel reclaims the browser.
    """

    def __init__(
        self,
        api_key: str,
        *,
        headless: bool = True,
        stealth: bool = False,
        timeout_seconds: int = 300,
    ) -> None:
        self.headless = headless
        self.stealth = stealth
        self.timeout_seconds = timeout_seconds
        self._client = AsyncKernel(api_key=api_key)

    async def create(self) -> BrowserSession:
        browser = await self._client.browsers.create(
            headless=self.headless,
            stealth=self.stealth,
            timeout_seconds=self.timeout_seconds,
        )
        logger.info("Kernel browser created: session_id=%s", browser.session_id)
        return BrowserSession(
            session_id=browser.session_id,
            cdp_ws_url=browser.cdp_ws_url,
            live_view_url=getattr(browser, "browser_live_view_url", None) or "",
        )

    async def delete(self, session_id: str) -> None:
        await self._client.browsers.delete_by_id(session_id)
        logger.info("Kernel browser deleted: session_id=%s", session_id)

    async def aclose(self) -> None:
        await self._client.close()
