"""Stagehand extraction client.

Attaches Stagehand to an already-running remote browser over CDP and
delegates DOM understanding and element targeting to the hosted model.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from stagehand import Stagehand, StagehandConfig

from ycscout.browser.base import ExtractionClient, SchemaT

logger = logging.getLogger(__name__)


class StagehandExtractionClient(ExtractionClient):
    """``ExtractionClient`` backed by Stagehand in LOCAL mode over CDP.

    Args:
        cdp_url: CDP websocket URL of the remote browser.
        model_name: Model used for extraction (e.g. ``gpt-4o``).
        model_api_key: API key for that model's provider.
        dom_settle_timeout_ms: How long Stagehand waits for the DOM to settle.
        verbose: Stagehand log verbosity (0-2).
    """

    def __init__(
        self,
        cdp_url: str,
        *,
        model_name: str,
        model_api_key: str,
        dom_settle_timeout_ms: int = 30_000,
        verbose: int = 1,
    ) -> None:
        self.cdp_url = cdp_url
        self.model_name = model_name
        config = StagehandConfig(
            env="LOCAL",
            model_name=model_name,
            model_api_key=model_api_key,
            dom_settle_timeout_ms=dom_settle_timeout_ms,
            verbose=verbose,
            local_browser_launch_options={"cdp_url": cdp_url},
        )
        self._stagehand = Stagehand(config)

    @property
    def _page(self) -> Any:
        page = self._stagehand.page
        if page is None:
            raise RuntimeError("Stagehand page is not available; call init() first")
        return page

    async def init(self) -> None:
        await self._stagehand.init()

    async def goto(self, url: str) -> None:
        logger.debug("Navigating to %s", url)
        await self._page.goto(url)

    async def wait(self, milliseconds: int) -> None:
        await self._page.wait_for_timeout(milliseconds)

    async def extract(self, instruction: str, schema: type[SchemaT]) -> SchemaT:
        start = time.monotonic()
        raw = await self._page.extract(instruction=instruction, schema=schema)
        latency_ms = (time.monotonic() - start) * 1000
        logger.info("Stagehand extract finished in %.0fms (model=%s)", latency_ms, self.model_name)
        return _coerce(raw, schema)

    async def close(self) -> None:
        await self._stagehand.close()


def _coerce(raw: Any, schema: type[SchemaT]) -> SchemaT:
    """Validate whatever Stagehand returned against *schema*.

    Depending on the SDK version ``extract`` yields the schema instance
    itself, another pydantic model, or a wrapper with a ``data`` payload.
    """
    if isinstance(raw, schema):
        return raw
    payload = getattr(raw, "data", raw)
    if hasattr(payload, "model_dump"):
        payload = payload.model_dump()
    return schema.model_validate(payload)
