"""Abstract browser-provider and extraction-client interfaces."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Callable, TypeVar

from pydantic import BaseModel

SchemaT = TypeVar("SchemaT", bound=BaseModel)


@dataclass
class BrowserSession:
    """Handle for a provisioned remote browser."""

    session_id: str
    cdp_ws_url: str
    live_view_url: str = ""


class BrowserProvider(abc.ABC):
    """Provisions and releases remote headless browsers.

    Every successful ``create()`` must be paired with exactly one
    ``delete()``; hosted providers count live sessions against a
    concurrency quota.
    """

    @abc.abstractmethod
    async def create(self) -> BrowserSession:
        """Provision a new browser and return its session handle."""

    @abc.abstractmethod
    async def delete(self, session_id: str) -> None:
        """Release the browser identified by *session_id*."""

    async def aclose(self) -> None:
        """Clean up provider resources. Override if needed."""


class ExtractionClient(abc.ABC):
    """LLM-backed automation client attached to one browser session."""

    @abc.abstractmethod
    async def init(self) -> None:
        """Connect to the browser and prepare the page."""

    @abc.abstractmethod
    async def goto(self, url: str) -> None:
        """Navigate the active page to *url*."""

    @abc.abstractmethod
    async def wait(self, milliseconds: int) -> None:
        """Sleep on the page for a fixed number of milliseconds."""

    @abc.abstractmethod
    async def extract(self, instruction: str, schema: type[SchemaT]) -> SchemaT:
        """Run one natural-language extraction against the current page.

        Args:
            instruction: What the model should find and how to navigate for it.
            schema: Pydantic model the result must validate against.

        Returns:
            An instance of *schema*.
        """

    @abc.abstractmethod
    async def close(self) -> None:
        """Detach from the browser and release client resources."""


ExtractionClientFactory = Callable[[BrowserSession], ExtractionClient]
"""Builds an ``ExtractionClient`` for a freshly provisioned session."""
