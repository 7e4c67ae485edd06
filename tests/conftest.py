"""YC Scout test configuration: shared fixtures and recording fakes."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from ycscout.browser.base import BrowserProvider, BrowserSession, ExtractionClient, SchemaT
from ycscout.monitoring.event_bus import InMemorySink

# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------

FINTECH_COMPANIES: list[dict[str, Any]] = [
    {
        "name": "Brex",
        "description": "Corporate cards and spend management for startups.",
        "website": "https://www.brex.com",
        "location": "San Francisco, CA, USA",
        "isPublic": False,
        "batch": "Winter 2017",
    },
    {
        "name": "Plaid",
        "description": "APIs that connect apps to users' bank accounts.",
        "website": "https://plaid.com",
        "location": None,
        "isPublic": None,
        "batch": None,
    },
]


# ---------------------------------------------------------------------------
# Async backend
# ---------------------------------------------------------------------------


@pytest.fixture()
def anyio_backend() -> str:
    """Run ``@pytest.mark.anyio`` tests on asyncio only (the code is asyncio-based)."""
    return "asyncio"


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_settings_cache(monkeypatch: pytest.MonkeyPatch):
    """Clear the settings LRU cache and provide dummy credentials."""
    from ycscout.settings.config import get_settings

    monkeypatch.delenv("YCSCOUT_ENV", raising=False)
    monkeypatch.setenv("YCSCOUT_EXTRACTION__MODEL_API_KEY", "test-model-key")
    monkeypatch.setenv("YCSCOUT_KERNEL__API_KEY", "test-kernel-key")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def settings():
    """A fresh ``Settings`` instance with no settle delay and a generous timeout."""
    from ycscout.settings.config import Settings

    return Settings(scout={"settle_ms": 0, "timeout_sec": 10})


# ---------------------------------------------------------------------------
# Recording fakes
# ---------------------------------------------------------------------------


class FakeBrowserProvider(BrowserProvider):
    """In-memory ``BrowserProvider`` that records every call.

    Set ``create_error`` / ``delete_error`` to inject failures and
    ``create_delay`` to make provisioning hang.
    """

    def __init__(self) -> None:
        self.create_calls = 0
        self.deleted: list[str] = []
        self.create_error: Exception | None = None
        self.delete_error: Exception | None = None
        self.create_delay: float = 0.0
        self.closed = False

    async def create(self) -> BrowserSession:
        self.create_calls += 1
        if self.create_delay:
            await asyncio.sleep(self.create_delay)
        if self.create_error is not None:
            raise self.create_error
        return BrowserSession(
            session_id=f"sess-{self.create_calls}",
            cdp_ws_url=f"wss://browsers.example.test/sess-{self.create_calls}/cdp",
        )

    async def delete(self, session_id: str) -> None:
        self.deleted.append(session_id)
        if self.delete_error is not None:
            raise self.delete_error

    async def aclose(self) -> None:
        self.closed = True

    @property
    def call_count(self) -> int:
        return self.create_calls + len(self.deleted)


class FakeExtractionClient(ExtractionClient):
    """``ExtractionClient`` that replays canned companies.

    Args:
        companies: Raw company dicts returned by ``extract``.
        fail_at: Method name (``init``, ``goto``, ``extract``) that should raise *error*.
        error: Exception raised at *fail_at*.
        close_error: Exception raised by ``close``.
        extract_delay: Seconds ``extract`` sleeps before returning.
        close_delay: Seconds ``close`` sleeps before returning.
    """

    def __init__(
        self,
        session: BrowserSession,
        companies: list[dict[str, Any]],
        *,
        fail_at: str | None = None,
        error: Exception | None = None,
        close_error: Exception | None = None,
        extract_delay: float = 0.0,
        close_delay: float = 0.0,
    ) -> None:
        self.session = session
        self.companies = companies
        self.fail_at = fail_at
        self.error = error or RuntimeError(f"{fail_at} failed")
        self.close_error = close_error
        self.extract_delay = extract_delay
        self.close_delay = close_delay
        self.calls: list[str] = []
        self.instructions: list[str] = []
        self.urls: list[str] = []

    def _maybe_fail(self, step: str) -> None:
        self.calls.append(step)
        if self.fail_at == step:
            raise self.error

    async def init(self) -> None:
        self._maybe_fail("init")

    async def goto(self, url: str) -> None:
        self.urls.append(url)
        self._maybe_fail("goto")

    async def wait(self, milliseconds: int) -> None:
        self._maybe_fail("wait")

    async def extract(self, instruction: str, schema: type[SchemaT]) -> SchemaT:
        self.instructions.append(instruction)
        self._maybe_fail("extract")
        if self.extract_delay:
            await asyncio.sleep(self.extract_delay)
        return schema.model_validate({"companies": self.companies})

    async def close(self) -> None:
        self.calls.append("close")
        if self.close_delay:
            await asyncio.sleep(self.close_delay)
        if self.close_error is not None:
            raise self.close_error


class FakeClientFactory:
    """Callable ``ExtractionClientFactory`` that records the clients it builds."""

    def __init__(self) -> None:
        self.companies: list[dict[str, Any]] = list(FINTECH_COMPANIES)
        self.fail_at: str | None = None
        self.error: Exception | None = None
        self.close_error: Exception | None = None
        self.extract_delay: float = 0.0
        self.close_delay: float = 0.0
        self.clients: list[FakeExtractionClient] = []

    def __call__(self, session: BrowserSession) -> FakeExtractionClient:
        client = FakeExtractionClient(
            session,
            self.companies,
            fail_at=self.fail_at,
            error=self.error,
            close_error=self.close_error,
            extract_delay=self.extract_delay,
            close_delay=self.close_delay,
        )
        self.clients.append(client)
        return client

    @property
    def client(self) -> FakeExtractionClient:
        """The most recently built client."""
        return self.clients[-1]


@pytest.fixture()
def fake_provider() -> FakeBrowserProvider:
    return FakeBrowserProvider()


@pytest.fixture()
def fake_client_factory() -> FakeClientFactory:
    return FakeClientFactory()


@pytest.fixture()
def event_sink() -> InMemorySink:
    return InMemorySink()


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests that exercise the HTTP app end to end")
