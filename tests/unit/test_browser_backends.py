"""Unit tests for the Kernel provider, the Stagehand client, and their factories.

The SDK entry points are patched so no network or browser is needed.
"""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from ycscout.browser.base import BrowserSession
from ycscout.models.company import CompanyList

_SESSION = BrowserSession(session_id="kb-1", cdp_ws_url="wss://kernel.test/kb-1/cdp")


# ===================================================================
# Kernel provider
# ===================================================================


class TestKernelBrowserProvider:
    @pytest.fixture()
    def kernel_client(self):
        client = MagicMock()
        client.browsers.create = AsyncMock(
            return_value=SimpleNamespace(
                session_id="kb-1",
                cdp_ws_url="wss://kernel.test/kb-1/cdp",
                browser_live_view_url=None,
            )
        )
        client.browsers.delete_by_id = AsyncMock(return_value=None)
        client.close = AsyncMock(return_value=None)
        return client

    @pytest.mark.anyio
    async def test_create_maps_session(self, kernel_client) -> None:
        from ycscout.browser.kernel_provider import KernelBrowserProvider

        with patch("ycscout.browser.kernel_provider.AsyncKernel", return_value=kernel_client) as ctor:
            provider = KernelBrowserProvider("k-key", stealth=True, timeout_seconds=120)
            session = await provider.create()

        ctor.assert_called_once_with(api_key="k-key")
        kernel_client.browsers.create.assert_awaited_once_with(headless=True, stealth=True, timeout_seconds=120)
        assert session == BrowserSession(session_id="kb-1", cdp_ws_url="wss://kernel.test/kb-1/cdp", live_view_url="")

    @pytest.mark.anyio
    async def test_delete_and_close(self, kernel_client) -> None:
        from ycscout.browser.kernel_provider import KernelBrowserProvider

        with patch("ycscout.browser.kernel_provider.AsyncKernel", return_value=kernel_client):
            provider = KernelBrowserProvider("k-key")
            await provider.delete("kb-1")
            await provider.aclose()

        kernel_client.browsers.delete_by_id.assert_awaited_once_with("kb-1")
        kernel_client.close.assert_awaited_once()


# ===================================================================
# Stagehand client
# ===================================================================


@pytest.fixture()
def stagehand_mocks():
    page = MagicMock()
    page.goto = AsyncMock()
    page.wait_for_timeout = AsyncMock()
    page.extract = AsyncMock()
    instance = MagicMock()
    instance.page = page
    instance.init = AsyncMock()
    instance.close = AsyncMock()
    with (
        patch("ycscout.browser.stagehand_client.Stagehand", return_value=instance) as ctor,
        patch("ycscout.browser.stagehand_client.StagehandConfig") as config_cls,
    ):
        yield SimpleNamespace(ctor=ctor, config_cls=config_cls, instance=instance, page=page)


def _client(**overrides):
    from ycscout.browser.stagehand_client import StagehandExtractionClient

    kwargs = {"model_name": "gpt-4o", "model_api_key": "sk-test"}
    kwargs.update(overrides)
    return StagehandExtractionClient(_SESSION.cdp_ws_url, **kwargs)


class TestStagehandExtractionClient:
    def test_config_carries_cdp_url_and_credentials(self, stagehand_mocks) -> None:
        _client(dom_settle_timeout_ms=10_000, verbose=0)
        stagehand_mocks.config_cls.assert_called_once_with(
            env="LOCAL",
            model_name="gpt-4o",
            model_api_key="sk-test",
            dom_settle_timeout_ms=10_000,
            verbose=0,
            local_browser_launch_options={"cdp_url": _SESSION.cdp_ws_url},
        )
        stagehand_mocks.ctor.assert_called_once_with(stagehand_mocks.config_cls.return_value)

    @pytest.mark.anyio
    async def test_lifecycle_delegates_to_sdk(self, stagehand_mocks) -> None:
        client = _client()
        await client.init()
        await client.goto("https://www.ycombinator.com/companies")
        await client.wait(2000)
        await client.close()
        stagehand_mocks.instance.init.assert_awaited_once()
        stagehand_mocks.page.goto.assert_awaited_once_with("https://www.ycombinator.com/companies")
        stagehand_mocks.page.wait_for_timeout.assert_awaited_once_with(2000)
        stagehand_mocks.instance.close.assert_awaited_once()

    @pytest.mark.anyio
    async def test_extract_passes_through_schema_instance(self, stagehand_mocks) -> None:
        expected = CompanyList.model_validate({"companies": [{"name": "A", "description": "B", "website": "C"}]})
        stagehand_mocks.page.extract.return_value = expected
        result = await _client().extract("find things", CompanyList)
        assert result is expected
        stagehand_mocks.page.extract.assert_awaited_once_with(instruction="find things", schema=CompanyList)

    @pytest.mark.anyio
    async def test_extract_validates_wrapped_payload(self, stagehand_mocks) -> None:
        stagehand_mocks.page.extract.return_value = SimpleNamespace(
            data={"companies": [{"name": "A", "description": "B", "website": "C", "is_public": True}]}
        )
        result = await _client().extract("find things", CompanyList)
        assert isinstance(result, CompanyList)
        assert result.companies[0].is_public is True

    @pytest.mark.anyio
    async def test_page_missing_before_init(self, stagehand_mocks) -> None:
        stagehand_mocks.instance.page = None
        with pytest.raises(RuntimeError, match="init"):
            await _client().goto("https://example.com")


# ===================================================================
# Factories
# ===================================================================


class TestFactories:
    def test_browser_provider_uses_kernel_settings(self, settings) -> None:
        from ycscout.browser.factory import create_browser_provider

        with patch("ycscout.browser.kernel_provider.AsyncKernel") as ctor:
            provider = create_browser_provider(settings)
        ctor.assert_called_once_with(api_key="test-kernel-key")
        assert provider.headless is True
        assert provider.timeout_seconds == settings.kernel.timeout_seconds

    def test_extraction_client_gets_injected_key(self, settings, stagehand_mocks) -> None:
        from ycscout.browser.factory import extraction_client_factory

        client = extraction_client_factory(settings)(_SESSION)
        assert client.cdp_url == _SESSION.cdp_ws_url
        kwargs = stagehand_mocks.config_cls.call_args.kwargs
        assert kwargs["model_api_key"] == "test-model-key"
        assert kwargs["model_name"] == settings.extraction.model_name
