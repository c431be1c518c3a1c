"""Tests for the rendering back-ends.

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so the HTTP back-end
  makes no real network calls.
- Playwright is *not* launched; ``async_playwright`` is patched to simulate a
  start failure, and page objects are ``AsyncMock`` stand-ins.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
import respx

from textlinter.errors import ConfigurationError, ResourceError
from textlinter.scraper.extractor import extract_page
from textlinter.scraper.models import ExtractionError, ExtractionResult
from textlinter.scraper.renderer import (
    HttpRenderer,
    PlaywrightRenderer,
    _PlaywrightPage,
    create_renderer,
)

_SIMPLE_HTML = """\
<!DOCTYPE html>
<html>
<head><title>Test Page</title><style>.a{color:red}</style></head>
<body>
  <nav>Site navigation</nav>
  <main>
    <p>This is the main content of the test page.</p>
    <script>alert('x')</script>
  </main>
</body>
</html>
"""

_NO_MAIN_HTML = "<html><body><p>Body text only.</p></body></html>"


class TestCreateRenderer:
    def test_playwright_engine(self) -> None:
        renderer = create_renderer("playwright", headless=False)
        assert isinstance(renderer, PlaywrightRenderer)
        assert renderer.headless is False

    def test_http_engine(self) -> None:
        assert isinstance(create_renderer("http"), HttpRenderer)

    def test_unknown_engine_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            create_renderer("lynx")


class TestHttpRenderer:
    @respx.mock
    async def test_reads_main_region_without_scripts(self) -> None:
        respx.get("https://example.com/").mock(
            return_value=httpx.Response(200, text=_SIMPLE_HTML)
        )
        async with HttpRenderer() as renderer:
            page = await renderer.new_page()
            await page.goto("https://example.com/", 30.0)
            text = await page.text_of("main")
            await page.close()

        assert "main content of the test page" in text
        assert "alert" not in text
        assert "Site navigation" not in text

    @respx.mock
    async def test_missing_selector_returns_none(self) -> None:
        respx.get("https://example.com/").mock(
            return_value=httpx.Response(200, text=_NO_MAIN_HTML)
        )
        async with HttpRenderer() as renderer:
            page = await renderer.new_page()
            await page.goto("https://example.com/", 30.0)
            assert await page.text_of("main") is None
            assert await page.text_of("body") == "Body text only."

    @respx.mock
    async def test_extract_page_falls_back_to_body(self) -> None:
        respx.get("https://example.com/").mock(
            return_value=httpx.Response(200, text=_NO_MAIN_HTML)
        )
        async with HttpRenderer() as renderer:
            outcome = await extract_page(renderer, "https://example.com/")

        assert isinstance(outcome, ExtractionResult)
        assert outcome.text == "Body text only."
        assert outcome.word_count == 3

    @respx.mock
    async def test_http_error_becomes_access_error(self) -> None:
        respx.get("https://example.com/missing").mock(
            return_value=httpx.Response(404, text="Not Found")
        )
        async with HttpRenderer() as renderer:
            outcome = await extract_page(renderer, "https://example.com/missing")

        assert isinstance(outcome, ExtractionError)
        assert outcome.reason.startswith("access error:")
        assert "404" in outcome.reason

    @respx.mock
    async def test_connection_error_becomes_access_error(self) -> None:
        respx.get("https://down.example.com/").mock(
            side_effect=httpx.ConnectError("connection refused")
        )
        async with HttpRenderer() as renderer:
            outcome = await extract_page(renderer, "https://down.example.com/")

        assert outcome.reason == "access error: connection refused"

    async def test_new_page_outside_context_raises(self) -> None:
        with pytest.raises(RuntimeError):
            await HttpRenderer().new_page()

    async def test_client_closed_on_exit(self) -> None:
        renderer = HttpRenderer()
        async with renderer:
            client = renderer._client
        assert client.is_closed


class TestPlaywrightRenderer:
    async def test_start_failure_raises_resource_error(self) -> None:
        with patch(
            "playwright.async_api.async_playwright",
            side_effect=RuntimeError("Executable doesn't exist"),
        ):
            with pytest.raises(ResourceError) as excinfo:
                async with PlaywrightRenderer():
                    pass

        assert "Executable doesn't exist" in str(excinfo.value)

    async def test_new_page_outside_context_raises(self) -> None:
        with pytest.raises(RuntimeError):
            await PlaywrightRenderer().new_page()


class TestPlaywrightPage:
    def _page(self, element=None):
        context = MagicMock()
        context.close = AsyncMock()
        page = MagicMock()
        page.goto = AsyncMock()
        page.close = AsyncMock()
        page.query_selector = AsyncMock(return_value=element)
        return _PlaywrightPage(context, page), context, page

    async def test_goto_waits_for_network_idle_in_ms(self) -> None:
        wrapper, _, page = self._page()
        await wrapper.goto("https://example.com/", 30.0)
        page.goto.assert_awaited_once_with(
            "https://example.com/", timeout=30000, wait_until="networkidle"
        )

    async def test_text_of_reads_inner_text(self) -> None:
        element = MagicMock()
        element.inner_text = AsyncMock(return_value="Visible text")
        wrapper, _, _ = self._page(element)
        assert await wrapper.text_of("main") == "Visible text"

    async def test_text_of_missing_element_returns_none(self) -> None:
        wrapper, _, _ = self._page(None)
        assert await wrapper.text_of("main") is None

    async def test_close_releases_page_and_context(self) -> None:
        wrapper, context, page = self._page()
        await wrapper.close()
        page.close.assert_awaited_once()
        context.close.assert_awaited_once()

    async def test_context_closed_even_if_page_close_fails(self) -> None:
        wrapper, context, page = self._page()
        page.close.side_effect = RuntimeError("target closed")
        with pytest.raises(RuntimeError):
            await wrapper.close()
        context.close.assert_awaited_once()
