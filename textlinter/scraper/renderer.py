"""Page-rendering back-ends.

A *renderer* is the shared resource of a run (one headless browser, or one
HTTP client).  It is entered once with ``async with`` and hands out an
independent :class:`PageContext` per URL so concurrent extractions never share
mutable page state.

Two implementations are provided:

``PlaywrightRenderer``
    Headless Chromium via ``playwright.async_api``.  Waits for network idle,
    so JavaScript-rendered pages are read after they settle.

``HttpRenderer``
    Plain ``httpx`` GET + BeautifulSoup.  No browser install needed; suitable
    for static pages.

Install the browser binary for the Playwright back-end with::

    playwright install chromium
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx
from bs4 import BeautifulSoup

from textlinter.errors import ConfigurationError, ResourceError

logger = logging.getLogger(__name__)

_DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (compatible; TextLinter/1.0; +https://github.com/textlinter)"
    )
}

# Elements whose text is never visible on the rendered page.
_INVISIBLE_TAGS = ["script", "style", "noscript", "template"]

ENGINES = ("playwright", "http")


class PageContext(Protocol):
    """A single page opened by a renderer."""

    async def goto(self, url: str, timeout: float) -> None:
        """Navigate to *url*; *timeout* is in seconds."""

    async def text_of(self, selector: str) -> str | None:
        """Return the visible text of the first *selector* match, or ``None``."""

    async def close(self) -> None:
        """Release the page."""


class Renderer(Protocol):
    """Shared rendering capability; an async context manager."""

    async def __aenter__(self) -> "Renderer": ...

    async def __aexit__(self, *exc_info: Any) -> None: ...

    async def new_page(self) -> PageContext: ...


# ---------------------------------------------------------------------------
# Playwright
# ---------------------------------------------------------------------------

class _PlaywrightPage:
    def __init__(self, context: Any, page: Any) -> None:
        self._context = context
        self._page = page

    async def goto(self, url: str, timeout: float) -> None:
        await self._page.goto(
            url,
            timeout=int(timeout * 1000),
            wait_until="networkidle",
        )

    async def text_of(self, selector: str) -> str | None:
        element = await self._page.query_selector(selector)
        if element is None:
            return None
        return await element.inner_text()

    async def close(self) -> None:
        try:
            await self._page.close()
        finally:
            await self._context.close()


class PlaywrightRenderer:
    """Headless Chromium shared across all pages of a run.

    Playwright is imported lazily so the HTTP back-end and the test suite do
    not need a browser installed.
    """

    def __init__(self, *, headless: bool = True) -> None:
        self.headless = headless
        self._playwright: Any = None
        self._browser: Any = None

    async def __aenter__(self) -> "PlaywrightRenderer":
        try:
            from playwright.async_api import async_playwright  # noqa: PLC0415

            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(headless=self.headless)
        except Exception as exc:
            await self._shutdown()
            raise ResourceError(f"Failed to start browser: {exc}") from exc
        logger.info("Chromium started (headless=%s)", self.headless)
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self._shutdown()

    async def _shutdown(self) -> None:
        try:
            if self._browser is not None:
                await self._browser.close()
        finally:
            self._browser = None
            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None

    async def new_page(self) -> _PlaywrightPage:
        if self._browser is None:
            raise RuntimeError("PlaywrightRenderer used outside 'async with'")
        context = await self._browser.new_context(user_agent=_DEFAULT_HEADERS["User-Agent"])
        try:
            page = await context.new_page()
        except Exception:
            await context.close()
            raise
        return _PlaywrightPage(context, page)


# ---------------------------------------------------------------------------
# HTTP + BeautifulSoup
# ---------------------------------------------------------------------------

class _HttpPage:
    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client
        self._soup: BeautifulSoup | None = None

    async def goto(self, url: str, timeout: float) -> None:
        response = await self._client.get(url, timeout=timeout)
        response.raise_for_status()
        soup = BeautifulSoup(response.text, "html.parser")
        for tag in soup(_INVISIBLE_TAGS):
            tag.decompose()
        self._soup = soup

    async def text_of(self, selector: str) -> str | None:
        if self._soup is None:
            raise RuntimeError("text_of() called before goto()")
        element = self._soup.select_one(selector)
        if element is None:
            return None
        return element.get_text(separator="\n", strip=True)

    async def close(self) -> None:
        self._soup = None


class HttpRenderer:
    """Fetch pages with a single shared ``httpx.AsyncClient``."""

    def __init__(self, *, headers: dict[str, str] | None = None) -> None:
        self.headers = headers or dict(_DEFAULT_HEADERS)
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "HttpRenderer":
        self._client = httpx.AsyncClient(headers=self.headers, follow_redirects=True)
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def new_page(self) -> _HttpPage:
        if self._client is None:
            raise RuntimeError("HttpRenderer used outside 'async with'")
        return _HttpPage(self._client)


def create_renderer(engine: str, *, headless: bool = True) -> Renderer:
    """Return an un-started renderer for *engine* (``"playwright"`` or ``"http"``).

    Raises:
        ConfigurationError: If *engine* is not a known back-end.
    """
    if engine == "playwright":
        return PlaywrightRenderer(headless=headless)
    if engine == "http":
        return HttpRenderer()
    raise ConfigurationError(
        f"Unknown rendering engine {engine!r}. Use: {' | '.join(ENGINES)}"
    )
