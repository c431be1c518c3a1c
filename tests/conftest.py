"""Shared fakes for the extraction tests.

``FakeRenderer`` implements the renderer protocol without a browser.  Each
URL maps to either a ``{selector: text}`` dict or an exception raised by
``goto``.  It records how many pages are open at once so concurrency limits
can be asserted.
"""

from __future__ import annotations

import asyncio
from typing import Any

import pytest


class FakePage:
    def __init__(self, owner: "FakeRenderer") -> None:
        self.owner = owner
        self.regions: dict[str, str] = {}
        self.closed = False

    async def goto(self, url: str, timeout: float) -> None:
        self.owner.visited.append(url)
        self.owner.timeouts.append(timeout)
        await asyncio.sleep(self.owner.delay)
        page = self.owner.pages.get(url, {})
        if isinstance(page, BaseException):
            raise page
        self.regions = page

    async def text_of(self, selector: str) -> str | None:
        return self.regions.get(selector)

    async def close(self) -> None:
        self.closed = True
        self.owner.open_pages -= 1


class FakeRenderer:
    def __init__(
        self,
        pages: dict[str, Any] | None = None,
        *,
        delay: float = 0.0,
        start_error: BaseException | None = None,
    ) -> None:
        self.pages = pages or {}
        self.delay = delay
        self.start_error = start_error
        self.visited: list[str] = []
        self.timeouts: list[float] = []
        self.created: list[FakePage] = []
        self.open_pages = 0
        self.peak_open = 0
        self.entered = 0
        self.exited = 0

    async def __aenter__(self) -> "FakeRenderer":
        if self.start_error is not None:
            raise self.start_error
        self.entered += 1
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.exited += 1

    async def new_page(self) -> FakePage:
        self.open_pages += 1
        self.peak_open = max(self.peak_open, self.open_pages)
        page = FakePage(self)
        self.created.append(page)
        return page


@pytest.fixture
def fake_renderer():
    """Factory fixture: ``fake_renderer(pages, delay=..., start_error=...)``."""
    return FakeRenderer


@pytest.fixture
def url_file(tmp_path):
    """Factory fixture writing a URL list and returning its path."""

    def _write(*lines: str):
        path = tmp_path / "urls.txt"
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
