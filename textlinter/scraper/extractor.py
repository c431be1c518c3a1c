"""Per-page text extraction.

:func:`extract_page` is the unit of work the scheduler fans out.  It never
raises for a page-level fault: every outcome is returned as either an
:class:`ExtractionResult` or an :class:`ExtractionError`.
"""

from __future__ import annotations

import logging

from textlinter.scraper.models import ExtractionError, ExtractionResult, count_words
from textlinter.scraper.renderer import PageContext, Renderer

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
NO_CONTENT_REASON = "no content found"
ACCESS_ERROR_PREFIX = "access error: "


def access_error(url: str, exc: BaseException, index: int = 0) -> ExtractionError:
    """Build the error record for a fault raised while reading *url*."""
    return ExtractionError(url=url, reason=f"{ACCESS_ERROR_PREFIX}{exc}", index=index)


async def _read_text(page: PageContext, main_selector: str, fallback_selector: str) -> str | None:
    """Return the main region's text, or the fallback region's when main is blank."""
    text = await page.text_of(main_selector)
    if not text or not text.strip():
        text = await page.text_of(fallback_selector)
    return text


async def extract_page(
    renderer: Renderer,
    url: str,
    *,
    index: int = 0,
    timeout: float = DEFAULT_TIMEOUT,
    main_selector: str = "main",
    fallback_selector: str = "body",
) -> ExtractionResult | ExtractionError:
    """Open *url* in a fresh page and return its visible text.

    The ``main_selector`` region is preferred; when it is missing or blank
    the ``fallback_selector`` region is read instead.  The page is always
    closed before returning.

    Args:
        renderer: A started renderer (inside its ``async with`` block).
        url: Page to read.
        index: 0-based position of *url* in the input list.
        timeout: Navigation timeout in seconds.
        main_selector: CSS selector of the preferred content region.
        fallback_selector: CSS selector read when the preferred one is empty.

    Returns:
        ``ExtractionResult`` on success, ``ExtractionError`` with reason
        ``"no content found"`` or ``"access error: <cause>"`` otherwise.
    """
    logger.info("Processing: %s", url)
    page: PageContext | None = None
    try:
        page = await renderer.new_page()
        await page.goto(url, timeout)
        text = await _read_text(page, main_selector, fallback_selector)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Extraction failed for %s: %s", url, exc)
        return access_error(url, exc, index)
    finally:
        if page is not None:
            try:
                await page.close()
            except Exception as exc:  # noqa: BLE001
                logger.warning("Failed to close page for %s: %s", url, exc)

    if not text or not text.strip():
        logger.warning("No content found at %s", url)
        return ExtractionError(url=url, reason=NO_CONTENT_REASON, index=index)

    return ExtractionResult(url=url, text=text, word_count=count_words(text), index=index)
