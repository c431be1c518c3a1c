"""Group-synchronous concurrency scheduler.

URLs are processed in consecutive groups of ``concurrency_limit``.  Every
worker of a group is started before any is awaited, and the next group only
starts once the whole group has settled, so at most ``concurrency_limit``
pages are open at any instant however long the URL list is.

Failures are collected, never propagated: one page failing does not cancel
its siblings or any later group.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Awaitable, Callable, Sequence

from textlinter.scraper.extractor import access_error
from textlinter.scraper.models import ExtractionError, ExtractionResult

logger = logging.getLogger(__name__)

Outcome = ExtractionResult | ExtractionError
Worker = Callable[[str, int], Awaitable[Outcome]]


def chunk(items: Sequence[str], size: int) -> list[Sequence[str]]:
    """Split *items* into consecutive slices of *size* (the last may be shorter)."""
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")
    return [items[i:i + size] for i in range(0, len(items), size)]


async def run_in_groups(
    urls: Sequence[str],
    concurrency_limit: int,
    worker: Worker,
) -> tuple[list[ExtractionResult], list[ExtractionError]]:
    """Run *worker* over *urls*, ``concurrency_limit`` at a time.

    Args:
        urls: Page identifiers in input order.
        concurrency_limit: Group size, i.e. the peak number of in-flight workers.
        worker: ``async (url, index) -> ExtractionResult | ExtractionError``.
            A worker that raises anyway is recorded as an ``access error``.

    Returns:
        ``(results, errors)``, each ordered by input index.  Together they
        hold exactly one outcome per URL.

    Raises:
        ValueError: If ``concurrency_limit`` is less than 1.
    """
    if concurrency_limit < 1:
        raise ValueError(f"concurrency_limit must be >= 1, got {concurrency_limit}")

    async def settle(url: str, index: int) -> object:
        # Covers workers that raise before handing back an awaitable too.
        try:
            return await worker(url, index)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Worker raised for %s: %s", url, exc)
            return access_error(url, exc, index)

    results: list[ExtractionResult] = []
    errors: list[ExtractionError] = []
    groups = chunk(urls, concurrency_limit)

    offset = 0
    for number, group in enumerate(groups, start=1):
        logger.info("Processing group %d/%d: %s", number, len(groups), ", ".join(group))
        outcomes = await asyncio.gather(
            *(settle(url, offset + i) for i, url in enumerate(group))
        )

        # gather() returns outcomes in argument order, so appending here
        # keeps both lists in input order.
        for i, (url, outcome) in enumerate(zip(group, outcomes)):
            index = offset + i
            if isinstance(outcome, ExtractionResult):
                results.append(replace(outcome, index=index))
            elif isinstance(outcome, ExtractionError):
                errors.append(replace(outcome, index=index))
            else:
                raise TypeError(
                    f"worker returned {type(outcome).__name__} for {url!r}; "
                    "expected ExtractionResult or ExtractionError"
                )
        offset += len(group)

    return results, errors
