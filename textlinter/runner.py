"""High-level runner for an extraction run.

``run_extraction`` wires together the URL loader, the shared renderer, the
group scheduler and the report builder so the CLI (or any other caller) gets
a single call that returns the run's statistics.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from textlinter.errors import ConfigurationError, ResourceError
from textlinter.reports.builder import batch_count, build_reports, format_timestamp
from textlinter.reports.prompt import PROOFREADING_INSTRUCTIONS
from textlinter.reports.writer import write_reports
from textlinter.scheduler import run_in_groups
from textlinter.scraper.extractor import DEFAULT_TIMEOUT, extract_page
from textlinter.scraper.models import ExtractionError, ExtractionResult
from textlinter.scraper.renderer import Renderer
from textlinter.sources import load_urls

logger = logging.getLogger(__name__)


@dataclass
class RunStatistics:
    total_urls: int
    success_count: int
    error_count: int
    report_paths: list[Path] = field(default_factory=list)
    batch_count: int = 0

    @property
    def nothing_to_do(self) -> bool:
        return self.total_urls == 0


async def extract_all(
    renderer: Renderer,
    urls: list[str],
    *,
    concurrency: int,
    timeout: float = DEFAULT_TIMEOUT,
    main_selector: str = "main",
    fallback_selector: str = "body",
) -> tuple[list[ExtractionResult], list[ExtractionError]]:
    """Extract every URL with a started *renderer*, ``concurrency`` at a time."""

    async def worker(url: str, index: int) -> ExtractionResult | ExtractionError:
        return await extract_page(
            renderer,
            url,
            index=index,
            timeout=timeout,
            main_selector=main_selector,
            fallback_selector=fallback_selector,
        )

    return await run_in_groups(urls, concurrency, worker)


async def run_extraction(
    url_file: str | Path,
    output_dir: str | Path,
    *,
    renderer_factory: Callable[[], Renderer],
    concurrency: int = 2,
    batch_size: int = 4,
    timeout: float = DEFAULT_TIMEOUT,
    main_selector: str = "main",
    fallback_selector: str = "body",
    include_prompt: bool = False,
    now: datetime | None = None,
    on_loaded: Callable[[list[str]], None] | None = None,
) -> RunStatistics:
    """Load *url_file*, extract every page and write the reports.

    An empty URL list returns zero statistics without starting the renderer
    or writing any file.  Per-page failures are reported, never raised.

    Args:
        url_file: Newline-delimited URL list.
        output_dir: Directory receiving the Markdown reports.
        renderer_factory: Zero-argument callable returning an un-started
            renderer; it is entered once for the whole run.
        concurrency: Pages processed simultaneously.
        batch_size: Maximum pages per report document.
        timeout: Per-page navigation timeout in seconds.
        main_selector: Preferred content region.
        fallback_selector: Region read when the preferred one is empty.
        include_prompt: Put the proofreading instructions at the top of each
            report that carries extracted text.
        now: Run time used for the filename timestamp (defaults to now).
        on_loaded: Called with the URL list before extraction starts (not
            called when the list is empty).

    Raises:
        ConfigurationError: If the URL list cannot be read, or ``concurrency``
            or ``batch_size`` is less than 1.
        ResourceError: If the renderer cannot be started or the reports
            cannot be written.
    """
    if concurrency < 1:
        raise ConfigurationError(f"concurrency must be >= 1, got {concurrency}")
    if batch_size < 1:
        raise ConfigurationError(f"batch_size must be >= 1, got {batch_size}")

    urls = load_urls(url_file)
    if not urls:
        logger.info("No URLs found in %s; nothing to do", url_file)
        return RunStatistics(total_urls=0, success_count=0, error_count=0)

    logger.info(
        "Found %d URL(s); max concurrent %d, pages per batch %d",
        len(urls), concurrency, batch_size,
    )
    if on_loaded is not None:
        on_loaded(urls)

    async with renderer_factory() as renderer:
        results, errors = await extract_all(
            renderer,
            urls,
            concurrency=concurrency,
            timeout=timeout,
            main_selector=main_selector,
            fallback_selector=fallback_selector,
        )

    moment = now or datetime.now(timezone.utc)
    documents = build_reports(
        results,
        errors,
        batch_size,
        format_timestamp(moment),
        generated_at=moment.strftime("%Y-%m-%d %H:%M:%S %Z").strip(),
        instructions=PROOFREADING_INSTRUCTIONS if include_prompt else None,
    )
    try:
        paths = write_reports(documents, output_dir)
    except OSError as exc:
        raise ResourceError(f"Failed to write reports to {output_dir}: {exc}") from exc

    logger.info(
        "Run complete: %d succeeded, %d failed, %d report file(s)",
        len(results), len(errors), len(paths),
    )
    return RunStatistics(
        total_urls=len(urls),
        success_count=len(results),
        error_count=len(errors),
        report_paths=paths,
        batch_count=batch_count(len(results), batch_size),
    )
