"""textlinter CLI — entry-point for extraction runs.

Usage:
    python cli/main.py --help

Commands:
    run      → extract every URL in the list and write Markdown reports
    extract  → extract a single page and print its text
    prompt   → extract a single page and print the proofreading request
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from textlinter.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
import logging

import typer

from textlinter.config import settings
from textlinter.errors import TextLinterError
from textlinter.reports.prompt import build_prompt
from textlinter.runner import run_extraction
from textlinter.scraper.extractor import extract_page
from textlinter.scraper.models import ExtractionError, ExtractionResult
from textlinter.scraper.renderer import ENGINES, create_renderer

app = typer.Typer(
    name="textlinter",
    help="Extract visible web page text into batched Markdown reports.",
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _check_engine(engine: str) -> str:
    if engine not in ENGINES:
        raise typer.BadParameter(f"Use: {' | '.join(ENGINES)}")
    return engine


async def _extract_one(
    url: str, engine: str, headless: bool, timeout: float
) -> ExtractionResult | ExtractionError:
    async with create_renderer(engine, headless=headless) as renderer:
        return await extract_page(
            renderer,
            url,
            timeout=timeout,
            main_selector=settings.main_selector,
            fallback_selector=settings.fallback_selector,
        )


def _extract_or_exit(url: str, engine: str, headed: bool, timeout: float) -> ExtractionResult:
    try:
        outcome = asyncio.run(_extract_one(url, engine, not headed, timeout))
    except TextLinterError as exc:
        typer.echo(f"❌ Error: {exc}", err=True)
        raise typer.Exit(code=1)

    if isinstance(outcome, ExtractionError):
        typer.echo(f"❌ {outcome.url}: {outcome.reason}", err=True)
        raise typer.Exit(code=1)
    return outcome


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------
@app.command("run")
def run(
    urls: Path = typer.Option(settings.url_file, "--urls", help="Newline-delimited URL list."),
    output: Path = typer.Option(settings.output_dir, "--output", help="Report directory."),
    concurrency: int = typer.Option(
        settings.max_concurrent, "--concurrency", min=1, help="Pages processed at once."
    ),
    batch_size: int = typer.Option(
        settings.pages_per_batch, "--batch-size", min=1, help="Maximum pages per report file."
    ),
    timeout: float = typer.Option(
        settings.page_timeout, "--timeout", min=0.1, help="Per-page timeout in seconds."
    ),
    engine: str = typer.Option(
        settings.engine, "--engine", callback=_check_engine, help="Renderer: playwright | http."
    ),
    headed: bool = typer.Option(
        not settings.headless, "--headed", help="Show the browser window."
    ),
    with_prompt: bool = typer.Option(
        False, "--with-prompt", help="Add the proofreading instructions to each report."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress."),
) -> None:
    """Extract every URL in the list and write Markdown reports."""
    _configure_logging(verbose)
    typer.echo("🔍 Web text extraction starting …")

    def announce(loaded: list[str]) -> None:
        typer.echo(f"📋 Found {len(loaded)} URL(s) to process")
        typer.echo(f"⚙️  Max concurrent processing: {concurrency}")
        typer.echo(f"⚙️  Pages per batch: {batch_size}")

    try:
        stats = asyncio.run(
            run_extraction(
                urls,
                output,
                renderer_factory=lambda: create_renderer(engine, headless=not headed),
                concurrency=concurrency,
                batch_size=batch_size,
                timeout=timeout,
                main_selector=settings.main_selector,
                fallback_selector=settings.fallback_selector,
                include_prompt=with_prompt,
                on_loaded=announce,
            )
        )
    except TextLinterError as exc:
        typer.echo(f"❌ Error: {exc}", err=True)
        raise typer.Exit(code=1)

    if stats.nothing_to_do:
        typer.echo(f"❌ No URLs found in {urls} — nothing to do.")
        return

    typer.echo(f"\n✅ Generated {len(stats.report_paths)} report file(s):")
    for path in stats.report_paths:
        typer.echo(f"   - {path}")
    typer.echo(
        f"\n📊 Succeeded: {stats.success_count}  Errors: {stats.error_count}"
        f"  Batches: {stats.batch_count}"
    )


# ---------------------------------------------------------------------------
# Single-page commands
# ---------------------------------------------------------------------------
@app.command("extract")
def extract(
    url: str = typer.Option(..., help="URL to extract."),
    engine: str = typer.Option(
        settings.engine, "--engine", callback=_check_engine, help="Renderer: playwright | http."
    ),
    headed: bool = typer.Option(not settings.headless, "--headed", help="Show the browser window."),
    timeout: float = typer.Option(settings.page_timeout, "--timeout", min=0.1),
) -> None:
    """Extract a single page and print its text to stdout."""
    typer.echo(f"[extract] Fetching {url!r} …")
    result = _extract_or_exit(url, engine, headed, timeout)
    typer.echo(f"[extract] Words  : {result.word_count}")
    typer.echo("")
    typer.echo(result.text)


@app.command("prompt")
def prompt(
    url: str = typer.Option(..., help="URL to extract."),
    engine: str = typer.Option(
        settings.engine, "--engine", callback=_check_engine, help="Renderer: playwright | http."
    ),
    headed: bool = typer.Option(not settings.headless, "--headed", help="Show the browser window."),
    timeout: float = typer.Option(settings.page_timeout, "--timeout", min=0.1),
) -> None:
    """Extract a single page and print the proofreading request for its text."""
    result = _extract_or_exit(url, engine, headed, timeout)
    typer.echo(build_prompt(result.text))


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
