"""Markdown report rendering.

:func:`build_reports` turns the results and errors of a run into report
documents.  It is pure: nothing is written to disk here (see
:mod:`textlinter.reports.writer`) and identical inputs always render
byte-identical documents.

Layout
------
``len(results) <= batch_threshold``
    One consolidated ``text-extraction-<ts>.md`` holding every page, the
    errors and a summary.

``len(results) > batch_threshold``
    ``text-extraction-batch-<k>-<ts>.md`` per batch (pages numbered globally),
    ``text-extraction-errors-<ts>.md`` when any page failed, and a
    ``text-extraction-summary-<ts>.md`` manifest listing every file.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Sequence

from textlinter.scraper.models import ExtractionError, ExtractionResult

REPORT_PREFIX = "text-extraction"


@dataclass(frozen=True)
class ReportDocument:
    """A rendered report; ``filename`` is relative to the output directory."""

    filename: str
    content: str


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------

def format_timestamp(moment: datetime) -> str:
    """Return a filename-safe UTC timestamp, e.g. ``2024-05-01T09-30-00-123Z``."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H-%M-%S-") + f"{moment.microsecond // 1000:03d}Z"


def single_report_name(timestamp: str) -> str:
    return f"{REPORT_PREFIX}-{timestamp}.md"


def batch_report_name(batch_number: int, timestamp: str) -> str:
    return f"{REPORT_PREFIX}-batch-{batch_number}-{timestamp}.md"


def error_report_name(timestamp: str) -> str:
    return f"{REPORT_PREFIX}-errors-{timestamp}.md"


def summary_report_name(timestamp: str) -> str:
    return f"{REPORT_PREFIX}-summary-{timestamp}.md"


def batch_count(result_count: int, batch_threshold: int) -> int:
    """Number of text-carrying documents a run with *result_count* pages produces."""
    if result_count <= batch_threshold:
        return 1
    return math.ceil(result_count / batch_threshold)


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------

def _fence(text: str) -> str:
    """Wrap *text* in a code fence longer than any backtick run inside it."""
    longest = max((len(run) for run in re.findall(r"`+", text)), default=0)
    ticks = "`" * max(3, longest + 1)
    return f"{ticks}\n{text}\n{ticks}"


def _header(title: str, generated_at: str) -> list[str]:
    return [f"# {title}", "", f"Generated: {generated_at}", ""]


def _instructions_section(instructions: str | None) -> list[str]:
    if not instructions:
        return []
    return ["## Review Instructions", "", instructions.strip(), ""]


def _result_entry(number: int, result: ExtractionResult) -> list[str]:
    return [
        f"### {number}. {result.url}",
        "",
        f"**Word Count:** {result.word_count}",
        "",
        "**Extracted Text:**",
        _fence(result.text),
        "",
        "---",
        "",
    ]


def _error_entries(errors: Sequence[ExtractionError]) -> list[str]:
    lines = [f"## Errors ({len(errors)} pages)", ""]
    for number, error in enumerate(errors, start=1):
        lines += [f"### {number}. {error.url}", f"**Error:** {error.reason}", ""]
    return lines


def _render(lines: list[str]) -> str:
    return "\n".join(lines).rstrip("\n") + "\n"


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

def _single_report(
    results: Sequence[ExtractionResult],
    errors: Sequence[ExtractionError],
    timestamp: str,
    generated_at: str,
    instructions: str | None,
) -> ReportDocument:
    lines = _header("Text Extraction Report", generated_at)
    lines += _instructions_section(instructions)

    if results:
        lines += [f"## Extracted Text ({len(results)} pages)", ""]
        for number, result in enumerate(results, start=1):
            lines += _result_entry(number, result)

    if errors:
        lines += _error_entries(errors)

    lines += [
        "## Summary",
        "",
        f"- **Total URLs:** {len(results) + len(errors)}",
        f"- **Successfully processed:** {len(results)}",
        f"- **Errors:** {len(errors)}",
    ]
    return ReportDocument(single_report_name(timestamp), _render(lines))


def _batch_report(
    batch: Sequence[ExtractionResult],
    batch_index: int,
    total_batches: int,
    batch_threshold: int,
    timestamp: str,
    generated_at: str,
    instructions: str | None,
) -> ReportDocument:
    batch_number = batch_index + 1
    first = batch_index * batch_threshold + 1
    last = first + len(batch) - 1

    lines = [
        f"# Text Extraction Report - Batch {batch_number}/{total_batches}",
        "",
        f"Generated: {generated_at}",
        f"Batch: {batch_number} of {total_batches} (Pages {first}-{last})",
        "",
    ]
    lines += _instructions_section(instructions)
    lines += [f"## Extracted Text ({len(batch)} pages in this batch)", ""]
    for offset, result in enumerate(batch):
        lines += _result_entry(first + offset, result)

    lines += [
        "## Batch Summary",
        "",
        f"- **Batch:** {batch_number}/{total_batches}",
        f"- **Pages in this batch:** {len(batch)}",
    ]
    return ReportDocument(batch_report_name(batch_number, timestamp), _render(lines))


def _error_report(
    errors: Sequence[ExtractionError], timestamp: str, generated_at: str
) -> ReportDocument:
    lines = _header("Text Extraction Errors", generated_at)
    lines += _error_entries(errors)
    return ReportDocument(error_report_name(timestamp), _render(lines))


def _summary_report(
    batches: list[Sequence[ExtractionResult]],
    result_count: int,
    errors: Sequence[ExtractionError],
    batch_threshold: int,
    timestamp: str,
    generated_at: str,
) -> ReportDocument:
    lines = _header("Text Extraction Summary", generated_at)
    lines += [
        "## Overall Summary",
        "",
        f"- **Total URLs:** {result_count + len(errors)}",
        f"- **Successfully processed:** {result_count}",
        f"- **Errors:** {len(errors)}",
        f"- **Total batches:** {len(batches)}",
        f"- **Pages per batch:** {batch_threshold}",
        "",
        "## Batch Files",
        "",
    ]
    for batch_number, batch in enumerate(batches, start=1):
        lines.append(
            f"- **Batch {batch_number}:** {batch_report_name(batch_number, timestamp)}"
            f" ({len(batch)} pages)"
        )
    if errors:
        lines.append(f"- **Errors:** {error_report_name(timestamp)} ({len(errors)} pages)")
    return ReportDocument(summary_report_name(timestamp), _render(lines))


def build_reports(
    results: Sequence[ExtractionResult],
    errors: Sequence[ExtractionError],
    batch_threshold: int,
    timestamp: str,
    *,
    generated_at: str | None = None,
    instructions: str | None = None,
) -> list[ReportDocument]:
    """Render the report documents for one run.

    Args:
        results: Successful extractions, in report order.
        errors: Failed extractions, in report order.
        batch_threshold: Maximum pages per document.  More results than this
            switches to batch documents plus a summary manifest.
        timestamp: Run token embedded in every filename (see
            :func:`format_timestamp`).
        generated_at: Text of the ``Generated:`` line.  Defaults to
            *timestamp* so output depends only on the arguments.
        instructions: Optional reviewer instructions placed at the top of every
            document that carries extracted text.

    Returns:
        Documents in write order: consolidated report, or batches followed by
        the error report (if any) and the summary.

    Raises:
        ValueError: If ``batch_threshold`` is less than 1.
    """
    if batch_threshold < 1:
        raise ValueError(f"batch_threshold must be >= 1, got {batch_threshold}")
    generated_at = generated_at or timestamp

    if len(results) <= batch_threshold:
        return [_single_report(results, errors, timestamp, generated_at, instructions)]

    batches = [
        results[i:i + batch_threshold] for i in range(0, len(results), batch_threshold)
    ]
    documents = [
        _batch_report(
            batch, batch_index, len(batches), batch_threshold,
            timestamp, generated_at, instructions,
        )
        for batch_index, batch in enumerate(batches)
    ]
    if errors:
        documents.append(_error_report(errors, timestamp, generated_at))
    documents.append(
        _summary_report(batches, len(results), errors, batch_threshold, timestamp, generated_at)
    )
    return documents
