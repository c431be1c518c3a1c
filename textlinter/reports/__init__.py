"""Report rendering and writing package."""

from textlinter.reports.builder import ReportDocument, build_reports, format_timestamp
from textlinter.reports.prompt import Correction, build_prompt, parse_corrections
from textlinter.reports.writer import write_reports

__all__ = [
    "ReportDocument",
    "build_reports",
    "format_timestamp",
    "write_reports",
    "Correction",
    "build_prompt",
    "parse_corrections",
]
