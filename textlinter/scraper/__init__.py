"""Scraper package — page rendering & text extraction."""

from textlinter.scraper.extractor import extract_page
from textlinter.scraper.models import ExtractionError, ExtractionResult
from textlinter.scraper.renderer import HttpRenderer, PlaywrightRenderer, create_renderer

__all__ = [
    "extract_page",
    "create_renderer",
    "PlaywrightRenderer",
    "HttpRenderer",
    "ExtractionResult",
    "ExtractionError",
]
