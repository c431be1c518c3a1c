"""Data models for the extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass


def count_words(text: str) -> int:
    """Return the number of whitespace-delimited tokens in *text*."""
    return len(text.split())


@dataclass(frozen=True)
class ExtractionResult:
    """Text successfully read from a single page.

    ``index`` is the 0-based position of ``url`` in the input list.
    """

    url: str
    text: str
    word_count: int
    index: int = 0


@dataclass(frozen=True)
class ExtractionError:
    """A page that produced no usable text."""

    url: str
    reason: str
    index: int = 0
