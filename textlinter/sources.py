"""URL list loading."""

from __future__ import annotations

import logging
from pathlib import Path

from textlinter.errors import ConfigurationError

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "#"


def parse_urls(content: str) -> list[str]:
    """Return the usable lines of *content*, trimmed, in original order.

    Lines that are blank after trimming or start with ``#`` are skipped.
    """
    urls: list[str] = []
    for line in content.split("\n"):
        line = line.strip()
        if line and not line.startswith(COMMENT_PREFIX):
            urls.append(line)
    return urls


def load_urls(path: str | Path) -> list[str]:
    """Read the newline-delimited URL list at *path*.

    An existing file without usable lines returns an empty list; callers treat
    that as "nothing to do".

    Raises:
        ConfigurationError: If the file cannot be read (missing, permission
            denied, not a regular file, undecodable).
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Failed to read URL list {str(path)!r}: {exc}") from exc

    urls = parse_urls(content)
    logger.info("Loaded %d URL(s) from %s", len(urls), path)
    return urls
