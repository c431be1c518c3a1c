"""Write rendered report documents to disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from textlinter.reports.builder import ReportDocument

logger = logging.getLogger(__name__)


def write_reports(documents: Sequence[ReportDocument], output_dir: str | Path) -> list[Path]:
    """Write *documents* into *output_dir* (created if missing).

    Returns:
        The written paths, in document order.

    Raises:
        OSError: If the directory or a file cannot be written.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    paths: list[Path] = []
    for document in documents:
        path = output_dir / document.filename
        path.write_text(document.content, encoding="utf-8")
        logger.info("Report written: %s", path)
        paths.append(path)
    return paths
