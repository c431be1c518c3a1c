"""Centralised settings for textlinter.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).  CLI options override
these per invocation.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Input / output
    # ------------------------------------------------------------------
    url_file: Path = field(
        default_factory=lambda: Path(os.environ.get("TEXTLINTER_URL_FILE", "urls.txt"))
    )
    output_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("TEXTLINTER_OUTPUT_DIR", "text-extraction")
        )
    )

    # ------------------------------------------------------------------
    # Scheduling / batching
    # ------------------------------------------------------------------
    max_concurrent: int = field(
        default_factory=lambda: int(os.environ.get("TEXTLINTER_MAX_CONCURRENT", "2"))
    )
    pages_per_batch: int = field(
        default_factory=lambda: int(os.environ.get("TEXTLINTER_PAGES_PER_BATCH", "4"))
    )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    page_timeout: float = field(
        default_factory=lambda: float(os.environ.get("TEXTLINTER_PAGE_TIMEOUT", "30.0"))
    )
    engine: str = field(
        default_factory=lambda: os.environ.get("TEXTLINTER_ENGINE", "playwright")
    )
    headless: bool = field(
        default_factory=lambda: _env_flag("TEXTLINTER_HEADLESS", "true")
    )
    main_selector: str = field(
        default_factory=lambda: os.environ.get("TEXTLINTER_MAIN_SELECTOR", "main")
    )
    fallback_selector: str = field(
        default_factory=lambda: os.environ.get("TEXTLINTER_FALLBACK_SELECTOR", "body")
    )


# Module-level singleton — import this everywhere:
#   from textlinter.config import settings
settings = Settings()
