"""textlinter — extract visible page text into batched Markdown reports.

Public API::

    from textlinter import run_extraction
    stats = asyncio.run(run_extraction("urls.txt", "text-extraction",
                                       renderer_factory=PlaywrightRenderer))
"""

from textlinter.errors import ConfigurationError, ResourceError, TextLinterError
from textlinter.runner import RunStatistics, run_extraction

__all__ = [
    "run_extraction",
    "RunStatistics",
    "TextLinterError",
    "ConfigurationError",
    "ResourceError",
]
