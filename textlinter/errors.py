"""Exception hierarchy for textlinter.

Only faults with no per-URL recovery are exceptions.  A page that cannot be
read is recorded as an :class:`~textlinter.scraper.models.ExtractionError`
value instead and never raised.

Hierarchy::

    TextLinterError
    ├── ConfigurationError
    └── ResourceError
"""

from __future__ import annotations


class TextLinterError(Exception):
    """Base class for all fatal textlinter errors."""


class ConfigurationError(TextLinterError):
    """Raised when the URL list cannot be read or settings are invalid."""


class ResourceError(TextLinterError):
    """Raised when the shared rendering resource (the browser) cannot start."""
