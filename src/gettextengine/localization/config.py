"""Engine configuration.

Provides a single frozen dataclass that encapsulates the settings shared by
the resolver, the transports and the textdomain registry.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from gettextengine.constants import (
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_LOCALE_DIR,
    MAX_LOAD_RESULTS,
)
from gettextengine.enums import CatalogFormat

__all__ = ["EngineConfig"]


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Immutable configuration for a TextdomainRegistry.

    All fields have sensible defaults; ``EngineConfig()`` is a usable
    configuration.

    Attributes:
        default_base_path: Catalog directory (or URL) for textdomains that
            were never bound (default: ``./locale``).
        catalog_format: Initial catalog format of new textdomains
            (default: ``mo``). Strings are accepted case-insensitively.
        web: Keep locale identifiers exactly as given instead of
            lower-casing the language and upper-casing the region
            (default: False).
        http_timeout: Seconds before an HTTP fetch is abandoned (default: 10).
        max_load_results: Candidate load results kept for diagnostics
            (default: 1000).

    Example:
        >>> config = EngineConfig(default_base_path="/usr/share/locale")
        >>> registry = TextdomainRegistry(config)
    """

    default_base_path: str = field(
        default_factory=lambda: os.path.join(os.curdir, DEFAULT_LOCALE_DIR)
    )
    catalog_format: CatalogFormat = CatalogFormat.MO
    web: bool = False
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    max_load_results: int = MAX_LOAD_RESULTS

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If the format is unsupported, or http_timeout or
                max_load_results is not positive.
        """
        object.__setattr__(self, "catalog_format", CatalogFormat.parse(self.catalog_format))
        if self.http_timeout <= 0:
            msg = "http_timeout must be positive"
            raise ValueError(msg)
        if self.max_load_results <= 0:
            msg = "max_load_results must be positive"
            raise ValueError(msg)
