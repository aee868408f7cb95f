"""Catalog cache keyed by locale key and textdomain.

Memoizes catalog resolution so that, after the first resolve, every
translation call for a (locale, domain) pair is a pure in-memory lookup.

Architecture:
    - Thread-safe using threading.RLock (reentrant lock)
    - Two-level dict: locale key -> domain -> value
    - Values are completed Catalogs or awaitables producing one (in-flight
      loads); absent means "never attempted"
    - Failed resolutions are stored as empty catalogs, never as absence

Deduplication is best effort. Callers check, do the work, then store; two
concurrent first resolutions of the same key may both load, and the last
store wins. Both results are equal, so only timing is affected.

Python 3.13+.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable
from threading import RLock
from typing import TypeAlias

from gettextengine.runtime.catalog import Catalog, validate_json_catalog

__all__ = ["CacheValue", "CatalogCache"]

logger = logging.getLogger(__name__)

CacheValue: TypeAlias = Catalog | Awaitable[Catalog]
"""A completed catalog or a pending load producing one."""


class CatalogCache:
    """Process-local store of resolved catalogs.

    Owned by a CatalogResolver rather than living in module globals, so
    tests and independent applications can each have their own.

    Attributes:
        hits: Number of lookups that found an entry
        misses: Number of lookups that found nothing
    """

    __slots__ = ("_entries", "_hits", "_lock", "_misses")

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._entries: dict[str, dict[str, CacheValue]] = {}
        self._lock = RLock()
        self._hits = 0
        self._misses = 0

    def lookup(self, locale_key: str, domain: str) -> CacheValue | None:
        """Get the cached value for a locale key and domain.

        Thread-safe.

        Args:
            locale_key: Locale identifier (or colon separated list of them)
            domain: Textdomain name

        Returns:
            Completed Catalog, pending awaitable, or None if never stored
        """
        with self._lock:
            value = self._entries.get(locale_key, {}).get(domain)
            if value is None:
                self._misses += 1
            else:
                self._hits += 1
            return value

    def store(self, locale_key: str, domain: str, value: CacheValue | object) -> None:
        """Store a completed catalog or a pending load.

        Completed values that are not Catalog instances (for example decoded
        JSON mappings) are normalized into a Catalog first.

        Thread-safe.

        Args:
            locale_key: Locale identifier
            domain: Textdomain name
            value: Catalog, catalog-shaped mapping, or awaitable

        Raises:
            CatalogFormatError: If a completed value is not catalog-shaped
        """
        entry: CacheValue = value if inspect.isawaitable(value) else validate_json_catalog(value)
        with self._lock:
            self._entries.setdefault(locale_key, {})[domain] = entry
        logger.debug("Cached catalog for %s/%s", locale_key, domain)

    def clear(self) -> None:
        """Remove all entries and reset statistics."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def __contains__(self, key: object) -> bool:
        """Check for a (locale_key, domain) pair."""
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        locale_key, domain = key
        with self._lock:
            return domain in self._entries.get(locale_key, {})

    def __len__(self) -> int:
        """Total number of (locale_key, domain) entries."""
        with self._lock:
            return sum(len(domains) for domains in self._entries.values())

    @property
    def hits(self) -> int:
        """Number of lookups that found an entry."""
        with self._lock:
            return self._hits

    @property
    def misses(self) -> int:
        """Number of lookups that found nothing."""
        with self._lock:
            return self._misses
