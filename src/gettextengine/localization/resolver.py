"""Catalog resolution: locate, fetch, decode, merge, cache.

Resolving a domain for a locale key works in these steps:

1. The "no locale" keys (C, POSIX) short-circuit to the empty catalog.
2. A cached catalog (or pending load) for (locale key, domain) is returned.
3. The locale key is parsed and exploded into candidate rows, one row per
   tag prefix (``de``, then ``de_DE``).
4. Rows load concurrently. Within a row, candidates are tried strictly in
   order and the first one that fetches and decodes wins.
5. Row catalogs are merged in row order, so more specific rows override
   less specific ones key by key while all other keys are kept.
6. The plural rule is compiled from the merged header.
7. The result is cached and returned.

resolve() never raises. Every failure degrades to fewer (or no) entries,
and an empty result is cached like any other so it is not retried.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections import deque
from collections.abc import Awaitable, Callable
from threading import RLock

from gettextengine.constants import LC_MESSAGES, MAX_LOAD_RESULTS, NO_LOCALE_KEYS
from gettextengine.enums import CatalogFormat, LoadStatus
from gettextengine.errors import CatalogError
from gettextengine.locale_utils import CandidateRow, explode_locale, split_locale
from gettextengine.localization.loading import (
    CatalogLoadResult,
    LoadSummary,
    assemble_path,
    load_from_container,
)
from gettextengine.localization.transport import SchemeTransport, Transport
from gettextengine.localization.types import CatalogSource, DomainName, LocaleKey
from gettextengine.parsing import get_catalog_parser
from gettextengine.runtime.cache import CatalogCache
from gettextengine.runtime.catalog import (
    Catalog,
    empty_catalog,
    merge_catalogs,
    validate_json_catalog,
    with_plural_rule,
)

__all__ = ["CatalogResolver"]

logger = logging.getLogger(__name__)

# Failures a single candidate may produce; each only removes that candidate.
_CANDIDATE_ERRORS = (OSError, ValueError, CatalogError)


class CatalogResolver:
    """Resolves (domain, locale key) pairs into merged, cached catalogs.

    Holds the catalog cache and the transport. One resolver is normally
    owned by a TextdomainRegistry, but it can be used directly.

    Example:
        >>> resolver = CatalogResolver()
        >>> catalog = asyncio.run(
        ...     resolver.resolve("app", "/usr/share/locale", "mo", "de_AT.UTF-8")
        ... )
        >>> lookup_message(catalog, "Open")
        'Öffnen'
    """

    __slots__ = ("_cache", "_load_results", "_lock", "_transport")

    def __init__(
        self,
        transport: Transport | None = None,
        cache: CatalogCache | None = None,
        *,
        max_load_results: int = MAX_LOAD_RESULTS,
    ) -> None:
        """Initialize the resolver.

        Args:
            transport: Byte transport (default: SchemeTransport)
            cache: Catalog cache (default: a new empty cache)
            max_load_results: Candidate load results kept for diagnostics
        """
        self._transport: Transport = transport if transport is not None else SchemeTransport()
        self._cache = cache if cache is not None else CatalogCache()
        self._load_results: deque[CatalogLoadResult] = deque(maxlen=max_load_results)
        self._lock = RLock()

    @property
    def cache(self) -> CatalogCache:
        """The catalog cache."""
        return self._cache

    @property
    def transport(self) -> Transport:
        """The byte transport."""
        return self._transport

    def get_load_summary(self) -> LoadSummary:
        """Get the recent candidate load attempts.

        Returns:
            LoadSummary over the retained history, oldest first
        """
        with self._lock:
            return LoadSummary(results=tuple(self._load_results))

    def clear_load_results(self) -> None:
        """Forget the recorded load attempts."""
        with self._lock:
            self._load_results.clear()

    def _record(self, result: CatalogLoadResult) -> None:
        with self._lock:
            self._load_results.append(result)

    async def resolve(
        self,
        domain: DomainName,
        base: CatalogSource,
        catalog_format: CatalogFormat | str,
        locale_key: LocaleKey,
    ) -> Catalog:
        """Resolve the catalog of a domain for a locale key.

        Args:
            domain: Textdomain
            base: Base path/URL, or a LocaleContainer
            catalog_format: Catalog file format (ignored for containers)
            locale_key: Locale identifier, e.g. "de_DE.UTF-8@euro"

        Returns:
            The merged catalog; an empty catalog with the germanic plural
            rule if nothing could be loaded
        """
        if locale_key in NO_LOCALE_KEYS:
            return empty_catalog()

        cached = await self._cached(locale_key, domain)
        if cached is not None:
            return cached

        try:
            catalog = await self._load(domain, base, catalog_format, locale_key)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception("Resolving textdomain %s for %s failed", domain, locale_key)
            catalog = empty_catalog()

        self._cache.store(locale_key, domain, catalog)
        return catalog

    async def _load(
        self,
        domain: DomainName,
        base: CatalogSource,
        catalog_format: CatalogFormat | str,
        locale_key: LocaleKey,
    ) -> Catalog:
        identifier = split_locale(locale_key)
        if identifier is None:
            logger.warning("Invalid locale key %r, using empty catalog for %s", locale_key, domain)
            return empty_catalog()

        try:
            fmt = CatalogFormat.parse(str(catalog_format))
        except ValueError as e:
            logger.warning("Cannot resolve %s: %s", domain, e)
            return empty_catalog()

        rows = explode_locale(identifier, vary=True)
        row_catalogs = await asyncio.gather(
            *(self._load_row(row, base, domain, fmt, locale_key) for row in rows)
        )
        # gather() preserves argument order, so the merge is by row
        # index regardless of which fetch finished first.
        catalog = with_plural_rule(merge_catalogs(c for c in row_catalogs if c is not None))
        logger.info(
            "Resolved textdomain %s for %s: %d entries", domain, locale_key, len(catalog.entries)
        )
        return catalog

    async def _cached(self, locale_key: LocaleKey, domain: DomainName) -> Catalog | None:
        cached = self._cache.lookup(locale_key, domain)
        if cached is None:
            return None
        if not inspect.isawaitable(cached):
            logger.debug("Cache hit for %s/%s", locale_key, domain)
            return validate_json_catalog(cached)

        logger.debug("Awaiting pending load for %s/%s", locale_key, domain)
        try:
            catalog = validate_json_catalog(await cached)
        except _CANDIDATE_ERRORS as e:
            logger.warning("Pending load for %s/%s failed: %s", locale_key, domain, e)
            return None
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception("Pending load for %s/%s failed", locale_key, domain)
            return None

        # A settled awaitable (a coroutine in particular) cannot be awaited twice.
        self._cache.store(locale_key, domain, catalog)
        return catalog

    def _fetcher(
        self, base: CatalogSource, domain: DomainName, fmt: CatalogFormat
    ) -> tuple[Callable[[str], str], Callable[[str], Awaitable[Catalog]]]:
        """Return (describe, fetch) callables for one base."""
        if isinstance(base, str):
            parser = get_catalog_parser(fmt)

            def describe(candidate: str) -> str:
                return assemble_path(base, candidate, domain, fmt)

            async def fetch(candidate: str) -> Catalog:
                return parser(await self._transport.fetch(describe(candidate)))

            return describe, fetch

        container = base

        def describe_container(candidate: str) -> str:
            return f"<container>/{candidate}/{LC_MESSAGES}/{domain}"

        async def fetch_container(candidate: str) -> Catalog:
            return load_from_container(container, candidate, domain)

        return describe_container, fetch_container

    async def _load_row(
        self,
        row: CandidateRow,
        base: CatalogSource,
        domain: DomainName,
        fmt: CatalogFormat,
        locale_key: LocaleKey,
    ) -> Catalog | None:
        """Try the candidates of one row in order; first success wins."""
        describe, fetch = self._fetcher(base, domain, fmt)

        for candidate in row:
            source = describe(candidate)
            try:
                catalog = await fetch(candidate)
            except FileNotFoundError:
                logger.debug("No catalog at %s", source)
                status, error = LoadStatus.NOT_FOUND, None
            except _CANDIDATE_ERRORS as e:
                logger.warning("Failed to load catalog %s: %s", source, e)
                status, error = LoadStatus.ERROR, e
            except Exception as e:  # pylint: disable=broad-exception-caught
                # Custom transports may raise anything; only this candidate is lost.
                logger.exception("Unexpected error loading catalog %s", source)
                status, error = LoadStatus.ERROR, e
            else:
                logger.debug("Loaded catalog %s", source)
                self._record(
                    CatalogLoadResult(locale_key, domain, candidate, source, LoadStatus.SUCCESS)
                )
                return catalog

            self._record(CatalogLoadResult(locale_key, domain, candidate, source, status, error))

        return None
