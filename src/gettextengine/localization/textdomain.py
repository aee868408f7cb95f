"""Textdomains: the application-facing translation API.

A TextdomainRegistry is the explicit context that owns all mutable state:
the active locale, the textdomain instances, their bindings and (through
its CatalogResolver) the catalog cache. Applications usually create one
registry at startup; tests create one per test.

A Textdomain translates messages of one domain. The method names are
deliberately short so that marking strings stays unobtrusive:

    gtx = registry.textdomain("app")
    await gtx.resolve()
    print(gtx._x("Hello, {name}!", {"name": user}))

Lookups never raise and never perform I/O. Before resolve() (or when no
catalog could be loaded) they return the untranslated message.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import re
from collections.abc import Mapping, Sequence
from threading import RLock
from typing import TypeAlias

from gettextengine.constants import NO_LOCALE, NO_LOCALE_KEYS, POSIX_LOCALE
from gettextengine.enums import CatalogFormat
from gettextengine.errors import InvalidLocaleError
from gettextengine.locale_utils import get_system_locales, normalize_locale, split_locale
from gettextengine.localization.config import EngineConfig
from gettextengine.localization.negotiation import select_locale
from gettextengine.localization.resolver import CatalogResolver
from gettextengine.localization.transport import HttpTransport, SchemeTransport
from gettextengine.localization.types import CatalogSource, DomainName, LocaleKey
from gettextengine.runtime.cache import CatalogCache
from gettextengine.runtime.catalog import Catalog, empty_catalog
from gettextengine.runtime.lookup import lookup_message

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Registry and domains
    "TextdomainRegistry",
    "Textdomain",
    # Placeholders
    "Placeholders",
    "expand_placeholders",
    # No-op markers
    "N_",
    "N_x",
    "N_p",
    "N_px",
]

logger = logging.getLogger(__name__)

Placeholders: TypeAlias = Mapping[str, object]
"""Placeholder name -> replacement value (converted with str())."""

_PLACEHOLDER_PATTERN = re.compile(r"\{([a-zA-Z][0-9a-zA-Z]*)\}")


def expand_placeholders(text: str, placeholders: Placeholders | None = None) -> str:
    """Replace ``{name}`` placeholders in text.

    Names must match ``[a-zA-Z][0-9a-zA-Z]*``. Placeholders without a value
    are left verbatim, braces included.

    Example:
        >>> expand_placeholders("{count} files in {dir}", {"count": 3})
        '3 files in {dir}'
    """
    if not placeholders:
        return text

    def replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in placeholders:
            return str(placeholders[name])
        return match.group(0)

    return _PLACEHOLDER_PATTERN.sub(replace, text)


def N_(msgid: str) -> str:  # noqa: N802
    """Mark a string for extraction without translating it.

    Useful where the original string must be kept and translated later:

        COLORS = [N_("coral"), N_("tomato"), N_("gold")]
        ...
        label = gtx._(COLORS[1])
    """
    return msgid


def N_x(msgid: str, placeholders: Placeholders | None = None) -> str:  # noqa: N802
    """Like N_() but with placeholder expansion."""
    return expand_placeholders(msgid, placeholders)


def N_p(msgctxt: str, msgid: str) -> str:  # noqa: N802, ARG001
    """Like N_() but with a message context (which is ignored)."""
    return msgid


def N_px(msgctxt: str, msgid: str, placeholders: Placeholders | None = None) -> str:  # noqa: N802, ARG001
    """Like N_p() but with placeholder expansion."""
    return expand_placeholders(msgid, placeholders)


class TextdomainRegistry:
    """Owner of the active locale, the textdomains and the catalog cache.

    Thread-safe: the domain table, the bindings and the locale are guarded
    by a reentrant lock; the cache has its own lock.

    Example:
        >>> registry = TextdomainRegistry(EngineConfig(default_base_path="/srv/locale"))
        >>> registry.locale = registry.select_locale(["de", "fr"])
        >>> gtx = registry.textdomain("app")
        >>> asyncio.run(gtx.resolve())
    """

    __slots__ = (
        "_bindings",
        "_config",
        "_domains",
        "_locale",
        "_lock",
        "_resolver",
        "_user_locales",
    )

    def __init__(
        self,
        config: EngineConfig | None = None,
        resolver: CatalogResolver | None = None,
    ) -> None:
        """Initialize a registry with no domains and the "C" locale.

        Args:
            config: Engine configuration (default: EngineConfig())
            resolver: Catalog resolver; by default one is built from config
                with a SchemeTransport honoring config.http_timeout
        """
        self._config = config if config is not None else EngineConfig()
        if resolver is None:
            resolver = CatalogResolver(
                SchemeTransport(http=HttpTransport(timeout=self._config.http_timeout)),
                max_load_results=self._config.max_load_results,
            )
        self._resolver = resolver
        self._domains: dict[DomainName, Textdomain] = {}
        self._bindings: dict[DomainName, CatalogSource] = {}
        self._locale: LocaleKey = NO_LOCALE
        self._user_locales: list[str] | None = None
        self._lock = RLock()

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"TextdomainRegistry(locale={self.locale!r}, domains={len(self._domains)})"

    @property
    def config(self) -> EngineConfig:
        """Engine configuration."""
        return self._config

    @property
    def resolver(self) -> CatalogResolver:
        """Catalog resolver shared by all domains."""
        return self._resolver

    @property
    def cache(self) -> CatalogCache:
        """Catalog cache of the resolver."""
        return self._resolver.cache

    @property
    def domains(self) -> tuple[Textdomain, ...]:
        """All textdomains created so far, in creation order."""
        with self._lock:
            return tuple(self._domains.values())

    def textdomain(self, domain: DomainName) -> Textdomain:
        """Get the Textdomain for a name, creating it on first use.

        Args:
            domain: Textdomain name, the basename of its catalog files

        Returns:
            The one Textdomain instance for this name in this registry

        Raises:
            ValueError: If domain is empty
        """
        if not domain:
            msg = "Cannot instantiate a Textdomain without a textdomain"
            raise ValueError(msg)

        with self._lock:
            instance = self._domains.get(domain)
            if instance is None:
                instance = Textdomain(domain, self)
                self._domains[domain] = instance
                logger.debug("Created textdomain %s", domain)
            return instance

    @property
    def locale(self) -> LocaleKey:
        """Active locale identifier ("C" until set)."""
        with self._lock:
            return self._locale

    @locale.setter
    def locale(self, locale: str) -> None:
        """Change the active locale.

        "C" and "POSIX" (any case) select the untranslated POSIX locale.
        Other identifiers must have the shape
        ``language[_REGION][.charset][@modifier]`` (or hyphenated tags).
        Unless config.web is set, the language is lower-cased and the region
        upper-cased; charset and modifier are kept as given.

        Raises:
            InvalidLocaleError: If the identifier does not parse
        """
        if locale.upper() in NO_LOCALE_KEYS:
            value = POSIX_LOCALE
        elif self._config.web:
            if split_locale(locale) is None:
                raise InvalidLocaleError(locale)
            value = locale
        else:
            value = normalize_locale(locale)

        with self._lock:
            self._locale = value
        logger.debug("Locale set to %s", value)

    def bind(self, domain: DomainName, source: CatalogSource | None = None) -> CatalogSource | None:
        """Set (if given) and return the catalog source bound to a domain."""
        with self._lock:
            if source is not None:
                self._bindings[domain] = source
            return self._bindings.get(domain)

    def clear_instances(self) -> None:
        """Forget all textdomain bindings."""
        with self._lock:
            self._bindings.clear()

    def forget_instances(self) -> None:
        """Forget all bindings and all textdomain instances."""
        with self._lock:
            self.clear_instances()
            self._domains.clear()

    def clear_cache(self) -> None:
        """Drop every cached catalog so the next resolve() reloads."""
        self._resolver.cache.clear()

    def user_locales(self, locales: Sequence[str] | None = None) -> list[str]:
        """Get (and optionally set) the user's preferred locales.

        Until set explicitly, the locales are detected from the environment
        (LANGUAGE, LC_ALL, LC_MESSAGES, LANG) on every call.

        Args:
            locales: New preference list, most preferred first

        Returns:
            The current preference list
        """
        with self._lock:
            if locales is not None:
                self._user_locales = list(locales)
            if self._user_locales is not None:
                return list(self._user_locales)
        return get_system_locales()

    def select_locale(
        self, supported: Sequence[str], requested: Sequence[str] | None = None
    ) -> str:
        """Negotiate a supported locale.

        Args:
            supported: Locales the application ships catalogs for
            requested: Locales the user accepts (default: user_locales())

        Returns:
            One of supported, or "C" if nothing matches
        """
        return select_locale(supported, requested if requested is not None else self.user_locales())

    def get_catalog(self, locale: LocaleKey, domain: DomainName) -> Catalog:
        """Get an already resolved catalog without loading anything.

        Returns:
            The cached catalog, or an empty catalog if the entry is absent
            or its load is still pending
        """
        cached = self._resolver.cache.lookup(locale, domain)
        if cached is None or inspect.isawaitable(cached):
            return empty_catalog()
        return cached


class Textdomain:
    """Translator for one textdomain.

    Obtain instances with TextdomainRegistry.textdomain(); there is exactly
    one per name and registry.

    Method naming:
        _      plain message
        n      plural (msgid, msgid_plural, num_items)
        p      with message context (msgctxt first)
        x      with {placeholder} expansion (placeholders last)
        l      with a fixed locale (locale first), reading only the cache

    Attributes:
        domain: Textdomain name
    """

    __slots__ = ("_catalog", "_catalog_format", "_domain", "_registry")

    def __init__(self, domain: DomainName, registry: TextdomainRegistry) -> None:
        """Initialize with an empty catalog and the configured format."""
        self._domain = domain
        self._registry = registry
        self._catalog_format = registry.config.catalog_format
        self._catalog = empty_catalog()

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"Textdomain({self._domain!r}, format={str(self._catalog_format)!r})"

    @property
    def domain(self) -> DomainName:
        """Textdomain name."""
        return self._domain

    @property
    def registry(self) -> TextdomainRegistry:
        """Registry owning this textdomain."""
        return self._registry

    @property
    def catalog(self) -> Catalog:
        """Catalog resolved for the registry locale by the last resolve()."""
        return self._catalog

    @property
    def catalog_format(self) -> CatalogFormat:
        """Format of the catalog files searched for this domain."""
        return self._catalog_format

    @catalog_format.setter
    def catalog_format(self, catalog_format: CatalogFormat | str) -> None:
        """Set the catalog format ("mo", "mo.json" or "json", any case).

        Raises:
            ValueError: If the format is unsupported
        """
        self._catalog_format = CatalogFormat.parse(str(catalog_format))

    def bindtextdomain(self, path: CatalogSource | None = None) -> CatalogSource | None:
        """Bind this domain to a base path, URL or LocaleContainer.

        Catalogs are searched at
        ``{path}/{locale}/LC_MESSAGES/{domain}.{catalog_format}``. A
        LocaleContainer supplies catalogs from memory instead.

        Args:
            path: New binding; omitted to only query

        Returns:
            The current binding, or None if the domain was never bound
        """
        return self._registry.bind(self._domain, path)

    async def resolve(self, locale: LocaleKey | None = None) -> Catalog:
        """Load the catalogs of all textdomains for a locale.

        Every textdomain of the registry is resolved concurrently so that a
        locale change refreshes them together. Failures in one domain do not
        affect the others, and this coroutine never raises.

        Args:
            locale: Locale to resolve (default: the registry locale). Only a
                resolution for the registry locale updates ``catalog``.

        Returns:
            The catalog of this textdomain
        """
        others = [domain for domain in self._registry.domains if domain is not self]
        catalogs = await asyncio.gather(
            self._resolve_own(locale), *(domain._resolve_own(locale) for domain in others)
        )
        return catalogs[0]

    async def _resolve_own(self, locale: LocaleKey | None) -> Catalog:
        base = self.bindtextdomain()
        if base is None:
            base = self._registry.config.default_base_path

        catalog = await self._registry.resolver.resolve(
            self._domain,
            base,
            self._catalog_format,
            locale if locale else self._registry.locale,
        )
        if not locale:
            self._catalog = catalog
        return catalog

    def _fixed(self, locale: LocaleKey) -> Catalog:
        return self._registry.get_catalog(locale, self._domain)

    # Lookups against the resolved catalog.

    def _(self, msgid: str) -> str:
        """Translate a message."""
        return lookup_message(self._catalog, msgid)

    def _n(self, msgid: str, msgid_plural: str, num_items: int) -> str:
        """Translate a message with a plural form.

        Prefer _nx() so that the count can be interpolated.
        """
        return lookup_message(
            self._catalog, msgid, msgid_plural=msgid_plural, num_items=num_items
        )

    def _p(self, msgctxt: str, msgid: str) -> str:
        """Translate a message in a context."""
        return lookup_message(self._catalog, msgid, msgctxt=msgctxt)

    def _np(self, msgctxt: str, msgid: str, msgid_plural: str, num_items: int) -> str:
        """Combine _n() and _p()."""
        return lookup_message(
            self._catalog,
            msgid,
            msgctxt=msgctxt,
            msgid_plural=msgid_plural,
            num_items=num_items,
        )

    def _x(self, msgid: str, placeholders: Placeholders | None = None) -> str:
        """Translate a message and expand its placeholders.

        Example:
            >>> gtx._x("Hello, {name}!", {"name": "Ada"})
            'Hallo, Ada!'
        """
        return expand_placeholders(self._(msgid), placeholders)

    def _nx(
        self,
        msgid: str,
        msgid_plural: str,
        num_items: int,
        placeholders: Placeholders | None = None,
    ) -> str:
        """Combine _n() and _x().

        Example:
            >>> gtx._nx("One file.", "{count} files.", count, {"count": count})
        """
        return expand_placeholders(self._n(msgid, msgid_plural, num_items), placeholders)

    def _px(self, msgctxt: str, msgid: str, placeholders: Placeholders | None = None) -> str:
        """Combine _p() and _x()."""
        return expand_placeholders(self._p(msgctxt, msgid), placeholders)

    def _npx(
        self,
        msgctxt: str,
        msgid: str,
        msgid_plural: str,
        num_items: int,
        placeholders: Placeholders | None = None,
    ) -> str:
        """Combine _n(), _p() and _x()."""
        return expand_placeholders(
            self._np(msgctxt, msgid, msgid_plural, num_items), placeholders
        )

    # Lookups with a fixed locale. The catalog must have been resolved for
    # exactly this locale key; otherwise the message is returned untranslated.

    def _l(self, locale: LocaleKey, msgid: str) -> str:
        """Translate a message into a fixed locale."""
        return lookup_message(self._fixed(locale), msgid)

    def _ln(self, locale: LocaleKey, msgid: str, msgid_plural: str, num_items: int) -> str:
        """Plural translation into a fixed locale."""
        return lookup_message(
            self._fixed(locale), msgid, msgid_plural=msgid_plural, num_items=num_items
        )

    def _lp(self, locale: LocaleKey, msgctxt: str, msgid: str) -> str:
        """Translate a message in a context into a fixed locale."""
        return lookup_message(self._fixed(locale), msgid, msgctxt=msgctxt)

    def _lnp(
        self,
        locale: LocaleKey,
        msgctxt: str,
        msgid: str,
        msgid_plural: str,
        num_items: int,
    ) -> str:
        """Combine _ln() and _lp()."""
        return lookup_message(
            self._fixed(locale),
            msgid,
            msgctxt=msgctxt,
            msgid_plural=msgid_plural,
            num_items=num_items,
        )

    def _lx(
        self, locale: LocaleKey, msgid: str, placeholders: Placeholders | None = None
    ) -> str:
        """Combine _l() and _x()."""
        return expand_placeholders(self._l(locale, msgid), placeholders)

    def _lnx(
        self,
        locale: LocaleKey,
        msgid: str,
        msgid_plural: str,
        num_items: int,
        placeholders: Placeholders | None = None,
    ) -> str:
        """Combine _ln() and _x()."""
        return expand_placeholders(
            self._ln(locale, msgid, msgid_plural, num_items), placeholders
        )

    def _lpx(
        self,
        locale: LocaleKey,
        msgctxt: str,
        msgid: str,
        placeholders: Placeholders | None = None,
    ) -> str:
        """Combine _lp() and _x()."""
        return expand_placeholders(self._lp(locale, msgctxt, msgid), placeholders)

    def _lnpx(
        self,
        locale: LocaleKey,
        msgctxt: str,
        msgid: str,
        msgid_plural: str,
        num_items: int,
        placeholders: Placeholders | None = None,
    ) -> str:
        """Combine _ln(), _lp() and _x()."""
        return expand_placeholders(
            self._lnp(locale, msgctxt, msgid, msgid_plural, num_items), placeholders
        )

    # No-op markers, also available as module functions.

    @staticmethod
    def N_(msgid: str) -> str:  # noqa: N802
        """Same as the module function N_()."""
        return N_(msgid)

    @staticmethod
    def N_x(msgid: str, placeholders: Placeholders | None = None) -> str:  # noqa: N802
        """Same as the module function N_x()."""
        return N_x(msgid, placeholders)

    @staticmethod
    def N_p(msgctxt: str, msgid: str) -> str:  # noqa: N802
        """Same as the module function N_p()."""
        return N_p(msgctxt, msgid)

    @staticmethod
    def N_px(msgctxt: str, msgid: str, placeholders: Placeholders | None = None) -> str:  # noqa: N802
        """Same as the module function N_px()."""
        return N_px(msgctxt, msgid, placeholders)
