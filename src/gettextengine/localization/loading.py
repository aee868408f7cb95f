"""Catalog location helpers and load-attempt records.

Components:
    assemble_path - Builds ``{base}/{locale}/LC_MESSAGES/{domain}.{format}``
    load_from_container - Reads a catalog out of an in-memory LocaleContainer
    CatalogLoadResult - Immutable record of a single candidate attempt
    LoadSummary - Immutable aggregate of attempts with counters and filters

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass

from gettextengine.constants import LC_MESSAGES
from gettextengine.enums import CatalogFormat, LoadStatus
from gettextengine.localization.types import DomainName, LocaleContainer, LocaleKey
from gettextengine.runtime.catalog import Catalog, validate_json_catalog

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locating catalogs
    "assemble_path",
    "load_from_container",
    # Load result types
    "CatalogLoadResult",
    "LoadSummary",
]


def assemble_path(
    base: str, locale: str, domain: DomainName, catalog_format: CatalogFormat
) -> str:
    """Build the path or URL of a catalog file.

    Example:
        >>> assemble_path("/usr/share/locale", "de_AT", "app", CatalogFormat.MO)
        '/usr/share/locale/de_AT/LC_MESSAGES/app.mo'
    """
    return f"{base.rstrip('/')}/{locale}/{LC_MESSAGES}/{domain}.{catalog_format}"


def load_from_container(container: LocaleContainer, locale: str, domain: DomainName) -> Catalog:
    """Take a catalog from ``container[locale]["LC_MESSAGES"][domain]``.

    Args:
        container: Nested in-memory catalogs
        locale: Candidate locale string
        domain: Textdomain

    Returns:
        The stored catalog, normalized into a Catalog

    Raises:
        FileNotFoundError: If any level of the path is missing
        CatalogFormatError: If the stored object is not catalog-shaped
    """
    try:
        raw = container[locale][LC_MESSAGES][domain]
    except (KeyError, TypeError):
        msg = f"no catalog for {locale}/{LC_MESSAGES}/{domain} in container"
        raise FileNotFoundError(msg) from None
    return validate_json_catalog(raw)


@dataclass(frozen=True, slots=True)
class CatalogLoadResult:
    """Result of trying one catalog candidate.

    Attributes:
        locale_key: Locale key being resolved
        domain: Textdomain being resolved
        candidate: Locale candidate that was tried (e.g. "de_DE.UTF-8")
        source: Path, URL or container location that was tried
        status: Load status (success, not_found, error)
        error: Exception if status is ERROR, None otherwise
    """

    locale_key: LocaleKey
    domain: DomainName
    candidate: str
    source: str
    status: LoadStatus
    error: Exception | None = None

    @property
    def is_success(self) -> bool:
        """Check if the catalog was fetched and decoded."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """Check if no catalog existed at this candidate."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        """Check if the catalog existed but could not be used."""
        return self.status == LoadStatus.ERROR


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of candidate load results.

    Most candidates of a resolution are expected to be missing; only
    errors indicate a problem with deployed catalogs.

    Attributes:
        results: Individual load results, oldest first

    Example:
        >>> summary = registry.resolver.get_load_summary()
        >>> for result in summary.get_errors():
        ...     print(f"Broken catalog {result.source}: {result.error}")
    """

    results: tuple[CatalogLoadResult, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"not_found={self.not_found}, "
            f"errors={self.errors})"
        )

    @property
    def total_attempted(self) -> int:
        """Total number of candidate attempts."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of successful loads."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def not_found(self) -> int:
        """Number of missing candidates."""
        return sum(1 for r in self.results if r.is_not_found)

    @property
    def errors(self) -> int:
        """Number of unusable catalogs."""
        return sum(1 for r in self.results if r.is_error)

    @property
    def has_errors(self) -> bool:
        """Check if any candidate failed with an error."""
        return self.errors > 0

    def get_errors(self) -> tuple[CatalogLoadResult, ...]:
        """Get all results with errors."""
        return tuple(r for r in self.results if r.is_error)

    def get_not_found(self) -> tuple[CatalogLoadResult, ...]:
        """Get all results where no catalog existed."""
        return tuple(r for r in self.results if r.is_not_found)

    def get_successful(self) -> tuple[CatalogLoadResult, ...]:
        """Get all successful load results."""
        return tuple(r for r in self.results if r.is_success)

    def get_by_domain(self, domain: DomainName) -> tuple[CatalogLoadResult, ...]:
        """Get all results for a textdomain."""
        return tuple(r for r in self.results if r.domain == domain)

    def get_by_locale(self, locale_key: LocaleKey) -> tuple[CatalogLoadResult, ...]:
        """Get all results for a locale key."""
        return tuple(r for r in self.results if r.locale_key == locale_key)
