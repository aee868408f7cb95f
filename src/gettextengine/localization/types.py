"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating call sites.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeAlias

from gettextengine.runtime.catalog import Catalog

__all__ = [
    "CatalogSource",
    "DomainName",
    "LocaleContainer",
    "LocaleKey",
]

LocaleKey: TypeAlias = str
"""Locale identifier used as cache key (e.g., 'de_DE.UTF-8@euro', 'fr-CA')."""

DomainName: TypeAlias = str
"""Textdomain: basename of an application's or library's catalog files."""

LocaleContainer: TypeAlias = Mapping[str, Mapping[str, Mapping[str, Catalog | Mapping[str, object]]]]
"""In-memory catalogs laid out like the directory tree:
locale -> "LC_MESSAGES" -> domain -> Catalog (or catalog-shaped mapping)."""

CatalogSource: TypeAlias = str | LocaleContainer
"""What a textdomain is bound to: a base path/URL or a LocaleContainer."""
