"""In-memory message catalog model.

A Catalog maps message keys to translated forms. The key is the msgid, or
``msgctxt + "\\x04" + msgid`` for messages with a context. Index 0 of the
forms is the singular translation; indices 1 and up are the plural forms in
the order the target language's plural rule numbers them. The entry with the
empty key holds the catalog header (``Key: value`` lines).

Catalogs are immutable once built. Merging and plural-rule assignment return
new instances, so a catalog published to the cache can be shared freely.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TypeAlias

from gettextengine.errors import CatalogFormatError
from gettextengine.runtime.plural_rules import (
    PluralFunction,
    germanic_plural,
    plural_rule_from_header,
)

__all__ = [
    "Catalog",
    "CatalogEntries",
    "empty_catalog",
    "merge_catalogs",
    "merge_entries",
    "parse_header",
    "validate_json_catalog",
    "with_plural_rule",
]

CatalogEntries: TypeAlias = Mapping[str, tuple[str, ...]]
"""Message key -> translated forms."""


@dataclass(frozen=True, slots=True)
class Catalog:
    """A decoded message catalog.

    Entries are frozen into a read-only mapping with tuple values at
    construction, whatever mapping/sequence types were passed in.

    Attributes:
        entries: Message key -> translated forms
        plural_rule: Maps an item count to a plural form index
        major: Format major revision (always 0 for supported catalogs)
        minor: Format minor revision
    """

    entries: CatalogEntries = field(default_factory=dict)
    plural_rule: PluralFunction = germanic_plural
    major: int = 0
    minor: int = 0

    def __post_init__(self) -> None:
        frozen = {key: tuple(forms) for key, forms in self.entries.items()}
        object.__setattr__(self, "entries", MappingProxyType(frozen))

    @property
    def header(self) -> str | None:
        """Translation of the empty msgid, if the catalog has one."""
        forms = self.entries.get("")
        return forms[0] if forms else None

    @property
    def headers(self) -> dict[str, str]:
        """Parsed header fields with lower-cased keys."""
        return parse_header(self.header or "")


def empty_catalog() -> Catalog:
    """Catalog with no entries and the germanic plural rule.

    Lookups against it echo the untranslated message back.
    """
    return Catalog()


def parse_header(text: str) -> dict[str, str]:
    """Parse ``Key: value`` header lines.

    Keys are lower-cased; surrounding blanks around the first colon are
    dropped. Lines without a colon are ignored.

    Example:
        >>> parse_header("Content-Type: text/plain; charset=UTF-8\\n")
        {'content-type': 'text/plain; charset=UTF-8'}
    """
    fields: dict[str, str] = {}
    for line in text.split("\n"):
        key, colon, value = line.partition(":")
        if colon:
            fields[key.strip(" \t").lower()] = value.strip(" \t")
    return fields


def merge_entries(base: CatalogEntries, overlay: CatalogEntries) -> dict[str, tuple[str, ...]]:
    """Superimpose overlay entries on base entries.

    Keys present in both take the overlay's forms; keys present in only one
    side are kept. Neither argument is modified.

    Args:
        base: Less specific entries
        overlay: More specific entries (win on conflict)

    Returns:
        New merged mapping
    """
    merged = dict(base)
    merged.update(overlay)
    return merged


def merge_catalogs(catalogs: Iterable[Catalog]) -> Catalog:
    """Merge catalogs from least to most specific.

    Later catalogs override earlier ones key by key. The revision numbers
    are taken from the last catalog. The plural rule of the result is the
    germanic default; call with_plural_rule() to derive it from the merged
    header.

    Args:
        catalogs: Catalogs in increasing specificity

    Returns:
        Merged catalog (empty if catalogs is empty)
    """
    entries: dict[str, tuple[str, ...]] = {}
    major = minor = 0
    for catalog in catalogs:
        entries = merge_entries(entries, catalog.entries)
        major, minor = catalog.major, catalog.minor
    return Catalog(entries=entries, major=major, minor=minor)


def with_plural_rule(catalog: Catalog) -> Catalog:
    """Return the catalog with its plural rule compiled from its header.

    Catalogs without a header entry are returned unchanged.
    """
    if "" not in catalog.entries:
        return catalog
    return dataclasses.replace(catalog, plural_rule=plural_rule_from_header(catalog.header))


def validate_json_catalog(data: object) -> Catalog:
    """Normalize a catalog-shaped object into a Catalog.

    Accepts Catalog instances unchanged and mappings shaped like decoded
    JSON catalogs: ``{"major": 0, "minor": 0, "entries": {key: [forms]}}``.
    Revision numbers are optional.

    Args:
        data: Catalog or mapping

    Returns:
        Catalog

    Raises:
        CatalogFormatError: If data is not catalog-shaped
    """
    if isinstance(data, Catalog):
        return data

    if data is None:
        msg = "catalog is either null or undefined"
        raise CatalogFormatError(msg)

    if not isinstance(data, Mapping):
        msg = "catalog must be a dictionary"
        raise CatalogFormatError(msg)

    if "entries" not in data:
        msg = "catalog.entries does not exist"
        raise CatalogFormatError(msg)

    entries = data["entries"]
    if entries is None:
        msg = "catalog.entries are not defined or null"
        raise CatalogFormatError(msg)

    if not isinstance(entries, Mapping):
        msg = "catalog.entries must be a dictionary"
        raise CatalogFormatError(msg)

    for key, value in entries.items():
        if not isinstance(value, list | tuple):
            msg = f"catalog entry for key '{key}' is not an array"
            raise CatalogFormatError(msg)

    major = data.get("major", 0)
    minor = data.get("minor", 0)
    return Catalog(
        entries={str(key): tuple(str(form) for form in forms) for key, forms in entries.items()},
        major=major if isinstance(major, int) else 0,
        minor=minor if isinstance(minor, int) else 0,
    )
