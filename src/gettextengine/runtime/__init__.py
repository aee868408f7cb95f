"""Runtime catalog model, plural rules, cache and message lookup.

Submodules:
    catalog      - Catalog model, header parsing, ordered merge
    plural_rules - Safe Plural-Forms compiler and the germanic default rule
    cache        - CatalogCache keyed by (locale key, domain)
    lookup       - lookup_message(): the final translation step

Python 3.13+.
"""

from .cache import CacheValue, CatalogCache
from .catalog import (
    Catalog,
    CatalogEntries,
    empty_catalog,
    merge_catalogs,
    merge_entries,
    parse_header,
    validate_json_catalog,
    with_plural_rule,
)
from .lookup import lookup_message, message_key
from .plural_rules import (
    PluralFunction,
    PluralRule,
    compile_plural_forms,
    germanic_plural,
    plural_rule_from_declaration,
    plural_rule_from_header,
)

__all__ = [
    "CacheValue",
    "Catalog",
    "CatalogCache",
    "CatalogEntries",
    "PluralFunction",
    "PluralRule",
    "compile_plural_forms",
    "empty_catalog",
    "germanic_plural",
    "lookup_message",
    "merge_catalogs",
    "merge_entries",
    "message_key",
    "parse_header",
    "plural_rule_from_declaration",
    "plural_rule_from_header",
    "validate_json_catalog",
    "with_plural_rule",
]
