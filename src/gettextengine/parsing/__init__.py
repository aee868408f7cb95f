"""Catalog decoders.

Turns raw catalog bytes into Catalog objects:
    parse_mo_catalog   - binary GNU MO files (little- and big-endian)
    parse_json_catalog - mo.json / json files
    get_catalog_parser - decoder for a CatalogFormat

Python 3.13+.
"""

from collections.abc import Callable

from gettextengine.enums import CatalogFormat
from gettextengine.runtime.catalog import Catalog

from .json_catalog import parse_json_catalog, validate_json_catalog
from .mo_catalog import parse_mo_catalog

__all__ = [
    "get_catalog_parser",
    "parse_json_catalog",
    "parse_mo_catalog",
    "validate_json_catalog",
]


def get_catalog_parser(catalog_format: CatalogFormat) -> Callable[[bytes], Catalog]:
    """Return the decoder for a catalog format."""
    match catalog_format:
        case CatalogFormat.MO:
            return parse_mo_catalog
        case CatalogFormat.MO_JSON | CatalogFormat.JSON:
            return parse_json_catalog
