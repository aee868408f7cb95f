"""JSON catalog decoder for the ``mo.json`` and ``json`` formats.

Both formats carry the same object: ``{"major": 0, "minor": 0, "entries":
{key: [forms...]}}``, UTF-8 encoded.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json

from gettextengine.errors import CatalogDecodeError
from gettextengine.runtime.catalog import Catalog, validate_json_catalog

__all__ = ["parse_json_catalog", "validate_json_catalog"]


def parse_json_catalog(data: bytes) -> Catalog:
    """Decode a JSON catalog.

    Args:
        data: Raw file contents

    Returns:
        Catalog with the germanic plural rule

    Raises:
        CatalogDecodeError: If data is not valid UTF-8 JSON or nests too deeply
        CatalogFormatError: If the JSON is not catalog-shaped
    """
    try:
        decoded = json.loads(data.decode("utf-8"))
    except UnicodeDecodeError as e:
        msg = f"catalog is not valid UTF-8: {e.reason}"
        raise CatalogDecodeError(msg, offset=e.start) from e
    except json.JSONDecodeError as e:
        msg = f"catalog is not valid JSON: {e.msg}"
        raise CatalogDecodeError(msg, offset=e.pos) from e
    except RecursionError:
        msg = "catalog nested too deeply"
        raise CatalogDecodeError(msg) from None

    return validate_json_catalog(decoded)
