"""gettextengine - gettext-style runtime localization with async catalog loading.

Locates, decodes, merges and caches GNU gettext catalogs (binary MO or
JSON) for a requested locale, and translates messages with context,
plural forms and placeholders. Catalog content is untrusted: plural rules
are parsed by a small expression grammar, never executed as code.

Public API:
    TextdomainRegistry - Active locale, textdomains and catalog cache
    Textdomain - Translation methods (_, _n, _p, _x, ...) for one domain
    EngineConfig - Registry configuration
    CatalogResolver - Locale-fallback catalog resolution
    select_locale - Locale negotiation
    lookup_message - Message lookup against a Catalog

Exceptions:
    CatalogError - Base exception class
    CatalogDecodeError - Undecodable MO/JSON data
    CatalogFormatError - Catalog object of the wrong shape
    InvalidLocaleError - Unparseable locale identifier
    PluralRuleError - Rejected Plural-Forms declaration

Submodules:
    gettextengine.parsing - MO and JSON catalog decoders
    gettextengine.runtime - Catalog model, plural rules, cache, lookup
    gettextengine.localization - Registry, resolver, transports, diagnostics
    gettextengine.locale_utils - Locale parsing and candidate generation
"""

from .errors import (
    CatalogDecodeError,
    CatalogError,
    CatalogFormatError,
    InvalidLocaleError,
    PluralRuleError,
)
from .localization import (
    N_,
    CatalogResolver,
    EngineConfig,
    N_p,
    N_px,
    N_x,
    Textdomain,
    TextdomainRegistry,
    select_locale,
)
from .runtime import Catalog, lookup_message

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("gettextengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Catalog",
    "CatalogDecodeError",
    "CatalogError",
    "CatalogFormatError",
    "CatalogResolver",
    "EngineConfig",
    "InvalidLocaleError",
    "N_",
    "N_p",
    "N_px",
    "N_x",
    "PluralRuleError",
    "Textdomain",
    "TextdomainRegistry",
    "__version__",
    "lookup_message",
    "select_locale",
]
