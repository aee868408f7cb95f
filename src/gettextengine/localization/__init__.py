"""Textdomain registry, catalog resolution and transports.

Submodules:
    types       - PEP 695 type aliases (LocaleKey, DomainName, LocaleContainer, CatalogSource)
    config      - EngineConfig
    transport   - Transport protocol, FileTransport, HttpTransport, SchemeTransport
    loading     - Catalog paths, LocaleContainer access, CatalogLoadResult, LoadSummary
    resolver    - CatalogResolver (candidate search, concurrent loading, merge, cache)
    negotiation - select_locale()
    textdomain  - TextdomainRegistry, Textdomain, placeholder expansion, N_ markers

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from gettextengine.enums import LoadStatus
from gettextengine.localization.config import EngineConfig
from gettextengine.localization.loading import (
    CatalogLoadResult,
    LoadSummary,
    assemble_path,
    load_from_container,
)
from gettextengine.localization.negotiation import select_locale
from gettextengine.localization.resolver import CatalogResolver
from gettextengine.localization.textdomain import (
    N_,
    N_p,
    N_px,
    N_x,
    Placeholders,
    Textdomain,
    TextdomainRegistry,
    expand_placeholders,
)
from gettextengine.localization.transport import (
    FileTransport,
    HttpTransport,
    SchemeTransport,
    Transport,
    is_network_url,
)
from gettextengine.localization.types import CatalogSource, DomainName, LocaleContainer, LocaleKey

__all__ = [
    # Application API
    "TextdomainRegistry",
    "Textdomain",
    "EngineConfig",
    "select_locale",
    "expand_placeholders",
    "Placeholders",
    "N_",
    "N_x",
    "N_p",
    "N_px",
    # Resolution
    "CatalogResolver",
    "assemble_path",
    "load_from_container",
    # Transports
    "Transport",
    "FileTransport",
    "HttpTransport",
    "SchemeTransport",
    "is_network_url",
    # Load tracking
    "LoadStatus",
    "LoadSummary",
    "CatalogLoadResult",
    # Type aliases for user code type annotations
    "CatalogSource",
    "DomainName",
    "LocaleContainer",
    "LocaleKey",
]
