"""Shared constants for gettextengine.

Centralized here to avoid circular imports between the parsing, runtime and
localization packages.

Constants are grouped by domain:
- Lookup keys: Context separator and the "no locale" sentinels
- MO format: Magic numbers and header layout
- Limits: Recursion and history bounds
- Loading: Directory layout and transport defaults

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Lookup keys
    "CONTEXT_SEPARATOR",
    "NO_LOCALE",
    "POSIX_LOCALE",
    "NO_LOCALE_KEYS",
    # MO format
    "MO_MAGIC",
    "MO_MAGIC_SWAPPED",
    "MO_HEADER_SIZE",
    "MO_HEADER_ENCODING",
    # Limits
    "MAX_PLURAL_DEPTH",
    "MAX_LOAD_RESULTS",
    # Loading
    "LC_MESSAGES",
    "DEFAULT_LOCALE_DIR",
    "DEFAULT_HTTP_TIMEOUT",
]

# ============================================================================
# LOOKUP KEYS
# ============================================================================

# Joins msgctxt and msgid into a single catalog key ("ctxt\x04msgid").
CONTEXT_SEPARATOR: str = "\x04"

# Locale identifier meaning "do not translate".
NO_LOCALE: str = "C"

# Canonical spelling stored by the registry when the C locale is selected.
POSIX_LOCALE: str = "POSIX"

# Locale keys for which resolution short-circuits to the empty catalog.
NO_LOCALE_KEYS: frozenset[str] = frozenset({NO_LOCALE, POSIX_LOCALE})

# ============================================================================
# MO FORMAT
# ============================================================================

# Magic number as read little-endian from a little-endian file.
MO_MAGIC: int = 0x950412DE

# The same magic read little-endian from a big-endian file.
MO_MAGIC_SWAPPED: int = 0xDE120495

# magic, revision, string count, original table offset, translation table offset
MO_HEADER_SIZE: int = 20

# Charset for the header entry and for catalogs without a Content-Type charset.
MO_HEADER_ENCODING: str = "ascii"

# ============================================================================
# LIMITS
# ============================================================================

# Maximum nesting depth of a plural expression. Plural-Forms headers in the
# wild nest at most four or five levels; deeper input is treated as hostile.
MAX_PLURAL_DEPTH: int = 32

# Default number of candidate load results retained for diagnostics.
MAX_LOAD_RESULTS: int = 1000

# ============================================================================
# LOADING
# ============================================================================

# Locale category directory between the locale and the domain file.
LC_MESSAGES: str = "LC_MESSAGES"

# Directory searched when a textdomain was never bound.
DEFAULT_LOCALE_DIR: str = "locale"

# Seconds before an HTTP catalog fetch is abandoned.
DEFAULT_HTTP_TIMEOUT: float = 10.0
