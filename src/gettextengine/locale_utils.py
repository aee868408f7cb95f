"""Locale identifier parsing and fallback candidate generation.

Locale identifiers follow the POSIX shape ``language[_REGION][.charset][@modifier]``
or its BCP-47 counterpart with hyphens (``de-DE``). This module splits such
identifiers into their parts, expands them into the ordered directory
candidates searched when loading catalogs, and detects the user's preferred
locales from the environment.

Python 3.13+.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import TypeAlias

from gettextengine.constants import NO_LOCALE_KEYS
from gettextengine.errors import InvalidLocaleError

__all__ = [
    "LocaleIdentifier",
    "explode_locale",
    "get_system_locales",
    "normalize_locale",
    "split_locale",
]

CandidateRow: TypeAlias = list[str]
"""Locale strings sharing one tag prefix, most specific charset first."""

CandidateSet: TypeAlias = list[CandidateRow]
"""Candidate rows ordered language first, then language+region, ..."""

_MODIFIER_PATTERN = re.compile(r"@([a-z]+)\Z", re.IGNORECASE)
_CHARSET_PATTERN = re.compile(r"\.([-0-9a-z]+)\Z", re.IGNORECASE)
_TAGS_HYPHEN_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*\Z", re.IGNORECASE)
_TAGS_UNDERSCORE_PATTERN = re.compile(r"^[a-z0-9]+(?:_[a-z0-9]+)*\Z", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class LocaleIdentifier:
    """Structured form of a locale identifier.

    Attributes:
        tags: Language tag followed by optional region (and further subtags)
        underscore_separator: True if the tags were joined with "_", False for "-"
        charset: Charset suffix without the leading dot, as given
        modifier: Modifier suffix without the leading "@", as given
    """

    tags: tuple[str, ...]
    underscore_separator: bool
    charset: str | None = None
    modifier: str | None = None

    @property
    def separator(self) -> str:
        """Tag separator used in the original identifier."""
        return "_" if self.underscore_separator else "-"

    @property
    def language(self) -> str:
        """First tag (the language)."""
        return self.tags[0]

    def __str__(self) -> str:
        """Re-serialize to ``tags[.charset][@modifier]``."""
        text = self.separator.join(self.tags)
        if self.charset is not None:
            text += "." + self.charset
        if self.modifier is not None:
            text += "@" + self.modifier
        return text


def split_locale(locale: str) -> LocaleIdentifier | None:
    """Parse a locale identifier into its parts.

    The modifier is stripped before the charset because it is the rightmost
    suffix. The separator style is decided by the presence of an underscore
    anywhere in the input, so mixed separators ("de_DE-x") are rejected.

    Args:
        locale: Raw identifier such as "de_DE.utf-8@ksh" or "en-US"

    Returns:
        LocaleIdentifier, or None if the tags do not match the grammar

    Example:
        >>> ident = split_locale("de_DE.utf-8@ksh")
        >>> ident.tags, ident.charset, ident.modifier
        (('de', 'DE'), 'utf-8', 'ksh')
        >>> split_locale("de DE") is None
        True
    """
    underscore_separator = "_" in locale
    modifier: str | None = None
    charset: str | None = None

    if match := _MODIFIER_PATTERN.search(locale):
        modifier = match.group(1)
        locale = locale[: match.start()]

    if match := _CHARSET_PATTERN.search(locale):
        charset = match.group(1)
        locale = locale[: match.start()]

    pattern = _TAGS_UNDERSCORE_PATTERN if underscore_separator else _TAGS_HYPHEN_PATTERN
    if not pattern.match(locale):
        return None

    separator = "_" if underscore_separator else "-"
    return LocaleIdentifier(
        tags=tuple(locale.split(separator)),
        underscore_separator=underscore_separator,
        charset=charset,
        modifier=modifier,
    )


def explode_locale(identifier: LocaleIdentifier, *, vary: bool = False) -> CandidateSet:
    """Expand a locale into the rows of candidates searched for catalogs.

    With ``vary=True`` (the region-fallback mode used by the resolver) one row
    is produced per tag prefix, and each row lists the charset as given, the
    upper-cased charset (only if different) and no charset at all. Without it
    only the full tag sequence with the charset as given is produced.

    Args:
        identifier: Parsed locale identifier
        vary: Produce all prefix rows and charset variants

    Returns:
        Rows in increasing specificity, each in decreasing charset specificity

    Example:
        >>> explode_locale(split_locale("de_DE.utf-8@ksh"), vary=True)
        [['de.utf-8@ksh', 'de.UTF-8@ksh', 'de@ksh'], ['de_DE.utf-8@ksh', 'de_DE.UTF-8@ksh', 'de_DE@ksh']]
    """
    charsets: list[str] = [identifier.charset] if identifier.charset is not None else [""]
    if vary and identifier.charset is not None:
        upper = identifier.charset.upper()
        if upper != identifier.charset:
            charsets.append(upper)
        charsets.append("")

    suffix = "@" + identifier.modifier if identifier.modifier is not None else ""
    first = 1 if vary else len(identifier.tags)

    rows: CandidateSet = []
    for length in range(first, len(identifier.tags) + 1):
        lingua = identifier.separator.join(identifier.tags[:length])
        rows.append(
            [f"{lingua}.{charset}{suffix}" if charset else lingua + suffix for charset in charsets]
        )
    return rows


def normalize_locale(locale: str) -> str:
    """Canonicalize letter case of a locale identifier.

    The language is lower-cased and the region upper-cased; separator,
    charset and modifier are kept as given. This is the form used for
    catalog directory lookups outside the browser-style pass-through mode.

    Args:
        locale: Raw identifier

    Returns:
        Case-normalized identifier

    Raises:
        InvalidLocaleError: If the identifier does not parse

    Example:
        >>> normalize_locale("DE_at.UTF-8@euro")
        'de_AT.UTF-8@euro'
    """
    identifier = split_locale(locale)
    if identifier is None:
        raise InvalidLocaleError(locale)

    tags = list(identifier.tags)
    tags[0] = tags[0].lower()
    if len(tags) > 1:
        tags[1] = tags[1].upper()
    return str(
        LocaleIdentifier(
            tags=tuple(tags),
            underscore_separator=identifier.underscore_separator,
            charset=identifier.charset,
            modifier=identifier.modifier,
        )
    )


def get_system_locales() -> list[str]:
    """Detect the user's preferred locales from environment variables.

    Detection order:
    1. LANGUAGE (colon-separated priority list, GNU extension)
    2. LC_ALL (overrides all categories)
    3. LC_MESSAGES (message catalog category)
    4. LANG (default locale)

    Charset suffixes are dropped, "C" and "POSIX" are ignored, and
    duplicates keep their first position.

    Returns:
        Locales in order of preference, or ["C"] if none is set

    Example:
        >>> import os
        >>> os.environ["LANGUAGE"] = "de_AT:de"
        >>> os.environ["LANG"] = "de_AT.UTF-8"
        >>> get_system_locales()
        ['de_AT', 'de']
    """
    found: list[str] = []
    for var in ("LANGUAGE", "LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var, "")
        for item in value.split(":"):
            identifier = split_locale(item) if item else None
            if identifier is None:
                continue
            stripped = str(
                LocaleIdentifier(
                    tags=identifier.tags,
                    underscore_separator=identifier.underscore_separator,
                    modifier=identifier.modifier,
                )
            )
            if stripped not in NO_LOCALE_KEYS:
                found.append(stripped)

    # dict.fromkeys() removes duplicates while maintaining insertion order
    return list(dict.fromkeys(found)) or ["C"]
