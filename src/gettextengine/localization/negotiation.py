"""Locale negotiation.

Picks one supported locale for a list of requested locales. Selection only;
nothing is loaded here.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Sequence

from gettextengine.constants import NO_LOCALE
from gettextengine.locale_utils import LocaleIdentifier, split_locale

__all__ = ["select_locale"]


def _tags_equal(left: LocaleIdentifier, right: LocaleIdentifier) -> bool:
    if len(left.tags) != len(right.tags):
        return False
    return all(a.lower() == b.lower() for a, b in zip(left.tags, right.tags, strict=True))


def select_locale(supported: Sequence[str], requested: Sequence[str]) -> str:
    """Select the best supported locale for the requested ones.

    Requested locales are visited in order of preference. The first
    supported locale whose tags equal a requested locale's tags
    (case-insensitively, charset and modifier ignored) wins immediately.
    Without any exact match, the first supported locale sharing the
    language of a requested locale is returned. Unparseable entries on
    either side are skipped.

    Args:
        supported: Locales the application ships catalogs for
        requested: Locales the user accepts, most preferred first

    Returns:
        One of the supported locales (unmodified), or "C" if none matches

    Example:
        >>> select_locale(["fi", "de-DE", "en-US", "de-AT"], ["fr", "de-CH", "en-US"])
        'en-US'
        >>> select_locale(["fi", "de-DE"], ["fr", "de-CH", "it-IT"])
        'de-DE'
    """
    parsed_supported = [(locale, split_locale(locale)) for locale in supported]
    language_match: str | None = None

    for wanted_locale in requested:
        wanted = split_locale(wanted_locale)
        if wanted is None:
            continue

        for locale, got in parsed_supported:
            if got is None:
                continue
            if _tags_equal(wanted, got):
                return locale
            if language_match is None and wanted.language.lower() == got.language.lower():
                language_match = locale

    return language_match if language_match is not None else NO_LOCALE
