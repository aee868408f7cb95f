"""Message lookup against a resolved catalog.

Pure functions: no I/O, no caching, never raises. A catalog's declared plural
rule and the number of forms a translator actually supplied can disagree
(malformed headers, partial translations), so the plural index is clamped
rather than trusted.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from gettextengine.constants import CONTEXT_SEPARATOR
from gettextengine.runtime.catalog import Catalog
from gettextengine.runtime.plural_rules import germanic_plural

__all__ = ["lookup_message", "message_key"]


def message_key(msgid: str, msgctxt: str | None = None) -> str:
    """Build the catalog key for a message.

    Example:
        >>> message_key("View", "Which folder...")
        'Which folder...\\x04View'
    """
    if msgctxt is None:
        return msgid
    return msgctxt + CONTEXT_SEPARATOR + msgid


def lookup_message(
    catalog: Catalog,
    msgid: str,
    *,
    msgctxt: str | None = None,
    msgid_plural: str | None = None,
    num_items: int = 1,
) -> str:
    """Resolve the translated string for a message.

    A context miss does not fall back to the context-free translation; it
    falls back to the untranslated msgid.

    Args:
        catalog: Resolved catalog
        msgid: Untranslated singular text
        msgctxt: Optional disambiguating context
        msgid_plural: Untranslated plural text; requests plural selection
        num_items: Item count for plural selection

    Returns:
        The translation, or msgid/msgid_plural if untranslated

    Example:
        >>> catalog = Catalog(entries={"one year": ["ein Jahr", "Jahre"]})
        >>> lookup_message(catalog, "one year", msgid_plural="years", num_items=3)
        'Jahre'
        >>> lookup_message(catalog, "one day", msgid_plural="days", num_items=3)
        'days'
    """
    translations = catalog.entries.get(message_key(msgid, msgctxt))

    if translations:
        if msgid_plural is None:
            return translations[0]

        index = catalog.plural_rule(num_items)
        if not 0 <= index < len(translations):
            if len(translations) == 1:
                return translations[0]
            index = germanic_plural(num_items)
        return translations[index]

    if msgid_plural is not None and catalog.plural_rule(num_items) == 1:
        return msgid_plural

    return msgid
