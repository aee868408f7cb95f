"""Hypothesis strategies for gettextengine property-based testing.

Usage:
    from tests.strategies import counts, locale_identifiers, message_keys
"""

from .locales import counts, locale_identifiers, message_keys

__all__ = [
    "counts",
    "locale_identifiers",
    "message_keys",
]
