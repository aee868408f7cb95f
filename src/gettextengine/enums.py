"""Enumerations for gettextengine type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from __future__ import annotations

from enum import StrEnum


class CatalogFormat(StrEnum):
    """On-disk catalog format, doubling as the catalog file extension.

    StrEnum provides automatic string conversion: str(CatalogFormat.MO) == "mo"
    """

    MO = "mo"
    """Binary GNU gettext catalog: domain.mo"""

    MO_JSON = "mo.json"
    """JSON rendition of a compiled catalog: domain.mo.json"""

    JSON = "json"
    """Plain JSON catalog: domain.json"""

    @classmethod
    def parse(cls, value: str) -> CatalogFormat:
        """Look up a format by name, ignoring case.

        Args:
            value: Format name such as "mo", "MO" or "mo.json"

        Returns:
            The matching CatalogFormat member

        Raises:
            ValueError: If the name is not a supported format
        """
        try:
            return cls(value.lower())
        except ValueError:
            msg = f"unsupported format {value}"
            raise ValueError(msg) from None


class LoadStatus(StrEnum):
    """Outcome of a single catalog candidate load attempt.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """Catalog fetched and decoded"""

    NOT_FOUND = "not_found"
    """No catalog at this candidate location (expected for most candidates)"""

    ERROR = "error"
    """Catalog present but unreadable or undecodable"""


__all__ = [
    "CatalogFormat",
    "LoadStatus",
]
