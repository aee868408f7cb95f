"""Exception hierarchy for catalog resolution.

Every error raised inside the engine derives from CatalogError. The resolver
absorbs these (together with OSError and ValueError from transports) at its
boundary, so application code calling the lookup methods never sees them.
They surface only from the strict entry points: decoding a catalog directly,
compiling a plural rule directly, or setting an unusable locale.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "CatalogDecodeError",
    "CatalogError",
    "CatalogFormatError",
    "InvalidLocaleError",
    "PluralRuleError",
]


class CatalogError(Exception):
    """Base exception for all catalog engine errors."""


class CatalogDecodeError(CatalogError):
    """Binary or JSON catalog data could not be decoded.

    Raised for a bad MO magic number, an unsupported major revision,
    offsets pointing past the end of the buffer, unknown charsets, and
    syntactically invalid JSON.

    Attributes:
        offset: Byte offset at which decoding failed, if known
    """

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        """Initialize CatalogDecodeError.

        Args:
            message: Human-readable description of the failure
            offset: Byte offset at which decoding failed, if known
        """
        super().__init__(message)
        self.offset = offset


class CatalogFormatError(CatalogError, ValueError):
    """A catalog object does not have the expected shape.

    Raised when normalizing a mapping (decoded JSON, an entry of a
    LocaleContainer, or a raw object stored in the cache) into a Catalog.
    """


class InvalidLocaleError(CatalogError, ValueError):
    """A locale identifier does not match the locale grammar.

    Attributes:
        locale: The rejected identifier
    """

    def __init__(self, locale: str) -> None:
        """Initialize InvalidLocaleError.

        Args:
            locale: The rejected identifier
        """
        super().__init__(f"invalid locale identifier: {locale!r}")
        self.locale = locale


class PluralRuleError(CatalogError):
    """A Plural-Forms declaration was rejected by the compiler.

    Attributes:
        declaration: The rejected declaration text
    """

    def __init__(self, message: str, declaration: str) -> None:
        """Initialize PluralRuleError.

        Args:
            message: Reason for the rejection
            declaration: The rejected declaration text
        """
        super().__init__(f"{message}: {declaration!r}")
        self.declaration = declaration
