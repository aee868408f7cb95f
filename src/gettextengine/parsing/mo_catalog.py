"""Binary MO catalog decoder.

Layout (all fields unsigned 32-bit, byte order given by the magic number):

    offset  0: magic             0x950412de
    offset  4: revision          major << 16 | minor
    offset  8: string count      N
    offset 12: originals table   offset of N (length, offset) pairs
    offset 16: translations table offset of N (length, offset) pairs

Original strings hold the msgid (``msgctxt\\x04msgid`` for messages with a
context, ``msgid\\x00msgid_plural`` for plural messages; only the part before
the first NUL is used as key). Translation strings hold the forms separated
by NUL.

The header entry (empty msgid at index 0) is decoded as ASCII. Its
Content-Type charset then applies to every later string of the same file.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import codecs
import logging
import struct

from gettextengine.constants import (
    MO_HEADER_ENCODING,
    MO_HEADER_SIZE,
    MO_MAGIC,
    MO_MAGIC_SWAPPED,
)
from gettextengine.errors import CatalogDecodeError
from gettextengine.runtime.catalog import Catalog, parse_header

__all__ = ["parse_mo_catalog"]

logger = logging.getLogger(__name__)


class _Reader:
    """Bounds-checked reader over the catalog bytes."""

    __slots__ = ("_data", "_word", "encoding")

    def __init__(self, data: bytes, word: struct.Struct) -> None:
        self._data = data
        self._word = word
        self.encoding = MO_HEADER_ENCODING

    def uint32(self, offset: int) -> int:
        if offset + 4 > len(self._data):
            msg = "read past end of catalog"
            raise CatalogDecodeError(msg, offset=offset)
        value: int = self._word.unpack_from(self._data, offset)[0]
        return value

    def table(self, offset: int, count: int) -> list[tuple[int, int]]:
        return [
            (self.uint32(offset + 8 * i), self.uint32(offset + 8 * i + 4)) for i in range(count)
        ]

    def string(self, length: int, offset: int) -> str:
        if offset + length > len(self._data):
            msg = "string extends past end of catalog"
            raise CatalogDecodeError(msg, offset=offset)
        return self._data[offset : offset + length].decode(self.encoding, errors="replace")


def _charset_from_content_type(content_type: str) -> str | None:
    """Extract the value after the last '=' of a Content-Type header."""
    _, equals, charset = content_type.rpartition("=")
    return charset.strip() if equals else None


def parse_mo_catalog(data: bytes) -> Catalog:
    """Decode a binary MO catalog.

    Args:
        data: Raw file contents

    Returns:
        Catalog with the germanic plural rule. The resolver assigns the
        header's rule after merging.

    Raises:
        CatalogDecodeError: For a bad magic number, a major revision other
            than 0, offsets past the end of the data, or an unknown charset

    Example:
        >>> catalog = parse_mo_catalog(Path("de/LC_MESSAGES/app.mo").read_bytes())
        >>> catalog.entries["one year"]
        ('ein Jahr', 'Jahre')
    """
    if len(data) < MO_HEADER_SIZE:
        msg = f"catalog too short: {len(data)} bytes"
        raise CatalogDecodeError(msg, offset=0)

    (magic,) = struct.unpack_from("<I", data, 0)
    if magic == MO_MAGIC:
        reader = _Reader(data, struct.Struct("<I"))
    elif magic == MO_MAGIC_SWAPPED:
        reader = _Reader(data, struct.Struct(">I"))
    else:
        msg = f"invalid MO magic 0x{magic:08x}"
        raise CatalogDecodeError(msg, offset=0)

    revision = reader.uint32(4)
    major, minor = revision >> 16, revision & 0xFFFF
    if major > 0:
        msg = f"unsupported major revision {major}"
        raise CatalogDecodeError(msg, offset=4)

    count = reader.uint32(8)
    originals = reader.table(reader.uint32(12), count)
    translations = reader.table(reader.uint32(16), count)

    entries: dict[str, tuple[str, ...]] = {}
    for index, ((orig_len, orig_off), (trans_len, trans_off)) in enumerate(
        zip(originals, translations, strict=True)
    ):
        msgid = reader.string(orig_len, orig_off).split("\x00")[0]
        forms = tuple(reader.string(trans_len, trans_off).split("\x00"))

        if index == 0 and msgid == "":
            content_type = parse_header(forms[0]).get("content-type")
            charset = _charset_from_content_type(content_type) if content_type else None
            if charset:
                try:
                    encoding = codecs.lookup(charset).name
                    # Rejects bytes-to-bytes codecs such as base64 and hex
                    b"".decode(encoding)
                except LookupError:
                    msg = f"unsupported charset {charset!r}"
                    raise CatalogDecodeError(msg, offset=trans_off) from None
                reader.encoding = encoding

        entries[msgid] = forms

    logger.debug("Decoded MO catalog: %d entries, charset %s", len(entries), reader.encoding)
    return Catalog(entries=entries, major=major, minor=minor)
