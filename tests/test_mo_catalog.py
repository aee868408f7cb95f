"""Tests for the binary MO catalog decoder."""

import struct

import pytest

from gettextengine.constants import MO_MAGIC
from gettextengine.enums import CatalogFormat
from gettextengine.errors import CatalogDecodeError, CatalogError
from gettextengine.parsing import get_catalog_parser, parse_json_catalog, parse_mo_catalog
from gettextengine.runtime.plural_rules import germanic_plural
from tests.helpers.catalogs import babel_mo, pack_mo

_UTF8_HEADER = (
    "Content-Type: text/plain; charset=UTF-8\n"
    "Plural-Forms: nplurals=2; plural=(n != 1);\n"
)


class TestParseMoCatalogBabel:
    """Decode MO files written by Babel."""

    def test_plural_entry(self) -> None:
        """Plural forms are split on NUL; the key is the singular msgid."""
        catalog = parse_mo_catalog(babel_mo("de", (("one year", "years"), ("ein Jahr", "Jahre"))))
        assert catalog.entries["one year"] == ("ein Jahr", "Jahre")

    def test_header_entry(self) -> None:
        """The empty msgid holds the header with Babel's Plural-Forms."""
        catalog = parse_mo_catalog(babel_mo("de", ("Open", "Öffnen")))
        assert catalog.headers["plural-forms"] == "nplurals=2; plural=(n != 1);"
        assert "charset=utf-8" in catalog.headers["content-type"]

    def test_utf8_after_header(self) -> None:
        """Strings after the header are decoded with the declared charset."""
        catalog = parse_mo_catalog(babel_mo("de", ("Open", "Öffnen")))
        assert catalog.entries["Open"] == ("Öffnen",)

    def test_context_entry(self) -> None:
        """Context messages are keyed msgctxt + EOT + msgid."""
        catalog = parse_mo_catalog(
            babel_mo("de", ("View", "Anzeigen"), ("View", "Ansicht", "Which folder..."))
        )
        assert catalog.entries["View"] == ("Anzeigen",)
        assert catalog.entries["Which folder...\x04View"] == ("Ansicht",)

    def test_revision_and_default_rule(self) -> None:
        """Revision 0.0; the decoder leaves the germanic rule in place."""
        catalog = parse_mo_catalog(babel_mo("de", ("Open", "Öffnen")))
        assert (catalog.major, catalog.minor) == (0, 0)
        assert catalog.plural_rule is germanic_plural

    def test_polish_three_forms(self) -> None:
        """All plural forms survive."""
        catalog = parse_mo_catalog(
            babel_mo("pl", (("file", "files"), ("plik", "pliki", "plików")))
        )
        assert catalog.entries["file"] == ("plik", "pliki", "plików")


class TestParseMoCatalogPacked:
    """Decode hand-packed MO files."""

    def test_round_trip(self) -> None:
        """Packing then decoding reproduces the entries."""
        entries = {"": [_UTF8_HEADER], "one year\x00years": ["ein Jahr", "Jahre"]}
        catalog = parse_mo_catalog(pack_mo(entries))
        assert catalog.entries == {"": (_UTF8_HEADER,), "one year": ("ein Jahr", "Jahre")}

    def test_big_endian(self) -> None:
        """Byte-swapped magic selects big-endian reads."""
        entries = {"": [_UTF8_HEADER], "one year\x00years": ["ein Jahr", "Jahre"]}
        little = parse_mo_catalog(pack_mo(entries))
        big = parse_mo_catalog(pack_mo(entries, byteorder=">"))
        assert big == little

    def test_minor_revision(self) -> None:
        """Minor revisions are accepted and reported."""
        catalog = parse_mo_catalog(pack_mo({"a": ["b"]}, revision=1))
        assert (catalog.major, catalog.minor) == (0, 1)

    def test_empty_catalog(self) -> None:
        """A catalog with no strings decodes to no entries."""
        assert parse_mo_catalog(pack_mo({})).entries == {}

    def test_latin1_charset(self) -> None:
        """The header charset switches decoding for later strings."""
        header = "Content-Type: text/plain; charset=ISO-8859-1\n"
        data = pack_mo({"": [header], "Open": ["Öffnen"]}, encoding="latin-1")
        assert parse_mo_catalog(data).entries["Open"] == ("Öffnen",)

    def test_without_charset_decodes_ascii(self) -> None:
        """Without a charset non-ASCII bytes are replaced, not fatal."""
        data = pack_mo({"Open": ["Öffnen"]})
        forms = parse_mo_catalog(data).entries["Open"]
        assert forms[0].endswith("ffnen")
        assert "�" in forms[0]

    def test_unknown_charset(self) -> None:
        """An unknown charset is a decode error."""
        data = pack_mo({"": ["Content-Type: text/plain; charset=no-such-charset\n"]})
        with pytest.raises(CatalogDecodeError, match="unsupported charset"):
            parse_mo_catalog(data)

    @pytest.mark.parametrize("charset", ["base64", "hex", "rot13", "zlib"])
    def test_non_text_codec(self, charset: str) -> None:
        """Codecs that do not decode bytes to text are rejected like unknown ones."""
        data = pack_mo(
            {
                "": [f"Content-Type: text/plain; charset={charset}\n"],
                "Open": ["T2ZmbmVu"],
            }
        )
        with pytest.raises(CatalogDecodeError, match="unsupported charset"):
            parse_mo_catalog(data)


class TestParseMoCatalogErrors:
    """Malformed input fails with CatalogDecodeError."""

    def test_corrupted_magic(self) -> None:
        """Any other magic number is rejected."""
        data = bytearray(pack_mo({"one year": ["ein Jahr"]}))
        data[0] ^= 0xFF
        with pytest.raises(CatalogDecodeError, match="invalid MO magic") as exc_info:
            parse_mo_catalog(bytes(data))
        assert exc_info.value.offset == 0

    def test_unsupported_major_revision(self) -> None:
        """Major revision must be 0."""
        with pytest.raises(CatalogDecodeError, match="unsupported major revision 1"):
            parse_mo_catalog(pack_mo({"a": ["b"]}, revision=1 << 16))

    @pytest.mark.parametrize("size", [0, 4, 19])
    def test_truncated_header(self, size: int) -> None:
        """Data shorter than the fixed header is rejected."""
        with pytest.raises(CatalogDecodeError, match="too short"):
            parse_mo_catalog(pack_mo({"a": ["b"]})[:size])

    def test_table_past_end(self) -> None:
        """A string count larger than the tables is rejected."""
        data = struct.pack("<5I", MO_MAGIC, 0, 1000, 20, 28)
        with pytest.raises(CatalogDecodeError, match="past end"):
            parse_mo_catalog(data)

    def test_string_past_end(self) -> None:
        """A string descriptor pointing past the data is rejected."""
        data = bytearray(pack_mo({"a": ["b"]}))
        # Length of the first original string.
        struct.pack_into("<I", data, 20, 10_000)
        with pytest.raises(CatalogDecodeError, match="past end"):
            parse_mo_catalog(bytes(data))

    def test_decode_error_is_catalog_error(self) -> None:
        """Decode errors belong to the engine hierarchy."""
        with pytest.raises(CatalogError):
            parse_mo_catalog(b"not a catalog at all, definitely")


class TestGetCatalogParser:
    """Test format to decoder dispatch."""

    def test_mo(self) -> None:
        """mo uses the binary decoder."""
        assert get_catalog_parser(CatalogFormat.MO) is parse_mo_catalog

    @pytest.mark.parametrize("catalog_format", [CatalogFormat.MO_JSON, CatalogFormat.JSON])
    def test_json(self, catalog_format: CatalogFormat) -> None:
        """mo.json and json use the JSON decoder."""
        assert get_catalog_parser(catalog_format) is parse_json_catalog
