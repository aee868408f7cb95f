"""Tests for locale identifier parsing, candidate generation and detection."""

import pytest
from hypothesis import given

from gettextengine.errors import InvalidLocaleError
from gettextengine.locale_utils import (
    LocaleIdentifier,
    explode_locale,
    get_system_locales,
    normalize_locale,
    split_locale,
)
from tests.strategies import locale_identifiers

_LOCALE_VARS = ("LANGUAGE", "LC_ALL", "LC_MESSAGES", "LANG")


class TestSplitLocale:
    """Test split_locale() parsing."""

    def test_full_identifier(self) -> None:
        """Tags, charset and modifier are separated."""
        ident = split_locale("de_DE.utf-8@ksh")
        assert ident == LocaleIdentifier(
            tags=("de", "DE"), underscore_separator=True, charset="utf-8", modifier="ksh"
        )

    def test_hyphen_separator(self) -> None:
        """BCP-47 style tags keep the hyphen separator."""
        ident = split_locale("en-US")
        assert ident is not None
        assert ident.tags == ("en", "US")
        assert ident.underscore_separator is False
        assert ident.separator == "-"

    def test_language_only(self) -> None:
        """A bare language is a single tag."""
        ident = split_locale("fi")
        assert ident is not None
        assert ident.tags == ("fi",)
        assert ident.language == "fi"
        assert ident.charset is None
        assert ident.modifier is None

    def test_charset_without_modifier(self) -> None:
        """Charset may contain digits and hyphens."""
        ident = split_locale("ru_RU.koi8-r")
        assert ident is not None
        assert ident.charset == "koi8-r"

    def test_modifier_without_charset(self) -> None:
        """Modifier is stripped even when no charset is present."""
        ident = split_locale("de_AT@euro")
        assert ident is not None
        assert ident.tags == ("de", "AT")
        assert ident.modifier == "euro"

    def test_case_is_preserved(self) -> None:
        """Parsing does not normalize case."""
        ident = split_locale("DE_at.UTF-8@Euro")
        assert ident is not None
        assert ident.tags == ("DE", "at")
        assert ident.charset == "UTF-8"
        assert ident.modifier == "Euro"

    def test_more_than_two_tags(self) -> None:
        """Additional subtags are accepted."""
        ident = split_locale("zh_Hant_TW")
        assert ident is not None
        assert ident.tags == ("zh", "Hant", "TW")

    @pytest.mark.parametrize(
        "locale",
        [
            "",
            "de DE",
            "de_DE-AT",
            "de__DE",
            "_DE",
            "de@ks1",
            "de_DE.",
            "de/DE",
            "../etc",
            "de\n",
            "de_DE\n",
            "de.utf-8\n",
            "de@euro\n",
        ],
    )
    def test_invalid_identifiers(self, locale: str) -> None:
        """Strings outside the tag grammar are rejected."""
        assert split_locale(locale) is None

    @given(locale_identifiers())
    def test_round_trip(self, locale: str) -> None:
        """Parsing then re-serializing reproduces the identifier."""
        ident = split_locale(locale)
        assert ident is not None
        assert str(ident) == locale


class TestExplodeLocale:
    """Test explode_locale() candidate generation."""

    def test_full_identifier_with_variation(self) -> None:
        """One row per tag prefix, charset variants in fixed order."""
        ident = split_locale("de_DE.utf-8@ksh")
        assert ident is not None
        assert explode_locale(ident, vary=True) == [
            ["de.utf-8@ksh", "de.UTF-8@ksh", "de@ksh"],
            ["de_DE.utf-8@ksh", "de_DE.UTF-8@ksh", "de_DE@ksh"],
        ]

    def test_uppercase_charset_not_duplicated(self) -> None:
        """An already upper-case charset yields no second variant."""
        ident = split_locale("de_DE.UTF-8")
        assert ident is not None
        assert explode_locale(ident, vary=True) == [
            ["de.UTF-8", "de"],
            ["de_DE.UTF-8", "de_DE"],
        ]

    def test_without_charset(self) -> None:
        """Rows hold only the bare tags plus modifier."""
        ident = split_locale("de_AT@euro")
        assert ident is not None
        assert explode_locale(ident, vary=True) == [["de@euro"], ["de_AT@euro"]]

    def test_hyphen_separator_is_kept(self) -> None:
        """Rows join tags with the original separator."""
        ident = split_locale("pt-BR")
        assert ident is not None
        assert explode_locale(ident, vary=True) == [["pt"], ["pt-BR"]]

    def test_without_variation(self) -> None:
        """Only the full identifier is produced."""
        ident = split_locale("de_DE.utf-8@ksh")
        assert ident is not None
        assert explode_locale(ident) == [["de_DE.utf-8@ksh"]]

    def test_three_tags(self) -> None:
        """Every tag prefix gets a row."""
        ident = split_locale("zh_Hant_TW")
        assert ident is not None
        assert explode_locale(ident, vary=True) == [["zh"], ["zh_Hant"], ["zh_Hant_TW"]]

    @given(locale_identifiers())
    def test_rows_grow_in_specificity(self, locale: str) -> None:
        """Row i holds candidates with i+1 tags; the last row ends in the bare tags."""
        ident = split_locale(locale)
        assert ident is not None
        rows = explode_locale(ident, vary=True)
        assert len(rows) == len(ident.tags)
        for length, row in enumerate(rows, start=1):
            lingua = ident.separator.join(ident.tags[:length])
            assert row[0].startswith(lingua)
            suffix = f"@{ident.modifier}" if ident.modifier else ""
            assert row[-1] == lingua + suffix


class TestNormalizeLocale:
    """Test normalize_locale() case canonicalization."""

    def test_language_lower_region_upper(self) -> None:
        """Charset and modifier keep their case."""
        assert normalize_locale("DE_at.utf-8@Euro") == "de_AT.utf-8@Euro"

    def test_hyphen_separator(self) -> None:
        """Separator is preserved."""
        assert normalize_locale("EN-us") == "en-US"

    def test_language_only(self) -> None:
        """Single tag is lower-cased."""
        assert normalize_locale("FI") == "fi"

    def test_invalid_raises(self) -> None:
        """Unparseable identifiers raise InvalidLocaleError."""
        with pytest.raises(InvalidLocaleError) as exc_info:
            normalize_locale("de DE")
        assert exc_info.value.locale == "de DE"
        assert isinstance(exc_info.value, ValueError)


class TestGetSystemLocales:
    """Test get_system_locales() environment detection."""

    @pytest.fixture(autouse=True)
    def _clean_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for var in _LOCALE_VARS:
            monkeypatch.delenv(var, raising=False)

    def test_language_list_then_lang(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """LANGUAGE entries come first; charsets are dropped; duplicates removed."""
        monkeypatch.setenv("LANGUAGE", "de_AT:de")
        monkeypatch.setenv("LANG", "de_AT.UTF-8")
        assert get_system_locales() == ["de_AT", "de"]

    def test_precedence_order(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """LC_ALL precedes LC_MESSAGES precedes LANG."""
        monkeypatch.setenv("LANG", "en_US.UTF-8")
        monkeypatch.setenv("LC_MESSAGES", "fr_FR")
        monkeypatch.setenv("LC_ALL", "fi_FI.UTF-8@euro")
        assert get_system_locales() == ["fi_FI@euro", "fr_FR", "en_US"]

    def test_c_and_posix_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """C and POSIX do not count as preferences."""
        monkeypatch.setenv("LC_ALL", "C")
        monkeypatch.setenv("LANG", "POSIX")
        assert get_system_locales() == ["C"]

    def test_nothing_set(self) -> None:
        """Without any variable the result is ["C"]."""
        assert get_system_locales() == ["C"]

    def test_invalid_entries_skipped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Empty and malformed list items are skipped."""
        monkeypatch.setenv("LANGUAGE", "::de DE:pt_BR")
        assert get_system_locales() == ["pt_BR"]
