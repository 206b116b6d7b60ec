"""Unit tests for language tables and their loader."""

import logging

import pytest
from dateparser.data.languages_info import language_order
from pydantic import ValidationError

from tasknotes_nlp.exceptions import UnknownLanguageError
from tasknotes_nlp.locales import available_languages, get_language_config, is_supported_language
from tasknotes_nlp.models.language import CalendarWords

SHIPPED = ["de", "en", "es", "fr", "it", "ja", "nl", "pt", "sv", "zh"]


class TestLoader:
    """Tests for loading shipped tables."""

    def test_available_languages(self):
        """Test every shipped table is listed with its display name."""
        languages = dict(available_languages())

        assert sorted(languages) == SHIPPED
        assert languages["en"] == "English"
        assert languages["de"] == "Deutsch"

    @pytest.mark.parametrize("code", SHIPPED)
    def test_every_table_loads(self, code):
        """Test each table validates and carries the core vocabulary."""
        config = get_language_config(code, strict=True)

        assert config.code == code
        assert config.date_triggers.due
        assert config.recurrence.every
        assert config.recurrence.weekdays.all_words()
        assert config.time_estimate.hours and config.time_estimate.minutes
        assert config.calendar.range_connectors
        assert config.calendar_locale in language_order

    def test_tables_are_cached(self):
        """Test repeated lookups return the same object."""
        assert get_language_config("en") is get_language_config("en")

    def test_unknown_language_falls_back(self, caplog):
        """Test an unknown code logs a warning and returns English."""
        with caplog.at_level(logging.WARNING):
            config = get_language_config("xx")

        assert config.code == "en"
        assert "xx" in caplog.text

    def test_unknown_language_strict(self):
        """Test strict mode raises instead of falling back."""
        with pytest.raises(UnknownLanguageError):
            get_language_config("xx", strict=True)

    def test_is_supported_language(self):
        """Test support checks."""
        assert is_supported_language("ja")
        assert not is_supported_language("klingon")

    @pytest.mark.parametrize("code,flexible", [("en", False), ("de", False), ("fr", True), ("ja", True), ("zh", True)])
    def test_flexible_boundaries(self, code, flexible):
        """Test which languages use whitespace boundaries."""
        assert get_language_config(code).flexible_boundaries is flexible


class TestVocabularyLookups:
    """Tests for the lookup helpers on table sections."""

    def test_weekday_lookups(self, english):
        """Test weekday index and code lookups are case-insensitive."""
        weekdays = english.recurrence.weekdays

        assert weekdays.index_of("Friday") == 4
        assert weekdays.code_of("SUNDAY") == "SU"
        assert weekdays.code_of("funday") is None

    def test_ordinal_positions(self, english):
        """Test ordinal words map to set positions."""
        ordinals = english.recurrence.ordinals

        assert ordinals.position_of("first") == 1
        assert ordinals.position_of("fourth") == 4
        assert ordinals.position_of("last") == -1
        assert ordinals.position_of("fifth") is None

    def test_period_frequencies(self, english):
        """Test period nouns map to frequencies."""
        assert english.recurrence.periods.frequency_of("weeks") == "WEEKLY"
        assert english.recurrence.periods.frequency_of("Year") == "YEARLY"

    def test_fallback_values(self, english):
        """Test fallback tables expose canonical values."""
        assert [value for value, _ in english.fallback_status.by_value()] == [
            "open", "in-progress", "done", "cancelled", "waiting",
        ]
        assert [value for value, _ in english.fallback_priority.by_value()] == [
            "urgent", "high", "normal", "low",
        ]

    def test_calendar_words(self, english):
        """Test the words kept around dates for English."""
        assert "on" in english.calendar.prepositions
        assert english.calendar.range_prefixes == ["from"]
        assert "to" in english.calendar.range_connectors
        assert english.calendar.spaced_connectors

    def test_unspaced_scripts(self):
        """Test Japanese and Chinese connectors do not need spaces."""
        assert not get_language_config("ja").calendar.spaced_connectors
        assert not get_language_config("zh").calendar.spaced_connectors

    def test_calendar_words_are_frozen(self, english):
        """Test shared tables cannot be changed in place."""
        with pytest.raises(ValidationError):
            english.calendar.spaced_connectors = False

    def test_calendar_words_default_empty(self):
        """Test a table without calendar words still validates."""
        words = CalendarWords()

        assert words.prepositions == []
        assert words.range_connectors == []
