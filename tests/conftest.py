"""Pytest configuration and fixtures."""

from datetime import date, datetime

import pytest

from tasknotes_nlp.locales import get_language_config
from tasknotes_nlp.services.calendar_parser import (
    DATE_COMPONENTS,
    IMPLIED_HOUR,
    TIME_COMPONENTS,
    CalendarMatch,
    ParsedComponents,
)
from tasknotes_nlp.services.nlp_parser import NaturalLanguageParser
from tasknotes_nlp.utils.config import Config, reset_config

# A Monday, so weekday arithmetic in tests is easy to follow.
REFERENCE_DATE = date(2024, 1, 1)


@pytest.fixture(autouse=True)
def reset_config_fixture():
    """Reset configuration before and after each test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture(scope="function")
def test_config():
    """Create a test configuration."""
    return Config()


@pytest.fixture
def reference_date():
    """Fixed reference date for relative date expressions."""
    return REFERENCE_DATE


@pytest.fixture
def english():
    """English language table."""
    return get_language_config("en")


@pytest.fixture
def parser():
    """English parser pinned to the reference date."""
    return NaturalLanguageParser(reference_date=REFERENCE_DATE)


def at(year, month, day, hour=None, minute=0) -> ParsedComponents:
    """Calendar components for a date, with a stated time when hour is given."""
    if hour is None:
        return ParsedComponents(datetime(year, month, day, IMPLIED_HOUR), DATE_COMPONENTS)
    return ParsedComponents(datetime(year, month, day, hour, minute), DATE_COMPONENTS | TIME_COMPONENTS)


class StubCalendar:
    """Calendar parser that knows a fixed set of expressions.

    Args:
        expressions: Expression text -> start components, or (start, end) for a range
    """

    def __init__(self, expressions):
        self.expressions = expressions
        self.calls = []

    def parse(self, text, reference, forward_date=True):
        self.calls.append((text, reference, forward_date))
        matches = []
        for expression, value in self.expressions.items():
            index = text.lower().find(expression.lower())
            if index == -1:
                continue
            start, end = value if isinstance(value, tuple) else (value, None)
            matches.append(CalendarMatch(text[index:index + len(expression)], index, start, end))
        return sorted(matches, key=lambda match: match.index)


@pytest.fixture
def calendar_at():
    """Builder for calendar components."""
    return at


@pytest.fixture
def stub_calendar():
    """Factory for calendar parsers with fixed expressions."""
    return StubCalendar
