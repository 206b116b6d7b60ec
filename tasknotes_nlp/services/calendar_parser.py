"""Calendar-aware date expression parsing.

The date/time resolver only depends on the :class:`CalendarParser` protocol,
so any implementation that reports matched text, its position and the
resolved start/end values can be plugged in. :class:`DateparserCalendarParser`
is the default. It finds expressions with ``dateparser.search.search_dates``
and joins two expressions separated by a range connector ("3pm to 5pm") into
a single match, which dateparser does not do on its own.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Protocol

from dateparser.date import DateDataParser
from dateparser.search import search_dates

from tasknotes_nlp.models.language import LanguageConfig
from tasknotes_nlp.utils.text import BoundaryConfig, escape_and_join

logger = logging.getLogger(__name__)

DATE_COMPONENTS = frozenset({"year", "month", "day"})
TIME_COMPONENTS = frozenset({"hour", "minute"})

# Hour used for dates without an explicit time.
IMPLIED_HOUR = 12


@dataclass(frozen=True)
class ParsedComponents:
    """A resolved point in time plus which components the text stated."""

    value: datetime
    certain: frozenset[str] = frozenset()

    def date(self) -> datetime:
        return self.value

    def is_certain(self, component: str) -> bool:
        """Whether a component (year, month, day, hour, minute) was explicit."""
        return component in self.certain


@dataclass(frozen=True)
class CalendarMatch:
    """One date expression found in text."""

    text: str
    index: int
    start: ParsedComponents
    end: ParsedComponents | None = None


class CalendarParser(Protocol):
    """Anything that can find date expressions in free text."""

    def parse(
        self, text: str, reference: datetime, forward_date: bool = True
    ) -> list[CalendarMatch]:
        ...


@dataclass
class _Found:
    """A date expression located in the original text."""

    start: int
    end: int
    value: datetime
    period: str | None


def components_from(value: datetime, period: str | None, reference: datetime) -> ParsedComponents:
    """Decide which components of a dateparser result the text actually stated.

    dateparser reports period "time" when a clock time was parsed. Relative
    offsets such as "in 2 hours" keep period "day", so a time of day that
    differs from both the reference and midnight also counts as stated.

    Args:
        value: Datetime returned by dateparser
        period: Period reported with it ("time", "day", "week", ...)
        reference: Relative base the value was resolved against

    Returns:
        ParsedComponents, with an implied noon when no time was stated
    """
    if period == "time" or value.time() not in (reference.time(), time()):
        return ParsedComponents(value, DATE_COMPONENTS | TIME_COMPONENTS)
    return ParsedComponents(datetime.combine(value.date(), time(IMPLIED_HOUR, 0)), DATE_COMPONENTS)


class DateparserCalendarParser:
    """Default calendar parser backed by dateparser's n-gram search.

    Each language table names the dateparser locale plus the few words
    dateparser leaves in the text: prepositions in front of a date ("on the
    15th") and range prefixes and connectors ("from 3pm to 5pm").
    """

    def __init__(self, language: LanguageConfig, boundaries: BoundaryConfig | None = None):
        self.locale = language.calendar_locale
        self.words = language.calendar
        boundaries = boundaries or BoundaryConfig.for_language(language)

        connectors = escape_and_join(self.words.range_connectors)
        spacing = r"\s+" if self.words.spaced_connectors else r"\s*"
        self._connector_re = re.compile(f"{spacing}(?:{connectors}){spacing}", re.IGNORECASE) if connectors else None
        self._prefix_re = self._leading_word_pattern(self.words.range_prefixes, boundaries)
        self._preposition_re = self._leading_word_pattern(self.words.prepositions, boundaries)

    @staticmethod
    def _leading_word_pattern(words: list[str], boundaries: BoundaryConfig) -> re.Pattern | None:
        """Pattern for one of ``words`` right at the end of the text before a date."""
        alternatives = escape_and_join(words)
        if not alternatives:
            return None
        return re.compile(f"{boundaries.boundary}(?:{alternatives})\\s*$", re.IGNORECASE)

    def _settings(self, reference: datetime, forward_date: bool) -> dict:
        return {
            "RELATIVE_BASE": reference,
            "PREFER_DATES_FROM": "future" if forward_date else "current_period",
            "RETURN_TIME_AS_PERIOD": True,
            "TIMEZONE": "UTC",
        }

    def _segments(self, text: str) -> list[tuple[int, str]]:
        """Split text at range connectors so each side is searched on its own."""
        if self._connector_re is None:
            return [(0, text)]
        segments = []
        position = 0
        for connector in self._connector_re.finditer(text):
            segments.append((position, text[position:connector.start()]))
            position = connector.end()
        segments.append((position, text[position:]))
        return segments

    def _interpret(self, substring: str, reference: datetime, forward_date: bool) -> tuple[datetime | None, str | None]:
        """Parse one located expression again to learn its period."""
        parser = DateDataParser(languages=[self.locale], settings=self._settings(reference, forward_date))
        data = parser.get_date_data(substring)
        return data.date_obj, data.period

    def _search(self, text: str, reference: datetime, forward_date: bool) -> list[_Found]:
        found = []
        settings = self._settings(reference, forward_date)
        for offset, segment in self._segments(text):
            if not segment.strip():
                continue
            results = search_dates(segment, languages=[self.locale], settings=settings, strategy="ngram") or []
            cursor = 0
            for substring, value in results:
                index = segment.find(substring, cursor)
                if index == -1:
                    logger.debug(f"Could not locate {substring!r} in {segment!r}")
                    continue
                cursor = index + len(substring)
                parsed, period = self._interpret(substring, reference, forward_date)
                found.append(_Found(offset + index, offset + cursor, parsed or value, period))
        return found

    def _extend_start(self, text: str, start: int, pattern: re.Pattern | None) -> int:
        if pattern is None:
            return start
        leading = pattern.search(text[:start])
        return leading.start() if leading else start

    def parse(
        self, text: str, reference: datetime | date | None = None, forward_date: bool = True
    ) -> list[CalendarMatch]:
        """Find every date expression in text.

        Args:
            text: Free text
            reference: Base for relative expressions; now when None
            forward_date: Prefer future dates for ambiguous expressions

        Returns:
            Matches in text order
        """
        if reference is None:
            reference = datetime.now()
        elif not isinstance(reference, datetime):
            reference = datetime.combine(reference, time())

        found = self._search(text, reference, forward_date)
        matches = []
        i = 0
        while i < len(found):
            first = found[i]
            start = components_from(first.value, first.period, reference)
            end = None
            stop = first.end

            following = found[i + 1] if i + 1 < len(found) else None
            if (
                following is not None
                and self._connector_re is not None
                and self._connector_re.fullmatch(text[first.end:following.start])
            ):
                # The end of a range is read relative to the day it starts on.
                day_start = datetime.combine(first.value.date(), time())
                value, period = self._interpret(text[following.start:following.end], day_start, forward_date)
                if value is not None:
                    end = components_from(value, period, day_start)
                    stop = following.end
                    i += 1

            begin = first.start
            if end is not None:
                begin = self._extend_start(text, begin, self._prefix_re)
            begin = self._extend_start(text, begin, self._preposition_re)
            matches.append(CalendarMatch(text[begin:stop], begin, start, end))
            i += 1

        logger.debug(f"Found {len(matches)} date expression(s) in {text!r}")
        return matches
