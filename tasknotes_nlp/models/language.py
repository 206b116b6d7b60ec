"""Per-language pattern tables for the natural language parser.

Each shipped language is a YAML file under ``tasknotes_nlp/locales`` that is
validated into a :class:`LanguageConfig` once and then shared read-only.
"""

from pydantic import BaseModel, ConfigDict, Field

WEEKDAY_CODES = {
    "monday": "MO",
    "tuesday": "TU",
    "wednesday": "WE",
    "thursday": "TH",
    "friday": "FR",
    "saturday": "SA",
    "sunday": "SU",
}


class _Table(BaseModel):
    """Immutable vocabulary table."""

    model_config = ConfigDict(frozen=True)


class DateTriggers(_Table):
    """Phrases that mark the following date as due or scheduled."""

    due: list[str] = Field(default_factory=list)
    scheduled: list[str] = Field(default_factory=list)


class Frequencies(_Table):
    """Bare frequency words such as 'daily' or 'every week'."""

    daily: list[str] = Field(default_factory=list)
    weekly: list[str] = Field(default_factory=list)
    monthly: list[str] = Field(default_factory=list)
    yearly: list[str] = Field(default_factory=list)

    def by_frequency(self) -> list[tuple[str, list[str]]]:
        return [
            ("DAILY", self.daily),
            ("WEEKLY", self.weekly),
            ("MONTHLY", self.monthly),
            ("YEARLY", self.yearly),
        ]


class WeekdayWords(_Table):
    """Words for each weekday."""

    monday: list[str] = Field(default_factory=list)
    tuesday: list[str] = Field(default_factory=list)
    wednesday: list[str] = Field(default_factory=list)
    thursday: list[str] = Field(default_factory=list)
    friday: list[str] = Field(default_factory=list)
    saturday: list[str] = Field(default_factory=list)
    sunday: list[str] = Field(default_factory=list)

    def by_day(self) -> list[tuple[str, list[str]]]:
        """(weekday name, words) pairs from Monday to Sunday."""
        return [(day, getattr(self, day)) for day in WEEKDAY_CODES]

    def all_words(self) -> list[str]:
        return [word for _, words in self.by_day() for word in words]

    def index_of(self, word: str) -> int | None:
        """Python weekday number (Monday == 0) for a word, or None."""
        lowered = word.lower()
        for index, (_, words) in enumerate(self.by_day()):
            if any(w.lower() == lowered for w in words):
                return index
        return None

    def code_of(self, word: str) -> str | None:
        """Two-letter recurrence weekday code for a word, or None."""
        index = self.index_of(word)
        if index is None:
            return None
        return list(WEEKDAY_CODES.values())[index]


class Ordinals(_Table):
    """Ordinal words used by 'every <ordinal> <weekday>'."""

    first: list[str] = Field(default_factory=list)
    second: list[str] = Field(default_factory=list)
    third: list[str] = Field(default_factory=list)
    fourth: list[str] = Field(default_factory=list)
    last: list[str] = Field(default_factory=list)

    def all_words(self) -> list[str]:
        return self.first + self.second + self.third + self.fourth + self.last

    def position_of(self, word: str) -> int | None:
        """Set position for an ordinal word: 1..4, or -1 for 'last'."""
        lowered = word.lower()
        for position, words in ((1, self.first), (2, self.second), (3, self.third),
                                (4, self.fourth), (-1, self.last)):
            if any(w.lower() == lowered for w in words):
                return position
        return None


class Periods(_Table):
    """Period nouns used by interval and 'every other' patterns."""

    day: list[str] = Field(default_factory=list)
    week: list[str] = Field(default_factory=list)
    month: list[str] = Field(default_factory=list)
    year: list[str] = Field(default_factory=list)

    def all_words(self) -> list[str]:
        return self.day + self.week + self.month + self.year

    def frequency_of(self, word: str) -> str | None:
        lowered = word.lower()
        for freq, words in (("DAILY", self.day), ("WEEKLY", self.week),
                            ("MONTHLY", self.month), ("YEARLY", self.year)):
            if any(w.lower() == lowered for w in words):
                return freq
        return None


class RecurrenceVocabulary(_Table):
    """Recurrence keywords."""

    frequencies: Frequencies = Field(default_factory=Frequencies)
    every: list[str] = Field(default_factory=list)
    other: list[str] = Field(default_factory=list)
    weekdays: WeekdayWords = Field(default_factory=WeekdayWords)
    plural_weekdays: WeekdayWords = Field(default_factory=WeekdayWords)
    ordinals: Ordinals = Field(default_factory=Ordinals)
    periods: Periods = Field(default_factory=Periods)


class TimeEstimateUnits(_Table):
    """Unit words for time estimates."""

    hours: list[str] = Field(default_factory=list)
    minutes: list[str] = Field(default_factory=list)


class FallbackStatus(_Table):
    """Status words used when no custom statuses are configured."""

    open: list[str] = Field(default_factory=list)
    in_progress: list[str] = Field(default_factory=list)
    done: list[str] = Field(default_factory=list)
    cancelled: list[str] = Field(default_factory=list)
    waiting: list[str] = Field(default_factory=list)

    def by_value(self) -> list[tuple[str, list[str]]]:
        """(status value, words) pairs in matching order."""
        return [
            ("open", self.open),
            ("in-progress", self.in_progress),
            ("done", self.done),
            ("cancelled", self.cancelled),
            ("waiting", self.waiting),
        ]


class FallbackPriority(_Table):
    """Priority words used when no custom priorities are configured."""

    urgent: list[str] = Field(default_factory=list)
    high: list[str] = Field(default_factory=list)
    normal: list[str] = Field(default_factory=list)
    low: list[str] = Field(default_factory=list)

    def by_value(self) -> list[tuple[str, list[str]]]:
        """(priority value, words) pairs, most urgent first."""
        return [
            ("urgent", self.urgent),
            ("high", self.high),
            ("normal", self.normal),
            ("low", self.low),
        ]


class CalendarWords(_Table):
    """Words around date expressions that the calendar engine leaves in the text."""

    prepositions: list[str] = Field(
        default_factory=list, description="Removed together with a date they directly precede ('on', 'at')"
    )
    range_prefixes: list[str] = Field(default_factory=list, description="Words opening a range ('from')")
    range_connectors: list[str] = Field(default_factory=list, description="Words joining a range ('to', '-')")
    spaced_connectors: bool = Field(
        default=True, description="Connectors stand between spaces (off for scripts without spaces)"
    )


class LanguageConfig(_Table):
    """Complete pattern table for one language."""

    code: str
    name: str
    calendar_locale: str
    flexible_boundaries: bool = Field(
        default=False,
        description="Use whitespace/string-edge lookaround instead of \\b for keyword matching",
    )
    date_triggers: DateTriggers = Field(default_factory=DateTriggers)
    recurrence: RecurrenceVocabulary = Field(default_factory=RecurrenceVocabulary)
    time_estimate: TimeEstimateUnits = Field(default_factory=TimeEstimateUnits)
    fallback_status: FallbackStatus = Field(default_factory=FallbackStatus)
    fallback_priority: FallbackPriority = Field(default_factory=FallbackPriority)
    calendar: CalendarWords = Field(default_factory=CalendarWords)
