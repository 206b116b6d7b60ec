"""Due/scheduled date and time resolution."""

import logging
import re
from datetime import date, datetime, time

from tasknotes_nlp.models.language import LanguageConfig
from tasknotes_nlp.models.parsed_task import ParsedTaskData
from tasknotes_nlp.services.calendar_parser import (
    CalendarMatch,
    CalendarParser,
    DateparserCalendarParser,
    ParsedComponents,
)
from tasknotes_nlp.utils.text import BoundaryConfig, cleanup_whitespace, escape_and_join

logger = logging.getLogger(__name__)

# A date must start this close to the end of an explicit trigger phrase.
MAX_TRIGGER_GAP = 3


class DateTimeResolver:
    """Assign dates found in text to the due or scheduled fields.

    Phase A looks for an explicit trigger phrase ("due", "scheduled for")
    directly followed by a date and returns as soon as one is found. Phase B
    runs only when no trigger matched: the first date expression in the text
    becomes a range (start scheduled, end due) or a single date whose field is
    chosen from the due/scheduled keywords present, else the default flag.
    """

    def __init__(
        self,
        language: LanguageConfig,
        calendar_parser: CalendarParser | None = None,
        default_to_scheduled: bool = True,
        forward_date: bool = True,
        boundaries: BoundaryConfig | None = None,
        reference_date: datetime | date | None = None,
    ):
        self.language = language
        self.boundaries = boundaries or BoundaryConfig.for_language(language)
        self.calendar_parser = calendar_parser or DateparserCalendarParser(language, self.boundaries)
        self.default_to_scheduled = default_to_scheduled
        self.forward_date = forward_date
        self.reference_date = reference_date

        self._due_pattern = self._keyword_pattern(language.date_triggers.due)
        self._scheduled_pattern = self._keyword_pattern(language.date_triggers.scheduled)

    def _keyword_pattern(self, phrases: list[str]) -> re.Pattern | None:
        alternatives = escape_and_join(phrases)
        if not alternatives:
            return None
        return re.compile(self.boundaries.wrap(f"(?:{alternatives})"), re.IGNORECASE)

    def _reference(self) -> datetime:
        if self.reference_date is None:
            return datetime.now()
        if isinstance(self.reference_date, datetime):
            return self.reference_date
        return datetime.combine(self.reference_date, time())

    @staticmethod
    def _assign(result: ParsedTaskData, field: str, components: ParsedComponents) -> None:
        value = components.date()
        setattr(result, f"{field}_date", value.strftime("%Y-%m-%d"))
        setattr(result, f"{field}_time", value.strftime("%H:%M") if components.is_certain("hour") else None)

    def resolve(self, text: str, result: ParsedTaskData) -> str:
        """Extract dates and times, returning the text without them."""
        reference = self._reference()
        remaining = self._resolve_explicit(text, result, reference)
        if remaining is not None:
            return remaining
        return self._resolve_implicit(text, result, reference)

    def _resolve_explicit(self, text: str, result: ParsedTaskData, reference: datetime) -> str | None:
        """Phase A. Returns None when no trigger phrase is followed by a date."""
        for field, pattern in (("due", self._due_pattern), ("scheduled", self._scheduled_pattern)):
            if pattern is None:
                continue
            for trigger in pattern.finditer(text):
                following = text[trigger.end():]
                matches = self.calendar_parser.parse(following, reference, forward_date=self.forward_date)
                if not matches or matches[0].index > MAX_TRIGGER_GAP:
                    continue

                match = matches[0]
                self._assign(result, field, match.start)
                date_start = trigger.end() + match.index
                date_end = date_start + len(match.text)
                logger.debug(f"Explicit {field} trigger {trigger.group(0)!r} matched {match.text!r}")
                return cleanup_whitespace(
                    text[:trigger.start()] + " " + text[trigger.end():date_start] + " " + text[date_end:]
                )
        return None

    def _resolve_implicit(self, text: str, result: ParsedTaskData, reference: datetime) -> str:
        """Phase B: infer the field from context for the first date in the text."""
        matches = self.calendar_parser.parse(text, reference, forward_date=self.forward_date)
        if not matches:
            return text

        match: CalendarMatch = matches[0]
        if match.end is not None and match.end.value != match.start.value:
            self._assign(result, "scheduled", match.start)
            self._assign(result, "due", match.end)
        else:
            has_due = bool(self._due_pattern and self._due_pattern.search(text))
            has_scheduled = bool(self._scheduled_pattern and self._scheduled_pattern.search(text))
            if has_due and not has_scheduled:
                field = "due"
            elif has_scheduled and not has_due:
                field = "scheduled"
            else:
                field = "scheduled" if self.default_to_scheduled else "due"
            self._assign(result, field, match.start)

        return cleanup_whitespace(text[:match.index] + " " + text[match.index + len(match.text):])
