"""Parsing services."""

from tasknotes_nlp.services.calendar_parser import (
    CalendarMatch,
    CalendarParser,
    DateparserCalendarParser,
    ParsedComponents,
)
from tasknotes_nlp.services.date_resolver import DateTimeResolver
from tasknotes_nlp.services.nlp_parser import NaturalLanguageParser
from tasknotes_nlp.services.preview_service import PreviewFormatter
from tasknotes_nlp.services.recurrence_service import RecurrenceSynthesizer
from tasknotes_nlp.services.trigger_config_service import TriggerConfigService

__all__ = [
    "CalendarMatch",
    "CalendarParser",
    "DateparserCalendarParser",
    "DateTimeResolver",
    "NaturalLanguageParser",
    "ParsedComponents",
    "PreviewFormatter",
    "RecurrenceSynthesizer",
    "TriggerConfigService",
]
