"""Data models."""

from tasknotes_nlp.models.language import CalendarWords, LanguageConfig
from tasknotes_nlp.models.parsed_task import DEFAULT_TITLE, ParsedTaskData, PreviewPart
from tasknotes_nlp.models.triggers import (
    NLPTriggersConfig,
    PriorityConfig,
    PropertyTriggerConfig,
    StatusConfig,
    SuggesterType,
    UserFieldType,
    UserMappedField,
    default_triggers,
)

__all__ = [
    "CalendarWords",
    "DEFAULT_TITLE",
    "LanguageConfig",
    "NLPTriggersConfig",
    "ParsedTaskData",
    "PreviewPart",
    "PriorityConfig",
    "PropertyTriggerConfig",
    "StatusConfig",
    "SuggesterType",
    "UserFieldType",
    "UserMappedField",
    "default_triggers",
]
