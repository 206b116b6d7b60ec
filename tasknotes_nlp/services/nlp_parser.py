"""Natural language task parser.

Turns a quick-entry line such as

    Buy milk tomorrow 3pm #errand @store +groceries every monday 30min

into a :class:`ParsedTaskData`. Extraction runs as a fixed pipeline of
stages; each stage takes the residual text, records what it found and
returns the text with its tokens removed:

1. tags          #errand
2. contexts      @store
3. projects      +groceries, +[[Big Project]]
4. priority      custom labels or language fallback words
5. status        custom labels or language fallback words
6. recurrence    every monday
7. time estimate 30min, 1h30m
8. user fields   trigger + "quoted" or bare value
9. dates/times   tomorrow 3pm

Whatever text is left becomes the title.
"""

import logging
import re
from collections.abc import Callable
from datetime import date, datetime

from tasknotes_nlp.locales import get_language_config
from tasknotes_nlp.models.parsed_task import DEFAULT_TITLE, ParsedTaskData
from tasknotes_nlp.models.triggers import (
    NLPTriggersConfig,
    PriorityConfig,
    StatusConfig,
    UserFieldType,
    UserMappedField,
)
from tasknotes_nlp.services.calendar_parser import CalendarParser
from tasknotes_nlp.services.date_resolver import DateTimeResolver
from tasknotes_nlp.services.recurrence_service import RecurrenceSynthesizer
from tasknotes_nlp.services.trigger_config_service import TriggerConfigService
from tasknotes_nlp.utils.text import BoundaryConfig, cleanup_whitespace, escape_and_join, find_bounded, remove_span

logger = logging.getLogger(__name__)

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_RE = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")
NUMBER_RE = re.compile(r"^-?\d+(?:\.\d+)?$")

TRUE_WORDS = {"true", "yes", "y", "1", "on"}

Stage = Callable[[str, ParsedTaskData], str]


class NaturalLanguageParser:
    """Parser for natural language task input.

    All regexes and lookup tables are built in the constructor and never
    mutated afterwards, so one instance can be shared between callers.
    """

    def __init__(
        self,
        status_configs: list[StatusConfig] | None = None,
        priority_configs: list[PriorityConfig] | None = None,
        default_to_scheduled: bool = True,
        language_code: str = "en",
        trigger_config: NLPTriggersConfig | None = None,
        user_fields: list[UserMappedField] | None = None,
        calendar_parser: CalendarParser | None = None,
        reference_date: datetime | date | None = None,
        forward_date: bool = True,
    ):
        self.status_configs = list(status_configs or [])
        self.priority_configs = list(priority_configs or [])
        self.default_to_scheduled = default_to_scheduled
        self.language = get_language_config(language_code)
        self.boundaries = BoundaryConfig.for_language(self.language)
        self.triggers = TriggerConfigService(trigger_config, user_fields)

        self._tag_re = self._trigger_pattern(self.triggers.get_tag_trigger(), r"([\w/-]+)")
        self._context_re = self._trigger_pattern(self.triggers.get_context_trigger(), r"(\w+)")
        project_trigger = self.triggers.get_project_trigger()
        self._wikilink_project_re = self._trigger_pattern(project_trigger, r"(\[\[.*?\]\])")
        self._project_re = self._trigger_pattern(project_trigger, r"([\w/-]+)")

        self._priority_candidates = self._custom_candidates(self.priority_configs)
        self._status_candidates = self._custom_candidates(self.status_configs)
        self._fallback_priority = self._fallback_patterns(self.language.fallback_priority.by_value())
        self._fallback_status = self._fallback_patterns(self.language.fallback_status.by_value())
        self._estimate_patterns = self._build_estimate_patterns()
        self._user_field_patterns = self._build_user_field_patterns()

        self.recurrence = RecurrenceSynthesizer(self.language, self.boundaries)
        self.date_resolver = DateTimeResolver(
            self.language,
            calendar_parser=calendar_parser,
            default_to_scheduled=default_to_scheduled,
            forward_date=forward_date,
            boundaries=self.boundaries,
            reference_date=reference_date,
        )

        self._pipeline: list[tuple[str, Stage]] = [
            ("tags", self.extract_tags),
            ("contexts", self.extract_contexts),
            ("projects", self.extract_projects),
            ("priority", self.extract_priority),
            ("status", self.extract_status),
            ("recurrence", self.extract_recurrence),
            ("time_estimate", self.extract_time_estimate),
            ("user_fields", self.extract_user_fields),
            ("dates", self.parse_dates_and_times),
        ]

    @classmethod
    def from_config(cls, config, **overrides) -> "NaturalLanguageParser":
        """Build a parser from the application configuration.

        Args:
            config: Loaded Config instance
            **overrides: Constructor arguments that take precedence over config

        Returns:
            Configured parser
        """
        kwargs = {
            "status_configs": config.statuses,
            "priority_configs": config.priorities,
            "default_to_scheduled": config.nlp.default_to_scheduled,
            "language_code": config.nlp.language,
            "trigger_config": config.triggers,
            "user_fields": config.user_fields,
            "forward_date": config.nlp.forward_date,
        }
        kwargs.update(overrides)
        return cls(**kwargs)

    # Pattern construction

    @staticmethod
    def _trigger_pattern(trigger: str | None, body: str) -> re.Pattern | None:
        if not trigger:
            return None
        return re.compile(re.escape(trigger) + body)

    @staticmethod
    def _custom_candidates(configs: list[StatusConfig] | list[PriorityConfig]) -> list[tuple[str, str]]:
        """(text to look for, value to store) pairs, longest text first."""
        candidates = []
        for config in configs:
            for text in (config.label, config.value):
                if text and text.strip() and (text, config.value) not in candidates:
                    candidates.append((text, config.value))
        candidates.sort(key=lambda c: len(c[0]), reverse=True)
        return candidates

    def _fallback_patterns(self, words_by_value: list[tuple[str, list[str]]]) -> list[tuple[re.Pattern, str]]:
        patterns = []
        for value, words in words_by_value:
            alternatives = escape_and_join(words)
            if alternatives:
                patterns.append((re.compile(self.boundaries.wrap(f"({alternatives})"), re.IGNORECASE), value))
        return patterns

    def _build_estimate_patterns(self) -> list[tuple[re.Pattern, Callable[[re.Match], int]]]:
        hours = escape_and_join(self.language.time_estimate.hours)
        minutes = escape_and_join(self.language.time_estimate.minutes)
        patterns: list[tuple[re.Pattern, Callable[[re.Match], int]]] = []
        if hours and minutes:
            patterns.append((
                re.compile(self.boundaries.wrap(rf"(\d+)(?:{hours})\s*(\d+)(?:{minutes})"), re.IGNORECASE),
                lambda m: int(m.group(1)) * 60 + int(m.group(2)),
            ))
        if hours:
            patterns.append((
                re.compile(self.boundaries.wrap(rf"(\d+)\s*(?:{hours})"), re.IGNORECASE),
                lambda m: int(m.group(1)) * 60,
            ))
        if minutes:
            patterns.append((
                re.compile(self.boundaries.wrap(rf"(\d+)\s*(?:{minutes})"), re.IGNORECASE),
                lambda m: int(m.group(1)),
            ))
        return patterns

    def _build_user_field_patterns(self) -> list[tuple[re.Pattern, UserMappedField]]:
        patterns = []
        for trigger_config, field in self.triggers.get_user_field_triggers():
            regex = re.compile(r"(?<!\S)" + re.escape(trigger_config.trigger) + r'(?:"([^"]+)"|([^\s"]+))')
            patterns.append((regex, field))
        return patterns

    # Entry points

    def parse(self, input_line: str) -> ParsedTaskData:
        """Parse one line of free text into task attributes.

        Never raises: a failing stage is logged and skipped.

        Args:
            input_line: Raw user input; text after the first newline is kept as details

        Returns:
            A new ParsedTaskData
        """
        result = ParsedTaskData()

        working_text, details = self._split_title_and_details(input_line or "")
        if details:
            result.details = details

        for name, stage in self._pipeline:
            try:
                working_text = stage(working_text, result)
            except Exception as e:
                logger.debug(f"Error in {name} stage: {e}", exc_info=True)

        result.title = working_text.strip()
        return self._validate(result)

    parse_input = parse

    @staticmethod
    def _split_title_and_details(text: str) -> tuple[str, str | None]:
        trimmed = text.strip()
        if "\n" not in trimmed:
            return trimmed, None
        title_line, details = trimmed.split("\n", 1)
        return title_line.strip(), details.strip()

    # Stages

    @staticmethod
    def _extract_all(regex: re.Pattern | None, text: str, into: list[str]) -> str:
        if regex is None:
            return text
        found = regex.findall(text)
        if not found:
            return text
        into.extend(found)
        return cleanup_whitespace(regex.sub("", text))

    def extract_tags(self, text: str, result: ParsedTaskData) -> str:
        """Remove every tag-trigger token and record it without the trigger."""
        return self._extract_all(self._tag_re, text, result.tags)

    def extract_contexts(self, text: str, result: ParsedTaskData) -> str:
        return self._extract_all(self._context_re, text, result.contexts)

    def extract_projects(self, text: str, result: ParsedTaskData) -> str:
        """Extract +[[wiki link]] projects first, then bare +word projects."""
        text = self._extract_all(self._wikilink_project_re, text, result.projects)
        return self._extract_all(self._project_re, text, result.projects)

    def _match_custom(
        self, text: str, candidates: list[tuple[str, str]], trigger: str | None
    ) -> tuple[str, tuple[int, int]] | None:
        if trigger:
            for candidate, value in candidates:
                span = find_bounded(text, trigger + candidate)
                if span:
                    return value, span
        for candidate, value in candidates:
            span = find_bounded(text, candidate)
            if span:
                return value, span
        return None

    def extract_priority(self, text: str, result: ParsedTaskData) -> str:
        if self._priority_candidates:
            found = self._match_custom(text, self._priority_candidates, self.triggers.get_priority_trigger())
            if found is None:
                return text
            result.priority, (start, end) = found
            return remove_span(text, start, end)

        earliest: tuple[re.Match, str] | None = None
        for regex, value in self._fallback_priority:
            match = regex.search(text)
            if match and (earliest is None or match.start() < earliest[0].start()):
                earliest = (match, value)
        if earliest is None:
            return text
        match, result.priority = earliest
        return remove_span(text, match.start(), match.end())

    def extract_status(self, text: str, result: ParsedTaskData) -> str:
        # Language fallbacks only apply when no custom statuses are configured.
        if self._status_candidates:
            found = self._match_custom(text, self._status_candidates, self.triggers.get_status_trigger())
            if found is None:
                return text
            result.status, (start, end) = found
            return remove_span(text, start, end)

        for regex, value in self._fallback_status:
            match = regex.search(text)
            if match:
                result.status = value
                return remove_span(text, match.start(), match.end())
        return text

    def extract_recurrence(self, text: str, result: ParsedTaskData) -> str:
        return self.recurrence.extract(text, result)

    def extract_time_estimate(self, text: str, result: ParsedTaskData) -> str:
        """Sum the first combined, hours-only and minutes-only matches, in that order."""
        total = 0
        for regex, minutes in self._estimate_patterns:
            match = regex.search(text)
            if match:
                total += minutes(match)
                text = remove_span(text, match.start(), match.end())
        if total > 0:
            result.estimate = total
        return text

    def extract_user_fields(self, text: str, result: ParsedTaskData) -> str:
        for regex, field in self._user_field_patterns:
            matches = list(regex.finditer(text))
            if not matches:
                continue

            if field.type != UserFieldType.LIST:
                matches = matches[:1]
            values = []
            consumed = []
            for match in matches:
                value = self._normalize_field_value(field, match.group(1) or match.group(2))
                if value is None:
                    continue
                values.append(value)
                consumed.append(match)
            if not consumed:
                continue

            fields = result.user_fields if result.user_fields is not None else {}
            fields[field.id] = values if field.type == UserFieldType.LIST else values[0]
            result.user_fields = fields
            for match in reversed(consumed):
                text = text[:match.start()] + " " + text[match.end():]
            text = cleanup_whitespace(text)
        return text

    @staticmethod
    def _normalize_field_value(field: UserMappedField, raw: str) -> str | None:
        value = raw.strip()
        if not value:
            return None
        if field.type == UserFieldType.BOOLEAN:
            return "true" if value.lower() in TRUE_WORDS else "false"
        if field.type == UserFieldType.NUMBER and not NUMBER_RE.match(value):
            logger.debug(f"Ignoring non-numeric value {value!r} for field {field.id}")
            return None
        return value

    def parse_dates_and_times(self, text: str, result: ParsedTaskData) -> str:
        return self.date_resolver.resolve(text, result)

    # Validation

    @staticmethod
    def _dedupe(values: list[str]) -> list[str]:
        return list(dict.fromkeys(v for v in values if v and v.strip()))

    def _validate(self, result: ParsedTaskData) -> ParsedTaskData:
        if not result.title.strip():
            result.title = DEFAULT_TITLE

        result.tags = self._dedupe(result.tags)
        result.contexts = self._dedupe(result.contexts)
        result.projects = self._dedupe(result.projects)

        if result.due_date and not DATE_RE.match(result.due_date):
            result.due_date = None
        if result.scheduled_date and not DATE_RE.match(result.scheduled_date):
            result.scheduled_date = None
        if result.due_time and not TIME_RE.match(result.due_time):
            result.due_time = None
        if result.scheduled_time and not TIME_RE.match(result.scheduled_time):
            result.scheduled_time = None
        if result.recurrence and not RecurrenceSynthesizer.is_valid_rrule_string(result.recurrence):
            result.recurrence = None
        if not result.estimate:
            result.estimate = None
        if not result.user_fields:
            result.user_fields = None
        return result
