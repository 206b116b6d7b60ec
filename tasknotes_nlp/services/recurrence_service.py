"""Recurrence phrase detection and rule synthesis."""

import logging
import re
from collections.abc import Callable

from tasknotes_nlp.models.language import LanguageConfig
from tasknotes_nlp.models.parsed_task import ParsedTaskData
from tasknotes_nlp.utils.text import BoundaryConfig, escape_and_join, remove_span

logger = logging.getLogger(__name__)

_BYDAY_RE = re.compile(r"BYDAY=([^;]*)")
_INTERVAL_RE = re.compile(r"INTERVAL=([^;]*)")

RuleBuilder = Callable[[re.Match], str]


class RecurrenceSynthesizer:
    """Turn phrases like 'every other week' into recurrence rule strings.

    Patterns are compiled once, most specific first:

    1. every <ordinal> <weekday>  -> FREQ=MONTHLY;BYDAY=XX;BYSETPOS=n
    2. every <N> <period>         -> FREQ=<period>;INTERVAL=N
    3. every other <period>       -> FREQ=<period>;INTERVAL=2
    4. every <weekday>, plurals   -> FREQ=WEEKLY;BYDAY=XX
    5. frequency words            -> FREQ=DAILY|WEEKLY|MONTHLY|YEARLY

    The first pattern that matches and yields a valid rule wins.
    """

    def __init__(self, language: LanguageConfig, boundaries: BoundaryConfig | None = None):
        self.language = language
        self.boundaries = boundaries or BoundaryConfig.for_language(language)
        self._patterns: list[tuple[re.Pattern, RuleBuilder]] = self._build_patterns()

    def _compile(self, body: str) -> re.Pattern:
        return re.compile(self.boundaries.wrap(body), re.IGNORECASE)

    def _build_patterns(self) -> list[tuple[re.Pattern, RuleBuilder]]:
        vocab = self.language.recurrence
        every = escape_and_join(vocab.every)
        other = escape_and_join(vocab.other)
        ordinals = escape_and_join(vocab.ordinals.all_words())
        weekdays = escape_and_join(vocab.weekdays.all_words())
        plural_weekdays = escape_and_join(vocab.plural_weekdays.all_words())
        periods = escape_and_join(vocab.periods.all_words())

        patterns: list[tuple[re.Pattern, RuleBuilder]] = []

        if every and ordinals and weekdays:
            patterns.append((
                self._compile(rf"({every})\s+({ordinals})\s+({weekdays})"),
                self._ordinal_weekday_rule,
            ))
        if every and periods:
            patterns.append((
                self._compile(rf"({every})\s+(\d+)\s+({periods})"),
                self._interval_rule,
            ))
        if every and other and periods:
            patterns.append((
                self._compile(rf"({every})\s+({other})\s+({periods})"),
                self._every_other_rule,
            ))
        if every and weekdays:
            patterns.append((
                self._compile(rf"({every})\s+({weekdays})"),
                lambda m: self._weekly_rule(vocab.weekdays.code_of(m.group(2))),
            ))
        if plural_weekdays:
            patterns.append((
                self._compile(rf"({plural_weekdays})"),
                lambda m: self._weekly_rule(vocab.plural_weekdays.code_of(m.group(1))),
            ))
        for freq, words in vocab.frequencies.by_frequency():
            alternatives = escape_and_join(words)
            if alternatives:
                patterns.append((
                    self._compile(f"({alternatives})"),
                    lambda m, freq=freq: f"FREQ={freq}",
                ))

        return patterns

    def _ordinal_weekday_rule(self, match: re.Match) -> str:
        vocab = self.language.recurrence
        position = vocab.ordinals.position_of(match.group(2)) or 1
        day = vocab.weekdays.code_of(match.group(3)) or ""
        return f"FREQ=MONTHLY;BYDAY={day};BYSETPOS={position}"

    def _interval_rule(self, match: re.Match) -> str:
        freq = self.language.recurrence.periods.frequency_of(match.group(3)) or "DAILY"
        return f"FREQ={freq};INTERVAL={int(match.group(2))}"

    def _every_other_rule(self, match: re.Match) -> str:
        freq = self.language.recurrence.periods.frequency_of(match.group(3)) or "DAILY"
        return f"FREQ={freq};INTERVAL=2"

    @staticmethod
    def _weekly_rule(day: str | None) -> str:
        # An unclassified weekday leaves BYDAY empty so the rule is rejected.
        return f"FREQ=WEEKLY;BYDAY={day or ''}"

    def extract(self, text: str, result: ParsedTaskData) -> str:
        """Find the first recurrence phrase, store its rule and remove it.

        Args:
            text: Residual text from the previous stages
            result: Accumulator that receives ``recurrence``

        Returns:
            Text with the recurrence phrase removed, or unchanged if none matched
        """
        for regex, build_rule in self._patterns:
            match = regex.search(text)
            if not match:
                continue
            rule = build_rule(match)
            if self.is_valid_rrule_string(rule):
                result.recurrence = rule
                return remove_span(text, match.start(), match.end())
            logger.debug(f"Rejected recurrence rule {rule!r} for phrase {match.group(0)!r}")
        return text

    @staticmethod
    def is_valid_rrule_string(rule: str | None) -> bool:
        """Check that a rule has FREQ, and that BYDAY and INTERVAL are usable when present."""
        if not rule or "FREQ=" not in rule:
            return False
        byday = _BYDAY_RE.search(rule)
        if byday:
            value = byday.group(1).strip()
            if not value or value == "undefined":
                return False
        interval = _INTERVAL_RE.search(rule)
        if interval:
            value = interval.group(1).strip()
            if not value.isdigit() or int(value) < 1:
                return False
        return True
