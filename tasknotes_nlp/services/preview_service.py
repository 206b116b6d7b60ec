"""Human-readable preview of a parse result."""

import logging
import re
from datetime import datetime

from dateutil.rrule import rrulestr

from tasknotes_nlp.exceptions import InvalidRecurrenceError
from tasknotes_nlp.models.parsed_task import ParsedTaskData, PreviewPart
from tasknotes_nlp.models.triggers import UserMappedField
from tasknotes_nlp.services.recurrence_service import RecurrenceSynthesizer

logger = logging.getLogger(__name__)

DETAILS_PREVIEW_LENGTH = 50
SEPARATOR = " • "

DAY_NAMES = {
    "MO": "Monday",
    "TU": "Tuesday",
    "WE": "Wednesday",
    "TH": "Thursday",
    "FR": "Friday",
    "SA": "Saturday",
    "SU": "Sunday",
}
FREQ_UNITS = {"DAILY": "day", "WEEKLY": "week", "MONTHLY": "month", "YEARLY": "year"}

_BYDAY_ITEM_RE = re.compile(r"^([+-]?\d+)?(MO|TU|WE|TH|FR|SA|SU)$")
_WIKILINK_NAME_RE = re.compile(r"[ \-A-Z]")

# Fixed anchor for validating rules; the rule text never depends on it.
_VALIDATION_START = datetime(2000, 1, 1)


def ordinal(n: int) -> str:
    """1 -> '1st', 2 -> '2nd', -1 -> 'last'."""
    if n == -1:
        return "last"
    if n < 0:
        return f"{ordinal(-n)} last"
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


class PreviewFormatter:
    """Build preview parts and text for a ParsedTaskData.

    Icons are placeholder names for a UI layer to map to real icons.
    """

    def __init__(self, user_fields: list[UserMappedField] | None = None):
        self.user_fields = {field.id: field for field in (user_fields or [])}

    @staticmethod
    def parse_rule(rule: str) -> dict[str, str]:
        """Split a rule string into its parts after validating it.

        Args:
            rule: String like 'FREQ=WEEKLY;INTERVAL=2;BYDAY=MO'

        Returns:
            Mapping of upper-case part names to values

        Raises:
            InvalidRecurrenceError: If the rule is malformed or rejected by dateutil
        """
        if not RecurrenceSynthesizer.is_valid_rrule_string(rule):
            raise InvalidRecurrenceError(f"Invalid recurrence rule: {rule!r}")
        try:
            rrulestr(rule, dtstart=_VALIDATION_START)
        except (ValueError, KeyError) as e:
            raise InvalidRecurrenceError(f"Invalid recurrence rule {rule!r}: {e}") from e

        parts = {}
        for item in rule.split(";"):
            if not item:
                continue
            key, _, value = item.partition("=")
            parts[key.strip().upper()] = value.strip().upper()
        return parts

    def describe_recurrence(self, rule: str) -> str:
        """Render a rule as text, e.g. 'every 2 weeks on Monday'."""
        try:
            parts = self.parse_rule(rule)
        except InvalidRecurrenceError as e:
            logger.debug(f"Cannot describe recurrence: {e}")
            return "Invalid recurrence"

        unit = FREQ_UNITS.get(parts["FREQ"])
        if unit is None:
            # rrulestr accepts HOURLY and friends, which quick entry never produces.
            return f"every {parts['FREQ'].lower()}"

        interval = int(parts.get("INTERVAL", "1") or 1)
        text = f"every {unit}" if interval == 1 else f"every {interval} {unit}s"

        days = []
        for item in filter(None, parts.get("BYDAY", "").split(",")):
            match = _BYDAY_ITEM_RE.match(item)
            if not match:
                continue
            position = match.group(1) or parts.get("BYSETPOS")
            name = DAY_NAMES[match.group(2)]
            days.append(f"the {ordinal(int(position))} {name}" if position else name)
        if days:
            text += " on " + ", ".join(days)
        elif parts.get("BYMONTHDAY"):
            text += " on the " + ", ".join(ordinal(int(d)) for d in parts["BYMONTHDAY"].split(","))
        return text

    @staticmethod
    def _format_project(project: str) -> str:
        if project.startswith("[["):
            return f"+{project}"
        if _WIKILINK_NAME_RE.search(project):
            return f"+[[{project}]]"
        return f"+{project}"

    def get_preview_data(self, parsed: ParsedTaskData) -> list[PreviewPart]:
        """Build the ordered list of preview parts for a parse result."""
        parts: list[PreviewPart] = []

        if parsed.title:
            parts.append(PreviewPart("edit-3", f'"{parsed.title}"'))
        if parsed.details:
            snippet = parsed.details[:DETAILS_PREVIEW_LENGTH]
            if len(parsed.details) > DETAILS_PREVIEW_LENGTH:
                snippet += "..."
            parts.append(PreviewPart("file-text", f'Details: "{snippet}"'))
        if parsed.due_date:
            when = f"{parsed.due_date} at {parsed.due_time}" if parsed.due_time else parsed.due_date
            parts.append(PreviewPart("calendar", f"Due: {when}"))
        if parsed.scheduled_date:
            when = (
                f"{parsed.scheduled_date} at {parsed.scheduled_time}"
                if parsed.scheduled_time
                else parsed.scheduled_date
            )
            parts.append(PreviewPart("calendar-clock", f"Scheduled: {when}"))
        if parsed.priority:
            parts.append(PreviewPart("alert-triangle", f"Priority: {parsed.priority}"))
        if parsed.status:
            parts.append(PreviewPart("activity", f"Status: {parsed.status}"))
        if parsed.contexts:
            parts.append(PreviewPart("map-pin", "Contexts: " + ", ".join(f"@{c}" for c in parsed.contexts)))
        if parsed.projects:
            parts.append(
                PreviewPart("folder", "Projects: " + ", ".join(self._format_project(p) for p in parsed.projects))
            )
        if parsed.tags:
            parts.append(PreviewPart("tag", "Tags: " + ", ".join(f"#{t}" for t in parsed.tags)))
        if parsed.recurrence:
            parts.append(PreviewPart("repeat", f"Recurrence: {self.describe_recurrence(parsed.recurrence)}"))
        if parsed.estimate:
            parts.append(PreviewPart("clock", f"Estimate: {parsed.estimate} min"))
        for field_id, value in (parsed.user_fields or {}).items():
            field = self.user_fields.get(field_id)
            label = field.display_name if field else field_id
            shown = ", ".join(value) if isinstance(value, list) else value
            parts.append(PreviewPart("list", f"{label}: {shown}"))

        return parts

    def get_preview_text(self, parsed: ParsedTaskData) -> str:
        """Join the preview parts into a single line."""
        return SEPARATOR.join(part.text for part in self.get_preview_data(parsed))
