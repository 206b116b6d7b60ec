"""Parsed task model produced by the natural language parser."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_TITLE = "Untitled Task"

UserFieldValue = str | list[str]


class ParsedTaskData(BaseModel):
    """Structured task attributes extracted from one line of free text."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = ""
    details: str | None = None
    due_date: str | None = Field(default=None, description="YYYY-MM-DD")
    scheduled_date: str | None = Field(default=None, description="YYYY-MM-DD")
    due_time: str | None = Field(default=None, description="HH:MM, 24-hour")
    scheduled_time: str | None = Field(default=None, description="HH:MM, 24-hour")
    priority: str | None = None
    status: str | None = None
    tags: list[str] = Field(default_factory=list)
    contexts: list[str] = Field(default_factory=list)
    projects: list[str] = Field(default_factory=list)
    recurrence: str | None = Field(default=None, description="FREQ=...;INTERVAL=...;BYDAY=...")
    estimate: int | None = Field(default=None, description="Time estimate in minutes")
    user_fields: dict[str, UserFieldValue] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, omitting absent optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


@dataclass(frozen=True)
class PreviewPart:
    """One line of the human-readable parse preview.

    The icon is a placeholder name for the UI layer to interpret.
    """

    icon: str
    text: str
