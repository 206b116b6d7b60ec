"""Trigger, status, priority and user field configuration models."""

import enum

from pydantic import BaseModel, Field, field_validator


class UserFieldType(str, enum.Enum):
    """Value type of a user-defined field."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"
    LIST = "list"


class SuggesterType(str, enum.Enum):
    """Autocomplete affordance an interactive UI should offer for a property."""

    LIST = "list"
    FILE = "file"
    STATUS = "status"
    PRIORITY = "priority"
    NATIVE_TAG = "native-tag"
    BOOLEAN = "boolean"
    NONE = "none"


BUILTIN_PROPERTIES = ("tags", "contexts", "projects", "status", "priority")


class PropertyTriggerConfig(BaseModel):
    """Trigger string that introduces a property in free text."""

    property_id: str = Field(description="Built-in property id or user field id")
    trigger: str = Field(min_length=1, description="Prefix such as '#', '@' or 'effort:'")
    enabled: bool = True


def default_triggers() -> list[PropertyTriggerConfig]:
    """Default trigger set: priority is keyword-matched, so its trigger starts disabled."""
    return [
        PropertyTriggerConfig(property_id="tags", trigger="#"),
        PropertyTriggerConfig(property_id="contexts", trigger="@"),
        PropertyTriggerConfig(property_id="projects", trigger="+"),
        PropertyTriggerConfig(property_id="status", trigger="*"),
        PropertyTriggerConfig(property_id="priority", trigger="!", enabled=False),
    ]


class NLPTriggersConfig(BaseModel):
    """All configured property triggers."""

    triggers: list[PropertyTriggerConfig] = Field(default_factory=default_triggers)


class StatusConfig(BaseModel):
    """A user-configured task status."""

    id: str
    value: str
    label: str
    color: str = "#808080"
    is_completed: bool = False
    order: int = 0


class PriorityConfig(BaseModel):
    """A user-configured task priority."""

    id: str
    value: str
    label: str
    color: str = "#808080"
    weight: int = 0


class UserMappedField(BaseModel):
    """A user-defined property with its own trigger and value type."""

    id: str = Field(description="Stable id, e.g. 'effort'")
    display_name: str
    key: str = Field(description="Frontmatter key the value is written to downstream")
    type: UserFieldType = UserFieldType.TEXT
    autosuggest_filter: dict | None = None

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Built-in property ids cannot be reused for user fields."""
        if v in BUILTIN_PROPERTIES:
            raise ValueError(f"'{v}' is a built-in property id")
        return v
