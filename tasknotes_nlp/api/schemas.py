"""Pydantic schemas for API request/response models."""

from datetime import date
from typing import Any

from pydantic import BaseModel, Field

from tasknotes_nlp.models.parsed_task import PreviewPart


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


class ParseRequest(BaseModel):
    """Request body for parsing one line of task input."""

    text: str = Field(..., max_length=10000, description="Quick-entry text; lines after the first become details")
    language: str | None = Field(default=None, description="Language code (default: configured language)")
    reference_date: date | None = Field(
        default=None,
        description="Date relative expressions resolve against (default: today)",
    )
    default_to_scheduled: bool | None = Field(
        default=None,
        description="Where dates without a due/scheduled keyword go (default: configured value)",
    )


class PreviewPartResponse(BaseModel):
    """One line of the parse preview."""

    icon: str
    text: str

    @classmethod
    def from_part(cls, part: PreviewPart) -> "PreviewPartResponse":
        return cls(icon=part.icon, text=part.text)


class ParseResponse(BaseModel):
    """Parse result with its preview."""

    result: dict[str, Any] = Field(..., description="Parsed task data with camelCase keys")
    preview: list[PreviewPartResponse]
    preview_text: str


class LanguageResponse(BaseModel):
    """A shipped language table."""

    code: str
    name: str
