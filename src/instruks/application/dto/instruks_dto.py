"""Instruks DTOs."""

from uuid import UUID

from pydantic import BaseModel, Field, field_validator

TITLE_MAX_LENGTH = 160
DESCRIPTION_MAX_LENGTH = 400
CONTENT_MAX_LENGTH = 200_000


def _reject_angle_brackets(value: str | None, field: str) -> str | None:
    if value is not None and ("<" in value or ">" in value):
        raise ValueError(f"{field} cannot contain < or >")
    return value


class InstruksInput(BaseModel):
    """Payload for creating, updating or branching an instruks."""

    title: str = Field(..., max_length=TITLE_MAX_LENGTH, description="Document title")
    description: str | None = Field(
        None, max_length=DESCRIPTION_MAX_LENGTH, description="Short summary (optional)"
    )
    content: str = Field(..., max_length=CONTENT_MAX_LENGTH, description="Rich-text HTML body")
    category_id: UUID = Field(..., description="Owning category")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Title must be non-blank plain text."""
        if not v.strip():
            raise ValueError("Title is required")
        _reject_angle_brackets(v, "Title")
        return v.strip()

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        _reject_angle_brackets(v, "Description")
        if v is not None and not v.strip():
            return None
        return v

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Content is required")
        return v

