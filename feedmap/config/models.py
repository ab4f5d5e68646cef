"""Pydantic models for mapping file validation."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from feedmap.mapping.models import FieldMapping


class FeedConfig(BaseModel):
    """One feed's field mappings and record-level settings."""

    name: str = Field(..., description="Feed name")
    description: str | None = Field(None, description="Feed description")
    data_delimiter: str | None = Field(
        None, description="Overrides the process-wide data delimiter"
    )
    set_empty_values: bool = Field(
        False, description="Write empty strings over existing content"
    )
    fields: dict[str, FieldMapping] = Field(
        default_factory=dict, description="Target field handle -> mapping"
    )

    @field_validator("data_delimiter")
    @classmethod
    def _delimiter_not_empty(cls, value: str | None) -> str | None:
        if value is not None and not value:
            raise ValueError("data_delimiter must not be empty")
        return value
