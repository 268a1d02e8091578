"""Export and import schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from interne.models.enums import Interval


class ExportEntry(BaseModel):
    """An entry as written to an export file."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    url: str
    title: str
    description: str | None
    duration: int
    interval: Interval
    dismissed_at: datetime | None
    created_at: datetime
    updated_at: datetime
    tags: list[str] = Field(default_factory=list, validation_alias="tag_names")


class ExportData(BaseModel):
    """Full export of a user's own entries."""

    exported_at: datetime
    entries: list[ExportEntry]


class LegacyEntry(BaseModel):
    """Entry as stored by the old browser-only client."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    url: str
    title: str
    description: str | None = None
    duration: int | str
    interval: str
    visited: int | None = None
    created_at: str | None = Field(None, alias="createdAt")
    updated_at: str | None = Field(None, alias="updatedAt")
    dismissed_at: str | None = Field(None, alias="dismissedAt")
