"""Entry schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from interne.models.entry import MAX_DURATION
from interne.models.enums import EntryState, Interval

TagName = Annotated[str, Field(max_length=100)]


def _check_url(value: str) -> str:
    value = value.strip()
    if not value.startswith(("http://", "https://")):
        raise ValueError("URL must start with http:// or https://")
    return value


def _check_title(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Title is required")
    return value


class EntryCreate(BaseModel):
    """Create a new entry."""

    url: str = Field(..., max_length=2048)
    title: str = Field(..., max_length=500)
    description: str | None = Field(None, max_length=5000)
    duration: int = Field(..., ge=1, le=MAX_DURATION)
    interval: Interval
    collection_id: int | None = None
    tags: list[TagName] = Field(default_factory=list, max_length=50)

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        return _check_url(value)

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        return _check_title(value)


class EntryUpdate(BaseModel):
    """Update an entry. Omitted fields are left unchanged."""

    url: str | None = Field(None, max_length=2048)
    title: str | None = Field(None, max_length=500)
    description: str | None = Field(None, max_length=5000)
    duration: int | None = Field(None, ge=1, le=MAX_DURATION)
    interval: Interval | None = None
    collection_id: int | None = None
    tags: list[TagName] | None = Field(None, max_length=50)

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str | None) -> str | None:
        return None if value is None else _check_url(value)

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str | None) -> str | None:
        return None if value is None else _check_title(value)


class EntryResponse(BaseModel):
    """Stored entry fields."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    owner_id: int
    collection_id: int | None
    url: str
    title: str
    description: str | None
    duration: int
    interval: Interval
    dismissed_at: datetime | None
    created_at: datetime
    updated_at: datetime
    tags: list[str] = Field(default_factory=list, validation_alias="tag_names")


class EntryViewResponse(EntryResponse):
    """Entry as shown in a list, with its computed availability."""

    is_available: bool
    available_in: str | None
    last_viewed: str | None
    visit_count: int
    state: EntryState
    can_edit: bool


class VisitResponse(BaseModel):
    """A single visit from an entry's history."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    entry_id: int
    user_id: int
    visited_at: datetime
