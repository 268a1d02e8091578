"""Collection schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CollectionCreate(BaseModel):
    """Create a new collection."""

    name: str = Field(..., max_length=100)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value


class CollectionUpdate(CollectionCreate):
    """Rename a collection."""


class CollectionJoin(BaseModel):
    """Join a collection with its invite code."""

    invite_code: str = Field(..., max_length=64)


class CollectionResponse(BaseModel):
    """Collection response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    owner_id: int
    created_at: datetime
    updated_at: datetime
    is_owner: bool = False
    member_count: int = 1
    # only shown to the owner
    invite_code: str | None = None


class MemberResponse(BaseModel):
    """A member of a collection."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    joined_at: datetime | None = None


class CollectionDetailResponse(CollectionResponse):
    """Collection with its member list."""

    members: list[MemberResponse] = Field(default_factory=list)
