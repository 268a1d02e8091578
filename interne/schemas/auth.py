"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, Field


class InviteLogin(BaseModel):
    """Login request using a personal invite code."""

    invite_code: str = Field(..., min_length=1, max_length=64)


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    user: "UserResponse"


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str | None
