"""Pydantic schemas for API requests and responses."""

from interne.schemas.auth import AuthResponse, InviteLogin, UserResponse
from interne.schemas.collection import (
    CollectionCreate,
    CollectionDetailResponse,
    CollectionJoin,
    CollectionResponse,
    CollectionUpdate,
    MemberResponse,
)
from interne.schemas.entry import (
    EntryCreate,
    EntryResponse,
    EntryUpdate,
    EntryViewResponse,
    VisitResponse,
)
from interne.schemas.export import ExportData, ExportEntry, LegacyEntry
from interne.schemas.tag import TagCloudItem

__all__ = [
    "InviteLogin",
    "AuthResponse",
    "UserResponse",
    "CollectionCreate",
    "CollectionUpdate",
    "CollectionJoin",
    "CollectionResponse",
    "CollectionDetailResponse",
    "MemberResponse",
    "EntryCreate",
    "EntryUpdate",
    "EntryResponse",
    "EntryViewResponse",
    "VisitResponse",
    "ExportData",
    "ExportEntry",
    "LegacyEntry",
    "TagCloudItem",
]
