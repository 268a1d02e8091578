"""SQLAlchemy models."""

from interne.models.collection import Collection, CollectionMember
from interne.models.entry import Entry, entry_tags
from interne.models.tag import Tag
from interne.models.user import User
from interne.models.visit import Visit

__all__ = [
    "User",
    "Collection",
    "CollectionMember",
    "Entry",
    "entry_tags",
    "Tag",
    "Visit",
]
