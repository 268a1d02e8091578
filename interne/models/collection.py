"""Collection model."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from interne.database import Base
from interne.models.mixins import TimestampMixin


class Collection(Base, TimestampMixin):
    """A named group of entries shared with its members."""

    __tablename__ = "collections"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(100), nullable=False)
    invite_code = Column(String(64), unique=True, nullable=False, index=True)

    # Relationships
    owner = relationship("User", backref="owned_collections")
    members = relationship(
        "CollectionMember", back_populates="collection", cascade="all, delete-orphan"
    )
    entries = relationship("Entry", back_populates="collection")


class CollectionMember(Base):
    """Membership of a non-owner user in a collection.

    The collection owner is an implicit member and never has a row here.
    """

    __tablename__ = "collection_members"

    collection_id = Column(
        Integer, ForeignKey("collections.id", ondelete="CASCADE"), primary_key=True
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    joined_at = Column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )

    # Relationships
    collection = relationship("Collection", back_populates="members")
    user = relationship("User", backref="memberships")
