"""Tag model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from interne.database import Base
from interne.models.entry import entry_tags
from interne.models.mixins import TimestampMixin


class Tag(Base, TimestampMixin):
    """Lower-cased label attached to entries."""

    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False, index=True)

    # Relationships
    entries = relationship("Entry", secondary=entry_tags, back_populates="tags")
