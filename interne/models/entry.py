"""Entry model."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import relationship

from interne.database import Base
from interne.models.enums import Interval
from interne.models.mixins import TimestampMixin

MAX_DURATION = 3650

entry_tags = Table(
    "entry_tags",
    Base.metadata,
    Column(
        "entry_id", Integer, ForeignKey("entries.id", ondelete="CASCADE"), primary_key=True
    ),
    Column(
        "tag_id",
        Integer,
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class Entry(Base, TimestampMixin):
    """A saved URL that resurfaces once its cooldown has elapsed."""

    __tablename__ = "entries"
    __table_args__ = (
        CheckConstraint(
            f"duration >= 1 AND duration <= {MAX_DURATION}", name="ck_entries_duration"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    collection_id = Column(
        Integer, ForeignKey("collections.id", ondelete="SET NULL"), nullable=True, index=True
    )
    url = Column(Text, nullable=False)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    duration = Column(Integer, nullable=False)
    interval = Column(
        Enum(
            Interval,
            name="interval",
            values_callable=lambda enum: [member.value for member in enum],
            validate_strings=True,
        ),
        nullable=False,
    )
    # null until the first visit; restarts the cooldown on every visit
    dismissed_at = Column(DateTime(timezone=True), nullable=True, index=True)

    # Relationships
    owner = relationship("User", backref="entries")
    collection = relationship("Collection", back_populates="entries")
    visits = relationship(
        "Visit",
        back_populates="entry",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Visit.visited_at.desc()",
    )
    tags = relationship("Tag", secondary=entry_tags, back_populates="entries")

    @property
    def tag_names(self) -> list[str]:
        """Sorted names of the tags attached to this entry."""
        return sorted(tag.name for tag in self.tags)
