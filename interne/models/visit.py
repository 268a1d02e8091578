"""Visit model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship

from interne.database import Base


class Visit(Base):
    """Append-only record of a user marking an entry read."""

    __tablename__ = "visits"

    id = Column(Integer, primary_key=True, index=True)
    entry_id = Column(
        Integer, ForeignKey("entries.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    visited_at = Column(DateTime(timezone=True), nullable=False)

    # Relationships
    entry = relationship("Entry", back_populates="visits")
    user = relationship("User")
