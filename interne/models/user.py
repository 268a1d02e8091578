"""User model."""

from sqlalchemy import Column, Integer, String

from interne.database import Base
from interne.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=True)
    invite_code = Column(String(64), unique=True, nullable=False, index=True)
