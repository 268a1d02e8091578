"""Authentication service for JWT and invite-code handling."""

import logging
import secrets
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from sqlalchemy.orm import Session

from interne.config import get_settings
from interne.models.user import User

logger = logging.getLogger(__name__)

settings = get_settings()


def generate_invite_code() -> str:
    """Generate a new random invite code."""
    return secrets.token_urlsafe(24)


def create_access_token(user_id: int, name: str) -> str:
    """Create a JWT access token."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "name": name,
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def get_user_by_invite_code(db: Session, invite_code: str) -> User | None:
    """Get a user by their invite code."""
    return db.query(User).filter(User.invite_code == invite_code).first()


def authenticate_user(db: Session, invite_code: str) -> User | None:
    """Authenticate a user by invite code."""
    user = get_user_by_invite_code(db, invite_code.strip())
    if not user:
        logger.info("Rejected login with unknown invite code")
        return None
    return user


def create_user(db: Session, name: str, email: str | None = None) -> User:
    """Create a new user with a fresh invite code."""
    user = User(name=name, email=email, invite_code=generate_invite_code())
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Created user {user.id} ({name})")
    return user
