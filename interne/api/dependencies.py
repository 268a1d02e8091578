"""FastAPI dependencies for authentication, services and the clock."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from interne.config import Settings, get_settings
from interne.database import get_db
from interne.models.user import User
from interne.services.auth import decode_access_token
from interne.services.collection_service import CollectionService
from interne.services.entry_service import EntryService
from interne.services.tag_service import TagService

security = HTTPBearer()


def get_now() -> datetime:
    """Current time; the single place request handlers read the clock."""
    return datetime.now(UTC)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    token = credentials.credentials
    payload = decode_access_token(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = db.query(User).filter(User.id == int(user_id)).first()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


def get_entry_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> EntryService:
    """Get entry service with dependencies."""
    return EntryService(db, settings)


def get_collection_service(
    db: Annotated[Session, Depends(get_db)],
) -> CollectionService:
    """Get collection service with dependencies."""
    return CollectionService(db)


def get_tag_service(
    db: Annotated[Session, Depends(get_db)],
) -> TagService:
    """Get tag service with dependencies."""
    return TagService(db)
