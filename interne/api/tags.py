"""Tag API endpoints."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends

from interne.api.dependencies import get_current_user, get_entry_service, get_now, get_tag_service
from interne.api.entries import to_view_response
from interne.models.enums import EntryFilter
from interne.models.user import User
from interne.schemas.entry import EntryViewResponse
from interne.schemas.tag import TagCloudItem
from interne.services.entry_service import EntryService
from interne.services.tag_service import TagService

router = APIRouter(prefix="/api/v1/tags", tags=["tags"])


@router.get("", response_model=list[TagCloudItem])
def get_tags(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TagService, Depends(get_tag_service)],
):
    """Get the tag cloud for the current user's entries."""
    return service.tag_cloud(current_user)


@router.get("/{name}", response_model=list[EntryViewResponse])
def get_tag_entries(
    name: str,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[EntryService, Depends(get_entry_service)],
    now: Annotated[datetime, Depends(get_now)],
):
    """Get every visible entry carrying a tag."""
    views = service.list_entries(current_user, EntryFilter.ALL, now, tag_name=name)
    return [to_view_response(view, current_user) for view in views]
