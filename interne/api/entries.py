"""Entry API endpoints."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from interne.api.dependencies import get_current_user, get_entry_service, get_now
from interne.models.enums import EntryFilter
from interne.models.user import User
from interne.schemas.entry import (
    EntryCreate,
    EntryResponse,
    EntryUpdate,
    EntryViewResponse,
    VisitResponse,
)
from interne.services.access import can_mutate
from interne.services.entry_service import EntryService
from interne.services.selection import EntryView

router = APIRouter(prefix="/api/v1/entries", tags=["entries"])


def to_view_response(view: EntryView, user: User) -> EntryViewResponse:
    """Flatten an evaluated entry into its API shape."""
    base = EntryResponse.model_validate(view.entry)
    return EntryViewResponse(
        **base.model_dump(),
        is_available=view.is_available,
        available_in=view.availability.available_in,
        last_viewed=view.last_viewed,
        visit_count=view.visit_count,
        state=view.state,
        can_edit=can_mutate(view.entry, user),
    )


@router.get("", response_model=list[EntryViewResponse])
def get_entries(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[EntryService, Depends(get_entry_service)],
    now: Annotated[datetime, Depends(get_now)],
    entry_filter: EntryFilter = Query(
        default=EntryFilter.AVAILABLE, alias="filter", description="Which entries to show"
    ),
):
    """Get the entries visible to the current user."""
    views = service.list_entries(current_user, entry_filter, now)
    return [to_view_response(view, current_user) for view in views]


@router.post("", response_model=EntryViewResponse, status_code=status.HTTP_201_CREATED)
def create_entry(
    entry_data: EntryCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[EntryService, Depends(get_entry_service)],
    now: Annotated[datetime, Depends(get_now)],
):
    """Create a new entry."""
    entry = service.create_entry(current_user, entry_data)
    return to_view_response(service.view_entry(entry, now), current_user)


@router.get("/{entry_id}", response_model=EntryViewResponse)
def get_entry(
    entry_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[EntryService, Depends(get_entry_service)],
    now: Annotated[datetime, Depends(get_now)],
):
    """Get a specific entry."""
    entry = service.get_visible_entry(entry_id, current_user)
    return to_view_response(service.view_entry(entry, now), current_user)


@router.put("/{entry_id}", response_model=EntryViewResponse)
def update_entry(
    entry_id: int,
    entry_data: EntryUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[EntryService, Depends(get_entry_service)],
    now: Annotated[datetime, Depends(get_now)],
):
    """Update an entry (owner only)."""
    entry = service.get_mutable_entry(entry_id, current_user)
    entry = service.update_entry(entry, current_user, entry_data)
    return to_view_response(service.view_entry(entry, now), current_user)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(
    entry_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[EntryService, Depends(get_entry_service)],
):
    """Delete an entry and its visit history (owner only)."""
    entry = service.get_mutable_entry(entry_id, current_user)
    service.delete_entry(entry, current_user)


@router.post("/{entry_id}/visit", response_model=EntryViewResponse)
def visit_entry(
    entry_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[EntryService, Depends(get_entry_service)],
    now: Annotated[datetime, Depends(get_now)],
):
    """Mark an entry read and restart its cooldown."""
    entry = service.get_visible_entry(entry_id, current_user)
    service.record_visit(entry, current_user, now)
    return to_view_response(service.view_entry(entry, now), current_user)


@router.get("/{entry_id}/visits", response_model=list[VisitResponse])
def get_visits(
    entry_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[EntryService, Depends(get_entry_service)],
):
    """Get the visit history of an entry, newest first."""
    entry = service.get_visible_entry(entry_id, current_user)
    return service.visit_history(entry)
