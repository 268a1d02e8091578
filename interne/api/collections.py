"""Collection API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from interne.api.dependencies import get_collection_service, get_current_user
from interne.models.collection import Collection
from interne.models.user import User
from interne.schemas.collection import (
    CollectionCreate,
    CollectionDetailResponse,
    CollectionJoin,
    CollectionResponse,
    CollectionUpdate,
    MemberResponse,
)
from interne.services.access import can_manage_collection
from interne.services.collection_service import CollectionService

router = APIRouter(prefix="/api/v1/collections", tags=["collections"])


def to_response(collection: Collection, user: User, member_count: int) -> CollectionResponse:
    """Build a collection response; only the owner sees the invite code."""
    response = CollectionResponse.model_validate(collection)
    response.is_owner = can_manage_collection(collection, user)
    response.member_count = member_count
    if not response.is_owner:
        response.invite_code = None
    return response


def to_detail_response(
    collection: Collection, user: User, service: CollectionService
) -> CollectionDetailResponse:
    """Build a collection response including its members."""
    members = [
        MemberResponse(id=member.id, name=member.name, joined_at=membership.joined_at)
        for member, membership in service.members(collection)
    ]
    summary = to_response(collection, user, len(members) + 1)
    return CollectionDetailResponse(**summary.model_dump(), members=members)


@router.get("", response_model=list[CollectionResponse])
def get_collections(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CollectionService, Depends(get_collection_service)],
):
    """Get all collections owned by or shared with the current user."""
    return [
        to_response(collection, current_user, count)
        for collection, count in service.list_collections(current_user)
    ]


@router.post("", response_model=CollectionResponse, status_code=status.HTTP_201_CREATED)
def create_collection(
    collection_data: CollectionCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CollectionService, Depends(get_collection_service)],
):
    """Create a new collection."""
    collection = service.create_collection(current_user, collection_data.name)
    return to_response(collection, current_user, 1)


@router.post("/join", response_model=CollectionResponse)
def join_collection(
    join_data: CollectionJoin,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CollectionService, Depends(get_collection_service)],
):
    """Join a collection with its invite code."""
    collection = service.join(current_user, join_data.invite_code)
    return to_detail_response(collection, current_user, service)


@router.get("/{collection_id}", response_model=CollectionDetailResponse)
def get_collection(
    collection_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CollectionService, Depends(get_collection_service)],
):
    """Get a collection and its members."""
    collection = service.get_collection(collection_id, current_user)
    return to_detail_response(collection, current_user, service)


@router.put("/{collection_id}", response_model=CollectionDetailResponse)
def update_collection(
    collection_id: int,
    collection_data: CollectionUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CollectionService, Depends(get_collection_service)],
):
    """Rename a collection (owner only)."""
    collection = service.get_managed_collection(collection_id, current_user)
    collection = service.rename_collection(collection, collection_data.name)
    return to_detail_response(collection, current_user, service)


@router.delete("/{collection_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_collection(
    collection_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CollectionService, Depends(get_collection_service)],
):
    """Delete a collection (owner only). Its entries become private."""
    collection = service.get_managed_collection(collection_id, current_user)
    service.delete_collection(collection)


@router.post("/{collection_id}/regenerate-invite", response_model=CollectionDetailResponse)
def regenerate_invite(
    collection_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CollectionService, Depends(get_collection_service)],
):
    """Issue a new invite code (owner only)."""
    collection = service.get_managed_collection(collection_id, current_user)
    collection = service.regenerate_invite(collection)
    return to_detail_response(collection, current_user, service)


@router.post("/{collection_id}/leave", status_code=status.HTTP_204_NO_CONTENT)
def leave_collection(
    collection_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CollectionService, Depends(get_collection_service)],
):
    """Leave a collection you joined."""
    collection = service.get_collection(collection_id, current_user)
    service.leave(collection, current_user)


@router.delete("/{collection_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_member(
    collection_id: int,
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CollectionService, Depends(get_collection_service)],
):
    """Remove a member from a collection (owner only)."""
    collection = service.get_managed_collection(collection_id, current_user)
    service.remove_member(collection, user_id)
