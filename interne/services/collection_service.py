"""Collection service for sharing entries between users."""

import logging

from fastapi import HTTPException, status
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from interne.models.collection import Collection, CollectionMember
from interne.models.user import User
from interne.services.access import can_manage_collection
from interne.services.auth import generate_invite_code

logger = logging.getLogger(__name__)


def collection_ids_for(db: Session, user: User) -> set[int]:
    """Get ids of every collection the user owns or has joined.

    Owners are implicit members and have no membership row, so both sources
    are needed.
    """
    owned = db.query(Collection.id).filter(Collection.owner_id == user.id).all()
    joined = (
        db.query(CollectionMember.collection_id)
        .filter(CollectionMember.user_id == user.id)
        .all()
    )
    return {cid for (cid,) in owned} | {cid for (cid,) in joined}


class CollectionService:
    """Service for collection membership and management."""

    def __init__(self, db: Session):
        self.db = db

    def list_collections(self, user: User) -> list[tuple[Collection, int]]:
        """Collections the user owns or belongs to, with member counts.

        The count includes the owner.
        """
        member_ids = select(CollectionMember.collection_id).where(
            CollectionMember.user_id == user.id
        )
        collections = (
            self.db.query(Collection)
            .filter(or_(Collection.owner_id == user.id, Collection.id.in_(member_ids)))
            .order_by(Collection.name)
            .all()
        )

        counts = {}
        collection_ids = [c.id for c in collections]
        if collection_ids:
            rows = (
                self.db.query(CollectionMember.collection_id, func.count(CollectionMember.user_id))
                .filter(CollectionMember.collection_id.in_(collection_ids))
                .group_by(CollectionMember.collection_id)
                .all()
            )
            counts = dict(rows)

        return [(c, counts.get(c.id, 0) + 1) for c in collections]

    def get_collection(self, collection_id: int, user: User) -> Collection:
        """Get a collection the user owns or belongs to."""
        collection = self.db.query(Collection).filter(Collection.id == collection_id).first()
        if collection and collection.id in collection_ids_for(self.db, user):
            return collection

        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Collection not found")

    def get_managed_collection(self, collection_id: int, user: User) -> Collection:
        """Get a collection the user owns, rejecting members who do not."""
        collection = self.get_collection(collection_id, user)
        if not can_manage_collection(collection, user):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only the owner can manage this collection",
            )
        return collection

    def create_collection(self, user: User, name: str) -> Collection:
        """Create a new collection owned by the user."""
        collection = Collection(owner_id=user.id, name=name, invite_code=generate_invite_code())
        self.db.add(collection)
        self.db.commit()
        self.db.refresh(collection)
        return collection

    def rename_collection(self, collection: Collection, name: str) -> Collection:
        """Rename a collection."""
        collection.name = name
        self.db.commit()
        self.db.refresh(collection)
        return collection

    def delete_collection(self, collection: Collection) -> None:
        """Delete a collection.

        Entries placed in it stay with their owners and become private again.
        """
        collection_id = collection.id
        for entry in collection.entries:
            entry.collection_id = None
        self.db.delete(collection)
        self.db.commit()
        logger.info(f"Deleted collection {collection_id}")

    def members(self, collection: Collection) -> list[tuple[User, CollectionMember]]:
        """Members of a collection, oldest first. The owner is not listed."""
        return (
            self.db.query(User, CollectionMember)
            .join(CollectionMember, CollectionMember.user_id == User.id)
            .filter(CollectionMember.collection_id == collection.id)
            .order_by(CollectionMember.joined_at)
            .all()
        )

    def join(self, user: User, invite_code: str) -> Collection:
        """Join the collection with the given invite code.

        Joining a collection you own or already belong to changes nothing.
        """
        collection = (
            self.db.query(Collection).filter(Collection.invite_code == invite_code.strip()).first()
        )
        if not collection:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invalid invite code")

        if collection.owner_id == user.id:
            return collection

        existing = (
            self.db.query(CollectionMember)
            .filter(
                CollectionMember.collection_id == collection.id,
                CollectionMember.user_id == user.id,
            )
            .first()
        )
        if not existing:
            self.db.add(CollectionMember(collection_id=collection.id, user_id=user.id))
            self.db.commit()
            logger.info(f"User {user.id} joined collection {collection.id}")

        return collection

    def regenerate_invite(self, collection: Collection) -> Collection:
        """Replace the invite code; the old one stops working."""
        collection.invite_code = generate_invite_code()
        self.db.commit()
        self.db.refresh(collection)
        return collection

    def remove_member(self, collection: Collection, user_id: int) -> None:
        """Remove a member from a collection."""
        membership = (
            self.db.query(CollectionMember)
            .filter(
                CollectionMember.collection_id == collection.id,
                CollectionMember.user_id == user_id,
            )
            .first()
        )
        if not membership:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found")

        self.db.delete(membership)
        self.db.commit()
        logger.info(f"User {user_id} left collection {collection.id}")

    def leave(self, collection: Collection, user: User) -> None:
        """Leave a collection you joined. Owners cannot leave their own."""
        if collection.owner_id == user.id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="The owner cannot leave a collection",
            )
        self.remove_member(collection, user.id)
