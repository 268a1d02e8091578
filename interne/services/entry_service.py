"""Entry service: storage access and lifecycle transitions for entries."""

import logging
from datetime import datetime

from fastapi import HTTPException, status
from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from interne.config import Settings, get_settings
from interne.models.entry import Entry
from interne.models.enums import EntryFilter
from interne.models.tag import Tag
from interne.models.user import User
from interne.models.visit import Visit
from interne.schemas.entry import EntryCreate, EntryUpdate
from interne.services.access import can_mutate, can_view
from interne.services.availability import fresh_rng, stable_rng
from interne.services.collection_service import collection_ids_for
from interne.services.selection import EntryView, build_view, select_entries
from interne.services.tag_service import TagService

logger = logging.getLogger(__name__)


class EntryService:
    """Service for reading, changing and visiting entries."""

    def __init__(self, db: Session, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()
        self.rng_factory = stable_rng if self.settings.entropy_stable else fresh_rng

    # Reads

    def _visible_query(self, user: User, memberships: set[int]):
        conditions = [Entry.owner_id == user.id]
        if memberships:
            conditions.append(Entry.collection_id.in_(memberships))
        return self.db.query(Entry).filter(or_(*conditions))

    def visit_counts(self, entry_ids: list[int]) -> dict[int, int]:
        """Number of recorded visits per entry id."""
        if not entry_ids:
            return {}
        rows = (
            self.db.query(Visit.entry_id, func.count(Visit.id))
            .filter(Visit.entry_id.in_(entry_ids))
            .group_by(Visit.entry_id)
            .all()
        )
        return dict(rows)

    def visit_count(self, entry: Entry) -> int:
        """Number of recorded visits for one entry."""
        return self.visit_counts([entry.id]).get(entry.id, 0)

    def visible_entries(self, user: User, tag_name: str | None = None) -> list[tuple[Entry, int]]:
        """Entries the user can see, paired with their visit counts."""
        memberships = collection_ids_for(self.db, user)
        query = self._visible_query(user, memberships)
        if tag_name is not None:
            query = query.filter(Entry.tags.any(Tag.name == tag_name.strip().lower()))

        entries = [e for e in query.all() if can_view(e, user, memberships)]
        counts = self.visit_counts([e.id for e in entries])
        return [(e, counts.get(e.id, 0)) for e in entries]

    def list_entries(
        self,
        user: User,
        entry_filter: EntryFilter,
        now: datetime,
        tag_name: str | None = None,
    ) -> list[EntryView]:
        """Run the user's visible entries through the named filter."""
        return select_entries(
            self.visible_entries(user, tag_name),
            entry_filter,
            now,
            entropy=self.settings.entropy,
            rng_factory=self.rng_factory,
        )

    def view_entry(self, entry: Entry, now: datetime) -> EntryView:
        """Evaluate a single entry for display."""
        return build_view(
            entry,
            self.visit_count(entry),
            now,
            entropy=self.settings.entropy,
            rng_factory=self.rng_factory,
        )

    def get_visible_entry(self, entry_id: int, user: User) -> Entry:
        """Get an entry the user may see."""
        entry = self.db.query(Entry).filter(Entry.id == entry_id).first()
        if entry and can_view(entry, user, collection_ids_for(self.db, user)):
            return entry

        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Entry not found")

    def get_mutable_entry(self, entry_id: int, user: User) -> Entry:
        """Get an entry the user may edit or delete."""
        entry = self.get_visible_entry(entry_id, user)
        if not can_mutate(entry, user):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only the owner can change this entry",
            )
        return entry

    def visit_history(self, entry: Entry) -> list[Visit]:
        """All visits for an entry, newest first."""
        return (
            self.db.query(Visit)
            .filter(Visit.entry_id == entry.id)
            .order_by(Visit.visited_at.desc(), Visit.id.desc())
            .all()
        )

    # Writes

    def _check_collection(self, collection_id: int | None, user: User) -> None:
        if collection_id is None:
            return
        if collection_id not in collection_ids_for(self.db, user):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Collection not found"
            )

    def create_entry(self, user: User, data: EntryCreate) -> Entry:
        """Create a new entry. It starts out available."""
        self._check_collection(data.collection_id, user)

        entry = Entry(
            owner_id=user.id,
            collection_id=data.collection_id,
            url=data.url,
            title=data.title,
            description=data.description,
            duration=data.duration,
            interval=data.interval,
            dismissed_at=None,
        )
        entry.tags = TagService(self.db).resolve_tags(data.tags)
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        return entry

    def update_entry(self, entry: Entry, user: User, data: EntryUpdate) -> Entry:
        """Update an entry's fields. The cooldown anchor is left alone."""
        if not can_mutate(entry, user):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only the owner can change this entry",
            )

        # explicit null moves the entry out of its collection
        moves_collection = "collection_id" in data.model_fields_set
        if moves_collection:
            self._check_collection(data.collection_id, user)

        if data.url is not None:
            entry.url = data.url
        if data.title is not None:
            entry.title = data.title
        # explicit null clears the description
        if "description" in data.model_fields_set:
            entry.description = data.description
        if data.duration is not None:
            entry.duration = data.duration
        if data.interval is not None:
            entry.interval = data.interval
        if moves_collection:
            entry.collection_id = data.collection_id
        if data.tags is not None:
            entry.tags = TagService(self.db).resolve_tags(data.tags)

        self.db.commit()
        self.db.refresh(entry)
        return entry

    def delete_entry(self, entry: Entry, user: User) -> None:
        """Delete an entry along with its visits and tag links."""
        if not can_mutate(entry, user):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only the owner can delete this entry",
            )

        entry_id = entry.id
        self.db.delete(entry)
        self.db.commit()
        logger.info(f"Deleted entry {entry_id}")

    def record_visit(self, entry: Entry, user: User, now: datetime) -> Visit:
        """Mark an entry read: append a visit and restart the cooldown.

        Both writes are committed together or not at all.
        """
        entry_id = entry.id
        visit = Visit(entry_id=entry_id, user_id=user.id, visited_at=now)
        try:
            self.db.add(visit)
            entry.dismissed_at = now
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to record visit for entry {entry_id}: {e}")
            raise

        self.db.refresh(entry)
        logger.info(f"User {user.id} visited entry {entry_id}")
        return visit
