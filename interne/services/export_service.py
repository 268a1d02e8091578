"""Export a user's entries as JSON."""

from datetime import datetime

from sqlalchemy.orm import Session

from interne.models.entry import Entry
from interne.models.user import User
from interne.schemas.export import ExportData, ExportEntry


def export_filename(now: datetime) -> str:
    """Download filename for an export made at ``now``."""
    return f"interne-export-{now:%Y-%m-%d}.json"


def export_entries(db: Session, user: User, now: datetime) -> ExportData:
    """Collect the user's own entries, oldest first.

    Entries shared with the user through collections are not included.
    """
    entries = (
        db.query(Entry)
        .filter(Entry.owner_id == user.id)
        .order_by(Entry.created_at, Entry.id)
        .all()
    )
    return ExportData(
        exported_at=now,
        entries=[ExportEntry.model_validate(entry) for entry in entries],
    )
