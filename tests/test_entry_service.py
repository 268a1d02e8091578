"""Tests for the entry service: visit transactions and jitter mode."""

import pytest
from sqlalchemy.exc import SQLAlchemyError

from interne.config import Settings
from interne.models.entry import Entry
from interne.models.enums import EntryFilter, Interval
from interne.models.visit import Visit
from interne.schemas.entry import EntryCreate
from interne.services.entry_service import EntryService


def create_entry(service, user, duration=30):
    return service.create_entry(
        user,
        EntryCreate(
            url="https://example.com/monthly",
            title="Monthly read",
            duration=duration,
            interval=Interval.DAYS,
        ),
    )


def listed_labels(service, user, now, reads):
    labels = []
    for _ in range(reads):
        (view,) = service.list_entries(user, EntryFilter.HIDDEN, now)
        labels.append(view.availability.available_in)
    return labels


def test_record_visit_rolls_back_on_error(db, user_factory, now, monkeypatch):
    """Test that a failed commit leaves neither a visit nor a dismissal behind."""
    user = user_factory()
    service = EntryService(db, Settings(entropy=0))
    entry = create_entry(service, user)
    entry_id = entry.id

    def failing_commit():
        raise SQLAlchemyError("database is locked")

    monkeypatch.setattr(db, "commit", failing_commit)

    with pytest.raises(SQLAlchemyError):
        service.record_visit(entry, user, now)

    monkeypatch.undo()
    assert db.query(Visit).filter(Visit.entry_id == entry_id).count() == 0
    assert db.query(Entry).filter(Entry.id == entry_id).one().dismissed_at is None


def test_record_visit_commits_both_writes(db, user_factory, now):
    """Test that a visit row and the new dismissal are stored together."""
    user = user_factory()
    service = EntryService(db, Settings(entropy=0))
    entry = create_entry(service, user)

    visit = service.record_visit(entry, user, now)

    assert visit.id is not None
    assert service.visit_count(entry) == 1
    assert entry.dismissed_at is not None


def test_stable_jitter_repeats_across_reads(db, user_factory, now):
    """Test that seeded jitter shows the same label on every listing."""
    user = user_factory()
    service = EntryService(db, Settings(entropy=10, entropy_stable=True))
    entry = create_entry(service, user)
    service.record_visit(entry, user, now)

    labels = listed_labels(service, user, now, reads=30)

    assert len(set(labels)) == 1
    assert labels[0] in {f"in {days} days" for days in range(30, 37)}


def test_fresh_jitter_varies_across_reads(db, user_factory, now):
    """Test that unseeded jitter draws a new delay on each listing."""
    user = user_factory()
    service = EntryService(db, Settings(entropy=10, entropy_stable=False))
    entry = create_entry(service, user)
    service.record_visit(entry, user, now)

    labels = listed_labels(service, user, now, reads=60)

    assert len(set(labels)) > 1
    assert set(labels) <= {f"in {days} days" for days in range(30, 37)}


def test_zero_entropy_has_no_jitter(db, user_factory, now):
    """Test that entropy 0 gives the exact cooldown in either mode."""
    user = user_factory()
    service = EntryService(db, Settings(entropy=0, entropy_stable=False))
    entry = create_entry(service, user)
    service.record_visit(entry, user, now)

    assert set(listed_labels(service, user, now, reads=10)) == {"in 30 days"}
