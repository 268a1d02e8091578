"""Filter and sort pipeline producing the named entry views."""

import random
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime

from interne.models.entry import Entry
from interne.models.enums import EntryFilter, EntryState
from interne.services.availability import (
    Availability,
    calculate_availability,
    dismissed_time,
    entry_state,
    format_elapsed,
    stable_rng,
)

RngFactory = Callable[[Entry], random.Random]


@dataclass(frozen=True)
class EntryView:
    """An entry together with everything computed about it for one request."""

    entry: Entry
    visit_count: int
    availability: Availability
    last_viewed: str | None
    state: EntryState
    dismissed: datetime | None

    @property
    def is_available(self) -> bool:
        return self.availability.is_available


def build_view(
    entry: Entry,
    visit_count: int,
    now: datetime,
    entropy: int = 0,
    rng_factory: RngFactory = stable_rng,
) -> EntryView:
    """Evaluate a single entry at ``now``."""
    return EntryView(
        entry=entry,
        visit_count=visit_count,
        availability=calculate_availability(entry, now, entropy, rng_factory(entry)),
        last_viewed=format_elapsed(entry.dismissed_at, now),
        state=entry_state(entry, now),
        dismissed=dismissed_time(entry, now),
    )


def _matches(view: EntryView, entry_filter: EntryFilter) -> bool:
    if entry_filter is EntryFilter.AVAILABLE:
        return view.is_available
    if entry_filter is EntryFilter.HIDDEN:
        return not view.is_available
    if entry_filter is EntryFilter.NO_VISITS:
        return view.visit_count == 0
    return True


def _recency_key(view: EntryView) -> tuple[int, float]:
    # never dismissed first, then most recently dismissed
    if view.dismissed is None:
        return (0, 0.0)
    return (1, -view.dismissed.timestamp())


def _resurface_key(view: EntryView) -> tuple[int, float, float]:
    available_at = view.availability.available_at
    return (*_recency_key(view), available_at.timestamp() if available_at else 0.0)


def select_entries(
    listings: Iterable[tuple[Entry, int]],
    entry_filter: EntryFilter,
    now: datetime,
    entropy: int = 0,
    rng_factory: RngFactory = stable_rng,
) -> list[EntryView]:
    """Apply ``entry_filter`` to ``(entry, visit_count)`` pairs and order the result.

    The available view is ordered by dismissal time, newest first, with
    never-dismissed entries leading. The other views break ties on that order
    by the soonest time to resurface.
    """
    entry_filter = EntryFilter(entry_filter)
    views = [
        build_view(entry, visit_count, now, entropy, rng_factory)
        for entry, visit_count in listings
    ]
    selected = [view for view in views if _matches(view, entry_filter)]

    if entry_filter is EntryFilter.AVAILABLE:
        return sorted(selected, key=_recency_key)
    return sorted(selected, key=_resurface_key)
