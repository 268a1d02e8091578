"""Availability and relative-time calculations for entries.

Every function here takes ``now`` explicitly. Nothing reads the clock, touches
the database or logs, so results depend only on the arguments.
"""

import hashlib
import math
import random
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from interne.models.enums import EntryState, Interval

ONE_DAY = timedelta(days=1)

# Upper bound of the jitter window, in days, at maximum entropy (10)
MAX_JITTER_DAYS = 7


class Schedulable(Protocol):
    """Anything carrying the cooldown fields of an entry."""

    id: int | None
    duration: int
    interval: Interval | str
    dismissed_at: datetime | str | None


@dataclass(frozen=True)
class Availability:
    """Result of evaluating an entry's cooldown at a given moment."""

    is_available: bool
    available_in: str | None = None
    available_at: datetime | None = None


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_timestamp(value: datetime | str | None) -> datetime | None:
    """Parse a stored timestamp, returning None when it is missing or unparseable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    try:
        return as_utc(datetime.fromisoformat(value.strip()))
    except (AttributeError, ValueError):
        return None


def dismissed_time(entry: Schedulable, now: datetime) -> datetime | None:
    """When the entry was last dismissed, or None if it never was.

    A dismissal timestamp that cannot be parsed counts as ``now``, so a corrupt
    value hides the entry for a full cooldown instead of surfacing it.
    """
    if entry.dismissed_at is None:
        return None
    return parse_timestamp(entry.dismissed_at) or as_utc(now)


def pluralize(count: int, unit: str) -> str:
    """Format ``count unit`` with an ``s`` unless count is exactly one."""
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_remaining(remaining: timedelta, interval: Interval) -> str:
    """Label a positive time-until-available using its largest whole unit."""
    if remaining.days > 0:
        return f"in {pluralize(remaining.days, 'day')}"

    hours = remaining.seconds // 3600
    if hours > 0:
        return f"in {pluralize(hours, 'hour')}"

    minutes = remaining.seconds // 60
    if minutes > 0:
        return f"in {pluralize(minutes, 'minute')}"

    # Under a minute left: report one step of the entry's own cadence
    return "in 1 hour" if interval is Interval.HOURS else "in 1 day"


def jitter_window(entropy: int) -> int:
    """Number of whole days a far-future entry may be pushed back."""
    return math.floor(entropy / 10 * MAX_JITTER_DAYS)


def stable_rng(entry: Schedulable) -> random.Random:
    """RNG seeded from the entry id and dismissal time.

    Repeated evaluations of the same dismissal draw the same jitter; a new
    visit reseeds it.
    """
    dismissed = parse_timestamp(entry.dismissed_at)
    stamp = dismissed.isoformat() if dismissed else str(entry.dismissed_at)
    digest = hashlib.sha256(f"{entry.id}:{stamp}".encode()).digest()
    return random.Random(int.from_bytes(digest[:8], "big"))


def fresh_rng(entry: Schedulable) -> random.Random:
    """RNG that draws a new jitter on every evaluation."""
    return random.Random()


def calculate_availability(
    entry: Schedulable,
    now: datetime,
    entropy: int = 0,
    rng: random.Random | None = None,
) -> Availability:
    """Decide whether ``entry`` is due at ``now`` and label the wait if not.

    Jitter only applies when more than a day remains, so it never hides an
    entry that is due or due within a day. Without an explicit ``rng`` the
    jitter is drawn from :func:`stable_rng`.
    """
    dismissed = dismissed_time(entry, now)
    if dismissed is None:
        return Availability(is_available=True)

    now = as_utc(now)
    interval = Interval(entry.interval)
    available_at = dismissed + interval.to_timedelta(entry.duration)

    if now >= available_at:
        return Availability(is_available=True, available_at=available_at)

    remaining = available_at - now
    window = jitter_window(entropy)
    if remaining > ONE_DAY and window > 0:
        rng = rng or stable_rng(entry)
        available_at += timedelta(days=rng.randrange(window))
        remaining = available_at - now

    return Availability(
        is_available=False,
        available_in=format_remaining(remaining, interval),
        available_at=available_at,
    )


def is_available(
    entry: Schedulable,
    now: datetime,
    entropy: int = 0,
    rng: random.Random | None = None,
) -> tuple[bool, str | None]:
    """Return ``(due, remaining_label)`` for ``entry`` at ``now``."""
    availability = calculate_availability(entry, now, entropy, rng)
    return availability.is_available, availability.available_in


def entry_state(entry: Schedulable, now: datetime) -> EntryState:
    """Lifecycle state of a stored entry at ``now``."""
    if entry.dismissed_at is None:
        return EntryState.NEW
    if calculate_availability(entry, now).is_available:
        return EntryState.DUE
    return EntryState.COOLING


def format_elapsed(past: datetime | str | None, now: datetime) -> str | None:
    """Describe how long ago ``past`` was, e.g. ``"3 days ago"``.

    Returns None when there is no timestamp, leaving the caller to render
    something like "never viewed".
    """
    then = parse_timestamp(past)
    if then is None:
        return None

    elapsed = as_utc(now) - then
    if elapsed <= timedelta(0):
        return "just now"

    days = elapsed.days
    if days > 365:
        count, unit = days // 365, "year"
    elif days > 30:
        count, unit = days // 30, "month"
    elif days > 7:
        count, unit = days // 7, "week"
    elif days > 0:
        count, unit = days, "day"
    elif elapsed.seconds >= 3600:
        count, unit = elapsed.seconds // 3600, "hour"
    elif elapsed.seconds >= 60:
        count, unit = elapsed.seconds // 60, "minute"
    else:
        return "just now"

    return f"{pluralize(count, unit)} ago"
