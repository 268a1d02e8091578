"""Enums for model fields."""

from datetime import timedelta
from enum import Enum


class Interval(str, Enum):
    """Unit of an entry's revisit cadence."""

    HOURS = "hours"
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"

    def to_timedelta(self, duration: int) -> timedelta:
        """Convert ``duration`` of this unit into a timedelta.

        Months are 30 days and years are 365 days; this is not calendar-aware.
        """
        return _INTERVAL_UNITS[self] * duration


_INTERVAL_UNITS: dict[Interval, timedelta] = {
    Interval.HOURS: timedelta(hours=1),
    Interval.DAYS: timedelta(days=1),
    Interval.WEEKS: timedelta(weeks=1),
    Interval.MONTHS: timedelta(days=30),
    Interval.YEARS: timedelta(days=365),
}


class EntryFilter(str, Enum):
    """Named views over the entries a user can see."""

    AVAILABLE = "available"
    HIDDEN = "hidden"
    NO_VISITS = "no-visits"
    ALL = "all"


class EntryState(str, Enum):
    """Lifecycle state of a stored entry."""

    NEW = "new"
    COOLING = "cooling"
    DUE = "due"
