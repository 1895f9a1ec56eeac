"""UTC date helpers for schedule checks and search windows."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

ONE_DAY = timedelta(days=1)
LAST_MILLISECOND = timedelta(milliseconds=1)


def to_naive_utc(value: datetime) -> datetime:
    """Return ``value`` as a naive UTC datetime for storage.

    Naive inputs are taken to already be UTC.
    """

    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a naive stored datetime."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_day_window(moment: datetime) -> tuple[datetime, datetime]:
    """Return the half-open ``[start, end)`` UTC calendar day containing ``moment``."""

    start = datetime.combine(to_naive_utc(moment).date(), time.min)
    return start, start + ONE_DAY


def search_day_bounds(day: date) -> tuple[datetime, datetime]:
    """Return inclusive ``[00:00:00.000, 23:59:59.999]`` bounds for ``day``."""

    start = datetime.combine(day, time.min)
    return start, start + ONE_DAY - LAST_MILLISECOND


__all__ = [
    "to_naive_utc",
    "as_utc",
    "utc_day_window",
    "search_day_bounds",
]
