"""Helpers for date range filters."""

from datetime import date, datetime, time


def as_range_bounds(
    start: date | datetime | None,
    end: date | datetime | None,
) -> tuple[datetime | None, datetime | None]:
    """Normalize an inclusive date range into datetime bounds.

    Plain dates cover the whole day: the start maps to midnight and the end
    to the last microsecond of that day.

    Args:
        start: Optional lower bound.
        end: Optional upper bound.

    Returns:
        tuple[datetime | None, datetime | None]: Normalized bounds.
    """
    lower = start
    upper = end
    if isinstance(start, date) and not isinstance(start, datetime):
        lower = datetime.combine(start, time.min)
    if isinstance(end, date) and not isinstance(end, datetime):
        upper = datetime.combine(end, time.max)
    return lower, upper


def in_range(
    moment: datetime,
    start: datetime | None,
    end: datetime | None,
) -> bool:
    """Return True when the moment falls inside the inclusive bounds."""
    if start is not None and moment < start:
        return False
    if end is not None and moment > end:
        return False
    return True


__all__ = ["as_range_bounds", "in_range"]
