"""Timetable Math — weekday numbering, slot durations and the weekly grid.

Invariants:
    - Stored weekday numbering is 0=Sunday .. 6=Saturday
    - Weekly grid exposes monday..friday only (stored days 1..5)
"""

from collections.abc import Iterable
from datetime import date, datetime, time

WEEKDAY_KEYS = {
    1: "monday",
    2: "tuesday",
    3: "wednesday",
    4: "thursday",
    5: "friday",
}


def stored_weekday(day: date) -> int:
    """Python weekday (Monday=0) → stored weekday (Sunday=0)."""
    return (day.weekday() + 1) % 7


def slot_hours(start: time, end: time) -> float:
    """Duration of a slot in hours, end minus start (an inverted slot is negative)."""
    anchor = date(2000, 1, 1)
    delta = datetime.combine(anchor, end) - datetime.combine(anchor, start)
    return delta.total_seconds() / 3600


def weekly_hours(slots: Iterable[tuple[time, time]]) -> float:
    return sum(slot_hours(start, end) for start, end in slots)


def group_weekly(entries: Iterable[tuple[int, dict]]) -> dict[str, list[dict]]:
    """Group (stored_weekday, entry) pairs into monday..friday buckets, order kept."""
    grid: dict[str, list[dict]] = {key: [] for key in WEEKDAY_KEYS.values()}
    for day, entry in entries:
        key = WEEKDAY_KEYS.get(day)
        if key is not None:
            grid[key].append(entry)
    return grid
