"""Month grid layout and per-day sticker selection."""
from __future__ import annotations

import calendar
import typing as t

from calendar_server.models import Event


MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

# Sunday-first, as the grid is drawn
WEEK_DAYS = ["S", "M", "T", "W", "Th", "F", "S"]

# Stickers shown in a day cell before the rest move to the day list
MAX_VISIBLE_EVENTS = 2

_SUNDAY_FIRST = calendar.Calendar(firstweekday=calendar.SUNDAY)


def date_key(year: int, month: int, day: int) -> str:
    """Format a day as the ``YYYY-MM-DD`` string events are keyed by."""
    return f"{year}-{month:02d}-{day:02d}"


def parse_date_key(date: str) -> tuple[int, int, int]:
    """Split a ``YYYY-MM-DD`` string into (year, month, day).

    Raises:
        ValueError: If the string is not three dash-separated integers.
    """
    parts = date.split("-")
    if len(parts) != 3:
        raise ValueError(f"Not a YYYY-MM-DD date: {date!r}")
    year, month, day = (int(part) for part in parts)
    return year, month, day


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_weeks(year: int, month: int) -> list[list[t.Optional[int]]]:
    """Lay out a month as Sunday-first weeks.

    Cells outside the month are None, so the first week starts with one
    blank per weekday before the 1st.
    """
    return [
        [day or None for day in week]
        for week in _SUNDAY_FIRST.monthdayscalendar(year, month)
    ]


def events_for_day(events: t.Iterable[Event], date: str) -> list[Event]:
    """Pick the events attached to ``date`` by exact string match."""
    return [event for event in events if event.date == date]


def split_visible(day_events: list[Event]) -> tuple[list[Event], int]:
    """Return the stickers drawn in the cell and how many overflow into the day list."""
    visible = day_events[:MAX_VISIBLE_EVENTS]
    return visible, len(day_events) - len(visible)
