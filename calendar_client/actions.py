"""User actions that round-trip to the event service.

Each action issues one request and updates the state from the response.
Failures are logged and leave the state as it was; nothing is retried.
"""
from __future__ import annotations

import logging
import random
import typing as t

from calendar_server.models import Event
from .grid import parse_date_key
from .state import CalendarState

logger = logging.getLogger(__name__)


STICKER_COLORS = [
    "#93C5FD", "#FDE047", "#F9A8D4", "#86EFAC",
    "#FCA5A5", "#C4B5FD", "#FDBA74",
]

# Stickers are tilted uniformly within +/- this many degrees
MAX_ROTATION = 3.0

FetchEvents = t.Callable[[], list[Event]]
CreateEvent = t.Callable[[str, str, t.Optional[str], t.Optional[float]], Event]
DeleteEvent = t.Callable[[str], t.Any]


def load_events(state: CalendarState, fetch: FetchEvents) -> None:
    """Replace the local collection with the server's. Clears ``loading`` either way."""
    try:
        state.events = list(fetch())
    except RuntimeError as e:
        logger.error(f"Error fetching events: {e}")
    finally:
        state.loading = False


def add_event(
    state: CalendarState,
    date: t.Optional[str],
    title: str,
    create: CreateEvent,
    rng: t.Optional[random.Random] = None,
) -> t.Optional[Event]:
    """
    Create a sticker on ``date`` and jump the view to its month.

    Color and rotation are picked here; the server only assigns the id.
    Returns the stored event, or None if nothing was created.
    """
    if not date or not title.strip():
        return None

    rng = rng or random.Random()
    color = rng.choice(STICKER_COLORS)
    rotation = rng.random() * 2 * MAX_ROTATION - MAX_ROTATION
    try:
        event = create(date, title, color, rotation)
    except RuntimeError as e:
        logger.error(f"Error adding event: {e}")
        return None

    state.events = [*state.events, event]
    try:
        year, month, _ = parse_date_key(date)
        state.select_month_year(month, year)
    except ValueError as e:
        # The record is stored as sent; only the view stays where it was
        logger.warning(f"Not moving view to {date!r}: {e}")
    return event


def delete_event(state: CalendarState, event_id: str, remove: DeleteEvent) -> bool:
    """Delete ``event_id`` on the server, then drop it locally. Returns False on failure."""
    try:
        remove(event_id)
    except RuntimeError as e:
        logger.error(f"Error deleting event: {e}")
        return False

    state.events = [event for event in state.events if event.id != event_id]
    return True
