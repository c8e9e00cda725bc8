"""Tests for month navigation and grid layout."""
from datetime import date

import pytest

from calendar_client.grid import (
    MAX_VISIBLE_EVENTS,
    date_key,
    days_in_month,
    events_for_day,
    month_weeks,
    parse_date_key,
    split_visible,
)
from calendar_client.state import CalendarState
from calendar_server.models import Event


def test_next_month_wraps_into_new_year() -> None:
    """December 2024 -> January 2025."""
    state = CalendarState(month=12, year=2024)
    state.next_month()
    assert (state.month, state.year) == (1, 2025)


def test_prev_month_wraps_into_previous_year() -> None:
    """January 2025 -> December 2024."""
    state = CalendarState(month=1, year=2025)
    state.prev_month()
    assert (state.month, state.year) == (12, 2024)


def test_navigation_within_year() -> None:
    state = CalendarState(month=6, year=2025)
    state.next_month()
    assert (state.month, state.year) == (7, 2025)
    state.prev_month()
    state.prev_month()
    assert (state.month, state.year) == (5, 2025)


def test_select_month_year_and_today() -> None:
    """Picker jumps directly; today resets to the given date's month."""
    state = CalendarState.for_today(date(2025, 3, 14))
    assert (state.month, state.year, state.loading) == (3, 2025, True)
    assert state.title == "March 2025"

    state.select_month_year(11, 1999)
    assert state.title == "November 1999"

    state.go_to_today(date(2026, 10, 19))
    assert (state.month, state.year) == (10, 2026)


def test_select_month_year_rejects_bad_month() -> None:
    state = CalendarState(month=1, year=2025)
    with pytest.raises(ValueError):
        state.select_month_year(13, 2025)
    assert (state.month, state.year) == (1, 2025)


def test_date_key_is_zero_padded() -> None:
    assert date_key(2025, 3, 4) == "2025-03-04"
    assert parse_date_key("2025-03-04") == (2025, 3, 4)
    with pytest.raises(ValueError):
        parse_date_key("March 4")


def test_month_weeks_start_on_sunday() -> None:
    """March 2025 starts on a Saturday, so six blanks lead the first week."""
    weeks = month_weeks(2025, 3)

    assert weeks[0] == [None, None, None, None, None, None, 1]
    assert all(len(week) == 7 for week in weeks)
    days = [day for week in weeks for day in week if day is not None]
    assert days == list(range(1, days_in_month(2025, 3) + 1))


def test_days_in_month_handles_leap_years() -> None:
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2025, 2) == 28


def test_events_for_day_and_overflow() -> None:
    """Only exact date matches are picked; extras beyond the cap overflow."""
    events = [
        Event(id=str(i), date="2025-03-14", title=f"e{i}") for i in range(4)
    ] + [Event(id="other", date="2025-03-15", title="other")]

    day_events = events_for_day(events, "2025-03-14")
    visible, remaining = split_visible(day_events)

    assert [e.id for e in day_events] == ["0", "1", "2", "3"]
    assert len(visible) == MAX_VISIBLE_EVENTS
    assert remaining == 4 - MAX_VISIBLE_EVENTS
    assert split_visible([]) == ([], 0)


def test_state_events_on_uses_exact_match() -> None:
    state = CalendarState(month=3, year=2025, events=[Event(id="1", date="2025-3-14", title="loose")])
    assert state.events_on("2025-03-14") == []
