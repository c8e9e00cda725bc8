"""
Client-side calendar state.

Holds the full event collection fetched from the service together with the
displayed month, the selected day and the loading flag. Navigation is pure
month/year arithmetic; nothing here talks to the network.
"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass, field
from datetime import date as Date

from calendar_server.models import Event
from .grid import MONTH_NAMES, events_for_day


@dataclass
class CalendarState:
    """Everything the month view needs to render."""
    month: int
    year: int
    events: list[Event] = field(default_factory=list)
    selected_date: t.Optional[str] = None
    loading: bool = True

    @classmethod
    def for_today(cls, today: t.Optional[Date] = None) -> CalendarState:
        today = today or Date.today()
        return cls(month=today.month, year=today.year)

    @property
    def title(self) -> str:
        return f"{MONTH_NAMES[self.month - 1]} {self.year}"

    def next_month(self) -> None:
        if self.month == 12:
            self.month = 1
            self.year += 1
        else:
            self.month += 1

    def prev_month(self) -> None:
        if self.month == 1:
            self.month = 12
            self.year -= 1
        else:
            self.month -= 1

    def select_month_year(self, month: int, year: int) -> None:
        """Jump straight to a month, as the month/year picker does."""
        if not 1 <= month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {month}")
        self.month = month
        self.year = year

    def go_to_today(self, today: t.Optional[Date] = None) -> None:
        today = today or Date.today()
        self.month = today.month
        self.year = today.year

    def select_date(self, date: t.Optional[str]) -> None:
        self.selected_date = date

    def events_on(self, date: str) -> list[Event]:
        return events_for_day(self.events, date)
