# -*- coding: utf-8 -*-
"""Rich renderables for the month grid and the per-day sticker list."""
from __future__ import annotations

import typing as t

from rich.errors import StyleSyntaxError
from rich.style import Style
from rich.table import Table
from rich.text import Text

from calendar_server.models import Event
from .grid import WEEK_DAYS, date_key, events_for_day, month_weeks, split_visible
from .state import CalendarState


FALLBACK_STICKER_STYLE = "black on white"


def truncate_title(title: str, max_length: int = 45) -> str:
    """Truncate title to max_length characters, adding ellipsis if needed."""
    if len(title) <= max_length:
        return title
    return title[:max_length-3] + "..."


def sticker_style(color: t.Optional[str]) -> Style:
    """Dark text on the sticker's own color; white paper when the color is unusable."""
    if not color:
        return Style.parse(FALLBACK_STICKER_STYLE)
    try:
        return Style.parse(f"black on {color}")
    except StyleSyntaxError:
        return Style.parse(FALLBACK_STICKER_STYLE)


def _day_cell(state: CalendarState, day: t.Optional[int]) -> Text:
    if day is None:
        return Text("")

    key = date_key(state.year, state.month, day)
    selected = key == state.selected_date
    cell = Text(f"{day}", style="bold reverse" if selected else "bold")

    visible, remaining = split_visible(events_for_day(state.events, key))
    for event in visible:
        cell.append("\n")
        cell.append(f" {truncate_title(event.title or '', 14)} ", style=sticker_style(event.color))
    if remaining > 0:
        cell.append(f"\n+{remaining} more", style="dim italic")
    return cell


def build_month_table(state: CalendarState) -> Table:
    """Draw the displayed month as a 7-column grid with up to two stickers per day."""
    table = Table(
        title=f"📅 {state.title}",
        show_header=True,
        header_style="bold magenta",
        show_lines=True,
        expand=True,
    )
    for label in WEEK_DAYS:
        table.add_column(label, vertical="top", ratio=1)

    for week in month_weeks(state.year, state.month):
        table.add_row(*(_day_cell(state, day) for day in week))
    return table


def build_day_table(date: str, events: list[Event]) -> Table:
    """List every sticker on one day, including those hidden from the grid."""
    table = Table(title=f"🗒  {date}", show_header=True, header_style="bold magenta")
    table.add_column("", width=3)
    table.add_column("Title", style="white")
    table.add_column("ID", style="dim")
    table.add_column("Tilt", justify="right", style="yellow")

    for event in events:
        tilt = f"{event.rotation:+.1f}°" if event.rotation is not None else "—"
        table.add_row(
            Text("  ", style=sticker_style(event.color)),
            truncate_title(event.title or ""),
            event.id,
            tilt,
        )
    return table
