# -*- coding: utf-8 -*-
"""Terminal front end for the sticker calendar.

Every command loads the full event collection from the event service first,
the same way the calendar view does on mount.
"""
import logging
import typing as t

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from mcp_wrappers.events import mcp_service as events_api
from calendar_client import actions
from calendar_client.grid import date_key, days_in_month
from calendar_client.render import build_day_table, build_month_table
from calendar_client.state import CalendarState


console = Console()
err_console = Console(stderr=True)

BROWSE_HELP = (
    "[bold]n[/bold] next  [bold]p[/bold] prev  [bold]t[/bold] today  "
    "[bold]g[/bold] MM YYYY go to  [bold]s[/bold] DD select  "
    "[bold]a[/bold] TITLE add  [bold]d[/bold] ID delete  "
    "[bold]l[/bold] [DD] list day  [bold]q[/bold] quit"
)

DATE = click.DateTime(formats=["%Y-%m-%d"])


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def _loaded_state() -> CalendarState:
    state = CalendarState.for_today()
    actions.load_events(state, events_api._list_events)
    return state


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--verbose", "-v", is_flag=True, help="Log every request.")
def cli(verbose: bool) -> None:
    """Sticker calendar: attach short notes to days and browse them by month."""
    _setup_logging(verbose)


@cli.command()
@click.option("--month", "-m", type=click.IntRange(1, 12), help="Month to show (1-12).")
@click.option("--year", "-y", type=click.IntRange(1, 9999), help="Year to show.")
def show(month: t.Optional[int], year: t.Optional[int]) -> None:
    """Show a month grid (defaults to the current month)."""
    state = _loaded_state()
    state.select_month_year(
        month if month is not None else state.month,
        year if year is not None else state.year,
    )
    console.print(build_month_table(state))


@cli.command()
@click.argument("date", type=DATE)
@click.argument("title")
def add(date, title: str) -> None:
    """Stick TITLE on DATE (YYYY-MM-DD) and show that month.

    Examples:
        python -m calendar_client.run add 2025-03-14 "Pi day"
    """
    state = _loaded_state()
    key = date.strftime("%Y-%m-%d")
    event = actions.add_event(state, key, title, events_api._create_event)
    if event is None:
        err_console.print(f"[red]Error:[/red] Could not add an event on {key}.")
        raise SystemExit(1)

    state.select_date(key)
    console.print(build_month_table(state))
    console.print(f"[green]✓ Added[/green] {event.title} [dim]({event.id})[/dim]")


@cli.command()
@click.argument("event_id")
def delete(event_id: str) -> None:
    """Delete the event with EVENT_ID."""
    state = _loaded_state()
    if not actions.delete_event(state, event_id, events_api._delete_event):
        err_console.print(f"[red]Error:[/red] Could not delete event {event_id}.")
        raise SystemExit(1)
    console.print(f"[green]✓ Deleted[/green] {event_id}")


@cli.command()
@click.argument("date", type=DATE)
def day(date) -> None:
    """List every event on DATE (YYYY-MM-DD), including those hidden in the grid."""
    state = _loaded_state()
    key = date.strftime("%Y-%m-%d")
    day_events = state.events_on(key)
    if not day_events:
        console.print(f"📅 No events on {key}.")
        return
    console.print(build_day_table(key, day_events))


@cli.command()
def browse() -> None:
    """Interactively page through months and add or remove stickers."""
    state = _loaded_state()
    while True:
        console.print(build_month_table(state))
        if state.selected_date:
            console.print(f"Selected: [bold]{state.selected_date}[/bold]")
        console.print(Panel(BROWSE_HELP, border_style="dim"))
        line = click.prompt("calendar", default="", show_default=False)
        if not handle_command(state, line):
            break


def handle_command(state: CalendarState, line: str) -> bool:
    """Apply one browse command to ``state``. Returns False when the user quits."""
    command, _, arg = line.strip().partition(" ")
    arg = arg.strip()

    if command in ("q", "quit"):
        return False
    if command == "n":
        state.next_month()
    elif command == "p":
        state.prev_month()
    elif command == "t":
        state.go_to_today()
    elif command == "g":
        _goto(state, arg)
    elif command == "s":
        key = _day_key(state, arg)
        if key:
            state.select_date(key)
    elif command == "a":
        if not state.selected_date:
            console.print("[yellow]Select a day first (s DD).[/yellow]")
        else:
            actions.add_event(state, state.selected_date, arg, events_api._create_event)
    elif command == "d":
        actions.delete_event(state, arg, events_api._delete_event)
    elif command == "l":
        key = _day_key(state, arg) if arg else state.selected_date
        if key:
            console.print(build_day_table(key, state.events_on(key)))
    elif command:
        console.print(f"[yellow]Unknown command:[/yellow] {command}")
    return True


def _goto(state: CalendarState, arg: str) -> None:
    try:
        month, year = (int(part) for part in arg.split())
        state.select_month_year(month, year)
    except ValueError:
        console.print("[yellow]Usage: g MM YYYY[/yellow]")


def _day_key(state: CalendarState, arg: str) -> t.Optional[str]:
    """Turn a day number in the displayed month into a date key."""
    try:
        day_number = int(arg)
    except ValueError:
        console.print("[yellow]Expected a day number.[/yellow]")
        return None
    if not 1 <= day_number <= days_in_month(state.year, state.month):
        console.print(f"[yellow]{state.title} has no day {day_number}.[/yellow]")
        return None
    return date_key(state.year, state.month, day_number)


if __name__ == "__main__":
    cli()
