"""Tests for the terminal front end, with the HTTP client replaced by fakes."""
from datetime import date

import pytest
from click.testing import CliRunner

from calendar_client import run
from calendar_client.state import CalendarState
from calendar_server.models import Event
from mcp_wrappers.events import mcp_service


@pytest.fixture
def service(make_service, monkeypatch):
    fake = make_service([
        Event(id="a", date="2024-12-25", title="Xmas", color="#FCA5A5", rotation=1.0),
        Event(id="b", date="2024-12-25", title="Dinner", color="#FDE047", rotation=-1.0),
        Event(id="c", date="2024-12-25", title="Gifts", color="not-a-color", rotation=0.0),
    ])
    monkeypatch.setattr(mcp_service, "_list_events", fake.list_events)
    monkeypatch.setattr(mcp_service, "_create_event", fake.create_event)
    monkeypatch.setattr(mcp_service, "_delete_event", fake.delete_event)
    return fake


def test_show_month_caps_stickers(service) -> None:
    """Two stickers fit in a day; the rest are counted."""
    result = CliRunner().invoke(run.cli, ["show", "--month", "12", "--year", "2024"])

    assert result.exit_code == 0, result.output
    assert "December 2024" in result.output
    assert "+1" in result.output


def test_add_prints_new_event(service) -> None:
    result = CliRunner().invoke(run.cli, ["add", "2025-03-14", "Pi day"])

    assert result.exit_code == 0, result.output
    assert "March 2025" in result.output
    assert "Added" in result.output
    assert service.created[0][:2] == ("2025-03-14", "Pi day")


def test_add_rejects_bad_date(service) -> None:
    result = CliRunner().invoke(run.cli, ["add", "14/03/2025", "Pi day"])
    assert result.exit_code != 0
    assert service.created == []


def test_delete_command(service) -> None:
    result = CliRunner().invoke(run.cli, ["delete", "a"])

    assert result.exit_code == 0, result.output
    assert service.deleted == ["a"]


def test_day_lists_every_event(service) -> None:
    """The day view shows events hidden from the grid."""
    result = CliRunner().invoke(run.cli, ["day", "2024-12-25"])

    assert result.exit_code == 0, result.output
    for title in ("Xmas", "Dinner", "Gifts"):
        assert title in result.output


def test_show_survives_unreachable_service(make_service, monkeypatch) -> None:
    """A failed fetch is logged and an empty month is still drawn."""
    monkeypatch.setattr(mcp_service, "_list_events", make_service(fail=True).list_events)

    result = CliRunner().invoke(run.cli, ["show", "-m", "1", "-y", "2025"])

    assert result.exit_code == 0, result.output
    assert "Error fetching events" in result.output
    assert "January 2025" in result.output


def test_browse_navigates_and_quits(service) -> None:
    result = CliRunner().invoke(run.cli, ["browse"], input="g 12 2024\nn\nq\n")

    assert result.exit_code == 0, result.output
    assert "December 2024" in result.output
    assert "January 2025" in result.output


def test_handle_command_select_add_and_delete(service) -> None:
    """Browse commands drive the same state transitions as the month view."""
    state = CalendarState(month=12, year=2024, events=list(service.events), loading=False)

    assert run.handle_command(state, "a Too early") is True
    assert service.created == []

    run.handle_command(state, "s 31")
    assert state.selected_date == "2024-12-31"

    run.handle_command(state, "a NYE party")
    assert service.created[0][:2] == ("2024-12-31", "NYE party")
    assert state.events_on("2024-12-31")[0].title == "NYE party"

    run.handle_command(state, "d a")
    assert [e.id for e in state.events_on("2024-12-25")] == ["b", "c"]

    run.handle_command(state, "s 32")
    assert state.selected_date == "2024-12-31"

    run.handle_command(state, "p")
    assert (state.month, state.year) == (11, 2024)
    assert run.handle_command(state, "q") is False


@pytest.mark.parametrize("year", ["0", "10000"])
def test_show_rejects_year_out_of_range(service, year) -> None:
    """An explicit year is validated, never replaced by the current one."""
    result = CliRunner().invoke(run.cli, ["show", "-m", "3", "-y", year])

    assert result.exit_code == 2
    assert "Invalid value" in result.output


def test_show_month_only_keeps_current_year(service) -> None:
    result = CliRunner().invoke(run.cli, ["show", "-m", "3"])

    assert result.exit_code == 0, result.output
    assert f"March {date.today().year}" in result.output
