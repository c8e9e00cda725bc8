"""Shared fixtures for the event service and client tests."""
import typing as t

import pytest
from fastapi.testclient import TestClient

import services.event_service.app as event_app
from calendar_server.models import Event
from calendar_server.store import MemoryKVStore


@pytest.fixture
def store() -> MemoryKVStore:
    """A fresh in-memory store per test."""
    return MemoryKVStore()


@pytest.fixture
def client(store: MemoryKVStore) -> t.Iterator[TestClient]:
    """Test client for the event service, backed by the ``store`` fixture."""
    event_app.app.dependency_overrides[event_app.get_store] = lambda: store
    with TestClient(event_app.app) as test_client:
        yield test_client
    event_app.app.dependency_overrides.clear()


@pytest.fixture
def events_url() -> str:
    return f"{event_app.ROUTE_PREFIX}/events"


class FakeService:
    """In-memory stand-in for the HTTP client functions."""

    def __init__(self, events: t.Optional[list[Event]] = None, fail: bool = False) -> None:
        self.events = list(events or [])
        self.fail = fail
        self.created: list[tuple] = []
        self.deleted: list[str] = []

    def list_events(self) -> list[Event]:
        if self.fail:
            raise RuntimeError("HTTP error from event service: 500")
        return list(self.events)

    def create_event(self, date, title, color=None, rotation=None) -> Event:
        if self.fail:
            raise RuntimeError("HTTP error from event service: 500")
        self.created.append((date, title, color, rotation))
        event = Event(id=f"id-{len(self.created)}", date=date, title=title, color=color, rotation=rotation)
        self.events.append(event)
        return event

    def delete_event(self, event_id: str) -> bool:
        if self.fail:
            raise RuntimeError("HTTP error from event service: 500")
        self.deleted.append(event_id)
        self.events = [e for e in self.events if e.id != event_id]
        return True


@pytest.fixture
def make_service() -> t.Callable[..., FakeService]:
    """Factory for fake service functions, optionally failing every call."""
    return FakeService
