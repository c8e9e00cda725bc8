"""
MCP wrapper for the sticker event service.

The raw functions here are the HTTP client used by the calendar client; the
same functions are registered as MCP tools. They handle serialization between
the dataclass Event and the Pydantic wire models.
"""
from __future__ import annotations

import os
import typing as t
from urllib.parse import quote

import httpx
from fastmcp import FastMCP

# Import original dataclass model for MCP interface compatibility
from calendar_server.models import Event
# Import Pydantic models for HTTP serialization
from services.shared.models import (
    Event as PydanticEvent,
    CreateEventRequest,
    UpdateEventRequest,
    EventListResponse,
    EventResponse,
    DeleteEventResponse,
)


mcp = FastMCP("StickerCalendarMCPWrapper")

# Service location and credentials - configurable via environment variables
EVENT_SERVICE_URL = os.getenv("EVENT_SERVICE_URL", "http://localhost:8004")
ROUTE_PREFIX = os.getenv("EVENT_SERVICE_ROUTE_PREFIX", "/api").rstrip("/")
EVENT_SERVICE_TOKEN = os.getenv("EVENT_SERVICE_TOKEN", "")

# Timeout settings for CRUD operations (in seconds)
STANDARD_TIMEOUT = 30.0


def _events_url(event_id: t.Optional[str] = None) -> str:
    url = f"{EVENT_SERVICE_URL}{ROUTE_PREFIX}/events"
    if event_id is not None:
        url = f"{url}/{quote(event_id, safe='')}"
    return url


def _client() -> httpx.Client:
    """Build an HTTP client carrying the static bearer token."""
    return httpx.Client(
        timeout=STANDARD_TIMEOUT,
        headers={"Authorization": f"Bearer {EVENT_SERVICE_TOKEN}"},
    )


def _list_events() -> list[Event]:
    """
    List every event stored in the service.

    Makes an HTTP call to the event service and converts the wire records
    back to dataclass events.
    """
    try:
        with _client() as client:
            response = client.get(_events_url())
            response.raise_for_status()

        result = EventListResponse(**response.json())
        return [_pydantic_to_dataclass_event(event) for event in result.events]

    except httpx.TimeoutException:
        raise RuntimeError(f"List events timed out after {STANDARD_TIMEOUT} seconds")
    except httpx.HTTPStatusError as e:
        raise RuntimeError(f"HTTP error from event service: {e.response.status_code} {e.response.text}")
    except Exception as e:
        raise RuntimeError(f"Error calling event service: {str(e)}")


def _create_event(
    date: str,
    title: str,
    color: t.Optional[str] = None,
    rotation: t.Optional[float] = None,
) -> Event:
    """
    Create an event. The service assigns the id.
    """
    try:
        request = CreateEventRequest(date=date, title=title, color=color, rotation=rotation)

        with _client() as client:
            response = client.post(_events_url(), json=request.model_dump())
            response.raise_for_status()

        result = EventResponse(**response.json())
        return _pydantic_to_dataclass_event(result.event)

    except httpx.TimeoutException:
        raise RuntimeError(f"Event creation timed out after {STANDARD_TIMEOUT} seconds")
    except httpx.HTTPStatusError as e:
        raise RuntimeError(f"HTTP error from event service: {e.response.status_code} {e.response.text}")
    except Exception as e:
        raise RuntimeError(f"Error calling event service: {str(e)}")


def _update_event(
    event_id: str,
    date: t.Optional[str] = None,
    title: t.Optional[str] = None,
    color: t.Optional[str] = None,
    rotation: t.Optional[float] = None,
) -> Event:
    """
    Overwrite the event stored under ``event_id`` with the given fields.
    """
    try:
        request = UpdateEventRequest(date=date, title=title, color=color, rotation=rotation)

        with _client() as client:
            response = client.put(_events_url(event_id), json=request.model_dump())
            response.raise_for_status()

        result = EventResponse(**response.json())
        return _pydantic_to_dataclass_event(result.event)

    except httpx.TimeoutException:
        raise RuntimeError(f"Event update timed out after {STANDARD_TIMEOUT} seconds")
    except httpx.HTTPStatusError as e:
        raise RuntimeError(f"HTTP error from event service: {e.response.status_code} {e.response.text}")
    except Exception as e:
        raise RuntimeError(f"Error calling event service: {str(e)}")


def _delete_event(event_id: str) -> bool:
    """
    Delete an event by id. Deleting an unknown id also succeeds.
    """
    try:
        with _client() as client:
            response = client.delete(_events_url(event_id))
            response.raise_for_status()

        return DeleteEventResponse(**response.json()).success

    except httpx.TimeoutException:
        raise RuntimeError(f"Event deletion timed out after {STANDARD_TIMEOUT} seconds")
    except httpx.HTTPStatusError as e:
        raise RuntimeError(f"HTTP error from event service: {e.response.status_code} {e.response.text}")
    except Exception as e:
        raise RuntimeError(f"Error calling event service: {str(e)}")


def _pydantic_to_dataclass_event(pydantic_event: PydanticEvent) -> Event:
    """Convert Pydantic Event to dataclass Event."""
    return Event(
        id=pydantic_event.id,
        date=pydantic_event.date,
        title=pydantic_event.title,
        color=pydantic_event.color,
        rotation=pydantic_event.rotation,
    )


# MCP tool wrappers that call the raw functions
@mcp.tool()
def list_events() -> list[Event]:
    """Lists every sticker event on the calendar."""
    return _list_events()


@mcp.tool()
def create_event(date: str, title: str, color: str = "", rotation: float = 0.0) -> Event:
    """Creates a sticker event on a date (YYYY-MM-DD)."""
    return _create_event(date, title, color or None, rotation)


@mcp.tool()
def update_event(event_id: str, date: str, title: str, color: str = "", rotation: float = 0.0) -> Event:
    """Overwrites an existing sticker event."""
    return _update_event(event_id, date, title, color or None, rotation)


@mcp.tool()
def delete_event(event_id: str) -> bool:
    """Deletes a sticker event by id."""
    return _delete_event(event_id)


if __name__ == "__main__":
    mcp.run()
