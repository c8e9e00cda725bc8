"""
Shared Pydantic models for REST API serialization.

This module contains Pydantic equivalents of the dataclass models used by the
event store and the calendar client, ensuring consistent JSON serialization
between the service and its callers.
"""
from __future__ import annotations

import typing as t
from pydantic import BaseModel, Field


class Event(BaseModel):
    """A sticker event as it travels over HTTP."""
    id: str
    date: t.Optional[str] = None        # "YYYY-MM-DD"
    title: t.Optional[str] = None
    color: t.Optional[str] = None       # "#RRGGBB"
    rotation: t.Optional[float] = None  # degrees


# Request/Response Models for API endpoints
class CreateEventRequest(BaseModel):
    """
    Request model for creating an event.

    Every field is optional at the schema level so that a missing date or
    title reaches the handler and is reported as a 400, not a 422.
    """
    date: t.Optional[str] = None
    title: t.Optional[str] = None
    color: t.Optional[str] = None
    rotation: t.Optional[float] = None


class UpdateEventRequest(BaseModel):
    """Request model for overwriting an event. Stored verbatim."""
    date: t.Optional[str] = None
    title: t.Optional[str] = None
    color: t.Optional[str] = None
    rotation: t.Optional[float] = None


class EventListResponse(BaseModel):
    """Response model for listing every event."""
    events: list[Event] = Field(default_factory=list)


class EventResponse(BaseModel):
    """Response model wrapping a single stored event."""
    event: Event


class DeleteEventResponse(BaseModel):
    """Response model for a delete. Always successful for any id."""
    success: bool = True


class ErrorResponse(BaseModel):
    """Body returned for every 4xx/5xx response."""
    error: str
    details: t.Optional[str] = None
