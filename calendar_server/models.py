"""
Data models for the sticker calendar event store.

This module contains the dataclass used to represent a sticker event
inside the store and the calendar client.
"""
from __future__ import annotations

from dataclasses import dataclass
import typing as t


@dataclass
class Event:
    """Represents a sticker attached to one calendar day."""
    id: str
    date: t.Optional[str] = None      # "YYYY-MM-DD"
    title: t.Optional[str] = None
    color: t.Optional[str] = None     # "#RRGGBB" from the sticker palette
    rotation: t.Optional[float] = None  # tilt in degrees

    @classmethod
    def from_dict(cls, data: dict[str, t.Any]) -> Event:
        """Build an Event from a stored or decoded JSON record."""
        return cls(
            id=str(data.get("id", "")),
            date=data.get("date"),
            title=data.get("title"),
            color=data.get("color"),
            rotation=data.get("rotation"),
        )
