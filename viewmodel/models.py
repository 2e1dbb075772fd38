"""Data models for countdown events."""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Event:
    """Countdown event as returned by the events API."""
    event_id: str
    name: str
    date: str
    days_left: Optional[int] = None


@dataclass(frozen=True)
class DecoratedEvent:
    """Render-ready event with display-only fields."""
    event: Event
    formatted_date: str
    days_left: int
    emoji: str
    color: str
