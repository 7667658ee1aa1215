"""Tracing and observability data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class TraceEvent:
    """A single observability event for a bot turn."""

    id: str
    event_type: str  # e.g. "turn_started", "intent_recognized"
    actor: str  # component that recorded it
    data: dict  # self-contained data for display
    timestamp: datetime
