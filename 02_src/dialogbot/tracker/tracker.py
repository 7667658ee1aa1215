"""Tracker implementation for creating TraceEvents."""

import uuid
from datetime import datetime, timezone
from typing import Protocol

from ..logging_config import get_logger
from ..models import TraceEvent
from ..storage import IStorage

logger = get_logger(__name__)


class ITracker(Protocol):
    """Creating TraceEvents for bot turns."""

    async def track(self, event_type: str, actor: str, data: dict) -> None:
        """Create TraceEvent and save to Storage."""
        ...


class Tracker:
    """Creates TraceEvents via direct track() calls."""

    def __init__(self, storage: IStorage, enabled: bool = True):
        self._storage = storage
        self._enabled = enabled

    async def track(self, event_type: str, actor: str, data: dict) -> None:
        """Create TraceEvent and save to Storage."""
        if not self._enabled:
            return

        trace_event = TraceEvent(
            id=str(uuid.uuid4()),
            event_type=event_type,
            actor=actor,
            data=data,
            timestamp=datetime.now(timezone.utc),
        )
        await self._storage.save_trace_event(trace_event)
        logger.debug("Tracked %s from %s", event_type, actor)


async def safe_track(
    tracker: ITracker | None, event_type: str, actor: str, data: dict
) -> None:
    """Track an event without letting a tracing failure change the turn's outcome."""
    if tracker is None:
        return

    try:
        await tracker.track(event_type, actor, data)
    except Exception:
        logger.exception("Failed to track %s from %s", event_type, actor)
