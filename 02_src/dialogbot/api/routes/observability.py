"""Observability API routes."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Query

from ...app import IApplication
from ...models import TraceEvent


class TraceEventResponse(BaseModel):
    """A trace event with the conversation it belongs to, when it has one."""

    id: str
    event_type: str
    actor: str
    conversation_id: str | None = None
    data: dict[str, Any]
    timestamp: datetime


def _to_response(event: TraceEvent) -> dict:
    return {
        "id": event.id,
        "event_type": event.event_type,
        "actor": event.actor,
        "conversation_id": event.data.get("conversation_id"),
        "data": event.data,
        "timestamp": event.timestamp.isoformat(),
    }


def create_observability_router(app: IApplication) -> APIRouter:
    """Create observability router."""
    router = APIRouter(prefix="/api", tags=["observability"])

    @router.get("/trace-events", response_model=list[TraceEventResponse])
    async def get_trace_events(
        after: str | None = Query(None, description="ISO timestamp filter"),
        limit: int = Query(100, ge=1, le=1000),
        event_type: list[str] | None = Query(None, description="Event types to include"),
        actor: str | None = Query(None, description="turn_logger, dialog_bot, name_dialog, adapter or sim"),
        conversation_id: str | None = Query(None, description="Only events of this conversation"),
    ) -> list[dict]:
        """Turn, dialog and QnA trace events, newest first."""
        after_dt = None
        if after:
            try:
                after_dt = datetime.fromisoformat(after)
            except ValueError:
                raise HTTPException(status_code=400, detail="Invalid after timestamp format")

        try:
            events = await app.storage.get_trace_events(
                after=after_dt,
                event_types=event_type,
                actor=actor,
                conversation_id=conversation_id,
                limit=limit,
            )
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        return [_to_response(e) for e in events]

    return router
