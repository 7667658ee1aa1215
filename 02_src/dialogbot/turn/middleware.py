"""Turn logging middleware."""

from typing import Awaitable, Callable, List

from botbuilder.core import Middleware, TurnContext
from botbuilder.schema import Activity, ActivityTypes

from ..logging_config import get_logger
from ..tracker import ITracker, safe_track

logger = get_logger(__name__)


class TurnLoggerMiddleware(Middleware):
    """Logs before and after each turn. Errors from the turn propagate untouched."""

    def __init__(self, tracker: ITracker | None = None):
        self._tracker = tracker

    async def on_turn(self, context: TurnContext, logic: Callable[[], Awaitable]):
        activity = context.activity
        trace_context = {
            "activity_type": activity.type,
            "conversation_id": activity.conversation.id if activity.conversation else None,
            "text": activity.text,
        }
        responses: list[str] = []

        async def capture_replies(ctx: TurnContext, activities: List[Activity], next_send):
            responses.extend(
                reply.text for reply in activities if reply.type == ActivityTypes.message
            )
            return await next_send()

        context.on_send_activities(capture_replies)

        logger.info("Before turn: %s", activity.text, extra={"context": trace_context})
        await safe_track(self._tracker, "turn_started", "turn_logger", trace_context)

        await logic()

        logger.info("After turn", extra={"context": trace_context})
        await safe_track(
            self._tracker,
            "turn_completed",
            "turn_logger",
            {**trace_context, "responses": responses},
        )
