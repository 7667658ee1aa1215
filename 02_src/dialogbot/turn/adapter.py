"""Bot adapter that runs turns in-process and hands the replies back to the caller."""

import uuid
from typing import Awaitable, Callable, List

from botbuilder.core import BotAdapter, TurnContext
from botbuilder.schema import Activity, ConversationReference, ResourceResponse

from ..logging_config import get_logger
from ..tracker import ITracker, safe_track

logger = get_logger(__name__)

TURN_ERROR_MESSAGE = "Sorry, it looks like something went wrong."
REPLIES_KEY = "ReplyAdapter.replies"

BotLogic = Callable[[TurnContext], Awaitable]
TurnErrorHandler = Callable[[TurnContext, Exception], Awaitable]


def get_replies(turn_context: TurnContext) -> list[Activity]:
    """Activities sent through the adapter so far this turn."""
    return list(turn_context.turn_state.get(REPLIES_KEY, []))


class ReplyAdapter(BotAdapter):
    """Runs activities through the middleware pipeline and collects outbound replies.

    Replies are buffered on the turn instead of being posted to a channel
    connector, so the messaging endpoint can return them in its response.
    """

    def __init__(
        self,
        tracker: ITracker | None = None,
        on_turn_error: TurnErrorHandler | None = None,
    ):
        super().__init__(on_turn_error or self._default_turn_error)
        self._tracker = tracker

    async def process_activity(self, activity: Activity, logic: BotLogic) -> list[Activity]:
        """Process one activity and return the replies sent during the turn."""
        turn_context = TurnContext(self, activity)
        await self.run_pipeline(turn_context, logic)
        return get_replies(turn_context)

    async def send_activities(
        self, context: TurnContext, activities: List[Activity]
    ) -> List[ResourceResponse]:
        replies = context.turn_state.setdefault(REPLIES_KEY, [])
        responses = []
        for activity in activities:
            activity.id = str(uuid.uuid4())
            replies.append(activity)
            responses.append(ResourceResponse(id=activity.id))
        return responses

    async def update_activity(self, context: TurnContext, activity: Activity):
        raise NotImplementedError("Replies cannot be updated once returned")

    async def delete_activity(self, context: TurnContext, reference: ConversationReference):
        raise NotImplementedError("Replies cannot be deleted once returned")

    async def _default_turn_error(self, turn_context: TurnContext, error: Exception) -> None:
        """Log the failure and apologise. Nothing already saved is rolled back."""
        logger.error(f"Exception caught : {error}", exc_info=error)

        await turn_context.send_activity(TURN_ERROR_MESSAGE)

        conversation = turn_context.activity.conversation
        await safe_track(
            self._tracker,
            "turn_failed",
            "adapter",
            {
                "conversation_id": conversation.id if conversation else None,
                "error": str(error),
                "error_type": type(error).__name__,
            },
        )
