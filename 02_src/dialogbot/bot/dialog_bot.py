"""DialogBot: per-turn intent dispatch, name dialog and QnA fallback."""

from botbuilder.core import TurnContext
from botbuilder.schema import ActivityTypes

from ..dialogs import NameDialog
from ..logging_config import get_logger
from ..models import CounterState, TopIntent, UserProfile
from ..nlu import IRecognizer
from ..qna import IQnAService
from ..state import BotAccessors
from ..tracker import ITracker, safe_track
from .device import IDeviceLocker, NullDeviceLocker
from .intents import IntentHandler, resolve_intent

logger = get_logger(__name__)

INTENT_SCORE_THRESHOLD = 0.84
ANSWER_SCORE_THRESHOLD = 0.8
NO_ANSWER_REPLY = (
    "Ainda não sei a resposta mas vou averiguar\n"
    "Posso-te ajudar com mais alguma coisa?"
)


class DialogBot:
    """Handles one turn. A new instance is built for every activity."""

    def __init__(
        self,
        accessors: BotAccessors,
        recognizer: IRecognizer,
        qna: IQnAService,
        device_locker: IDeviceLocker | None = None,
        tracker: ITracker | None = None,
        intent_handlers: dict[str, IntentHandler] | None = None,
        intent_score_threshold: float = INTENT_SCORE_THRESHOLD,
        answer_score_threshold: float = ANSWER_SCORE_THRESHOLD,
    ):
        if accessors is None:
            raise ValueError("accessors is required")
        if recognizer is None:
            raise ValueError("recognizer is required")
        if qna is None:
            raise ValueError("qna is required")

        self._accessors = accessors
        self._recognizer = recognizer
        self._qna = qna
        self._device_locker = device_locker or NullDeviceLocker()
        self._tracker = tracker
        self._intent_handlers = intent_handlers
        self._intent_score_threshold = intent_score_threshold
        self._answer_score_threshold = answer_score_threshold
        self._name_dialog = NameDialog(
            accessors.dialog_state, accessors.user_profile, tracker
        )

    async def on_turn(self, turn_context: TurnContext) -> None:
        """Process one turn. Only message activities are handled."""
        activity = turn_context.activity
        if activity.type != ActivityTypes.message:
            logger.debug("Ignoring %s activity", activity.type)
            return

        recognizer_result = await self._recognizer.recognize(activity.text or "")
        top_intent = (
            recognizer_result.get_top_scoring_intent() if recognizer_result else None
        )

        if self._is_confident(top_intent):
            await self._reply_to_intent(turn_context, top_intent)
            return

        counter = await self._accessors.counter_state.get(turn_context, CounterState)
        counter.turn_count += 1

        user = await self._accessors.user_profile.get(turn_context, UserProfile)
        if user.name is None:
            await self._name_dialog.continue_or_begin(turn_context)
        else:
            await self._answer_question(turn_context)

        await self._accessors.user_state.save_changes(turn_context)
        await self._accessors.counter_state.set(turn_context, counter)
        await self._accessors.conversation_state.save_changes(turn_context)

    def _is_confident(self, top_intent: TopIntent | None) -> bool:
        return (
            top_intent is not None
            and bool(top_intent.intent)
            and top_intent.score > self._intent_score_threshold
        )

    async def _reply_to_intent(self, turn_context: TurnContext, top_intent: TopIntent) -> None:
        handler = resolve_intent(top_intent, self._intent_handlers)

        logger.info("Intent %s (%s)", top_intent.intent, top_intent.score)
        await turn_context.send_activity(handler.reply(top_intent))
        await safe_track(
            self._tracker,
            "intent_recognized",
            "dialog_bot",
            {
                "conversation_id": turn_context.activity.conversation.id,
                "intent": top_intent.intent,
                "score": top_intent.score,
            },
        )

        if handler.locks_device:
            await self._device_locker.lock()

    async def _answer_question(self, turn_context: TurnContext) -> None:
        answers = await self._qna.get_answers(turn_context)

        if answers and answers[0].score > self._answer_score_threshold:
            top_answer = answers[0]
            await turn_context.send_activity(top_answer.answer)
            await safe_track(
                self._tracker,
                "qna_answered",
                "dialog_bot",
                {
                    "conversation_id": turn_context.activity.conversation.id,
                    "score": top_answer.score,
                },
            )
        else:
            await turn_context.send_activity(NO_ANSWER_REPLY)
