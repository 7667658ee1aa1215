"""Two-step dialog that asks for the user's name and remembers it."""

from dataclasses import dataclass
from enum import Enum

from botbuilder.core import StatePropertyAccessor, TurnContext

from ..logging_config import get_logger
from ..models import DialogState, UserProfile
from ..tracker import ITracker, safe_track

logger = get_logger(__name__)

NAME_DIALOG_ID = "details"
NAME_PROMPT = "Olá!\nComo te chamas?"
GREETING_TEMPLATE = "Olá {name} , é bom conhecer-te!\nEm que te posso ajudar?"


class NameDialogStep(str, Enum):
    """Where the name dialog is."""

    AWAITING_NAME = "awaiting_name"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Transition:
    """Result of feeding input to the dialog."""

    step: NameDialogStep
    reply: str
    profile_name: str | None = None


def begin() -> Transition:
    """Start the dialog: ask for the name."""
    return Transition(step=NameDialogStep.AWAITING_NAME, reply=NAME_PROMPT)


def transition(step: NameDialogStep, text: str | None) -> Transition:
    """Advance the dialog with the user's input."""
    if step is NameDialogStep.AWAITING_NAME:
        # A blank answer cannot become a name; ask again
        if not text or not text.strip():
            return Transition(step=NameDialogStep.AWAITING_NAME, reply=NAME_PROMPT)
        return Transition(
            step=NameDialogStep.COMPLETED,
            reply=GREETING_TEMPLATE.format(name=text),
            profile_name=text,
        )

    raise ValueError(f"Dialog already {step.value}")


class NameDialog:
    """Runs the name dialog against conversation dialog state and the user profile."""

    def __init__(
        self,
        dialog_state: StatePropertyAccessor,
        user_profile: StatePropertyAccessor,
        tracker: ITracker | None = None,
    ):
        self._dialog_state = dialog_state
        self._user_profile = user_profile
        self._tracker = tracker

    async def continue_or_begin(self, turn_context: TurnContext) -> NameDialogStep:
        """Resume the pending step, or begin a new dialog when none is active."""
        state: DialogState = await self._dialog_state.get(turn_context, DialogState)
        conversation_id = turn_context.activity.conversation.id
        started = not state.is_active

        if started:
            result = begin()
        else:
            result = transition(NameDialogStep(state.step), turn_context.activity.text)

        await turn_context.send_activity(result.reply)

        if started:
            logger.info("Name dialog started for %s", conversation_id)
            await safe_track(
                self._tracker,
                "dialog_started",
                "name_dialog",
                {"conversation_id": conversation_id, "dialog_id": NAME_DIALOG_ID},
            )

        if result.profile_name is not None:
            profile: UserProfile = await self._user_profile.get(turn_context, UserProfile)
            profile.name = result.profile_name

        if result.step is NameDialogStep.COMPLETED:
            state.dialog_id = None
            state.step = None
            logger.info("Name dialog completed for %s", conversation_id)
            await safe_track(
                self._tracker,
                "dialog_completed",
                "name_dialog",
                {"conversation_id": conversation_id, "name": result.profile_name},
            )
        else:
            state.dialog_id = NAME_DIALOG_ID
            state.step = result.step.value

        return result.step
