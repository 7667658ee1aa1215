"""Replies for confidently recognized intents."""

from dataclasses import dataclass
from typing import Callable

from ..models import TopIntent

NOT_UNDERSTOOD_REPLY = "Desculpa, não percebi."
HELP_REPLY = "Quero-te ajudar!\nO que precisas?"
LOCK_DEVICE_REPLY = "Vou te bloquear o dispositivo"
EMAIL_UNSUPPORTED_REPLY = "Ainda não sei mandar emails"


@dataclass(frozen=True)
class IntentHandler:
    """Reply for an intent, plus whether it asks for the device to be locked."""

    reply: Callable[[TopIntent], str]
    locks_device: bool = False


def fixed_reply(text: str) -> Callable[[TopIntent], str]:
    return lambda top_intent: text


def unknown_intent_reply(top_intent: TopIntent) -> str:
    return f"Intent: {top_intent.intent} ({top_intent.score})."


INTENT_HANDLERS: dict[str, IntentHandler] = {
    "None": IntentHandler(fixed_reply(NOT_UNDERSTOOD_REPLY)),
    "Utilities_Help": IntentHandler(fixed_reply(HELP_REPLY)),
    "HomeAutomation_TurnOff": IntentHandler(
        fixed_reply(LOCK_DEVICE_REPLY), locks_device=True
    ),
    "Communication_SendEmail": IntentHandler(fixed_reply(EMAIL_UNSUPPORTED_REPLY)),
}

UNKNOWN_INTENT_HANDLER = IntentHandler(unknown_intent_reply)


def resolve_intent(
    top_intent: TopIntent,
    handlers: dict[str, IntentHandler] | None = None,
) -> IntentHandler:
    """Handler for the intent, or the unknown-intent default."""
    table = INTENT_HANDLERS if handlers is None else handlers
    return table.get(top_intent.intent, UNKNOWN_INTENT_HANDLER)
