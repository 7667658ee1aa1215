"""Bot module."""

from .device import IDeviceLocker, NullDeviceLocker, WorkstationLocker
from .dialog_bot import (
    ANSWER_SCORE_THRESHOLD,
    INTENT_SCORE_THRESHOLD,
    NO_ANSWER_REPLY,
    DialogBot,
)
from .intents import (
    EMAIL_UNSUPPORTED_REPLY,
    HELP_REPLY,
    INTENT_HANDLERS,
    LOCK_DEVICE_REPLY,
    NOT_UNDERSTOOD_REPLY,
    IntentHandler,
    resolve_intent,
    unknown_intent_reply,
)

__all__ = [
    "ANSWER_SCORE_THRESHOLD",
    "INTENT_SCORE_THRESHOLD",
    "NO_ANSWER_REPLY",
    "DialogBot",
    "IDeviceLocker",
    "NullDeviceLocker",
    "WorkstationLocker",
    "EMAIL_UNSUPPORTED_REPLY",
    "HELP_REPLY",
    "INTENT_HANDLERS",
    "LOCK_DEVICE_REPLY",
    "NOT_UNDERSTOOD_REPLY",
    "IntentHandler",
    "resolve_intent",
    "unknown_intent_reply",
]
