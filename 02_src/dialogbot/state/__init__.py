"""Bot state module."""

from .accessors import (
    COUNTER_STATE_NAME,
    DIALOG_STATE_NAME,
    USER_PROFILE_NAME,
    BotAccessors,
)
from .sqlite_storage import SqliteStateStorage

__all__ = [
    "COUNTER_STATE_NAME",
    "DIALOG_STATE_NAME",
    "USER_PROFILE_NAME",
    "BotAccessors",
    "SqliteStateStorage",
]
