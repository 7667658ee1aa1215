"""Turn processing module."""

from .adapter import TURN_ERROR_MESSAGE, ReplyAdapter, get_replies
from .middleware import TurnLoggerMiddleware

__all__ = [
    "TURN_ERROR_MESSAGE",
    "ReplyAdapter",
    "TurnLoggerMiddleware",
    "get_replies",
]
