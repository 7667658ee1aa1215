"""Core data models for the dialog bot."""

from .recognition import QueryResult, RecognizerResult, TopIntent
from .state import CounterState, DialogState, UserProfile
from .tracing import TraceEvent

__all__ = [
    # State records
    "CounterState",
    "DialogState",
    "UserProfile",
    # Recognition
    "QueryResult",
    "RecognizerResult",
    "TopIntent",
    # Tracing
    "TraceEvent",
]
