"""Dialog bot: LUIS intents, a name dialog and a QnA Maker fallback."""

from .app import Application, IApplication
from .bot import DialogBot
from .config import BotSettings
from .dialogs import NameDialog
from .models import (
    CounterState,
    DialogState,
    QueryResult,
    RecognizerResult,
    TopIntent,
    TraceEvent,
    UserProfile,
)
from .nlu import IRecognizer, LuisRecognizer
from .qna import IQnAService, QnAMaker
from .state import BotAccessors, SqliteStateStorage
from .storage import IStorage, Storage
from .tracker import ITracker, Tracker
from .turn import ReplyAdapter, TurnLoggerMiddleware

__all__ = [
    # Application
    "Application",
    "IApplication",
    "BotSettings",
    # Models
    "CounterState",
    "DialogState",
    "UserProfile",
    "TopIntent",
    "RecognizerResult",
    "QueryResult",
    "TraceEvent",
    # Components
    "IStorage",
    "Storage",
    "ITracker",
    "Tracker",
    "BotAccessors",
    "SqliteStateStorage",
    "ReplyAdapter",
    "TurnLoggerMiddleware",
    "IRecognizer",
    "LuisRecognizer",
    "IQnAService",
    "QnAMaker",
    "NameDialog",
    "DialogBot",
]
