"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio
from botbuilder.schema import Activity, ChannelAccount, ConversationAccount

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from dialogbot.storage import Storage

    st = Storage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def tracker(storage):
    """Create Tracker with storage."""
    from dialogbot.tracker import Tracker

    return Tracker(storage)


@pytest.fixture
def state_storage(storage):
    """botbuilder Storage over the SQLite state table."""
    from dialogbot.state import SqliteStateStorage

    return SqliteStateStorage(storage)


@pytest.fixture
def accessors(state_storage):
    """Create conversation/user state and the bot's accessors."""
    from botbuilder.core import ConversationState, UserState

    from dialogbot.state import BotAccessors

    return BotAccessors(ConversationState(state_storage), UserState(state_storage))


@pytest.fixture
def adapter(tracker):
    """Adapter that collects replies, wired to the tracker."""
    from dialogbot.turn import ReplyAdapter

    return ReplyAdapter(tracker=tracker)


@pytest.fixture
def make_activity():
    """Build activities for one user in one conversation."""

    def _make(
        text: str | None = "hello",
        type: str = "message",
        conversation_id: str = "conv1",
        from_id: str = "user1",
    ) -> Activity:
        return Activity(
            type=type,
            text=text,
            channel_id="api",
            conversation=ConversationAccount(id=conversation_id),
            from_property=ChannelAccount(id=from_id),
            recipient=ChannelAccount(id="dialogbot"),
        )

    return _make


@pytest.fixture
def make_context(adapter):
    """Wrap an activity in a TurnContext bound to the adapter."""
    from botbuilder.core import TurnContext

    def _make(activity: Activity) -> TurnContext:
        return TurnContext(adapter, activity)

    return _make


@pytest.fixture
def mock_recognizer():
    """Recognizer that scores every utterance as nothing.

    Tests set `mock_recognizer.intents` to control the result.
    """
    from dialogbot.models import RecognizerResult

    recognizer = Mock()
    recognizer.intents = {}

    async def recognize(text):
        return RecognizerResult(text=text, intents=dict(recognizer.intents))

    recognizer.recognize = AsyncMock(side_effect=recognize)
    recognizer.close = AsyncMock()
    return recognizer


@pytest.fixture
def mock_qna():
    """QnA service returning no answers by default."""
    qna = Mock()
    qna.get_answers = AsyncMock(return_value=[])
    qna.close = AsyncMock()
    return qna


@pytest.fixture
def mock_locker():
    """Device locker that records calls."""
    locker = Mock()
    locker.lock = AsyncMock()
    return locker


@pytest.fixture
def bot_factory(accessors, mock_recognizer, mock_qna, mock_locker, tracker):
    """Build a fresh DialogBot per turn, as the application does."""
    from dialogbot.bot import DialogBot

    def _make() -> DialogBot:
        return DialogBot(
            accessors=accessors,
            recognizer=mock_recognizer,
            qna=mock_qna,
            device_locker=mock_locker,
            tracker=tracker,
        )

    return _make


@pytest.fixture
def run_turn(bot_factory, make_context):
    """Run one activity through a fresh bot and return the reply texts."""
    from dialogbot.turn import get_replies

    async def _run(activity: Activity) -> list[str]:
        turn_context = make_context(activity)
        await bot_factory().on_turn(turn_context)
        return [reply.text for reply in get_replies(turn_context)]

    return _run


@pytest.fixture
def read_state(accessors, make_context):
    """Read persisted records as a new turn would see them."""
    from dialogbot.models import CounterState, UserProfile

    async def _read(activity: Activity) -> tuple[CounterState | None, UserProfile | None]:
        turn_context = make_context(activity)
        counter = await accessors.counter_state.get(turn_context)
        profile = await accessors.user_profile.get(turn_context)
        return counter, profile

    return _read
