"""Application bootstrap and lifecycle management."""

import os
from typing import Protocol

from botbuilder.core import ConversationState, UserState
from botbuilder.schema import Activity, ActivityTypes

from .bot import DialogBot, IDeviceLocker, NullDeviceLocker, WorkstationLocker
from .config import BotSettings, resolve_db_path
from .logging_config import get_logger
from .nlu import IRecognizer, LuisRecognizer
from .qna import IQnAService, QnAMaker
from .state import BotAccessors, SqliteStateStorage
from .storage import IStorage, Storage
from .tracker import ITracker, Tracker
from .turn import ReplyAdapter, TurnLoggerMiddleware

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Reset stored state and trace events."""
        ...

    async def handle_activity(self, activity: Activity) -> list[str]:
        """Run one turn and return the bot's replies."""
        ...

    @property
    def storage(self) -> IStorage:
        """Storage holding state and trace events."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        db_path: str | None = None,
        settings: BotSettings | None = None,
        recognizer: IRecognizer | None = None,
        qna: IQnAService | None = None,
        device_locker: IDeviceLocker | None = None,
    ):
        env_db_path = os.getenv("DATABASE_URL") if db_path is None else db_path
        self._db_path = resolve_db_path(env_db_path)
        self._settings = settings

        # Injected collaborators replace the ones built from settings
        self._recognizer: IRecognizer | None = recognizer
        self._qna: IQnAService | None = qna
        self._device_locker: IDeviceLocker | None = device_locker

        # Components (will be initialized in start())
        self._storage: IStorage | None = None
        self._tracker: ITracker | None = None
        self._accessors: BotAccessors | None = None
        self._adapter: ReplyAdapter | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        if self._settings is None:
            self._settings = BotSettings.from_env()
        if self._recognizer is None or self._qna is None:
            # Fails fast on missing service credentials
            self._settings.validate()

        # 1. Storage (no dependencies)
        self._storage = Storage(self._db_path)
        await self._storage.init()
        logger.info("Storage initialized")

        # 2. Tracker (depends on Storage)
        self._tracker = Tracker(self._storage)

        # 3. Conversation and user state + accessors (depend on Storage)
        state_storage = SqliteStateStorage(self._storage)
        self._accessors = BotAccessors(
            ConversationState(state_storage),
            UserState(state_storage),
        )
        logger.info("State accessors initialized")

        # 4. External services
        if self._recognizer is None:
            self._recognizer = LuisRecognizer(
                app_id=self._settings.luis_app_id,
                endpoint_key=self._settings.luis_endpoint_key,
                endpoint=self._settings.luis_endpoint,
            )
        if self._qna is None:
            self._qna = QnAMaker(
                host=self._settings.qna_host,
                knowledge_base_id=self._settings.qna_knowledge_base_id,
                endpoint_key=self._settings.qna_endpoint_key,
                score_threshold=self._settings.qna_score_threshold,
                top=self._settings.qna_top,
            )
        if self._device_locker is None:
            self._device_locker = (
                WorkstationLocker()
                if self._settings.device_lock_enabled
                else NullDeviceLocker()
            )
        logger.info("Recognizer and QnA services initialized")

        # 5. Adapter with turn logging (depends on Tracker)
        self._adapter = ReplyAdapter(tracker=self._tracker)
        self._adapter.use(TurnLoggerMiddleware(self._tracker))
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._qna:
            await self._qna.close()
        if self._recognizer:
            await self._recognizer.close()
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")
        self._adapter = None

    async def reset(self) -> None:
        """Reset stored state and trace events."""
        if self._storage:
            await self._storage.clear()
            logger.info("Storage cleared")

    async def handle_activity(self, activity: Activity) -> list[str]:
        """Run one turn through the adapter with a freshly built bot."""
        if not self._adapter:
            raise RuntimeError("Application not started")

        bot = self._create_bot()
        replies = await self._adapter.process_activity(activity, bot.on_turn)
        return [reply.text for reply in replies if reply.type == ActivityTypes.message]

    def _create_bot(self) -> DialogBot:
        return DialogBot(
            accessors=self.accessors,
            recognizer=self._recognizer,
            qna=self._qna,
            device_locker=self._device_locker,
            tracker=self._tracker,
            intent_score_threshold=self._settings.intent_score_threshold,
            answer_score_threshold=self._settings.answer_score_threshold,
        )

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def tracker(self) -> ITracker:
        """Get tracker instance."""
        if not self._tracker:
            raise RuntimeError("Application not started")
        return self._tracker

    @property
    def accessors(self) -> BotAccessors:
        """Get state accessors."""
        if not self._accessors:
            raise RuntimeError("Application not started")
        return self._accessors
