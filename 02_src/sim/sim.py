"""SIM implementation - scripted conversations against the messaging API."""

import asyncio
import random
from typing import Protocol

import httpx

from dialogbot.logging_config import get_logger
from dialogbot.tracker import ITracker

logger = get_logger(__name__)

VIRTUAL_USERS = [
    {"user_id": "user_001", "name": "Ana"},
    {"user_id": "user_002", "name": "Bruno"},
]

# Greeting (triggers the name prompt), the name, then things to ask
QUESTIONS_PER_USER = [
    ["Olá", "Preciso de ajuda", "Qual é a capital de França?"],
    ["Bom dia", "Manda um email ao João", "Desliga o computador"],
]


class ISim(Protocol):
    """Drive the bot with a scripted conversation."""

    async def start(self) -> None:
        """Start the scenario."""
        ...

    async def stop(self) -> None:
        """Stop the scenario."""
        ...


class Sim:
    """Sends a fixed conversation per virtual user over HTTP."""

    def __init__(
        self,
        api_url: str = "http://localhost:3978",
        tracker: ITracker | None = None,
        min_delay: float = 0.5,
        max_delay: float = 1.5,
    ):
        self._api_url = api_url
        self._tracker = tracker
        self._min_delay = min_delay
        self._max_delay = max_delay
        self._running = False
        self._task: asyncio.Task | None = None
        self._client: httpx.AsyncClient | None = None

    def set_tracker(self, tracker: ITracker) -> None:
        """Inject tracker for SIM trace events."""
        self._tracker = tracker

    async def start(self) -> None:
        """Start the scenario in the background."""
        if self._running:
            return

        self._running = True
        self._client = httpx.AsyncClient()
        self._task = asyncio.create_task(self._run_scenario())

    async def stop(self) -> None:
        """Stop the scenario."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        if self._client:
            await self._client.aclose()
            self._client = None

    def script_for(self, user_index: int) -> list[dict]:
        """Activities one virtual user sends, in order."""
        user = VIRTUAL_USERS[user_index]
        greeting, *questions = QUESTIONS_PER_USER[user_index]
        return [
            {"type": "conversationUpdate"},
            {"type": "message", "text": greeting},
            {"type": "message", "text": user["name"]},
            *({"type": "message", "text": question} for question in questions),
        ]

    async def _run_scenario(self) -> None:
        """Run the scripted conversation for every virtual user."""
        message_count = sum(len(self.script_for(i)) for i in range(len(VIRTUAL_USERS)))

        try:
            if self._tracker:
                await self._tracker.track(
                    "sim_started",
                    "sim",
                    {"user_count": len(VIRTUAL_USERS), "message_count": message_count},
                )

            for user_index, user in enumerate(VIRTUAL_USERS):
                for activity in self.script_for(user_index):
                    if not self._running:
                        return

                    await self._send_activity(user["user_id"], activity)
                    await asyncio.sleep(random.uniform(self._min_delay, self._max_delay))

        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error("SIM scenario error: %s", e)
        finally:
            if self._tracker:
                await self._tracker.track(
                    "sim_completed",
                    "sim",
                    {"user_count": len(VIRTUAL_USERS), "message_count": message_count},
                )

    async def _send_activity(self, user_id: str, activity: dict) -> None:
        """Post an activity to the messaging endpoint."""
        if not self._client:
            return

        body = {
            **activity,
            "conversation_id": f"sim-{user_id}",
            "from_id": user_id,
        }

        try:
            response = await self._client.post(
                f"{self._api_url}/api/messages",
                json=body,
                timeout=10.0,
            )

            if response.status_code == 200:
                data = response.json()
                logger.info("SIM: %s -> %s", user_id, activity.get("text"))
                for reply in data.get("responses", []):
                    logger.info("SIM: Reply: %s", reply)
            else:
                logger.error("SIM: Error sending activity: %s", response.status_code)

        except httpx.HTTPError as e:
            logger.error("SIM: Failed to send activity: %s", e)
