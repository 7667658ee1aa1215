"""LUIS recognizer using the v2 prediction API."""

from typing import Any, Protocol

import httpx

from ..logging_config import get_logger
from ..models import RecognizerResult

logger = get_logger(__name__)


class IRecognizer(Protocol):
    """Intent classifier."""

    async def recognize(self, text: str) -> RecognizerResult:
        """Classify an utterance."""
        ...

    async def close(self) -> None:
        """Release HTTP resources."""
        ...


class LuisRecognizer:
    """Calls a LUIS application and parses its intent scores."""

    def __init__(
        self,
        app_id: str,
        endpoint_key: str,
        endpoint: str,
        timezone_offset: int = -360,
        client: httpx.AsyncClient | None = None,
    ):
        if not app_id:
            raise ValueError("LUIS app_id is required")
        if not endpoint_key:
            raise ValueError("LUIS endpoint_key is required")
        if not endpoint:
            raise ValueError("LUIS endpoint is required")

        self._app_id = app_id
        self._endpoint_key = endpoint_key
        self._url = f"{endpoint.rstrip('/')}/luis/v2.0/apps/{app_id}"
        self._timezone_offset = timezone_offset
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=10.0)

    async def recognize(self, text: str) -> RecognizerResult:
        """Classify text. HTTP failures propagate to the caller."""
        if not text or not text.strip():
            return RecognizerResult(text=text or "")

        response = await self._client.get(
            self._url,
            params={
                "subscription-key": self._endpoint_key,
                "verbose": "true",
                "timezoneOffset": str(self._timezone_offset),
                "q": text,
            },
        )
        response.raise_for_status()

        result = self._parse(text, response.json())
        logger.debug("LUIS intents for %r: %s", text, result.intents)
        return result

    @staticmethod
    def _parse(text: str, payload: dict[str, Any]) -> RecognizerResult:
        intents: dict[str, float | None] = {}

        raw_intents = payload.get("intents")
        if raw_intents is None:
            top = payload.get("topScoringIntent")
            raw_intents = [top] if top else []

        for item in raw_intents:
            name = item.get("intent")
            if name is None:
                continue
            score = item.get("score")
            intents[name] = float(score) if score is not None else None

        return RecognizerResult(text=payload.get("query", text), intents=intents)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
