"""QnA Maker client using the generateAnswer API."""

from typing import Any, Protocol

import httpx
from botbuilder.core import TurnContext

from ..logging_config import get_logger
from ..models import QueryResult

logger = get_logger(__name__)


class IQnAService(Protocol):
    """Question answering over a knowledge base."""

    async def get_answers(self, turn_context: TurnContext) -> list[QueryResult]:
        """Answers for the turn's text, best first."""
        ...

    async def close(self) -> None:
        """Release HTTP resources."""
        ...


class QnAMaker:
    """Queries a QnA Maker knowledge base."""

    def __init__(
        self,
        host: str,
        knowledge_base_id: str,
        endpoint_key: str,
        score_threshold: float = 0.4,
        top: int = 1,
        client: httpx.AsyncClient | None = None,
    ):
        if not host:
            raise ValueError("QnA Maker host is required")
        if not knowledge_base_id:
            raise ValueError("QnA Maker knowledge_base_id is required")
        if not endpoint_key:
            raise ValueError("QnA Maker endpoint_key is required")
        if not 0.0 <= score_threshold <= 1.0:
            raise ValueError("score_threshold must be between 0 and 1")
        if top < 1:
            raise ValueError("top must be at least 1")

        self._url = f"{host.rstrip('/')}/knowledgebases/{knowledge_base_id}/generateAnswer"
        self._endpoint_key = endpoint_key
        self._score_threshold = score_threshold
        self._top = top
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=10.0)

    async def get_answers(self, turn_context: TurnContext) -> list[QueryResult]:
        """Answers above the score threshold, sorted by descending score."""
        question = turn_context.activity.text
        if not question or not question.strip():
            return []

        response = await self._client.post(
            self._url,
            headers={"Authorization": f"EndpointKey {self._endpoint_key}"},
            json={"question": question, "top": self._top},
        )
        response.raise_for_status()

        answers = self._parse(response.json())
        logger.debug("QnA answers for %r: %s", question, [a.score for a in answers])
        return answers

    def _parse(self, payload: dict[str, Any]) -> list[QueryResult]:
        results = []
        for item in payload.get("answers", []):
            # Service scores are 0..100
            score = float(item.get("score") or 0.0) / 100.0
            if score < self._score_threshold:
                continue
            results.append(
                QueryResult(
                    answer=item.get("answer", ""),
                    score=score,
                    questions=list(item.get("questions") or []),
                    source=item.get("source"),
                    id=item.get("id"),
                )
            )

        results.sort(key=lambda r: r.score, reverse=True)
        return results[: self._top]

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
