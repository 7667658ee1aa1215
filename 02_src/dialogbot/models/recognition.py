"""NLU and QnA result models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TopIntent:
    """Highest-scoring intent of a recognition."""

    intent: str
    score: float


@dataclass
class RecognizerResult:
    """Outcome of classifying one utterance."""

    text: str
    intents: dict[str, float | None] = field(default_factory=dict)

    def get_top_scoring_intent(self) -> TopIntent | None:
        """Return the top intent, or None when nothing was scored."""
        scored = [
            (name, score)
            for name, score in self.intents.items()
            if score is not None
        ]
        if not scored:
            return None

        name, score = max(scored, key=lambda item: item[1])
        return TopIntent(intent=name, score=float(score))


@dataclass
class QueryResult:
    """A single QnA Maker answer."""

    answer: str
    score: float
    questions: list[str] = field(default_factory=list)
    source: str | None = None
    id: int | None = None
