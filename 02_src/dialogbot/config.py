"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = ":memory:"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path.

    State is kept in memory unless a database file is configured.
    """
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else DATA_DIR / candidate


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class BotSettings:
    """External service settings for the bot."""

    luis_app_id: str = ""
    luis_endpoint_key: str = ""
    luis_endpoint: str = "https://westus.api.cognitive.microsoft.com"
    qna_host: str = ""
    qna_knowledge_base_id: str = ""
    qna_endpoint_key: str = ""
    qna_score_threshold: float = 0.4
    qna_top: int = 1
    intent_score_threshold: float = 0.84
    answer_score_threshold: float = 0.8
    device_lock_enabled: bool = False

    @classmethod
    def from_env(cls) -> "BotSettings":
        """Build settings from environment variables."""
        defaults = cls()
        return cls(
            luis_app_id=os.getenv("LUIS_APP_ID", ""),
            luis_endpoint_key=os.getenv("LUIS_ENDPOINT_KEY", ""),
            luis_endpoint=os.getenv("LUIS_ENDPOINT", defaults.luis_endpoint),
            qna_host=os.getenv("QNA_HOST", ""),
            qna_knowledge_base_id=os.getenv("QNA_KNOWLEDGE_BASE_ID", ""),
            qna_endpoint_key=os.getenv("QNA_ENDPOINT_KEY", ""),
            qna_score_threshold=float(
                os.getenv("QNA_SCORE_THRESHOLD", str(defaults.qna_score_threshold))
            ),
            qna_top=int(os.getenv("QNA_TOP", str(defaults.qna_top))),
            intent_score_threshold=float(
                os.getenv(
                    "INTENT_SCORE_THRESHOLD", str(defaults.intent_score_threshold)
                )
            ),
            answer_score_threshold=float(
                os.getenv(
                    "ANSWER_SCORE_THRESHOLD", str(defaults.answer_score_threshold)
                )
            ),
            device_lock_enabled=_env_bool("DEVICE_LOCK_ENABLED"),
        )

    def validate(self) -> None:
        """Raise ValueError when a required service setting is missing."""
        required = {
            "LUIS_APP_ID": self.luis_app_id,
            "LUIS_ENDPOINT_KEY": self.luis_endpoint_key,
            "LUIS_ENDPOINT": self.luis_endpoint,
            "QNA_HOST": self.qna_host,
            "QNA_KNOWLEDGE_BASE_ID": self.qna_knowledge_base_id,
            "QNA_ENDPOINT_KEY": self.qna_endpoint_key,
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            raise ValueError(
                f"Missing bot configuration: {', '.join(missing)}"
            )

        if not 0.0 <= self.qna_score_threshold <= 1.0:
            raise ValueError("QNA_SCORE_THRESHOLD must be between 0 and 1")
        if self.qna_top < 1:
            raise ValueError("QNA_TOP must be at least 1")
