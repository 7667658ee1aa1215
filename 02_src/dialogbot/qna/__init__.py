"""QnA module."""

from .qnamaker import IQnAService, QnAMaker

__all__ = ["IQnAService", "QnAMaker"]
