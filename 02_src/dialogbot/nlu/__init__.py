"""NLU module."""

from .luis import IRecognizer, LuisRecognizer

__all__ = ["IRecognizer", "LuisRecognizer"]
