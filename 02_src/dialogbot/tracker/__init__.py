"""Tracker module."""

from .tracker import ITracker, Tracker, safe_track

__all__ = ["ITracker", "Tracker", "safe_track"]
