"""Client side of the mood tracker: session, API client, stats and dashboard."""

from moodtracker.client.session import AuthState, FileStorage, MemoryStorage, Session
from moodtracker.client.api import ApiError, MoodTrackerClient, SessionExpiredError
from moodtracker.client.stats import MoodStats, current_streak, derive_stats, total_points
from moodtracker.client.dashboard import Dashboard

__all__ = [
    "AuthState",
    "FileStorage",
    "MemoryStorage",
    "Session",
    "ApiError",
    "MoodTrackerClient",
    "SessionExpiredError",
    "MoodStats",
    "current_streak",
    "derive_stats",
    "total_points",
    "Dashboard",
]
