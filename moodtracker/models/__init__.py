# Import all models so they register with SQLAlchemy Base.metadata
# This ensures Base.metadata.create_all() creates all tables

from moodtracker.models.user import User
from moodtracker.models.mood_entry import MoodEntry, MOODS

__all__ = [
    "User",
    "MoodEntry",
    "MOODS",
]
