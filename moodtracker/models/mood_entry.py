from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from moodtracker.database import Base
from moodtracker.dates import utcnow

MOODS = ("happy", "good", "neutral", "sad", "upset")


class MoodEntry(Base):
    __tablename__ = "mood_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    mood = Column(String(20), nullable=False)
    journal = Column(Text, nullable=False, default="")
    date = Column(DateTime, nullable=False, default=utcnow)  # naive UTC
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="mood_entries")
