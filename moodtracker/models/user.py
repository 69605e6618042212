from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from moodtracker.database import Base
from moodtracker.dates import utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), unique=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=utcnow)

    mood_entries = relationship("MoodEntry", back_populates="user")
