"""
mood_service.py: Mood entries scoped to their owner.
Entries are written once and never updated; listing is newest-first.
"""

from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from moodtracker.dates import isoformat_z, to_utc, utcnow
from moodtracker.errors import StoreError, ValidationError
from moodtracker.models.mood_entry import MoodEntry, MOODS


class MoodService:
    @staticmethod
    def create_entry(db: Session, user_id: int, mood: str | None,
                     journal: str | None = None, date: datetime | None = None) -> MoodEntry:
        if not mood:
            raise ValidationError("Mood is required")
        if mood not in MOODS:
            raise ValidationError(f"Invalid mood '{mood}'. Must be one of: {', '.join(MOODS)}")

        try:
            entry_date = to_utc(date) if date is not None else utcnow()
        except OverflowError as e:
            raise ValidationError("Invalid date") from e

        entry = MoodEntry(
            user_id=user_id,
            mood=mood,
            journal=journal or "",
            date=entry_date,
        )
        try:
            db.add(entry)
            db.commit()
            db.refresh(entry)
        except SQLAlchemyError as e:
            db.rollback()
            raise StoreError(f"Failed to save mood entry: {e}") from e
        return entry

    @staticmethod
    def list_entries(db: Session, user_id: int) -> list[MoodEntry]:
        try:
            return (
                db.query(MoodEntry)
                .filter_by(user_id=user_id)
                .order_by(MoodEntry.date.desc(), MoodEntry.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to load mood entries: {e}") from e

    @staticmethod
    def serialize(entry: MoodEntry) -> dict:
        return {
            "id": entry.id,
            "user_id": entry.user_id,
            "mood": entry.mood,
            "journal": entry.journal,
            "date": isoformat_z(entry.date),
            "created_at": isoformat_z(entry.created_at) if entry.created_at else None,
            "updated_at": isoformat_z(entry.updated_at) if entry.updated_at else None,
        }
