from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from moodtracker.auth import get_current_user
from moodtracker.database import get_db
from moodtracker.services.mood_service import MoodService

router = APIRouter(prefix="/api/moods", tags=["Moods"])


class MoodEntryCreate(BaseModel):
    mood: Optional[str] = None
    journal: Optional[str] = None
    date: Optional[datetime] = None


@router.get("")
async def list_moods(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    entries = MoodService.list_entries(db, user_id)
    return [MoodService.serialize(e) for e in entries]


@router.post("", status_code=201)
async def create_mood(entry_data: MoodEntryCreate, user_id: int = Depends(get_current_user),
                      db: Session = Depends(get_db)):
    entry = MoodService.create_entry(
        db,
        user_id,
        mood=entry_data.mood,
        journal=entry_data.journal,
        date=entry_data.date,
    )
    return MoodService.serialize(entry)
