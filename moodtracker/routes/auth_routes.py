# ---------- routes/auth_routes.py ----------
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from moodtracker.database import get_db
from moodtracker.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["Auth"])


# ── Pydantic schemas ──────────────────────────────────────────────
class AuthRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class TokenResponse(BaseModel):
    token: str
    username: str


# ── Routes ────────────────────────────────────────────────────────
@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(body: AuthRequest, db: Session = Depends(get_db)):
    """Create an account and sign it in."""
    return AuthService.register(db, body.username, body.password)


@router.post("/login", response_model=TokenResponse)
async def login(body: AuthRequest, db: Session = Depends(get_db)):
    """Authenticate with username + password."""
    return AuthService.login(db, body.username, body.password)
