import logging
from datetime import datetime, timedelta, timezone

import bcrypt
from fastapi import Depends, Request
from jose import jwt, JWTError
from sqlalchemy.orm import Session

from moodtracker import config
from moodtracker.database import get_db
from moodtracker.errors import AuthError

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Hash a plain-text password using bcrypt."""
    # Ensure it doesn't exceed 72 bytes to prevent bcrypt ValueError
    pw_bytes = password.encode("utf-8")[:72]
    hashed = bcrypt.hashpw(pw_bytes, bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain-text password against a bcrypt hash."""
    try:
        pw_bytes = plain_password.encode("utf-8")[:72]
        hash_bytes = hashed_password.encode("utf-8")
        return bcrypt.checkpw(pw_bytes, hash_bytes)
    except ValueError as e:
        logger.warning(f"Bcrypt verification error: {e}")
        return False


def create_token(data: dict, secret: str | None = None, expires_in: timedelta | None = None) -> str:
    """Create a JWT token with an expiry claim."""
    to_encode = data.copy()
    lifetime = expires_in if expires_in is not None else timedelta(hours=config.JWT_EXPIRY_HOURS)
    to_encode["exp"] = datetime.now(timezone.utc) + lifetime
    return jwt.encode(to_encode, secret or config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def verify_token(token: str, secret: str) -> int:
    """
    Stateless check of a token against a signing secret.
    Returns the user_id claim or raises AuthError when the token is missing,
    malformed, expired or signed with another key.
    """
    if not token:
        raise AuthError("Not authorized, no token")
    try:
        payload = jwt.decode(token, secret, algorithms=[config.JWT_ALGORITHM])
    except JWTError as e:
        raise AuthError("Not authorized, token failed") from e

    user_id = payload.get("user_id")
    if isinstance(user_id, bool) or not isinstance(user_id, int):
        raise AuthError("Not authorized, token failed")
    return user_id


def _bearer_token(request: Request) -> str | None:
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    return auth_header.split(" ", 1)[1].strip() or None


async def get_current_user(request: Request, db: Session = Depends(get_db)) -> int:
    """
    FastAPI dependency: extracts the Bearer token from the Authorization
    header, verifies it, and returns the user_id.
    Raises AuthError (HTTP 401) if the token is missing or invalid.
    """
    from moodtracker.services.auth_service import AuthService

    token = _bearer_token(request)
    if token is None:
        logger.warning(f"Rejected {request.method} {request.url.path}: no token")
        raise AuthError("Not authorized, no token")

    try:
        return AuthService.verify(db, token)
    except AuthError as e:
        logger.warning(f"Token failed on {request.method} {request.url.path}: {e.__cause__ or e.message}")
        raise AuthError("Not authorized, token failed") from e
