"""
auth_service.py: Registration, login and token verification.
Tokens are stateless JWTs; nothing about a session is stored server-side.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from moodtracker import config
from moodtracker.auth import hash_password, verify_password, create_token, verify_token
from moodtracker.errors import AuthError, StoreError, ValidationError
from moodtracker.models.user import User

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


def _token_response(user: User) -> dict:
    token = create_token({"user_id": user.id, "username": user.username})
    return {"token": token, "username": user.username}


class AuthService:
    @staticmethod
    def register(db: Session, username: str | None, password: str | None) -> dict:
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError("Please provide a username and password")

        try:
            if db.query(User).filter_by(username=username).first():
                raise ValidationError("Username already exists")

            user = User(username=username, hashed_password=hash_password(password))
            db.add(user)
            db.commit()
            db.refresh(user)
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same name
            db.rollback()
            raise ValidationError("Username already exists") from e
        except SQLAlchemyError as e:
            db.rollback()
            raise StoreError(f"Failed to register user: {e}") from e

        logger.info(f"Registered user {user.id} ({user.username})")
        return _token_response(user)

    @staticmethod
    def login(db: Session, username: str | None, password: str | None) -> dict:
        username = (username or "").strip()
        if not username or not password:
            raise AuthError(INVALID_CREDENTIALS)

        try:
            user = db.query(User).filter_by(username=username).first()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to load user: {e}") from e

        # Same message for unknown user and wrong password
        if user is None or not verify_password(password, user.hashed_password):
            logger.warning(f"Failed login for username {username!r}")
            raise AuthError(INVALID_CREDENTIALS)

        return _token_response(user)

    @staticmethod
    def verify(db: Session, token: str | None) -> int:
        """Resolve a token to the id of an existing user."""
        user_id = verify_token(token, config.JWT_SECRET)
        try:
            exists = db.query(User.id).filter_by(id=user_id).first() is not None
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to load user: {e}") from e
        if not exists:
            raise AuthError("User not found")
        return user_id
