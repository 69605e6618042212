"""
session.py: Client-side auth state.

Either anonymous or authenticated as {username, token}. The state survives
restarts through an injected storage object exposing ``get_item``,
``set_item`` and ``remove_item``, always under the key ``"auth"``.
"""

import json
import logging
import os
from dataclasses import dataclass, asdict

logger = logging.getLogger(__name__)

STORAGE_KEY = "auth"


@dataclass(frozen=True)
class AuthState:
    username: str
    token: str


class MemoryStorage:
    def __init__(self):
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage:
    """Key/value strings persisted in one JSON file."""

    def __init__(self, path: str):
        self.path = path

    def _read(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read storage file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        folder = os.path.dirname(self.path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        # write beside the target, then swap it in
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f)
        os.replace(tmp_path, self.path)

    def get_item(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


class Session:
    def __init__(self, storage):
        self.storage = storage
        self._auth = self._load()

    def _load(self) -> AuthState | None:
        raw = self.storage.get_item(STORAGE_KEY)
        if not raw:
            return None
        try:
            data = json.loads(raw)
            return AuthState(username=data["username"], token=data["token"])
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Failed to parse auth from storage: {e}")
            self.storage.remove_item(STORAGE_KEY)
            return None

    @property
    def auth(self) -> AuthState | None:
        return self._auth

    @property
    def is_authenticated(self) -> bool:
        return self._auth is not None

    @property
    def username(self) -> str | None:
        return self._auth.username if self._auth else None

    @property
    def token(self) -> str | None:
        return self._auth.token if self._auth else None

    def login(self, auth: AuthState) -> None:
        self._auth = auth
        self.storage.set_item(STORAGE_KEY, json.dumps(asdict(auth)))

    def logout(self) -> None:
        self._auth = None
        self.storage.remove_item(STORAGE_KEY)

    # a 401 and an explicit logout leave the same state behind
    clear = logout

    def auth_headers(self) -> dict:
        if self._auth is None:
            return {}
        return {"Authorization": f"Bearer {self._auth.token}"}
