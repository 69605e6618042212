"""
api.py: HTTP client for the mood tracker API.
Attaches the session's Bearer token and drops the session on any 401.
"""

import logging

import httpx

from moodtracker import config
from moodtracker.client.session import AuthState, Session
from moodtracker.dates import isoformat_z

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SessionExpiredError(ApiError):
    """The server rejected the token; the session has been cleared."""


def _error_message(response: httpx.Response, default: str) -> str:
    try:
        data = response.json()
    except ValueError:
        return default
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return default


class MoodTrackerClient:
    def __init__(self, session: Session, base_url: str | None = None, transport: httpx.BaseTransport | None = None):
        self.session = session
        self.base_url = (base_url or config.API_URL).rstrip("/")
        # no request timeout, no retries
        self._http = httpx.Client(base_url=self.base_url, timeout=None, transport=transport)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self._http.close()

    def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            return self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiError(f"Connection error: {e}. Make sure the backend is running on {self.base_url}") from e

    # --- Auth ---

    def _authenticate(self, path: str, username: str, password: str, default_error: str) -> AuthState:
        response = self._send("POST", path, json={"username": username, "password": password})
        if not response.is_success:
            raise ApiError(_error_message(response, default_error), response.status_code)
        data = response.json()
        auth = AuthState(username=data["username"], token=data["token"])
        self.session.login(auth)
        return auth

    def register(self, username: str, password: str) -> AuthState:
        return self._authenticate("/auth/register", username, password, "Registration failed")

    def login(self, username: str, password: str) -> AuthState:
        return self._authenticate("/auth/login", username, password, "Login failed")

    def logout(self) -> None:
        self.session.logout()

    # --- Authenticated calls ---

    def auth_request(self, method: str, path: str, **kwargs) -> httpx.Response:
        if not self.session.is_authenticated:
            raise ApiError("No authentication token found.")

        headers = {"Content-Type": "application/json", **self.session.auth_headers(), **kwargs.pop("headers", {})}
        response = self._send(method, path, headers=headers, **kwargs)

        if response.status_code == 401:
            logger.info("Token rejected by server, clearing session")
            self.session.clear()
            raise SessionExpiredError("Unauthorized. Please log in again.", 401)
        return response

    def list_moods(self) -> list[dict]:
        response = self.auth_request("GET", "/moods")
        if not response.is_success:
            raise ApiError("Failed to fetch mood history.", response.status_code)
        return response.json()

    def create_mood(self, mood: str, journal: str = "", date=None) -> dict:
        payload = {"mood": mood, "journal": journal}
        if date is not None:
            payload["date"] = date if isinstance(date, str) else isoformat_z(date)
        response = self.auth_request("POST", "/moods", json=payload)
        if not response.is_success:
            raise ApiError(_error_message(response, "Failed to save mood. Please try again."), response.status_code)
        return response.json()
