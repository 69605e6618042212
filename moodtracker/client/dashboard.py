import logging
import time
from datetime import datetime, timezone

from moodtracker.client.api import ApiError, MoodTrackerClient
from moodtracker.client.stats import MoodStats, POINTS_PER_ENTRY, derive_stats

logger = logging.getLogger(__name__)

NOTICE_TTL_SECONDS = 3

MOOD_EMOJI = {
    "happy": "😊",
    "good": "🙂",
    "neutral": "😐",
    "sad": "😟",
    "upset": "😠",
}


class Dashboard:
    """View state for one signed-in user: history, busy flag and transient notices."""

    def __init__(self, client: MoodTrackerClient, clock=time.monotonic):
        self.client = client
        self.clock = clock
        self.history: list[dict] = []
        self.busy = False
        self._message = ""
        self._error = ""
        self._notice_expires_at: float | None = None

    # --- Notices ---

    def _expire_notices(self):
        if self._notice_expires_at is not None and self.clock() >= self._notice_expires_at:
            self._message = ""
            self._error = ""
            self._notice_expires_at = None

    def _schedule_clear(self):
        self._notice_expires_at = self.clock() + NOTICE_TTL_SECONDS

    @property
    def message(self) -> str:
        self._expire_notices()
        return self._message

    @property
    def error(self) -> str:
        self._expire_notices()
        return self._error

    # --- Data ---

    @property
    def stats(self) -> MoodStats:
        return derive_stats(self.history)

    def refresh(self) -> list[dict]:
        self.busy = True
        self._error = ""
        try:
            self.history = self.client.list_moods()
        except ApiError as e:
            self._error = e.message
            self._schedule_clear()
            raise
        finally:
            self.busy = False
        return self.history

    def submit(self, mood: str, journal: str = "") -> dict | None:
        """Save a mood entry. Returns the saved entry, or None when the save failed."""
        if self.busy:
            raise ApiError("A submission is already in progress.")

        self.busy = True
        self._error = ""
        self._message = ""
        try:
            saved = self.client.create_mood(mood, journal, date=datetime.now(timezone.utc))
            self.history = [saved] + self.history
            self._message = f"Mood saved successfully! You earned {POINTS_PER_ENTRY} points."
            return saved
        except ApiError as e:
            logger.warning(f"Mood submission failed: {e.message}")
            self._error = e.message
            return None
        finally:
            self.busy = False
            self._schedule_clear()
