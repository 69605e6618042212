"""
Timestamp helpers shared by the server and the client.

Timestamps are stored as naive UTC with millisecond precision and rendered in
the JavaScript ``toISOString()`` shape, e.g. ``2026-10-19T08:30:00.000Z``.
"""

from datetime import datetime, timezone


def to_utc(dt: datetime) -> datetime:
    """Naive UTC, truncated to milliseconds. Naive input is taken as UTC."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt.replace(microsecond=dt.microsecond // 1000 * 1000)


def utcnow() -> datetime:
    return to_utc(datetime.now(timezone.utc))


def isoformat_z(dt: datetime) -> str:
    dt = to_utc(dt)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 string into an aware UTC datetime."""
    text = value.strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
