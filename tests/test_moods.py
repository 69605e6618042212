from datetime import datetime, timezone

import pytest

from moodtracker.dates import parse_timestamp
from moodtracker.errors import StoreError, ValidationError
from moodtracker.models.mood_entry import MoodEntry
from moodtracker.services.mood_service import MoodService
from tests.conftest import bearer, register


def test_create_and_list_round_trip(api):
    token = register(api)
    body = {"mood": "good", "journal": "walked the dog", "date": "2026-10-18T08:30:00.000Z"}

    created = api.post("/api/moods", json=body, headers=bearer(token))
    assert created.status_code == 201

    listed = api.get("/api/moods", headers=bearer(token))
    assert listed.status_code == 200
    [entry] = listed.json()
    assert entry["id"] == created.json()["id"]
    assert entry["mood"] == "good"
    assert entry["journal"] == "walked the dog"
    assert entry["date"] == "2026-10-18T08:30:00.000Z"


def test_create_defaults_journal_and_date(api):
    token = register(api)
    before = datetime.now(timezone.utc).replace(microsecond=0)

    resp = api.post("/api/moods", json={"mood": "neutral"}, headers=bearer(token))

    assert resp.status_code == 201
    entry = resp.json()
    assert entry["journal"] == ""
    assert parse_timestamp(entry["date"]) >= before
    assert entry["created_at"].endswith("Z")


def test_create_normalizes_offset_dates_to_utc(api):
    token = register(api)
    resp = api.post("/api/moods", json={"mood": "sad", "date": "2026-10-18T10:30:00+02:00"},
                    headers=bearer(token))
    assert resp.json()["date"] == "2026-10-18T08:30:00.000Z"


def test_invalid_mood_is_400_and_not_persisted(api, db):
    token = register(api)

    resp = api.post("/api/moods", json={"mood": "furious"}, headers=bearer(token))

    assert resp.status_code == 400
    assert "furious" in resp.json()["message"]
    assert db.query(MoodEntry).count() == 0


def test_missing_mood_is_400(api):
    token = register(api)
    resp = api.post("/api/moods", json={"journal": "no mood"}, headers=bearer(token))
    assert resp.status_code == 400
    assert resp.json() == {"message": "Mood is required"}


def test_bad_date_is_400(api):
    token = register(api)
    resp = api.post("/api/moods", json={"mood": "good", "date": "yesterday-ish"}, headers=bearer(token))
    assert resp.status_code == 400


def test_date_out_of_range_in_utc_is_400_and_not_persisted(api, db):
    token = register(api)
    # valid with its offset, but past year 9999 once shifted to UTC
    resp = api.post("/api/moods", json={"mood": "good", "date": "9999-12-31T23:59:59-05:00"}, headers=bearer(token))

    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid date"}
    assert db.query(MoodEntry).count() == 0


def test_post_without_token_is_401_and_not_persisted(api, db):
    resp = api.post("/api/moods", json={"mood": "happy"})

    assert resp.status_code == 401
    assert db.query(MoodEntry).count() == 0


def test_entries_never_leak_across_users(api):
    alice = register(api, "alice")
    bob = register(api, "bob")

    api.post("/api/moods", json={"mood": "happy", "journal": "alice's day"}, headers=bearer(alice))
    api.post("/api/moods", json={"mood": "upset", "journal": "bob's day"}, headers=bearer(bob))

    alice_entries = api.get("/api/moods", headers=bearer(alice)).json()
    bob_entries = api.get("/api/moods", headers=bearer(bob)).json()

    assert [e["journal"] for e in alice_entries] == ["alice's day"]
    assert [e["journal"] for e in bob_entries] == ["bob's day"]
    assert {e["user_id"] for e in alice_entries}.isdisjoint({e["user_id"] for e in bob_entries})


def test_list_is_newest_first(api):
    token = register(api)
    for day in ("2026-10-15", "2026-10-17", "2026-10-16"):
        api.post("/api/moods", json={"mood": "good", "date": f"{day}T09:00:00.000Z"}, headers=bearer(token))

    dates = [e["date"][:10] for e in api.get("/api/moods", headers=bearer(token)).json()]
    assert dates == ["2026-10-17", "2026-10-16", "2026-10-15"]


def test_duplicate_submissions_are_kept(api):
    token = register(api)
    body = {"mood": "happy", "date": "2026-10-18T08:30:00.000Z"}
    api.post("/api/moods", json=body, headers=bearer(token))
    api.post("/api/moods", json=body, headers=bearer(token))

    entries = api.get("/api/moods", headers=bearer(token)).json()
    assert len(entries) == 2
    # same timestamp: the later insert comes first
    assert entries[0]["id"] > entries[1]["id"]


def test_service_rejects_unknown_mood(db):
    with pytest.raises(ValidationError):
        MoodService.create_entry(db, 1, "furious")


def test_store_failure_is_500_without_detail(api, monkeypatch):
    token = register(api)

    def broken(db, user_id):
        raise StoreError("disk I/O error at /var/lib/db")

    monkeypatch.setattr(MoodService, "list_entries", staticmethod(broken))

    resp = api.get("/api/moods", headers=bearer(token))
    assert resp.status_code == 500
    assert resp.json() == {"message": "Server error"}
