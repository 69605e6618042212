import pytest
from fastapi.testclient import TestClient

from moodtracker import config, database
from moodtracker.main import app

TEST_SECRET = "test-secret"


@pytest.fixture(autouse=True)
def jwt_secret(monkeypatch):
    monkeypatch.setattr(config, "JWT_SECRET", TEST_SECRET)
    return TEST_SECRET


@pytest.fixture
def db():
    database.init_db("sqlite://")
    session = database.SessionLocal()
    yield session
    session.close()
    database.close_db()


@pytest.fixture
def api(db):
    return TestClient(app)


def register(api, username="alice", password="s3cret!"):
    resp = api.post("/api/auth/register", json={"username": username, "password": password})
    assert resp.status_code == 201, resp.text
    return resp.json()["token"]


def bearer(token):
    return {"Authorization": f"Bearer {token}"}
