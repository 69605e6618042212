import pytest

from moodtracker import config, database, main
from moodtracker.errors import StoreError


def test_missing_settings_lists_required(monkeypatch):
    monkeypatch.setattr(config, "DATABASE_URL", "")
    monkeypatch.setattr(config, "JWT_SECRET", "")
    assert config.missing_settings() == ["DATABASE_URL", "JWT_SECRET"]


def test_server_exits_without_config(monkeypatch):
    monkeypatch.setattr(config, "DATABASE_URL", "")

    with pytest.raises(SystemExit) as exc:
        main.run([])
    assert exc.value.code == 1


def test_server_exits_when_database_unreachable(monkeypatch):
    monkeypatch.setattr(config, "DATABASE_URL", "sqlite:///unreachable.db")

    def unreachable(url):
        raise StoreError("Could not connect to the database")

    monkeypatch.setattr(database, "init_db", unreachable)

    with pytest.raises(SystemExit) as exc:
        main.run([])
    assert exc.value.code == 1


def test_get_db_requires_init():
    database.close_db()
    with pytest.raises(RuntimeError):
        next(database.get_db())


def test_init_db_file_database(tmp_path):
    url = f"sqlite:///{tmp_path / 'data' / 'moods.db'}"
    database.init_db(url)
    try:
        assert (tmp_path / "data" / "moods.db").exists()
    finally:
        database.close_db()
