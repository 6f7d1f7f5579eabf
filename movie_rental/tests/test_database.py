import pytest

from movie_rental.app.database import engine_options, resolve_database_url


def test_sqlite_url_creates_parent_directory(tmp_path):
    db_file = tmp_path / "nested" / "catalog.db"
    url = f"sqlite:///{db_file.as_posix()}"

    assert resolve_database_url(url) == url
    assert db_file.parent.is_dir()


def test_sqlite_engine_options_allow_cross_thread_sessions():
    assert engine_options("sqlite:///:memory:") == {"connect_args": {"check_same_thread": False}}


def test_server_engine_options_read_pool_env(monkeypatch):
    monkeypatch.setenv("DATABASE_POOL_SIZE", "20")
    monkeypatch.delenv("DATABASE_MAX_OVERFLOW", raising=False)

    options = engine_options("postgresql+psycopg://movies@localhost/movies")

    assert options["pool_pre_ping"] is True
    assert options["pool_size"] == 20
    assert options["max_overflow"] == 10
    assert options["pool_recycle"] == 1800


def test_pool_env_must_be_a_non_negative_integer(monkeypatch):
    monkeypatch.setenv("DATABASE_POOL_TIMEOUT", "-1")
    with pytest.raises(ValueError):
        engine_options("postgresql+psycopg://movies@localhost/movies")
