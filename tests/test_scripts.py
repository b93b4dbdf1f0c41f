"""Tests for the release and start scripts."""
import pytest
from sqlalchemy import create_engine, inspect

from app.postpanel.config import load_settings
from scripts import release, start


@pytest.fixture()
def env(tmp_path, monkeypatch):
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'release.db'}")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.delenv("SEED_CATEGORIES", raising=False)
    return tmp_path


class TestResolvePort:
    def test_default_when_unset(self):
        assert start.resolve_port(None) == 8080
        assert start.resolve_port("  ") == 8080

    def test_valid_port(self):
        assert start.resolve_port("5000") == 5000

    @pytest.mark.parametrize("raw", ["0", "70000", "http"])
    def test_invalid_port(self, raw):
        with pytest.raises(ValueError):
            start.resolve_port(raw)


def test_resolve_workers():
    assert start.resolve_workers(None) == 2
    assert start.resolve_workers("4") == 4
    assert start.resolve_workers("0") == 2
    assert start.resolve_workers("many") == 2


def test_gunicorn_argv_uses_app_settings(env, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "warn")
    argv = start.gunicorn_argv(load_settings(), 9000, 3)
    assert argv[:2] == ["gunicorn", "app.wsgi:app"]
    assert argv[argv.index("--bind") + 1] == "0.0.0.0:9000"
    assert argv[argv.index("--workers") + 1] == "3"
    assert argv[argv.index("--log-level") + 1] == "warning"


def test_gunicorn_argv_unknown_log_level_falls_back(env, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "verbose")
    argv = start.gunicorn_argv(load_settings(), 8080, 2)
    assert argv[argv.index("--log-level") + 1] == "info"


def test_release_database_url_outside_production(env):
    assert release.resolve_database_url(load_settings()) == f"sqlite:///{env/'release.db'}"


def test_release_production_requires_explicit_database(monkeypatch):
    monkeypatch.setenv("ENV", "production")
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(RuntimeError):
        release.resolve_database_url(load_settings())


def test_release_production_rejects_sqlite(env, monkeypatch):
    monkeypatch.setenv("ENV", "production")
    with pytest.raises(RuntimeError):
        release.resolve_database_url(load_settings())


def test_run_release_migrates_and_seeds(env):
    db_url = release.run_release()
    # Second run is a no-op
    release.run_release()

    engine = create_engine(db_url)
    tables = set(inspect(engine).get_table_names())
    assert {"categories", "posts", "category_post"} <= tables
    with engine.connect() as conn:
        names = [r[0] for r in conn.exec_driver_sql("SELECT name FROM categories ORDER BY id")]
    assert names == ["News", "Tutorials", "Announcements"]
    engine.dispose()
