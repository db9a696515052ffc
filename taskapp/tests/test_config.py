"""Tests for environment-driven settings and engine construction."""

import os
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy import inspect

from taskapp.config import SQLITE_FALLBACK_URL, Settings
from taskapp.database import build_engine, create_db_and_tables
from taskapp.main import create_app


class TestSettings:
    def test_mysql_url_built_from_db_variables(self):
        """Test that DB_* variables build a MySQL URL with the raw password."""
        with patch.dict(os.environ, {
            "DB_HOST": "db.internal",
            "DB_NAME": "tasks_prod",
            "DB_USER": "tracker",
            "DB_PASSWORD": "p@ss/word",
        }, clear=True):
            settings = Settings.from_env()
        url = settings.resolve_database_url()
        assert url.drivername == "mysql+pymysql"
        assert url.host == "db.internal"
        assert url.database == "tasks_prod"
        assert url.username == "tracker"
        assert url.password == "p@ss/word"

    def test_database_url_overrides_db_variables(self):
        """Test that DATABASE_URL wins over the DB_* variables."""
        with patch.dict(os.environ, {
            "DB_HOST": "db.internal",
            "DATABASE_URL": "sqlite:///override.db",
        }, clear=True):
            settings = Settings.from_env()
        assert settings.resolve_database_url() == "sqlite:///override.db"

    def test_defaults_fall_back_to_sqlite(self):
        """Test that an empty environment falls back to local SQLite."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()
        assert settings.resolve_database_url() == SQLITE_FALLBACK_URL
        assert settings.log_level == "INFO"
        assert settings.port == 8000

    def test_cors_origins_are_split(self):
        """Test that CORS_ORIGINS is split on commas and blanks dropped."""
        with patch.dict(os.environ, {"CORS_ORIGINS": "http://a.test, http://b.test,"}, clear=True):
            settings = Settings.from_env()
        assert settings.cors_origins == ["http://a.test", "http://b.test"]


def test_lifespan_builds_and_disposes_store(tmp_path):
    """Test that app start-up creates the tables and serves requests."""
    db_url = f"sqlite:///{tmp_path / 'tasks.db'}"
    app = create_app(settings=Settings(database_url=db_url))
    with TestClient(app) as client:
        created = client.post("/api/tasks", json={"title": "Buy milk", "description": "2% low fat"})
        assert created.status_code == 201
        assert len(client.get("/api/tasks").json()) == 1

    engine = build_engine(db_url)
    assert "tasks" in inspect(engine).get_table_names()
    engine.dispose()


def test_create_db_and_tables_is_repeatable(tmp_path):
    """Test that table creation can run twice and yields the expected columns."""
    engine = build_engine(f"sqlite:///{tmp_path / 'tasks.db'}")
    create_db_and_tables(engine)
    create_db_and_tables(engine)
    columns = {column["name"] for column in inspect(engine).get_columns("tasks")}
    assert columns == {
        "id", "title", "description", "status", "created_at", "updated_at", "deleted_at",
    }
    engine.dispose()
