# taskapp/config.py
"""Environment-driven settings for the task tracker."""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.engine import URL

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:5173,http://localhost:8000"
SQLITE_FALLBACK_URL = "sqlite:///tasks.db"


def _split_origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass(frozen=True)
class Settings:
    """Process settings, read once at start-up.

    The database is normally MySQL, addressed by ``DB_HOST``/``DB_NAME``/
    ``DB_USER``/``DB_PASSWORD``. ``DATABASE_URL`` overrides all of them, and
    without either a local SQLite file is used.
    """

    db_host: Optional[str] = None
    db_name: str = "tasks"
    db_user: str = "root"
    db_password: str = ""
    database_url: Optional[str] = None
    cors_origins: list[str] = field(
        default_factory=lambda: _split_origins(DEFAULT_CORS_ORIGINS)
    )
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            db_host=os.getenv("DB_HOST") or None,
            db_name=os.getenv("DB_NAME", "tasks"),
            db_user=os.getenv("DB_USER", "root"),
            db_password=os.getenv("DB_PASSWORD", ""),
            database_url=os.getenv("DATABASE_URL") or None,
            cors_origins=_split_origins(os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            host=os.getenv("HOST", "127.0.0.1"),
            port=int(os.getenv("PORT", "8000")),
        )

    def resolve_database_url(self) -> "str | URL":
        """Return the SQLAlchemy URL the engine should connect to."""
        if self.database_url:
            return self.database_url
        if self.db_host:
            return URL.create(
                "mysql+pymysql",
                username=self.db_user,
                password=self.db_password or None,
                host=self.db_host,
                database=self.db_name,
            )
        return SQLITE_FALLBACK_URL


def configure_logging(level: str = "INFO") -> None:
    """Install the root handler once for the whole process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
