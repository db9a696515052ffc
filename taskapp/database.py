# taskapp/database.py
"""Database engine construction and schema creation using SQLModel."""

import logging

from sqlalchemy.engine import URL, Engine, make_url
from sqlmodel import SQLModel, create_engine

from taskapp import models  # noqa: F401  registers the tasks table on SQLModel.metadata

logger = logging.getLogger(__name__)


def build_engine(url: "str | URL", echo: bool = False) -> Engine:
    """Create an engine for *url*.

    SQLite connections are shared across the threads FastAPI runs sync
    handlers on, so the same-thread check is disabled for them.
    """
    parsed = make_url(url)
    connect_args = {}
    if parsed.get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False
    engine = create_engine(parsed, echo=echo, connect_args=connect_args, pool_pre_ping=True)
    logger.info("Database engine created for %s", parsed.render_as_string(hide_password=True))
    return engine


def create_db_and_tables(engine: Engine) -> None:
    """Create the ``tasks`` table if it does not exist yet."""
    SQLModel.metadata.create_all(engine)


def dispose_engine(engine: Engine) -> None:
    """Close every pooled connection held by *engine*."""
    engine.dispose()
    logger.info("Database engine disposed")
