"""Database engine and helpers.

This module configures the SQLModel/SQLAlchemy engine from
`settings.DATABASE_URL` (a local SQLite file `cv.db` next to the
package by default) and provides the session dependency injected into
every request handler.
"""

import logging

from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from .config import settings

logger = logging.getLogger("workexperience.db")


def build_engine(url: str):
    """Create an engine for `url`.

    SQLite connections are shared across the server's worker threads, and
    an in-memory SQLite database is pinned to a single connection so every
    session sees the same tables.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, echo=False)
    kwargs = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return create_engine(url, echo=False, **kwargs)


engine = build_engine(settings.DATABASE_URL)


def create_db_and_tables():
    """Create the `workexperience` table if it does not exist yet."""
    # registers the table on SQLModel.metadata
    from . import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Connected to database %s", engine.url.render_as_string(hide_password=True))


def close_db():
    """Release every pooled connection held by the engine."""
    engine.dispose()
    logger.info("Database connection closed")


def get_session():
    """Yield a database `Session` for FastAPI dependency injection.

    The generator yields a session and ensures it is closed when the
    request scope finishes.
    """
    with Session(engine) as session:
        yield session
