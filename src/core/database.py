"""Database connection and session management.

This module wraps the SQLAlchemy engine and session factory in a
``Database`` handle. The application constructs one handle at startup,
initializes it, and disposes of it on shutdown; request handlers receive
sessions through ``get_db``.
"""

import logging
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from config import DATA_DIR, DATABASE_URL
from models.base import Base
# Import models to ensure they are registered with Base.metadata
import models  # noqa: F401

logger = logging.getLogger(__name__)


class Database:
    """Owns the engine and session factory for one store."""

    def __init__(self, url: str = DATABASE_URL, engine: Optional[Engine] = None):
        """Initialize the handle.

        Args:
            url: SQLAlchemy database URL. Ignored when ``engine`` is given.
            engine: Pre-built engine, e.g. an in-memory SQLite engine in tests.
        """
        if engine is None:
            connect_args = {}
            if url.startswith("sqlite"):
                connect_args["check_same_thread"] = False
                if url.startswith(f"sqlite:///{DATA_DIR}"):
                    DATA_DIR.mkdir(parents=True, exist_ok=True)
            engine = create_engine(url, connect_args=connect_args)
        self.engine = engine
        self.session_factory = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )

    def init(self) -> None:
        """Create tables if they do not exist."""
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database initialized at %s", self.engine.url)

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()
        logger.info("Database connections released")

    def session(self) -> Session:
        return self.session_factory()

    def is_connected(self) -> bool:
        """Return True when the store answers a trivial query."""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning("Database ping failed: %s", e)
            return False


def get_database(request: Request) -> Database:
    """Dependency returning the app's Database handle."""
    return request.app.state.database


def get_db(request: Request) -> Iterator[Session]:
    """Dependency for getting a request-scoped database session."""
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()
