"""Database configuration for the get IT done API."""
from typing import Generator
from sqlmodel import create_engine, Session
from sqlalchemy import event
from sqlalchemy.engine import Engine
import logging

from getitdone.config import Settings, get_settings

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> Engine:
    """Create the SQLModel engine for the configured DATABASE_URL."""
    if settings.is_sqlite:
        logger.info(f"Using SQLite database: {settings.database_url}")
        # SQLite connections are shared across FastAPI's threadpool workers
        engine = create_engine(
            settings.database_url,
            echo=settings.sql_echo,
            connect_args={"check_same_thread": False},
        )

        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
    else:
        logger.info("Using PostgreSQL database")
        engine = create_engine(settings.database_url, echo=settings.sql_echo, pool_pre_ping=True)
    return engine


engine = build_engine(get_settings())


def get_session() -> Generator[Session, None, None]:
    """Dependency for getting database sessions."""
    with Session(engine) as session:
        yield session
