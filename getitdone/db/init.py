"""Initialize database tables."""
import logging

from sqlmodel import SQLModel
from sqlalchemy.engine import Engine

# Imported so every table is registered on SQLModel.metadata
from getitdone import models  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(engine: Engine) -> None:
    """Create all tables in the database."""
    logger.info("Creating all tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Tables created successfully.")


if __name__ == "__main__":
    from getitdone.db.config import engine as default_engine

    init_db(default_engine)
