"""Shared column helpers."""
from datetime import datetime, timezone
import uuid

from sqlalchemy import Column, DateTime


def new_id() -> str:
    """Opaque identifier for a new row."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def datetime_column(nullable: bool = False) -> Column:
    """Timezone-less DATETIME column; values are naive UTC."""
    return Column(DateTime(timezone=False), nullable=nullable)
