"""Goal model for SQLModel."""
from sqlmodel import SQLModel, Field
from pydantic import NaiveDatetime
from typing import Optional

from getitdone.models.base import datetime_column, new_id, utcnow


class Goal(SQLModel, table=True):
    """A longer-term objective tasks can contribute to."""

    id: str = Field(default_factory=new_id, primary_key=True, index=True)
    title: str = Field(max_length=200)
    description: str = Field(default="", max_length=2000)
    target_date: Optional[NaiveDatetime] = Field(default=None, sa_column=datetime_column(nullable=True))
    created_at: NaiveDatetime = Field(default_factory=utcnow, sa_column=datetime_column())
    updated_at: NaiveDatetime = Field(default_factory=utcnow, sa_column=datetime_column())
