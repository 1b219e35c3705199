"""Project model for SQLModel."""
from sqlmodel import SQLModel, Field
from pydantic import NaiveDatetime

from getitdone.models.base import datetime_column, new_id, utcnow


class Project(SQLModel, table=True):
    """A named group of tasks."""

    id: str = Field(default_factory=new_id, primary_key=True, index=True)
    name: str = Field(max_length=200)
    description: str = Field(default="", max_length=2000)
    created_at: NaiveDatetime = Field(default_factory=utcnow, sa_column=datetime_column())
    updated_at: NaiveDatetime = Field(default_factory=utcnow, sa_column=datetime_column())
