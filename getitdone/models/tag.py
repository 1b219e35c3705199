"""Tag model for SQLModel."""
from sqlmodel import SQLModel, Field, Relationship
from pydantic import NaiveDatetime
from typing import TYPE_CHECKING, List

from getitdone.models.base import datetime_column, new_id, utcnow
from getitdone.models.task_tag import TaskTagLink

if TYPE_CHECKING:
    from getitdone.models.task import Task


class Tag(SQLModel, table=True):
    """Free-form label; a task holds a set of tags."""

    id: str = Field(default_factory=new_id, primary_key=True, index=True)
    name: str = Field(max_length=100)
    created_at: NaiveDatetime = Field(default_factory=utcnow, sa_column=datetime_column())
    updated_at: NaiveDatetime = Field(default_factory=utcnow, sa_column=datetime_column())

    tasks: List["Task"] = Relationship(back_populates="tags", link_model=TaskTagLink)
