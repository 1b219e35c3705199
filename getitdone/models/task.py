"""Task model for SQLModel."""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, String, ForeignKey
from pydantic import NaiveDatetime
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from getitdone.models.base import datetime_column, new_id, utcnow
from getitdone.models.task_tag import TaskTagLink

if TYPE_CHECKING:
    from getitdone.models.tag import Tag


class TaskStatus(str, Enum):
    """Workflow status; declaration order is the status sort order."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


# 1 is the most urgent
PRIORITY_LABELS = {1: "high", 2: "medium", 3: "normal", 4: "low"}
DEFAULT_PRIORITY = 2


def _reference(table: str) -> Column:
    # Deleting the referenced row detaches the task instead of deleting it
    return Column(String, ForeignKey(f"{table}.id", ondelete="SET NULL"), index=True, nullable=True)


class Task(SQLModel, table=True):
    """Task entity representing a todo item."""

    id: str = Field(default_factory=new_id, primary_key=True, index=True)
    title: str = Field(max_length=200, min_length=1)
    description: str = Field(default="", max_length=5000)
    due_date: Optional[NaiveDatetime] = Field(default=None, sa_column=datetime_column(nullable=True))
    priority: int = Field(default=DEFAULT_PRIORITY)
    status: str = Field(default=TaskStatus.TODO.value, max_length=20, index=True)

    project_id: Optional[str] = Field(default=None, sa_column=_reference("project"))
    category_id: Optional[str] = Field(default=None, sa_column=_reference("category"))
    goal_id: Optional[str] = Field(default=None, sa_column=_reference("goal"))

    is_recurring: bool = Field(default=False)
    recurrence_rule: str = Field(default="", max_length=500)

    created_at: NaiveDatetime = Field(default_factory=utcnow, sa_column=datetime_column())
    updated_at: NaiveDatetime = Field(default_factory=utcnow, sa_column=datetime_column())

    # Relationships
    tags: List["Tag"] = Relationship(back_populates="tasks", link_model=TaskTagLink)

    @property
    def tag_ids(self) -> List[str]:
        """Tag ids in a stable order for API responses."""
        return sorted(tag.id for tag in self.tags)
