"""Task schemas."""
from pydantic import Field, field_validator
from datetime import datetime
from typing import Any, List, Optional

from getitdone.models.task import TaskStatus, DEFAULT_PRIORITY
from getitdone.schemas.base import ApiModel, parse_datetime, require_text


def _unique(ids: List[str]) -> List[str]:
    # Tags are a set; keep first occurrence order for readability
    return list(dict.fromkeys(ids))


class TaskCreate(ApiModel):
    """Schema for creating a task."""
    title: str = Field(..., max_length=200)
    description: str = Field("", max_length=5000)
    due_date: Optional[datetime] = None
    priority: int = Field(DEFAULT_PRIORITY, ge=1, le=4)  # 1 = High ... 4 = Low
    status: TaskStatus = TaskStatus.TODO
    project_id: Optional[str] = None
    category_id: Optional[str] = None
    goal_id: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    is_recurring: bool = False
    recurrence_rule: str = Field("", max_length=500)

    @field_validator("title", mode="before")
    @classmethod
    def title_not_blank(cls, value):
        return require_text(value, "title")

    @field_validator("description", "recurrence_rule", mode="before")
    @classmethod
    def none_is_empty(cls, value):
        return "" if value is None else value

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, value):
        return parse_datetime(value, "dueDate")

    @field_validator("tags")
    @classmethod
    def unique_tags(cls, value):
        return _unique(value)


class TaskUpdate(ApiModel):
    """
    Schema for a partial task update.

    Only fields present in the body are applied. ``dueDate``, ``projectId``,
    ``categoryId`` and ``goalId`` accept null to clear them; the other
    fields cannot be null.
    """
    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    due_date: Optional[datetime] = None
    priority: Optional[int] = Field(None, ge=1, le=4)
    status: Optional[TaskStatus] = None
    project_id: Optional[str] = None
    category_id: Optional[str] = None
    goal_id: Optional[str] = None
    tags: Optional[List[str]] = None
    is_recurring: Optional[bool] = None
    recurrence_rule: Optional[str] = Field(None, max_length=500)

    @field_validator("title", mode="before")
    @classmethod
    def title_not_blank(cls, value):
        return require_text(value, "title")

    @field_validator("priority", "status", "tags", "is_recurring", "description", "recurrence_rule")
    @classmethod
    def not_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, value):
        return parse_datetime(value, "dueDate")

    @field_validator("tags")
    @classmethod
    def unique_tags(cls, value):
        return _unique(value) if value is not None else value


class TaskRead(ApiModel):
    """Schema for task API responses."""
    id: str
    title: str
    description: str = ""
    due_date: Optional[datetime] = None
    priority: int = DEFAULT_PRIORITY
    status: TaskStatus = TaskStatus.TODO
    project_id: Optional[str] = None
    category_id: Optional[str] = None
    goal_id: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    is_recurring: bool = False
    recurrence_rule: str = ""
    created_at: datetime
    updated_at: datetime

    @field_validator("tags", mode="before")
    @classmethod
    def tag_ids(cls, value: Any):
        if value is None:
            return []
        return sorted(getattr(tag, "id", tag) for tag in value)


class TaskEnvelope(ApiModel):
    task: TaskRead


class TaskListEnvelope(ApiModel):
    tasks: List[TaskRead]
