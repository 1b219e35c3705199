"""SQLModel tables for the get IT done API."""
from getitdone.models.base import new_id, utcnow
from getitdone.models.task_tag import TaskTagLink
from getitdone.models.project import Project
from getitdone.models.category import Category
from getitdone.models.goal import Goal
from getitdone.models.tag import Tag
from getitdone.models.task import Task, TaskStatus, PRIORITY_LABELS

__all__ = [
    "new_id",
    "utcnow",
    "TaskTagLink",
    "Project",
    "Category",
    "Goal",
    "Tag",
    "Task",
    "TaskStatus",
    "PRIORITY_LABELS",
]
