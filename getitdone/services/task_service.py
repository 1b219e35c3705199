"""Task service: CRUD and list queries for tasks."""
from sqlmodel import Session, select
from typing import Any, Dict, List, Optional
from datetime import datetime
import logging

from getitdone.config import Settings
from getitdone.models import Category, Goal, Project, Tag, Task
from getitdone.models.base import utcnow
from getitdone.schemas.task import TaskCreate, TaskUpdate
from getitdone.services.task_query import TaskQuery, apply_query

logger = logging.getLogger(__name__)

# Optional single-valued references a task can hold
REFERENCES = {
    "project_id": (Project, "projectId"),
    "category_id": (Category, "categoryId"),
    "goal_id": (Goal, "goalId"),
}


class TaskService:
    """Service class for task CRUD operations and list filtering."""

    def __init__(self, session: Session, settings: Optional[Settings] = None):
        self.session = session
        self.settings = settings or Settings()

    def _check_reference(self, field: str, value: Optional[str]) -> None:
        if value is None:
            return
        model, label = REFERENCES[field]
        if self.session.get(model, value) is None:
            raise ValueError(f"{label} does not reference an existing {model.__name__.lower()}")

    def _load_tags(self, tag_ids: List[str]) -> List[Tag]:
        tags = []
        for tag_id in tag_ids:
            tag = self.session.get(Tag, tag_id)
            if tag is None:
                raise ValueError(f"tags references an unknown tag: {tag_id}")
            tags.append(tag)
        return tags

    def create(self, data: TaskCreate) -> Task:
        """Create a new task; server assigns id and timestamps."""
        for field in REFERENCES:
            self._check_reference(field, getattr(data, field))
        tags = self._load_tags(data.tags)

        now = utcnow()
        task = Task(
            title=data.title,
            description=data.description,
            due_date=data.due_date,
            priority=data.priority,
            status=data.status.value,
            project_id=data.project_id,
            category_id=data.category_id,
            goal_id=data.goal_id,
            is_recurring=data.is_recurring,
            recurrence_rule=data.recurrence_rule,
            created_at=now,
            updated_at=now,
        )
        task.tags = tags

        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        logger.info(f"Created task {task.id}")
        return task

    def get_by_id(self, task_id: str) -> Optional[Task]:
        """Get a specific task by ID."""
        return self.session.get(Task, task_id)

    def list_all(self) -> List[Task]:
        """All tasks in creation order."""
        statement = select(Task).order_by(Task.created_at.asc())
        return list(self.session.exec(statement).all())

    def list_tasks(self, query: TaskQuery, now: datetime) -> List[Task]:
        """Tasks matching ``query``, sorted as it requests."""
        return apply_query(
            self.list_all(),
            query,
            now,
            week_start=self.settings.week_start,
            upcoming_weeks=self.settings.upcoming_weeks,
        )

    def update(self, task_id: str, data: TaskUpdate) -> Optional[Task]:
        """Apply the fields present in ``data``; returns None if the task does not exist."""
        task = self.get_by_id(task_id)
        if not task:
            return None

        changes: Dict[str, Any] = data.model_dump(exclude_unset=True)
        for field in REFERENCES:
            if field in changes:
                self._check_reference(field, changes[field])
        if "tags" in changes:
            task.tags = self._load_tags(changes.pop("tags"))
        if "status" in changes:
            changes["status"] = getattr(changes["status"], "value", changes["status"])

        for field, value in changes.items():
            setattr(task, field, value)

        task.updated_at = utcnow()
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        logger.info(f"Updated task {task.id} fields={sorted(data.model_fields_set)}")
        return task

    def delete(self, task_id: str) -> bool:
        """Delete a task."""
        task = self.get_by_id(task_id)
        if not task:
            return False

        self.session.delete(task)
        self.session.commit()
        logger.info(f"Deleted task {task_id}")
        return True
