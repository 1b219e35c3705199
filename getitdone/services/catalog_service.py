"""
Catalog service: CRUD for the entities a task can reference.

Projects, categories, goals and tags share the same lifecycle. Deleting one
never deletes tasks; the reference is detached instead (task column set to
NULL, or the tag removed from each task's tag set).
"""
from sqlmodel import Session, SQLModel, select
from sqlalchemy import update as sa_update
from typing import Any, Dict, List, Optional, Type
import logging

from pydantic import BaseModel

from getitdone.models import Category, Goal, Project, Tag, Task
from getitdone.models.base import utcnow

logger = logging.getLogger(__name__)


class CatalogService:
    """CRUD for one catalog model."""

    model: Type[SQLModel]
    task_column: Optional[str] = None  # Task column holding a reference to this model

    def __init__(self, session: Session):
        self.session = session

    def order_by(self) -> List[Any]:
        return [self.model.created_at.desc()]

    def list_items(self) -> List[SQLModel]:
        statement = select(self.model).order_by(*self.order_by())
        return list(self.session.exec(statement).all())

    def get_by_id(self, item_id: str) -> Optional[SQLModel]:
        return self.session.get(self.model, item_id)

    def create(self, data: BaseModel) -> SQLModel:
        now = utcnow()
        item = self.model(**data.model_dump(), created_at=now, updated_at=now)
        self.session.add(item)
        self.session.commit()
        self.session.refresh(item)
        logger.info(f"Created {self.model.__name__.lower()} {item.id}")
        return item

    def update(self, item_id: str, data: BaseModel) -> Optional[SQLModel]:
        item = self.get_by_id(item_id)
        if not item:
            return None

        changes: Dict[str, Any] = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(item, field, value)
        item.updated_at = utcnow()

        self.session.add(item)
        self.session.commit()
        self.session.refresh(item)
        return item

    def detach(self, item_id: str) -> int:
        """Remove references to ``item_id`` from tasks; returns the number of tasks touched."""
        column = getattr(Task, self.task_column)
        result = self.session.exec(
            sa_update(Task).where(column == item_id).values({self.task_column: None})
        )
        return result.rowcount or 0

    def delete(self, item_id: str) -> bool:
        item = self.get_by_id(item_id)
        if not item:
            return False

        detached = self.detach(item_id)
        self.session.delete(item)
        self.session.commit()
        logger.info(
            f"Deleted {self.model.__name__.lower()} {item_id}, detached from {detached} task(s)"
        )
        return True


class ProjectService(CatalogService):
    model = Project
    task_column = "project_id"


class CategoryService(CatalogService):
    model = Category
    task_column = "category_id"

    def order_by(self) -> List[Any]:
        return [Category.name.asc()]


class GoalService(CatalogService):
    model = Goal
    task_column = "goal_id"


class TagService(CatalogService):
    model = Tag

    def detach(self, item_id: str) -> int:
        # Clearing the collection removes the link rows on flush
        tag = self.get_by_id(item_id)
        count = len(tag.tasks)
        tag.tasks = []
        return count
