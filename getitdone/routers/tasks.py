"""Task router."""
from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import Optional
from datetime import datetime

from getitdone.config import Settings, get_now, get_settings
from getitdone.db.config import get_session
from getitdone.models.task import TaskStatus
from getitdone.schemas.task import (
    TaskCreate,
    TaskEnvelope,
    TaskListEnvelope,
    TaskRead,
    TaskUpdate,
)
from getitdone.services.task_query import TaskQuery, DEFAULT_SORT_BY, DEFAULT_SORT_ORDER
from getitdone.services.task_service import TaskService
from sqlmodel import Session

router = APIRouter(prefix="/tasks", tags=["Tasks"])

TASK_NOT_FOUND = "Task not found"


def get_task_service(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> TaskService:
    """Dependency for getting TaskService instance."""
    return TaskService(session, settings)


@router.get("", response_model=TaskListEnvelope)
def list_tasks(
    service: TaskService = Depends(get_task_service),
    now: datetime = Depends(get_now),
    view: Optional[str] = Query(None, description="overdue, today, thisWeek, upcoming, active, completed"),
    project_id: Optional[str] = Query(None, alias="projectId"),
    category_id: Optional[str] = Query(None, alias="categoryId"),
    goal_id: Optional[str] = Query(None, alias="goalId"),
    status_filter: Optional[TaskStatus] = Query(None, alias="status"),
    priority: Optional[int] = Query(None, ge=1, le=4, description="1 = High ... 4 = Low"),
    tag: Optional[str] = Query(None, description="Tag id"),
    search: Optional[str] = Query(None, description="Case-insensitive match on title or description"),
    sort_by: str = Query(DEFAULT_SORT_BY, alias="sortBy", description="createdAt, dueDate, priority, status"),
    sort_order: str = Query(DEFAULT_SORT_ORDER, alias="sortOrder", description="asc or desc"),
):
    """List tasks with view, filters and sorting."""
    query = TaskQuery(
        view=view,
        project_id=project_id,
        category_id=category_id,
        goal_id=goal_id,
        status=status_filter.value if status_filter else None,
        priority=priority,
        tag=tag,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    tasks = service.list_tasks(query, now)
    return TaskListEnvelope(tasks=[TaskRead.model_validate(t) for t in tasks])


@router.post("", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    service: TaskService = Depends(get_task_service),
):
    """Create a new task."""
    try:
        task = service.create(task_data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return TaskEnvelope(task=TaskRead.model_validate(task))


@router.get("/{task_id}", response_model=TaskEnvelope)
def get_task(
    task_id: str,
    service: TaskService = Depends(get_task_service),
):
    """Get a specific task by ID."""
    task = service.get_by_id(task_id)
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TASK_NOT_FOUND)
    return TaskEnvelope(task=TaskRead.model_validate(task))


@router.patch("/{task_id}", response_model=TaskEnvelope)
def update_task(
    task_id: str,
    task_data: TaskUpdate,
    service: TaskService = Depends(get_task_service),
):
    """Partially update a task; null clears dueDate and the project/category/goal references."""
    try:
        task = service.update(task_id, task_data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TASK_NOT_FOUND)
    return TaskEnvelope(task=TaskRead.model_validate(task))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: str,
    service: TaskService = Depends(get_task_service),
):
    """Delete a task."""
    if not service.delete(task_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TASK_NOT_FOUND)
