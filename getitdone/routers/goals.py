"""Goals router."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from getitdone.db.config import get_session
from getitdone.schemas.catalog import (
    GoalCreate,
    GoalEnvelope,
    GoalListEnvelope,
    GoalRead,
    GoalUpdate,
)
from getitdone.services.catalog_service import GoalService

router = APIRouter(prefix="/goals", tags=["Goals"])

NOT_FOUND = "Goal not found"


def get_goal_service(session: Session = Depends(get_session)) -> GoalService:
    """Dependency for getting GoalService instance."""
    return GoalService(session)


@router.get("", response_model=GoalListEnvelope)
def list_goals(service: GoalService = Depends(get_goal_service)):
    """List goals (newest first)."""
    return GoalListEnvelope(goals=[GoalRead.model_validate(i) for i in service.list_items()])


@router.post("", response_model=GoalEnvelope, status_code=status.HTTP_201_CREATED)
def create_goal(data: GoalCreate, service: GoalService = Depends(get_goal_service)):
    """Create a goal."""
    item = service.create(data)
    return GoalEnvelope(goal=GoalRead.model_validate(item))


@router.get("/{item_id}", response_model=GoalEnvelope)
def get_goal(item_id: str, service: GoalService = Depends(get_goal_service)):
    """Get a goal by ID."""
    item = service.get_by_id(item_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return GoalEnvelope(goal=GoalRead.model_validate(item))


@router.patch("/{item_id}", response_model=GoalEnvelope)
def update_goal(
    item_id: str,
    data: GoalUpdate,
    service: GoalService = Depends(get_goal_service),
):
    """Partially update a goal."""
    item = service.update(item_id, data)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return GoalEnvelope(goal=GoalRead.model_validate(item))


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_goal(item_id: str, service: GoalService = Depends(get_goal_service)):
    """Delete a goal. Its tasks are kept and lose the goal reference."""
    if not service.delete(item_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
