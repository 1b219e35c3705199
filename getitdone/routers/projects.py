"""Projects router."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from getitdone.db.config import get_session
from getitdone.schemas.catalog import (
    ProjectCreate,
    ProjectEnvelope,
    ProjectListEnvelope,
    ProjectRead,
    ProjectUpdate,
)
from getitdone.services.catalog_service import ProjectService

router = APIRouter(prefix="/projects", tags=["Projects"])

NOT_FOUND = "Project not found"


def get_project_service(session: Session = Depends(get_session)) -> ProjectService:
    """Dependency for getting ProjectService instance."""
    return ProjectService(session)


@router.get("", response_model=ProjectListEnvelope)
def list_projects(service: ProjectService = Depends(get_project_service)):
    """List projects (newest first)."""
    return ProjectListEnvelope(projects=[ProjectRead.model_validate(i) for i in service.list_items()])


@router.post("", response_model=ProjectEnvelope, status_code=status.HTTP_201_CREATED)
def create_project(data: ProjectCreate, service: ProjectService = Depends(get_project_service)):
    """Create a project."""
    item = service.create(data)
    return ProjectEnvelope(project=ProjectRead.model_validate(item))


@router.get("/{item_id}", response_model=ProjectEnvelope)
def get_project(item_id: str, service: ProjectService = Depends(get_project_service)):
    """Get a project by ID."""
    item = service.get_by_id(item_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return ProjectEnvelope(project=ProjectRead.model_validate(item))


@router.patch("/{item_id}", response_model=ProjectEnvelope)
def update_project(
    item_id: str,
    data: ProjectUpdate,
    service: ProjectService = Depends(get_project_service),
):
    """Partially update a project."""
    item = service.update(item_id, data)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return ProjectEnvelope(project=ProjectRead.model_validate(item))


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(item_id: str, service: ProjectService = Depends(get_project_service)):
    """Delete a project. Its tasks are kept and lose the project reference."""
    if not service.delete(item_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
