"""Tags router."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from getitdone.db.config import get_session
from getitdone.schemas.catalog import (
    TagCreate,
    TagEnvelope,
    TagListEnvelope,
    TagRead,
    TagUpdate,
)
from getitdone.services.catalog_service import TagService

router = APIRouter(prefix="/tags", tags=["Tags"])

NOT_FOUND = "Tag not found"


def get_tag_service(session: Session = Depends(get_session)) -> TagService:
    """Dependency for getting TagService instance."""
    return TagService(session)


@router.get("", response_model=TagListEnvelope)
def list_tags(service: TagService = Depends(get_tag_service)):
    """List tags (newest first)."""
    return TagListEnvelope(tags=[TagRead.model_validate(i) for i in service.list_items()])


@router.post("", response_model=TagEnvelope, status_code=status.HTTP_201_CREATED)
def create_tag(data: TagCreate, service: TagService = Depends(get_tag_service)):
    """Create a tag."""
    item = service.create(data)
    return TagEnvelope(tag=TagRead.model_validate(item))


@router.get("/{item_id}", response_model=TagEnvelope)
def get_tag(item_id: str, service: TagService = Depends(get_tag_service)):
    """Get a tag by ID."""
    item = service.get_by_id(item_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return TagEnvelope(tag=TagRead.model_validate(item))


@router.patch("/{item_id}", response_model=TagEnvelope)
def update_tag(
    item_id: str,
    data: TagUpdate,
    service: TagService = Depends(get_tag_service),
):
    """Partially update a tag."""
    item = service.update(item_id, data)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return TagEnvelope(tag=TagRead.model_validate(item))


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tag(item_id: str, service: TagService = Depends(get_tag_service)):
    """Delete a tag. The tag is removed from every task that carried it."""
    if not service.delete(item_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
