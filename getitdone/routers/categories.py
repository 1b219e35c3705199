"""Categories router."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from getitdone.db.config import get_session
from getitdone.schemas.catalog import (
    CategoryCreate,
    CategoryEnvelope,
    CategoryListEnvelope,
    CategoryRead,
    CategoryUpdate,
)
from getitdone.services.catalog_service import CategoryService

router = APIRouter(prefix="/categories", tags=["Categories"])

NOT_FOUND = "Category not found"


def get_category_service(session: Session = Depends(get_session)) -> CategoryService:
    """Dependency for getting CategoryService instance."""
    return CategoryService(session)


@router.get("", response_model=CategoryListEnvelope)
def list_categories(service: CategoryService = Depends(get_category_service)):
    """List categories (by name)."""
    return CategoryListEnvelope(categories=[CategoryRead.model_validate(i) for i in service.list_items()])


@router.post("", response_model=CategoryEnvelope, status_code=status.HTTP_201_CREATED)
def create_category(data: CategoryCreate, service: CategoryService = Depends(get_category_service)):
    """Create a category."""
    item = service.create(data)
    return CategoryEnvelope(category=CategoryRead.model_validate(item))


@router.get("/{item_id}", response_model=CategoryEnvelope)
def get_category(item_id: str, service: CategoryService = Depends(get_category_service)):
    """Get a category by ID."""
    item = service.get_by_id(item_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return CategoryEnvelope(category=CategoryRead.model_validate(item))


@router.patch("/{item_id}", response_model=CategoryEnvelope)
def update_category(
    item_id: str,
    data: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
):
    """Partially update a category."""
    item = service.update(item_id, data)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return CategoryEnvelope(category=CategoryRead.model_validate(item))


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(item_id: str, service: CategoryService = Depends(get_category_service)):
    """Delete a category. Its tasks are kept and become uncategorized."""
    if not service.delete(item_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
