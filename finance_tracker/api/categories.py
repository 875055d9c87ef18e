"""
Category and subcategory API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from finance_tracker.api.errors import status_for
from finance_tracker.models.base import get_db
from finance_tracker.schemas.category import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    SubcategoryCreate,
    SubcategoryResponse,
    SubcategoryUpdate,
)
from finance_tracker.services.category_service import CategoryService
from finance_tracker.store.sql import SqlAlchemyStore

router = APIRouter(tags=["Categories"])


# --- Category Endpoints ---

@router.post("/categories", response_model=CategoryResponse, status_code=201)
def create_category(
    request: CategoryCreate,
    db: Session = Depends(get_db),
):
    service = CategoryService(SqlAlchemyStore(db))
    try:
        category = service.create_category(request)
        db.commit()
        return category
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status_for(e), detail=str(e))


@router.get("/categories", response_model=list[CategoryResponse])
def list_categories(
    selectable: bool = False,
    db: Session = Depends(get_db),
):
    """List categories. selectable=true hides the transfers category."""
    service = CategoryService(SqlAlchemyStore(db))
    return service.list_categories(include_reserved=not selectable)


@router.put("/categories/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    request: CategoryUpdate,
    db: Session = Depends(get_db),
):
    service = CategoryService(SqlAlchemyStore(db))
    try:
        category = service.update_category(category_id, request)
        db.commit()
        return category
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status_for(e), detail=str(e))


@router.delete("/categories/{category_id}", status_code=204)
def delete_category(
    category_id: str,
    db: Session = Depends(get_db),
):
    """Delete a category and its subcategories. 409 while movements use them."""
    service = CategoryService(SqlAlchemyStore(db))
    try:
        service.delete_category(category_id)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status_for(e), detail=str(e))
    return Response(status_code=204)


# --- Subcategory Endpoints ---

@router.post("/subcategories", response_model=SubcategoryResponse, status_code=201)
def create_subcategory(
    request: SubcategoryCreate,
    db: Session = Depends(get_db),
):
    service = CategoryService(SqlAlchemyStore(db))
    try:
        subcategory = service.create_subcategory(request)
        db.commit()
        return subcategory
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status_for(e), detail=str(e))


@router.get("/subcategories", response_model=list[SubcategoryResponse])
def list_subcategories(
    category_id: str | None = None,
    db: Session = Depends(get_db),
):
    service = CategoryService(SqlAlchemyStore(db))
    return service.list_subcategories(category_id)


@router.patch("/subcategories/{subcategory_id}", response_model=SubcategoryResponse)
def update_subcategory(
    subcategory_id: str,
    request: SubcategoryUpdate,
    db: Session = Depends(get_db),
):
    service = CategoryService(SqlAlchemyStore(db))
    try:
        subcategory = service.update_subcategory(subcategory_id, request)
        db.commit()
        return subcategory
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status_for(e), detail=str(e))


@router.delete("/subcategories/{subcategory_id}", status_code=204)
def delete_subcategory(
    subcategory_id: str,
    db: Session = Depends(get_db),
):
    service = CategoryService(SqlAlchemyStore(db))
    try:
        service.delete_subcategory(subcategory_id)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status_for(e), detail=str(e))
    return Response(status_code=204)
