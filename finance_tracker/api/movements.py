"""
Movement, transfer and installment plan API endpoints.

The API layer is thin: it commits when a ledger operation
returns and rolls back when it raises, so a composite
operation is saved completely or not at all.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from finance_tracker.api.errors import status_for
from finance_tracker.models.base import get_db
from finance_tracker.models.enums import MovementType
from finance_tracker.schemas.movement import (
    InstallmentPlanResponse,
    InstallmentPurchaseRequest,
    InstallmentPurchaseResponse,
    MovementCreate,
    MovementDeletionResponse,
    MovementResponse,
    MovementUpdate,
    TransferRequest,
    TransferResponse,
)
from finance_tracker.services.ledger_service import LedgerService
from finance_tracker.store.sql import SqlAlchemyStore

router = APIRouter(tags=["Movements"])


# --- Movement Endpoints ---

@router.post("/movements", response_model=MovementResponse, status_code=201)
def post_movement(
    request: MovementCreate,
    db: Session = Depends(get_db),
):
    """Record an income or expense and update the account balance."""
    service = LedgerService(SqlAlchemyStore(db))
    try:
        movement = service.post_movement(request)
        db.commit()
        return movement
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status_for(e), detail=str(e))


@router.get("/movements", response_model=list[MovementResponse])
def list_movements(
    account_id: str | None = None,
    month: str | None = None,
    movement_type: MovementType | None = None,
    category_id: str | None = None,
    db: Session = Depends(get_db),
):
    """
    List movements newest first. month is YYYY-MM.

    category_id also matches movements filed under its
    subcategories.
    """
    service = LedgerService(SqlAlchemyStore(db))
    return service.list_movements(account_id, month, movement_type, category_id)


@router.get("/movements/{movement_id}", response_model=MovementResponse)
def get_movement(
    movement_id: str,
    db: Session = Depends(get_db),
):
    service = LedgerService(SqlAlchemyStore(db))
    try:
        return service.get_movement(movement_id)
    except ValueError as e:
        raise HTTPException(status_code=status_for(e), detail=str(e))


@router.patch("/movements/{movement_id}", response_model=MovementResponse)
def edit_movement(
    movement_id: str,
    request: MovementUpdate,
    db: Session = Depends(get_db),
):
    """Edit date, amount, description or category of a movement."""
    service = LedgerService(SqlAlchemyStore(db))
    try:
        movement = service.edit_movement(movement_id, request)
        db.commit()
        return movement
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status_for(e), detail=str(e))


@router.delete("/movements/{movement_id}", response_model=MovementDeletionResponse)
def delete_movement(
    movement_id: str,
    db: Session = Depends(get_db),
):
    """
    Delete a movement and reverse its balance effect.

    Installments are not reversed. When one transfer leg is
    deleted the response names the leg left behind.
    """
    service = LedgerService(SqlAlchemyStore(db))
    try:
        deletion = service.delete_movement(movement_id)
        # Serialize before commit: the row is gone afterwards
        response = MovementDeletionResponse.model_validate(deletion)
        db.commit()
        return response
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status_for(e), detail=str(e))


# --- Transfer Endpoints ---

@router.post("/transfers", response_model=TransferResponse, status_code=201)
def post_transfer(
    request: TransferRequest,
    db: Session = Depends(get_db),
):
    """Move money between two different accounts."""
    service = LedgerService(SqlAlchemyStore(db))
    try:
        transfer = service.post_transfer(request)
        response = TransferResponse.model_validate(transfer)
        db.commit()
        return response
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status_for(e), detail=str(e))


@router.delete("/transfers/{transfer_id}", response_model=list[MovementResponse])
def delete_transfer(
    transfer_id: str,
    db: Session = Depends(get_db),
):
    """Delete both legs of a transfer and restore both balances."""
    service = LedgerService(SqlAlchemyStore(db))
    try:
        legs = service.delete_transfer(transfer_id)
        response = [MovementResponse.model_validate(leg) for leg in legs]
        db.commit()
        return response
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status_for(e), detail=str(e))


# --- Installment Plan Endpoints ---

@router.post(
    "/installment-plans",
    response_model=InstallmentPurchaseResponse,
    status_code=201,
)
def post_installment_plan(
    request: InstallmentPurchaseRequest,
    db: Session = Depends(get_db),
):
    """Split a card expense into monthly installments."""
    service = LedgerService(SqlAlchemyStore(db))
    try:
        posting = service.post_installment_plan(request)
        response = InstallmentPurchaseResponse.model_validate(posting)
        db.commit()
        return response
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status_for(e), detail=str(e))


@router.get("/installment-plans", response_model=list[InstallmentPlanResponse])
def list_installment_plans(
    account_id: str | None = None,
    db: Session = Depends(get_db),
):
    service = LedgerService(SqlAlchemyStore(db))
    return service.list_installment_plans(account_id)


@router.get("/installment-plans/{plan_id}", response_model=InstallmentPlanResponse)
def get_installment_plan(
    plan_id: str,
    db: Session = Depends(get_db),
):
    service = LedgerService(SqlAlchemyStore(db))
    try:
        return service.get_installment_plan(plan_id)
    except ValueError as e:
        raise HTTPException(status_code=status_for(e), detail=str(e))


@router.delete(
    "/installment-plans/{plan_id}",
    response_model=list[MovementResponse],
)
def delete_installment_plan(
    plan_id: str,
    db: Session = Depends(get_db),
):
    """Delete a plan and its installments, crediting the card back."""
    service = LedgerService(SqlAlchemyStore(db))
    try:
        movements = service.delete_installment_plan(plan_id)
        response = [MovementResponse.model_validate(m) for m in movements]
        db.commit()
        return response
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status_for(e), detail=str(e))
