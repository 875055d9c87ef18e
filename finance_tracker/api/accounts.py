"""
Account API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from finance_tracker.api.errors import status_for
from finance_tracker.models.base import get_db
from finance_tracker.schemas.account import (
    AccountCreate,
    AccountResponse,
    AccountUpdate,
)
from finance_tracker.services.account_service import AccountService
from finance_tracker.store.sql import SqlAlchemyStore

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    request: AccountCreate,
    db: Session = Depends(get_db),
):
    """Create an account with its starting balance."""
    service = AccountService(SqlAlchemyStore(db))
    try:
        account = service.create_account(request)
        db.commit()
        return account
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status_for(e), detail=str(e))


@router.get("", response_model=list[AccountResponse])
def list_accounts(db: Session = Depends(get_db)):
    return AccountService(SqlAlchemyStore(db)).list_accounts()


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: str,
    db: Session = Depends(get_db),
):
    service = AccountService(SqlAlchemyStore(db))
    try:
        return service.get_account(account_id)
    except ValueError as e:
        raise HTTPException(status_code=status_for(e), detail=str(e))


@router.patch("/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: str,
    request: AccountUpdate,
    db: Session = Depends(get_db),
):
    """
    Edit an account.

    A new balance re-seeds the account instead of posting a
    movement.
    """
    service = AccountService(SqlAlchemyStore(db))
    try:
        account = service.update_account(account_id, request)
        db.commit()
        return account
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status_for(e), detail=str(e))


@router.delete("/{account_id}", status_code=204)
def delete_account(
    account_id: str,
    db: Session = Depends(get_db),
):
    """Delete an account. Refused with 409 while movements use it."""
    service = AccountService(SqlAlchemyStore(db))
    try:
        service.delete_account(account_id)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status_for(e), detail=str(e))
    return Response(status_code=204)
