"""
Reconciliation and summary API endpoints.

Everything here reads, except /ledger/recalculate which
rewrites balances that disagree with the movement history.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from finance_tracker.models.base import get_db
from finance_tracker.models.enums import MovementType
from finance_tracker.schemas.ledger import (
    CategoryTotal,
    CurrencyBalance,
    IntegrityReport,
    PeriodTotals,
)
from finance_tracker.services.ledger_service import LedgerService
from finance_tracker.services.summary_service import SummaryService
from finance_tracker.store.sql import SqlAlchemyStore

router = APIRouter(tags=["Ledger"])


@router.get("/ledger/integrity", response_model=IntegrityReport)
def check_integrity(db: Session = Depends(get_db)):
    """Compare stored balances with the movement history."""
    return LedgerService(SqlAlchemyStore(db)).check_integrity()


@router.post("/ledger/recalculate", response_model=IntegrityReport)
def recalculate_balances(
    dry_run: bool = False,
    db: Session = Depends(get_db),
):
    """Rewrite inconsistent balances. Returns the report from before the fix."""
    report = LedgerService(SqlAlchemyStore(db)).recalculate_balances(dry_run)
    if not dry_run:
        db.commit()
    return report


@router.get("/summary/balances", response_model=list[CurrencyBalance])
def balances_by_currency(db: Session = Depends(get_db)):
    return SummaryService(SqlAlchemyStore(db)).balances_by_currency()


@router.get("/summary/totals", response_model=PeriodTotals)
def period_totals(
    month: str | None = None,
    movement_type: MovementType | None = None,
    db: Session = Depends(get_db),
):
    return SummaryService(SqlAlchemyStore(db)).period_totals(month, movement_type)


@router.get("/summary/categories", response_model=list[CategoryTotal])
def expenses_by_category(
    month: str | None = None,
    db: Session = Depends(get_db),
):
    return SummaryService(SqlAlchemyStore(db)).expenses_by_category(month)
