"""
Pydantic schemas for reconciliation and summaries.
"""

from decimal import Decimal

from pydantic import BaseModel

from finance_tracker.models.enums import Currency


class AccountIntegrity(BaseModel):
    """Stored balance of one account against its movement history."""
    account_id: str
    account_name: str
    stored_balance: Decimal
    expected_balance: Decimal
    difference: Decimal

    @property
    def is_consistent(self) -> bool:
        return self.difference == 0


class IntegrityReport(BaseModel):
    is_balanced: bool
    accounts: list[AccountIntegrity]


class CurrencyBalance(BaseModel):
    currency: Currency
    total: Decimal


class PeriodTotals(BaseModel):
    month: str | None
    total_income: Decimal
    total_expense: Decimal
    net: Decimal


class CategoryTotal(BaseModel):
    category_id: str | None
    category_name: str
    total: Decimal
