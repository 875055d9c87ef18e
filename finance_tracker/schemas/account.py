"""
Pydantic schemas for account operations.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from finance_tracker.models.enums import AccountType, Currency


class AccountCreate(BaseModel):
    """Request to create an account with its starting balance."""
    name: str = Field(min_length=1, max_length=100)
    account_type: AccountType
    currency: Currency = Currency.LOCAL
    balance: Decimal = Field(default=Decimal("0"), decimal_places=2)

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class AccountUpdate(BaseModel):
    """
    Partial account update.

    Setting balance is a manual correction: the account is
    re-seeded at the new value rather than given a movement.
    """
    name: str | None = Field(default=None, min_length=1, max_length=100)
    account_type: AccountType | None = None
    currency: Currency | None = None
    balance: Decimal | None = Field(default=None, decimal_places=2)

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class AccountResponse(BaseModel):
    id: str
    name: str
    account_type: AccountType
    currency: Currency
    balance: Decimal
    created_at: datetime

    model_config = {"from_attributes": True}
