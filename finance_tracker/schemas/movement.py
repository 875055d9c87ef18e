"""
Pydantic schemas for movements, transfers and installment plans.

Amounts are always positive. The direction of a movement is
carried by movement_type, never by the sign of the amount.
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field

from finance_tracker.models.enums import MovementType


# --- Request Schemas ---

class MovementCreate(BaseModel):
    """A single income or expense on one account."""
    movement_type: MovementType
    date: dt.date
    amount: Decimal = Field(gt=0, decimal_places=2)
    description: str = Field(default="", max_length=100)
    account_id: str
    subcategory_id: str | None = None


class MovementUpdate(BaseModel):
    """
    Partial movement edit.

    Type and account are fixed once a movement exists. Only
    fields present in the request are applied, so sending
    subcategory_id=None clears the category while leaving it
    out keeps the current one.
    """
    date: dt.date | None = None
    amount: Decimal | None = Field(default=None, gt=0, decimal_places=2)
    description: str | None = Field(default=None, max_length=100)
    subcategory_id: str | None = None


class TransferRequest(BaseModel):
    from_account_id: str
    to_account_id: str
    amount: Decimal = Field(gt=0, decimal_places=2)
    date: dt.date
    description: str = Field(default="", max_length=100)


class InstallmentPurchaseRequest(BaseModel):
    """
    A purchase paid in monthly installments on a card.

    With one installment or none this is posted as an ordinary expense
    for the full amount and no plan is recorded.
    """
    movement_type: MovementType = MovementType.EXPENSE
    account_id: str
    subcategory_id: str | None = None
    total_amount: Decimal = Field(gt=0, decimal_places=2)
    number_of_installments: int = Field(ge=0, le=360)
    start_date: dt.date
    description: str = Field(default="", max_length=100)


# --- Response Schemas ---

class MovementResponse(BaseModel):
    id: str
    movement_type: MovementType
    date: dt.date
    amount: Decimal
    description: str
    account_id: str
    subcategory_id: str | None
    installment_plan_id: str | None
    installment_number: int | None
    related_transfer_id: str | None
    created_at: dt.datetime

    model_config = {"from_attributes": True}


class TransferResponse(BaseModel):
    related_transfer_id: str
    expense_movement: MovementResponse
    income_movement: MovementResponse

    model_config = {"from_attributes": True}


class InstallmentPlanResponse(BaseModel):
    id: str
    start_date: dt.date
    installment_amount: Decimal
    number_of_installments: int
    description: str
    account_id: str
    created_at: dt.datetime

    model_config = {"from_attributes": True}


class InstallmentPurchaseResponse(BaseModel):
    plan: InstallmentPlanResponse | None
    movements: list[MovementResponse]

    model_config = {"from_attributes": True}


class MovementDeletionResponse(BaseModel):
    movement: MovementResponse
    balance_reversed: bool
    orphaned_transfer_leg_id: str | None

    model_config = {"from_attributes": True}
