"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from finance_tracker.models.base import Base
from finance_tracker.models.enums import (
    AccountType,
    Currency,
    MovementType,
)
from finance_tracker.models.account import Account
from finance_tracker.models.category import Category, Subcategory
from finance_tracker.models.installment_plan import InstallmentPlan
from finance_tracker.models.movement import Movement

__all__ = [
    "Base",
    "AccountType",
    "Currency",
    "MovementType",
    "Account",
    "Category",
    "Subcategory",
    "InstallmentPlan",
    "Movement",
]
