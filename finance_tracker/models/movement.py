"""
Movement model.

A movement is a single dated income or expense against one
account. Transfers and installment plans are groups of
ordinary movements linked by a shared id.
"""

import datetime as dt
from decimal import Decimal

from sqlalchemy import (
    String, Date, DateTime, Integer, Numeric, ForeignKey,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column

from finance_tracker.ids import new_id
from finance_tracker.models.base import Base
from finance_tracker.models.enums import MovementType


class Movement(Base):
    """
    One leg of money moving in or out of an account.

    subcategory_id holds a category reference. It may point at
    a Subcategory or directly at a Category, so it carries no
    foreign key; CategoryService.resolve_category decides which.
    """

    __tablename__ = "movements"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=new_id
    )
    movement_type: Mapped[MovementType] = mapped_column(
        SAEnum(
            MovementType,
            name="movement_type_enum",
            create_constraint=True,
        ),
        nullable=False,
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False
    )
    description: Mapped[str] = mapped_column(
        String(255), nullable=False, default=""
    )
    account_id: Mapped[str] = mapped_column(
        ForeignKey("accounts.id"), nullable=False, index=True
    )
    subcategory_id: Mapped[str | None] = mapped_column(
        String(36), nullable=True, index=True
    )
    installment_plan_id: Mapped[str | None] = mapped_column(
        ForeignKey("installment_plans.id"), nullable=True, index=True
    )
    installment_number: Mapped[int | None] = mapped_column(
        Integer, nullable=True
    )
    related_transfer_id: Mapped[str | None] = mapped_column(
        String(36), nullable=True, index=True
    )
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, default=dt.datetime.utcnow
    )

    @property
    def is_standalone(self) -> bool:
        """True for movements that are neither a transfer leg nor an installment."""
        return self.installment_plan_id is None and self.related_transfer_id is None

    @property
    def signed_amount(self) -> Decimal:
        """The effect this movement has on its account balance."""
        if self.movement_type == MovementType.INCOME:
            return self.amount
        return -self.amount

    def __repr__(self) -> str:
        return (
            f"<Movement {self.movement_type.value} "
            f"{self.amount} on {self.date}>"
        )
