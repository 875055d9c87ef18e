"""
Installment plan model.

Descriptive parent of a group of installment movements.
The plan itself never touches a balance; its movements do.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import String, Date, DateTime, Integer, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from finance_tracker.ids import new_id
from finance_tracker.models.base import Base


class InstallmentPlan(Base):
    __tablename__ = "installment_plans"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=new_id
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    installment_amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False
    )
    number_of_installments: Mapped[int] = mapped_column(
        Integer, nullable=False
    )
    description: Mapped[str] = mapped_column(
        String(255), nullable=False, default=""
    )
    account_id: Mapped[str] = mapped_column(
        ForeignKey("accounts.id"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    @property
    def total_debited(self) -> Decimal:
        """What the plan took from the card when it was created."""
        return self.installment_amount * self.number_of_installments

    def __repr__(self) -> str:
        return (
            f"<InstallmentPlan {self.number_of_installments} x "
            f"{self.installment_amount}>"
        )
