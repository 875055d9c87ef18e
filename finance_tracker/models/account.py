"""
Account model.

An account holds money: a wallet, a card, a foreign currency
savings box. Its balance is a cached running total kept in
step with the movement history by the LedgerService.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, Numeric, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from finance_tracker.ids import new_id
from finance_tracker.models.base import Base
from finance_tracker.models.enums import AccountType, Currency


class Account(Base):
    """
    A money holder with a cached balance.

    opening_balance is the seed the balance started from. The
    invariant checked by LedgerService.check_integrity is

        balance == opening_balance + sum(income) - sum(expense)
    """

    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=new_id
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    account_type: Mapped[AccountType] = mapped_column(
        SAEnum(
            AccountType,
            name="account_type_enum",
            create_constraint=True,
        ),
        nullable=False,
    )
    currency: Mapped[Currency] = mapped_column(
        SAEnum(Currency, name="currency_enum", create_constraint=True),
        nullable=False,
        default=Currency.LOCAL,
    )
    balance: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    opening_balance: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    def __repr__(self) -> str:
        return (
            f"<Account {self.name} "
            f"{self.account_type.value} {self.balance}>"
        )
