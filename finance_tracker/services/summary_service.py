"""
Read-only summaries over accounts and movements.

Nothing here writes. Figures are computed from whatever the
store holds at the moment of the call.
"""

from decimal import Decimal

from finance_tracker.dates import month_key
from finance_tracker.models.enums import Currency, MovementType
from finance_tracker.schemas.ledger import CategoryTotal, CurrencyBalance, PeriodTotals
from finance_tracker.services.category_service import CategoryService
from finance_tracker.store.base import RecordStore

UNCATEGORIZED = "Uncategorized"


class SummaryService:

    def __init__(self, store: RecordStore, categories: CategoryService | None = None):
        self.store = store
        self.categories = categories or CategoryService(store)

    def _movements(self, month: str | None):
        movements = self.store.movements.list_all()
        if month is None:
            return movements
        return [m for m in movements if month_key(m.date) == month]

    def balances_by_currency(self) -> list[CurrencyBalance]:
        """Total balance of all accounts, per currency."""
        totals = {currency: Decimal("0") for currency in Currency}
        for account in self.store.accounts.list_all():
            totals[account.currency] += account.balance
        return [
            CurrencyBalance(currency=currency, total=total)
            for currency, total in totals.items()
        ]

    def period_totals(
        self,
        month: str | None = None,
        movement_type: MovementType | None = None,
    ) -> PeriodTotals:
        """
        Income and expense totals for one month, or for all time.

        Filtering by movement_type zeroes the other side.
        """
        income = Decimal("0")
        expense = Decimal("0")
        for movement in self._movements(month):
            if movement_type is not None and movement.movement_type != movement_type:
                continue
            if movement.movement_type == MovementType.INCOME:
                income += movement.amount
            else:
                expense += movement.amount

        return PeriodTotals(
            month=month,
            total_income=income,
            total_expense=expense,
            net=income - expense,
        )

    def expenses_by_category(self, month: str | None = None) -> list[CategoryTotal]:
        """
        Expense totals grouped by top-level category, largest first.

        Subcategory references roll up into their category.
        Movements without a resolvable category are grouped as
        Uncategorized.
        """
        totals: dict[str | None, Decimal] = {}
        names: dict[str | None, str] = {None: UNCATEGORIZED}

        for movement in self._movements(month):
            if movement.movement_type != MovementType.EXPENSE:
                continue
            key = None
            if movement.subcategory_id is not None:
                resolved = self.categories.lookup_category(movement.subcategory_id)
                if resolved is not None:
                    category = resolved[0]
                    key = category.id
                    names[key] = category.name
            totals[key] = totals.get(key, Decimal("0")) + movement.amount

        rows = [
            CategoryTotal(category_id=key, category_name=names[key], total=total)
            for key, total in totals.items()
        ]
        return sorted(rows, key=lambda row: row.total, reverse=True)
