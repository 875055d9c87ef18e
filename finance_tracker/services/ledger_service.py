"""
Ledger service: the only code that moves money between balances.

Every account carries a cached balance. This service keeps it
equal to the opening balance plus income minus expense over the
movements currently stored for that account:

1. Single movements adjust their account once
2. Transfers write two legs, then adjust both accounts
3. Installment plans write one movement per month, then debit
   the card for all of them at once
4. Edits apply the difference between old and new amount
5. Deletes reverse what the movement did

Each operation validates everything before its first write. The
store calls are not grouped into a transaction here; when a
later write fails, the earlier ones stay and PartialWriteError
says which. A caller holding a database session rolls back.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from finance_tracker.dates import add_calendar_months, month_key
from finance_tracker.exceptions import (
    InvalidRequestError,
    NotFoundError,
    PartialWriteError,
)
from finance_tracker.ids import new_id
from finance_tracker.models.account import Account
from finance_tracker.models.enums import AccountType, MovementType
from finance_tracker.models.installment_plan import InstallmentPlan
from finance_tracker.models.movement import Movement
from finance_tracker.schemas.ledger import AccountIntegrity, IntegrityReport
from finance_tracker.schemas.movement import (
    InstallmentPurchaseRequest,
    MovementCreate,
    MovementUpdate,
    TransferRequest,
)
from finance_tracker.services.category_service import CategoryService
from finance_tracker.store.base import RecordStore

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

DEFAULT_DESCRIPTIONS = {
    MovementType.INCOME: "Income",
    MovementType.EXPENSE: "Expense",
}
DEFAULT_INSTALLMENT_DESCRIPTION = "Installment purchase"
TRANSFER_OUT_DESCRIPTION = "Transfer to {account}"
TRANSFER_IN_DESCRIPTION = "Transfer from {account}"
INSTALLMENT_DESCRIPTION = "{base} (Cuota {number}/{total})"


@dataclass
class Transfer:
    related_transfer_id: str
    expense_movement: Movement
    income_movement: Movement


@dataclass
class InstallmentPosting:
    """Result of an installment purchase. plan is None for a single payment."""
    plan: InstallmentPlan | None
    movements: list[Movement]


@dataclass
class MovementDeletion:
    movement: Movement
    balance_reversed: bool
    orphaned_transfer_leg_id: str | None = None


def _transfer_description(template: str, account: Account, note: str) -> str:
    text = template.format(account=account.name)
    if note:
        text = f"{text}: {note}"
    return text


class LedgerService:
    """
    All balance-affecting operations pass through this service.

    The service takes a RecordStore as a constructor argument,
    so the caller decides what backs it and, for a database
    store, when to commit or roll back.
    """

    def __init__(self, store: RecordStore, categories: CategoryService | None = None):
        self.store = store
        self.categories = categories or CategoryService(store)

    # --- Helpers ---

    def _get_account(self, account_id: str) -> Account:
        account = self.store.accounts.get_by_id(account_id)
        if not account:
            raise NotFoundError(f"Account {account_id} not found")
        return account

    def _apply_delta(self, account_id: str, delta: Decimal) -> Account:
        """Read the account fresh and add delta to its balance."""
        account = self._get_account(account_id)
        account.balance = account.balance + delta
        return self.store.accounts.update(account)

    def _check_reference(self, reference: str | None) -> None:
        if reference is not None:
            self.categories.validate_selectable(reference)

    # --- Single movements ---

    def post_movement(self, request: MovementCreate) -> Movement:
        """
        Record one income or expense and adjust its account.

        Income adds the amount to the balance, expense subtracts
        it. The movement is written first, then the account.
        """
        self._get_account(request.account_id)
        self._check_reference(request.subcategory_id)

        movement = self.store.movements.create(
            movement_type=request.movement_type,
            date=request.date,
            amount=request.amount,
            description=request.description.strip()
            or DEFAULT_DESCRIPTIONS[request.movement_type],
            account_id=request.account_id,
            subcategory_id=request.subcategory_id,
        )

        try:
            self._apply_delta(movement.account_id, movement.signed_amount)
        except Exception as e:
            logger.exception(
                "Movement %s written but account %s was not updated",
                movement.id, movement.account_id,
            )
            raise PartialWriteError("post_movement", [movement.id], e) from e

        logger.info(
            "Posted %s of %s on account %s (movement %s)",
            movement.movement_type.value, movement.amount,
            movement.account_id, movement.id,
        )
        return movement

    # --- Transfers ---

    def post_transfer(self, request: TransferRequest) -> Transfer:
        """
        Move money from one account to another.

        Writes an expense leg on the source and an income leg on
        the destination, in that order, both carrying the same
        related_transfer_id. Balances are updated after both legs
        exist.
        """
        if request.from_account_id == request.to_account_id:
            logger.warning(
                "Refused transfer to the same account %s", request.from_account_id
            )
            raise InvalidRequestError("Cannot transfer to the same account")

        source = self._get_account(request.from_account_id)
        destination = self._get_account(request.to_account_id)

        transfer_id = new_id()
        note = request.description.strip()
        written: list[str] = []

        try:
            expense = self.store.movements.create(
                movement_type=MovementType.EXPENSE,
                date=request.date,
                amount=request.amount,
                description=_transfer_description(
                    TRANSFER_OUT_DESCRIPTION, destination, note
                ),
                account_id=source.id,
                related_transfer_id=transfer_id,
            )
            written.append(expense.id)

            income = self.store.movements.create(
                movement_type=MovementType.INCOME,
                date=request.date,
                amount=request.amount,
                description=_transfer_description(
                    TRANSFER_IN_DESCRIPTION, source, note
                ),
                account_id=destination.id,
                related_transfer_id=transfer_id,
            )
            written.append(income.id)

            self._apply_delta(source.id, -request.amount)
            written.append(source.id)
            self._apply_delta(destination.id, request.amount)
        except Exception as e:
            if not written:
                raise
            logger.exception("Transfer %s failed part way", transfer_id)
            raise PartialWriteError("post_transfer", written, e) from e

        logger.info(
            "Transferred %s from %s to %s (transfer %s)",
            request.amount, source.id, destination.id, transfer_id,
        )
        return Transfer(
            related_transfer_id=transfer_id,
            expense_movement=expense,
            income_movement=income,
        )

    def delete_transfer(self, related_transfer_id: str) -> list[Movement]:
        """Delete every leg of a transfer and reverse each one."""
        legs = self.store.movements.list_by(related_transfer_id=related_transfer_id)
        if not legs:
            raise NotFoundError(f"Transfer {related_transfer_id} not found")

        written: list[str] = []
        try:
            for leg in legs:
                self.store.movements.delete_by_id(leg.id)
                written.append(leg.id)
                self._apply_delta(leg.account_id, -leg.signed_amount)
        except Exception as e:
            if not written:
                raise
            logger.exception("Deleting transfer %s failed part way", related_transfer_id)
            raise PartialWriteError("delete_transfer", written, e) from e

        logger.info("Deleted transfer %s (%d legs)", related_transfer_id, len(legs))
        return legs

    # --- Installment plans ---

    def post_installment_plan(
        self, request: InstallmentPurchaseRequest
    ) -> InstallmentPosting:
        """
        Split a card purchase into monthly installments.

        Each installment is round(total / n, 2); the last cent of
        drift is kept, not corrected. Installment i is dated i
        calendar months after start_date. The card is debited for
        every installment when the plan is created, future ones
        included.
        """
        account = self._get_account(request.account_id)
        if (
            account.account_type != AccountType.CARD
            or request.movement_type != MovementType.EXPENSE
        ):
            raise InvalidRequestError(
                "Installments are only available for expenses on card accounts"
            )
        self._check_reference(request.subcategory_id)

        base = request.description.strip() or DEFAULT_INSTALLMENT_DESCRIPTION
        count = request.number_of_installments

        if count <= 1:
            movement = self.post_movement(MovementCreate(
                movement_type=request.movement_type,
                date=request.start_date,
                amount=request.total_amount,
                description=base,
                account_id=account.id,
                subcategory_id=request.subcategory_id,
            ))
            return InstallmentPosting(plan=None, movements=[movement])

        installment_amount = (request.total_amount / count).quantize(
            CENT, rounding=ROUND_HALF_UP
        )
        if installment_amount <= 0:
            raise InvalidRequestError(
                f"{request.total_amount} cannot be split into {count} "
                f"installments of at least {CENT}"
            )

        plan = self.store.installment_plans.create(
            start_date=request.start_date,
            installment_amount=installment_amount,
            number_of_installments=count,
            description=base,
            account_id=account.id,
        )
        written: list[str] = [plan.id]
        movements: list[Movement] = []

        try:
            for i in range(count):
                movement = self.store.movements.create(
                    movement_type=MovementType.EXPENSE,
                    date=add_calendar_months(request.start_date, i),
                    amount=installment_amount,
                    description=INSTALLMENT_DESCRIPTION.format(
                        base=base, number=i + 1, total=count
                    ),
                    account_id=account.id,
                    subcategory_id=request.subcategory_id,
                    installment_plan_id=plan.id,
                    installment_number=i + 1,
                )
                movements.append(movement)
                written.append(movement.id)

            self._apply_delta(account.id, -plan.total_debited)
        except Exception as e:
            logger.exception(
                "Installment plan %s failed after %d of %d movements",
                plan.id, len(movements), count,
            )
            raise PartialWriteError("post_installment_plan", written, e) from e

        logger.info(
            "Created installment plan %s: %d x %s on account %s",
            plan.id, count, installment_amount, account.id,
        )
        return InstallmentPosting(plan=plan, movements=movements)

    def get_installment_plan(self, plan_id: str) -> InstallmentPlan:
        plan = self.store.installment_plans.get_by_id(plan_id)
        if not plan:
            raise NotFoundError(f"Installment plan {plan_id} not found")
        return plan

    def list_installment_plans(self, account_id: str | None = None) -> list[InstallmentPlan]:
        if account_id is None:
            return self.store.installment_plans.list_all()
        return self.store.installment_plans.list_by(account_id=account_id)

    def delete_installment_plan(self, plan_id: str) -> list[Movement]:
        """
        Delete a plan with all of its remaining installments.

        The card is credited the full amount the plan debited at
        creation, whether or not some installments were already
        deleted one by one.
        """
        plan = self.get_installment_plan(plan_id)
        movements = self.store.movements.list_by(installment_plan_id=plan.id)

        written: list[str] = []
        try:
            for movement in movements:
                self.store.movements.delete_by_id(movement.id)
                written.append(movement.id)
            self.store.installment_plans.delete_by_id(plan.id)
            written.append(plan.id)
            self._apply_delta(plan.account_id, plan.total_debited)
        except Exception as e:
            if not written:
                raise
            logger.exception("Deleting installment plan %s failed part way", plan.id)
            raise PartialWriteError("delete_installment_plan", written, e) from e

        logger.info(
            "Deleted installment plan %s (%d movements)", plan.id, len(movements)
        )
        return movements

    # --- Edit & delete ---

    def get_movement(self, movement_id: str) -> Movement:
        movement = self.store.movements.get_by_id(movement_id)
        if not movement:
            raise NotFoundError(f"Movement {movement_id} not found")
        return movement

    def _in_category(self, movement: Movement, category_id: str) -> bool:
        if movement.subcategory_id is None:
            return False
        resolved = self.categories.lookup_category(movement.subcategory_id)
        return resolved is not None and resolved[0].id == category_id

    def list_movements(
        self,
        account_id: str | None = None,
        month: str | None = None,
        movement_type: MovementType | None = None,
        category_id: str | None = None,
    ) -> list[Movement]:
        """
        Return movements newest first, optionally filtered.

        category_id matches movements filed under the category
        itself or under any of its subcategories.
        """
        if account_id is not None:
            movements = self.store.movements.list_by(account_id=account_id)
        else:
            movements = self.store.movements.list_all()

        if month is not None:
            movements = [m for m in movements if month_key(m.date) == month]
        if movement_type is not None:
            movements = [m for m in movements if m.movement_type == movement_type]
        if category_id is not None:
            movements = [m for m in movements if self._in_category(m, category_id)]

        return sorted(
            movements, key=lambda m: (m.date, m.created_at), reverse=True
        )

    def edit_movement(self, movement_id: str, request: MovementUpdate) -> Movement:
        """
        Change a movement's date, amount, description or category.

        Transfer legs and installments keep their amount and date;
        only their description and category can change. The
        account receives the difference between the old and the
        new amount.
        """
        movement = self.get_movement(movement_id)
        fields = request.model_fields_set

        old_amount = movement.amount
        new_amount = request.amount if request.amount is not None else old_amount
        new_date = request.date if request.date is not None else movement.date

        if not movement.is_standalone and (
            new_amount != old_amount or new_date != movement.date
        ):
            kind = "installment" if movement.installment_plan_id else "transfer"
            raise InvalidRequestError(
                f"Cannot change the amount or date of a {kind} movement"
            )

        if "subcategory_id" in fields:
            self._check_reference(request.subcategory_id)
            movement.subcategory_id = request.subcategory_id
        if request.description is not None:
            movement.description = (
                request.description.strip()
                or DEFAULT_DESCRIPTIONS[movement.movement_type]
            )

        if movement.movement_type == MovementType.INCOME:
            delta = new_amount - old_amount
        else:
            delta = old_amount - new_amount

        movement.amount = new_amount
        movement.date = new_date
        movement = self.store.movements.update(movement)

        if delta != 0:
            try:
                self._apply_delta(movement.account_id, delta)
            except Exception as e:
                logger.exception(
                    "Movement %s edited but account %s was not updated",
                    movement.id, movement.account_id,
                )
                raise PartialWriteError("edit_movement", [movement.id], e) from e

        logger.info(
            "Edited movement %s (balance delta %s)", movement.id, delta
        )
        return movement

    def delete_movement(self, movement_id: str) -> MovementDeletion:
        """
        Delete one movement and reverse its effect on the balance.

        Installments are the exception: deleting one leaves the
        card balance as it is. Use delete_installment_plan to
        remove a whole plan with its balance effect. Deleting one
        transfer leg leaves the other leg in place; its id is
        returned so the caller can warn about it.
        """
        movement = self.get_movement(movement_id)

        orphan_id = None
        if movement.related_transfer_id is not None:
            siblings = [
                m for m in self.store.movements.list_by(
                    related_transfer_id=movement.related_transfer_id
                )
                if m.id != movement.id
            ]
            if siblings:
                orphan_id = siblings[0].id
                logger.warning(
                    "Deleting one leg of transfer %s leaves movement %s orphaned",
                    movement.related_transfer_id, orphan_id,
                )

        self.store.movements.delete_by_id(movement.id)

        reverse = movement.installment_plan_id is None
        if reverse:
            try:
                self._apply_delta(movement.account_id, -movement.signed_amount)
            except Exception as e:
                logger.exception(
                    "Movement %s deleted but account %s was not updated",
                    movement.id, movement.account_id,
                )
                raise PartialWriteError("delete_movement", [movement.id], e) from e

        logger.info(
            "Deleted movement %s (balance reversed: %s)", movement.id, reverse
        )
        return MovementDeletion(
            movement=movement,
            balance_reversed=reverse,
            orphaned_transfer_leg_id=orphan_id,
        )

    # --- Reconciliation ---

    def check_integrity(self) -> IntegrityReport:
        """
        Compare every stored balance with its movement history.

        expected = opening_balance + sum(income) - sum(expense)
        """
        totals: dict[str, Decimal] = {}
        for movement in self.store.movements.list_all():
            totals[movement.account_id] = (
                totals.get(movement.account_id, Decimal("0"))
                + movement.signed_amount
            )

        rows = []
        for account in self.store.accounts.list_all():
            expected = account.opening_balance + totals.get(account.id, Decimal("0"))
            rows.append(AccountIntegrity(
                account_id=account.id,
                account_name=account.name,
                stored_balance=account.balance,
                expected_balance=expected,
                difference=account.balance - expected,
            ))

        return IntegrityReport(
            is_balanced=all(row.is_consistent for row in rows),
            accounts=rows,
        )

    def recalculate_balances(self, dry_run: bool = False) -> IntegrityReport:
        """
        Rewrite every inconsistent balance from the movement history.

        Returns the report as it was before any correction. With
        dry_run=True nothing is written.
        """
        report = self.check_integrity()
        if dry_run:
            return report

        for row in report.accounts:
            if row.is_consistent:
                continue
            account = self._get_account(row.account_id)
            account.balance = row.expected_balance
            self.store.accounts.update(account)
            logger.warning(
                "Corrected balance of account %s from %s to %s",
                row.account_id, row.stored_balance, row.expected_balance,
            )
        return report
