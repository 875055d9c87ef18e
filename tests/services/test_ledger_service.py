"""
Comprehensive tests for the LedgerService.

Tests cover:
- Single movement posting and the balance invariant
- Transfers between two accounts
- Installment plan expansion on card accounts
- Editing and deleting movements with balance reversal
- Reconciliation of stored balances with movement history

Every test runs against both the in-memory and the SQLAlchemy store.
"""

from datetime import date
from decimal import Decimal

import pytest

from finance_tracker.exceptions import (
    InvalidRequestError,
    NotFoundError,
    PartialWriteError,
)
from finance_tracker.models.enums import AccountType, MovementType
from finance_tracker.schemas.account import AccountCreate
from finance_tracker.schemas.category import CategoryCreate, SubcategoryCreate
from finance_tracker.schemas.movement import (
    InstallmentPurchaseRequest,
    MovementCreate,
    MovementUpdate,
    TransferRequest,
)
from finance_tracker.services.account_service import AccountService
from finance_tracker.services.category_service import CategoryService
from finance_tracker.services.ledger_service import LedgerService


# --- Helpers to reduce repetition ---

def balance_of(store, account):
    return store.accounts.get_by_id(account.id).balance


def post(service, account, movement_type, amount, day=date(2024, 1, 10), **extra):
    return service.post_movement(MovementCreate(
        movement_type=movement_type,
        date=day,
        amount=Decimal(amount),
        account_id=account.id,
        **extra,
    ))


def transfer(service, source, destination, amount, description=""):
    return service.post_transfer(TransferRequest(
        from_account_id=source.id,
        to_account_id=destination.id,
        amount=Decimal(amount),
        date=date(2024, 1, 10),
        description=description,
    ))


def installments(service, card, total, count, start=date(2024, 1, 15), **extra):
    return service.post_installment_plan(InstallmentPurchaseRequest(
        account_id=card.id,
        total_amount=Decimal(total),
        number_of_installments=count,
        start_date=start,
        description="TV",
        **extra,
    ))


# --- Single Movement Tests ---

class TestPostMovement:

    def test_expense_decreases_balance(self, store, make_account):
        account = make_account("Cash/ARS", balance="1000")
        service = LedgerService(store)

        movement = post(service, account, MovementType.EXPENSE, "200")

        assert movement.id is not None
        assert movement.amount == Decimal("200")
        assert balance_of(store, account) == Decimal("800")

    def test_income_increases_balance(self, store, make_account):
        account = make_account(balance="1000")
        service = LedgerService(store)

        post(service, account, MovementType.INCOME, "250.50")

        assert balance_of(store, account) == Decimal("1250.50")

    def test_sequence_matches_sum_of_movements(self, store, make_account):
        account = make_account(balance="100")
        service = LedgerService(store)

        post(service, account, MovementType.INCOME, "500")
        post(service, account, MovementType.EXPENSE, "120.25")
        post(service, account, MovementType.EXPENSE, "30")
        post(service, account, MovementType.INCOME, "0.25")

        assert balance_of(store, account) == Decimal("450.00")
        assert service.check_integrity().is_balanced is True

    def test_blank_description_gets_default(self, store, make_account):
        account = make_account()
        service = LedgerService(store)

        movement = post(service, account, MovementType.EXPENSE, "5", description="  ")

        assert movement.description == "Expense"

    def test_unknown_account_rejected_without_writes(self, store):
        service = LedgerService(store)

        with pytest.raises(NotFoundError, match="not found"):
            service.post_movement(MovementCreate(
                movement_type=MovementType.EXPENSE,
                date=date(2024, 1, 1),
                amount=Decimal("10"),
                account_id="missing",
            ))
        assert store.movements.list_all() == []

    def test_non_positive_amount_rejected(self):
        with pytest.raises(ValueError):
            MovementCreate(
                movement_type=MovementType.EXPENSE,
                date=date(2024, 1, 1),
                amount=Decimal("0"),
                account_id="any",
            )
        with pytest.raises(ValueError):
            MovementCreate(
                movement_type=MovementType.INCOME,
                date=date(2024, 1, 1),
                amount=Decimal("-5"),
                account_id="any",
            )

    def test_unknown_category_rejected_without_writes(self, store, make_account):
        account = make_account(balance="100")
        service = LedgerService(store)

        with pytest.raises(NotFoundError):
            post(service, account, MovementType.EXPENSE, "10", subcategory_id="nope")

        assert store.movements.list_all() == []
        assert balance_of(store, account) == Decimal("100")

    def test_reserved_transfer_category_rejected(self, store, make_account):
        account = make_account()
        categories = CategoryService(store, "Transfers")
        reserved = categories.ensure_transfer_category()
        service = LedgerService(store, categories)

        with pytest.raises(InvalidRequestError, match="reserved"):
            post(service, account, MovementType.EXPENSE, "10", subcategory_id=reserved.id)

    def test_accepts_category_or_subcategory_reference(self, store, make_account):
        account = make_account()
        categories = CategoryService(store)
        salary = categories.create_category(CategoryCreate(name="Salary"))
        food = categories.create_category(CategoryCreate(name="Food"))
        groceries = categories.create_subcategory(SubcategoryCreate(
            name="Groceries", category_id=food.id,
        ))
        service = LedgerService(store, categories)

        income = post(service, account, MovementType.INCOME, "100", subcategory_id=salary.id)
        expense = post(service, account, MovementType.EXPENSE, "10", subcategory_id=groceries.id)

        assert income.subcategory_id == salary.id
        assert expense.subcategory_id == groceries.id


# --- Transfer Tests ---

class TestTransfer:

    def test_transfer_moves_balance(self, store, make_account):
        x = make_account("X", balance="500")
        y = make_account("Y", balance="100")
        service = LedgerService(store)

        result = transfer(service, x, y, "150")

        assert balance_of(store, x) == Decimal("350")
        assert balance_of(store, y) == Decimal("250")
        legs = store.movements.list_by(related_transfer_id=result.related_transfer_id)
        assert len(legs) == 2

    def test_legs_are_one_expense_and_one_income(self, store, make_account):
        x = make_account("X", balance="500")
        y = make_account("Y")
        service = LedgerService(store)

        result = transfer(service, x, y, "150")

        assert result.expense_movement.movement_type == MovementType.EXPENSE
        assert result.expense_movement.account_id == x.id
        assert result.income_movement.movement_type == MovementType.INCOME
        assert result.income_movement.account_id == y.id
        assert result.expense_movement.amount == result.income_movement.amount
        assert (
            result.expense_movement.related_transfer_id
            == result.income_movement.related_transfer_id
            == result.related_transfer_id
        )

    def test_leg_descriptions_name_the_other_account(self, store, make_account):
        x = make_account("Wallet", balance="500")
        y = make_account("Savings")
        service = LedgerService(store)

        result = transfer(service, x, y, "10", description="rent")

        assert result.expense_movement.description == "Transfer to Savings: rent"
        assert result.income_movement.description == "Transfer from Wallet: rent"

    def test_transfer_without_note(self, store, make_account):
        x = make_account("Wallet", balance="500")
        y = make_account("Savings")
        service = LedgerService(store)

        result = transfer(service, x, y, "10")

        assert result.expense_movement.description == "Transfer to Savings"

    def test_transfer_to_same_account_rejected(self, store, make_account):
        x = make_account("X", balance="500")
        service = LedgerService(store)

        with pytest.raises(InvalidRequestError, match="same account"):
            transfer(service, x, x, "100")

        assert store.movements.list_all() == []
        assert balance_of(store, x) == Decimal("500")

    def test_transfer_to_unknown_account_rejected(self, store, make_account):
        x = make_account("X", balance="500")
        service = LedgerService(store)

        with pytest.raises(NotFoundError):
            service.post_transfer(TransferRequest(
                from_account_id=x.id,
                to_account_id="missing",
                amount=Decimal("10"),
                date=date(2024, 1, 1),
            ))
        assert store.movements.list_all() == []

    def test_delete_transfer_restores_both_balances(self, store, make_account):
        x = make_account("X", balance="500")
        y = make_account("Y", balance="100")
        service = LedgerService(store)
        result = transfer(service, x, y, "150")

        legs = service.delete_transfer(result.related_transfer_id)

        assert len(legs) == 2
        assert balance_of(store, x) == Decimal("500")
        assert balance_of(store, y) == Decimal("100")
        assert store.movements.list_all() == []

    def test_delete_unknown_transfer_rejected(self, store):
        with pytest.raises(NotFoundError):
            LedgerService(store).delete_transfer("missing")


# --- Installment Plan Tests ---

class TestInstallmentPlan:

    def test_three_installments(self, store, make_account):
        card = make_account("Visa", account_type=AccountType.CARD)
        service = LedgerService(store)

        posting = installments(service, card, "300", 3)

        assert posting.plan is not None
        assert posting.plan.number_of_installments == 3
        assert posting.plan.installment_amount == Decimal("100.00")
        assert [m.date for m in posting.movements] == [
            date(2024, 1, 15), date(2024, 2, 15), date(2024, 3, 15),
        ]
        assert [m.amount for m in posting.movements] == [Decimal("100.00")] * 3
        assert [m.installment_number for m in posting.movements] == [1, 2, 3]
        assert {m.installment_plan_id for m in posting.movements} == {posting.plan.id}
        assert len(store.installment_plans.list_all()) == 1

    def test_descriptions_number_each_installment(self, store, make_account):
        card = make_account("Visa", account_type=AccountType.CARD)
        service = LedgerService(store)

        posting = installments(service, card, "300", 3)

        assert [m.description for m in posting.movements] == [
            "TV (Cuota 1/3)", "TV (Cuota 2/3)", "TV (Cuota 3/3)",
        ]

    def test_card_is_debited_for_every_installment(self, store, make_account):
        card = make_account("Visa", balance="0", account_type=AccountType.CARD)
        service = LedgerService(store)

        installments(service, card, "300", 3)

        assert balance_of(store, card) == Decimal("-300.00")
        assert service.check_integrity().is_balanced is True

    def test_rounding_drift_is_kept(self, store, make_account):
        card = make_account("Visa", account_type=AccountType.CARD)
        service = LedgerService(store)

        posting = installments(service, card, "100", 3)

        amounts = [m.amount for m in posting.movements]
        assert amounts == [Decimal("33.33")] * 3
        assert abs(sum(amounts) - Decimal("100")) <= Decimal("0.03")

    def test_month_end_start_is_clamped(self, store, make_account):
        card = make_account("Visa", account_type=AccountType.CARD)
        service = LedgerService(store)

        posting = installments(service, card, "90", 3, start=date(2024, 1, 31))

        assert [m.date for m in posting.movements] == [
            date(2024, 1, 31), date(2024, 2, 29), date(2024, 3, 31),
        ]

    def test_single_installment_is_a_plain_expense(self, store, make_account):
        card = make_account("Visa", balance="0", account_type=AccountType.CARD)
        service = LedgerService(store)

        posting = installments(service, card, "250", 1)

        assert posting.plan is None
        assert len(posting.movements) == 1
        movement = posting.movements[0]
        assert movement.amount == Decimal("250")
        assert movement.installment_plan_id is None
        assert movement.description == "TV"
        assert store.installment_plans.list_all() == []
        assert balance_of(store, card) == Decimal("-250")

    def test_non_card_account_rejected(self, store, make_account):
        cash = make_account("Cash", account_type=AccountType.CASH)
        service = LedgerService(store)

        with pytest.raises(InvalidRequestError, match="card"):
            installments(service, cash, "300", 3)
        assert store.movements.list_all() == []
        assert store.installment_plans.list_all() == []

    def test_income_rejected(self, store, make_account):
        card = make_account("Visa", account_type=AccountType.CARD)
        service = LedgerService(store)

        with pytest.raises(InvalidRequestError):
            installments(service, card, "300", 3, movement_type=MovementType.INCOME)

    def test_amount_too_small_to_split_rejected(self, store, make_account):
        card = make_account("Visa", balance="0", account_type=AccountType.CARD)
        service = LedgerService(store)

        with pytest.raises(InvalidRequestError, match="cannot be split"):
            installments(service, card, "0.02", 5)

        assert store.movements.list_all() == []
        assert store.installment_plans.list_all() == []
        assert balance_of(store, card) == Decimal("0")

    def test_smallest_splittable_amount(self, store, make_account):
        card = make_account("Visa", balance="0", account_type=AccountType.CARD)
        service = LedgerService(store)

        posting = installments(service, card, "0.05", 5)

        assert [m.amount for m in posting.movements] == [Decimal("0.01")] * 5
        assert balance_of(store, card) == Decimal("-0.05")

    def test_zero_installments_is_a_plain_expense(self, store, make_account):
        card = make_account("Visa", balance="0", account_type=AccountType.CARD)
        service = LedgerService(store)

        posting = installments(service, card, "80", 0)

        assert posting.plan is None
        assert [m.amount for m in posting.movements] == [Decimal("80")]
        assert balance_of(store, card) == Decimal("-80")

    def test_delete_plan_credits_card_back(self, store, make_account):
        card = make_account("Visa", balance="50", account_type=AccountType.CARD)
        service = LedgerService(store)
        posting = installments(service, card, "300", 3)

        removed = service.delete_installment_plan(posting.plan.id)

        assert len(removed) == 3
        assert store.movements.list_all() == []
        assert store.installment_plans.list_all() == []
        assert balance_of(store, card) == Decimal("50")

    def test_delete_plan_after_single_installment_delete(self, store, make_account):
        card = make_account("Visa", balance="0", account_type=AccountType.CARD)
        service = LedgerService(store)
        posting = installments(service, card, "300", 3)
        service.delete_movement(posting.movements[0].id)

        service.delete_installment_plan(posting.plan.id)

        assert balance_of(store, card) == Decimal("0")
        assert service.check_integrity().is_balanced is True

    def test_list_and_get_plans(self, store, make_account):
        card = make_account("Visa", account_type=AccountType.CARD)
        service = LedgerService(store)
        posting = installments(service, card, "300", 3)

        assert service.get_installment_plan(posting.plan.id).id == posting.plan.id
        assert len(service.list_installment_plans(card.id)) == 1
        with pytest.raises(NotFoundError):
            service.get_installment_plan("missing")


# --- Edit Tests ---

class TestEditMovement:

    def test_edit_expense_amount(self, store, make_account):
        account = make_account(balance="1000")
        service = LedgerService(store)
        movement = post(service, account, MovementType.EXPENSE, "200")

        service.edit_movement(movement.id, MovementUpdate(amount=Decimal("150")))

        # a - b = 200 - 150
        assert balance_of(store, account) == Decimal("850")
        assert store.movements.get_by_id(movement.id).amount == Decimal("150")

    def test_edit_income_amount(self, store, make_account):
        account = make_account(balance="1000")
        service = LedgerService(store)
        movement = post(service, account, MovementType.INCOME, "200")

        service.edit_movement(movement.id, MovementUpdate(amount=Decimal("260")))

        # b - a = 260 - 200
        assert balance_of(store, account) == Decimal("1260")

    def test_edit_date_and_description_only(self, store, make_account):
        account = make_account(balance="1000")
        service = LedgerService(store)
        movement = post(service, account, MovementType.EXPENSE, "200")

        edited = service.edit_movement(movement.id, MovementUpdate(
            date=date(2024, 2, 1), description="Groceries",
        ))

        assert edited.date == date(2024, 2, 1)
        assert edited.description == "Groceries"
        assert balance_of(store, account) == Decimal("800")

    def test_clearing_category(self, store, make_account):
        account = make_account()
        categories = CategoryService(store)
        food = categories.create_category(CategoryCreate(name="Food"))
        service = LedgerService(store, categories)
        movement = post(service, account, MovementType.EXPENSE, "20", subcategory_id=food.id)

        edited = service.edit_movement(movement.id, MovementUpdate(subcategory_id=None))

        assert edited.subcategory_id is None

    def test_omitted_category_is_kept(self, store, make_account):
        account = make_account()
        categories = CategoryService(store)
        food = categories.create_category(CategoryCreate(name="Food"))
        service = LedgerService(store, categories)
        movement = post(service, account, MovementType.EXPENSE, "20", subcategory_id=food.id)

        edited = service.edit_movement(movement.id, MovementUpdate(description="Lunch"))

        assert edited.subcategory_id == food.id

    def test_transfer_leg_amount_cannot_change(self, store, make_account):
        x = make_account("X", balance="500")
        y = make_account("Y")
        service = LedgerService(store)
        result = transfer(service, x, y, "100")

        with pytest.raises(InvalidRequestError, match="transfer"):
            service.edit_movement(
                result.expense_movement.id, MovementUpdate(amount=Decimal("50"))
            )
        assert balance_of(store, x) == Decimal("400")

    def test_installment_date_cannot_change(self, store, make_account):
        card = make_account("Visa", account_type=AccountType.CARD)
        service = LedgerService(store)
        posting = installments(service, card, "300", 3)

        with pytest.raises(InvalidRequestError, match="installment"):
            service.edit_movement(
                posting.movements[1].id, MovementUpdate(date=date(2024, 5, 1))
            )

    def test_transfer_leg_description_can_change(self, store, make_account):
        x = make_account("X", balance="500")
        y = make_account("Y")
        service = LedgerService(store)
        result = transfer(service, x, y, "100")

        edited = service.edit_movement(
            result.income_movement.id, MovementUpdate(description="Savings top-up")
        )

        assert edited.description == "Savings top-up"
        assert balance_of(store, y) == Decimal("100")

    def test_edit_unknown_movement_rejected(self, store):
        with pytest.raises(NotFoundError):
            LedgerService(store).edit_movement("missing", MovementUpdate())


# --- Delete Tests ---

class TestDeleteMovement:

    def test_delete_income_decreases_balance(self, store, make_account):
        account = make_account(balance="1000")
        service = LedgerService(store)
        movement = post(service, account, MovementType.INCOME, "300")

        deletion = service.delete_movement(movement.id)

        assert deletion.balance_reversed is True
        assert balance_of(store, account) == Decimal("1000")
        assert store.movements.get_by_id(movement.id) is None

    def test_delete_expense_increases_balance(self, store, make_account):
        account = make_account(balance="1000")
        service = LedgerService(store)
        movement = post(service, account, MovementType.EXPENSE, "300")

        service.delete_movement(movement.id)

        assert balance_of(store, account) == Decimal("1000")

    def test_delete_installment_does_not_reverse(self, store, make_account):
        card = make_account("Visa", balance="0", account_type=AccountType.CARD)
        service = LedgerService(store)
        posting = installments(service, card, "300", 3)

        deletion = service.delete_movement(posting.movements[2].id)

        assert deletion.balance_reversed is False
        assert balance_of(store, card) == Decimal("-300.00")
        assert len(store.movements.list_all()) == 2

    def test_delete_one_transfer_leg_reports_orphan(self, store, make_account):
        x = make_account("X", balance="500")
        y = make_account("Y", balance="100")
        service = LedgerService(store)
        result = transfer(service, x, y, "150")

        deletion = service.delete_movement(result.expense_movement.id)

        assert deletion.orphaned_transfer_leg_id == result.income_movement.id
        assert balance_of(store, x) == Decimal("500")
        assert balance_of(store, y) == Decimal("250")
        assert store.movements.get_by_id(result.income_movement.id) is not None

    def test_delete_unknown_movement_rejected(self, store):
        with pytest.raises(NotFoundError):
            LedgerService(store).delete_movement("missing")


# --- Listing Tests ---

class TestListMovements:

    def test_filters_and_order(self, store, make_account):
        a = make_account("A", balance="1000")
        b = make_account("B", balance="1000")
        service = LedgerService(store)
        post(service, a, MovementType.EXPENSE, "1", day=date(2024, 1, 5))
        post(service, a, MovementType.INCOME, "2", day=date(2024, 2, 5))
        post(service, b, MovementType.EXPENSE, "3", day=date(2024, 2, 7))

        everything = service.list_movements()
        assert [m.date for m in everything] == [
            date(2024, 2, 7), date(2024, 2, 5), date(2024, 1, 5),
        ]
        assert len(service.list_movements(account_id=a.id)) == 2
        assert len(service.list_movements(month="2024-02")) == 2
        february_expenses = service.list_movements(
            month="2024-02", movement_type=MovementType.EXPENSE
        )
        assert [m.account_id for m in february_expenses] == [b.id]

    def test_category_filter_includes_subcategories(self, store, make_account):
        account = make_account(balance="1000")
        categories = CategoryService(store)
        food = categories.create_category(CategoryCreate(name="Food"))
        groceries = categories.create_subcategory(SubcategoryCreate(
            name="Groceries", category_id=food.id,
        ))
        transport = categories.create_category(CategoryCreate(name="Transport"))
        service = LedgerService(store, categories)
        in_subcategory = post(
            service, account, MovementType.EXPENSE, "10", subcategory_id=groceries.id
        )
        in_category = post(
            service, account, MovementType.EXPENSE, "20",
            day=date(2024, 1, 11), subcategory_id=food.id,
        )
        post(service, account, MovementType.EXPENSE, "30", subcategory_id=transport.id)
        post(service, account, MovementType.EXPENSE, "40")

        food_movements = service.list_movements(category_id=food.id)

        assert [m.id for m in food_movements] == [in_category.id, in_subcategory.id]
        assert service.list_movements(category_id=groceries.id) == []
        assert len(service.list_movements(category_id=transport.id)) == 1


# --- Reconciliation Tests ---

class TestIntegrity:

    def test_balanced_after_all_operations(self, store, make_account):
        cash = make_account("Cash", balance="1000")
        savings = make_account("Savings", balance="50")
        card = make_account("Visa", account_type=AccountType.CARD)
        service = LedgerService(store)

        expense = post(service, cash, MovementType.EXPENSE, "200")
        post(service, cash, MovementType.INCOME, "75")
        transfer(service, cash, savings, "300")
        installments(service, card, "120", 4)
        service.edit_movement(expense.id, MovementUpdate(amount=Decimal("180")))
        service.delete_movement(expense.id)

        report = service.check_integrity()
        assert report.is_balanced is True
        assert all(row.difference == 0 for row in report.accounts)

    def test_detects_and_repairs_stale_balance(self, store, make_account):
        card = make_account("Visa", balance="0", account_type=AccountType.CARD)
        service = LedgerService(store)
        posting = installments(service, card, "300", 3)
        service.delete_movement(posting.movements[0].id)

        report = service.check_integrity()
        assert report.is_balanced is False
        row = next(r for r in report.accounts if r.account_id == card.id)
        assert row.difference == Decimal("-100.00")

        service.recalculate_balances()

        assert balance_of(store, card) == Decimal("-200.00")
        assert service.check_integrity().is_balanced is True

    def test_dry_run_writes_nothing(self, store, make_account):
        card = make_account("Visa", balance="0", account_type=AccountType.CARD)
        service = LedgerService(store)
        posting = installments(service, card, "300", 3)
        service.delete_movement(posting.movements[0].id)

        service.recalculate_balances(dry_run=True)

        assert balance_of(store, card) == Decimal("-300.00")


# --- Partial Write Tests ---

class TestPartialWrites:
    """
    The in-memory store has no transactions, so a failure part
    way through an operation leaves the earlier writes behind.
    """

    def _cash(self, store, balance="1000", account_type=AccountType.CASH):
        return AccountService(store).create_account(AccountCreate(
            name="Wallet",
            account_type=account_type,
            balance=Decimal(balance),
        ))

    def test_movement_kept_when_balance_update_fails(self, memory_store, monkeypatch):
        account = self._cash(memory_store)
        service = LedgerService(memory_store)

        def broken_update(entity):
            raise RuntimeError("store unavailable")

        monkeypatch.setattr(memory_store.accounts, "update", broken_update)

        with pytest.raises(PartialWriteError) as excinfo:
            post(service, account, MovementType.EXPENSE, "200")

        stored = memory_store.movements.list_all()
        assert len(stored) == 1
        assert excinfo.value.operation == "post_movement"
        assert excinfo.value.written_ids == [stored[0].id]
        assert isinstance(excinfo.value.cause, RuntimeError)
        assert balance_of(memory_store, account) == Decimal("1000")

        monkeypatch.undo()
        assert service.check_integrity().is_balanced is False
        service.recalculate_balances()
        assert balance_of(memory_store, account) == Decimal("800")

    def test_installment_failure_reports_written_records(self, memory_store, monkeypatch):
        card = self._cash(memory_store, balance="0", account_type=AccountType.CARD)
        service = LedgerService(memory_store)
        original_create = memory_store.movements.create
        calls = []

        def flaky_create(**fields):
            calls.append(fields)
            if len(calls) == 3:
                raise RuntimeError("disk full")
            return original_create(**fields)

        monkeypatch.setattr(memory_store.movements, "create", flaky_create)

        with pytest.raises(PartialWriteError) as excinfo:
            installments(service, card, "400", 4)

        plans = memory_store.installment_plans.list_all()
        movements = memory_store.movements.list_all()
        assert len(plans) == 1
        assert len(movements) == 2
        assert excinfo.value.written_ids[0] == plans[0].id
        assert set(excinfo.value.written_ids[1:]) == {m.id for m in movements}
        assert balance_of(memory_store, card) == Decimal("0")

    def test_validation_failure_writes_nothing(self, memory_store):
        card = self._cash(memory_store, account_type=AccountType.CASH)
        service = LedgerService(memory_store)

        with pytest.raises(InvalidRequestError):
            installments(service, card, "400", 4)

        assert memory_store.movements.list_all() == []
        assert memory_store.installment_plans.list_all() == []
