"""
Account service: create, edit and delete accounts.

Balances are not posted here. The only balance change this
service makes is a manual re-seed through update_account;
every other change goes through the LedgerService.
"""

import logging

from finance_tracker.exceptions import NotFoundError, ReferentialIntegrityError
from finance_tracker.models.account import Account
from finance_tracker.schemas.account import AccountCreate, AccountUpdate
from finance_tracker.store.base import RecordStore

logger = logging.getLogger(__name__)


class AccountService:

    def __init__(self, store: RecordStore):
        self.store = store

    def create_account(self, request: AccountCreate) -> Account:
        """Create an account. Its starting balance is also its opening balance."""
        account = self.store.accounts.create(
            name=request.name,
            account_type=request.account_type,
            currency=request.currency,
            balance=request.balance,
            opening_balance=request.balance,
        )
        logger.info(
            "Created account %s (%s) with balance %s",
            account.id, account.account_type.value, account.balance,
        )
        return account

    def get_account(self, account_id: str) -> Account:
        account = self.store.accounts.get_by_id(account_id)
        if not account:
            raise NotFoundError(f"Account {account_id} not found")
        return account

    def list_accounts(self) -> list[Account]:
        return self.store.accounts.list_all()

    def update_account(self, account_id: str, request: AccountUpdate) -> Account:
        """
        Apply the fields present in the request.

        A new balance shifts opening_balance by the same amount,
        so the movement history still explains the balance
        afterwards.
        """
        account = self.get_account(account_id)

        if request.name is not None:
            account.name = request.name
        if request.account_type is not None:
            account.account_type = request.account_type
        if request.currency is not None:
            account.currency = request.currency
        if request.balance is not None and request.balance != account.balance:
            delta = request.balance - account.balance
            account.opening_balance = account.opening_balance + delta
            account.balance = request.balance
            logger.info(
                "Re-seeded account %s balance by %s", account.id, delta
            )

        return self.store.accounts.update(account)

    def delete_account(self, account_id: str) -> None:
        """
        Delete an account that nothing references.

        Raises ReferentialIntegrityError while any movement or
        installment plan still points at the account.
        """
        account = self.get_account(account_id)

        movements = self.store.movements.list_by(account_id=account.id)
        if movements:
            logger.warning(
                "Refused to delete account %s: %d movement(s) reference it",
                account.id, len(movements),
            )
            raise ReferentialIntegrityError(
                f"Account '{account.name}' is used by {len(movements)} "
                f"movement(s); reassign or delete them first"
            )

        plans = self.store.installment_plans.list_by(account_id=account.id)
        if plans:
            raise ReferentialIntegrityError(
                f"Account '{account.name}' has {len(plans)} installment "
                f"plan(s); delete them first"
            )

        self.store.accounts.delete_by_id(account.id)
        logger.info("Deleted account %s", account.id)
