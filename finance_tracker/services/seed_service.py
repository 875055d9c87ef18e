"""
Default data for a fresh installation.

Each collection is only seeded when it is empty, so running
this against a populated store changes nothing.
"""

import logging
from decimal import Decimal

from finance_tracker.models.enums import AccountType, Currency
from finance_tracker.schemas.account import AccountCreate
from finance_tracker.schemas.category import CategoryCreate, SubcategoryCreate
from finance_tracker.services.account_service import AccountService
from finance_tracker.services.category_service import CategoryService
from finance_tracker.store.base import RecordStore

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNTS = [
    ("Cash", AccountType.CASH, Currency.LOCAL, Decimal("10000")),
    ("Credit Card", AccountType.CARD, Currency.LOCAL, Decimal("0")),
    ("USD Savings", AccountType.FOREIGN_CURRENCY, Currency.FOREIGN, Decimal("500")),
]

DEFAULT_CATEGORIES = {
    "Food": ["Groceries", "Restaurants"],
    "Transport": ["Fuel"],
    "Salary": [],
}


def seed_defaults(store: RecordStore, transfer_category_name: str | None = None) -> bool:
    """Create the default accounts and categories. Returns True if anything was added."""
    accounts = AccountService(store)
    categories = CategoryService(store, transfer_category_name)
    seeded = False

    if not store.accounts.list_all():
        for name, account_type, currency, balance in DEFAULT_ACCOUNTS:
            accounts.create_account(AccountCreate(
                name=name,
                account_type=account_type,
                currency=currency,
                balance=balance,
            ))
        seeded = True

    if not store.categories.list_all():
        for name, children in DEFAULT_CATEGORIES.items():
            category = categories.create_category(CategoryCreate(name=name))
            for child in children:
                categories.create_subcategory(SubcategoryCreate(
                    name=child, category_id=category.id,
                ))
        categories.ensure_transfer_category()
        seeded = True

    if seeded:
        logger.info("Seeded default accounts and categories")
    return seeded
