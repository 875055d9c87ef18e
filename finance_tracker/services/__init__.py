"""Business logic services."""

from finance_tracker.services.account_service import AccountService
from finance_tracker.services.category_service import CategoryService
from finance_tracker.services.ledger_service import LedgerService
from finance_tracker.services.summary_service import SummaryService
from finance_tracker.services.seed_service import seed_defaults

__all__ = [
    "AccountService",
    "CategoryService",
    "LedgerService",
    "SummaryService",
    "seed_defaults",
]
