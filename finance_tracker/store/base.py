"""
Record store contract.

The ledger core never talks to a database directly. It talks
to one repository per entity type through the five operations
below, plus an equality filter. Anything that implements this
contract can back the LedgerService.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from finance_tracker.models.account import Account
from finance_tracker.models.category import Category, Subcategory
from finance_tracker.models.installment_plan import InstallmentPlan
from finance_tracker.models.movement import Movement

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """
    CRUD access to one collection of records.

    Each call is atomic on its own. Nothing here groups several
    calls into a transaction; that is the store owner's job.
    """

    model: type[T]

    @abstractmethod
    def list_all(self) -> list[T]:
        """Return every record in the collection."""

    @abstractmethod
    def get_by_id(self, record_id: str) -> T | None:
        """Return the record with this id, or None."""

    @abstractmethod
    def create(self, **fields: Any) -> T:
        """Store a new record. id and created_at are assigned here."""

    @abstractmethod
    def update(self, entity: T) -> T:
        """Replace the stored record that has entity's id."""

    @abstractmethod
    def delete_by_id(self, record_id: str) -> None:
        """Remove the record. Removing a missing id is a no-op."""

    @abstractmethod
    def list_by(self, **criteria: Any) -> list[T]:
        """Return records whose attributes equal every given value."""


class RecordStore:
    """
    One strongly-typed repository per entity.

    Subclasses fill in the five attributes. The LedgerService
    and the catalog services receive a RecordStore, never a
    database session, so tests can hand them an InMemoryStore.
    """

    accounts: Repository[Account]
    categories: Repository[Category]
    subcategories: Repository[Subcategory]
    movements: Repository[Movement]
    installment_plans: Repository[InstallmentPlan]
