"""
SQLAlchemy-backed record store.

Every write flushes so that generated values and constraint
errors surface immediately, but nothing commits. The caller
that owns the session decides when a composite operation is
saved, which makes each ledger operation all-or-nothing on a
transactional database.
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

from finance_tracker.ids import new_id
from finance_tracker.models.account import Account
from finance_tracker.models.category import Category, Subcategory
from finance_tracker.models.installment_plan import InstallmentPlan
from finance_tracker.models.movement import Movement
from finance_tracker.store.base import RecordStore, Repository

T = TypeVar("T")


class SqlAlchemyRepository(Repository[T], Generic[T]):

    def __init__(self, db: Session, model: type[T]):
        self.db = db
        self.model = model

    def list_all(self) -> list[T]:
        records = self.db.execute(
            select(self.model).order_by(self.model.created_at)
        ).scalars().all()
        return list(records)

    def get_by_id(self, record_id: str) -> T | None:
        return self.db.get(self.model, record_id)

    def create(self, **fields: Any) -> T:
        entity = self.model(
            id=new_id(),
            created_at=datetime.utcnow(),
            **fields,
        )
        self.db.add(entity)
        self.db.flush()
        return entity

    def update(self, entity: T) -> T:
        merged = self.db.merge(entity)
        self.db.flush()
        return merged

    def delete_by_id(self, record_id: str) -> None:
        entity = self.db.get(self.model, record_id)
        if entity is not None:
            self.db.delete(entity)
            self.db.flush()

    def list_by(self, **criteria: Any) -> list[T]:
        records = self.db.execute(
            select(self.model)
            .filter_by(**criteria)
            .order_by(self.model.created_at)
        ).scalars().all()
        return list(records)


class SqlAlchemyStore(RecordStore):
    """All five repositories sharing one session."""

    def __init__(self, db: Session):
        self.db = db
        self.accounts = SqlAlchemyRepository(db, Account)
        self.categories = SqlAlchemyRepository(db, Category)
        self.subcategories = SqlAlchemyRepository(db, Subcategory)
        self.movements = SqlAlchemyRepository(db, Movement)
        self.installment_plans = SqlAlchemyRepository(db, InstallmentPlan)
