"""
In-process record store.

Keeps each collection in a dict keyed by id. Records are copied
on the way in and on the way out, so a caller holding an entity
never sees a change until it calls update(), exactly like a
remote store. There are no transactions: a composite operation
that fails halfway leaves its earlier writes in place.
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from sqlalchemy import inspect

from finance_tracker.ids import new_id
from finance_tracker.models.account import Account
from finance_tracker.models.category import Category, Subcategory
from finance_tracker.models.installment_plan import InstallmentPlan
from finance_tracker.models.movement import Movement
from finance_tracker.store.base import RecordStore, Repository

T = TypeVar("T")


class InMemoryRepository(Repository[T], Generic[T]):

    def __init__(self, model: type[T]):
        self.model = model
        self._records: dict[str, T] = {}
        self._columns = [attr.key for attr in inspect(model).column_attrs]

    def _copy(self, entity: T) -> T:
        return self.model(
            **{key: getattr(entity, key) for key in self._columns}
        )

    def _defaults(self) -> dict[str, Any]:
        # Column defaults normally apply at flush; there is no flush here.
        values = {}
        for column in self.model.__table__.columns:
            default = column.default
            if default is not None and default.is_scalar:
                values[column.key] = default.arg
            else:
                values[column.key] = None
        return values

    def list_all(self) -> list[T]:
        return [self._copy(record) for record in self._records.values()]

    def get_by_id(self, record_id: str) -> T | None:
        record = self._records.get(record_id)
        if record is None:
            return None
        return self._copy(record)

    def create(self, **fields: Any) -> T:
        values = self._defaults()
        values.update(fields)
        values["id"] = new_id()
        values["created_at"] = datetime.utcnow()
        entity = self.model(**values)
        self._records[entity.id] = entity
        return self._copy(entity)

    def update(self, entity: T) -> T:
        if entity.id not in self._records:
            raise KeyError(f"{self.model.__name__} {entity.id} is not stored")
        self._records[entity.id] = self._copy(entity)
        return self._copy(entity)

    def delete_by_id(self, record_id: str) -> None:
        self._records.pop(record_id, None)

    def list_by(self, **criteria: Any) -> list[T]:
        return [
            self._copy(record)
            for record in self._records.values()
            if all(getattr(record, key) == value for key, value in criteria.items())
        ]


class InMemoryStore(RecordStore):

    def __init__(self):
        self.accounts = InMemoryRepository(Account)
        self.categories = InMemoryRepository(Category)
        self.subcategories = InMemoryRepository(Subcategory)
        self.movements = InMemoryRepository(Movement)
        self.installment_plans = InMemoryRepository(InstallmentPlan)
