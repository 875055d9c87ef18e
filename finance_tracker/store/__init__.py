"""Record store contract and its implementations."""

from finance_tracker.store.base import RecordStore, Repository
from finance_tracker.store.memory import InMemoryRepository, InMemoryStore
from finance_tracker.store.sql import SqlAlchemyRepository, SqlAlchemyStore

__all__ = [
    "RecordStore",
    "Repository",
    "InMemoryRepository",
    "InMemoryStore",
    "SqlAlchemyRepository",
    "SqlAlchemyStore",
]
