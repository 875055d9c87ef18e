"""
Shared test fixtures.

Sets up an isolated SQLite database so tests never touch the
real one. Tables are created before each test and dropped
after it.

Ledger tests run against both record stores through the
parametrized `store` fixture: the SQLAlchemy store on the test
database and the in-memory store.
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from finance_tracker import models  # noqa: F401
from finance_tracker.main import app
from finance_tracker.models.base import Base, get_db
from finance_tracker.models.enums import AccountType, Currency
from finance_tracker.schemas.account import AccountCreate
from finance_tracker.services.account_service import AccountService
from finance_tracker.store.memory import InMemoryStore
from finance_tracker.store.sql import SqlAlchemyStore


TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop them after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def sql_store(db_session):
    return SqlAlchemyStore(db_session)


@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture(params=["memory", "sql"])
def store(request, db_session):
    """Every ledger test runs once per record store."""
    if request.param == "sql":
        return SqlAlchemyStore(db_session)
    return InMemoryStore()


@pytest.fixture
def make_account(store):
    """Factory for accounts on the parametrized store."""
    service = AccountService(store)

    def _make(
        name="Cash",
        balance="0",
        account_type=AccountType.CASH,
        currency=Currency.LOCAL,
    ):
        return service.create_account(AccountCreate(
            name=name,
            account_type=account_type,
            currency=currency,
            balance=Decimal(balance),
        ))

    return _make


@pytest.fixture
def client(db_session):
    """
    Provide a test client with the test database.

    The get_db dependency is overridden so the app uses the
    test session instead of the real database.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
