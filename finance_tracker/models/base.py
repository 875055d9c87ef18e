"""
Database engine, session management, and base model.

Every model inherits from Base. Every request gets a session
from get_db().
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from finance_tracker.config import get_settings

settings = get_settings()


def _connect_args(url: str) -> dict:
    # SQLite connections are shared across FastAPI worker threads
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


# --- Engine ---
# pool_pre_ping=True tests connections before using them,
# which handles a restarted database or a stale connection.
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.DATABASE_URL),
)

# --- Session Factory ---
# autocommit=False means the caller decides when a composite
# ledger operation is saved. A movement and the balance update
# it implies are committed together or not at all.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


# --- Dependency for FastAPI ---
def get_db():
    """
    Provide a database session for a single request.

    The try/finally pattern ensures the session is always
    closed, even when the endpoint raises.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
