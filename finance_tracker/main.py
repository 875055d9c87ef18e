"""
Finance Tracker FastAPI application.

This is the entry point for the application.
All routers are registered here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from finance_tracker.config import get_settings
from finance_tracker.api.accounts import router as accounts_router
from finance_tracker.api.categories import router as categories_router
from finance_tracker.api.health import router as health_router
from finance_tracker.api.ledger import router as ledger_router
from finance_tracker.api.movements import router as movements_router
from finance_tracker.models.base import SessionLocal
from finance_tracker.services.seed_service import seed_defaults
from finance_tracker.store.sql import SqlAlchemyStore

settings = get_settings()
logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    if settings.SEED_DEFAULTS:
        db = SessionLocal()
        try:
            seed_defaults(SqlAlchemyStore(db), settings.TRANSFER_CATEGORY_NAME)
            db.commit()
        finally:
            db.close()
    logger.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Personal finance tracker: accounts, movements, transfers and installments",
    lifespan=lifespan,
)

# Register routers
app.include_router(health_router)
app.include_router(accounts_router)
app.include_router(categories_router)
app.include_router(movements_router)
app.include_router(ledger_router)
