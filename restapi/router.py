"""Application configuration and router setup."""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Callable, Optional

import fastapi
from fastapi.middleware import cors

from components.core import init_db
from components.core.config import Settings, get_settings
from components.core.logging_setup import configure_logging, get_logger
from components.storage.base import Storage
from restapi import errors
from restapi.endpoints import analytics, budgets, categories, health_check, transactions

logger = get_logger("finance_tracker.restapi")


def create_app(
    storage: Optional[Storage] = None,
    settings: Optional[Settings] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> fastapi.FastAPI:
    """
    Create and configure the FastAPI application.

    ``storage`` is injected into every request handler; when omitted the
    backend named by ``STORAGE_BACKEND`` is built. ``clock`` overrides the
    current time used by analytics.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)
    storage = storage or init_db.create_storage(settings)

    @asynccontextmanager
    async def lifespan(app: fastapi.FastAPI):
        await storage.startup()
        logger.info("Storage %s ready", type(storage).__name__)
        try:
            yield
        finally:
            await storage.shutdown()

    app = fastapi.FastAPI(
        title=settings.APP_NAME,
        description="Personal finance tracking API: transactions, budgets and analytics",
        version=settings.API_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.storage = storage
    app.state.clock = clock

    errors.init_error_handlers(app)

    # Add CORS middleware
    app.add_middleware(
        cors.CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health_check.router)
    app.include_router(transactions.router, prefix=settings.API_PREFIX)
    app.include_router(budgets.router, prefix=settings.API_PREFIX)
    app.include_router(categories.router, prefix=settings.API_PREFIX)
    app.include_router(analytics.router, prefix=settings.API_PREFIX)

    return app
