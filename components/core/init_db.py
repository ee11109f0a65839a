"""Storage construction and dependency injection."""

from datetime import datetime
from typing import Callable, Optional

from fastapi import Depends, Request

from components.analytics.aggregator import AnalyticsAggregator
from components.core.config import Settings
from components.core.database import DatabaseManager
from components.storage.base import Storage
from components.storage.memory import MemStorage
from components.storage.sql import SqlStorage
# Import all models to ensure they're registered
import components.transaction.models
import components.budget.models


def create_storage(settings: Settings) -> Storage:
    """Build the storage backend selected by ``STORAGE_BACKEND``."""
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "memory":
        return MemStorage()
    if backend == "sql":
        return SqlStorage(DatabaseManager(settings.async_db_url))
    raise ValueError(f"Unknown storage backend: {settings.STORAGE_BACKEND}")


def get_storage(request: Request) -> Storage:
    """FastAPI dependency returning the storage injected into the application."""
    return request.app.state.storage


def get_app_settings(request: Request) -> Settings:
    """FastAPI dependency returning the settings the application was built with."""
    return request.app.state.settings


def get_analytics(
    request: Request,
    storage: Storage = Depends(get_storage),
) -> AnalyticsAggregator:
    """FastAPI dependency for the analytics aggregator over the current storage."""
    clock: Optional[Callable[[], datetime]] = getattr(request.app.state, "clock", None)
    if clock is None:
        return AnalyticsAggregator(storage)
    return AnalyticsAggregator(storage, clock=clock)
