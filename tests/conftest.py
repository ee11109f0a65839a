"""Shared fixtures.

Every test gets its own ``MemStorage`` and an application wired to it, so no
state leaks between tests. Analytics run against a fixed clock in March 2024.
"""

from datetime import datetime
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from components.core.config import Settings
from components.storage.memory import MemStorage
from restapi.router import create_app

FIXED_NOW = datetime(2024, 3, 15, 12, 0, 0)


def fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def storage() -> MemStorage:
    return MemStorage()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, STORAGE_BACKEND="memory")


@pytest.fixture
def client(storage: MemStorage, settings: Settings) -> Iterator[TestClient]:
    app = create_app(storage=storage, settings=settings, clock=fixed_clock)
    with TestClient(app) as test_client:
        yield test_client
