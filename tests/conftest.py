# tests/conftest.py
import os
from collections.abc import Iterator

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

# Boot the app in testing mode before pinmap.main is imported anywhere
load_dotenv(".env.test", override=False)
os.environ["TESTING"] = "1"
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("SENTRY_DSN", "")

from pinmap.main import create_app  # noqa: E402
from pinmap.repositories import InMemoryPinRepository  # noqa: E402
from pinmap.services.pin_store import PinStore  # noqa: E402
from pinmap.services.spatial_index import GridSpatialIndex  # noqa: E402
from tests.factories import SequentialIds, StepClock, memory_settings  # noqa: E402


@pytest.fixture
def repository() -> InMemoryPinRepository:
    return InMemoryPinRepository()


@pytest.fixture
def store(repository: InMemoryPinRepository) -> PinStore:
    return PinStore(
        repository,
        GridSpatialIndex(),
        clock=StepClock(),
        id_factory=SequentialIds(),
    )


@pytest.fixture
def app(monkeypatch) -> FastAPI:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("CATALOG_PATH", raising=False)
    return create_app(memory_settings())


@pytest_asyncio.fixture
async def app_client(app: FastAPI):
    # ASGITransport does not run the lifespan; warm the (empty) index by hand
    await app.state.pin_store.load()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """TestClient runs the lifespan, like a real server start."""
    with TestClient(app) as test_client:
        yield test_client
