"""Route test fixtures — FastAPI app built around stub collaborators.

Invariants:
    - Every test gets fresh stubs and a fresh Metrics registry
    - Cache ages are distinct per resource class so headers identify their class
    - No database is touched: both collaborators are stubs

Design Decisions:
    - create_app() injection over dependency_overrides: collaborators are
      app-scoped, so the factory is the natural seam
"""

import pytest
from httpx import ASGITransport, AsyncClient

from dataapi.config import Settings
from dataapi.infrastructure.metrics import Metrics
from dataapi.main import create_app
from tests.api.mock_collaborators import (
    FEED_AGE, PORT_CHECK_AGE, STAKE_AGE, StubMetadataStore, StubOperatorHandler,
)


@pytest.fixture
def settings():
    return Settings(
        server_mode="release",
        allow_origins=["https://explorer.example"],
        max_feed_blob_age=FEED_AGE,
        max_operators_stake_age=STAKE_AGE,
        max_operator_port_check_age=PORT_CHECK_AGE,
    )


@pytest.fixture
def store():
    return StubMetadataStore()


@pytest.fixture
def operator_handler():
    return StubOperatorHandler()


@pytest.fixture
def metrics():
    return Metrics()


@pytest.fixture
async def client(settings, store, operator_handler, metrics):
    app = create_app(
        settings,
        metadata_store=store,
        operator_handler=operator_handler,
        metrics=metrics,
    )
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
