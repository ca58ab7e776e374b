"""Operator endpoints over the SQL operator handler.

Tests cover:
    - /stake without operator_id reports the same total stake as querying every
      known operator id one at a time
    - /reachability: unknown operator → 404
    - /reachability: one operator with an unusable socket still yields 200, with
      that socket marked invalid and every other result intact
"""

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient

from dataapi.config import Settings
from dataapi.infrastructure.operator_handler import SQLOperatorHandler
from dataapi.main import create_app
from dataapi.models.operator import OperatorRecord
from tests.api.mock_collaborators import StubMetadataStore
from tests.infrastructure.seed_data import VERSIONS


@pytest.fixture
async def sql_client(db_manager, seed_operators):
    app = create_app(
        Settings(server_mode="release"),
        metadata_store=StubMetadataStore(),
        operator_handler=SQLOperatorHandler(db_manager),
    )
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


def _sum_stakes(body: dict) -> int:
    return sum(
        entry["stake"]
        for entries in body["stake_ranked_operators"].values()
        for entry in entries
    )


async def test_full_distribution_matches_per_operator_sum(sql_client):
    full = await sql_client.get("/api/v2/operators/stake")
    assert full.status_code == 200

    per_operator = 0
    for op_id in VERSIONS:
        res = await sql_client.get(
            "/api/v2/operators/stake", params={"operator_id": op_id},
        )
        assert res.status_code == 200
        per_operator += _sum_stakes(res.json())

    assert _sum_stakes(full.json()) == per_operator


async def test_reachability_unknown_operator_is_404_end_to_end(sql_client):
    res = await sql_client.get(
        "/api/v2/operators/reachability", params={"operator_id": "09" * 32},
    )

    assert res.status_code == 404
    assert res.json() == {"error": f"operator {'09' * 32} not found"}


@pytest.fixture
async def listening_port():
    server = await asyncio.start_server(lambda r, w: w.close(), "127.0.0.1", 0)
    yield server.sockets[0].getsockname()[1]
    server.close()
    await server.wait_closed()


async def test_reachability_survives_one_unusable_socket(
    db_manager, test_db, listening_port,
):
    healthy, broken = "0a" * 32, "0b" * 32
    live = f"127.0.0.1:{listening_port}"
    test_db.add(OperatorRecord(
        operator_id=healthy, dispersal_socket=live, retrieval_socket=live,
    ))
    test_db.add(OperatorRecord(
        operator_id=broken, dispersal_socket=live,
        retrieval_socket="127.0.0.1:70000",
    ))
    await test_db.commit()

    app = create_app(
        Settings(server_mode="release"),
        metadata_store=StubMetadataStore(),
        operator_handler=SQLOperatorHandler(db_manager, probe_timeout_seconds=1.0),
    )
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as client:
        res = await client.get("/api/v2/operators/reachability")

    assert res.status_code == 200
    checks = {c["operator_id"]: c for c in res.json()["operators"]}
    assert set(checks) == {healthy, broken}
    assert checks[healthy]["dispersal_online"] is True
    assert checks[healthy]["retrieval_online"] is True
    assert checks[broken]["dispersal_online"] is True
    assert checks[broken]["retrieval_online"] is False
    assert checks[broken]["retrieval_status"] == "invalid socket 127.0.0.1:70000"
