"""SQL Operator Handler — stake ranking, semver scan and reachability probing.

Tests cover:
    - Ranking by stake descending, percentages of quorum total, 1-based ranks
    - operator_id filter keeps ranks/percentages of the full distribution
    - Full distribution stake sum == sum of per-operator queries
    - Semver groups operators, unknown version → "unreachable"
    - Probe: unknown operator → OperatorNotFoundError, open/closed/missing sockets
    - Out-of-range ports and over-long host labels → "invalid socket", never raised
"""

import asyncio

import pytest

from dataapi.core.domain_types import OperatorId
from dataapi.core.errors import OperatorNotFoundError
from dataapi.infrastructure.operator_handler import (
    NOT_REGISTERED, SQLOperatorHandler, check_socket, split_socket,
)
from tests.infrastructure.seed_data import STAKES, VERSIONS

LONG_LABEL = "a" * 64


@pytest.fixture
def handler(db_manager):
    return SQLOperatorHandler(db_manager, probe_timeout_seconds=0.5)


def _total_stake(response) -> int:
    return sum(
        entry.stake
        for entries in response.stake_ranked_operators.values()
        for entry in entries
    )


# ─── get_operators_stake ─────────────────────────────────────────

async def test_stake_ranked_descending_with_percentages(handler, seed_operators):
    response = await handler.get_operators_stake(None)

    quorum0 = response.stake_ranked_operators["0"]
    assert [e.operator_id for e in quorum0] == ["01" * 32, "02" * 32, "03" * 32]
    assert [e.rank for e in quorum0] == [1, 2, 3]
    assert [e.stake_percentage for e in quorum0] == [60.0, 30.0, 10.0]

    quorum1 = response.stake_ranked_operators["1"]
    assert [e.operator_id for e in quorum1] == ["03" * 32, "01" * 32]
    assert quorum1[0].stake_percentage == 75.0


async def test_stake_filter_keeps_global_rank(handler, seed_operators):
    response = await handler.get_operators_stake(OperatorId(bytes.fromhex("03" * 32)))

    assert [(e.rank, e.stake) for e in response.stake_ranked_operators["0"]] == [(3, 100)]
    assert [(e.rank, e.stake) for e in response.stake_ranked_operators["1"]] == [(1, 150)]


async def test_full_distribution_sums_to_per_operator_queries(handler, seed_operators):
    full = await handler.get_operators_stake(None)

    per_operator = 0
    for op_id in VERSIONS:
        single = await handler.get_operators_stake(OperatorId(bytes.fromhex(op_id)))
        per_operator += _total_stake(single)

    assert _total_stake(full) == per_operator
    assert per_operator == sum(sum(s.values()) for s in STAKES.values())


async def test_stake_ties_broken_by_operator_id(handler, test_db, seed_operators):
    from dataapi.models.operator import OperatorStakeRecord

    test_db.add(OperatorStakeRecord(operator_id="02" * 32, quorum_id=2, stake="5"))
    test_db.add(OperatorStakeRecord(operator_id="01" * 32, quorum_id=2, stake="5"))
    await test_db.commit()

    response = await handler.get_operators_stake(None)

    assert [e.operator_id for e in response.stake_ranked_operators["2"]] == [
        "01" * 32, "02" * 32,
    ]


async def test_stake_empty_registry_returns_empty_map(handler):
    response = await handler.get_operators_stake(None)

    assert response.stake_ranked_operators == {}


# ─── scan_operators_host_info ────────────────────────────────────

async def test_semver_report_groups_by_version(handler, seed_operators):
    report = await handler.scan_operators_host_info()

    assert set(report.semver) == {"0.8.4", "unreachable"}
    current = report.semver["0.8.4"]
    assert current.operators == 2
    assert current.operator_ids == ["01" * 32, "02" * 32]
    assert current.quorum_stake_percentage[0] == pytest.approx(90.0)
    assert current.quorum_stake_percentage[1] == pytest.approx(25.0)
    assert report.semver["unreachable"].operator_ids == ["03" * 32]


# ─── probe_operator_hosts ────────────────────────────────────────

async def test_probe_unknown_operator_raises_not_found(handler, seed_operators):
    with pytest.raises(OperatorNotFoundError, match="not found"):
        await handler.probe_operator_hosts(OperatorId(bytes.fromhex("09" * 32)))


async def test_probe_reports_every_registered_operator(handler, seed_operators, monkeypatch):
    probed = []

    async def fake_check(socket, timeout):
        probed.append(socket)
        if socket is None:
            return False, NOT_REGISTERED
        return socket.endswith(":32005"), "stubbed"

    monkeypatch.setattr(
        "dataapi.infrastructure.operator_handler.check_socket", fake_check,
    )

    response = await handler.probe_operator_hosts(None)

    assert [c.operator_id for c in response.operators] == sorted(VERSIONS)
    assert all(c.dispersal_online for c in response.operators)
    assert not any(c.retrieval_online for c in response.operators)
    legacy = response.operators[2]
    assert legacy.v2_dispersal_socket is None
    assert legacy.v2_dispersal_status == NOT_REGISTERED
    assert len(probed) == 4 * len(VERSIONS)


async def test_check_socket_reaches_listening_port():
    server = await asyncio.start_server(lambda r, w: w.close(), "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        online, status = await check_socket(f"127.0.0.1:{port}", timeout=1.0)
    finally:
        server.close()
        await server.wait_closed()

    assert online is True
    assert status == "reachable"


async def test_check_socket_closed_port_is_offline():
    server = await asyncio.start_server(lambda r, w: w.close(), "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    server.close()
    await server.wait_closed()

    online, status = await check_socket(f"127.0.0.1:{port}", timeout=1.0)

    assert online is False
    assert status.startswith(f"127.0.0.1:{port}")


@pytest.mark.parametrize("socket,expected", [
    (None, NOT_REGISTERED),
    ("", NOT_REGISTERED),
    ("no-port-here", "invalid socket no-port-here"),
    ("host:abc", "invalid socket host:abc"),
    ("127.0.0.1:70000", "invalid socket 127.0.0.1:70000"),
    ("127.0.0.1:-1", "invalid socket 127.0.0.1:-1"),
    (f"{LONG_LABEL}.example:32005", f"invalid socket {LONG_LABEL}.example:32005"),
])
async def test_check_socket_rejects_unusable_sockets(socket, expected):
    assert await check_socket(socket, timeout=1.0) == (False, expected)


@pytest.mark.parametrize("socket", ["10.0.0.1:65536", "10.0.0.1:-5"])
def test_split_socket_rejects_out_of_range_port(socket):
    with pytest.raises(ValueError):
        split_socket(socket)


def test_split_socket_handles_ipv6_style_host():
    assert split_socket("[::1]:32005") == ("::1", 32005)


async def test_check_socket_ignores_close_failure_after_connect(monkeypatch):
    class _Writer:
        def close(self):
            pass

        async def wait_closed(self):
            raise ConnectionResetError("reset by peer")

    async def fake_open_connection(host, port):
        return None, _Writer()

    monkeypatch.setattr(asyncio, "open_connection", fake_open_connection)

    assert await check_socket("10.0.0.1:32005", timeout=1.0) == (True, "reachable")
