"""Operator Handler — stake distribution, node semver report and socket reachability.

Invariants:
    - Stake ranking per quorum: stake descending, ties broken by operator id, rank 1-based
    - stake_percentage is the operator's share of its quorum's total stake (0-100)
    - An operator_id filter narrows the ranked output; it never changes ranks or percentages
    - probe_operator_hosts raises OperatorNotFoundError for an unregistered operator id
    - No DB session is held open while sockets are probed

Design Decisions:
    - Probes fan out with asyncio.gather inside this collaborator; the route awaits
      one coroutine, so a cancelled request cancels every pending probe
    - A probe is a bare TCP connect with a timeout: it answers "is the port open",
      not "is the node healthy"
"""

import asyncio
import logging
from collections import defaultdict
from dataclasses import dataclass, field

from sqlalchemy import select

from dataapi.core.domain_types import OperatorId
from dataapi.core.errors import OperatorNotFoundError
from dataapi.infrastructure.database import DatabaseSessionManager
from dataapi.models.operator import OperatorRecord, OperatorStakeRecord
from dataapi.schemas.operator import (
    OperatorPortCheck, OperatorPortCheckResponse, OperatorStake,
    OperatorsStakeResponse, SemverMetrics, SemverReportResponse,
)

logger = logging.getLogger(__name__)

UNKNOWN_SEMVER = "unreachable"
NOT_REGISTERED = "not registered"
MAX_PORT = 65535


@dataclass(frozen=True)
class _OperatorSockets:
    operator_id: str
    dispersal_socket: str
    retrieval_socket: str
    v2_dispersal_socket: str | None
    v2_retrieval_socket: str | None


@dataclass
class _QuorumStakes:
    """Stake of every operator in one quorum."""
    stakes: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.stakes.values())

    def percentage(self, operator_id: str) -> float:
        total = self.total
        if total == 0:
            return 0.0
        return self.stakes.get(operator_id, 0) / total * 100

    def ranked(self) -> list[tuple[str, int]]:
        return sorted(self.stakes.items(), key=lambda item: (-item[1], item[0]))


class SQLOperatorHandler:
    """OperatorHandler backed by the operators/operator_stakes tables."""

    def __init__(self, db: DatabaseSessionManager, probe_timeout_seconds: float = 3.0):
        self._db = db
        self._probe_timeout = probe_timeout_seconds

    async def get_operators_stake(
        self, operator_id: OperatorId | None,
    ) -> OperatorsStakeResponse:
        quorums = await self._load_quorum_stakes()
        wanted = operator_id.hex() if operator_id else None

        ranked_operators: dict[str, list[OperatorStake]] = {}
        for quorum_id in sorted(quorums):
            quorum = quorums[quorum_id]
            entries = []
            for rank, (op_id, stake) in enumerate(quorum.ranked(), start=1):
                if wanted is not None and op_id != wanted:
                    continue
                entries.append(OperatorStake(
                    quorum_id=str(quorum_id),
                    operator_id=op_id,
                    stake=stake,
                    stake_percentage=quorum.percentage(op_id),
                    rank=rank,
                ))
            ranked_operators[str(quorum_id)] = entries
        return OperatorsStakeResponse(stake_ranked_operators=ranked_operators)

    async def scan_operators_host_info(self) -> SemverReportResponse:
        quorums = await self._load_quorum_stakes()
        async with self._db.session() as session:
            result = await session.execute(select(OperatorRecord))
            versions = {
                op.operator_id: op.node_version or UNKNOWN_SEMVER
                for op in result.scalars().all()
            }

        grouped: dict[str, list[str]] = defaultdict(list)
        for op_id, version in versions.items():
            grouped[version].append(op_id)

        report = {}
        for version in sorted(grouped):
            op_ids = sorted(grouped[version])
            report[version] = SemverMetrics(
                semver=version,
                operators=len(op_ids),
                operator_ids=op_ids,
                quorum_stake_percentage={
                    quorum_id: sum(quorum.percentage(op) for op in op_ids)
                    for quorum_id, quorum in sorted(quorums.items())
                },
            )
        logger.info(
            f"Scanned host info of {len(versions)} operators "
            f"across {len(report)} versions",
        )
        return SemverReportResponse(semver=report)

    async def probe_operator_hosts(
        self, operator_id: OperatorId | None,
    ) -> OperatorPortCheckResponse:
        operators = await self._load_sockets(operator_id)
        checks = await asyncio.gather(
            *(self._probe_operator(op) for op in operators),
        )
        return OperatorPortCheckResponse(operators=list(checks))

    async def _load_quorum_stakes(self) -> dict[int, _QuorumStakes]:
        async with self._db.session() as session:
            result = await session.execute(select(OperatorStakeRecord))
            records = result.scalars().all()
            quorums: dict[int, _QuorumStakes] = defaultdict(_QuorumStakes)
            for record in records:
                quorums[record.quorum_id].stakes[record.operator_id] = int(record.stake)
        return dict(quorums)

    async def _load_sockets(
        self, operator_id: OperatorId | None,
    ) -> list[_OperatorSockets]:
        query = select(OperatorRecord).order_by(OperatorRecord.operator_id)
        if operator_id is not None:
            query = query.where(OperatorRecord.operator_id == operator_id.hex())
        async with self._db.session() as session:
            result = await session.execute(query)
            operators = [
                _OperatorSockets(
                    operator_id=op.operator_id,
                    dispersal_socket=op.dispersal_socket,
                    retrieval_socket=op.retrieval_socket,
                    v2_dispersal_socket=op.v2_dispersal_socket,
                    v2_retrieval_socket=op.v2_retrieval_socket,
                )
                for op in result.scalars().all()
            ]
        if operator_id is not None and not operators:
            raise OperatorNotFoundError(operator_id.hex())
        return operators

    async def _probe_operator(self, op: _OperatorSockets) -> OperatorPortCheck:
        dispersal, retrieval, v2_dispersal, v2_retrieval = await asyncio.gather(
            check_socket(op.dispersal_socket, self._probe_timeout),
            check_socket(op.retrieval_socket, self._probe_timeout),
            check_socket(op.v2_dispersal_socket, self._probe_timeout),
            check_socket(op.v2_retrieval_socket, self._probe_timeout),
        )
        return OperatorPortCheck(
            operator_id=op.operator_id,
            dispersal_socket=op.dispersal_socket,
            retrieval_socket=op.retrieval_socket,
            v2_dispersal_socket=op.v2_dispersal_socket,
            v2_retrieval_socket=op.v2_retrieval_socket,
            dispersal_online=dispersal[0],
            dispersal_status=dispersal[1],
            retrieval_online=retrieval[0],
            retrieval_status=retrieval[1],
            v2_dispersal_online=v2_dispersal[0],
            v2_dispersal_status=v2_dispersal[1],
            v2_retrieval_online=v2_retrieval[0],
            v2_retrieval_status=v2_retrieval[1],
        )


def split_socket(socket: str) -> tuple[str, int]:
    """Split "host:port" into its parts. Raises ValueError on malformed input."""
    host, sep, port_str = socket.rpartition(":")
    if not sep or not host:
        raise ValueError(f"socket {socket!r} is not host:port")
    port = int(port_str)
    if not 0 <= port <= MAX_PORT:
        raise ValueError(f"port {port} out of range")
    return host.strip("[]"), port


async def check_socket(socket: str | None, timeout: float) -> tuple[bool, str]:
    """TCP-connect to socket; returns (online, status message)."""
    if not socket:
        return False, NOT_REGISTERED
    try:
        host, port = split_socket(socket)
    except ValueError:
        return False, f"invalid socket {socket}"
    try:
        _, writer = await asyncio.wait_for(
            asyncio.open_connection(host, port), timeout=timeout,
        )
    except asyncio.TimeoutError:
        return False, f"{socket} timed out after {timeout}s"
    except OSError as e:
        return False, f"{socket} unreachable: {e.strerror or e}"
    # UnicodeError (IDNA) for over-long host labels, OverflowError for bad ports
    except (ValueError, OverflowError):
        return False, f"invalid socket {socket}"
    writer.close()
    try:
        await writer.wait_closed()
    except OSError as e:
        logger.debug(f"Closing probe connection to {socket} failed: {e}")
    return True, "reachable"
