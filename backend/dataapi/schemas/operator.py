"""Operator Schemas — stake distribution, semver report and reachability report.

Invariants:
    - Produced by the operator handler and relayed unchanged by the routes
    - Quorum ids are rendered as strings in the stake map (JSON object keys)
"""

from pydantic import BaseModel, ConfigDict


class OperatorStake(BaseModel):
    model_config = ConfigDict(frozen=True)

    quorum_id: str
    operator_id: str
    stake: int
    stake_percentage: float
    rank: int


class OperatorsStakeResponse(BaseModel):
    """Stake-ranked operators per quorum, highest stake first."""
    model_config = ConfigDict(frozen=True)

    stake_ranked_operators: dict[str, list[OperatorStake]]


class SemverMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    semver: str
    operators: int
    operator_ids: list[str]
    quorum_stake_percentage: dict[int, float]


class SemverReportResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    semver: dict[str, SemverMetrics]


class OperatorPortCheck(BaseModel):
    """Reachability of one operator's registered sockets."""
    model_config = ConfigDict(frozen=True)

    operator_id: str
    dispersal_socket: str
    retrieval_socket: str
    v2_dispersal_socket: str | None = None
    v2_retrieval_socket: str | None = None
    dispersal_online: bool
    retrieval_online: bool
    v2_dispersal_online: bool = False
    v2_retrieval_online: bool = False
    dispersal_status: str
    retrieval_status: str
    v2_dispersal_status: str = "not registered"
    v2_retrieval_status: str = "not registered"


class OperatorPortCheckResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    operators: list[OperatorPortCheck]
