"""Collaborator Ports — the interfaces the route layer consumes.

Invariants:
    - Every method is a coroutine awaited from the request task (cancellation propagates)
    - Not-found is signalled by raising a NotFoundSignal subclass (core/errors.py)
    - Any other exception is an upstream failure

Design Decisions:
    - typing.Protocol over ABCs: tests pass plain stub objects, production passes
      the SQL-backed implementations from infrastructure/
"""

from typing import Protocol

from dataapi.core.domain_types import BatchHeaderHash, BlobKey, OperatorId
from dataapi.schemas.batch import Attestation, BatchHeader
from dataapi.schemas.blob import BlobMetadata
from dataapi.schemas.operator import (
    OperatorPortCheckResponse, OperatorsStakeResponse, SemverReportResponse,
)


class BlobMetadataStore(Protocol):
    async def get_blob_metadata(self, blob_key: BlobKey) -> BlobMetadata:
        ...

    async def get_signed_batch(
        self, batch_header_hash: BatchHeaderHash,
    ) -> tuple[BatchHeader, Attestation]:
        ...


class OperatorHandler(Protocol):
    async def get_operators_stake(
        self, operator_id: OperatorId | None,
    ) -> OperatorsStakeResponse:
        ...

    async def scan_operators_host_info(self) -> SemverReportResponse:
        ...

    async def probe_operator_hosts(
        self, operator_id: OperatorId | None,
    ) -> OperatorPortCheckResponse:
        ...


class RequestMetrics(Protocol):
    def increment_successful_request_num(self, method: str) -> None:
        ...

    def increment_failed_request_num(self, method: str) -> None:
        ...

    def increment_invalid_arg_request_num(self, method: str) -> None:
        ...

    def increment_not_found_request_num(self, method: str) -> None:
        ...

    def observe_latency(self, method: str, latency_ms: float) -> None:
        ...
