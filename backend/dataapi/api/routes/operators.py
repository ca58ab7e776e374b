"""Operator Routes — stake distribution, node info scan and reachability probe.

Invariants:
    - operator_id is optional; absent/empty means every registered operator
    - A present operator_id must be 32 bytes of hex, else 400 before any collaborator call
    - Reachability maps a not-found signal from the handler onto 404
    - Responses are relayed exactly as the operator handler produced them

Design Decisions:
    - Reachability also accepts a "not found" marker in a foreign exception's
      message, for handlers that cannot raise OperatorNotFoundError
"""

import logging

from fastapi import APIRouter, Depends, Query, Response

from dataapi.api.dependencies import get_app_settings, get_metrics, get_operator_handler
from dataapi.api.routes.handler_helpers import (
    instrument_request, raise_unimplemented, set_max_age,
    translate_collaborator_error,
)
from dataapi.config import Settings
from dataapi.core.domain_types import parse_operator_id
from dataapi.core.ports import OperatorHandler, RequestMetrics
from dataapi.schemas.operator import (
    OperatorPortCheckResponse, OperatorsStakeResponse, SemverReportResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v2/operators", tags=["operators"])

OPERATOR_ID_DESCRIPTION = (
    "Operator ID in hex string [default: all operators if unspecified]"
)


@router.get("/non-signers")
async def fetch_non_signers(metrics: RequestMetrics = Depends(get_metrics)):
    raise_unimplemented(metrics, "FetchNonSignersHandler", "FetchNonSigners")


@router.get("/stake", response_model=OperatorsStakeResponse)
async def fetch_operators_stake(
    response: Response,
    operator_id: str = Query("", description=OPERATOR_ID_DESCRIPTION),
    handler: OperatorHandler = Depends(get_operator_handler),
    metrics: RequestMetrics = Depends(get_metrics),
    settings: Settings = Depends(get_app_settings),
):
    """Operator stake distribution, ranked per quorum."""
    with instrument_request(metrics, "FetchOperatorsStake"):
        op_id = parse_operator_id(operator_id)
        logger.info(
            "Getting operators stake distribution",
            extra={"operator_id": operator_id or "all"},
        )
        try:
            stake = await handler.get_operators_stake(op_id)
        except Exception as e:
            raise translate_collaborator_error(e, "failed to get operator stake")

    set_max_age(response, settings.max_operators_stake_age)
    return stake


@router.get("/nodeinfo", response_model=SemverReportResponse)
async def fetch_operators_node_info(
    response: Response,
    handler: OperatorHandler = Depends(get_operator_handler),
    metrics: RequestMetrics = Depends(get_metrics),
    settings: Settings = Depends(get_app_settings),
):
    """Semver report across the active operator set."""
    with instrument_request(metrics, "FetchOperatorsNodeInfo"):
        try:
            report = await handler.scan_operators_host_info()
        except Exception as e:
            raise translate_collaborator_error(
                e, "failed to scan operators host info",
            )

    set_max_age(response, settings.max_operator_port_check_age)
    return report


@router.get("/reachability", response_model=OperatorPortCheckResponse)
async def check_operators_reachability(
    response: Response,
    operator_id: str = Query("", description=OPERATOR_ID_DESCRIPTION),
    handler: OperatorHandler = Depends(get_operator_handler),
    metrics: RequestMetrics = Depends(get_metrics),
    settings: Settings = Depends(get_app_settings),
):
    """Probe the registered sockets of one or all operators."""
    with instrument_request(metrics, "OperatorPortCheck"):
        op_id = parse_operator_id(operator_id)
        logger.info(
            "Checking operator ports",
            extra={"operator_id": operator_id or "all"},
        )
        try:
            report = await handler.probe_operator_hosts(op_id)
        except Exception as e:
            raise translate_collaborator_error(
                e, "operator port check failed", match_not_found_message=True,
            )

    set_max_age(response, settings.max_operator_port_check_age)
    return report
