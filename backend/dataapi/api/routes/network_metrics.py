"""Network Metrics Routes — reserved surface for overview and throughput.

Invariants:
    - Both endpoints always fail with 500 and an "<Handler> unimplemented" message,
      never an empty 200 or a 404
"""

from fastapi import APIRouter, Depends

from dataapi.api.dependencies import get_metrics
from dataapi.api.routes.handler_helpers import raise_unimplemented
from dataapi.core.ports import RequestMetrics

router = APIRouter(prefix="/api/v2/metrics", tags=["metrics"])


@router.get("/overview")
async def fetch_metrics_overview(metrics: RequestMetrics = Depends(get_metrics)):
    raise_unimplemented(
        metrics, "FetchMetricsOverviewHandler", "FetchMetricsOverview",
    )


@router.get("/throughput")
async def fetch_metrics_throughput(metrics: RequestMetrics = Depends(get_metrics)):
    raise_unimplemented(
        metrics, "FetchMetricsThroughputHandler", "FetchMetricsThroughput",
    )
