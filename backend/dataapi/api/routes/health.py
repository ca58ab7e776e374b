"""Health Probe — root liveness endpoint outside the /api/v2 base path.

Invariants:
    - GET / always returns 202 {"status": "OK"} while the process is up
    - No Cache-Control header; the access log skips this path
"""

from fastapi import APIRouter, status

from dataapi.schemas.common import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/", response_model=HealthResponse, status_code=status.HTTP_202_ACCEPTED,
)
async def health_check():
    return HealthResponse()
