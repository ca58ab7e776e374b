"""Handler Helpers — the request contract shared by every /api/v2 route.

Invariants:
    - instrument_request records exactly one outcome per request:
      success | invalid_args | not_found | failed
    - Latency (ms since handler entry) is observed on every exit path
    - Collaborator exceptions leave a route only as a DataApiError
    - Cache-Control is set on success responses only; error bodies are built by
      the global handlers and never carry it

Design Decisions:
    - Context manager over per-route try/finally: early raises (bad hex) and
      collaborator failures hit the same bookkeeping as the success path
    - Message matching for not-found is opt-in per route; only the reachability
      probe relies on it
"""

import time
from contextlib import contextmanager
from typing import Iterator, NoReturn

from fastapi import Response

from dataapi.core.errors import (
    DataApiError, ErrorCategory, NotFoundSignal, ResourceNotFoundError,
    UnimplementedError, UpstreamError, is_not_found,
)
from dataapi.core.ports import RequestMetrics

CACHE_CONTROL_HEADER = "Cache-Control"


@contextmanager
def instrument_request(metrics: RequestMetrics, method: str) -> Iterator[None]:
    """Classify the outcome of the enclosed block and time it."""
    start = time.perf_counter()
    try:
        yield
    except DataApiError as e:
        _record_failure(metrics, method, e.category)
        raise
    except Exception:
        metrics.increment_failed_request_num(method)
        raise
    else:
        metrics.increment_successful_request_num(method)
    finally:
        metrics.observe_latency(method, (time.perf_counter() - start) * 1000)


def _record_failure(
    metrics: RequestMetrics, method: str, category: ErrorCategory,
) -> None:
    if category == ErrorCategory.INVALID_ARGUMENT:
        metrics.increment_invalid_arg_request_num(method)
    elif category == ErrorCategory.NOT_FOUND:
        metrics.increment_not_found_request_num(method)
    else:
        metrics.increment_failed_request_num(method)


def translate_collaborator_error(
    exc: Exception, envelope: str, *, match_not_found_message: bool = False,
) -> DataApiError:
    """Map a collaborator exception onto the HTTP error taxonomy."""
    if isinstance(exc, NotFoundSignal) or (
        match_not_found_message and is_not_found(exc)
    ):
        return ResourceNotFoundError(str(exc))
    return UpstreamError(f"{envelope} - {exc}")


def set_max_age(response: Response, seconds: int) -> None:
    response.headers[CACHE_CONTROL_HEADER] = f"max-age={seconds}"


def raise_unimplemented(
    metrics: RequestMetrics, handler_name: str, method: str,
) -> NoReturn:
    """Fail a placeholder endpoint loudly; records one failed request."""
    metrics.increment_failed_request_num(method)
    raise UnimplementedError(handler_name)
