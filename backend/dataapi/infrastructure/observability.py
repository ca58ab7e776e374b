"""Structured Logging — JSON formatter, setup and the HTTP access-log middleware.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (method, operator_id, error_code, path, ...) surfaced when present
    - JSON format in production, human-readable in development
    - The root liveness path "/" is never access-logged

Design Decisions:
    - setup_logging called once on startup via lifespan
    - Access log as an HTTP middleware: one line per request with status and latency
"""

import json
import logging
import time
from datetime import datetime, timezone

from fastapi import Request

access_logger = logging.getLogger("dataapi.access")

_EXTRA_FIELDS = (
    "operator_id", "error_code", "path", "status_code", "latency_ms", "client",
)

ACCESS_LOG_SKIP_PATHS = frozenset({"/"})


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))


async def access_log_middleware(request: Request, call_next):
    """Log method, path, status and latency of every request except "/"."""
    if request.url.path in ACCESS_LOG_SKIP_PATHS:
        return await call_next(request)
    start = time.perf_counter()
    response = await call_next(request)
    access_logger.info(
        f"{request.method} {request.url.path} {response.status_code}",
        extra={
            "path": request.url.path,
            "status_code": response.status_code,
            "latency_ms": round((time.perf_counter() - start) * 1000, 3),
            "client": request.client.host if request.client else None,
        },
    )
    return response
