"""Error Handlers — global exception handlers mapping every failure onto ErrorResponse.

Invariants:
    - DataApiError → its http_status with {"error": message}
    - RequestValidationError → 400 with {"error": "<field>: <reason>"}
    - HTTPException (unknown route, wrong method) keeps its status, same body shape
    - Exception (catch-all) → 500, never leaks internal details
    - WARNING-severity errors log at warning; everything else at error

Design Decisions:
    - Four-layer handler: domain (DataApiError), validation (Pydantic),
      routing (Starlette HTTPException), catch-all (Exception)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dataapi.core.errors import DataApiError, ErrorSeverity
from dataapi.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_data_api_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_data_api_error_handler(app: FastAPI) -> None:

    @app.exception_handler(DataApiError)
    async def data_api_error_handler(request: Request, exc: DataApiError):
        level = (
            logging.WARNING if exc.severity == ErrorSeverity.WARNING
            else logging.ERROR
        )
        logger.log(
            level, f"DataApiError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(
                error=_summarize_validation_errors(exc),
            ).model_dump(),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=str(exc.detail)).model_dump(),
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                error="An unexpected error occurred",
            ).model_dump(),
        )


def _summarize_validation_errors(exc: RequestValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
        for e in exc.errors()
    )
