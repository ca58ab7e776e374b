"""Data API — FastAPI application factory and ASGI entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure → {"error": message}
    - Settings read once in create_app(); server_mode never changes afterwards
    - Collaborators built once and shared by all requests via app.state

Design Decisions:
    - Factory over module-level wiring: tests inject stub collaborators without
      touching a database
    - CORS wildcard only outside release mode, with credentials still allowed
    - Lifespan owns logging setup and engine disposal
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dataapi.api.error_handlers import register_error_handlers
from dataapi.api.routes import batch, blob, health, network_metrics, operators
from dataapi.config import Settings, get_settings
from dataapi.core.ports import BlobMetadataStore, OperatorHandler, RequestMetrics
from dataapi.infrastructure.blob_metadata_store import SQLBlobMetadataStore
from dataapi.infrastructure.database import DatabaseSessionManager
from dataapi.infrastructure.metrics import Metrics
from dataapi.infrastructure.observability import access_log_middleware, setup_logging
from dataapi.infrastructure.operator_handler import SQLOperatorHandler

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "HEAD", "OPTIONS"]


def create_app(
    settings: Settings | None = None,
    *,
    metadata_store: BlobMetadataStore | None = None,
    operator_handler: OperatorHandler | None = None,
    metrics: RequestMetrics | None = None,
) -> FastAPI:
    """Build the Data API application around the given collaborators.

    Collaborators left as None are built from settings: one
    DatabaseSessionManager backs both the metadata store and the operator
    handler. Nothing connects until the first request.
    """
    settings = settings or get_settings()

    db = None
    if metadata_store is None or operator_handler is None:
        db = DatabaseSessionManager.from_url(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
    if metadata_store is None:
        metadata_store = SQLBlobMetadataStore(db)
    if operator_handler is None:
        operator_handler = SQLOperatorHandler(
            db, probe_timeout_seconds=settings.probe_timeout_seconds,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level, settings.log_format)
        logger.info(f"Data API started in {settings.server_mode} mode")
        if db is not None and not await db.health_check():
            logger.warning("Metadata database unreachable at startup")
        yield
        if db is not None:
            await db.dispose()
        logger.info("Data API shutting down")

    app = FastAPI(title="EigenDA Data API", version="2.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.metadata_store = metadata_store
    app.state.operator_handler = operator_handler
    app.state.metrics = metrics or Metrics()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins if settings.is_release else ["*"],
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=["*"],
    )
    app.middleware("http")(access_log_middleware)

    app.include_router(health.router)
    app.include_router(blob.router)
    app.include_router(batch.router)
    app.include_router(operators.router)
    app.include_router(network_metrics.router)

    register_error_handlers(app)
    return app


app = create_app()
