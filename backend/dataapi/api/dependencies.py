"""Dependency Providers — hand the app-scoped collaborators to route handlers.

Invariants:
    - Collaborators are created once in create_app() and stored on app.state
    - Providers only read app.state; they never construct anything per request
"""

from fastapi import Request

from dataapi.config import Settings
from dataapi.core.ports import BlobMetadataStore, OperatorHandler, RequestMetrics


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_metadata_store(request: Request) -> BlobMetadataStore:
    return request.app.state.metadata_store


def get_operator_handler(request: Request) -> OperatorHandler:
    return request.app.state.operator_handler


def get_metrics(request: Request) -> RequestMetrics:
    return request.app.state.metrics
