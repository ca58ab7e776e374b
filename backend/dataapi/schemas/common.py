"""Common Schemas — the shared error body and health response."""

from pydantic import BaseModel, ConfigDict


class ErrorResponse(BaseModel):
    """The only error body across all endpoints."""
    model_config = ConfigDict(frozen=True)

    error: str


class HealthResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: str = "OK"
