"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Settings are frozen: read once by create_app(), never mutated afterwards
    - get_settings() is cached (lru_cache) — single instance per process
    - server_mode is the only switch between permissive (debug) and strict (release) CORS

Design Decisions:
    - DATAAPI_ env prefix: the service runs next to other disperser components
      sharing one environment
    - Cache ages live here, not as route constants, so operators can tune
      intermediary caching without a redeploy
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

RELEASE_MODE = "release"
DEBUG_MODE = "debug"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DATAAPI_", env_file=".env", case_sensitive=False,
        frozen=True,
    )

    # Server
    server_mode: Literal["debug", "release"] = RELEASE_MODE
    allow_origins: list[str] = ["http://localhost:3000"]

    # Metadata store
    database_url: str = "postgresql+asyncpg://dataapi:dataapi@db:5432/dataapi"
    database_pool_size: int = 20
    database_max_overflow: int = 10

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Plain postgresql:// URLs need the asyncpg driver suffix."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    # Cache-Control max-age, in seconds, per resource class
    max_feed_blob_age: int = 300
    max_operators_stake_age: int = 300
    max_operator_port_check_age: int = 60

    # Operator reachability probe
    probe_timeout_seconds: float = 3.0

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def is_release(self) -> bool:
        return self.server_mode == RELEASE_MODE


@lru_cache
def get_settings() -> Settings:
    return Settings()
