"""Root conftest — shared test configuration."""

import os

# Never reach a real metadata database from tests
os.environ.setdefault("DATAAPI_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DATAAPI_LOG_FORMAT", "text")
