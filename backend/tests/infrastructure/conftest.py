"""Infrastructure test fixtures — in-memory SQLite metadata database.

Invariants:
    - Every test gets a fresh in-memory SQLite database with all tables created
    - db_manager wraps the same engine the seed session writes through

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for lookups
      (PostgreSQL-specific features are not exercised by the store)
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import dataapi.models  # noqa: F401  (populates Base.metadata)
from dataapi.db.base import Base
from dataapi.infrastructure.database import DatabaseSessionManager
from dataapi.models.operator import OperatorRecord, OperatorStakeRecord
from tests.infrastructure.seed_data import STAKES, VERSIONS


@pytest.fixture
async def test_engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_db(test_engine):
    factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def db_manager(test_engine):
    return DatabaseSessionManager(test_engine)


@pytest.fixture
async def seed_operators(test_db):
    """Three operators; the third has no v2 sockets and no recorded version."""
    for index, (op_id, version) in enumerate(VERSIONS.items(), start=1):
        test_db.add(OperatorRecord(
            operator_id=op_id,
            dispersal_socket=f"10.0.0.{index}:32005",
            retrieval_socket=f"10.0.0.{index}:32004",
            v2_dispersal_socket=f"10.0.0.{index}:32007" if version else None,
            v2_retrieval_socket=f"10.0.0.{index}:32006" if version else None,
            node_version=version,
        ))
    for quorum_id, stakes in STAKES.items():
        for op_id, stake in stakes.items():
            test_db.add(OperatorStakeRecord(
                operator_id=op_id, quorum_id=quorum_id, stake=str(stake),
            ))
    await test_db.commit()
