"""Root conftest: shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Store timestamps come from a deterministic clock (strictly increasing by default)
"""

import os
from datetime import datetime, timedelta, timezone

# Settings are read at import time of the app; point them at SQLite first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("CREATE_SCHEMA_ON_STARTUP", "false")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from explore.db.base import Base  # noqa: E402
from explore.infrastructure.decision_store import DecisionStore  # noqa: E402
import explore.models  # noqa: E402,F401

CLOCK_START = datetime(2026, 1, 1, tzinfo=timezone.utc)


class StepClock:
    """Returns start + n * step on the n-th call (n from 1)."""

    def __init__(self, start: datetime = CLOCK_START, step: timedelta = timedelta(milliseconds=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        self.now = self.now + self.step
        return self.now


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def store(test_db, clock):
    return DecisionStore(test_db, clock=clock)


@pytest.fixture
def frozen_clock():
    """Every write gets the same timestamp."""
    return StepClock(step=timedelta(0))
