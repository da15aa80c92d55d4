"""Service test fixtures — file-backed SQLite engine + scripted oracle.

Invariants:
    - Every test gets a fresh SQLite file under tmp_path (concurrent sessions see
      each other's commits, unlike a per-connection in-memory database)
    - Starter elements are seeded by engine.start()
    - Retry backoff is zero so failure tests run instantly
"""

import pytest
from sqlalchemy import func, select

from mixit.config import Settings
from mixit.core.retry_policy import RetryPolicy
from mixit.db.session import create_session_factory
from mixit.engine import MixitEngine

from tests.services.mock_oracle import MockOracleClient, success


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'mixit.db'}",
        oracle_max_attempts=3,
        oracle_base_delay_ms=0,
        oracle_max_delay_ms=0,
    )


@pytest.fixture
async def make_engine(settings):
    """Factory: started MixitEngine around a given oracle; closed on teardown."""
    engines = []

    async def _make(oracle, max_attempts=3):
        engine = MixitEngine(
            settings,
            oracle=oracle,
            retry_policy=RetryPolicy(
                max_attempts=max_attempts, base_delay_ms=0, max_delay_ms=0,
            ),
        )
        await engine.start()
        engines.append(engine)
        return engine

    yield _make
    for engine in engines:
        await engine.close()


@pytest.fixture
def mock_oracle():
    return MockOracleClient([success("Steam", "💨")])


@pytest.fixture
async def engine(make_engine, mock_oracle):
    return await make_engine(mock_oracle)


@pytest.fixture
async def starters(engine):
    """Seeded starter elements by name: Water, Earth, Fire, Air."""
    return {e.name: e for e in await engine.list_elements()}


@pytest.fixture
async def session_factory(settings, engine):
    factory = create_session_factory(settings.database_url)
    yield factory
    await factory.kw["bind"].dispose()


@pytest.fixture
def count_rows(session_factory):
    """count_rows(Model, *where) -> number of matching rows."""
    async def _count(model, *where):
        async with session_factory() as db:
            stmt = select(func.count()).select_from(model)
            if where:
                stmt = stmt.where(*where)
            result = await db.execute(stmt)
            return result.scalar_one()
    return _count
