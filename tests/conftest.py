import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from betsmoke.models.models import SportsMonksType


@pytest.fixture
async def sessionmaker():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(lambda sync_conn: SportsMonksType.__table__.create(sync_conn))
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()
