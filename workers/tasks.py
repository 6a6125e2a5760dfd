from .celery_app import celery
import asyncio
import logging
from dataclasses import asdict

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker

from betsmoke.core.config import settings
from betsmoke.services.sportsmonks import SportsMonksClient
from betsmoke.services.types import TypesSyncService

logger = logging.getLogger("workers.tasks")


async def _sync_types() -> dict:
    engine = create_async_engine(settings.DATABASE_URL, echo=False)
    Session = async_sessionmaker(engine, expire_on_commit=False)
    try:
        service = TypesSyncService(SportsMonksClient.from_settings, Session)
        result = await service.sync_types()
    finally:
        await engine.dispose()
    out = asdict(result)
    out["synced_at"] = result.synced_at.isoformat() if result.synced_at else None
    return out


@celery.task(name="tasks.sync_sportsmonks_types")
def sync_sportsmonks_types() -> dict:
    """Scheduled refresh of the sportsmonks_types table.

    Web processes keep serving their current cache until reloaded through
    POST /admin/types/reload or a restart.
    """
    try:
        return {"ok": True, "result": asyncio.run(_sync_types())}
    except Exception as e:
        logger.exception("tasks.sync_sportsmonks_types failed")
        return {"ok": False, "error": str(e)}
