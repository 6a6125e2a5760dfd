"""Fetch every SportsMonks type and replace the local sportsmonks_types table.

Run with: python -m scripts.seed_sportsmonks_types
"""
from __future__ import annotations

import asyncio
import sys

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker

from betsmoke.core.config import settings
from betsmoke.services.sportsmonks import SportsMonksClient
from betsmoke.services.types import TypesCache, TypesSyncService, sync_and_reload


async def _run() -> int:
    engine = create_async_engine(settings.DATABASE_URL, echo=False)
    Session = async_sessionmaker(engine, expire_on_commit=False)
    try:
        service = TypesSyncService(SportsMonksClient.from_settings, Session)
        cache = TypesCache(Session)
        result = await sync_and_reload(service, cache)
    except Exception as e:
        print(f"Error seeding types: {e}", file=sys.stderr)
        return 1
    finally:
        await engine.dispose()

    print(f"Fetched {result.fetched} types ({result.roots} roots, {result.children} with parent).")
    if result.orphans:
        print(f"Stored {len(result.orphans)} types as roots because their parent was missing.")
    print(f"Seeding complete! {result.stored} types inserted.")
    print("\nTypes by category:")
    for model_type, n in result.by_model_type.items():
        print(f"  {model_type or '-'}: {n}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(_run()))
