from betsmoke.services.types.cache import TypesCache, TypesSnapshot
from betsmoke.services.types.enrich import (
    FIXTURE_TYPED_SECTIONS,
    enrich_events,
    enrich_fixture,
    enrich_stat,
    enrich_stats,
)
from betsmoke.services.types.errors import InvalidTypeRecord, SyncInProgressError, TypesError
from betsmoke.services.types.sync import TypesSyncService, sync_and_reload, transform_type
from betsmoke.services.types.types import CacheStatus, SyncResult, TypeNode

__all__ = [
    "CacheStatus",
    "FIXTURE_TYPED_SECTIONS",
    "InvalidTypeRecord",
    "SyncInProgressError",
    "SyncResult",
    "TypeNode",
    "TypesCache",
    "TypesError",
    "TypesSnapshot",
    "TypesSyncService",
    "enrich_events",
    "enrich_fixture",
    "enrich_stat",
    "enrich_stats",
    "sync_and_reload",
    "transform_type",
]
