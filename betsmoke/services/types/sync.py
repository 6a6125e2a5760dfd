from __future__ import annotations

import asyncio
import logging
import re
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Protocol, Set, Tuple

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from betsmoke.services.types import store
from betsmoke.services.types.errors import InvalidTypeRecord, SyncInProgressError
from betsmoke.services.types.types import SyncResult, TypeNode

logger = logging.getLogger("uvicorn.error")


class TypesSource(Protocol):
    async def fetch_all_types(self) -> List[Dict[str, Any]]:
        ...


def _as_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and re.fullmatch(r"-?[0-9]+", value.strip()):
        return int(value)
    return None


def transform_type(raw: Mapping[str, Any]) -> TypeNode:
    """Map a raw SportsMonks record onto a TypeNode, defaulting absent fields."""
    if not isinstance(raw, Mapping):
        raise InvalidTypeRecord(raw, "not an object")
    type_id = _as_int(raw.get("id"))
    if type_id is None:
        raise InvalidTypeRecord(raw, "missing integer id")
    # SportsMonks never uses 0 as a type id, so a falsy parent means root
    parent_id = _as_int(raw.get("parent_id")) or None
    return TypeNode(
        id=type_id,
        parent_id=parent_id,
        name=raw.get("name") or "",
        code=raw.get("code") or "",
        developer_name=raw.get("developer_name") or "",
        model_type=raw.get("model_type") or "",
        group=raw.get("group") or None,
        stat_group=raw.get("stat_group") or None,
    )


def dedupe(nodes: Iterable[TypeNode]) -> List[TypeNode]:
    by_id: Dict[int, TypeNode] = {}
    for node in nodes:
        if node.id in by_id:
            logger.warning("types-sync duplicate id=%s, keeping last record", node.id)
        by_id[node.id] = node
    return list(by_id.values())


def partition(nodes: Iterable[TypeNode]) -> Tuple[List[TypeNode], List[TypeNode]]:
    roots: List[TypeNode] = []
    children: List[TypeNode] = []
    for node in nodes:
        (roots if node.parent_id is None else children).append(node)
    return roots, children


def order_children(children: List[TypeNode], all_ids: Set[int]) -> Tuple[List[TypeNode], List[int]]:
    """Resolve each child's parent against the fetched id set and sort by depth.

    Returns the children to insert (parents always ahead of their own children)
    and the ids demoted to roots, either because the declared parent was not
    fetched or because the node closes a parent cycle.
    """
    parent_of: Dict[int, Optional[int]] = {c.id: c.parent_id for c in children}
    # depth 0 = stored as root, roots of the batch are not tracked here
    depth: Dict[int, int] = {}
    demoted: List[int] = []

    for child in children:
        if child.parent_id not in all_ids:
            parent_of[child.id] = None
            depth[child.id] = 0
            demoted.append(child.id)

    for child in children:
        path: List[int] = []
        on_path: Set[int] = set()
        cur = child.id
        while cur in parent_of and cur not in depth:
            if cur in on_path:
                # cycle: cut it at the node we came back to
                parent_of[cur] = None
                depth[cur] = 0
                demoted.append(cur)
                break
            path.append(cur)
            on_path.add(cur)
            cur = parent_of[cur]
        for nid in reversed(path):
            if nid in depth:
                continue
            parent = parent_of[nid]
            depth[nid] = depth[parent] + 1 if parent in depth else 1

    ordered = sorted(children, key=lambda c: depth[c.id])
    out = [c.as_root() if parent_of[c.id] is None else c for c in ordered]
    return out, demoted


class TypesSyncService:
    """Refreshes the local SportsMonks types table from the remote API.

    At most one sync runs per process; a second call while one is in flight
    raises SyncInProgressError instead of racing on the clear step.
    """

    def __init__(
        self,
        source_factory: Callable[[], TypesSource],
        sessionmaker: async_sessionmaker[AsyncSession],
    ):
        self.source_factory = source_factory
        self.sessionmaker = sessionmaker
        self._lock = asyncio.Lock()

    @property
    def running(self) -> bool:
        return self._lock.locked()

    async def sync_types(self) -> SyncResult:
        if self._lock.locked():
            raise SyncInProgressError()
        async with self._lock:
            return await self._sync()

    async def _sync(self) -> SyncResult:
        start = time.perf_counter()
        logger.info("types-sync start")
        raw = await self.source_factory().fetch_all_types()
        nodes = dedupe(transform_type(r) for r in raw)
        all_ids = {n.id for n in nodes}
        roots, children = partition(nodes)
        logger.info("types-sync fetched=%s roots=%s children=%s", len(raw), len(roots), len(children))

        ordered_children, orphans = order_children(children, all_ids)
        for orphan_id in orphans:
            logger.warning("types-sync orphan id=%s stored as root (parent not in fetched set)", orphan_id)

        synced_at = datetime.now(timezone.utc)
        async with self.sessionmaker() as session:
            async with session.begin():
                await store.delete_all(session)
                for node in roots:
                    await store.insert_one(session, node, synced_at)
                await session.flush()
                for node in ordered_children:
                    await store.insert_one(session, node, synced_at)
                await session.flush()
            stored = await store.count(session)
            by_model_type = await store.group_by_model_type(session)

        duration_ms = int((time.perf_counter() - start) * 1000)
        logger.info("types-sync complete stored=%s orphans=%s duration_ms=%s", stored, len(orphans), duration_ms)
        for model_type, n in by_model_type.items():
            logger.info("types-sync model_type=%s count=%s", model_type or "-", n)
        return SyncResult(
            fetched=len(raw),
            roots=len(roots),
            children=len(children),
            stored=stored,
            by_model_type=by_model_type,
            orphans=orphans,
            duration_ms=duration_ms,
            synced_at=synced_at,
        )


async def sync_and_reload(service: TypesSyncService, cache) -> SyncResult:
    """Sync the store, then rebuild the cache.

    The cache is left alone if the sync fails. If the sync commits but the
    reload fails, the store holds the new taxonomy while the cache keeps serving
    the previous snapshot until the next successful reload.
    """
    result = await service.sync_types()
    await cache.load()
    return result
