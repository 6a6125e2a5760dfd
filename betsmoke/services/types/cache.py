from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from betsmoke.services.types import store
from betsmoke.services.types.types import CacheStatus, TypeNode

logger = logging.getLogger("uvicorn.error")


@dataclass(frozen=True)
class TypesSnapshot:
    by_id: Dict[int, TypeNode] = field(default_factory=dict)
    by_code: Dict[str, TypeNode] = field(default_factory=dict)
    by_model_type: Dict[str, Tuple[TypeNode, ...]] = field(default_factory=dict)
    loaded_at: Optional[datetime] = None

    @classmethod
    def build(cls, nodes: Iterable[TypeNode], loaded_at: datetime) -> "TypesSnapshot":
        by_id: Dict[int, TypeNode] = {}
        by_code: Dict[str, TypeNode] = {}
        grouped: Dict[str, List[TypeNode]] = {}
        for node in nodes:
            by_id[node.id] = node
            if node.code:
                by_code[node.code] = node
            grouped.setdefault(node.model_type, []).append(node)
        return cls(
            by_id=by_id,
            by_code=by_code,
            by_model_type={k: tuple(v) for k, v in grouped.items()},
            loaded_at=loaded_at,
        )


class TypesCache:
    """In-process id -> TypeNode lookup table backed by the sportsmonks_types table.

    `load()` builds a complete new snapshot and swaps it in with one
    assignment, so a reader sees either the old taxonomy or the new one.
    Lookups never touch the database or the network.
    """

    def __init__(self, sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None):
        self.sessionmaker = sessionmaker
        self._snapshot: Optional[TypesSnapshot] = None

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    def _current(self) -> TypesSnapshot:
        return self._snapshot or _EMPTY

    async def load(self) -> int:
        if self.sessionmaker is None:
            raise RuntimeError("TypesCache has no sessionmaker to load from")
        logger.info("types-cache loading from database")
        async with self.sessionmaker() as session:
            nodes = await store.find_all(session)
        self.replace(nodes)
        return len(nodes)

    def replace(self, nodes: Iterable[TypeNode]) -> None:
        snapshot = TypesSnapshot.build(nodes, datetime.now(timezone.utc))
        self._snapshot = snapshot
        logger.info("types-cache loaded count=%s at=%s", len(snapshot.by_id), snapshot.loaded_at.isoformat())

    def lookup(self, type_id: int) -> Optional[TypeNode]:
        return self._current().by_id.get(type_id)

    def get_name(self, type_id: int) -> str:
        node = self.lookup(type_id)
        return node.name if node and node.name else f"Unknown ({type_id})"

    def get_by_code(self, code: str) -> Optional[TypeNode]:
        return self._current().by_code.get(code)

    def get_by_model_type(self, model_type: str) -> List[TypeNode]:
        return list(self._current().by_model_type.get(model_type, ()))

    def get_many(self, type_ids: Iterable[int]) -> Dict[int, TypeNode]:
        by_id = self._current().by_id
        return {i: by_id[i] for i in type_ids if i in by_id}

    def status(self) -> CacheStatus:
        snap = self._snapshot
        if snap is None:
            return CacheStatus(loaded=False, count=0, loaded_at=None, age_seconds=None)
        age = (datetime.now(timezone.utc) - snap.loaded_at).total_seconds()
        return CacheStatus(
            loaded=True,
            count=len(snap.by_id),
            loaded_at=snap.loaded_at,
            age_seconds=round(age, 3),
            model_types=sorted(snap.by_model_type),
        )


_EMPTY = TypesSnapshot()
