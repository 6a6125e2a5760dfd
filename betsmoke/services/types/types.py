from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, List, Optional


@dataclass(frozen=True)
class TypeNode:
    """A SportsMonks type: a numeric code for a statistic, event, position, ..."""
    id: int
    parent_id: Optional[int]
    name: str = ""
    code: str = ""
    developer_name: str = ""
    model_type: str = ""
    group: Optional[str] = None
    stat_group: Optional[str] = None
    last_synced_at: Optional[datetime] = None

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def as_root(self) -> "TypeNode":
        return replace(self, parent_id=None)


@dataclass
class SyncResult:
    """Summary returned by a types sync."""
    fetched: int
    roots: int
    children: int
    stored: int
    by_model_type: Dict[str, int] = field(default_factory=dict)
    orphans: List[int] = field(default_factory=list)
    duration_ms: int = 0
    synced_at: Optional[datetime] = None


@dataclass
class CacheStatus:
    loaded: bool
    count: int
    loaded_at: Optional[datetime]
    age_seconds: Optional[float]
    model_types: List[str] = field(default_factory=list)
