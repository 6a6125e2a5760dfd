from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class TypeOut(CamelModel):
    id: int
    parent_id: Optional[int] = None
    name: str
    code: str
    developer_name: str
    model_type: str
    group: Optional[str] = None
    stat_group: Optional[str] = None
    last_synced_at: Optional[datetime] = None


class CacheStatusOut(CamelModel):
    loaded: bool
    count: int
    loaded_at: Optional[datetime] = None
    age_seconds: Optional[float] = None
    model_types: List[str] = []


class TypesStatusOut(BaseModel):
    status: str = "ok"
    cache: CacheStatusOut


class SyncResultOut(CamelModel):
    fetched: int
    roots: int
    children: int
    stored: int
    by_model_type: Dict[str, int] = {}
    orphans: List[int] = []
    duration_ms: int = 0
    synced_at: Optional[datetime] = None


class SyncOut(BaseModel):
    status: str = "ok"
    message: str = "Types synced successfully"
    result: SyncResultOut


class ReloadOut(BaseModel):
    status: str = "ok"
    cache: CacheStatusOut
