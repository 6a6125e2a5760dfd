from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from betsmoke.schemas.types import CacheStatusOut, TypeOut, TypesStatusOut
from betsmoke.services.types import TypesCache, TypesSyncService

router = APIRouter(prefix="/types", tags=["types"])


def get_types_cache(request: Request) -> TypesCache:
    return request.app.state.types_cache


def get_types_sync(request: Request) -> TypesSyncService:
    return request.app.state.types_sync


@router.get("/status", response_model=TypesStatusOut)
async def types_status(cache: TypesCache = Depends(get_types_cache)):
    return TypesStatusOut(cache=CacheStatusOut.model_validate(cache.status()))


@router.get("", response_model=List[TypeOut])
async def list_types(
    model_type: str = Query(..., min_length=1),
    cache: TypesCache = Depends(get_types_cache),
):
    return [TypeOut.model_validate(n) for n in cache.get_by_model_type(model_type)]


@router.get("/code/{code}", response_model=TypeOut)
async def get_type_by_code(code: str, cache: TypesCache = Depends(get_types_cache)):
    node = cache.get_by_code(code)
    if node is None:
        raise HTTPException(status_code=404, detail="type_not_found")
    return TypeOut.model_validate(node)


@router.get("/{type_id}", response_model=TypeOut)
async def get_type(type_id: int, cache: TypesCache = Depends(get_types_cache)):
    node = cache.lookup(type_id)
    if node is None:
        raise HTTPException(status_code=404, detail="type_not_found")
    return TypeOut.model_validate(node)
