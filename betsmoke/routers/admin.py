import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from betsmoke.auth.deps import require_admin
from betsmoke.routers.types import get_types_cache, get_types_sync
from betsmoke.schemas.types import CacheStatusOut, ReloadOut, SyncOut, SyncResultOut
from betsmoke.services.types import SyncInProgressError, TypesCache, TypesSyncService, sync_and_reload

router = APIRouter(prefix="/admin", tags=["admin"])
logger = logging.getLogger("uvicorn.error")


@router.post("/types/sync", response_model=SyncOut)
async def sync_types(
    admin_id: str = Depends(require_admin),
    service: TypesSyncService = Depends(get_types_sync),
    cache: TypesCache = Depends(get_types_cache),
):
    logger.info("admin: types sync requested by user_id=%s", admin_id)
    try:
        result = await sync_and_reload(service, cache)
    except SyncInProgressError:
        raise HTTPException(status_code=409, detail="sync_in_progress")
    except Exception as e:
        logger.exception("admin: types sync failed")
        return JSONResponse(
            status_code=500,
            content={"status": "error", "message": "Failed to sync types", "error": str(e)},
        )
    return SyncOut(result=SyncResultOut.model_validate(result))


@router.post("/types/reload", response_model=ReloadOut)
async def reload_types_cache(
    admin_id: str = Depends(require_admin),
    cache: TypesCache = Depends(get_types_cache),
):
    logger.info("admin: types cache reload requested by user_id=%s", admin_id)
    try:
        await cache.load()
    except Exception as e:
        logger.exception("admin: types cache reload failed")
        return JSONResponse(
            status_code=500,
            content={"status": "error", "message": "Failed to reload types cache", "error": str(e)},
        )
    return ReloadOut(cache=CacheStatusOut.model_validate(cache.status()))
