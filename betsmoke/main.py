import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from betsmoke.core.config import settings
from betsmoke.core.db import dispose_engine, get_sessionmaker
from betsmoke.routers import admin, health
from betsmoke.routers import types as types_router
from betsmoke.services.sportsmonks import SportsMonksClient
from betsmoke.services.types import TypesCache, TypesSyncService

logger = logging.getLogger("app.requests")
startup_logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    sessionmaker = get_sessionmaker()
    app.state.types_cache = TypesCache(sessionmaker)
    app.state.types_sync = TypesSyncService(SportsMonksClient.from_settings, sessionmaker)
    # Serve nothing until the types cache is warm; a failure here aborts startup
    try:
        count = await app.state.types_cache.load()
    except Exception:
        startup_logger.exception("startup: failed to load SportsMonks types cache")
        raise
    startup_logger.info("startup: types cache ready count=%s", count)
    yield
    await dispose_engine()


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# CORS
origins = settings.cors_origin_list
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins if origins != ["*"] else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

prefix = settings.API_PREFIX
app.include_router(health.router, prefix=prefix)
app.include_router(types_router.router, prefix=prefix)
app.include_router(admin.router, prefix=prefix)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000
    logger.info("%s %s %s %.1fms", request.method, request.url.path, response.status_code, duration_ms)
    return response


@app.get("/")
async def root():
    return {"name": settings.APP_NAME, "env": settings.APP_ENV}
