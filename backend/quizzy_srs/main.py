from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from .api.routes import create_router
from .core.config import get_config
from .core.db import engine, init_db
from .core.logger import setup_logging
from .services.kv_store import KeyValueStore, MemoryKeyValueStore, SQLKeyValueStore
from .services.srs_service import SRSService
from .services.srs_store import SchedulingStore

logger = logging.getLogger(__name__)

VERSION = "1.0.0"

setup_logging()
config = get_config()


def _build_kv_store() -> KeyValueStore:
    if config.storage.backend == "memory":
        return MemoryKeyValueStore()
    if config.storage.backend != "sqlite":
        logger.warning("Unknown storage backend %r, falling back to sqlite", config.storage.backend)
    return SQLKeyValueStore(engine)


srs_service = SRSService(SchedulingStore(_build_kv_store(), storage_key=config.srs.storage_key))

_start_time = time.time()

limiter = Limiter(key_func=get_remote_address)
app = FastAPI(
    title="Quizzy SRS API",
    version=VERSION,
    description="Spaced-repetition review scheduling for quiz questions.",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)
app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(status_code=429, content={"error": "rate_limited", "detail": "Too many requests, please try again later"})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "internal_error", "detail": "An unexpected error occurred"})


app.add_middleware(
    CORSMiddleware,
    allow_origins=config.security.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(create_router(srs_service))


@app.get("/health")
async def healthcheck() -> dict:
    uptime = int(time.time() - _start_time)
    stats = await srs_service.get_stats()
    return {
        "status": "ok",
        "version": VERSION,
        "uptime_seconds": uptime,
        "total_tracked": stats.total_tracked,
    }


@app.on_event("startup")
async def on_startup() -> None:
    if config.storage.backend != "memory":
        init_db()
    logger.info("Quizzy SRS started (storage=%s, key=%s)", config.storage.backend, config.srs.storage_key)
