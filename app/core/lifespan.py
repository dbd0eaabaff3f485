"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (user cache, mail
HTTP client, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.cache.user_cache import NullUserCache, RedisUserCache
from app.infrastructure.services.mail_service import build_mailer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: shared HTTP client and mailer, Redis user cache (if
    enabled, else a no-op cache). Shutdown order: HTTP client close, cache
    disconnect, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    # Shared HTTP client for outbound mail API calls (connection reuse).
    app.state.http_client = httpx.AsyncClient(timeout=settings.store_timeout_seconds * 2)
    app.state.mailer = build_mailer(settings, app.state.http_client)

    app.state.cache = None
    if settings.redis_enabled:
        from app.infrastructure.cache.redis_cache import CacheService

        cache = CacheService()
        await cache.connect()
        app.state.cache = cache
        app.state.user_cache = RedisUserCache(cache, ttl=settings.cache_ttl_users)
    else:
        app.state.user_cache = NullUserCache()
    logger.info(
        "Startup complete (user cache: %s, mail backend: %s)",
        type(app.state.user_cache).__name__,
        settings.mail_backend,
    )

    yield

    # ---- Shutdown ----
    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("HTTP client closed")

    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        logger.info("Cache disconnected")

    from app.infrastructure.persistence import database

    if getattr(database, "engine", None) is not None:
        await database.dispose_engine()
        logger.info("Database engine disposed")
