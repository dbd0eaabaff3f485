"""Redis client wrapper backing the user cache.

Values are JSON documents written with SETEX. Every Redis failure is logged
and reported as a miss (get) or False (set/delete) so callers fall back to
the store. A connection that was lost at runtime, or never established at
startup, is retried lazily on the next cache call, at most once per
settings.redis_reconnect_interval_seconds.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

import redis.asyncio as redis

from app.core.config import get_settings

logger = logging.getLogger(__name__)


class CacheService:
    """Async Redis cache with TTL support and throttled reconnects.

    Call connect() at startup and disconnect() at shutdown. A service whose
    connect() was never called stays inert. Socket operations are bounded by
    settings.store_timeout_seconds.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        *,
        reconnect_interval: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI. It is kept
                across failed pings and re-pinged on reconnect.
            reconnect_interval: Seconds between reconnect attempts; defaults
                to settings.redis_reconnect_interval_seconds.
            clock: Monotonic time source.
        """
        self.settings = get_settings()
        self.redis = redis_client
        self._owns_client = redis_client is None
        self._connected = False
        self._last_attempt: float | None = None
        self._reconnect_interval = (
            reconnect_interval
            if reconnect_interval is not None
            else self.settings.redis_reconnect_interval_seconds
        )
        self._clock = clock

    def _build_client(self) -> redis.Redis:
        password = self.settings.redis_password
        return redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=password.get_secret_value() if password else None,
            decode_responses=True,
            socket_connect_timeout=self.settings.store_timeout_seconds,
            socket_timeout=self.settings.store_timeout_seconds,
            socket_keepalive=True,
        )

    async def connect(self) -> bool:
        """Ping Redis, creating the client if needed. Returns True when usable."""
        self._last_attempt = self._clock()
        if self.redis is None:
            self.redis = self._build_client()
        try:
            await self.redis.ping()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning(
                "Redis %s:%s unavailable: %s. User cache off until reconnect.",
                self.settings.redis_host,
                self.settings.redis_port,
                e,
            )
            await self._drop_client()
            return False
        self._connected = True
        logger.info(
            "Redis cache connected: %s:%s", self.settings.redis_host, self.settings.redis_port
        )
        return True

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
            logger.info("Redis cache disconnected")
        self._connected = False
        self._last_attempt = None

    async def _drop_client(self) -> None:
        self._connected = False
        if not self._owns_client or self.redis is None:
            return
        try:
            await self.redis.aclose()
        except redis.RedisError as e:
            logger.debug("Ignoring error closing dead Redis client: %s", e)
        self.redis = None

    async def _reconnect(self) -> bool:
        """Reconnect if connect() ran before and the throttle interval has passed."""
        if self._last_attempt is None:
            return False
        if self._clock() - self._last_attempt < self._reconnect_interval:
            return False
        logger.info("Retrying Redis connection")
        return await self.connect()

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def _call(
        self, op: str, key: str, command: Callable[[redis.Redis], Awaitable[Any]]
    ) -> tuple[bool, Any]:
        """Run one Redis command. Returns (False, None) when Redis is unusable."""
        if not self.is_available() and not await self._reconnect():
            return False, None
        try:
            return True, await command(self.redis)
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Cache %s unavailable for key %s: %s", op, key, e)
            self._last_attempt = self._clock()
            await self._drop_client()
        except redis.RedisError:
            logger.exception("Cache %s error for key %s", op, key)
        return False, None

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable.

        Args:
            key: Cache key (use app.infrastructure.cache.keys builders).
        """
        ok, value = await self._call("get", key, lambda r: r.get(key))
        if not ok:
            return None
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        try:
            decoded = json.loads(value)
        except ValueError:
            logger.warning("Cache value for key %s is not valid JSON; ignoring", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return decoded

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value as JSON with a TTL in seconds. Returns True on success."""
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError):
            logger.warning("Cache value for key %s is not JSON-serializable", key)
            return False
        ok, _ = await self._call("set", key, lambda r: r.setex(key, ttl, serialized))
        if ok:
            logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return ok

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True if Redis accepted the delete."""
        ok, _ = await self._call("delete", key, lambda r: r.delete(key))
        if ok:
            logger.debug("Cache DELETE: %s", key)
        return ok
