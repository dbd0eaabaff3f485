"""User cache-aside store: JSON snapshots of UserResult under user-<id>.

Two implementations are chosen at startup (see app.core.lifespan); request
code never checks whether caching is enabled.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from app.application.dtos.user import UserResult
from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.cache.keys import user_key
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import ensure_utc

logger = get_logger(__name__)

# Seconds a user snapshot stays cached; writes invalidate sooner.
USER_CACHE_TTL_SECONDS = 60


def _user_to_json(user: UserResult) -> dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "is_active": user.is_active,
        "created_at": user.created_at.isoformat() if user.created_at else None,
        "role": user.role,
        "role_level": user.role_level,
    }


def _user_from_json(data: dict[str, Any]) -> UserResult:
    created_at = data.get("created_at")
    return UserResult(
        id=data["id"],
        username=data["username"],
        email=data["email"],
        is_active=bool(data["is_active"]),
        created_at=ensure_utc(datetime.fromisoformat(created_at)) if created_at else None,
        role=data["role"],
        role_level=int(data["role_level"]),
    )


class RedisUserCache:
    """IUserCache over a CacheProtocol backend (CacheService in production)."""

    def __init__(self, cache: CacheProtocol, ttl: int = USER_CACHE_TTL_SECONDS) -> None:
        self._cache = cache
        self._ttl = ttl

    async def get(self, user_id: str) -> UserResult | None:
        """Return the cached user; None on miss, cache failure or an undecodable entry."""
        try:
            data = await self._cache.get(user_key(user_id))
        except ValueError:
            return None
        if data is None:
            return None
        try:
            return _user_from_json(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Discarding malformed cache entry for user %s: %s", user_id, e)
            return None

    async def set(self, user: UserResult) -> None:
        if not await self._cache.set(user_key(user.id), _user_to_json(user), ttl=self._ttl):
            logger.debug("User %s not cached", user.id)

    async def delete(self, user_id: str) -> None:
        await self._cache.delete(user_key(user_id))


class NullUserCache:
    """IUserCache that never stores anything (Redis disabled)."""

    async def get(self, user_id: str) -> UserResult | None:
        return None

    async def set(self, user: UserResult) -> None:
        return None

    async def delete(self, user_id: str) -> None:
        return None
