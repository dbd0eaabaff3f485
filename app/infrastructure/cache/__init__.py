"""Cache: Redis service, cache key utilities and the user cache-aside store.

CacheService uses app.core.config; key format is in keys.py (DRY).
"""

from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.cache.keys import user_key
from app.infrastructure.cache.redis_cache import CacheService
from app.infrastructure.cache.user_cache import NullUserCache, RedisUserCache

__all__ = [
    "CacheProtocol",
    "CacheService",
    "NullUserCache",
    "RedisUserCache",
    "user_key",
]
