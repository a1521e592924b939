# services/memory_cache_service.py
"""
In-memory cache service
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from .interfaces.cache_interface import CacheServiceInterface


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryCacheService(CacheServiceInterface):
    """In-memory cache implementation, lives as long as the session"""

    def __init__(self, ttl_seconds: int = 3600):
        self.cache: Dict[str, Any] = {}
        self.expiry: Dict[str, datetime] = {}
        self.default_expire = timedelta(seconds=ttl_seconds) if ttl_seconds else None

    def _cleanup_expired(self):
        """Remove expired keys"""
        now = _now()
        expired_keys = [
            key for key, expiry_time in self.expiry.items() if expiry_time <= now
        ]

        for key in expired_keys:
            self.cache.pop(key, None)
            self.expiry.pop(key, None)

    async def get(self, key: str) -> Optional[Any]:
        """Get value from cache"""
        self._cleanup_expired()
        return self.cache.get(key)

    async def set(
        self, key: str, value: Any, expire: Optional[timedelta] = None
    ) -> bool:
        """Set value in cache with optional expiration"""
        self.cache[key] = value

        expire_time = expire or self.default_expire
        if expire_time:
            self.expiry[key] = _now() + expire_time
        else:
            self.expiry.pop(key, None)

        return True

    async def delete(self, key: str) -> bool:
        """Delete value from cache"""
        deleted = key in self.cache
        self.cache.pop(key, None)
        self.expiry.pop(key, None)
        return deleted

    async def exists(self, key: str) -> bool:
        """Check if key exists in cache"""
        self._cleanup_expired()
        return key in self.cache

    async def clear_pattern(self, pattern: str) -> int:
        """Clear all keys matching pattern (simple prefix matching)"""
        prefix = pattern.replace("*", "")
        matching_keys = [key for key in self.cache if key.startswith(prefix)]

        for key in matching_keys:
            self.cache.pop(key, None)
            self.expiry.pop(key, None)

        return len(matching_keys)
