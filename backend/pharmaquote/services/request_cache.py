"""Request cache with time-to-live.

Each component that issues requests owns its own ``RequestCache`` instance;
the clock is injectable so expiry can be tested without sleeping.
"""

import logging
import time
from typing import Any, Awaitable, Callable, Dict, Optional

from cachetools import TTLCache


logger = logging.getLogger(__name__)

DEFAULT_TTL = 30.0  # seconds

Clock = Callable[[], float]


class RequestCache:
    """In-memory response cache keyed by request."""

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        maxsize: int = 128,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize RequestCache.

        Args:
            ttl: Time-to-live of an entry in seconds
            maxsize: Maximum number of entries
            clock: Monotonic clock returning seconds (defaults to time.monotonic)
        """
        self.ttl = ttl
        self._cache: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl, timer=clock or time.monotonic)

    @staticmethod
    def make_key(name: str, params: Optional[Dict[str, Any]] = None) -> str:
        """Build a key from a request name and its parameters."""
        if not params:
            return name
        encoded = ",".join(f"{key}={params[key]}" for key in sorted(params))
        return f"{name}_{encoded}"

    def get(self, key: str) -> Optional[Any]:
        """
        Get a cached value.

        Args:
            key: Cache key

        Returns:
            The value, or None when missing or expired
        """
        return self._cache.get(key)

    def set(self, key: str, value: Any) -> None:
        self._cache[key] = value

    def invalidate(self, key_or_prefix: str) -> int:
        """
        Drop an entry and every entry whose key starts with the given prefix.

        Args:
            key_or_prefix: Exact key or key prefix

        Returns:
            Number of entries dropped
        """
        keys = [key for key in list(self._cache.keys()) if key.startswith(key_or_prefix)]
        for key in keys:
            self._cache.pop(key, None)
        return len(keys)

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        self._cache.expire()
        return len(self._cache)

    async def get_or_fetch(
        self,
        key: str,
        fetch: Callable[[], Awaitable[Any]],
        skip_cache: bool = False,
    ) -> Any:
        """
        Return a cached value or fetch and cache it.

        Args:
            key: Cache key
            fetch: Coroutine factory producing the value
            skip_cache: Bypass the cached entry (refetch)

        Returns:
            Cached or freshly fetched value

        Raises:
            Whatever ``fetch`` raises; failures are not cached
        """
        if not skip_cache:
            cached = self.get(key)
            if cached is not None:
                logger.debug(f"Cache hit: {key}")
                return cached

        value = await fetch()
        if value is not None:
            self.set(key, value)
        return value
