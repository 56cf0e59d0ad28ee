"""Organization settings source.

Provides the defaults a new quote is seeded with (terms, bank details) and the
company details printed on quotes. The settings service itself is an external
collaborator; this module only reads from it.
"""

import logging
from typing import Any, Dict, Optional, Protocol

import httpx

from .request_cache import RequestCache


logger = logging.getLogger(__name__)

SETTINGS_KEYS = (
    "terms",
    "bankDetails",
    "companyPhone",
    "companyEmail",
    "invoiceLabel",
    "advancePaymentNote",
)


class SettingsSource(Protocol):
    """Anything that can asynchronously provide organization settings."""

    async def get_settings(self) -> Dict[str, Any]:
        ...


class StaticSettingsSource:
    """Settings source returning a fixed mapping."""

    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self.values = dict(values or {})

    async def get_settings(self) -> Dict[str, Any]:
        return dict(self.values)


class HttpSettingsSource:
    """Reads settings from the settings API, cached for a short TTL."""

    SETTINGS_PATH = "/api/settings"

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        cache: Optional[RequestCache] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize HttpSettingsSource.

        Args:
            base_url: Settings API base URL
            timeout: Request timeout in seconds
            cache: Response cache (a private 30 s cache by default)
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.cache = cache or RequestCache()
        self._transport = transport

    async def _fetch(self) -> Optional[Dict[str, Any]]:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(f"{self.base_url}{self.SETTINGS_PATH}")
            response.raise_for_status()
            payload = response.json()

        if not payload.get("success"):
            logger.warning("Settings API responded without success flag")
            return None
        data = payload.get("data") or {}
        return {key: data[key] for key in SETTINGS_KEYS if key in data}

    async def get_settings(self, refresh: bool = False) -> Dict[str, Any]:
        """
        Get organization settings.

        Args:
            refresh: Bypass the cache

        Returns:
            Settings mapping (camelCase keys), possibly partial

        Raises:
            httpx.HTTPError: If the request fails
        """
        key = RequestCache.make_key("settings", {"url": self.base_url})
        settings = await self.cache.get_or_fetch(key, self._fetch, skip_cache=refresh)
        return dict(settings or {})


def build_settings_source(
    base_url: str,
    timeout: float = 10.0,
    cache_ttl: float = 30.0,
) -> SettingsSource:
    """
    Build the settings source for the configured environment.

    Args:
        base_url: Settings API base URL; empty means built-in defaults only
        timeout: Request timeout in seconds
        cache_ttl: Cache time-to-live in seconds

    Returns:
        SettingsSource instance
    """
    if not base_url:
        logger.info("No settings API configured, using built-in defaults")
        return StaticSettingsSource()
    return HttpSettingsSource(base_url, timeout=timeout, cache=RequestCache(ttl=cache_ttl))
