"""HTTP response caching for catalog pages using requests-cache."""

from datetime import timedelta
from pathlib import Path
from typing import Optional

import requests_cache

from xr.utils.platform import get_user_cache_dir


class CatalogCache:
    """Cache for catalog page responses.

    Uses requests-cache for HTTP response caching with TTL-based expiration.
    Search results are POST responses, so POST is cached as well as GET.
    """

    def __init__(
        self,
        cache_dir: Optional[Path] = None,
        ttl: timedelta = timedelta(days=7),
        enabled: bool = True,
    ):
        """Initialize catalog cache.

        Args:
            cache_dir: Directory for cache storage (defaults to user cache dir)
            ttl: Time-to-live for cached entries
            enabled: Whether caching is enabled
        """
        self.enabled = enabled
        self.ttl = ttl
        self.cache_dir = cache_dir if cache_dir is not None else get_user_cache_dir()

        if enabled:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            self._session = requests_cache.CachedSession(
                cache_name=str(self.cache_dir / "http_cache"),
                backend="sqlite",
                expire_after=ttl,
                allowable_codes=[200],
                allowable_methods=["GET", "POST"],
                stale_if_error=True,
            )
        else:
            self._session = requests_cache.CachedSession(backend="memory")

    def get_session(self) -> requests_cache.CachedSession:
        """Get the cached session for HTTP requests.

        Returns:
            CachedSession: Requests session with caching
        """
        return self._session
