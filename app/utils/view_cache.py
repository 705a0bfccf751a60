"""In-process cache for dashboard listing data.

Listing pages read their rows through :func:`cached` keyed by the request
path and query arguments.  Mutations call :func:`revalidate_path` so the next
request for an affected page reloads from the database.  Entries live in a
``cachetools.TTLCache`` so both their age and their number stay bounded.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Hashable, Optional, Tuple

from cachetools import TTLCache
from flask import current_app

CacheKey = Tuple[str, Hashable]

DEFAULT_TIMEOUT = 300
DEFAULT_MAXSIZE = 256


class ViewCache:
    """Thread-safe store of values keyed by ``(path, key)``."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        maxsize: int = DEFAULT_MAXSIZE,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self.timeout = timeout
        self.maxsize = maxsize
        self._entries: TTLCache = TTLCache(
            maxsize=maxsize, ttl=timeout, timer=timer
        )
        self._lock = threading.Lock()

    def get(self, path: str, key: Hashable = None) -> Optional[Any]:
        with self._lock:
            return self._entries.get((path, key))

    def set(self, path: str, key: Hashable, value: Any) -> None:
        with self._lock:
            self._entries[(path, key)] = value

    def revalidate(self, path: str) -> int:
        """Drop entries for ``path`` and every path below it."""

        prefix = path.rstrip("/") + "/"
        dropped = 0
        with self._lock:
            for cache_key in list(self._entries.keys()):
                if cache_key[0] == path or cache_key[0].startswith(prefix):
                    if self._entries.pop(cache_key, None) is not None:
                        dropped += 1
        return dropped

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def get_view_cache() -> ViewCache:
    app = current_app._get_current_object()
    cache = app.extensions.get("view_cache")
    if cache is None:
        cache = app.extensions["view_cache"] = ViewCache(
            timeout=app.config.get("VIEW_CACHE_TIMEOUT", DEFAULT_TIMEOUT),
            maxsize=app.config.get("VIEW_CACHE_MAXSIZE", DEFAULT_MAXSIZE),
        )
    return cache


def cached(path: str, key: Hashable, loader: Callable[[], Any]) -> Any:
    """Return the cached value for ``(path, key)``, loading it on a miss."""

    cache = get_view_cache()
    value = cache.get(path, key)
    if value is None:
        value = loader()
        if value is not None:
            cache.set(path, key, value)
    return value


def revalidate_path(path: str) -> None:
    """Invalidate cached data for ``path`` so the next request reloads it."""

    dropped = get_view_cache().revalidate(path)
    current_app.logger.debug("Revalidated %s (%d cached entries)", path, dropped)
