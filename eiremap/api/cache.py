"""In-memory cache of downloaded GeoJSON, keyed by URL.

Entries expire after a TTL and the cache holds at most ``MAX_ENTRIES``
payloads; the least recently used one goes first.
"""

from __future__ import annotations

import logging
import os
import time
from collections import OrderedDict
from functools import wraps
from typing import Any, Callable

logger = logging.getLogger(__name__)

DEFAULT_TTL = int(os.getenv("EIREMAP_CACHE_TTL", "300"))
MAX_ENTRIES = int(os.getenv("EIREMAP_CACHE_SIZE", "16"))

# url -> (expires_at, payload), oldest use first
_cache: OrderedDict[str, tuple[float, dict[str, Any]]] = OrderedDict()


def _evict_expired(now: float) -> None:
    expired = [url for url, (expires, _) in _cache.items() if expires <= now]
    for url in expired:
        del _cache[url]
    if expired:
        logger.debug("Evicted %d expired GeoJSON entries", len(expired))


def cached_geojson(ttl: int = DEFAULT_TTL, maxsize: int = MAX_ENTRIES):
    """Decorator caching a ``fetch(url)`` function's payload per URL."""

    def decorator(fetch: Callable[[str], dict[str, Any]]) -> Callable[[str], dict[str, Any]]:
        @wraps(fetch)
        def wrapper(url: str) -> dict[str, Any]:
            url = url.strip()
            now = time.time()
            hit = _cache.get(url)
            if hit is not None and now < hit[0]:
                _cache.move_to_end(url)
                return hit[1]
            payload = fetch(url)
            _evict_expired(now)
            _cache[url] = (now + ttl, payload)
            _cache.move_to_end(url)
            while len(_cache) > maxsize:
                evicted, _ = _cache.popitem(last=False)
                logger.debug("Cache full, dropped %s", evicted)
            return payload
        return wrapper
    return decorator


def cached_urls() -> list[str]:
    """URLs currently held, least recently used first."""
    return list(_cache)


def clear_cache() -> int:
    """Flush the entire cache. Returns the number of evicted entries."""
    count = len(_cache)
    _cache.clear()
    return count
