import logging
from collections.abc import Mapping
from typing import Any

from .aging import AgingRegistry
from .memory import MemoryCache
from .metrics import CACHE_EXPIRATIONS, CACHE_HITS, CACHE_MISSES, CACHE_WRITES, TRACKED_KEYS

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    pass


def _is_lifetime(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


class ExpiringCache(MemoryCache):
    """Adds per-key lifetimes (milliseconds) on top of another memory cache.

    Expiration is lazy: an entry past its lifetime is evicted the next time it
    is read. ``keys()`` and ``snapshot()`` may still list such entries until
    then. Keys written straight into the wrapped cache are never expired here.
    """

    def __init__(self, cache: MemoryCache, default_lifetime: int):
        if cache is None:
            raise ConfigurationError("ExpiringCache needs an underlying cache.")
        if not _is_lifetime(default_lifetime):
            raise ConfigurationError(
                f"default_lifetime must be a non-negative integer of milliseconds, got {default_lifetime!r}."
            )
        self.cache = cache
        self._default_lifetime = default_lifetime
        self.registry = AgingRegistry()
        logger.info(
            "ExpiringCache over %s initialized (default_lifetime=%sms)",
            type(cache).__name__,
            default_lifetime,
        )

    @property
    def default_lifetime(self) -> int:
        return self._default_lifetime

    @property
    def tracked(self) -> int:
        return len(self.registry)

    def _track(self, key: str, stored: bool, lifetime: int) -> bool:
        if not stored:
            CACHE_WRITES.labels(outcome="rejected").inc()
            return False
        if self.registry.record(key, lifetime):
            TRACKED_KEYS.inc()
        CACHE_WRITES.labels(outcome="stored").inc()
        return True

    def _forget(self, key: str) -> bool:
        # the gauge is shared by every instance, so only apply our own changes
        if self.registry.forget(key):
            TRACKED_KEYS.dec()
            return True
        return False

    def _clear_registry(self) -> None:
        TRACKED_KEYS.dec(self.registry.clear())

    def _evict(self, key: str) -> bool:
        # both steps are no-ops when a concurrent reader already evicted the key
        self.cache.remove(key)
        if not self._forget(key):
            return False
        CACHE_EXPIRATIONS.inc()
        logger.debug("Evicted expired key: %s", key)
        return True

    def put(self, key: str, value: Any) -> bool:
        return self._track(key, self.cache.put(key, value), self._default_lifetime)

    def put_with_lifetime(self, key: str, value: Any, lifetime: int) -> bool:
        if not _is_lifetime(lifetime):
            raise ValueError(f"lifetime must be a non-negative integer of milliseconds, got {lifetime!r}")
        return self._track(key, self.cache.put_with_lifetime(key, value, lifetime), lifetime)

    def get(self, key: str) -> Any | None:
        if self.registry.is_expired(key):
            self._evict(key)
            CACHE_MISSES.inc()
            return None
        value = self.cache.get(key)
        if value is None:
            CACHE_MISSES.inc()
        else:
            CACHE_HITS.inc()
        return value

    def purge_expired(self) -> int:
        """Evict every tracked key whose lifetime has elapsed.

        Runs only when called; returns the number of keys evicted.
        """
        evicted = 0
        for key in self.registry.expired_keys():
            # skip keys rewritten since the scan
            if self.registry.is_expired(key) and self._evict(key):
                evicted += 1
        return evicted

    def remove(self, key: str) -> bool:
        self._forget(key)
        return self.cache.remove(key)

    def keys(self) -> set[str]:
        return self.cache.keys()

    def snapshot(self) -> Mapping[str, Any]:
        return self.cache.snapshot()

    def resize(self, max_size: int) -> None:
        self.cache.resize(max_size)

    def clear(self) -> None:
        self._clear_registry()
        self.cache.clear()

    def close(self) -> None:
        self._clear_registry()
        self.cache.close()
        logger.info("ExpiringCache closed")
