import threading
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any


class CacheClosedError(RuntimeError):
    pass


class MemoryCache:
    """Capability set shared by every memory cache, decorated or not.

    Implementations must be safe for concurrent use by multiple threads.
    """

    def put(self, key: str, value: Any) -> bool:
        raise NotImplementedError

    def put_with_lifetime(self, key: str, value: Any, lifetime: int) -> bool:
        raise NotImplementedError

    def get(self, key: str) -> Any | None:
        raise NotImplementedError

    def remove(self, key: str) -> bool:
        raise NotImplementedError

    def keys(self) -> set[str]:
        raise NotImplementedError

    def snapshot(self) -> Mapping[str, Any]:
        raise NotImplementedError

    def resize(self, max_size: int) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError


class SimpleMemoryCache(MemoryCache):
    """Dict-backed cache that drops its oldest entries once over max_size."""

    def __init__(self, max_size: int):
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self.max_size = max_size
        self.store: dict[str, Any] = {}
        self.closed = False
        self._lock = threading.Lock()

    def _check_open(self) -> None:
        if self.closed:
            raise CacheClosedError("cache is closed")

    def _trim(self) -> None:
        while len(self.store) > self.max_size:
            self.store.pop(next(iter(self.store)))

    def put(self, key: str, value: Any) -> bool:
        if key is None or value is None:
            return False
        with self._lock:
            self._check_open()
            # re-insert so the entry counts as the newest
            self.store.pop(key, None)
            self.store[key] = value
            self._trim()
        return True

    def put_with_lifetime(self, key: str, value: Any, lifetime: int) -> bool:  # noqa: ARG002
        return self.put(key, value)

    def get(self, key: str) -> Any | None:
        with self._lock:
            self._check_open()
            return self.store.get(key)

    def remove(self, key: str) -> bool:
        with self._lock:
            self._check_open()
            return self.store.pop(key, None) is not None

    def keys(self) -> set[str]:
        with self._lock:
            self._check_open()
            return set(self.store)

    def snapshot(self) -> Mapping[str, Any]:
        with self._lock:
            self._check_open()
            return MappingProxyType(dict(self.store))

    def resize(self, max_size: int) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        with self._lock:
            self._check_open()
            self.max_size = max_size
            self._trim()

    def clear(self) -> None:
        with self._lock:
            self._check_open()
            self.store.clear()

    def close(self) -> None:
        with self._lock:
            self.store.clear()
            self.closed = True
