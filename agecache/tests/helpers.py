import threading
import time

from agecache.memory import SimpleMemoryCache


class FakeClock:
    def __init__(self, monkeypatch, start: float = 0.0):
        self.current = start
        monkeypatch.setattr(time, "monotonic", self)

    def __call__(self) -> float:
        return self.current

    def advance_ms(self, ms: float) -> None:
        self.current += ms / 1000


class CountingCache(SimpleMemoryCache):
    def __init__(self, max_size: int = 100):
        super().__init__(max_size)
        self.removed = 0
        self.remove_calls = 0
        self._count_lock = threading.Lock()

    def remove(self, key: str) -> bool:
        removed = super().remove(key)
        with self._count_lock:
            self.remove_calls += 1
            if removed:
                self.removed += 1
        return removed
