import threading
import time
from dataclasses import dataclass


def now_ms() -> float:
    return time.monotonic() * 1000


@dataclass(frozen=True)
class AgingRecord:
    inserted_at: float
    lifetime: int

    def expired(self, now: float) -> bool:
        return now - self.inserted_at > self.lifetime


class AgingRegistry:
    """Per-key insertion time and allowed lifetime, in milliseconds.

    Absence of a record is never treated as expiration.
    """

    def __init__(self):
        self._records: dict[str, AgingRecord] = {}
        self._lock = threading.Lock()

    def record(self, key: str, lifetime: int) -> bool:
        """Store a fresh record; true when the key was not tracked before."""
        entry = AgingRecord(now_ms(), lifetime)
        with self._lock:
            added = key not in self._records
            self._records[key] = entry
        return added

    def get(self, key: str) -> AgingRecord | None:
        with self._lock:
            return self._records.get(key)

    def is_expired(self, key: str) -> bool:
        entry = self.get(key)
        if entry is None:
            return False
        return entry.expired(now_ms())

    def expired_keys(self) -> list[str]:
        now = now_ms()
        with self._lock:
            return [key for key, entry in self._records.items() if entry.expired(now)]

    def forget(self, key: str) -> bool:
        with self._lock:
            return self._records.pop(key, None) is not None

    def clear(self) -> int:
        with self._lock:
            dropped = len(self._records)
            self._records.clear()
        return dropped

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
