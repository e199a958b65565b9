"""Process-wide login failure counters keyed by identity.

One instance is created per process and handed to the gate. Every mutation
happens under a single lock, so concurrent increments on a key never lose
updates. With a TTL set, every increment also drops records that went stale.
"""
import threading
import time
from dataclasses import dataclass


@dataclass(frozen=True)
class FailureRecord:
    key: str
    count: int
    last_updated: float


class FailureStore:

    def __init__(self, ttl_seconds: float | None = None, clock=time.time):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._records: dict[str, FailureRecord] = {}

    def _expired(self, record: FailureRecord, now: float) -> bool:
        if self.ttl_seconds is None:
            return False
        return now - record.last_updated > self.ttl_seconds

    def get_record(self, key: str) -> FailureRecord | None:
        with self._lock:
            record = self._records.get(key)
            if record is None or self._expired(record, self._clock()):
                return None
            return record

    def get_count(self, key: str) -> int:
        record = self.get_record(key)
        return record.count if record else 0

    def _cleanup(self, now: float) -> int:
        # caller holds the lock
        if self.ttl_seconds is None:
            return 0
        stale = [key for key, record in self._records.items() if self._expired(record, now)]
        for key in stale:
            del self._records[key]
        return len(stale)

    def increment(self, key: str) -> int:
        with self._lock:
            now = self._clock()
            self._cleanup(now)
            record = self._records.get(key)
            count = record.count + 1 if record is not None else 1
            self._records[key] = FailureRecord(key, count, now)
            return count

    def clear(self, key: str) -> None:
        with self._lock:
            self._records.pop(key, None)

    def purge_expired(self) -> int:
        """Drop records older than the TTL. Returns how many were removed."""
        with self._lock:
            return self._cleanup(self._clock())

    def __len__(self):
        with self._lock:
            return len(self._records)
