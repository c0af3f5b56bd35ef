"""In-memory TTL store shared by request-handling threads.

One record per key, expired lazily: a record past its expiry is hidden from
reads but stays in memory until the key is written again. Unless the store is
built with keep_history=False, every write also lands in a per-key history
log that is never trimmed.

Each uvicorn worker process has its own store. Nothing is persisted.
"""

import threading
import time
from contextlib import contextmanager
from typing import Any, Callable, NamedTuple


class ReadWriteLock:
    """Many concurrent readers or one writer. Not reentrant.

    Waiting writers block new readers so a steady stream of reads cannot
    starve a write.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class CacheRecord(NamedTuple):
    value: Any
    expires_at: float


class CacheStore:
    def __init__(self, clock: Callable[[], float] = time.time, keep_history: bool = True):
        self._clock = clock
        self._keep_history = keep_history
        self._lock = ReadWriteLock()
        self._records: dict[str, CacheRecord] = {}
        self._history: dict[str, list[Any]] = {}

    def get(self, key: str) -> Any | None:
        """Return the live value for key, or None if absent or expired."""
        with self._lock.read():
            record = self._records.get(key)
            now = self._clock()
        if record is None or now > record.expires_at:
            return None
        return record.value

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        """Insert or replace the record for key and log value in its history."""
        with self._lock.write():
            self._records[key] = CacheRecord(value, self._clock() + ttl_seconds)
            if self._keep_history:
                self._history.setdefault(key, []).append(value)

    def append_history(self, key: str, value: Any) -> None:
        if not self._keep_history:
            return
        with self._lock.write():
            self._history.setdefault(key, []).append(value)

    def list_history(self, key: str) -> list[Any]:
        with self._lock.read():
            return list(self._history.get(key, ()))

    def list_all_history(self) -> dict[str, list[Any]]:
        with self._lock.read():
            return {key: list(values) for key, values in self._history.items()}

    def __len__(self) -> int:
        with self._lock.read():
            now = self._clock()
            return sum(1 for record in self._records.values() if now <= record.expires_at)

    def list(self) -> dict[str, Any]:
        """Snapshot of every non-expired entry."""
        with self._lock.read():
            now = self._clock()
            return {
                key: record.value
                for key, record in self._records.items()
                if now <= record.expires_at
            }
