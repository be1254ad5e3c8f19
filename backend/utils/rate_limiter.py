import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional


@dataclass
class RateWindow:
    limit: int
    count: int = 0
    window_start: float = 0.0


class SourceRateLimiter:
    """
    Per-source fixed-window admission control.

    A source with no configured limit is always admitted. Each window carries
    its own lock so unrelated sources never contend.
    """

    def __init__(
        self,
        limits: Optional[Mapping[str, int]] = None,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic
    ):
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, RateWindow] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

        for source_id, limit in (limits or {}).items():
            self.configure(source_id, limit)

    def configure(self, source_id: str, max_per_minute: int):
        with self._registry_lock:
            lock = self._locks.get(source_id)
            if lock is None:
                # Window goes in before its lock is visible to allow/record
                self._windows[source_id] = RateWindow(limit=max_per_minute, window_start=self._clock())
                self._locks[source_id] = threading.Lock()
                return
        with lock:
            self._windows[source_id].limit = max_per_minute

    def allow(self, source_id: str) -> bool:
        lock = self._locks.get(source_id)
        if lock is None:
            return True
        with lock:
            return self._allow_locked(self._windows[source_id])

    def record(self, source_id: str):
        lock = self._locks.get(source_id)
        if lock is None:
            return
        with lock:
            self._windows[source_id].count += 1

    def try_acquire(self, source_id: str) -> bool:
        """Admit and record one call atomically."""
        lock = self._locks.get(source_id)
        if lock is None:
            return True
        with lock:
            window = self._windows[source_id]
            if not self._allow_locked(window):
                return False
            window.count += 1
            return True

    def remaining(self, source_id: str) -> Optional[int]:
        lock = self._locks.get(source_id)
        if lock is None:
            return None
        with lock:
            window = self._windows[source_id]
            self._allow_locked(window)
            return max(0, window.limit - window.count)

    def _allow_locked(self, window: RateWindow) -> bool:
        now = self._clock()
        if now - window.window_start > self.window_seconds:
            window.count = 0
            window.window_start = now
        return window.count < window.limit
