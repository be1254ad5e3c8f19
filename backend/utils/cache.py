import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from config import logger
from config.constants import CACHE_CONFIG
from models.verdicts import Verdict


@dataclass(frozen=True)
class CacheEntry:
    verdict: Verdict
    stored_at: float


class ResultCache:
    """
    TTL-bounded memo of statement/context -> Verdict.

    Capacity pressure evicts the oldest insertion first. The lock only guards
    dictionary operations, so it is never held across an await. It is one lock
    for the whole cache because eviction needs a single insertion order.
    """

    def __init__(
        self,
        ttl_seconds: float = CACHE_CONFIG.TTL_SECONDS,
        max_entries: int = CACHE_CONFIG.MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @staticmethod
    def make_key(text: str, context: str = "") -> str:
        return f"{(text or '').strip().lower()}::{(context or '').strip().lower()}"

    def get(self, key: str) -> Optional[Verdict]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            if self._clock() - entry.stored_at >= self.ttl_seconds:
                del self._entries[key]
                self._misses += 1
                return None
            self._hits += 1
            return entry.verdict

    def put(self, key: str, verdict: Verdict):
        with self._lock:
            self._entries.pop(key, None)
            while len(self._entries) >= self.max_entries:
                evicted_key, _ = self._entries.popitem(last=False)
                logger.debug(f"Cache full, evicted oldest entry: {evicted_key[:60]}")
            self._entries[key] = CacheEntry(verdict=verdict, stored_at=self._clock())

    def purge_expired(self) -> int:
        with self._lock:
            now = self._clock()
            expired = [k for k, e in self._entries.items() if now - e.stored_at >= self.ttl_seconds]
            for key in expired:
                del self._entries[key]
            return len(expired)

    def clear(self):
        with self._lock:
            self._entries.clear()

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {"entries": len(self._entries), "hits": self._hits, "misses": self._misses}

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
