"""Time-bounded response cache owned by an ApiClient."""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

DEFAULT_TTL_SECONDS = 5 * 60


@dataclass
class _Entry:
    data: Any
    stored_at: float


class ResponseCache:
    """In-memory cache keyed by request signature.

    Entries are only invalidated by age or an explicit `clear()`; mutations
    through the API do not evict related reads.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, _Entry] = {}

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None when absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at >= self.ttl_seconds:
            del self._entries[key]
            return None
        return entry.data

    def set(self, key: str, data: Any) -> None:
        """Store a value and drop every entry that has expired."""
        now = self._clock()
        self._entries = {
            k: entry
            for k, entry in self._entries.items()
            if now - entry.stored_at < self.ttl_seconds
        }
        self._entries[key] = _Entry(data=data, stored_at=now)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
