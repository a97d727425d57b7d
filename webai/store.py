"""
Keyed store with per-entry expiry.

Backs the entitlement cache and the rate-limit counters. Expired entries
are dropped when touched and can be swept with ``purge_expired()``.

Usage::

    store = TTLStore(clock=time.time)
    store.set("user-1", value, ttl=300)
    store.get("user-1")          # value until 300s have passed
    store.incr("rl:user-1:42", ttl=60)
"""

import time
from typing import Any, Callable, Dict, Generic, Optional, Tuple, TypeVar

Clock = Callable[[], float]

V = TypeVar("V")


class TTLStore(Generic[V]):
    """In-memory key/value store; every entry carries an absolute expiry."""

    def __init__(self, clock: Clock = time.time) -> None:
        self._clock = clock
        self._entries: Dict[str, Tuple[V, float]] = {}

    def now(self) -> float:
        return self._clock()

    def get(self, key: str) -> Optional[V]:
        """Return the live value for *key*, or None if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at <= self._clock():
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: V, ttl: float) -> None:
        self._entries[key] = (value, self._clock() + ttl)

    def evict(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def incr(self, key: str, ttl: float) -> int:
        """Increment an integer counter, creating it with *ttl* on first hit.

        The expiry is fixed at creation; later increments do not extend it.
        """
        now = self._clock()
        entry = self._entries.get(key)
        if entry is None or entry[1] <= now:
            count, expires_at = 0, now + ttl
        else:
            count, expires_at = entry
        count += 1
        self._entries[key] = (count, expires_at)  # type: ignore[assignment]
        return count

    def purge_expired(self) -> int:
        """Drop every expired entry. Returns how many were removed."""
        now = self._clock()
        expired = [k for k, (_, exp) in self._entries.items() if exp <= now]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Any) -> bool:
        return self.get(key) is not None
