"""
Fixed-window per-user rate limiter.

Counts requests per ``(user, window)`` bucket and rejects once the count
passes ``max_requests``. Buckets expire with the window so the store does
not grow without bound. Anonymous callers are never limited.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..constants import (
    RATE_LIMIT_MAX_REQUESTS,
    RATE_LIMIT_RETRY_SECONDS,
    RATE_LIMIT_WINDOW_SECONDS,
)
from ..store import TTLStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    retry_after: Optional[int] = None


class RateLimiter:
    """Fixed-window counter keyed by ``rl:{user_id}:{window_index}``."""

    def __init__(
        self,
        store: Optional[TTLStore[int]] = None,
        max_requests: int = RATE_LIMIT_MAX_REQUESTS,
        window_seconds: int = RATE_LIMIT_WINDOW_SECONDS,
    ) -> None:
        self.store: TTLStore[int] = store if store is not None else TTLStore()
        self.max_requests = max_requests
        self.window_seconds = window_seconds

    def bucket_key(self, user_id: str) -> str:
        window = int(self.store.now() // self.window_seconds)
        return f"rl:{user_id}:{window}"

    async def allow(self, user_id: Optional[str], max_requests: Optional[int] = None) -> RateLimitDecision:
        """Count one request for *user_id* and decide whether it may proceed.

        The retry hint is a constant upper bound, not the time left in the window.
        """
        if not user_id:
            return RateLimitDecision(allowed=True)

        limit = self.max_requests if max_requests is None else max_requests
        key = self.bucket_key(user_id)
        count = self.store.incr(key, ttl=self.window_seconds)

        if count <= limit:
            return RateLimitDecision(allowed=True)

        logger.info(f"Rate limit hit: user={user_id} count={count} limit={limit}")
        return RateLimitDecision(allowed=False, retry_after=RATE_LIMIT_RETRY_SECONDS)
