"""
Per-user entitlement resolution with a TTL cache.

Resolution order for a user id:

1. No id -> inactive/none, no cache, no provider calls.
2. Live cache entry -> returned as-is.
3. Providers in priority order; the first active one wins.
4. Nothing active (or every provider failed) -> inactive/none.

Every resolution, active or not, is cached for ``ttl_seconds``. Provider
failures are logged and treated as "this provider found nothing".

With ``single_flight`` enabled, concurrent misses for the same user share
one upstream resolution instead of each calling the providers.
"""

import asyncio
import logging
from typing import Dict, List, Optional, Sequence

from ..constants import ENTITLEMENT_TTL_SECONDS
from ..models import Entitlement
from ..protocols import EntitlementProvider
from ..store import TTLStore

logger = logging.getLogger(__name__)


class EntitlementCache:
    """Resolves and caches Entitlement values keyed by user id."""

    def __init__(
        self,
        providers: Optional[Sequence[EntitlementProvider]] = None,
        store: Optional[TTLStore[Entitlement]] = None,
        ttl_seconds: float = ENTITLEMENT_TTL_SECONDS,
        single_flight: bool = True,
    ) -> None:
        self.providers: List[EntitlementProvider] = list(providers or [])
        self.store: TTLStore[Entitlement] = store if store is not None else TTLStore()
        self.ttl_seconds = ttl_seconds
        self.single_flight = single_flight
        self._in_flight: Dict[str, "asyncio.Future[Entitlement]"] = {}

    async def resolve(self, user_id: Optional[str]) -> Entitlement:
        """Return the entitlement for *user_id*, consulting providers on a miss."""
        if not user_id:
            return Entitlement.inactive()

        cached = self.store.get(user_id)
        if cached is not None:
            return cached

        if not self.single_flight:
            return await self._refresh(user_id)

        task = self._in_flight.get(user_id)
        if task is None:
            task = asyncio.ensure_future(self._refresh(user_id))
            self._in_flight[user_id] = task
            task.add_done_callback(lambda done, key=user_id: self._forget(key, done))
        # A cancelled caller leaves the shared lookup running for the others.
        return await asyncio.shield(task)

    def _forget(self, user_id: str, task: "asyncio.Future[Entitlement]") -> None:
        if self._in_flight.get(user_id) is task:
            del self._in_flight[user_id]
        if not task.cancelled():
            task.exception()

    def invalidate(self, user_id: str) -> bool:
        """Drop a cached entitlement so the next resolve hits the providers."""
        return self.store.evict(user_id)

    async def _refresh(self, user_id: str) -> Entitlement:
        entitlement = await self._query_providers(user_id)
        self.store.set(user_id, entitlement, ttl=self.ttl_seconds)
        logger.debug(
            f"Entitlement resolved: user={user_id} active={entitlement.active} "
            f"source={entitlement.source.value}"
        )
        return entitlement

    async def _query_providers(self, user_id: str) -> Entitlement:
        for provider in self.providers:
            try:
                found = await provider.lookup(user_id)
            except Exception as e:
                logger.warning(
                    f"Entitlement provider '{provider.source.value}' failed for user={user_id}: {e}",
                    exc_info=True,
                )
                continue
            if found.active:
                return Entitlement(active=True, plan=found.plan, source=provider.source)
        return Entitlement.inactive()
