"""
Membership providers consulted by the entitlement cache.

- WhopProvider: Whop memberships API (queried first)
- RevenueCatProvider: RevenueCat subscribers API

A non-2xx response means "no membership found". Transport failures
propagate; the entitlement cache treats them the same way.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from ..models import EntitlementSource
from ..protocols import ProviderLookup

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class HTTPEntitlementProvider:
    """Shared plumbing: bearer auth, a JSON GET, and an optional injected client."""

    source: EntitlementSource = EntitlementSource.NONE
    api_base: str = ""

    def __init__(
        self,
        api_key: str,
        api_base: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if not api_key:
            raise ValueError(f"{type(self).__name__} requires an api_key")
        self.api_key = api_key
        self.api_base = (api_base or self.api_base).rstrip("/")
        self.timeout = timeout
        self._client = client

    async def _get_json(self, path: str, params: Optional[Dict[str, str]] = None) -> Optional[Any]:
        """GET ``api_base + path``. Returns parsed JSON, or None on a non-2xx status."""
        url = f"{self.api_base}{path}"
        headers = {"Authorization": f"Bearer {self.api_key}"}

        if self._client is not None:
            response = await self._client.get(url, params=params, headers=headers, timeout=self.timeout)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=params, headers=headers)

        if not response.is_success:
            logger.info(f"{self.source.value} lookup returned HTTP {response.status_code}")
            return None
        return response.json()


class WhopProvider(HTTPEntitlementProvider):
    """Active iff any membership has status "active"; plan is the first membership's price id."""

    source = EntitlementSource.WHOP
    api_base = "https://api.whop.com/api/v2"

    async def lookup(self, user_id: str) -> ProviderLookup:
        payload = await self._get_json("/memberships", params={"user_id": user_id})
        memberships = (payload or {}).get("data") or []
        if not any(m.get("status") == "active" for m in memberships if isinstance(m, dict)):
            return ProviderLookup(active=False)
        first = memberships[0] if isinstance(memberships[0], dict) else {}
        return ProviderLookup(active=True, plan=first.get("price_id"))


class RevenueCatProvider(HTTPEntitlementProvider):
    """Active iff any subscriber entitlement is active; plan is that entitlement's key."""

    source = EntitlementSource.REVENUECAT
    api_base = "https://api.revenuecat.com/v1"

    async def lookup(self, user_id: str) -> ProviderLookup:
        payload = await self._get_json(f"/subscribers/{quote(user_id, safe='')}")
        subscriber = (payload or {}).get("subscriber") or {}
        entitlements = subscriber.get("entitlements") or {}
        for key, value in entitlements.items():
            if isinstance(value, dict) and value.get("is_active"):
                return ProviderLookup(active=True, plan=key)
        return ProviderLookup(active=False)
