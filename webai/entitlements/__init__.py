"""
WebAI Entitlements - Concrete membership providers

Usage:
    from webai.entitlements import WhopProvider, RevenueCatProvider

    providers = [WhopProvider(api_key="..."), RevenueCatProvider(api_key="...")]
"""

from .providers import HTTPEntitlementProvider, RevenueCatProvider, WhopProvider

__all__ = [
    "HTTPEntitlementProvider",
    "RevenueCatProvider",
    "WhopProvider",
]
