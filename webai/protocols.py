"""
WebAI Protocols - Abstract interfaces for dependency injection

These protocols define the contracts the ask engine consumes. Concrete
entitlement providers, answer backends and sinks live outside the core
and only need to satisfy these shapes.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from .models import EntitlementSource


@dataclass(frozen=True)
class ProviderLookup:
    """What a single entitlement provider reports for a user"""
    active: bool
    plan: Optional[str] = None


@dataclass(frozen=True)
class AnswerResult:
    """Text and usage returned by the answer backend"""
    text: str
    tokens_used: Optional[int] = None


@runtime_checkable
class EntitlementProvider(Protocol):
    """
    A membership/subscription source.

    Providers are queried in priority order; the first one that reports
    an active membership decides the entitlement.

    Example:
        class MyProvider:
            source = EntitlementSource.WHOP

            async def lookup(self, user_id: str) -> ProviderLookup:
                return ProviderLookup(active=True, plan="plan_pro")
    """

    source: EntitlementSource

    async def lookup(self, user_id: str) -> ProviderLookup:
        ...


@runtime_checkable
class AnswerBackend(Protocol):
    """
    Answer-generation capability.

    Raises PublicError(code=SERVER_ERROR) when unreachable or misconfigured.
    """

    async def chat(
        self,
        prompt: str,
        context_blocks: List[str],
        token_budget: Optional[int] = None,
    ) -> AnswerResult:
        ...


@runtime_checkable
class TelemetrySink(Protocol):
    """Analytics destination for workflow summaries"""

    async def record(self, event: Dict[str, Any]) -> None:
        ...


@runtime_checkable
class AlertSink(Protocol):
    """Operational alert destination"""

    async def notify(self, message: str) -> None:
        ...
