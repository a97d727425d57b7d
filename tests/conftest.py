"""Shared fixtures: deterministic clock, stub answer backend, fake providers."""

from typing import Dict, List, Optional

import pytest

from webai.models import EntitlementSource
from webai.protocols import AnswerResult, ProviderLookup


class FakeClock:
    """Callable wall clock that only moves when told to."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class EchoBackend:
    """Answer backend that echoes the prompt and records every call."""

    def __init__(self, tokens_used: Optional[int] = 42):
        self.calls: List[Dict] = []
        self.tokens_used = tokens_used

    async def chat(self, prompt, context_blocks, token_budget=None):
        self.calls.append({
            "prompt": prompt,
            "context_blocks": list(context_blocks),
            "token_budget": token_budget,
        })
        return AnswerResult(text=f"Echo: {prompt}", tokens_used=self.tokens_used)


class FakeProvider:
    """Entitlement provider returning a canned lookup (or raising)."""

    def __init__(self, source: EntitlementSource, active: bool = False, plan: Optional[str] = None,
                 error: Optional[Exception] = None):
        self.source = source
        self.active = active
        self.plan = plan
        self.error = error
        self.calls: List[str] = []

    async def lookup(self, user_id: str) -> ProviderLookup:
        self.calls.append(user_id)
        if self.error is not None:
            raise self.error
        return ProviderLookup(active=self.active, plan=self.plan)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def echo_backend():
    return EchoBackend()


@pytest.fixture
def pro_provider():
    return FakeProvider(EntitlementSource.WHOP, active=True, plan="plan_pro_monthly")


@pytest.fixture
def make_provider():
    return FakeProvider
