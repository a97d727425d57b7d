"""
WebAI - Entitlement-gated LLM answers with tool augmentation

Quick start:
    from webai import WebAI

    app = WebAI()  # reads OPENAI_API_KEY, WHOP_API_KEY, REVENUECAT_SECRET, SLACK_WEBHOOK_URL
    result = await app.ask({"prompt": "What is 2 + 2?", "userId": "user_123"})
    print(result.to_dict())

Building blocks:
    from webai.orchestrator import Orchestrator, EntitlementCache, RateLimiter, policy_for
    from webai.tools import Tool, ToolOutput, ToolRegistry
"""

from .app import WebAI
from .config import AppConfig
from .constants import API_VERSION
from .models import AskRequest, ConversationTurn, Entitlement, EntitlementSource, PlanPolicy, Role
from .protocols import AlertSink, AnswerBackend, AnswerResult, EntitlementProvider, ProviderLookup, TelemetrySink
from .result import (
    AskData,
    AskFailure,
    AskResult,
    AskSuccess,
    ErrorCode,
    PublicError,
)

__version__ = "2.0.0"

__all__ = [
    "WebAI",
    "AppConfig",
    "API_VERSION",
    # Models
    "AskRequest",
    "ConversationTurn",
    "Entitlement",
    "EntitlementSource",
    "PlanPolicy",
    "Role",
    # Protocols
    "AlertSink",
    "AnswerBackend",
    "AnswerResult",
    "EntitlementProvider",
    "ProviderLookup",
    "TelemetrySink",
    # Results
    "AskData",
    "AskFailure",
    "AskResult",
    "AskSuccess",
    "ErrorCode",
    "PublicError",
]
