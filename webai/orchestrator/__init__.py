"""
WebAI Orchestrator - Entitlement, quota and tool coordination for asks

Components:
- EntitlementCache: per-user entitlement with TTL and single-flight
- RateLimiter: fixed-window per-user request cap
- policy_for / select_tools: plan tiers and tool eligibility
- condense_history: bounded, truncated history view
- Orchestrator: the ask workflow
"""

from .context_manager import HistoryCondenser, condense_history
from .entitlement_cache import EntitlementCache
from .models import OrchestratorConfig, ToolPartition, WorkflowState
from .orchestrator import Orchestrator, build_context_blocks
from .plan_policy import ENTERPRISE, FREE, PLAN_SPECS, PRO, policy_for, select_tools
from .rate_limiter import RateLimitDecision, RateLimiter

__all__ = [
    "HistoryCondenser",
    "condense_history",
    "EntitlementCache",
    "OrchestratorConfig",
    "ToolPartition",
    "WorkflowState",
    "Orchestrator",
    "build_context_blocks",
    "ENTERPRISE",
    "FREE",
    "PLAN_SPECS",
    "PRO",
    "policy_for",
    "select_tools",
    "RateLimitDecision",
    "RateLimiter",
]
