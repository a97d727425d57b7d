"""
Plan-tier policy resolution and tool eligibility.

Maps an Entitlement to one of three fixed PlanPolicy tiers and filters
the tool registry down to what that tier may run:

1. **Tier** -- inactive -> free; plan id containing "enterprise" -> enterprise;
   any other active plan -> pro.
2. **Tools** -- registry tools that are enabled and in the tier's tool set,
   in registry order.

The tier marker is a substring match on the plan id, so any plan id that
contains "enterprise" anywhere qualifies.

Usage::

    policy = policy_for(entitlement)
    eligible = select_tools(registry.all(), policy)
"""

from typing import Dict, Iterable, List, Optional

from ..models import Entitlement, PlanPolicy
from ..tools.models import Tool

ENTERPRISE_MARKER = "enterprise"

FREE = PlanPolicy(name="free", token_budget=1000, history_limit=4, enabled_tools=frozenset({"math"}))
PRO = PlanPolicy(name="pro", token_budget=8000, history_limit=10, enabled_tools=frozenset({"web", "math"}))
ENTERPRISE = PlanPolicy(
    name="enterprise", token_budget=16000, history_limit=14, enabled_tools=frozenset({"web", "math"})
)

PLAN_SPECS: Dict[str, PlanPolicy] = {
    FREE.name: FREE,
    PRO.name: PRO,
    ENTERPRISE.name: ENTERPRISE,
}


def policy_for(entitlement: Entitlement) -> PlanPolicy:
    """Resolve the tier for an entitlement. Total over all Entitlement values."""
    if not entitlement.active:
        return PLAN_SPECS["free"]
    if ENTERPRISE_MARKER in (entitlement.plan or ""):
        return PLAN_SPECS["enterprise"]
    return PLAN_SPECS["pro"]


def is_tool_allowed(tool: Tool, policy: PlanPolicy) -> bool:
    """Check whether a single tool may run under *policy*."""
    return tool.enabled and tool.id in policy.enabled_tools


def select_tools(tools: Iterable[Tool], policy: PlanPolicy) -> List[Tool]:
    """Filter tools through the policy.

    Returns:
        Eligible tools, registry order preserved.
    """
    return [t for t in tools if is_tool_allowed(t, policy)]


def get_filter_reason(tool: Tool, policy: PlanPolicy) -> Optional[str]:
    """Return a human-readable reason why a tool was filtered, or None if allowed."""
    if not tool.enabled:
        return f"tool '{tool.id}' is disabled in the registry"
    if tool.id not in policy.enabled_tools:
        return f"tool '{tool.id}' is not enabled for plan '{policy.name}'"
    return None
