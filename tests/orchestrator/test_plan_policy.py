"""Tests for webai.orchestrator.plan_policy - tier resolution and tool eligibility."""

import pytest

from webai.models import Entitlement, EntitlementSource, PlanPolicy
from webai.orchestrator.plan_policy import (
    ENTERPRISE,
    FREE,
    PLAN_SPECS,
    PRO,
    get_filter_reason,
    policy_for,
    select_tools,
)
from webai.tools.models import Tool, ToolOutput


async def _noop(tool_input):
    return ToolOutput(text="")


def _tool(tool_id, enabled=True):
    return Tool(id=tool_id, name=tool_id.title(), description="", run=_noop, enabled=enabled)


class TestPlanSpecs:

    def test_tiers(self):
        assert (FREE.token_budget, FREE.history_limit, FREE.enabled_tools) == (1000, 4, frozenset({"math"}))
        assert (PRO.token_budget, PRO.history_limit, PRO.enabled_tools) == (8000, 10, frozenset({"web", "math"}))
        assert (ENTERPRISE.token_budget, ENTERPRISE.history_limit) == (16000, 14)
        assert set(PLAN_SPECS) == {"free", "pro", "enterprise"}

    def test_policy_is_immutable(self):
        with pytest.raises(Exception):
            PRO.token_budget = 1

    def test_invalid_budget_rejected(self):
        with pytest.raises(ValueError):
            PlanPolicy(name="bad", token_budget=0, history_limit=1)

    def test_invalid_history_rejected(self):
        with pytest.raises(ValueError):
            PlanPolicy(name="bad", token_budget=10, history_limit=-1)


class TestPolicyFor:

    def test_inactive_is_free(self):
        assert policy_for(Entitlement.inactive()) is FREE

    def test_inactive_with_enterprise_plan_is_still_free(self):
        ent = Entitlement(active=False, plan="enterprise_annual", source=EntitlementSource.WHOP)
        assert policy_for(ent) is FREE

    @pytest.mark.parametrize("plan", [
        "enterprise",
        "plan_enterprise_yearly",
        "xxenterprisexx",
    ])
    def test_enterprise_marker_anywhere(self, plan):
        ent = Entitlement(active=True, plan=plan, source=EntitlementSource.REVENUECAT)
        assert policy_for(ent) is ENTERPRISE

    @pytest.mark.parametrize("plan", [None, "", "pro", "plan_abc123", "Enterprise"])
    def test_other_active_is_pro(self, plan):
        ent = Entitlement(active=True, plan=plan, source=EntitlementSource.WHOP)
        assert policy_for(ent) is PRO


class TestSelectTools:

    def test_preserves_registry_order(self):
        tools = [_tool("math"), _tool("web")]
        assert [t.id for t in select_tools(tools, PRO)] == ["math", "web"]

    def test_filters_by_plan(self):
        tools = [_tool("web"), _tool("math")]
        assert [t.id for t in select_tools(tools, FREE)] == ["math"]

    def test_disabled_tools_skipped(self):
        tools = [_tool("web", enabled=False), _tool("math")]
        assert [t.id for t in select_tools(tools, PRO)] == ["math"]

    def test_unknown_tools_skipped(self):
        tools = [_tool("weather"), _tool("web")]
        assert [t.id for t in select_tools(tools, ENTERPRISE)] == ["web"]


class TestFilterReason:

    def test_allowed(self):
        assert get_filter_reason(_tool("math"), FREE) is None

    def test_disabled(self):
        assert "disabled" in get_filter_reason(_tool("math", enabled=False), FREE)

    def test_not_in_plan(self):
        reason = get_filter_reason(_tool("web"), FREE)
        assert "free" in reason
