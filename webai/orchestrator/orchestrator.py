"""
WebAI Orchestrator - Sequences one ask from entitlement to answer

Workflow (``run_workflow``):
    1. Resolve entitlement and plan policy
    2. Condense history to the policy window
    3. Select eligible tools (enabled, allowed by the plan, registry order)
    4. Run them, each under its own deadline
    5. Partition outcomes into used / timed out / errored / dropped
    6. Build the "Tools info" context block from used tools' text
    7. Call the answer backend with the plan token budget
    8. Assemble AskData
    9. Emit a telemetry summary (background, never affects the result)

Gating (rate limit, subscription) happens before ``run_workflow`` in the
entry point. Failures in steps 1-7 propagate to the caller; the
orchestrator itself never alerts. Tool and provider failures are already
contained by the tool executor and the entitlement cache.

Example:
    orchestrator = Orchestrator(
        entitlements=EntitlementCache(providers=[...]),
        backend=LLMAnswerBackend(client),
        registry=default_registry(),
        telemetry=TelemetryEmitter(LoggingTelemetrySink()),
    )
    data = await orchestrator.run_workflow(AskRequest(prompt="2 + 2?", user_id="u1"))
"""

import logging
import time
from typing import List, Optional

from ..constants import API_VERSION, TOOL_CONTEXT_HEADER
from ..models import AskRequest, PlanPolicy
from ..protocols import AnswerBackend
from ..result import AskData
from ..telemetry.emitter import TelemetryEmitter
from ..tools.builtin import default_registry
from ..tools.executor import ToolExecutor
from ..tools.models import Tool, ToolInput
from ..tools.registry import ToolRegistry
from .context_manager import HistoryCondenser
from .entitlement_cache import EntitlementCache
from .models import OrchestratorConfig, ToolPartition, WorkflowState
from .plan_policy import get_filter_reason, policy_for, select_tools

logger = logging.getLogger(__name__)


def build_context_blocks(texts: List[str]) -> List[str]:
    """One synthetic tool-info block, or nothing when no tool produced text."""
    if not texts:
        return []
    return [TOOL_CONTEXT_HEADER + "\n\n".join(texts)]


class Orchestrator:
    """
    Central coordinator for an ask request.

    Override ``select_tools()`` to change eligibility, or
    ``post_process()`` to adjust the assembled AskData.
    """

    def __init__(
        self,
        entitlements: EntitlementCache,
        backend: AnswerBackend,
        registry: Optional[ToolRegistry] = None,
        executor: Optional[ToolExecutor] = None,
        telemetry: Optional[TelemetryEmitter] = None,
        config: Optional[OrchestratorConfig] = None,
    ) -> None:
        if backend is None:
            raise ValueError("backend is required")
        self.entitlements = entitlements
        self.backend = backend
        self.registry = registry if registry is not None else default_registry()
        self.executor = executor or ToolExecutor()
        self.telemetry = telemetry or TelemetryEmitter()
        self.config = config or OrchestratorConfig()
        self.condenser = HistoryCondenser(self.config.history_char_limit)

    # ------------------------------------------------------------------
    # Extension points
    # ------------------------------------------------------------------

    def select_tools(self, policy: PlanPolicy) -> List[Tool]:
        """Eligible tools for *policy*, in registry order."""
        tools = self.registry.all()
        if logger.isEnabledFor(logging.DEBUG):
            for tool in tools:
                reason = get_filter_reason(tool, policy)
                if reason:
                    logger.debug(f"Skipping {reason}")
        return select_tools(tools, policy)

    async def post_process(self, data: AskData, request: AskRequest) -> AskData:
        return data

    # ------------------------------------------------------------------
    # Workflow
    # ------------------------------------------------------------------

    async def run_workflow(self, request: AskRequest) -> AskData:
        """Run steps 1-9 for an already validated and gated request."""
        start = time.monotonic()

        entitlement = await self.entitlements.resolve(request.user_id)
        policy = policy_for(entitlement)
        self._trace(request, WorkflowState.POLICY_SELECTED, f"plan={policy.name}")

        condensed = self.condenser.condense(request.history, policy.history_limit)
        tools = self.select_tools(policy)

        self._trace(request, WorkflowState.TOOLS_RUNNING, f"tools={[t.id for t in tools]}")
        outcomes = await self.executor.run_all(
            tools,
            ToolInput(
                prompt=request.prompt,
                condensed_history=condensed,
                token_budget=policy.token_budget,
            ),
            parallel=self.config.parallel_tools,
        )
        partition = ToolPartition.from_outcomes(outcomes)

        self._trace(request, WorkflowState.ANSWER_PENDING, f"used={partition.used}")
        answer = await self.backend.chat(
            request.prompt,
            build_context_blocks(partition.texts),
            policy.token_budget,
        )

        data = AskData(
            answer=answer.text,
            citations=list(partition.citations),
            used_tools=list(partition.used),
            tokens_used=answer.tokens_used,
            latency_ms=int((time.monotonic() - start) * 1000),
            entitlement=entitlement,
            timed_out_tools=list(partition.timed_out),
            errored_tools=list(partition.errored),
            version=API_VERSION,
        )
        data = await self.post_process(data, request)
        self._trace(request, WorkflowState.COMPLETED, f"latency_ms={data.latency_ms}")

        self.telemetry.emit_workflow(
            user_id=request.user_id,
            plan=entitlement.plan or policy.name,
            used_tools=partition.used,
            timed_out_tools=partition.timed_out,
            errored_tools=partition.errored,
        )
        return data

    @staticmethod
    def _trace(request: AskRequest, state: WorkflowState, detail: str = "") -> None:
        logger.debug(f"[ask] user={request.user_id or '-'} state={state.value} {detail}".rstrip())
