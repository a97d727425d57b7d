"""Orchestrator configuration and per-request bookkeeping types."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ..constants import HISTORY_CHAR_LIMIT
from ..tools.models import Citation, ToolRunOutcome, ToolStatus


class WorkflowState(str, Enum):
    """Per-request progression. There is no transition back to an earlier state."""
    VALIDATED = "validated"
    RATE_CHECKED = "rate_checked"
    ENTITLED = "entitled"
    POLICY_SELECTED = "policy_selected"
    TOOLS_RUNNING = "tools_running"
    ANSWER_PENDING = "answer_pending"
    COMPLETED = "completed"


@dataclass
class OrchestratorConfig:
    """All orchestrator tunables in one place."""

    parallel_tools: bool = True
    """Run eligible tools concurrently (merge order is registry order either way)."""
    history_char_limit: int = HISTORY_CHAR_LIMIT
    """Per-turn character cap for condensed history."""


@dataclass
class ToolPartition:
    """Tool outcomes split by disposition, each list in registry order.

    Every eligible tool lands in exactly one of used / timed_out / errored /
    dropped (succeeded with empty text).
    """

    used: List[str] = field(default_factory=list)
    timed_out: List[str] = field(default_factory=list)
    errored: List[str] = field(default_factory=list)
    dropped: List[str] = field(default_factory=list)
    texts: List[str] = field(default_factory=list)
    citations: List[Citation] = field(default_factory=list)

    @classmethod
    def from_outcomes(cls, outcomes: List[ToolRunOutcome]) -> "ToolPartition":
        partition = cls()
        for outcome in outcomes:
            if outcome.has_text:
                partition.used.append(outcome.tool_id)
                partition.texts.append(outcome.output.text)
                partition.citations.extend(outcome.output.citations or [])
            elif outcome.status == ToolStatus.TIMEOUT:
                partition.timed_out.append(outcome.tool_id)
            elif outcome.status == ToolStatus.ERROR:
                partition.errored.append(outcome.tool_id)
            else:
                partition.dropped.append(outcome.tool_id)
        return partition
