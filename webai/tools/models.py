"""
WebAI Tool Models - Data structures for auxiliary tool lookups
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ..constants import DEFAULT_TOOL_TIMEOUT_MS


@dataclass(frozen=True)
class Citation:
    """A source a tool wants credited in the answer"""
    title: str
    url: Optional[str] = None
    snippet: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"title": self.title}
        if self.url is not None:
            result["url"] = self.url
        if self.snippet is not None:
            result["snippet"] = self.snippet
        return result


@dataclass(frozen=True)
class ToolInput:
    """
    Input handed to every tool

    Attributes:
        prompt: The user's (trimmed) prompt
        condensed_history: Condensed prior turns, oldest first
        token_budget: Plan token budget, if the tool wants to size its output
    """
    prompt: str
    condensed_history: List[str] = field(default_factory=list)
    token_budget: Optional[int] = None


@dataclass
class ToolOutput:
    """
    What a tool returns

    Attributes:
        text: Text appended to the answer context (empty means "nothing to add")
        citations: Sources in the order the tool produced them
        tokens_used: Tokens the tool itself consumed, if known
    """
    text: str
    citations: List[Citation] = field(default_factory=list)
    tokens_used: Optional[int] = None


ToolCallable = Callable[[ToolInput], Awaitable[ToolOutput]]


@dataclass
class Tool:
    """
    A registered tool

    Attributes:
        id: Unique tool id, matched against PlanPolicy.enabled_tools
        name: Display name
        description: Human-readable description
        run: Async callable ToolInput -> ToolOutput
        enabled: Registry-level switch
        timeout_ms: Hard deadline for one run
    """
    id: str
    name: str
    description: str
    run: ToolCallable
    enabled: bool = True
    timeout_ms: int = DEFAULT_TOOL_TIMEOUT_MS

    def __post_init__(self):
        if self.timeout_ms <= 0:
            raise ValueError(f"Tool '{self.id}' timeout_ms must be positive")


class ToolStatus(str, Enum):
    """Outcome of a single tool run"""
    SUCCESS = "success"
    TIMEOUT = "timeout"
    ERROR = "error"


@dataclass
class ToolRunOutcome:
    """
    Result of executing one tool

    Exactly one status per run. ``output`` is set only on SUCCESS,
    ``error`` only on ERROR.
    """
    tool_id: str
    status: ToolStatus
    output: Optional[ToolOutput] = None
    error: Optional[str] = None
    duration_ms: int = 0

    @property
    def has_text(self) -> bool:
        return self.status == ToolStatus.SUCCESS and bool(self.output and self.output.text)
