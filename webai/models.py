"""
WebAI Models - Core data structures shared across the ask engine

Provides:
- ConversationTurn: One caller-supplied history entry
- Entitlement: A user's subscription status (immutable)
- PlanPolicy: Quota/behavior bundle derived from an entitlement tier
- AskRequest: Normalized inbound request
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional


class Role(str, Enum):
    """Conversation turn author"""
    USER = "user"
    ASSISTANT = "assistant"


class EntitlementSource(str, Enum):
    """Which provider vouched for an entitlement"""
    WHOP = "whop"
    REVENUECAT = "revenuecat"
    NONE = "none"


@dataclass(frozen=True)
class ConversationTurn:
    """
    A single prior message in the conversation.

    Attributes:
        role: Who wrote the message
        content: Message text
        ts: Optional client timestamp (epoch millis)
    """
    role: Role
    content: str
    ts: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConversationTurn":
        return cls(
            role=Role(data.get("role", "user")),
            content=data.get("content") or "",
            ts=data.get("ts"),
        )


@dataclass(frozen=True)
class Entitlement:
    """
    A user's current access status.

    An inactive entitlement makes no promise about ``plan``.
    """
    active: bool
    plan: Optional[str] = None
    source: EntitlementSource = EntitlementSource.NONE

    @classmethod
    def inactive(cls) -> "Entitlement":
        return cls(active=False, source=EntitlementSource.NONE)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"active": self.active, "source": self.source.value}
        if self.plan is not None:
            result["plan"] = self.plan
        return result


@dataclass(frozen=True)
class PlanPolicy:
    """
    Token budget, history window and tool set for one plan tier.

    Attributes:
        name: Tier name (free / pro / enterprise)
        token_budget: Cap passed to the answer backend (> 0)
        history_limit: Number of prior turns kept (>= 0)
        enabled_tools: Tool ids this tier may run
    """
    name: str
    token_budget: int
    history_limit: int
    enabled_tools: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        if self.token_budget <= 0:
            raise ValueError(f"token_budget must be positive, got {self.token_budget}")
        if self.history_limit < 0:
            raise ValueError(f"history_limit must be >= 0, got {self.history_limit}")


@dataclass
class AskRequest:
    """
    Normalized ask request.

    ``tool_ids``, ``session_id`` and ``stream`` are accepted for contract
    compatibility; tool selection is driven by the plan policy alone.
    """
    prompt: str
    history: List[ConversationTurn] = field(default_factory=list)
    user_id: Optional[str] = None
    tool_ids: Optional[List[str]] = None
    session_id: Optional[str] = None
    stream: Optional[bool] = None

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> "AskRequest":
        """Build a request from loosely-typed input, trimming the prompt."""
        history_raw = raw.get("history")
        history: List[ConversationTurn] = []
        if isinstance(history_raw, list):
            for turn in history_raw:
                if isinstance(turn, ConversationTurn):
                    history.append(turn)
                elif isinstance(turn, dict):
                    history.append(ConversationTurn.from_dict(turn))

        return cls(
            prompt=(raw.get("prompt") or "").strip(),
            history=history,
            user_id=raw.get("user_id", raw.get("userId")),
            tool_ids=raw.get("tool_ids", raw.get("toolIds")),
            session_id=raw.get("session_id", raw.get("sessionId")),
            stream=raw.get("stream"),
        )
