"""
WebAI Result - Standardized ask results and public errors

AskResult is a closed union of AskSuccess and AskFailure. Exactly one
is produced per request and neither is mutated afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .constants import API_VERSION, RATE_LIMIT_RETRY_SECONDS
from .models import Entitlement
from .tools.models import Citation


class ErrorCode(str, Enum):
    """Failure taxonomy exposed to callers"""
    SUBSCRIPTION_REQUIRED = "SUBSCRIPTION_REQUIRED"
    BAD_REQUEST = "BAD_REQUEST"
    SERVER_ERROR = "SERVER_ERROR"
    RATE_LIMITED = "RATE_LIMITED"


class PublicError(Exception):
    """
    An error whose message is safe to show to the caller.

    Anything else raised inside the workflow is reported as a generic
    SERVER_ERROR.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.SERVER_ERROR):
        super().__init__(message)
        self.message = message
        self.code = code


@dataclass(frozen=True)
class AskData:
    """
    Payload of a successful ask

    Attributes:
        answer: Text produced by the answer backend
        citations: Used tools' citations, concatenated in registry order
        used_tools: Ids of tools whose text reached the backend
        tokens_used: Backend-reported token usage, if any
        latency_ms: Wall-clock time from workflow start to assembly
        entitlement: Snapshot of the entitlement the answer was produced under
        timed_out_tools: Ids of tools that missed their deadline
        errored_tools: Ids of tools that raised
        version: API_VERSION
    """
    answer: str
    citations: List[Citation] = field(default_factory=list)
    used_tools: List[str] = field(default_factory=list)
    tokens_used: Optional[int] = None
    latency_ms: int = 0
    entitlement: Entitlement = field(default_factory=Entitlement.inactive)
    timed_out_tools: List[str] = field(default_factory=list)
    errored_tools: List[str] = field(default_factory=list)
    version: int = API_VERSION

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape (camelCase keys)"""
        result: Dict[str, Any] = {
            "answer": self.answer,
            "citations": [c.to_dict() for c in self.citations],
            "usedTools": list(self.used_tools),
            "latencyMs": self.latency_ms,
            "entitlement": self.entitlement.to_dict(),
            "timedOutTools": list(self.timed_out_tools),
            "erroredTools": list(self.errored_tools),
            "version": self.version,
        }
        if self.tokens_used is not None:
            result["tokensUsed"] = self.tokens_used
        return result


@dataclass(frozen=True)
class AskSuccess:
    data: AskData
    ok: bool = field(default=True, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": True, "data": self.data.to_dict()}


@dataclass(frozen=True)
class AskFailure:
    error: str
    code: ErrorCode
    retry_after: Optional[int] = None
    ok: bool = field(default=False, init=False)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"ok": False, "error": self.error, "code": self.code.value}
        if self.retry_after is not None:
            result["retry"] = self.retry_after
        return result


AskResult = Union[AskSuccess, AskFailure]


def bad_request(message: str) -> AskFailure:
    return AskFailure(error=message, code=ErrorCode.BAD_REQUEST)


def server_error(message: str = "Something went wrong.") -> AskFailure:
    return AskFailure(error=message, code=ErrorCode.SERVER_ERROR)


def subscription_required() -> AskFailure:
    return AskFailure(error="Subscription required.", code=ErrorCode.SUBSCRIPTION_REQUIRED)


def rate_limited(retry: int = RATE_LIMIT_RETRY_SECONDS) -> AskFailure:
    return AskFailure(
        error=f"Too many requests. Retry in {retry}s",
        code=ErrorCode.RATE_LIMITED,
        retry_after=retry,
    )
