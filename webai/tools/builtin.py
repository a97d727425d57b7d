"""
Built-in tools: web search placeholder and inline arithmetic.

Registered in this order by ``default_registry()``; that order is the
merge order for tool context and citations.
"""

import operator
import re
from typing import Callable, Dict, Optional

from .models import Tool, ToolInput, ToolOutput
from .registry import ToolRegistry

WEB_TOOL_TIMEOUT_MS = 8000
MATH_TOOL_TIMEOUT_MS = 1500

_EXPRESSION_RE = re.compile(r"(\d+)\s*([+\-*/])\s*(\d+)")

_OPERATORS: Dict[str, Callable[[int, int], float]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
}


async def search_web(tool_input: ToolInput) -> ToolOutput:
    """Announce a web lookup for the prompt. No live search backend is wired in."""
    return ToolOutput(text=f"\n\n— Web search for: {tool_input.prompt[:100]}...")


async def compute(tool_input: ToolInput) -> ToolOutput:
    """Evaluate the first ``<int> <op> <int>`` expression found in the prompt."""
    match = _EXPRESSION_RE.search(tool_input.prompt)
    if not match:
        return ToolOutput(text="")

    value = evaluate(match.group(1), match.group(2), match.group(3))
    if value is None:
        return ToolOutput(text="")
    return ToolOutput(text=f"\n\n— Computation: {match.group(0)} = {value}")


def evaluate(left: str, op: str, right: str) -> Optional[str]:
    """Apply a binary operator to two integer literals.

    Returns the formatted result, or None when it cannot be computed.
    Whole-number quotients are rendered without a decimal part.
    """
    func = _OPERATORS.get(op)
    if func is None:
        return None
    try:
        result = func(int(left), int(right))
        if isinstance(result, float) and result.is_integer():
            result = int(result)
        # str() of an int past the interpreter digit limit raises ValueError
        return str(result)
    except (ZeroDivisionError, OverflowError, ValueError):
        return None


def web_tool(enabled: bool = True) -> Tool:
    return Tool(
        id="web",
        name="Web",
        description="Web Search",
        run=search_web,
        enabled=enabled,
        timeout_ms=WEB_TOOL_TIMEOUT_MS,
    )


def math_tool(enabled: bool = True) -> Tool:
    return Tool(
        id="math",
        name="Math",
        description="Evaluates math",
        run=compute,
        enabled=enabled,
        timeout_ms=MATH_TOOL_TIMEOUT_MS,
    )


def default_registry() -> ToolRegistry:
    """Registry with the built-in tools in merge order: web, then math."""
    return ToolRegistry([web_tool(), math_tool()])
