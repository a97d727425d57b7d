"""
WebAI Tools - Auxiliary lookups that augment the answer context

Provides:
- Tool, ToolInput, ToolOutput, Citation: tool data structures
- ToolRegistry: ordered tool collection
- ToolExecutor: deadline-bounded execution with success/timeout/error outcomes
- web_tool / math_tool / default_registry: built-in tools

Usage:
    from webai.tools import Tool, ToolOutput, ToolRegistry

    async def lookup(tool_input):
        return ToolOutput(text="\\n\\nExtra facts")

    registry = ToolRegistry([Tool(id="facts", name="Facts", description="", run=lookup)])
"""

from .models import (
    Citation,
    Tool,
    ToolInput,
    ToolOutput,
    ToolRunOutcome,
    ToolStatus,
)
from .registry import ToolRegistry
from .executor import ToolExecutor
from .builtin import default_registry, math_tool, web_tool

__all__ = [
    # Models
    "Citation",
    "Tool",
    "ToolInput",
    "ToolOutput",
    "ToolRunOutcome",
    "ToolStatus",
    # Registry
    "ToolRegistry",
    # Executor
    "ToolExecutor",
    # Built-ins
    "default_registry",
    "math_tool",
    "web_tool",
]
