"""
WebAI Tool Executor - Run tools against hard deadlines

Each tool gets exactly one attempt per request. A run ends in exactly one
of three outcomes:

- SUCCESS: the tool returned before its deadline
- TIMEOUT: the deadline passed first; the tool task is cancelled and not awaited further
- ERROR:   the tool raised before its deadline
"""

import asyncio
import logging
import time
from typing import List, Sequence

from .models import Tool, ToolInput, ToolOutput, ToolRunOutcome, ToolStatus

logger = logging.getLogger(__name__)


class ToolExecutor:
    """
    Executes tools with per-tool timeouts

    Usage:
        executor = ToolExecutor()
        outcome = await executor.execute(tool, ToolInput(prompt="2 + 2"))
        outcomes = await executor.run_all(tools, tool_input, parallel=True)
    """

    async def execute(self, tool: Tool, tool_input: ToolInput) -> ToolRunOutcome:
        """
        Execute a single tool

        Args:
            tool: Tool to run
            tool_input: Prompt, condensed history and token budget

        Returns:
            ToolRunOutcome with exactly one status
        """
        timeout = tool.timeout_ms / 1000
        start = time.monotonic()
        task = asyncio.ensure_future(_invoke(tool, tool_input))

        done, _ = await asyncio.wait({task}, timeout=timeout)
        duration_ms = int((time.monotonic() - start) * 1000)

        if not done:
            task.cancel()
            task.add_done_callback(_discard_result)
            logger.warning(f"Tool '{tool.id}' timed out after {tool.timeout_ms}ms")
            return ToolRunOutcome(tool_id=tool.id, status=ToolStatus.TIMEOUT, duration_ms=duration_ms)

        try:
            output = task.result()
        except Exception as e:
            logger.error(f"Tool '{tool.id}' execution failed: {e}", exc_info=True)
            return ToolRunOutcome(
                tool_id=tool.id,
                status=ToolStatus.ERROR,
                error=str(e),
                duration_ms=duration_ms,
            )

        if not isinstance(output, ToolOutput):
            logger.error(f"Tool '{tool.id}' returned {type(output).__name__}, expected ToolOutput")
            return ToolRunOutcome(
                tool_id=tool.id,
                status=ToolStatus.ERROR,
                error="invalid tool output",
                duration_ms=duration_ms,
            )

        logger.info(f"Tool '{tool.id}' executed in {duration_ms}ms")
        return ToolRunOutcome(
            tool_id=tool.id,
            status=ToolStatus.SUCCESS,
            output=output,
            duration_ms=duration_ms,
        )

    async def run_all(
        self,
        tools: Sequence[Tool],
        tool_input: ToolInput,
        parallel: bool = True,
    ) -> List[ToolRunOutcome]:
        """
        Execute several tools

        Args:
            tools: Tools in registry order
            tool_input: Shared input for every tool
            parallel: Run concurrently (each with its own deadline) or one after another

        Returns:
            One outcome per tool, in the order of *tools* regardless of completion order
        """
        if not tools:
            return []

        if parallel:
            return list(await asyncio.gather(*[self.execute(t, tool_input) for t in tools]))

        outcomes: List[ToolRunOutcome] = []
        for tool in tools:
            outcomes.append(await self.execute(tool, tool_input))
        return outcomes


async def _invoke(tool: Tool, tool_input: ToolInput) -> ToolOutput:
    return await tool.run(tool_input)


def _discard_result(task: "asyncio.Future") -> None:
    """Consume an abandoned tool task's result so it is never reported as unretrieved."""
    if not task.cancelled():
        task.exception()
