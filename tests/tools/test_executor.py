"""Tests for webai.tools.executor - deadlines, outcome classification, ordering."""

import asyncio

import pytest

from webai.tools.executor import ToolExecutor
from webai.tools.models import Citation, Tool, ToolInput, ToolOutput, ToolStatus


def _tool(tool_id, run, timeout_ms=200):
    return Tool(id=tool_id, name=tool_id, description="", run=run, timeout_ms=timeout_ms)


def _returns(text, delay=0.0, citations=None):
    async def run(tool_input):
        if delay:
            await asyncio.sleep(delay)
        return ToolOutput(text=text, citations=citations or [])
    return run


async def _raises(tool_input):
    raise RuntimeError("boom")


INPUT = ToolInput(prompt="2 + 2", condensed_history=["hi"], token_budget=8000)


class TestExecute:

    @pytest.mark.asyncio
    async def test_success(self):
        outcome = await ToolExecutor().execute(_tool("t", _returns("hello")), INPUT)

        assert outcome.status == ToolStatus.SUCCESS
        assert outcome.output.text == "hello"
        assert outcome.error is None
        assert outcome.tool_id == "t"

    @pytest.mark.asyncio
    async def test_tool_receives_input(self):
        seen = []

        async def run(tool_input):
            seen.append(tool_input)
            return ToolOutput(text="")

        await ToolExecutor().execute(_tool("t", run), INPUT)
        assert seen == [INPUT]

    @pytest.mark.asyncio
    async def test_error(self):
        outcome = await ToolExecutor().execute(_tool("t", _raises), INPUT)

        assert outcome.status == ToolStatus.ERROR
        assert outcome.output is None
        assert "boom" in outcome.error

    @pytest.mark.asyncio
    async def test_sync_failure_is_error(self):
        def run(tool_input):
            raise ValueError("not async")

        outcome = await ToolExecutor().execute(_tool("t", run), INPUT)
        assert outcome.status == ToolStatus.ERROR

    @pytest.mark.asyncio
    async def test_wrong_return_type_is_error(self):
        async def run(tool_input):
            return "plain string"

        outcome = await ToolExecutor().execute(_tool("t", run), INPUT)
        assert outcome.status == ToolStatus.ERROR

    @pytest.mark.asyncio
    async def test_timeout(self):
        outcome = await ToolExecutor().execute(_tool("slow", _returns("late", delay=5), timeout_ms=50), INPUT)

        assert outcome.status == ToolStatus.TIMEOUT
        assert outcome.output is None
        assert outcome.duration_ms < 5000

    @pytest.mark.asyncio
    async def test_timed_out_task_is_cancelled(self):
        cancelled = asyncio.Event()

        async def run(tool_input):
            try:
                await asyncio.sleep(5)
            except asyncio.CancelledError:
                cancelled.set()
                raise
            return ToolOutput(text="never")

        outcome = await ToolExecutor().execute(_tool("slow", run, timeout_ms=20), INPUT)
        await asyncio.wait_for(cancelled.wait(), timeout=1)

        assert outcome.status == ToolStatus.TIMEOUT

    @pytest.mark.asyncio
    async def test_empty_text_is_success_without_text(self):
        outcome = await ToolExecutor().execute(_tool("t", _returns("")), INPUT)
        assert outcome.status == ToolStatus.SUCCESS
        assert outcome.has_text is False


class TestRunAll:

    @pytest.mark.asyncio
    async def test_empty(self):
        assert await ToolExecutor().run_all([], INPUT) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("parallel", [True, False])
    async def test_outcomes_in_registry_order(self, parallel):
        tools = [
            _tool("slowest", _returns("a", delay=0.05)),
            _tool("fast", _returns("b")),
            _tool("broken", _raises),
        ]
        outcomes = await ToolExecutor().run_all(tools, INPUT, parallel=parallel)

        assert [o.tool_id for o in outcomes] == ["slowest", "fast", "broken"]
        assert [o.status for o in outcomes] == [ToolStatus.SUCCESS, ToolStatus.SUCCESS, ToolStatus.ERROR]

    @pytest.mark.asyncio
    async def test_parallel_runs_concurrently(self):
        tools = [_tool(f"t{i}", _returns("x", delay=0.1), timeout_ms=1000) for i in range(5)]

        loop = asyncio.get_running_loop()
        start = loop.time()
        await ToolExecutor().run_all(tools, INPUT, parallel=True)
        elapsed = loop.time() - start

        assert elapsed < 0.4

    @pytest.mark.asyncio
    async def test_independent_deadlines(self):
        tools = [
            _tool("slow", _returns("late", delay=1), timeout_ms=30),
            _tool("ok", _returns("on time", citations=[Citation(title="src")]), timeout_ms=1000),
        ]
        outcomes = await ToolExecutor().run_all(tools, INPUT)

        assert outcomes[0].status == ToolStatus.TIMEOUT
        assert outcomes[1].status == ToolStatus.SUCCESS
        assert outcomes[1].output.citations == [Citation(title="src")]


class TestToolModel:

    def test_default_timeout(self):
        tool = Tool(id="t", name="t", description="", run=_raises)
        assert tool.timeout_ms == 5000

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValueError):
            Tool(id="t", name="t", description="", run=_raises, timeout_ms=0)
