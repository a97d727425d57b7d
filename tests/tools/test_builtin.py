"""Tests for webai.tools.builtin and webai.tools.registry"""

import sys

import pytest

from webai.tools.builtin import compute, default_registry, evaluate, math_tool, search_web, web_tool
from webai.tools.executor import ToolExecutor
from webai.tools.models import Tool, ToolInput, ToolOutput, ToolStatus
from webai.tools.registry import ToolRegistry


class TestMathTool:

    @pytest.mark.asyncio
    async def test_addition(self):
        out = await compute(ToolInput(prompt="What is 2 + 2?"))
        assert out.text == "\n\n— Computation: 2 + 2 = 4"

    @pytest.mark.asyncio
    async def test_no_spaces(self):
        out = await compute(ToolInput(prompt="calc 12*3 please"))
        assert out.text == "\n\n— Computation: 12*3 = 36"

    @pytest.mark.asyncio
    async def test_first_expression_only(self):
        out = await compute(ToolInput(prompt="10 - 4 and 3 + 3"))
        assert out.text.endswith("10 - 4 = 6")

    @pytest.mark.asyncio
    async def test_no_expression(self):
        out = await compute(ToolInput(prompt="Tell me a story"))
        assert out.text == ""
        assert out.citations == []

    @pytest.mark.asyncio
    async def test_division_by_zero_yields_empty(self):
        out = await compute(ToolInput(prompt="5 / 0"))
        assert out.text == ""

    @pytest.mark.parametrize("left,op,right,expected", [
        ("7", "/", "2", "3.5"),
        ("8", "/", "2", "4"),
        ("3", "-", "5", "-2"),
        ("6", "*", "7", "42"),
    ])
    def test_evaluate(self, left, op, right, expected):
        assert evaluate(left, op, right) == expected

    def test_evaluate_unknown_operator(self):
        assert evaluate("1", "%", "2") is None

    @pytest.mark.asyncio
    @pytest.mark.skipif(not hasattr(sys, "get_int_max_str_digits"), reason="no int digit limit")
    async def test_result_too_long_to_format_yields_empty(self):
        tool_input = ToolInput(prompt="9" * 2500 + " * " + "9" * 2500)

        outcome = await ToolExecutor().execute(math_tool(), tool_input)

        assert outcome.status == ToolStatus.SUCCESS
        assert outcome.output.text == ""

    def test_huge_quotient_yields_none(self):
        assert evaluate("1" + "0" * 400, "/", "1") is None


class TestWebTool:

    @pytest.mark.asyncio
    async def test_announces_search(self):
        out = await search_web(ToolInput(prompt="latest python release"))
        assert out.text == "\n\n— Web search for: latest python release..."

    @pytest.mark.asyncio
    async def test_prompt_clipped_to_100_chars(self):
        out = await search_web(ToolInput(prompt="q" * 250))
        assert out.text == "\n\n— Web search for: " + "q" * 100 + "..."


class TestDescriptors:

    def test_timeouts(self):
        assert web_tool().timeout_ms == 8000
        assert math_tool().timeout_ms == 1500

    def test_default_registry_order(self):
        assert [t.id for t in default_registry()] == ["web", "math"]


async def _noop(tool_input):
    return ToolOutput(text="")


class TestToolRegistry:

    def test_register_and_get(self):
        registry = ToolRegistry()
        tool = Tool(id="x", name="X", description="", run=_noop)
        registry.register(tool)
        assert registry.get_tool("x") is tool
        assert len(registry) == 1

    def test_reregister_keeps_position(self):
        registry = ToolRegistry([
            Tool(id="a", name="A", description="", run=_noop),
            Tool(id="b", name="B", description="", run=_noop),
        ])
        replacement = Tool(id="a", name="A2", description="", run=_noop)
        registry.register(replacement)

        assert [t.id for t in registry.all()] == ["a", "b"]
        assert registry.get_tool("a").name == "A2"

    def test_unregister(self):
        registry = default_registry()
        assert registry.unregister("web") is True
        assert registry.unregister("web") is False
        assert [t.id for t in registry] == ["math"]
