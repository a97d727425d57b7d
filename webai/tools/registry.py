"""
WebAI Tool Registry - Ordered collection of available tools

Registration order is significant: it is the order tools are merged in
when building the answer context and the citation list.
"""

import logging
from typing import Dict, Iterator, List, Optional

from .models import Tool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    Ordered registry for tools

    Usage:
        registry = ToolRegistry()
        registry.register(web_tool)
        registry.register(math_tool)
        for tool in registry:       # web, then math
            ...
    """

    def __init__(self, tools: Optional[List[Tool]] = None) -> None:
        self._tools: Dict[str, Tool] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: Tool) -> None:
        """
        Register a tool

        Re-registering an id replaces the tool in its original position.
        """
        if tool.id in self._tools:
            logger.warning(f"Tool '{tool.id}' already registered, overwriting")

        self._tools[tool.id] = tool
        logger.info(f"Registered tool: {tool.id} (timeout={tool.timeout_ms}ms)")

    def unregister(self, tool_id: str) -> bool:
        if tool_id in self._tools:
            del self._tools[tool_id]
            logger.info(f"Unregistered tool: {tool_id}")
            return True
        return False

    def get_tool(self, tool_id: str) -> Optional[Tool]:
        return self._tools.get(tool_id)

    def all(self) -> List[Tool]:
        """All tools in registration order"""
        return list(self._tools.values())

    def __iter__(self) -> Iterator[Tool]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._tools)
