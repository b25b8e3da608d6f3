"""
Tool call dispatcher.

Routes named calls to tools in a registry. An unknown tool name is the one
failure that is raised rather than returned as an error result: it points at a
caller bug, not at a data problem.
"""

import logging
from typing import Any, Optional

from polymarket_mcp.tools import ToolCall, ToolRegistry, ToolResult

logger = logging.getLogger(__name__)


class UnknownToolError(LookupError):
    """Raised when a call names a tool that is not registered."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ToolDispatcher:
    """Stateless lookup-and-forward over an immutable tool registry."""

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    def list_tools(self) -> list[dict[str, Any]]:
        """Tool definitions in registration order."""
        return self.registry.get_tool_definitions()

    async def call_tool(
        self, name: str, arguments: Optional[dict[str, Any]] = None
    ) -> ToolResult:
        """Run a tool by name.

        Args:
            name: Tool name
            arguments: Argument mapping (None is treated as empty)

        Returns:
            The tool's result, unchanged

        Raises:
            UnknownToolError: If no tool has this name
        """
        tool = self.registry.get(name)
        if tool is None:
            raise UnknownToolError(name)

        logger.debug(f"Dispatching {ToolCall(name=name, arguments=arguments or {})}")
        return await tool.run(arguments or {})

    async def dispatch(self, call: ToolCall) -> ToolResult:
        """Run a parsed tool call."""
        return await self.call_tool(call.name, call.arguments)

    def __repr__(self) -> str:
        """Representation."""
        return f"<ToolDispatcher {self.registry!r}>"
