"""Tool registry holding the available tools."""

import logging
from collections.abc import Iterable, Iterator
from typing import Any, Optional

from polymarket_mcp.tools.base import Tool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Immutable, ordered collection of tools.

    The registry is built once from an iterable of tools and offers lookups
    only. Registration order is preserved and is the order tools are listed in.
    """

    def __init__(self, tools: Iterable[Tool] = ()):
        """Build the registry.

        Args:
            tools: Tool instances, in listing order

        Raises:
            ValueError: If two tools share a name
        """
        registered: dict[str, Tool] = {}
        for tool in tools:
            if tool.name in registered:
                raise ValueError(f"Tool '{tool.name}' is already registered")
            registered[tool.name] = tool
        self._tools = registered
        logger.info(f"Built tool registry with {len(registered)} tools")

    def get(self, name: str) -> Optional[Tool]:
        """Get a tool by name.

        Args:
            name: Tool name

        Returns:
            Tool instance or None if not found
        """
        return self._tools.get(name)

    def list_tools(self) -> list[Tool]:
        """Get list of all registered tools."""
        return list(self._tools.values())

    def list_tool_names(self) -> list[str]:
        """Get list of all registered tool names."""
        return list(self._tools.keys())

    def get_tool_definitions(self) -> list[dict[str, Any]]:
        """Get tool definitions for all registered tools.

        Returns:
            List of {name, description, inputSchema} mappings
        """
        return [tool.get_tool_definition() for tool in self._tools.values()]

    def __len__(self) -> int:
        """Get number of registered tools."""
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        """Check if tool is registered."""
        return name in self._tools

    def __iter__(self) -> Iterator[Tool]:
        """Iterate over tools in registration order."""
        return iter(list(self._tools.values()))

    def __str__(self) -> str:
        """String representation."""
        return f"ToolRegistry({len(self._tools)} tools)"

    def __repr__(self) -> str:
        """Representation."""
        tools = ", ".join(self._tools.keys())
        return f"<ToolRegistry tools=[{tools}]>"
