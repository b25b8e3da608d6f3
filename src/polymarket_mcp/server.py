"""
MCP server over stdio.

tools/list returns the registry's tool definitions. tools/call forwards to the
dispatcher; its result (success or error) travels back as a CallToolResult,
while an unknown tool name becomes a JSON-RPC error response.
"""

import logging

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from rich.console import Console

from polymarket_mcp.client import PolymarketClient
from polymarket_mcp.config import Config, ServerConfig
from polymarket_mcp.dispatcher import ToolDispatcher, UnknownToolError
from polymarket_mcp.tools import ToolResult
from polymarket_mcp.tools.builtin import create_builtin_registry

logger = logging.getLogger(__name__)

STARTUP_BANNER = "Polymarket MCP server running on stdio"

stderr_console = Console(stderr=True)


def to_call_tool_result(result: ToolResult) -> types.CallToolResult:
    """Convert a ToolResult to its protocol form."""
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=block.text) for block in result.content],
        isError=result.is_error,
    )


def create_server(dispatcher: ToolDispatcher, config: ServerConfig | None = None) -> Server:
    """Create an MCP server exposing the dispatcher's tools.

    Args:
        dispatcher: Routes tool calls to tools
        config: Server identity (defaults apply when omitted)

    Returns:
        Configured low-level MCP server
    """
    config = config or ServerConfig()
    server = Server(config.name, version=config.version, instructions=config.instructions)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=definition["name"],
                description=definition["description"],
                inputSchema=definition["inputSchema"],
            )
            for definition in dispatcher.list_tools()
        ]

    # Registered directly rather than through @server.call_tool(), which would
    # turn the unknown-tool error into an isError result.
    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        try:
            result = await dispatcher.call_tool(request.params.name, request.params.arguments)
        except UnknownToolError as e:
            logger.warning(f"Rejected tools/call: {e}")
            raise McpError(types.ErrorData(code=types.INVALID_PARAMS, message=str(e))) from e
        return types.ServerResult(to_call_tool_result(result))

    server.request_handlers[types.CallToolRequest] = call_tool
    return server


def announce_startup() -> None:
    """Write the startup banner to stderr whatever the log level."""
    stderr_console.print(STARTUP_BANNER, highlight=False)


async def serve(config: Config | None = None) -> None:
    """Serve the built-in tools over stdio until stdin closes.

    Args:
        config: Full configuration (defaults apply when omitted)
    """
    config = config or Config()

    async with PolymarketClient(config.api) as client:
        dispatcher = ToolDispatcher(create_builtin_registry(client))
        server = create_server(dispatcher, config.server)

        async with stdio_server() as (read_stream, write_stream):
            announce_startup()
            await server.run(read_stream, write_stream, server.create_initialization_options())
