"""
MCP protocol binding.

Exposes the tool catalog through a low-level mcp Server. tools/list comes
straight from the descriptors and tools/call is forwarded to the
Dispatcher unchanged.
"""

import logging
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, TextContent, Tool

from vpp_mcp import __version__
from vpp_mcp.modules.catalog import ToolDescriptor, list_descriptors
from vpp_mcp.modules.dispatch import Dispatcher

SERVER_NAME = "vpp-mcp-server"

logger = logging.getLogger("vpp_mcp.mcp")


def descriptor_to_tool(descriptor: ToolDescriptor) -> Tool:
    """Advertise a descriptor as an MCP tool."""
    return Tool(
        name=descriptor.name,
        title=descriptor.title,
        description=descriptor.description,
        inputSchema=descriptor.input_schema,
    )


def build_mcp_server(dispatcher: Dispatcher, name: str = SERVER_NAME) -> Server:
    """
    Create an MCP server bound to a dispatcher.

    Input validation in the SDK is turned off; the dispatcher reports
    missing and malformed arguments itself.
    """
    server = Server(name, version=__version__)

    @server.list_tools()
    async def list_tools() -> List[Tool]:
        return [descriptor_to_tool(d) for d in list_descriptors()]

    @server.call_tool(validate_input=False)
    async def call_tool(tool_name: str, arguments: Optional[Dict[str, Any]]) -> CallToolResult:
        logger.info(f"tools/call {tool_name}")
        try:
            response = await dispatcher.dispatch(tool_name, arguments)
        except Exception:
            # Reported to the client by the SDK
            logger.exception(f"Unexpected error in tool {tool_name}")
            raise
        return CallToolResult(
            content=[TextContent(type="text", text=response.text)],
            isError=response.is_error,
        )

    return server


async def run_stdio(server: Server) -> None:
    """Serve MCP over stdin/stdout until the client disconnects."""
    logger.info(f"Starting {server.name} on stdio with {len(list_descriptors())} tools")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
