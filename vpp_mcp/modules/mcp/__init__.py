"""
MCP Module - Black Box Interface

Purpose: Speak the Model Context Protocol over stdio or HTTP/SSE
Interface: build_mcp_server(), run_stdio(), create_app()
Hidden: SDK handler registration, SSE session handling, info page
"""

from .http import create_app
from .server import SERVER_NAME, build_mcp_server, descriptor_to_tool, run_stdio

__all__ = ["SERVER_NAME", "build_mcp_server", "create_app", "descriptor_to_tool", "run_stdio"]
