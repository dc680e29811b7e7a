"""
HTTP transport: MCP over Server-Sent Events, served by FastAPI.

Endpoints:
    GET  /sse        MCP event stream
    POST /messages/  client to server messages for an open stream
    GET  /health     liveness probe, plain text "OK"
    GET  /           short HTML description of the server
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from mcp.server import Server
from mcp.server.sse import SseServerTransport

from vpp_mcp import __version__
from vpp_mcp.modules.catalog import list_descriptors

logger = logging.getLogger("vpp_mcp.mcp")

MESSAGES_PATH = "/messages/"


def _info_page(server_name: str) -> str:
    tools = "\n".join(f"      <li><code>{d.name}</code></li>" for d in list_descriptors())
    return f"""<!DOCTYPE html>
<html>
  <head><title>{server_name}</title></head>
  <body>
    <h1>{server_name} {__version__}</h1>
    <p>MCP server for inspecting the VPP dataplane of a Calico/VPP cluster.</p>
    <ul>
      <li>SSE endpoint: <code>/sse</code></li>
      <li>Messages endpoint: <code>{MESSAGES_PATH}</code></li>
      <li>Health check: <code>/health</code></li>
    </ul>
    <h2>Tools</h2>
    <ul>
{tools}
    </ul>
  </body>
</html>
"""


def create_app(server: Server) -> FastAPI:
    """Create the FastAPI application serving an MCP server over SSE."""
    app = FastAPI(
        title=server.name,
        description="MCP relay for vppctl and gobgp on Calico/VPP",
        version=__version__,
    )
    sse = SseServerTransport(MESSAGES_PATH)

    @app.get("/sse")
    async def handle_sse(request: Request):
        """Open an MCP session for one client."""
        client = request.client.host if request.client else "unknown"
        logger.info(f"SSE connection from {client}")
        async with sse.connect_sse(request.scope, request.receive, request._send) as (
            read_stream,
            write_stream,
        ):
            await server.run(read_stream, write_stream, server.create_initialization_options())
        logger.info(f"SSE connection from {client} closed")
        return Response()

    app.mount(MESSAGES_PATH, app=sse.handle_post_message)

    @app.get("/health", response_class=PlainTextResponse)
    async def health():
        """Health check endpoint."""
        return "OK"

    @app.get("/", response_class=HTMLResponse)
    async def root():
        """Root endpoint."""
        return _info_page(server.name)

    return app
