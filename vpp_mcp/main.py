#!/usr/bin/env python3
"""
VPP MCP Server - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Initializes modules
3. Runs the MCP server on stdio or HTTP/SSE

All business logic is in the modules, following black box principles.
"""

import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass
from typing import List, Optional

import uvicorn
from mcp.server import Server

from vpp_mcp import __version__
from vpp_mcp.config import ConfigProvider, EnvConfigProvider, ServerConfig
from vpp_mcp.logging_config import configure_logging, get_logging_config
from vpp_mcp.modules.capture import CaptureOrchestrator
from vpp_mcp.modules.dispatch import Dispatcher
from vpp_mcp.modules.executor import PodExec, ProcessRunner
from vpp_mcp.modules.inventory import KubeInventory, TargetResolver
from vpp_mcp.modules.mcp import build_mcp_server, create_app, run_stdio

logger = logging.getLogger("vpp_mcp")


@dataclass
class Application:
    """Wired module instances for one server process."""

    dispatcher: Dispatcher
    server: Server


def build_application(config_provider: ConfigProvider, inventory=None) -> Application:
    """
    Initialize all modules from configuration.

    Args:
        config_provider: Source of configuration
        inventory: ClusterInventory to use instead of the Kubernetes API
    """
    dataplane = config_provider.get_dataplane_config()
    execution = config_provider.get_execution_config()
    capture = config_provider.get_capture_config()

    runner = ProcessRunner(default_timeout=execution.command_timeout)
    pod_exec = PodExec(runner, dataplane, timeout=execution.command_timeout)

    if inventory is None:
        inventory = KubeInventory(timeout=execution.kube_api_timeout)
    resolver = TargetResolver(inventory)

    captures = CaptureOrchestrator(pod_exec, resolver, inventory, dataplane, capture)
    dispatcher = Dispatcher(pod_exec, captures)

    return Application(dispatcher=dispatcher, server=build_mcp_server(dispatcher))


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="vpp-mcp-server",
        description="MCP server for the VPP dataplane of a Calico/VPP cluster",
    )
    parser.add_argument(
        "--transport",
        type=str,
        choices=["stdio", "http"],
        default=None,
        help="Transport protocol to use (default: $MCP_TRANSPORT or stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for the HTTP transport (default: $MCP_PORT or 8080)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Bind address for the HTTP transport (default: $MCP_HOST or 0.0.0.0)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: $LOG_LEVEL or INFO)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def serve(app: Application, server_config: ServerConfig) -> None:
    """Run the selected transport until it stops."""
    if server_config.is_http:
        logger.info(f"Starting HTTP transport on {server_config.host}:{server_config.port}")
        uvicorn.run(
            create_app(app.server),
            host=server_config.host,
            port=server_config.port,
            log_level=server_config.log_level.lower(),
            log_config=get_logging_config(server_config.log_level),
        )
    else:
        asyncio.run(run_stdio(app.server))


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    config_provider = EnvConfigProvider()

    try:
        server_config = config_provider.get_server_config(
            transport=args.transport,
            port=args.port,
            host=args.host,
            log_level=args.log_level,
        )
        configure_logging(server_config.log_level)
        app = build_application(config_provider)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    try:
        serve(app, server_config)
    except KeyboardInterrupt:
        logger.info("Shutting down")
    return 0


if __name__ == "__main__":
    sys.exit(main())
