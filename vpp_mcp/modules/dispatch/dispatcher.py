"""
Tool call dispatcher.

Resolves a tool name to its descriptor, binds the arguments, runs the
command and formats the text returned to the MCP client. Every
VppMcpError raised along the way is turned into an error response here.
"""

import logging
from typing import Any, Mapping, Optional

from vpp_mcp.modules.api import (
    CaptureKind,
    CliKind,
    ToolRequest,
    ToolResponse,
    UnknownTool,
    VppMcpError,
)
from vpp_mcp.modules.capture import CaptureOrchestrator
from vpp_mcp.modules.catalog import ToolDescriptor, bind_parameters, get_descriptor, render_command
from vpp_mcp.modules.executor import PodExec


class Dispatcher:
    """Routes tool calls to kubectl or the capture orchestrator."""

    def __init__(
        self,
        pod_exec: PodExec,
        captures: CaptureOrchestrator,
        logger: Optional[logging.Logger] = None,
    ):
        self.pod_exec = pod_exec
        self.captures = captures
        self.logger = logger or logging.getLogger("vpp_mcp.dispatch")

    async def dispatch(self, tool_name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResponse:
        """
        Execute one tool call.

        Args:
            tool_name: Name of a catalog tool
            arguments: Argument bag from the client (may be None)

        Returns:
            ToolResponse with the command output or an error description
        """
        try:
            if not tool_name:
                raise UnknownTool(tool_name)
            request = ToolRequest(tool_name=tool_name, arguments=dict(arguments or {}))
            return await self._dispatch(request)
        except VppMcpError as e:
            self.logger.warning(f"Tool {tool_name} failed ({e.code}): {e.message.splitlines()[0]}")
            return ToolResponse.from_error(e)

    async def _dispatch(self, request: ToolRequest) -> ToolResponse:
        descriptor = get_descriptor(request.tool_name)
        if descriptor is None:
            raise UnknownTool(request.tool_name)

        params = dict(bind_parameters(descriptor, request.arguments))
        self.logger.info(f"Dispatching {descriptor.name}")

        if descriptor.is_capture:
            return await self.captures.capture(
                CaptureKind(descriptor.capture),
                params["pod_name"],
                namespace=params.get("namespace"),
                container=params.get("container_name"),
                node_name=params.get("node_name") or "",
                count=params.get("count"),
                interface=params.get("interface") or "",
                title=descriptor.title,
            )

        if descriptor.cli == CliKind.KUBECTL:
            return await self._get_pods(descriptor, params.get("namespace"))

        return await self._exec(descriptor, params)

    async def _exec(self, descriptor: ToolDescriptor, params: dict) -> ToolResponse:
        tokens = render_command(descriptor, list(params.items()))
        pod = params["pod_name"]
        namespace = params.get("namespace") or self.pod_exec.dataplane.namespace
        echo = descriptor.echo(tokens)

        result = await self.pod_exec.exec(
            pod,
            descriptor.cli,
            tokens,
            namespace=namespace,
            container=params.get("container_name"),
        )

        if not result.succeeded:
            return ToolResponse(
                text=(
                    f"Error executing {descriptor.cli.value} command on pod {pod}: "
                    f"{result.error_detail}\nCommand attempted: {echo}"
                ),
                is_error=True,
                error_code="external_process_failure",
            )

        return ToolResponse(
            text=(
                f"{descriptor.title}:\n\n{result.output}\n\n"
                f"Command executed: {echo}\nPod: {pod}\nNamespace: {namespace}"
            )
        )

    async def _get_pods(self, descriptor: ToolDescriptor, namespace: Optional[str]) -> ToolResponse:
        namespace = namespace or self.pod_exec.dataplane.namespace
        echo = f"kubectl get pods -n {namespace} -owide"

        result = await self.pod_exec.get_pods(namespace)
        if not result.succeeded:
            return ToolResponse(
                text=f"Error executing kubectl command: {result.error_detail}\nCommand: {echo}",
                is_error=True,
                error_code="external_process_failure",
            )

        return ToolResponse(text=f"{descriptor.title}:\n\n{result.output}\n\nCommand executed: {echo}")
