"""
Error taxonomy for tool calls.

Every error raised inside a tool call derives from VppMcpError. The
dispatcher turns them into error responses; none of them stop the server.
"""

from typing import Iterable, Optional


def format_candidates(heading: str, candidates: Iterable[str]) -> str:
    """Render a 1-indexed candidate list used as a corrective hint."""
    lines = [f"\n{heading}:"]
    for i, candidate in enumerate(candidates, start=1):
        lines.append(f"{i}. {candidate}")
    return "\n".join(lines)


class VppMcpError(Exception):
    """Base class for tool-level failures."""

    code = "vpp_mcp_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownTool(VppMcpError):
    """No descriptor with this name exists."""

    code = "unknown_tool"

    def __init__(self, tool_name: str):
        super().__init__(f"Error: unknown tool '{tool_name}'")
        self.tool_name = tool_name


class MissingRequiredParameter(VppMcpError):
    """A required parameter was absent or empty."""

    code = "missing_required_parameter"

    def __init__(self, tool_name: str, parameter: str, description: str = ""):
        message = f"Error: missing required parameter '{parameter}' for tool '{tool_name}'."
        if description:
            message += f"\n- {parameter}: {description}"
        super().__init__(message)
        self.tool_name = tool_name
        self.parameter = parameter


class InvalidParameter(VppMcpError):
    """A parameter was present but could not be used."""

    code = "invalid_parameter"

    def __init__(self, tool_name: str, parameter: str, reason: str):
        super().__init__(f"Error: invalid value for parameter '{parameter}' of tool '{tool_name}': {reason}")
        self.tool_name = tool_name
        self.parameter = parameter


class TargetNotFound(VppMcpError):
    """Requested node is not part of the live cluster inventory."""

    code = "target_not_found"

    def __init__(self, requested: str, candidates: list):
        super().__init__(
            f"Error validating node: node '{requested}' not found."
            + format_candidates("Available nodes", candidates)
        )
        self.requested = requested
        self.candidates = list(candidates)


class InterfaceTokenInvalid(VppMcpError):
    """Interface type token is not one of the recognized driver classes."""

    code = "interface_token_invalid"

    def __init__(self, token: str, help_text: str):
        super().__init__(f"Error mapping interface: Invalid interface type: {token}\n\n{help_text}")
        self.token = token


class InterfaceNotUp(VppMcpError):
    """Requested capture interface is absent or not in the up state."""

    code = "interface_not_up"

    def __init__(self, interface: str, up_interfaces: list):
        if up_interfaces:
            message = f"Error: Interface '{interface}' not found." + format_candidates(
                "Available interfaces", up_interfaces
            )
        else:
            message = "Error: No up interfaces found in VPP"
        super().__init__(message)
        self.interface = interface
        self.up_interfaces = list(up_interfaces)


class ExternalProcessFailure(VppMcpError):
    """A subprocess exited non-zero or timed out."""

    code = "external_process_failure"

    def __init__(self, command: str, detail: str, target: str = ""):
        where = f" on pod {target}" if target else ""
        super().__init__(f"Error executing command{where}: {detail}\nCommand attempted: {command}")
        self.command = command
        self.detail = detail
        self.target = target


class ClusterQueryFailure(VppMcpError):
    """Inventory or config store lookup failed."""

    code = "cluster_query_failure"


class CaptureStageFailed(VppMcpError):
    """A capture stage before the wait failed, aborting the sequence."""

    code = "capture_stage_failed"

    def __init__(self, kind: str, stage: str, detail: str, command: Optional[str] = None):
        message = f"Error during {kind} capture at stage {stage}: {detail}"
        if command:
            message += f"\nCommand attempted: {command}"
        super().__init__(message)
        self.kind = kind
        self.stage = stage
        self.detail = detail
