"""
API Module - Black Box Interface

Purpose: Shared data shapes and the error taxonomy used between modules
Interface: ToolRequest, CommandResult, ToolResponse, VppMcpError subclasses
Hidden: Validation rules, message formatting
"""

from .errors import (
    CaptureStageFailed,
    ClusterQueryFailure,
    ExternalProcessFailure,
    InterfaceNotUp,
    InterfaceTokenInvalid,
    InvalidParameter,
    MissingRequiredParameter,
    TargetNotFound,
    UnknownTool,
    VppMcpError,
    format_candidates,
)
from .models import (
    CaptureKind,
    CliKind,
    ClusterTarget,
    CommandFailure,
    CommandResult,
    CommandSuccess,
    ExecutionStatus,
    ToolRequest,
    ToolResponse,
)

__all__ = [
    "CaptureKind",
    "CaptureStageFailed",
    "CliKind",
    "ClusterQueryFailure",
    "ClusterTarget",
    "CommandFailure",
    "CommandResult",
    "CommandSuccess",
    "ExecutionStatus",
    "ExternalProcessFailure",
    "InterfaceNotUp",
    "InterfaceTokenInvalid",
    "InvalidParameter",
    "MissingRequiredParameter",
    "TargetNotFound",
    "ToolRequest",
    "ToolResponse",
    "UnknownTool",
    "VppMcpError",
    "format_candidates",
]
