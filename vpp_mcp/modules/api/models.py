"""
VPP MCP shared data models.

These models define the structure of all data passed between
components of the server.
"""

from enum import Enum
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Enums


class ExecutionStatus(str, Enum):
    """Status of command execution."""

    SUCCESS = "success"
    FAILURE = "failure"
    TIMEOUT = "timeout"


class CaptureKind(str, Enum):
    """Types of timed packet capture."""

    TRACE = "trace"
    PCAP = "pcap"
    DISPATCH = "dispatch"


class CliKind(str, Enum):
    """External command-line tools a descriptor can target."""

    VPPCTL = "vppctl"
    GOBGP = "gobgp"
    KUBECTL = "kubectl"


# Request Models (API Input)


class ToolRequest(BaseModel):
    """A single tools/call invocation."""

    tool_name: str = Field(..., description="Name of the tool to invoke", min_length=1)
    arguments: Dict[str, Any] = Field(
        default_factory=dict, description="Tool arguments keyed by parameter name"
    )

    @field_validator("arguments", mode="before")
    @classmethod
    def default_arguments(cls, v):
        """MCP clients may send null instead of an empty object."""
        return v or {}


# Internal Models (Used between modules)


class CommandSuccess(BaseModel):
    """Process exited with status 0."""

    model_config = ConfigDict(frozen=True)

    status: Literal[ExecutionStatus.SUCCESS] = ExecutionStatus.SUCCESS
    output: str = Field(..., description="Captured stdout")
    command: str = Field(..., description="Fully assembled command line")
    target: str = Field(default="", description="Pod the command ran against")

    @property
    def succeeded(self) -> bool:
        return True


class CommandFailure(BaseModel):
    """Process failed to start, exited non-zero or timed out."""

    model_config = ConfigDict(frozen=True)

    status: Literal[ExecutionStatus.FAILURE, ExecutionStatus.TIMEOUT] = ExecutionStatus.FAILURE
    error_detail: str = Field(..., description="Captured stderr or process error")
    command: str = Field(..., description="Fully assembled command line")
    target: str = Field(default="", description="Pod the command ran against")
    exit_code: Optional[int] = Field(None, description="Exit status, None if the process never exited")

    @property
    def succeeded(self) -> bool:
        return False


CommandResult = Annotated[Union[CommandSuccess, CommandFailure], Field(discriminator="status")]


class ClusterTarget(BaseModel):
    """Snapshot of a validated target, valid for a single call."""

    identifier: str
    host_node: Optional[str] = None


# Response Models (API Output)


class ToolResponse(BaseModel):
    """Text handed back to the transport for one tool call."""

    text: str
    is_error: bool = False
    error_code: Optional[str] = Field(None, description="Stable error code when is_error is set")

    @classmethod
    def from_error(cls, error: Exception) -> "ToolResponse":
        """Build an error response from a VppMcpError (or any exception)."""
        return cls(
            text=str(error),
            is_error=True,
            error_code=getattr(error, "code", "internal_error"),
        )
