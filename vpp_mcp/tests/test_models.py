"""
Unit tests for VPP MCP data models and error types.
"""

import pytest
from pydantic import TypeAdapter, ValidationError

from vpp_mcp.modules.api import (
    CaptureStageFailed,
    ClusterTarget,
    CommandFailure,
    CommandResult,
    CommandSuccess,
    ExecutionStatus,
    ExternalProcessFailure,
    InterfaceNotUp,
    MissingRequiredParameter,
    ToolRequest,
    ToolResponse,
    UnknownTool,
    format_candidates,
)


class TestToolRequest:
    """Test tool call request model."""

    def test_valid_request(self):
        """Test creating a valid request."""
        request = ToolRequest(tool_name="vpp_show_int", arguments={"pod_name": "pod-a"})
        assert request.tool_name == "vpp_show_int"
        assert request.arguments == {"pod_name": "pod-a"}

    def test_null_arguments(self):
        """Test that null arguments become an empty bag."""
        assert ToolRequest(tool_name="vpp_get_pods", arguments=None).arguments == {}

    def test_empty_tool_name_rejected(self):
        """Test that an empty tool name is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            ToolRequest(tool_name="")
        assert "at least 1 character" in str(exc_info.value)


class TestCommandResult:
    """Test the tagged command result union."""

    def test_success(self):
        """Test a successful result carries output only."""
        result = CommandSuccess(output="ok", command="kubectl exec")
        assert result.succeeded
        assert result.status == ExecutionStatus.SUCCESS
        assert not hasattr(result, "error_detail")

    def test_failure_defaults(self):
        """Test a failed result defaults to FAILURE status."""
        result = CommandFailure(error_detail="boom", command="kubectl exec")
        assert not result.succeeded
        assert result.status == ExecutionStatus.FAILURE
        assert result.exit_code is None

    def test_discriminator(self):
        """Test the status tag selects the variant."""
        adapter = TypeAdapter(CommandResult)

        success = adapter.validate_python({"status": "success", "output": "x", "command": "c"})
        timeout = adapter.validate_python({"status": "timeout", "error_detail": "slow", "command": "c"})

        assert isinstance(success, CommandSuccess)
        assert isinstance(timeout, CommandFailure)
        assert timeout.status == ExecutionStatus.TIMEOUT

    def test_success_requires_output(self):
        """Test that a success without output is rejected."""
        with pytest.raises(ValidationError):
            TypeAdapter(CommandResult).validate_python({"status": "success", "command": "c"})

    def test_immutable(self):
        """Test results cannot be modified after creation."""
        result = CommandSuccess(output="ok", command="c")
        with pytest.raises(ValidationError):
            result.output = "changed"


class TestToolResponse:
    """Test response construction from errors."""

    def test_from_error(self):
        response = ToolResponse.from_error(UnknownTool("vpp_nope"))
        assert response.is_error
        assert response.error_code == "unknown_tool"
        assert response.text == "Error: unknown tool 'vpp_nope'"

    def test_from_foreign_exception(self):
        response = ToolResponse.from_error(RuntimeError("unexpected"))
        assert response.error_code == "internal_error"

    def test_cluster_target(self):
        target = ClusterTarget(identifier="pod-a")
        assert target.host_node is None


class TestErrors:
    """Test error message contents."""

    def test_format_candidates(self):
        assert format_candidates("Available nodes", ["a", "b"]) == "\nAvailable nodes:\n1. a\n2. b"

    def test_missing_parameter_description(self):
        error = MissingRequiredParameter("vpp_show_ip_fib", "fib_index", "FIB table index")
        assert error.message == (
            "Error: missing required parameter 'fib_index' for tool 'vpp_show_ip_fib'.\n"
            "- fib_index: FIB table index"
        )

    def test_interface_not_up(self):
        error = InterfaceNotUp("eth9", ["eth0", "tap0"])
        assert error.message == "Error: Interface 'eth9' not found.\nAvailable interfaces:\n1. eth0\n2. tap0"

    def test_external_process_failure(self):
        error = ExternalProcessFailure("vppctl show trace", "timeout", "pod-a")
        assert error.message == "Error executing command on pod pod-a: timeout\nCommand attempted: vppctl show trace"

    def test_capture_stage_failed(self):
        error = CaptureStageFailed("trace", "START_CAPTURE", "no such node", "vppctl trace add x 5")
        assert error.code == "capture_stage_failed"
        assert error.message.endswith("\nCommand attempted: vppctl trace add x 5")
