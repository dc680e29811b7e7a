"""
Shared pytest fixtures for VPP MCP server tests.

This module provides common fixtures including:
- KubectlMocker: Mock kubectl child processes with canned responses
- FakeRunner: ProcessRunner stand-in that records calls
- FakeInventory: In-memory cluster inventory
- Wired dispatcher and capture orchestrator instances
"""

import asyncio
import os
import sys
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Pattern, Sequence, Tuple, Union
from unittest.mock import patch

import pytest

# Make the fixtures package importable from test modules
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from vpp_mcp.config import CaptureConfig, DataplaneConfig
from vpp_mcp.modules.api import (
    ClusterQueryFailure,
    CommandFailure,
    CommandResult,
    CommandSuccess,
)
from vpp_mcp.modules.capture import CaptureOrchestrator
from vpp_mcp.modules.dispatch import Dispatcher
from vpp_mcp.modules.executor import PodExec, ProcessRunner
from vpp_mcp.modules.inventory import TargetResolver


# =============================================================================
# Kubectl Mocking Infrastructure
# =============================================================================

@dataclass
class KubectlResponse:
    """Represents a mocked kubectl command response."""
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0
    delay: float = 0.0

    def to_process(self) -> "FakeProcess":
        """Convert to an asyncio.subprocess.Process-like object."""
        return FakeProcess(self)


class FakeProcess:
    """Minimal asyncio.subprocess.Process replacement."""

    def __init__(self, response: KubectlResponse):
        self._response = response
        self.returncode: Optional[int] = None
        self.killed = False

    async def communicate(self) -> Tuple[bytes, bytes]:
        if self._response.delay:
            await asyncio.sleep(self._response.delay)
        self.returncode = self._response.returncode
        return self._response.stdout.encode(), self._response.stderr.encode()

    def kill(self) -> None:
        self.killed = True
        self.returncode = -9

    async def wait(self) -> int:
        return self.returncode


@dataclass
class KubectlCall:
    """Record of a kubectl call made during testing."""
    command: List[str]
    full_command_str: str
    matched_pattern: Optional[str] = None
    response: Optional[KubectlResponse] = None
    process: Optional[FakeProcess] = None


class KubectlMocker:
    """
    Mock kubectl child processes with pattern-matched responses.

    Patches asyncio.create_subprocess_exec so the real ProcessRunner can be
    exercised without a cluster.

    Usage:
        async def test_version(kubectl_mocker):
            kubectl_mocker.register("vppctl show version", KubectlResponse(
                stdout="vpp v24.02"
            ))

            result = await runner.run("kubectl", [...])

            assert kubectl_mocker.was_called_with("show version")
    """

    def __init__(self):
        self._responses: List[tuple] = []
        self._call_history: List[KubectlCall] = []
        self._default_response = KubectlResponse(
            stderr="Error: mock not configured for this command",
            returncode=1
        )
        self.missing_binary = False

    def register(
        self,
        pattern: Union[str, Pattern],
        response: KubectlResponse,
        priority: int = 0
    ) -> "KubectlMocker":
        """
        Register a response for commands matching the pattern.

        Args:
            pattern: String (substring match) or regex pattern
            response: KubectlResponse to return when matched
            priority: Higher priority patterns are checked first

        Returns:
            self for chaining
        """
        self._responses.append((pattern, response, priority))
        self._responses.sort(key=lambda x: x[2], reverse=True)
        return self

    def set_default_response(self, response: KubectlResponse) -> "KubectlMocker":
        """Set the default response for unmatched commands."""
        self._default_response = response
        return self

    async def mock_exec(self, *argv: str, **kwargs) -> FakeProcess:
        """Side effect for asyncio.create_subprocess_exec."""
        if self.missing_binary:
            raise FileNotFoundError(2, "No such file or directory", argv[0])

        cmd = list(argv)
        kubectl_args = " ".join(cmd[1:])
        matched_pattern = None
        response = self._default_response

        for pattern, resp, _ in self._responses:
            if isinstance(pattern, str):
                if pattern in kubectl_args:
                    matched_pattern = pattern
                    response = resp
                    break
            elif pattern.search(kubectl_args):
                matched_pattern = pattern.pattern
                response = resp
                break

        process = response.to_process()
        self._call_history.append(KubectlCall(
            command=cmd,
            full_command_str=" ".join(cmd),
            matched_pattern=matched_pattern,
            response=response,
            process=process,
        ))
        return process

    @property
    def calls(self) -> List[KubectlCall]:
        """Get all kubectl calls made during the test."""
        return self._call_history

    @property
    def call_count(self) -> int:
        """Get the number of kubectl calls made."""
        return len(self._call_history)

    def was_called_with(self, pattern: str) -> bool:
        """Check if any call contained the given pattern."""
        return any(pattern in call.full_command_str for call in self._call_history)

    def get_calls_matching(self, pattern: str) -> List[KubectlCall]:
        """Get all calls containing the given pattern."""
        return [c for c in self._call_history if pattern in c.full_command_str]


@pytest.fixture
def kubectl_mocker():
    """
    Fixture that provides a KubectlMocker with asyncio.create_subprocess_exec patched.

    Usage:
        async def test_something(kubectl_mocker):
            kubectl_mocker.register("show int", KubectlResponse(stdout="..."))
            # Code that runs kubectl
            assert kubectl_mocker.was_called_with("show int")
    """
    mocker = KubectlMocker()
    with patch("asyncio.create_subprocess_exec", side_effect=mocker.mock_exec):
        yield mocker


# =============================================================================
# Runner and Inventory Stand-ins
# =============================================================================

@dataclass
class RunnerCall:
    """Record of a FakeRunner.run call."""
    program: str
    args: List[str]
    timeout: Optional[float]
    target: str

    @property
    def vppctl(self) -> Optional[str]:
        """The vppctl/gobgp part of an exec call, e.g. 'show trace'."""
        if "--" not in self.args:
            return None
        return " ".join(self.args[self.args.index("--") + 2:])


class FakeRunner:
    """
    ProcessRunner stand-in returning results keyed by command substring.

    Responses are plain output strings (success) or (stderr, returncode)
    tuples (failure). A failure registered with after=N lets the first N
    matching calls succeed.
    """

    def __init__(self):
        self.calls: List[RunnerCall] = []
        self._responses: List[list] = []
        self.default_output = ""

    def respond(self, pattern: str, output: str) -> "FakeRunner":
        self._responses.append([pattern, output, 0])
        return self

    def fail(
        self, pattern: str, stderr: str = "command failed", returncode: int = 1, after: int = 0
    ) -> "FakeRunner":
        self._responses.append([pattern, (stderr, returncode), after])
        return self

    async def run(
        self,
        program: str,
        args: Sequence[str],
        *,
        timeout: Optional[float] = None,
        target: str = "",
    ) -> CommandResult:
        call = RunnerCall(program, list(args), timeout, target)
        self.calls.append(call)
        command = ProcessRunner.format_command(program, args)
        joined = " ".join(args)

        for entry in self._responses:
            pattern, response, after = entry
            if pattern not in joined:
                continue
            if after:
                entry[2] -= 1
                continue
            if isinstance(response, tuple):
                stderr, returncode = response
                return CommandFailure(
                    error_detail=stderr, command=command, target=target, exit_code=returncode
                )
            return CommandSuccess(output=response, command=command, target=target)
        return CommandSuccess(output=self.default_output, command=command, target=target)

    @property
    def commands(self) -> List[str]:
        """vppctl/gobgp command of every exec call, in order."""
        return [c.vppctl for c in self.calls if c.vppctl is not None]


@dataclass
class FakeInventory:
    """In-memory ClusterInventory."""
    nodes: List[str] = field(default_factory=lambda: ["node-1"])
    config_maps: Dict[Tuple[str, str], Dict[str, str]] = field(default_factory=dict)
    fail_nodes: bool = False
    node_queries: int = 0
    config_map_reads: int = 0

    async def list_node_names(self) -> List[str]:
        self.node_queries += 1
        if self.fail_nodes:
            raise ClusterQueryFailure("Error listing cluster nodes: Forbidden")
        return list(self.nodes)

    async def read_config_map_value(self, namespace: str, name: str, key: str) -> str:
        self.config_map_reads += 1
        data = self.config_maps.get((namespace, name))
        if data is None:
            raise ClusterQueryFailure(f"failed to get {name} ConfigMap: Not Found")
        if key not in data:
            raise ClusterQueryFailure(f"{key} not found in ConfigMap")
        return data[key]


# =============================================================================
# Wired Components
# =============================================================================

@pytest.fixture
def dataplane_config():
    return DataplaneConfig(
        namespace="calico-vpp-dataplane",
        vpp_container="vpp",
        agent_container="agent",
        config_map="calico-vpp-config",
        interfaces_key="CALICOVPP_INTERFACES",
        kubectl_binary="kubectl",
    )


@pytest.fixture
def capture_config():
    """Capture settings with no wait so tests run instantly."""
    return CaptureConfig(wait_seconds=0, default_count=500)


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def fake_inventory():
    return FakeInventory()


@pytest.fixture
def pod_exec(fake_runner, dataplane_config):
    return PodExec(fake_runner, dataplane_config, timeout=10.0)


@pytest.fixture
def orchestrator(pod_exec, fake_inventory, dataplane_config, capture_config):
    return CaptureOrchestrator(
        pod_exec,
        TargetResolver(fake_inventory),
        fake_inventory,
        dataplane_config,
        capture_config,
        clock=lambda: 1700000000,
    )


@pytest.fixture
def dispatcher(pod_exec, orchestrator):
    return Dispatcher(pod_exec, orchestrator)


# =============================================================================
# Test Markers Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "kubectl_mock: Tests using mocked kubectl child processes"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests requiring infrastructure"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take a long time to run"
    )
