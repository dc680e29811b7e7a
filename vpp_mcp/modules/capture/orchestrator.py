"""
Timed packet capture against a VPP dataplane.

A capture is a fixed sequence of vppctl commands around a wait:

    VALIDATE_NODE -> RESOLVE_INTERFACE -> CLEAR_PRIOR_STATE -> START_CAPTURE
    -> WAIT -> STOP -> RETRIEVE -> CLEANUP

Everything up to and including START_CAPTURE must succeed. Once packets
are being captured, STOP and CLEANUP always run, even when RETRIEVE fails
or the wait is cancelled.
"""

import asyncio
import logging
import time
import weakref
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from vpp_mcp.config import CaptureConfig, DataplaneConfig
from vpp_mcp.modules.api import (
    CaptureKind,
    CaptureStageFailed,
    CommandResult,
    ExternalProcessFailure,
    InterfaceNotUp,
    InvalidParameter,
    ToolResponse,
)
from vpp_mcp.modules.catalog import parse_up_interfaces, parse_uplink_driver, resolve_input_node
from vpp_mcp.modules.executor import PodExec
from vpp_mcp.modules.inventory import ClusterInventory, TargetResolver

ANY_INTERFACE = "any"


class CaptureStage(str, Enum):
    """Stages of a capture sequence, in execution order."""

    VALIDATE_NODE = "VALIDATE_NODE"
    RESOLVE_INTERFACE = "RESOLVE_INTERFACE"
    CLEAR_PRIOR_STATE = "CLEAR_PRIOR_STATE"
    START_CAPTURE = "START_CAPTURE"
    WAIT = "WAIT"
    STOP = "STOP"
    RETRIEVE = "RETRIEVE"
    CLEANUP = "CLEANUP"


@dataclass(frozen=True)
class CapturePlan:
    """vppctl commands for one capture, resolved before anything runs."""

    kind: CaptureKind
    clear: List[str]
    start: List[str]
    retrieve: List[str]
    stop: Optional[List[str]] = None
    cleanup: Optional[List[str]] = None
    location: Tuple[str, str] = ("Node", "")
    file: Optional[str] = None


class CaptureOrchestrator:
    """Runs trace, pcap and dispatch captures, one at a time per pod."""

    def __init__(
        self,
        pod_exec: PodExec,
        resolver: TargetResolver,
        inventory: ClusterInventory,
        dataplane: DataplaneConfig,
        capture_config: CaptureConfig,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the orchestrator.

        Args:
            pod_exec: Executes vppctl inside the dataplane pod
            resolver: Validates node names against the cluster
            inventory: Reads the uplink driver for the physical interface type
            dataplane: Default namespace and config map location
            capture_config: Wait duration and default packet count
            logger: Logger for stage diagnostics
            clock: Source of the timestamp embedded in capture file names
        """
        self.pod_exec = pod_exec
        self.resolver = resolver
        self.inventory = inventory
        self.dataplane = dataplane
        self.capture_config = capture_config
        self.logger = logger or logging.getLogger("vpp_mcp.capture")
        self.clock = clock
        self._locks: "weakref.WeakValueDictionary[Tuple[str, str], asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    def _lock_for(self, namespace: str, pod_name: str) -> asyncio.Lock:
        # Entries go away once no capture holds or waits on the lock
        key = (namespace, pod_name)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    async def capture(
        self,
        kind: CaptureKind,
        pod_name: str,
        *,
        namespace: Optional[str] = None,
        container: Optional[str] = None,
        node_name: str = "",
        count: Optional[int] = None,
        interface: str = "",
        title: Optional[str] = None,
    ) -> ToolResponse:
        """
        Run a complete capture and return the formatted result.

        Args:
            kind: trace, pcap or dispatch
            pod_name: Dataplane pod to capture on
            namespace: Pod namespace (configured default if None)
            container: VPP container (configured default if None)
            node_name: Optional Kubernetes node, validated before capturing
            count: Packets to capture (configured default if None)
            interface: Interface type token, or interface name for pcap
            title: Heading of the result text

        Raises:
            InvalidParameter: count is not positive
            TargetNotFound: node_name is not a cluster node
            InterfaceTokenInvalid: Unknown interface type
            InterfaceNotUp: pcap interface is missing or down
            CaptureStageFailed: A stage before the wait failed
            ExternalProcessFailure: Captured data could not be retrieved
        """
        kind = CaptureKind(kind)
        namespace = namespace or self.dataplane.namespace
        count = self.capture_config.default_count if count is None else count
        if count <= 0:
            raise InvalidParameter(f"vpp_{kind.value}", "count", "must be a positive integer")

        target = await self.resolver.resolve(pod_name, node_name)

        async with self._lock_for(namespace, pod_name):
            plan = await self._plan(kind, pod_name, namespace, container, count, interface)
            output = await self._execute(plan, pod_name, namespace, container)

        heading = title or f"VPP {kind.value} Capture Results"
        return ToolResponse(
            text=self._format(heading, output, plan, count, target.host_node, pod_name, namespace)
        )

    async def _plan(
        self,
        kind: CaptureKind,
        pod_name: str,
        namespace: str,
        container: Optional[str],
        count: int,
        interface: str,
    ) -> CapturePlan:
        """RESOLVE_INTERFACE: turn the interface argument into vppctl commands."""
        timestamp = int(self.clock())

        if kind == CaptureKind.PCAP:
            name = await self._resolve_pcap_interface(pod_name, namespace, container, interface)
            pcap_file = f"/tmp/vpp-capture-{timestamp}.pcap"
            return CapturePlan(
                kind=kind,
                clear=["pcap", "trace", "off"],
                start=["pcap", "trace", "tx", "rx", "max", str(count), "intfc", name, "file", pcap_file],
                stop=["pcap", "trace", "off"],
                retrieve=["pcap", "trace", "status"],
                location=("Interface", name),
                file=pcap_file,
            )

        input_node = await resolve_input_node(interface, lambda: self._uplink_driver(namespace))
        self.logger.info(f"Using input node {input_node.node} for interface type '{interface}'")

        if kind == CaptureKind.TRACE:
            return CapturePlan(
                kind=kind,
                clear=["clear", "trace"],
                start=["trace", "add", input_node.node, str(count)],
                retrieve=["show", "trace"],
                cleanup=["clear", "trace"],
                location=("Node", input_node.node),
            )

        pcap_file = f"/tmp/vpp-dispatch-{timestamp}.pcap"
        return CapturePlan(
            kind=kind,
            clear=["pcap", "dispatch", "trace", "off"],
            start=[
                "pcap", "dispatch", "trace", "on", "max", str(count),
                "buffer-trace", input_node.node, str(count), "file", pcap_file,
            ],
            stop=["pcap", "dispatch", "trace", "off"],
            retrieve=["show", "pcap"],
            location=("Node", input_node.node),
            file=pcap_file,
        )

    async def _uplink_driver(self, namespace: str) -> str:
        interfaces = await self.inventory.read_config_map_value(
            namespace, self.dataplane.config_map, self.dataplane.interfaces_key
        )
        return parse_uplink_driver(interfaces)

    async def _resolve_pcap_interface(
        self, pod_name: str, namespace: str, container: Optional[str], interface: str
    ) -> str:
        interface = (interface or "").strip()
        if interface in ("", ANY_INTERFACE):
            return ANY_INTERFACE

        result = await self.pod_exec.vppctl(pod_name, ["show", "int"], namespace=namespace, container=container)
        if not result.succeeded:
            raise CaptureStageFailed(
                CaptureKind.PCAP.value,
                CaptureStage.RESOLVE_INTERFACE.value,
                f"failed to list interfaces: {result.error_detail}",
                "vppctl show int",
            )

        up_interfaces = parse_up_interfaces(result.output)
        if interface not in up_interfaces:
            raise InterfaceNotUp(interface, up_interfaces)
        return interface

    async def _execute(
        self, plan: CapturePlan, pod_name: str, namespace: str, container: Optional[str]
    ) -> str:
        async def run(stage: CaptureStage, tokens: List[str]) -> CommandResult:
            self.logger.debug(f"{plan.kind.value} capture on {pod_name}: {stage.value}")
            return await self.pod_exec.vppctl(pod_name, tokens, namespace=namespace, container=container)

        async def required(stage: CaptureStage, tokens: List[str]) -> None:
            result = await run(stage, tokens)
            if not result.succeeded:
                self.logger.error(f"{plan.kind.value} capture on {pod_name} failed at {stage.value}")
                raise CaptureStageFailed(
                    plan.kind.value, stage.value, result.error_detail, "vppctl " + " ".join(tokens)
                )

        async def best_effort(stage: CaptureStage, tokens: Optional[List[str]]) -> None:
            if tokens is None:
                return
            result = await run(stage, tokens)
            if not result.succeeded:
                self.logger.warning(
                    f"{plan.kind.value} capture on {pod_name}: {stage.value} failed: {result.error_detail}"
                )

        await required(CaptureStage.CLEAR_PRIOR_STATE, plan.clear)
        await required(CaptureStage.START_CAPTURE, plan.start)

        wait = self.capture_config.wait_seconds
        self.logger.info(f"Capturing {plan.kind.value} on {pod_name} for {wait:g}s")
        try:
            await asyncio.sleep(wait)
        except asyncio.CancelledError:
            self.logger.warning(f"{plan.kind.value} capture on {pod_name} cancelled, stopping")
            await best_effort(CaptureStage.STOP, plan.stop)
            await best_effort(CaptureStage.CLEANUP, plan.cleanup)
            raise

        await best_effort(CaptureStage.STOP, plan.stop)
        retrieved = await run(CaptureStage.RETRIEVE, plan.retrieve)
        await best_effort(CaptureStage.CLEANUP, plan.cleanup)

        if not retrieved.succeeded:
            raise ExternalProcessFailure("vppctl " + " ".join(plan.retrieve), retrieved.error_detail, pod_name)
        return retrieved.output

    @staticmethod
    def _format(
        title: str,
        output: str,
        plan: CapturePlan,
        count: int,
        node: Optional[str],
        pod_name: str,
        namespace: str,
    ) -> str:
        label, value = plan.location
        lines = [f"- {label}: {value}", f"- Count: {count}"]
        if plan.file:
            lines.append(f"- File: {plan.file}")
        if node:
            lines.append(f"- Node Name: {node}")
        lines.append(f"- Pod: {pod_name}")
        lines.append(f"- Namespace: {namespace}")

        text = f"{title}:\n\n{output}\n\nCapture Parameters:\n" + "\n".join(lines)
        if plan.file:
            text += f"\n\nNote: Capture file saved at {plan.file} on the pod"
        return text
