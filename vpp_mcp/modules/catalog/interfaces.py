"""
Interface-type mapping and interface listing helpers.

Capture commands name a VPP graph input node. Callers pass a logical
interface type instead; this module translates one into the other and
parses 'show int' output for the pcap capture.
"""

import json
import logging
from typing import Awaitable, Callable, Dict, List, NamedTuple, Optional

from vpp_mcp.modules.api import ClusterQueryFailure, InterfaceTokenInvalid

logger = logging.getLogger("vpp_mcp.catalog")

PHYSICAL_TOKENS = ("phy", "physical")


class InputNode(NamedTuple):
    """Resolved capture input stage."""

    node: str
    driver: str


INTERFACE_TYPES: Dict[str, InputNode] = {
    "af_xdp": InputNode("af-xdp-input", "af_xdp"),
    "af_packet": InputNode("af-packet-input", "af_packet"),
    "avf": InputNode("avf-input", "avf"),
    "vmxnet3": InputNode("vmxnet3-input", "vmxnet3"),
    "virtio": InputNode("virtio-input", "virtio"),
    "tuntap": InputNode("virtio-input", "virtio"),
    "rdma": InputNode("rdma-input", "rdma"),
    "dpdk": InputNode("dpdk-input", "dpdk"),
    "memif": InputNode("memif-input", "memif"),
    "vcl": InputNode("session-queue", "vcl"),
    "": InputNode("virtio-input", "virtio"),
}

INTERFACE_TYPE_HELP = (
    "Supported interface types:\n"
    "  phy       : use the physical interface driver configured in calico-vpp-config\n"
    "  af_xdp    : use an AF_XDP socket to drive the interface\n"
    "  af_packet : use an AF_PACKET socket to drive the interface\n"
    "  avf       : use the VPP native driver for Intel 700-Series and 800-Series interfaces\n"
    "  vmxnet3   : use the VPP native driver for VMware virtual interfaces\n"
    "  virtio    : use the VPP native driver for Virtio virtual interfaces\n"
    "  tuntap    : alias for virtio (default)\n"
    "  rdma      : use the VPP native driver for Mellanox CX-4 and CX-5 interfaces\n"
    "  dpdk      : use the DPDK interface drivers with VPP\n"
    "  memif     : use shared memory interfaces (memif)\n"
    "  vcl       : capture packets at the session layer\n"
    "\nDefault: virtio (if no interface type is specified)"
)

DriverLookup = Callable[[], Awaitable[str]]


def parse_uplink_driver(interfaces_json: str) -> str:
    """
    Extract the first uplink's vppDriver from CALICOVPP_INTERFACES.

    Raises:
        ClusterQueryFailure: The document is malformed or has no driver
    """
    try:
        document = json.loads(interfaces_json)
    except json.JSONDecodeError as e:
        raise ClusterQueryFailure(f"failed to parse CALICOVPP_INTERFACES JSON: {e}") from e

    uplinks = document.get("uplinkInterfaces") if isinstance(document, dict) else None
    if not isinstance(uplinks, list) or not uplinks or not isinstance(uplinks[0], dict):
        raise ClusterQueryFailure("no uplink interfaces found in configuration")

    driver = str(uplinks[0].get("vppDriver") or "").strip()
    if not driver:
        raise ClusterQueryFailure("vppDriver not found or is empty")
    return driver


def map_interface_type(token: str) -> InputNode:
    """
    Map a concrete interface type to its input node.

    Pure function: the physical token is not handled here.

    Raises:
        InterfaceTokenInvalid: Unrecognized token
    """
    try:
        return INTERFACE_TYPES[token]
    except KeyError:
        raise InterfaceTokenInvalid(token, INTERFACE_TYPE_HELP) from None


async def resolve_input_node(token: Optional[str], driver_lookup: DriverLookup) -> InputNode:
    """
    Resolve an interface token, following the physical indirection once.

    The physical token is replaced by the driver configured for the uplink.
    That driver comes from cluster configuration and is resolved at most
    once more, so a configured driver of 'phy' is rejected instead of
    looping.

    Args:
        token: Interface type supplied by the caller (None or "" for default)
        driver_lookup: Coroutine returning the configured uplink driver

    Raises:
        InterfaceTokenInvalid: Unrecognized token (or configured driver)
        ClusterQueryFailure: The configured driver could not be read
    """
    token = (token or "").strip()
    for depth in range(2):
        if token not in PHYSICAL_TOKENS:
            return map_interface_type(token)
        if depth:
            break
        try:
            token = (await driver_lookup()).strip()
        except ClusterQueryFailure as e:
            raise ClusterQueryFailure(
                f"Error mapping interface: failed to get VPP driver from ConfigMap: {e}"
            ) from e
        logger.info(f"Physical interface uses driver {token}")

    raise InterfaceTokenInvalid(token, INTERFACE_TYPE_HELP)


_COUNTER_PREFIXES = ("rx ", "tx ", "drops", "punt", "ip4", "ip6")
_HEADER_MARKERS = ("Name", "Counter", "Count")


def parse_up_interfaces(output: str) -> List[str]:
    """
    Return interfaces whose state column reads 'up' in 'show int' output.

    Rows look like: name  idx  state  mtu  [counter  value]. Header rows
    and continuation rows holding further counters are skipped.
    """
    up: List[str] = []
    for line in output.splitlines():
        trimmed = line.strip()
        if not trimmed or any(marker in line for marker in _HEADER_MARKERS):
            continue
        if trimmed.startswith(_COUNTER_PREFIXES):
            continue

        fields = line.split()
        if len(fields) >= 3 and fields[2] == "up":
            up.append(fields[0])
    return up
