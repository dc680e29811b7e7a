"""
Static tool catalog.

Every tool the server exposes is declared here once. The table is built at
import time and never mutated afterwards.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from vpp_mcp.modules.api import CaptureKind, CliKind

from .descriptors import ParameterSpec, ToolDescriptor

POD_NAME = ParameterSpec(
    "pod_name", "The name of the Kubernetes pod running VPP", required=True
)
NAMESPACE = ParameterSpec(
    "namespace",
    "Kubernetes namespace where the pod is running (default: calico-vpp-dataplane)",
)
CONTAINER_NAME = ParameterSpec(
    "container_name",
    "Container name within the pod (default: vpp for VPP tools, agent for BGP tools)",
)
NODE_NAME = ParameterSpec(
    "node_name", "Kubernetes node name (validated against cluster)"
)
COUNT = ParameterSpec(
    "count", "Number of packets to capture (default: 500)", kind="integer"
)
FIB_INDEX = ParameterSpec(
    "fib_index", "FIB table index to query (0 is the default table)", kind="integer", required=True
)
IP4_PREFIX = ParameterSpec(
    "prefix", "IPv4 prefix or address to look up, e.g. 10.0.0.0/24", required=True
)
IP6_PREFIX = ParameterSpec(
    "prefix", "IPv6 prefix or address to look up, e.g. 2001:db8::/32", required=True
)
ADDRESS_FAMILY = ParameterSpec(
    "address_family", "BGP address family: ipv4 or ipv6 (default: ipv4)", default="ipv4"
)

TARGET_PARAMETERS = (POD_NAME, NAMESPACE, CONTAINER_NAME)


def _describe(summary: str, parameters: Sequence[ParameterSpec], notes: str = "") -> str:
    """Assemble the human description shown in tools/list."""
    text = summary
    if notes:
        text += "\n\n" + notes

    required = [p for p in parameters if p.required]
    optional = [p for p in parameters if not p.required]
    if required:
        text += "\n\nRequired parameters:\n" + "\n".join(
            f"- {p.name}: {p.description}" for p in required
        )
    if optional:
        text += "\n\nOptional parameters:\n" + "\n".join(
            f"- {p.name}: {p.description}" for p in optional
        )
    if not parameters:
        text += "\n\nNo parameters required."
    return text


def _vpp_tool(
    name: str,
    command: str,
    title: str,
    summary: str,
    extra: Tuple[ParameterSpec, ...] = (),
    notes: str = "",
) -> ToolDescriptor:
    parameters = TARGET_PARAMETERS + extra
    return ToolDescriptor(
        name=name,
        title=title,
        description=_describe(
            f"{summary} by running 'vppctl {command}' in a Kubernetes VPP container",
            parameters,
            notes,
        ),
        cli=CliKind.VPPCTL,
        command=tuple(command.split()),
        parameters=parameters,
    )


def _bgp_tool(
    name: str,
    command: str,
    title: str,
    summary: str,
    extra: Tuple[ParameterSpec, ...] = (),
) -> ToolDescriptor:
    parameters = TARGET_PARAMETERS + extra
    return ToolDescriptor(
        name=name,
        title=title,
        description=_describe(
            f"{summary} by running 'gobgp {command}' in the Calico/VPP agent container",
            parameters,
        ),
        cli=CliKind.GOBGP,
        command=tuple(command.split()),
        parameters=parameters,
    )


def _capture_tool(name: str, kind: CaptureKind, title: str, summary: str, interface_help: str, steps: str) -> ToolDescriptor:
    interface = ParameterSpec("interface", interface_help)
    parameters = TARGET_PARAMETERS + (NODE_NAME, COUNT, interface)
    return ToolDescriptor(
        name=name,
        title=title,
        description=_describe(summary, parameters, "The tool will:\n" + steps),
        cli=CliKind.VPPCTL,
        parameters=parameters,
        capture=kind.value,
    )


INTERFACE_TYPE_PARAM_HELP = (
    "Interface type - phy|af_xdp|af_packet|avf|vmxnet3|virtio|tuntap|rdma|dpdk|memif|vcl "
    "(default: virtio)"
)

_TOOLS: List[ToolDescriptor] = [
    # Basic dataplane state
    _vpp_tool("vpp_show_version", "show version", "VPP Version Information",
              "Get VPP version information"),
    _vpp_tool("vpp_show_int", "show int", "VPP Interface Information",
              "Get VPP interface information"),
    _vpp_tool("vpp_show_int_addr", "show int addr", "VPP Interface Address Information",
              "Get VPP interface address information"),
    _vpp_tool("vpp_show_errors", "show errors", "VPP Error Counters",
              "Get VPP error counters"),
    _vpp_tool("vpp_clear_errors", "clear errors", "VPP Clear Error Counters",
              "Reset the error counters"),
    _vpp_tool("vpp_show_session_verbose", "show session verbose 2", "VPP Session Information (Verbose)",
              "Get VPP session information"),
    _vpp_tool("vpp_session_stats", "show session stats", "VPP Session Statistics",
              "Display global statistics reported by the session layer"),
    _vpp_tool("vpp_tcp_stats", "show tcp stats", "VPP TCP Statistics",
              "Display global statistics reported by TCP"),
    _vpp_tool("vpp_get_logs", "show logging", "VPP Logs",
              "Display VPP logs"),

    # Network policy
    _vpp_tool("vpp_show_npol_rules", "show npol rules", "VPP NPOL Rules",
              "List rules that are referenced by policies"),
    _vpp_tool("vpp_show_npol_policies", "show npol policies", "VPP NPOL Policies",
              "List all the policies that are referenced on interfaces"),
    _vpp_tool("vpp_show_npol_ipset", "show npol ipset", "VPP NPOL IPset",
              "List ipsets that are referenced by rules (IPsets are just list of IPs)"),
    _vpp_tool(
        "vpp_show_npol_interfaces", "show npol interfaces", "VPP NPOL Interfaces",
        "Show the resulting policies configured for every interface in VPP",
        notes=(
            "The first IPv4 address of every pod is provided to help identify which pod "
            "and interface belongs to.\n\n"
            "Output interpretation:\n"
            "- tx: contains rules that are applied on packets that LEAVE VPP on a given "
            "interface. Rules are applied top to bottom.\n"
            "- rx: contains rules that are applied on packets that ENTER VPP on a given "
            "interface. Rules are applied top to bottom.\n"
            "- profiles: are specific rules that are enforced when a matched rule action "
            "is PASS or when no policies are configured."
        ),
    ),

    # NAT
    _vpp_tool("vpp_show_cnat_translation", "show cnat translation", "VPP CNAT Translation",
              "Shows the active CNAT translations"),
    _vpp_tool(
        "vpp_show_cnat_session", "show cnat session", "VPP CNAT Session",
        "Lists the active CNAT sessions from the established five tuple to the five tuple rewrites",
        notes=(
            "Output interpretation:\n"
            "The output shows the `incoming 5-tuple` first that is used to match packets "
            "along with the `protocol`. Then it displays the `5-tuple after dNAT & sNAT`, "
            "followed by the `direction` and finally the `age` in seconds. `direction` being "
            "input for the PRE-ROUTING sessions and output is the POST-ROUTING sessions"
        ),
    ),

    # Runtime
    _vpp_tool("vpp_clear_run", "clear run", "VPP Clear Runtime Statistics",
              "Clears live running error stats in VPP"),
    _vpp_tool(
        "vpp_show_run", "show run", "VPP Runtime Statistics",
        "Shows live running error stats in VPP",
        notes=(
            "Debugging workflow:\n"
            "Sometimes to debug an issue, you might need to run `vpp_clear_run` to erase "
            "historic stats and then wait for a few seconds in the issue state / run some "
            "tests so that the error stats are repopulated and then run `vpp_show_run` in "
            "order to diagnose what is going on in the system\n\n"
            "Output interpretation:\n"
            "A loaded VPP will typically have (1) a high Vectors/Call maxing out at 256 "
            "(2) a low loops/sec struggling around 10000. The Clocks column tells you the "
            "consumption in cycles per node on average. Beyond 1e3 is expensive."
        ),
    ),

    # Routing tables
    _vpp_tool("vpp_show_ip_table", "show ip table", "VPP IPv4 VRF Tables",
              "List the IPv4 VRF tables"),
    _vpp_tool("vpp_show_ip6_table", "show ip6 table", "VPP IPv6 VRF Tables",
              "List the IPv6 VRF tables"),
    _vpp_tool("vpp_show_ip_fib", "show ip fib index {fib_index}", "VPP IPv4 FIB",
              "Show the IPv4 forwarding table for a FIB index", extra=(FIB_INDEX,)),
    _vpp_tool("vpp_show_ip6_fib", "show ip6 fib index {fib_index}", "VPP IPv6 FIB",
              "Show the IPv6 forwarding table for a FIB index", extra=(FIB_INDEX,)),
    _vpp_tool("vpp_show_ip_fib_prefix", "show ip fib index {fib_index} {prefix}", "VPP IPv4 FIB Prefix Lookup",
              "Look up an IPv4 prefix in a FIB table", extra=(FIB_INDEX, IP4_PREFIX)),
    _vpp_tool("vpp_show_ip6_fib_prefix", "show ip6 fib index {fib_index} {prefix}", "VPP IPv6 FIB Prefix Lookup",
              "Look up an IPv6 prefix in a FIB table", extra=(FIB_INDEX, IP6_PREFIX)),

    # BGP
    _bgp_tool("bgp_show_neighbors", "neighbor", "BGP Neighbors",
              "List BGP peers and their session state"),
    _bgp_tool("bgp_show_neighbor", "neighbor {neighbor_ip}", "BGP Neighbor Details",
              "Show details of a single BGP peer",
              extra=(ParameterSpec("neighbor_ip", "IP address of the BGP neighbor", required=True),)),
    _bgp_tool("bgp_show_global_info", "global", "BGP Global Information",
              "Show the BGP global configuration (AS number, router ID, listen port)"),
    _bgp_tool("bgp_show_global_rib4", "global rib -a ipv4", "BGP IPv4 RIB",
              "Show the global IPv4 BGP RIB"),
    _bgp_tool("bgp_show_global_rib6", "global rib -a ipv6", "BGP IPv6 RIB",
              "Show the global IPv6 BGP RIB"),
    _bgp_tool("bgp_show_ip", "global rib -a {address_family} {ip_address}", "BGP RIB Lookup by IP",
              "Look up the best BGP route for an IP address",
              extra=(ParameterSpec("ip_address", "IP address to look up, e.g. 11.0.0.7", required=True),
                     ADDRESS_FAMILY)),
    _bgp_tool("bgp_show_prefix", "global rib -a {address_family} {prefix}", "BGP RIB Lookup by Prefix",
              "Look up BGP routes for a prefix",
              extra=(ParameterSpec("prefix", "Prefix to look up, e.g. 11.0.0.0/8", required=True),
                     ADDRESS_FAMILY)),

    # Cluster
    ToolDescriptor(
        name="vpp_get_pods",
        title="Calico VPP Pods",
        description=_describe(
            "List all calico-vpp pods along with their IP addresses and the node on which "
            "they are running\n\n"
            "This tool runs 'kubectl get pods -n calico-vpp-dataplane -owide' to display:\n"
            "- Pod names\n- Pod status\n- Pod IP addresses\n- Node names\n"
            "- Age and other metadata",
            (NAMESPACE,),
        ),
        cli=CliKind.KUBECTL,
        parameters=(NAMESPACE,),
    ),

    # Captures
    _capture_tool(
        "vpp_trace", CaptureKind.TRACE, "VPP Trace Capture Results",
        "Capture VPP packet traces by running 'vppctl trace add' in a Kubernetes VPP container",
        INTERFACE_TYPE_PARAM_HELP,
        "1. Clear existing traces\n2. Start packet capture\n"
        "3. Wait 15 seconds or until count is reached\n4. Display captured traces",
    ),
    _capture_tool(
        "vpp_pcap", CaptureKind.PCAP, "VPP PCAP Capture Results",
        "Capture VPP packets to pcap file by running 'vppctl pcap trace' in a Kubernetes VPP container",
        "Interface name (e.g., host-eth0) or 'any' (default: any)",
        "1. Validate the interface exists and is up\n2. Start pcap capture on tx/rx\n"
        "3. Wait 15 seconds or until count is reached\n"
        "4. Stop capture and save to /tmp/vpp-capture-<timestamp>.pcap\n5. Display capture status",
    ),
    _capture_tool(
        "vpp_dispatch", CaptureKind.DISPATCH, "VPP Dispatch Trace Results",
        "Capture VPP dispatch trace to pcap file by running 'vppctl pcap dispatch trace' in a Kubernetes VPP container",
        INTERFACE_TYPE_PARAM_HELP,
        "1. Start dispatch trace with buffer trace\n2. Wait 15 seconds or until count is reached\n"
        "3. Stop capture and save to /tmp/vpp-dispatch-<timestamp>.pcap\n4. Display capture status",
    ),
]

CATALOG: Dict[str, ToolDescriptor] = {tool.name: tool for tool in _TOOLS}

if len(CATALOG) != len(_TOOLS):
    raise RuntimeError("Duplicate tool names in catalog")


def get_descriptor(name: str) -> Optional[ToolDescriptor]:
    """Look up a tool by name."""
    return CATALOG.get(name)


def list_descriptors() -> List[ToolDescriptor]:
    """All tools in declaration order."""
    return list(CATALOG.values())
