"""
Catalog Module - Black Box Interface

Purpose: Declare every tool and the commands behind them
Interface: get_descriptor(), list_descriptors(), bind_parameters(),
           render_command(), resolve_input_node(), parse_up_interfaces()
Hidden: Descriptor table, description text, interface-type table

The catalog is read-only after import.
"""

from .descriptors import (
    BoundParameters,
    ParameterSpec,
    ToolDescriptor,
    bind_parameters,
    render_command,
)
from .interfaces import (
    INTERFACE_TYPE_HELP,
    INTERFACE_TYPES,
    InputNode,
    map_interface_type,
    parse_up_interfaces,
    parse_uplink_driver,
    resolve_input_node,
)
from .tools import CATALOG, get_descriptor, list_descriptors

__all__ = [
    "BoundParameters",
    "CATALOG",
    "INTERFACE_TYPE_HELP",
    "INTERFACE_TYPES",
    "InputNode",
    "ParameterSpec",
    "ToolDescriptor",
    "bind_parameters",
    "get_descriptor",
    "list_descriptors",
    "map_interface_type",
    "parse_up_interfaces",
    "parse_uplink_driver",
    "render_command",
    "resolve_input_node",
]
