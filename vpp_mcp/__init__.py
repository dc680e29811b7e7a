"""
VPP MCP Server - Calico/VPP debugging over the Model Context Protocol

Relays MCP tool calls to vppctl and gobgp running inside Calico/VPP pods.

Architecture:
- Each module is self-contained with clear interfaces
- Modules communicate only through their public interfaces
- Components receive their collaborators (and loggers) at construction

Modules:
- api: Shared request/response shapes and the error taxonomy
- executor: Subprocess execution with bounded timeouts
- inventory: Live cluster lookups (nodes, config maps)
- catalog: Static tool table and interface-type mapping
- dispatch: Tool call validation, execution and formatting
- capture: Timed packet capture sequences
- mcp: MCP protocol bindings (stdio and HTTP/SSE)
"""

__version__ = "1.0.0"
