"""
Dispatch Module - Black Box Interface

Purpose: Turn a tool call into a command and its result into text
Interface: Dispatcher.dispatch(tool_name, arguments) -> ToolResponse
Hidden: Descriptor lookup, argument binding, response formatting
"""

from .dispatcher import Dispatcher

__all__ = ["Dispatcher"]
