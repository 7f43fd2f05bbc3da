"""
Tools Module - Black Box Interface

Purpose: Tool catalogue, argument parsing and result rendering
Interface: ToolDispatcher.call_tool(), list_tools(), read_resource()
Hidden: Tool-to-operation mapping, text formatting

Transports depend on this module and nothing below it.
"""

from .dispatcher import RESOURCES, TOOLS, ResourceSpec, ToolDispatcher, ToolSpec
from .formatting import format_resource, format_resource_list

__all__ = [
    "RESOURCES",
    "TOOLS",
    "ResourceSpec",
    "ToolDispatcher",
    "ToolSpec",
    "format_resource",
    "format_resource_list",
]
