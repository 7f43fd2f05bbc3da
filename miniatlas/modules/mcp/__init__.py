"""
MCP Module - Black Box Interface

Purpose: Serve the tool catalogue over the MCP stdio transport
Interface: create_mcp_server(), run_stdio()
Hidden: MCP SDK handler registration

The HTTP transport lives in miniatlas.main; both share ToolDispatcher.
"""

from .server import create_mcp_server, run_stdio

__all__ = ["create_mcp_server", "run_stdio"]
