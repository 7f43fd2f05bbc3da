"""
MCP stdio transport.

Registers the tool catalogue and the read-only resources on an MCP server
and serves them over stdin/stdout. Logging must stay on stderr while this
runs; stdout carries the protocol.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

import mcp.types as types
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from pydantic import AnyUrl

from ... import __version__
from ..tools import ToolDispatcher

logger = logging.getLogger(__name__)

SERVER_NAME = "mini-atlas-mcp-server"


def create_mcp_server(dispatcher: ToolDispatcher) -> Server:
    """Build an MCP server whose handlers delegate to the dispatcher."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [
            types.Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema())
            for tool in dispatcher.list_tools()
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> List[types.TextContent]:
        # Errors propagate; the SDK turns them into isError results
        text = await dispatcher.call_tool(name, arguments)
        return [types.TextContent(type="text", text=text)]

    @server.list_resources()
    async def list_resources() -> List[types.Resource]:
        return [
            types.Resource(
                uri=AnyUrl(resource.uri),
                name=resource.name,
                description=resource.description,
                mimeType=resource.mime_type,
            )
            for resource in dispatcher.list_resources()
        ]

    @server.read_resource()
    async def read_resource(uri: AnyUrl) -> Iterable[ReadResourceContents]:
        text = await dispatcher.read_resource(str(uri))
        return [ReadResourceContents(content=text, mime_type="application/json")]

    return server


async def run_stdio(dispatcher: ToolDispatcher) -> None:
    """Serve MCP over stdio until the client disconnects."""
    server = create_mcp_server(dispatcher)
    logger.info(f"Mini-Atlas MCP server running on stdio ({len(dispatcher.list_tools())} tools)")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
