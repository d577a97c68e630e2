"""MCP stdio transport

Binds an MCPServer to the `mcp` SDK's low-level Server and runs it over
stdio. stdout carries protocol frames only; logs go to stderr.
"""

import logging
from typing import Any, Optional

from mcp import types
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server

from config.constants import SERVER_NAME, SERVER_VERSION

from .server import MCPServer, start_server

logger = logging.getLogger(__name__)


class SDKAdapter:
    """Translates between SDK request types and MCPServer calls."""

    def __init__(self, core: MCPServer, caller_id: str = "stdio"):
        self.core = core
        self.caller_id = caller_id

    async def list_tools(self) -> list[types.Tool]:
        return [
            types.Tool(
                name=d.name,
                description=d.description,
                inputSchema=d.input_schema.to_dict()
            )
            for d in self.core.list_tool_descriptors()
        ]

    async def call_tool(self, name: str, arguments: Optional[dict[str, Any]]) -> types.CallToolResult:
        envelope = self.core.call_tool(name, arguments, caller_id=self.caller_id)
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=c["text"]) for c in envelope["content"]],
            isError=envelope["isError"]
        )

    async def list_resources(self) -> list[types.Resource]:
        return [
            types.Resource(
                uri=d.uri,
                name=d.name,
                description=d.description,
                mimeType=d.mime_type
            )
            for d in self.core.list_resource_descriptors()
        ]

    async def read_resource(self, uri: Any) -> list[ReadResourceContents]:
        # The SDK hands over a pydantic AnyUrl
        contents = self.core.read_resource(str(uri), caller_id=self.caller_id)
        return [ReadResourceContents(content=contents["text"], mime_type=contents["mimeType"])]


def create_server(core: Optional[MCPServer] = None) -> Server:
    """Build an SDK Server whose handlers delegate to an MCPServer.

    Args:
        core: Started MCPServer; defaults to the global one

    Returns:
        SDK Server ready to run on any transport
    """
    if core is None:
        core = start_server()

    adapter = SDKAdapter(core)
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    server.list_tools()(adapter.list_tools)
    # Arguments are validated by MCPServer so errors keep one format
    server.call_tool(validate_input=False)(adapter.call_tool)
    server.list_resources()(adapter.list_resources)
    server.read_resource()(adapter.read_resource)

    return server


async def serve(core: Optional[MCPServer] = None):
    """Run the server on stdio until the client disconnects."""
    if core is None:
        core = start_server()

    server = create_server(core)
    logger.info("A32NX MCP server running on stdio")

    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        core.stop()
