"""MCP Server Interface Module

Model Context Protocol server for the A32NX flight controller.
Exposes aircraft systems as MCP tools and resources.
"""

from .server import MCPServer, start_server, stop_server, get_server
from .tools import A32NX_TOOLS, list_tools
from .handlers import ToolName, route_tool
from .resources import A32NX_RESOURCES, list_resources

__all__ = [
    "MCPServer",
    "start_server",
    "stop_server",
    "get_server",
    "A32NX_TOOLS",
    "list_tools",
    "ToolName",
    "route_tool",
    "A32NX_RESOURCES",
    "list_resources"
]
