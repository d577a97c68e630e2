"""MCP Server Implementation

Registry + dispatch core for the A32NX flight controller. Transport-free:
the stdio transport in transport.py and the CLI both drive this class.

Tool calls never raise. Every failure becomes an isError envelope.
Resource reads raise, and the transport reports the failure.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from config.constants import SLO_MCP_RESOURCE_MS, SLO_MCP_TOOL_MS
from config.features import get_all_features, is_feature_enabled

from ..bridge import VariableBridge, create_bridge
from ..core import UnknownResource, UnknownTool, emit_latency_anomaly, emit_receipt
from .handlers import invoke, register_default_tools, route_tool
from .resources import register_default_resources, render_resource
from .schema import ResourceDescriptor, ToolDescriptor

logger = logging.getLogger(__name__)


def text_envelope(text: str, is_error: bool = False) -> dict:
    """Tool result envelope: one text content item."""
    return {
        "content": [{"type": "text", "text": text}],
        "isError": is_error
    }


class MCPServer:
    """MCP Server for the A32NX flight controller.

    Provides:
    - Tool invocation with schema validation and an error boundary
    - Resource reads of live variables and static checklists
    - One audit receipt per request
    """

    def __init__(self, bridge: Optional[VariableBridge] = None):
        self.bridge = bridge if bridge is not None else create_bridge()
        self._running = False
        self._tools: Dict[str, dict] = {}
        self._resources: Dict[str, dict] = {}
        self._request_count = 0
        self._start_time: Optional[str] = None

    def start(self):
        """Start the MCP server.

        Raises:
            StopRule: If the tool catalogue and routing table disagree
        """
        register_default_tools(self)
        register_default_resources(self)

        self._running = True
        self._start_time = datetime.now(timezone.utc).isoformat()
        logger.info("MCP server started with %d tools, %d resources",
                    len(self._tools), len(self._resources))

        emit_receipt("system_event", {
            "event_type": "mcp_server_start",
            "tools_registered": list(self._tools.keys()),
            "resources_registered": list(self._resources.keys()),
            "features": get_all_features()
        }, silent=True)

    def stop(self):
        """Stop the MCP server."""
        self._running = False
        logger.info("MCP server stopped after %d requests", self._request_count)

        emit_receipt("system_event", {
            "event_type": "mcp_server_stop",
            "requests_handled": self._request_count,
            "uptime_since": self._start_time
        }, silent=True)

    def is_running(self) -> bool:
        """Check if server is running."""
        return self._running

    def register_tool(self, descriptor: ToolDescriptor, handler: Callable):
        """Register a tool handler.

        Args:
            descriptor: Tool name, description and input schema
            handler: Callable (bridge, args) -> message text
        """
        self._tools[descriptor.name] = {
            "descriptor": descriptor,
            "handler": handler
        }

    def register_resource(self, descriptor: ResourceDescriptor, handler: Callable):
        """Register a resource handler.

        Args:
            descriptor: Resource URI, name and description
            handler: Callable (bridge) -> JSON-serializable record
        """
        self._resources[descriptor.uri] = {
            "descriptor": descriptor,
            "handler": handler
        }

    # =========================================================================
    # TOOLS
    # =========================================================================

    def call_tool(self, name: str, arguments: Any = None,
                  caller_id: str = "unknown") -> dict:
        """Invoke a tool behind the error boundary.

        Args:
            name: Tool name
            arguments: Tool arguments (None means no arguments)
            caller_id: Caller identifier for the audit receipt

        Returns:
            Result envelope {"content": [...], "isError": bool}
        """
        if arguments is None:
            arguments = {}

        start_time = time.perf_counter()
        self._request_count += 1

        try:
            envelope = text_envelope(self.dispatch_tool(name, arguments))
        except Exception as e:
            logger.warning("Tool %s failed: %s", name, e)
            envelope = text_envelope(f"Error executing {name}: {e}", is_error=True)

        latency_ms = (time.perf_counter() - start_time) * 1000
        self._audit(name, caller_id, arguments, envelope, not envelope["isError"], latency_ms)
        emit_latency_anomaly(f"mcp_tool_{name}", SLO_MCP_TOOL_MS, latency_ms)

        return envelope

    def dispatch_tool(self, name: str, arguments: Any) -> str:
        """Route, validate and run one tool call without the error boundary.

        Raises:
            UnknownTool: If the name is not in the closed tool set
            ValidationError: If arguments fail the input schema
            BridgeError: If a variable write fails
        """
        tool = route_tool(name)
        if tool.value not in self._tools:
            raise UnknownTool(name)

        entry = self._tools[tool.value]
        return invoke(entry["descriptor"], entry["handler"], arguments, self.bridge)

    # =========================================================================
    # RESOURCES
    # =========================================================================

    def read_resource(self, uri: str, caller_id: str = "unknown") -> dict:
        """Read a resource.

        Args:
            uri: Resource URI
            caller_id: Caller identifier for the audit receipt

        Returns:
            Dict with uri, mimeType and JSON text

        Raises:
            UnknownResource: If the URI is not registered
            BridgeError: If a variable read fails
        """
        start_time = time.perf_counter()
        self._request_count += 1

        try:
            if uri not in self._resources:
                raise UnknownResource(uri)
            contents = render_resource(uri, self._resources[uri]["handler"](self.bridge))
        except Exception as e:
            latency_ms = (time.perf_counter() - start_time) * 1000
            logger.warning("Resource %s failed: %s", uri, e)
            self._audit(uri, caller_id, {}, {"error": str(e)}, False, latency_ms)
            raise

        latency_ms = (time.perf_counter() - start_time) * 1000
        self._audit(uri, caller_id, {}, {"mimeType": contents["mimeType"]}, True, latency_ms)
        emit_latency_anomaly("mcp_resource", SLO_MCP_RESOURCE_MS, latency_ms)

        return contents

    def _audit(self, name: str, caller_id: str, inputs: Any,
               outputs: dict, success: bool, latency_ms: float):
        """Emit MCP request receipt."""
        if not is_feature_enabled("FEATURE_MCP_RECEIPTS_ENABLED"):
            return

        emit_receipt("mcp", {
            "tool_or_resource": name,
            "caller_id": caller_id,
            "inputs": inputs,
            "outputs": outputs,
            "success": success,
            "latency_ms": latency_ms
        }, silent=True)

    # =========================================================================
    # INTROSPECTION
    # =========================================================================

    def list_tool_descriptors(self) -> List[ToolDescriptor]:
        """Registered tool descriptors, in registration order."""
        return [info["descriptor"] for info in self._tools.values()]

    def list_resource_descriptors(self) -> List[ResourceDescriptor]:
        """Registered resource descriptors, in registration order."""
        return [info["descriptor"] for info in self._resources.values()]

    def get_tools(self) -> List[dict]:
        """Get list of available tools.

        Returns:
            List of tool definitions as published to clients
        """
        return [d.to_dict() for d in self.list_tool_descriptors()]

    def get_resources(self) -> List[dict]:
        """Get list of available resources.

        Returns:
            List of resource definitions as published to clients
        """
        return [d.to_dict() for d in self.list_resource_descriptors()]

    def get_stats(self) -> dict:
        """Get server statistics.

        Returns:
            Stats dict
        """
        return {
            "running": self._running,
            "start_time": self._start_time,
            "request_count": self._request_count,
            "tools_count": len(self._tools),
            "resources_count": len(self._resources)
        }


# =============================================================================
# MODULE-LEVEL INTERFACE
# =============================================================================

_mcp_server: Optional[MCPServer] = None


def get_server(bridge: Optional[VariableBridge] = None) -> MCPServer:
    """Get the global MCP server instance.

    Args:
        bridge: Bridge for a newly created server; ignored once one exists
    """
    global _mcp_server
    if _mcp_server is None:
        _mcp_server = MCPServer(bridge)
    return _mcp_server


def start_server(bridge: Optional[VariableBridge] = None) -> MCPServer:
    """Start the global MCP server.

    Returns:
        The running server
    """
    server = get_server(bridge)
    if not server.is_running():
        server.start()
    return server


def stop_server():
    """Stop and discard the global MCP server."""
    global _mcp_server
    if _mcp_server is not None and _mcp_server.is_running():
        _mcp_server.stop()
    _mcp_server = None

