"""A32NX Flight Controller - MCP server for the FlyByWire A32NX

This package exposes the aircraft's autopilot, flight controls, engines,
navigation and systems as Model Context Protocol tools and resources,
backed by a key-value bridge to simulator variables.

Core Components:
- core: Foundation functions (dual_hash, emit_receipt, error taxonomy)
- bridge: Variable bridge interface and in-memory implementation
- status: Status aggregation and text formatting
- mcp: Tool catalogue, dispatcher, resources, server and stdio transport
"""

__version__ = "2.0.0"
__author__ = "A32NX Flight Controller Team"

from .core import dual_hash, emit_receipt, StopRule, DispatchError
