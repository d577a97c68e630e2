"""Pytest configuration and fixtures for A32NX flight controller tests."""

import os
import sys
import tempfile
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Set test environment
os.environ["RECEIPTS_FILE"] = str(Path(tempfile.gettempdir()) / "test_a32nx_receipts.jsonl")
os.environ.pop("A32NX_STATE_FILE", None)


@pytest.fixture(autouse=True)
def reset_state():
    """Reset global state before each test."""
    from a32nx_mcp.core import reset_receipt_counter
    from a32nx_mcp.mcp.server import stop_server

    reset_receipt_counter()

    # Clear receipts file
    receipts_path = Path(os.environ.get("RECEIPTS_FILE", "receipts.jsonl"))
    if receipts_path.exists():
        receipts_path.unlink()

    yield

    stop_server()

    # Cleanup after test
    if receipts_path.exists():
        receipts_path.unlink()


@pytest.fixture
def bridge():
    """Fresh in-memory bridge seeded with the default state."""
    from a32nx_mcp.bridge import InMemoryBridge
    return InMemoryBridge()


@pytest.fixture
def recording_bridge(bridge):
    """Journaling bridge over a fresh in-memory bridge."""
    from a32nx_mcp.bridge import RecordingBridge
    return RecordingBridge(bridge)


@pytest.fixture
def mcp_server(recording_bridge):
    """Started MCP server over a recording bridge, stopped after the test."""
    from a32nx_mcp.mcp.server import MCPServer
    server = MCPServer(recording_bridge)
    server.start()
    yield server
    server.stop()


@pytest.fixture
def anyio_backend():
    """Run async tests on asyncio only."""
    return "asyncio"
