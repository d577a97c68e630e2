#!/usr/bin/env python3
"""A32NX Flight Controller CLI

Main entry point for running the MCP server.

Commands:
    python cli.py                          # Serve MCP over stdio (default)
    python cli.py serve                    # Same
    python cli.py tools                    # List tool names
    python cli.py resources                # List resource URIs
    python cli.py call <tool> '<json>'     # Call one tool, print the envelope
    python cli.py read <uri>               # Read one resource, print its text
    python cli.py --test                   # Run smoke test

Options:
    --state FILE      Seed the in-memory bridge from a JSON snapshot
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

# Ensure a32nx_mcp and config are importable
sys.path.insert(0, str(Path(__file__).parent))

from a32nx_mcp.bridge import InMemoryBridge, create_bridge
from a32nx_mcp.core import dual_hash, emit_receipt, reset_receipt_counter
from a32nx_mcp.mcp.server import MCPServer


def configure_logging():
    """Send logs to stderr. stdout belongs to the stdio transport."""
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr
    )


def run_test():
    """Run smoke test - one tool call, one status query, one resource read."""
    reset_receipt_counter()

    h = dual_hash(b"test")
    assert ":" in h, "dual_hash must return SHA256:BLAKE3 format"

    server = MCPServer(InMemoryBridge())
    server.start()

    result = server.call_tool("set_autopilot_altitude", {"altitude": 12000})
    assert not result["isError"], result
    assert result["content"][0]["text"] == "Autopilot altitude set to 12000 feet"

    result = server.call_tool("get_flight_status", {"category": "autopilot"})
    assert "Target Altitude: 12000 ft" in result["content"][0]["text"]

    result = server.call_tool("set_autopilot_altitude", {"altitude": 99999})
    assert result["isError"], "Out-of-range altitude must be rejected"

    contents = server.read_resource("a32nx://checklist/normal")
    assert "preflight" in json.loads(contents["text"])

    stats = server.get_stats()
    server.stop()

    emit_receipt("test_complete", {
        "tools": stats["tools_count"],
        "resources": stats["resources_count"],
        "requests": stats["request_count"]
    }, silent=True)

    print("\n✓ All smoke tests passed\n", file=sys.stderr)
    return True


def cmd_serve(server: MCPServer):
    """Run the stdio MCP server until the client disconnects."""
    from a32nx_mcp.mcp.transport import serve
    asyncio.run(serve(server))


def cmd_tools(server: MCPServer):
    """Print tool names with descriptions."""
    for tool in server.get_tools():
        print(f"{tool['name']:32s} {tool['description']}")


def cmd_resources(server: MCPServer):
    """Print resource URIs with names."""
    for resource in server.get_resources():
        print(f"{resource['uri']:36s} {resource['name']}")


def cmd_call(server: MCPServer, tool: str, raw_args: str) -> bool:
    """Call one tool and print its envelope.

    Returns:
        True if the call succeeded
    """
    try:
        arguments = json.loads(raw_args) if raw_args else {}
    except json.JSONDecodeError as e:
        print(f"Invalid JSON arguments: {e}", file=sys.stderr)
        return False

    result = server.call_tool(tool, arguments, caller_id="cli")
    print(json.dumps(result, indent=2, ensure_ascii=False))
    return not result["isError"]


def cmd_read(server: MCPServer, uri: str):
    """Read one resource and print its text."""
    contents = server.read_resource(uri, caller_id="cli")
    print(contents["text"])


def main():
    # .env from the working directory
    load_dotenv(find_dotenv(usecwd=True))
    configure_logging()

    parser = argparse.ArgumentParser(
        description="A32NX Flight Controller MCP Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python cli.py                                      Serve over stdio
  python cli.py tools                                List tools
  python cli.py call set_flaps '{"position": 2}'     Call a tool
  python cli.py read a32nx://systems/engines         Read a resource
  python cli.py --test                               Run smoke test
        """
    )

    parser.add_argument(
        "--test", "-t",
        action="store_true",
        help="Run smoke test"
    )

    parser.add_argument(
        "--state",
        type=Path,
        metavar="FILE",
        help="JSON snapshot of variables to seed the bridge (default: $A32NX_STATE_FILE)"
    )

    parser.add_argument(
        "command",
        nargs="?",
        default="serve",
        choices=["serve", "tools", "resources", "call", "read"],
        help="Command (default: serve)"
    )

    parser.add_argument(
        "target",
        nargs="?",
        help="Tool name for call, URI for read"
    )

    parser.add_argument(
        "arguments",
        nargs="?",
        default="",
        help="JSON object of tool arguments for call"
    )

    args = parser.parse_args()

    if args.test:
        success = run_test()
        sys.exit(0 if success else 1)

    if args.command in ("call", "read") and not args.target:
        parser.error(f"{args.command} requires a target")

    server = MCPServer(create_bridge(args.state))
    server.start()

    if args.command == "serve":
        cmd_serve(server)
        return

    try:
        if args.command == "tools":
            cmd_tools(server)
        elif args.command == "resources":
            cmd_resources(server)
        elif args.command == "call":
            if not cmd_call(server, args.target, args.arguments):
                sys.exit(1)
        elif args.command == "read":
            cmd_read(server, args.target)
    finally:
        server.stop()


if __name__ == "__main__":
    main()
