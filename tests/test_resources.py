"""Tests for MCP resources."""

import json
from datetime import datetime

import pytest

from a32nx_mcp.core import UnknownResource
from a32nx_mcp.mcp.resources import A32NX_RESOURCES, RESOURCE_HANDLERS, list_resources
from a32nx_mcp.mcp.server import MCPServer


def read_contents(uri: str, bridge) -> dict:
    server = MCPServer(bridge)
    server.start()
    try:
        return server.read_resource(uri)
    finally:
        server.stop()


def read(uri: str, bridge) -> dict:
    return json.loads(read_contents(uri, bridge)["text"])


class TestResourceCatalogue:
    """Tests for resource descriptors."""

    def test_eight_resources(self):
        assert len(list_resources()) == 8

    def test_every_descriptor_routed(self):
        assert [d.uri for d in list_resources()] == list(RESOURCE_HANDLERS)

    def test_json_mime_type(self):
        for descriptor in list_resources():
            assert descriptor.to_dict()["mimeType"] == "application/json"

    def test_names(self):
        assert [r["name"] for r in A32NX_RESOURCES] == [
            "Flight Status", "Autopilot System", "Engine Systems", "Flight Controls",
            "Navigation Systems", "Aircraft Systems", "Normal Checklists", "Emergency Checklists"
        ]


class TestSystemResources:
    """Tests for live system resources."""

    def test_envelope(self, bridge):
        contents = read_contents("a32nx://systems/autopilot", bridge)
        assert contents["uri"] == "a32nx://systems/autopilot"
        assert contents["mimeType"] == "application/json"
        assert contents["text"].startswith("{\n  ")

    def test_trailing_timestamp(self, bridge):
        """System resources end with a UTC ISO timestamp."""
        data = read("a32nx://systems/navigation", bridge)
        assert list(data)[-1] == "timestamp"
        assert datetime.fromisoformat(data["timestamp"]).utcoffset().total_seconds() == 0

    def test_flight_status(self, bridge):
        data = read("a32nx://flight/status", bridge)
        assert set(data) == {
            "autopilot", "engines", "flight_controls", "navigation", "systems", "timestamp"
        }

    def test_autopilot(self, bridge):
        bridge.set("A32NX_FCU_VS", -800)
        data = read("a32nx://systems/autopilot", bridge)
        assert data["vertical_speed"] == -800
        assert data["fd_2_engaged"] is False

    def test_engines(self, bridge):
        data = read("a32nx://systems/engines", bridge)
        assert set(data["engine_1"]) == {"n1", "n2", "egt", "fuel_flow"}
        assert data["fuel_system"]["left_tank"] == 2500

    def test_flight_controls(self, bridge):
        data = read("a32nx://systems/flight_controls", bridge)
        assert "flaps_percent" in data and "rudder_trim" in data

    def test_navigation(self, bridge):
        data = read("a32nx://systems/navigation", bridge)
        assert data["transponder_code"] == "2000"
        assert data["adirs_3_mode"] == "OFF"

    def test_aircraft_systems(self, bridge):
        data = read("a32nx://systems/aircraft_systems", bridge)
        assert set(data["pneumatic"]) == {"engine_1_bleed", "engine_2_bleed", "pack_1", "pack_2"}

    def test_reflects_writes(self, bridge):
        """Nothing is cached between reads."""
        read("a32nx://systems/engines", bridge)
        bridge.set("A32NX_ENGINE_N1:1", 22.5)
        assert read("a32nx://systems/engines", bridge)["engine_1"]["n1"] == 22.5


class TestChecklists:
    """Tests for static checklists."""

    def test_normal_no_reads(self, recording_bridge):
        """Checklists never touch the bridge."""
        first = read_contents("a32nx://checklist/normal", recording_bridge)
        second = read_contents("a32nx://checklist/normal", recording_bridge)
        assert first == second
        assert recording_bridge.calls == []

    def test_normal_content(self, bridge):
        data = read("a32nx://checklist/normal", bridge)
        assert list(data) == ["preflight", "engine_start", "taxi", "takeoff"]
        assert data["preflight"][0] == "Battery switches - ON"
        assert "timestamp" not in data

    def test_emergency_content(self, bridge):
        data = read("a32nx://checklist/emergency", bridge)
        assert "Bank angle - LIMIT to 15°" in data["engine_failure"]
        assert list(data) == ["engine_failure", "fire_engine", "depressurization"]

    def test_degree_sign_not_escaped(self, bridge):
        text = read_contents("a32nx://checklist/emergency", bridge)["text"]
        assert "15°" in text


class TestUnknownResource:
    """Tests for unrouted URIs."""

    def test_unknown_uri(self, bridge):
        with pytest.raises(UnknownResource, match="Unknown resource: a32nx://systems/fuel"):
            read_contents("a32nx://systems/fuel", bridge)
