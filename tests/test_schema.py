"""Tests for descriptors and the request validator."""

import pytest

from a32nx_mcp.mcp.schema import (
    NO_DEFAULT,
    SchemaNode,
    ToolDescriptor,
    ResourceDescriptor,
    validate_arguments
)
from a32nx_mcp.mcp.tools import get_tool


def _violations(tool: str, arguments) -> list[str]:
    return validate_arguments(get_tool(tool), arguments).violations


class TestSchemaNode:
    """Tests for SchemaNode construction."""

    def test_from_dict_nested(self):
        """Properties, required and items are parsed recursively."""
        node = get_tool("get_flight_data").input_schema
        assert node.type == "object"
        assert node.required == ("parameters",)
        items = node.properties["parameters"].items
        assert items.type == "string"
        assert "engine_data" in items.enum

    def test_default_sentinel(self):
        """Absent default is distinguishable from a False default."""
        speed = get_tool("set_autopilot_speed").input_schema
        assert speed.properties["is_mach"].has_default
        assert speed.properties["is_mach"].default is False
        assert speed.properties["speed"].default is NO_DEFAULT
        assert not speed.properties["speed"].has_default

    def test_frozen(self):
        """Nodes are immutable."""
        node = SchemaNode(type="number")
        with pytest.raises(AttributeError):
            node.type = "string"

    def test_properties_read_only(self):
        """The properties mapping cannot be mutated."""
        node = get_tool("set_trim").input_schema
        with pytest.raises(TypeError):
            node.properties["extra"] = SchemaNode(type="number")


class TestDescriptors:
    """Tests for tool and resource descriptors."""

    def test_tool_round_trips_catalogue_literal(self):
        """to_dict reproduces the published schema."""
        literal = {
            "name": "set_rudder_pedals",
            "description": "Control rudder pedal inputs",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "rudder_input": {"type": "number", "description": "Rudder input (-16383 to 16384)",
                                     "minimum": -16383, "maximum": 16384}
                }
            }
        }
        assert ToolDescriptor.from_dict(literal).to_dict() == literal

    def test_resource_to_dict_uses_mime_type_key(self):
        """Resources publish mimeType."""
        descriptor = ResourceDescriptor(uri="a32nx://x", name="X", description="d")
        assert descriptor.to_dict()["mimeType"] == "application/json"


class TestValidateArguments:
    """Tests for validate_arguments."""

    def test_valid(self):
        """Well-formed arguments have no violations."""
        result = validate_arguments(get_tool("set_autopilot_altitude"), {"altitude": 12000})
        assert result.is_valid

    def test_missing_required(self):
        """Missing required fields are named."""
        assert _violations("set_flight_director", {"captain": True}) == [
            "Missing required argument: first_officer"
        ]

    def test_wrong_type(self):
        """Type mismatches name the expected and actual type."""
        assert _violations("set_autopilot_master", {"engaged": "yes"}) == [
            "Invalid type for engaged: expected boolean, got str"
        ]

    def test_bool_is_not_a_number(self):
        """True is not accepted where a number is declared."""
        assert _violations("set_autopilot_heading", {"heading": True}) == [
            "Invalid type for heading: expected number, got bool"
        ]

    def test_integral_float_is_integer(self):
        """2.0 passes an integer field, 2.5 does not."""
        assert _violations("set_flaps", {"position": 2.0}) == []
        assert _violations("set_flaps", {"position": 2.5}) == [
            "Invalid type for position: expected integer, got float"
        ]

    def test_enum(self):
        """Values outside the enum are rejected."""
        assert _violations("set_engine_ignition", {"engine": 3, "ignition": "IGN_A"}) == [
            "Invalid value for engine: 3 not in [1, 2]"
        ]

    def test_range_inclusive(self):
        """Bounds are inclusive."""
        assert _violations("set_autopilot_altitude", {"altitude": 45000}) == []
        assert _violations("set_autopilot_altitude", {"altitude": 45001}) == [
            "Out of range for altitude: 45001 not in [0, 45000]"
        ]

    def test_nan_out_of_range(self):
        """NaN fails a bounded number even though it compares False to both bounds."""
        assert _violations("set_autopilot_altitude", {"altitude": float("nan")}) == [
            "Out of range for altitude: nan not in [0, 45000]"
        ]

    def test_infinity_out_of_range(self):
        """One-sided or unbounded, infinities are never valid numbers."""
        assert _violations("set_trim", {"rudder_trim": float("-inf")}) == [
            "Out of range for rudder_trim: -inf not in [-1, 1]"
        ]
        assert _violations("set_fms_waypoint", {"waypoint_id": "LFPG", "altitude": float("inf")}) == [
            "Out of range for altitude: inf is not finite"
        ]

    def test_pattern(self):
        """Transponder codes are four octal digits."""
        assert _violations("set_transponder", {"code": "7700", "mode": "ALT"}) == []
        assert _violations("set_transponder", {"code": "7800", "mode": "ALT"}) == [
            "Pattern mismatch for code: '7800' does not match ^[0-7]{4}$"
        ]

    def test_array_items(self):
        """Array items report their index."""
        assert _violations("get_flight_data", {"parameters": ["altitude", "mach"]}) == [
            "Invalid value for parameters[1]: 'mach' not in "
            "['altitude', 'speed', 'heading', 'vertical_speed', 'position', "
            "'attitude', 'engine_data', 'fuel_quantity']"
        ]

    def test_extras_tolerated(self):
        """Undeclared fields are ignored."""
        assert _violations("set_trim", {"elevator_trim": 0.1, "aileron_trim": 9}) == []

    def test_non_object_arguments(self):
        """Arguments must be a mapping."""
        assert _violations("set_trim", ["elevator_trim"]) == [
            "Invalid arguments: expected object, got list"
        ]

    def test_collects_every_violation(self):
        """All violations are reported, not just the first."""
        violations = _violations("set_fuel_pumps", {"tank": "AFT", "pump_1": 1})
        assert "Missing required argument: pump_2" in violations
        assert "Invalid value for tank: 'AFT' not in ['LEFT', 'RIGHT', 'CENTER']" in violations
        assert "Invalid type for pump_1: expected boolean, got int" in violations
