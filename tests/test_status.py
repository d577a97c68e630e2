"""Tests for status aggregation and formatting."""

import pytest

from a32nx_mcp.bridge import InMemoryBridge, RecordingBridge
from a32nx_mcp.core import BridgeError, ValidationError
from a32nx_mcp.status import (
    STATUS_LAYOUT,
    collect_flight_status,
    format_engine_status,
    get_flight_data,
    get_status,
    render_value
)


def _variables(layout: dict) -> list[str]:
    names = []
    for source in layout.values():
        if isinstance(source, dict):
            names.extend(_variables(source))
        else:
            names.append(source)
    return names


@pytest.fixture
def cruise_bridge():
    """Engines running in cruise."""
    return RecordingBridge(InMemoryBridge({
        "A32NX_FMGC_AP_ENGAGED": True,
        "A32NX_FMGC_1_FD_ENGAGED": True,
        "A32NX_FCU_ALT": 35000,
        "A32NX_FCU_HDG": 270,
        "A32NX_FCU_SPD": 280,
        "A32NX_AUTOTHRUST_ENGAGED": True,
        "A32NX_ENGINE_N1:1": 85.5,
        "A32NX_ENGINE_N1:2": 85.0,
        "A32NX_ENGINE_EGT:1": 650,
        "A32NX_ENGINE_EGT:2": 648,
        "A32NX_GEAR_HANDLE_POSITION": False,
        "A32NX_ELEC_BAT_1": True,
        "A32NX_HYD_GREEN_SYSTEM_1_SECTION_PRESSURE": 3000
    }))


class TestRenderValue:
    """Tests for render_value."""

    def test_integral_float(self):
        assert render_value(250.0) == "250"

    def test_fractional_float(self):
        assert render_value(0.25) == "0.25"

    def test_bool(self):
        assert render_value(True) == "true"
        assert render_value(False) == "false"

    def test_omitted(self):
        assert render_value(None) == "unchanged"


class TestCollectFlightStatus:
    """Tests for the StatusRecord read batch."""

    def test_reads_full_batch_in_order(self, cruise_bridge):
        """Every layout variable is read once, in declaration order."""
        collect_flight_status(cruise_bridge)
        assert cruise_bridge.reads == _variables(STATUS_LAYOUT)

    def test_record_fully_populated(self, cruise_bridge):
        """No field of the record is None."""
        status = collect_flight_status(cruise_bridge)
        assert status["systems"]["hydraulic"]["green_pressure"] == 3000
        assert None not in [status[s][f] for s in ("autopilot", "engines") for f in status[s]]

    def test_missing_value_is_error(self):
        """A bridge returning None fails the read."""
        bridge = InMemoryBridge({"A32NX_FCU_HDG": None})
        with pytest.raises(BridgeError, match="No value for A32NX_FCU_HDG"):
            collect_flight_status(bridge)


class TestGetStatus:
    """Tests for get_status."""

    def test_same_batch_for_every_category(self, cruise_bridge):
        """engines and all issue the identical read batch."""
        get_status(cruise_bridge, "engines")
        engines_reads = list(cruise_bridge.reads)
        cruise_bridge.reset()
        get_status(cruise_bridge, "all")
        assert cruise_bridge.reads == engines_reads

    def test_engine_section_identical(self, cruise_bridge):
        """Engine lines in the full report match the engines report."""
        engines_text = get_status(cruise_bridge, "engines")
        full_text = get_status(cruise_bridge, "all")

        engine_lines = engines_text.split("\n")[1:]
        section = next(s for s in full_text.split("\n\n") if s.startswith("ENGINES:"))
        assert section.split("\n")[1:] == engine_lines

    def test_engines_text(self, cruise_bridge):
        assert get_status(cruise_bridge, "engines") == (
            "Engine System:\n"
            "  Engine 1 N1: 85.5%\n"
            "  Engine 2 N1: 85%\n"
            "  Engine 1 EGT: 650°C\n"
            "  Engine 2 EGT: 648°C"
        )

    def test_autopilot_text(self, cruise_bridge):
        assert get_status(cruise_bridge, "autopilot") == (
            "Autopilot System:\n"
            "  AP Engaged: YES\n"
            "  FD 1: ON\n"
            "  Target Altitude: 35000 ft\n"
            "  Target Heading: 270°\n"
            "  Target Speed: 280 kts\n"
            "  Autothrust: ON"
        )

    def test_flight_controls_text(self, cruise_bridge):
        text = get_status(cruise_bridge, "flight_controls")
        assert text.startswith("Flight Controls:")
        assert "  Landing Gear: UP" in text

    def test_navigation_text(self, cruise_bridge):
        assert get_status(cruise_bridge, "navigation").split("\n")[0] == "Navigation:"

    def test_systems_text(self, cruise_bridge):
        text = get_status(cruise_bridge, "systems")
        assert "  Electrical: BAT1=ON, BAT2=OFF" in text
        assert "  Hydraulic: GREEN=3000PSI, BLUE=0PSI" in text

    def test_full_report_sections(self, cruise_bridge):
        text = get_status(cruise_bridge, "all")
        sections = [s.split("\n")[0] for s in text.split("\n\n")]
        assert sections == [
            "A32NX Flight Status:", "AUTOPILOT:", "ENGINES:", "FLIGHT CONTROLS:",
            "NAVIGATION:", "SYSTEMS:"
        ]
        assert "  Target Alt: 35000" in text
        assert "  Gear: UP" in text

    @pytest.mark.parametrize("category", ["fuel", "hydraulics", "electrical"])
    def test_unformatted_categories_fall_back(self, cruise_bridge, category):
        """Categories without a formatter render the full report."""
        assert get_status(cruise_bridge, category) == get_status(cruise_bridge, "all")

    def test_format_engine_status_direct(self):
        text = format_engine_status({
            "engine_1_n1": 20.0, "engine_2_n1": 21.0,
            "engine_1_egt": 400, "engine_2_egt": 401
        })
        assert "  Engine 2 N1: 21%" in text


class TestGetFlightData:
    """Tests for get_flight_data."""

    def test_exact_keys(self, cruise_bridge):
        """Only requested parameters are returned and read."""
        data = get_flight_data(cruise_bridge, ["altitude", "speed"])
        assert set(data) == {"altitude", "speed"}
        assert cruise_bridge.reads == [
            "A32NX_ADIRS_ADR_1_ALTITUDE",
            "A32NX_ADIRS_ADR_1_COMPUTED_AIRSPEED"
        ]

    def test_grouped_parameters(self, cruise_bridge):
        data = get_flight_data(cruise_bridge, ["engine_data", "fuel_quantity", "position", "attitude"])
        assert data["engine_data"]["engine_1_n1"] == 85.5
        assert set(data["fuel_quantity"]) == {"left_tank", "right_tank", "center_tank"}
        assert set(data["position"]) == {"latitude", "longitude"}
        assert set(data["attitude"]) == {"pitch", "bank"}
        assert len(cruise_bridge.reads) == 4 + 3 + 2 + 2

    def test_duplicates_read_once(self, cruise_bridge):
        get_flight_data(cruise_bridge, ["heading", "heading"])
        assert cruise_bridge.reads == ["A32NX_ADIRS_IR_1_HEADING"]

    def test_empty_request(self, cruise_bridge):
        assert get_flight_data(cruise_bridge, []) == {}
        assert cruise_bridge.reads == []

    def test_unknown_parameter(self, cruise_bridge):
        with pytest.raises(ValidationError, match="Unknown flight data parameter: mach"):
            get_flight_data(cruise_bridge, ["mach"])
