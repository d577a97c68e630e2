"""MCP Resources - A32NX Aircraft State

Read-only resources under the a32nx:// scheme. System resources read a
fixed batch of variables on every request; checklists are static.
"""

import json
from datetime import datetime, timezone
from typing import Callable

from config.constants import RESOURCE_MIME_TYPE, URI_SCHEME

from ..bridge import VariableBridge
from ..status import collect_flight_status, read_layout
from .schema import ResourceDescriptor


# =============================================================================
# RESOURCE DEFINITIONS
# =============================================================================

A32NX_RESOURCES = [
    {
        "uri": f"{URI_SCHEME}://flight/status",
        "name": "Flight Status",
        "description": "Complete flight status and aircraft state"
    },
    {
        "uri": f"{URI_SCHEME}://systems/autopilot",
        "name": "Autopilot System",
        "description": "Autopilot and flight management system status"
    },
    {
        "uri": f"{URI_SCHEME}://systems/engines",
        "name": "Engine Systems",
        "description": "Engine parameters and fuel system status"
    },
    {
        "uri": f"{URI_SCHEME}://systems/flight_controls",
        "name": "Flight Controls",
        "description": "Primary and secondary flight control status"
    },
    {
        "uri": f"{URI_SCHEME}://systems/navigation",
        "name": "Navigation Systems",
        "description": "Navigation, communication, and ADIRS status"
    },
    {
        "uri": f"{URI_SCHEME}://systems/aircraft_systems",
        "name": "Aircraft Systems",
        "description": "Electrical, hydraulic, pneumatic, and other systems"
    },
    {
        "uri": f"{URI_SCHEME}://checklist/normal",
        "name": "Normal Checklists",
        "description": "Standard operating procedures and checklists"
    },
    {
        "uri": f"{URI_SCHEME}://checklist/emergency",
        "name": "Emergency Checklists",
        "description": "Emergency and abnormal procedures"
    }
]

RESOURCE_DESCRIPTORS = tuple(
    ResourceDescriptor(mime_type=RESOURCE_MIME_TYPE, **r) for r in A32NX_RESOURCES
)


def list_resources() -> tuple[ResourceDescriptor, ...]:
    """All resource descriptors in catalogue order."""
    return RESOURCE_DESCRIPTORS


# =============================================================================
# READ LAYOUTS
# =============================================================================

AUTOPILOT_LAYOUT = {
    "ap_engaged": "A32NX_FMGC_AP_ENGAGED",
    "fd_1_engaged": "A32NX_FMGC_1_FD_ENGAGED",
    "fd_2_engaged": "A32NX_FMGC_2_FD_ENGAGED",
    "target_altitude": "A32NX_FCU_ALT",
    "target_heading": "A32NX_FCU_HDG",
    "target_speed": "A32NX_FCU_SPD",
    "vertical_speed": "A32NX_FCU_VS",
    "autothrust_engaged": "A32NX_AUTOTHRUST_ENGAGED"
}

ENGINES_LAYOUT = {
    "engine_1": {
        "n1": "A32NX_ENGINE_N1:1",
        "n2": "A32NX_ENGINE_N2:1",
        "egt": "A32NX_ENGINE_EGT:1",
        "fuel_flow": "A32NX_ENGINE_FF:1"
    },
    "engine_2": {
        "n1": "A32NX_ENGINE_N1:2",
        "n2": "A32NX_ENGINE_N2:2",
        "egt": "A32NX_ENGINE_EGT:2",
        "fuel_flow": "A32NX_ENGINE_FF:2"
    },
    "fuel_system": {
        "left_tank": "A32NX_FUEL_LEFT_QUANTITY",
        "right_tank": "A32NX_FUEL_RIGHT_QUANTITY",
        "center_tank": "A32NX_FUEL_CENTER_QUANTITY"
    }
}

FLIGHT_CONTROLS_LAYOUT = {
    "flaps_position": "A32NX_FLAPS_HANDLE_INDEX",
    "flaps_percent": "A32NX_FLAPS_HANDLE_PERCENT",
    "spoilers_armed": "A32NX_SPOILERS_ARMED",
    "elevator_trim": "A32NX_FLIGHT_CONTROLS_ELEVATOR_TRIM",
    "rudder_trim": "A32NX_FLIGHT_CONTROLS_RUDDER_TRIM"
}

NAVIGATION_LAYOUT = {
    "adirs_1_mode": "A32NX_ADIRS_1_MODE",
    "adirs_2_mode": "A32NX_ADIRS_2_MODE",
    "adirs_3_mode": "A32NX_ADIRS_3_MODE",
    "heading": "A32NX_ADIRS_IR_1_HEADING",
    "track": "A32NX_ADIRS_IR_1_TRACK",
    "nav_1_frequency": "A32NX_NAV_1_FREQUENCY",
    "nav_2_frequency": "A32NX_NAV_2_FREQUENCY",
    "com_1_frequency": "A32NX_COM_1_FREQUENCY",
    "com_2_frequency": "A32NX_COM_2_FREQUENCY",
    "transponder_code": "A32NX_TRANSPONDER_CODE"
}

AIRCRAFT_SYSTEMS_LAYOUT = {
    "electrical": {
        "battery_1": "A32NX_ELEC_BAT_1",
        "battery_2": "A32NX_ELEC_BAT_2",
        "generator_1": "A32NX_ELEC_GEN_1",
        "generator_2": "A32NX_ELEC_GEN_2"
    },
    "hydraulic": {
        "green_pressure": "A32NX_HYD_GREEN_SYSTEM_1_SECTION_PRESSURE",
        "blue_pressure": "A32NX_HYD_BLUE_SYSTEM_1_SECTION_PRESSURE",
        "yellow_pressure": "A32NX_HYD_YELLOW_SYSTEM_1_SECTION_PRESSURE"
    },
    "pneumatic": {
        "engine_1_bleed": "A32NX_PNEU_ENG_1_BLEED",
        "engine_2_bleed": "A32NX_PNEU_ENG_2_BLEED",
        "pack_1": "A32NX_OVHD_COND_PACK_1_PB_IS_ON",
        "pack_2": "A32NX_OVHD_COND_PACK_2_PB_IS_ON"
    }
}


# =============================================================================
# CHECKLISTS (static reference data)
# =============================================================================

NORMAL_CHECKLISTS = {
    "preflight": [
        "Battery switches - ON",
        "External power - CONNECT",
        "Fuel pumps - ON",
        "Navigation lights - ON",
        "Beacon - ON"
    ],
    "engine_start": [
        "APU - START",
        "Engine mode selector - IGN/START",
        "Engine master switches - ON",
        "Monitor engine parameters"
    ],
    "taxi": [
        "Taxi lights - ON",
        "Flight controls - CHECK",
        "Parking brake - RELEASE",
        "Taxi clearance - OBTAIN"
    ],
    "takeoff": [
        "Flaps - SET",
        "Trim - SET",
        "Autopilot - OFF",
        "Autothrust - ARM",
        "Takeoff clearance - OBTAIN"
    ]
}

EMERGENCY_CHECKLISTS = {
    "engine_failure": [
        "Autothrust - OFF",
        "Rudder - APPLY as needed",
        "Bank angle - LIMIT to 15°",
        "Altitude - MAINTAIN if possible",
        "Emergency descent - INITIATE if required"
    ],
    "fire_engine": [
        "Autothrust - OFF",
        "Engine master switch - OFF",
        "Fire handle - PULL",
        "Agent - DISCHARGE",
        "Land as soon as possible"
    ],
    "depressurization": [
        "Oxygen masks - DON",
        "Emergency descent - INITIATE",
        "Cabin altitude - MONITOR",
        "Nearest suitable airport - PROCEED"
    ]
}


# =============================================================================
# RESOURCE HANDLERS
# =============================================================================

def _timestamped(record: dict) -> dict:
    record["timestamp"] = datetime.now(timezone.utc).isoformat()
    return record


def _layout_reader(layout: dict) -> Callable[[VariableBridge], dict]:
    def reader(bridge: VariableBridge) -> dict:
        return _timestamped(read_layout(bridge, layout))
    return reader


def get_flight_status_resource(bridge: VariableBridge) -> dict:
    """The full StatusRecord."""
    return _timestamped(collect_flight_status(bridge))


def get_normal_checklists(bridge: VariableBridge) -> dict:
    return NORMAL_CHECKLISTS


def get_emergency_checklists(bridge: VariableBridge) -> dict:
    return EMERGENCY_CHECKLISTS


RESOURCE_HANDLERS: dict[str, Callable[[VariableBridge], dict]] = {
    f"{URI_SCHEME}://flight/status": get_flight_status_resource,
    f"{URI_SCHEME}://systems/autopilot": _layout_reader(AUTOPILOT_LAYOUT),
    f"{URI_SCHEME}://systems/engines": _layout_reader(ENGINES_LAYOUT),
    f"{URI_SCHEME}://systems/flight_controls": _layout_reader(FLIGHT_CONTROLS_LAYOUT),
    f"{URI_SCHEME}://systems/navigation": _layout_reader(NAVIGATION_LAYOUT),
    f"{URI_SCHEME}://systems/aircraft_systems": _layout_reader(AIRCRAFT_SYSTEMS_LAYOUT),
    f"{URI_SCHEME}://checklist/normal": get_normal_checklists,
    f"{URI_SCHEME}://checklist/emergency": get_emergency_checklists,
}


def render_resource(uri: str, data: dict) -> dict:
    """Resource contents as sent to clients."""
    return {
        "uri": uri,
        "mimeType": RESOURCE_MIME_TYPE,
        "text": json.dumps(data, indent=2, ensure_ascii=False)
    }


def register_default_resources(server):
    """Register every resource with an MCP server.

    Args:
        server: MCPServer instance
    """
    for descriptor in RESOURCE_DESCRIPTORS:
        server.register_resource(descriptor, RESOURCE_HANDLERS[descriptor.uri])
