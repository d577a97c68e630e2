"""Status Aggregator & Formatter

Turns a fixed batch of bridge reads into a nested StatusRecord and renders
it as the text report returned by get_flight_status. Also serves the
per-parameter reads behind get_flight_data.

The text layout (field order, units, ON/OFF vs YES/NO) is consumed by
clients that parse it. Keep it byte-stable.
"""

from typing import Any

from config.constants import UNCHANGED

from .bridge import VariableBridge
from .core import BridgeError, ValidationError


# =============================================================================
# READ LAYOUTS
# =============================================================================

# Field -> variable name, nested dicts become nested records. Read in
# declaration order.
STATUS_LAYOUT = {
    "autopilot": {
        "ap_engaged": "A32NX_FMGC_AP_ENGAGED",
        "fd_1_engaged": "A32NX_FMGC_1_FD_ENGAGED",
        "target_altitude": "A32NX_FCU_ALT",
        "target_heading": "A32NX_FCU_HDG",
        "target_speed": "A32NX_FCU_SPD",
        "autothrust_engaged": "A32NX_AUTOTHRUST_ENGAGED"
    },
    "engines": {
        "engine_1_n1": "A32NX_ENGINE_N1:1",
        "engine_2_n1": "A32NX_ENGINE_N1:2",
        "engine_1_egt": "A32NX_ENGINE_EGT:1",
        "engine_2_egt": "A32NX_ENGINE_EGT:2"
    },
    "flight_controls": {
        "flaps_position": "A32NX_FLAPS_HANDLE_INDEX",
        "spoilers_armed": "A32NX_SPOILERS_ARMED",
        "gear_down": "A32NX_GEAR_HANDLE_POSITION"
    },
    "navigation": {
        "heading": "A32NX_ADIRS_IR_1_HEADING",
        "altitude": "A32NX_ADIRS_ADR_1_ALTITUDE",
        "speed": "A32NX_ADIRS_ADR_1_COMPUTED_AIRSPEED"
    },
    "systems": {
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
            "wing_anti_ice": "A32NX_PNEU_WING_ANTI_ICE"
        }
    }
}

FLIGHT_DATA_LAYOUT = {
    "altitude": "A32NX_ADIRS_ADR_1_ALTITUDE",
    "speed": "A32NX_ADIRS_ADR_1_COMPUTED_AIRSPEED",
    "heading": "A32NX_ADIRS_IR_1_HEADING",
    "vertical_speed": "A32NX_ADIRS_ADR_1_VERTICAL_SPEED",
    "position": {
        "latitude": "A32NX_ADIRS_IR_1_LATITUDE",
        "longitude": "A32NX_ADIRS_IR_1_LONGITUDE"
    },
    "attitude": {
        "pitch": "A32NX_ADIRS_IR_1_PITCH",
        "bank": "A32NX_ADIRS_IR_1_ROLL"
    },
    "engine_data": {
        "engine_1_n1": "A32NX_ENGINE_N1:1",
        "engine_2_n1": "A32NX_ENGINE_N1:2",
        "engine_1_egt": "A32NX_ENGINE_EGT:1",
        "engine_2_egt": "A32NX_ENGINE_EGT:2"
    },
    "fuel_quantity": {
        "left_tank": "A32NX_FUEL_LEFT_QUANTITY",
        "right_tank": "A32NX_FUEL_RIGHT_QUANTITY",
        "center_tank": "A32NX_FUEL_CENTER_QUANTITY"
    }
}


def read_variable(bridge: VariableBridge, name: str) -> Any:
    """Read one variable, refusing a missing value.

    Raises:
        BridgeError: If the bridge returns None
    """
    value = bridge.get(name)
    if value is None:
        raise BridgeError(f"No value for {name}", variable=name)
    return value


def read_layout(bridge: VariableBridge, layout: dict) -> dict:
    """Read every variable in a layout, preserving its nesting.

    Args:
        bridge: Variable bridge
        layout: Mapping of field -> variable name or nested layout

    Returns:
        Record with the same keys as the layout, fully populated
    """
    record = {}
    for field, source in layout.items():
        if isinstance(source, dict):
            record[field] = read_layout(bridge, source)
        else:
            record[field] = read_variable(bridge, source)
    return record


def collect_flight_status(bridge: VariableBridge) -> dict:
    """Issue the full status read batch. Never cached."""
    return read_layout(bridge, STATUS_LAYOUT)


def get_flight_data(bridge: VariableBridge, parameters: list[str]) -> dict:
    """Read only the requested flight data parameters.

    Args:
        bridge: Variable bridge
        parameters: Names from FLIGHT_DATA_LAYOUT

    Returns:
        Record containing exactly the requested keys

    Raises:
        ValidationError: If a parameter name is not known
    """
    unknown = [p for p in parameters if p not in FLIGHT_DATA_LAYOUT]
    if unknown:
        raise ValidationError([f"Unknown flight data parameter: {p}" for p in unknown])

    data = {}
    for param in parameters:
        if param in data:
            continue
        source = FLIGHT_DATA_LAYOUT[param]
        if isinstance(source, dict):
            data[param] = read_layout(bridge, source)
        else:
            data[param] = read_variable(bridge, source)
    return data


# =============================================================================
# VALUE RENDERING
# =============================================================================

def render_value(value: Any) -> str:
    """Render a value the way the simulator's text protocol prints it.

    Integral floats drop the decimal part, booleans print lowercase and an
    omitted (None) argument prints as "unchanged".
    """
    if value is None:
        return UNCHANGED
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def on_off(value: Any) -> str:
    return "ON" if value else "OFF"


def yes_no(value: Any) -> str:
    return "YES" if value else "NO"


def down_up(value: Any) -> str:
    return "DOWN" if value else "UP"


# =============================================================================
# FORMATTERS
# =============================================================================

def _engine_lines(engines: dict) -> list[str]:
    return [
        f"  Engine 1 N1: {render_value(engines['engine_1_n1'])}%",
        f"  Engine 2 N1: {render_value(engines['engine_2_n1'])}%",
        f"  Engine 1 EGT: {render_value(engines['engine_1_egt'])}°C",
        f"  Engine 2 EGT: {render_value(engines['engine_2_egt'])}°C"
    ]


def _navigation_lines(navigation: dict) -> list[str]:
    return [
        f"  Heading: {render_value(navigation['heading'])}°",
        f"  Altitude: {render_value(navigation['altitude'])} ft",
        f"  Speed: {render_value(navigation['speed'])} kts"
    ]


def _systems_lines(systems: dict) -> list[str]:
    electrical = systems["electrical"]
    hydraulic = systems["hydraulic"]
    pneumatic = systems["pneumatic"]
    return [
        f"  Electrical: BAT1={on_off(electrical['battery_1'])}, "
        f"BAT2={on_off(electrical['battery_2'])}",
        f"  Hydraulic: GREEN={render_value(hydraulic['green_pressure'])}PSI, "
        f"BLUE={render_value(hydraulic['blue_pressure'])}PSI",
        f"  Pneumatic: ENG1={on_off(pneumatic['engine_1_bleed'])}, "
        f"ENG2={on_off(pneumatic['engine_2_bleed'])}"
    ]


def format_autopilot_status(autopilot: dict) -> str:
    return "\n".join([
        "Autopilot System:",
        f"  AP Engaged: {yes_no(autopilot['ap_engaged'])}",
        f"  FD 1: {on_off(autopilot['fd_1_engaged'])}",
        f"  Target Altitude: {render_value(autopilot['target_altitude'])} ft",
        f"  Target Heading: {render_value(autopilot['target_heading'])}°",
        f"  Target Speed: {render_value(autopilot['target_speed'])} kts",
        f"  Autothrust: {on_off(autopilot['autothrust_engaged'])}"
    ])


def format_engine_status(engines: dict) -> str:
    return "\n".join(["Engine System:"] + _engine_lines(engines))


def format_flight_controls_status(flight_controls: dict) -> str:
    return "\n".join([
        "Flight Controls:",
        f"  Flaps Position: {render_value(flight_controls['flaps_position'])}",
        f"  Spoilers Armed: {yes_no(flight_controls['spoilers_armed'])}",
        f"  Landing Gear: {down_up(flight_controls['gear_down'])}"
    ])


def format_navigation_status(navigation: dict) -> str:
    return "\n".join(["Navigation:"] + _navigation_lines(navigation))


def format_systems_status(systems: dict) -> str:
    return "\n".join(["Aircraft Systems:"] + _systems_lines(systems))


def format_all_flight_status(status: dict) -> str:
    """Render every section of the StatusRecord."""
    autopilot = status["autopilot"]
    flight_controls = status["flight_controls"]

    sections = [
        "A32NX Flight Status:",
        "\n".join([
            "AUTOPILOT:",
            f"  AP Engaged: {yes_no(autopilot['ap_engaged'])}",
            f"  FD 1: {on_off(autopilot['fd_1_engaged'])}",
            f"  Target Alt: {render_value(autopilot['target_altitude'])}",
            f"  Target Hdg: {render_value(autopilot['target_heading'])}",
            f"  Target Spd: {render_value(autopilot['target_speed'])}",
            f"  A/THR: {on_off(autopilot['autothrust_engaged'])}"
        ]),
        "\n".join(["ENGINES:"] + _engine_lines(status["engines"])),
        "\n".join([
            "FLIGHT CONTROLS:",
            f"  Flaps: {render_value(flight_controls['flaps_position'])}",
            f"  Spoilers Armed: {yes_no(flight_controls['spoilers_armed'])}",
            f"  Gear: {down_up(flight_controls['gear_down'])}"
        ]),
        "\n".join(["NAVIGATION:"] + _navigation_lines(status["navigation"])),
        "\n".join(["SYSTEMS:"] + _systems_lines(status["systems"]))
    ]
    return "\n\n".join(sections)


# category -> (StatusRecord key, formatter)
CATEGORY_FORMATTERS = {
    "autopilot": ("autopilot", format_autopilot_status),
    "engines": ("engines", format_engine_status),
    "flight_controls": ("flight_controls", format_flight_controls_status),
    "navigation": ("navigation", format_navigation_status),
    "systems": ("systems", format_systems_status)
}


def get_status(bridge: VariableBridge, category: str) -> str:
    """Render flight status for one category.

    The full read batch runs regardless of category. "all" and any
    category without its own formatter render the full report.

    Args:
        bridge: Variable bridge
        category: Status category

    Returns:
        Human-readable status text
    """
    status = collect_flight_status(bridge)

    if category in CATEGORY_FORMATTERS:
        key, formatter = CATEGORY_FORMATTERS[category]
        return formatter(status[key])

    return format_all_flight_status(status)
