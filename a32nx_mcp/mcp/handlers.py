"""MCP Tool Handlers - A32NX Flight Controller

One handler per catalogue tool. Every handler has the same shape:
`handler(bridge, args) -> str`, where args has already passed
validate_arguments() and carries the schema defaults.

Handlers only write variables for arguments the caller supplied. They
never read back what they wrote.
"""

import json
import logging
import math
from enum import Enum
from typing import Any, Callable

from ..bridge import VariableBridge
from ..core import BridgeError, StopRule, UnknownTool, ValidationError, emit_stoprule
from ..status import get_flight_data, get_status, on_off, render_value
from .schema import ToolDescriptor, validate_arguments
from .tools import list_tools

logger = logging.getLogger(__name__)


class ToolName(str, Enum):
    """Every tool the server routes. Closed set."""
    # Autopilot
    SET_AUTOPILOT_MASTER = "set_autopilot_master"
    SET_FLIGHT_DIRECTOR = "set_flight_director"
    SET_AUTOPILOT_ALTITUDE = "set_autopilot_altitude"
    SET_AUTOPILOT_HEADING = "set_autopilot_heading"
    SET_AUTOPILOT_SPEED = "set_autopilot_speed"
    SET_AUTOPILOT_VERTICAL_SPEED = "set_autopilot_vertical_speed"
    SET_AUTOPILOT_MODE = "set_autopilot_mode"
    SET_AUTOTHRUST = "set_autothrust"
    # Direct flight controls
    SET_THROTTLE_LEVERS = "set_throttle_levers"
    SET_SIDESTICK_INPUT = "set_sidestick_input"
    SET_RUDDER_PEDALS = "set_rudder_pedals"
    SET_BRAKE_PEDALS = "set_brake_pedals"
    SET_NOSE_WHEEL_STEERING = "set_nose_wheel_steering"
    SET_PRIORITY_TAKEOVER = "set_priority_takeover"
    DISCONNECT_AUTOTHRUST = "disconnect_autothrust"
    # Secondary flight controls
    SET_FLIGHT_CONTROLS = "set_flight_controls"
    SET_FLAPS = "set_flaps"
    SET_SPOILERS = "set_spoilers"
    SET_TRIM = "set_trim"
    # Engines
    SET_ENGINE_POWER = "set_engine_power"
    SET_ENGINE_START_STOP = "set_engine_start_stop"
    SET_ENGINE_IGNITION = "set_engine_ignition"
    SET_FUEL_PUMPS = "set_fuel_pumps"
    # Landing gear
    SET_LANDING_GEAR = "set_landing_gear"
    SET_WHEEL_BRAKES = "set_wheel_brakes"
    # Navigation and communication
    SET_NAV_RADIO = "set_nav_radio"
    SET_COM_RADIO = "set_com_radio"
    SET_TRANSPONDER = "set_transponder"
    SET_ADIRS = "set_adirs"
    # Flight management
    SET_FMS_WAYPOINT = "set_fms_waypoint"
    SET_FMS_FLIGHT_PLAN = "set_fms_flight_plan"
    EXECUTE_FMS_COMMAND = "execute_fms_command"
    # Systems
    SET_ELECTRICAL_SYSTEM = "set_electrical_system"
    SET_HYDRAULIC_SYSTEM = "set_hydraulic_system"
    SET_PNEUMATIC_SYSTEM = "set_pneumatic_system"
    SET_LIGHTING_SYSTEM = "set_lighting_system"
    SET_APU = "set_apu"
    SET_WEATHER_RADAR = "set_weather_radar"
    SET_CABIN_SYSTEMS = "set_cabin_systems"
    SET_EMERGENCY_SYSTEMS = "set_emergency_systems"
    # Status
    GET_FLIGHT_STATUS = "get_flight_status"
    GET_FLIGHT_DATA = "get_flight_data"


# =============================================================================
# WRITE HELPERS
# =============================================================================

def write(bridge: VariableBridge, name: str, value: Any):
    """Write one variable, treating a falsy acknowledgement as failure."""
    if not bridge.set(name, value):
        raise BridgeError(f"Failed to set {name}", variable=name)


def write_if_present(bridge: VariableBridge, args: dict, field: str, name: str):
    """Write args[field] to name only if the caller supplied it."""
    if field in args:
        write(bridge, name, args[field])


def _arg(args: dict, field: str) -> str:
    return render_value(args.get(field))


# =============================================================================
# AUTOPILOT
# =============================================================================

def set_autopilot_master(bridge: VariableBridge, args: dict) -> str:
    engaged = args["engaged"]
    write(bridge, "A32NX_FMGC_AP_ENGAGED", engaged)
    return f"Autopilot {'engaged' if engaged else 'disengaged'}"


def set_flight_director(bridge: VariableBridge, args: dict) -> str:
    captain = args["captain"]
    first_officer = args["first_officer"]
    write(bridge, "A32NX_FMGC_1_FD_ENGAGED", captain)
    write(bridge, "A32NX_FMGC_2_FD_ENGAGED", first_officer)
    return f"Flight directors: Captain {on_off(captain)}, FO {on_off(first_officer)}"


def set_autopilot_altitude(bridge: VariableBridge, args: dict) -> str:
    write(bridge, "A32NX_FCU_ALT", args["altitude"])
    return f"Autopilot altitude set to {_arg(args, 'altitude')} feet"


def set_autopilot_heading(bridge: VariableBridge, args: dict) -> str:
    write(bridge, "A32NX_FCU_HDG", args["heading"])
    return f"Autopilot heading set to {_arg(args, 'heading')} degrees"


def set_autopilot_speed(bridge: VariableBridge, args: dict) -> str:
    is_mach = args["is_mach"]
    write(bridge, "A32NX_FCU_SPD", args["speed"])
    write(bridge, "A32NX_FCU_SPD_IS_MACH", is_mach)
    return f"Autopilot speed set to {_arg(args, 'speed')} {'Mach' if is_mach else 'knots'}"


def set_autopilot_vertical_speed(bridge: VariableBridge, args: dict) -> str:
    write(bridge, "A32NX_FCU_VS", args["vertical_speed"])
    return f"Autopilot vertical speed set to {_arg(args, 'vertical_speed')} fpm"


def set_autopilot_mode(bridge: VariableBridge, args: dict) -> str:
    write_if_present(bridge, args, "lateral_mode", "A32NX_FMGC_LATERAL_MODE")
    write_if_present(bridge, args, "vertical_mode", "A32NX_FMGC_VERTICAL_MODE")
    return (f"Autopilot modes: Lateral={_arg(args, 'lateral_mode')}, "
            f"Vertical={_arg(args, 'vertical_mode')}")


def set_autothrust(bridge: VariableBridge, args: dict) -> str:
    engaged = args["engaged"]
    write(bridge, "A32NX_AUTOTHRUST_ENGAGED", engaged)
    write_if_present(bridge, args, "thrust_limit", "A32NX_AUTOTHRUST_THRUST_LIMIT_TYPE")

    message = f"Autothrust {'engaged' if engaged else 'disengaged'}"
    if args.get("thrust_limit"):
        message += f" with {args['thrust_limit']} limit"
    return message


# =============================================================================
# DIRECT FLIGHT CONTROLS
# =============================================================================

def set_throttle_levers(bridge: VariableBridge, args: dict) -> str:
    write_if_present(bridge, args, "throttle_1", "THROTTLE1_AXIS_SET_EX1")
    write_if_present(bridge, args, "throttle_2", "THROTTLE2_AXIS_SET_EX1")
    return f"Throttle levers: 1={_arg(args, 'throttle_1')}, 2={_arg(args, 'throttle_2')}"


def set_sidestick_input(bridge: VariableBridge, args: dict) -> str:
    write_if_present(bridge, args, "aileron_input", "AILERON_SET")
    write_if_present(bridge, args, "elevator_input", "ELEVATOR_SET")
    return (f"Sidestick input: Aileron={_arg(args, 'aileron_input')}, "
            f"Elevator={_arg(args, 'elevator_input')}")


def set_rudder_pedals(bridge: VariableBridge, args: dict) -> str:
    write_if_present(bridge, args, "rudder_input", "RUDDER_SET")
    return f"Rudder pedals: {_arg(args, 'rudder_input')}"


def set_brake_pedals(bridge: VariableBridge, args: dict) -> str:
    write_if_present(bridge, args, "left_brake", "A32NX_LEFT_BRAKE_PEDAL_INPUT")
    write_if_present(bridge, args, "right_brake", "A32NX_RIGHT_BRAKE_PEDAL_INPUT")
    return f"Brake pedals: Left={_arg(args, 'left_brake')}, Right={_arg(args, 'right_brake')}"


def set_nose_wheel_steering(bridge: VariableBridge, args: dict) -> str:
    write_if_present(bridge, args, "tiller_input", "A32NX_TILLER_HANDLE_POSITION")
    return f"Nose wheel steering: {_arg(args, 'tiller_input')}"


def set_priority_takeover(bridge: VariableBridge, args: dict) -> str:
    side = args["pilot_side"]
    write(bridge, f"A32NX_PRIORITY_TAKEOVER:{render_value(side)}", 1)
    return f"Priority takeover executed - Pilot {render_value(side)} (Autopilot disconnected)"


def disconnect_autothrust(bridge: VariableBridge, args: dict) -> str:
    disconnect = args["disconnect"]
    if disconnect:
        write(bridge, "A32NX_AUTOTHRUST_DISCONNECT", 1)
    return f"Autothrust {'disconnected' if disconnect else 'connected'}"


# =============================================================================
# SECONDARY FLIGHT CONTROLS
# =============================================================================

def set_flight_controls(bridge: VariableBridge, args: dict) -> str:
    write_if_present(bridge, args, "aileron", "A32NX_FLIGHT_CONTROLS_AILERON_INPUT")
    write_if_present(bridge, args, "elevator", "A32NX_FLIGHT_CONTROLS_ELEVATOR_INPUT")
    write_if_present(bridge, args, "rudder", "A32NX_FLIGHT_CONTROLS_RUDDER_INPUT")
    return (f"Flight controls: Aileron={_arg(args, 'aileron')}, "
            f"Elevator={_arg(args, 'elevator')}, Rudder={_arg(args, 'rudder')}")


def set_flaps(bridge: VariableBridge, args: dict) -> str:
    write_if_present(bridge, args, "position", "A32NX_FLAPS_HANDLE_INDEX")
    write_if_present(bridge, args, "percent", "A32NX_FLAPS_HANDLE_PERCENT")

    if "position" in args:
        return f"Flaps set to position {_arg(args, 'position')}"
    if "percent" in args:
        return f"Flaps set to {_arg(args, 'percent')}%"
    return "Flaps unchanged"


def set_spoilers(bridge: VariableBridge, args: dict) -> str:
    write_if_present(bridge, args, "armed", "A32NX_SPOILERS_ARMED")
    write_if_present(bridge, args, "position", "A32NX_SPOILERS_HANDLE_POSITION")
    return f"Spoilers: Armed={_arg(args, 'armed')}, Position={_arg(args, 'position')}"


def set_trim(bridge: VariableBridge, args: dict) -> str:
    write_if_present(bridge, args, "elevator_trim", "A32NX_FLIGHT_CONTROLS_ELEVATOR_TRIM")
    write_if_present(bridge, args, "rudder_trim", "A32NX_FLIGHT_CONTROLS_RUDDER_TRIM")
    return f"Trim: Elevator={_arg(args, 'elevator_trim')}, Rudder={_arg(args, 'rudder_trim')}"


# =============================================================================
# ENGINES
# =============================================================================

def set_engine_power(bridge: VariableBridge, args: dict) -> str:
    engine = render_value(args["engine"])
    write(bridge, f"A32NX_ENGINE_{engine}_THRUST_PERCENT", args["thrust_percent"])
    return f"Engine {engine} thrust set to {_arg(args, 'thrust_percent')}%"


def set_engine_start_stop(bridge: VariableBridge, args: dict) -> str:
    engine = render_value(args["engine"])
    start = args["start"]
    write(bridge, f"A32NX_ENGINE_{engine}_START_SWITCH", start)
    return f"Engine {engine} {'starting' if start else 'stopping'}"


def set_engine_ignition(bridge: VariableBridge, args: dict) -> str:
    engine = render_value(args["engine"])
    write(bridge, f"A32NX_ENGINE_{engine}_IGNITION", args["ignition"])
    return f"Engine {engine} ignition set to {args['ignition']}"


def set_fuel_pumps(bridge: VariableBridge, args: dict) -> str:
    tank = args["tank"]
    write(bridge, f"A32NX_FUEL_{tank}_PUMP_1", args["pump_1"])
    write(bridge, f"A32NX_FUEL_{tank}_PUMP_2", args["pump_2"])
    return f"{tank} tank fuel pumps: Pump1={_arg(args, 'pump_1')}, Pump2={_arg(args, 'pump_2')}"


# =============================================================================
# LANDING GEAR
# =============================================================================

def set_landing_gear(bridge: VariableBridge, args: dict) -> str:
    gear_down = args["gear_down"]
    write(bridge, "A32NX_GEAR_HANDLE_POSITION", gear_down)
    write_if_present(bridge, args, "gear_bay_doors", "A32NX_GEAR_BAY_DOORS_OPEN")
    return f"Landing gear {'down' if gear_down else 'up'}"


def set_wheel_brakes(bridge: VariableBridge, args: dict) -> str:
    write_if_present(bridge, args, "left_brake", "A32NX_BRAKE_LEFT_PRESSURE")
    write_if_present(bridge, args, "right_brake", "A32NX_BRAKE_RIGHT_PRESSURE")
    write_if_present(bridge, args, "parking_brake", "A32NX_BRAKE_PARKING")
    return (f"Brakes: Left={_arg(args, 'left_brake')}, Right={_arg(args, 'right_brake')}, "
            f"Parking={_arg(args, 'parking_brake')}")


# =============================================================================
# NAVIGATION AND COMMUNICATION
# =============================================================================

def set_nav_radio(bridge: VariableBridge, args: dict) -> str:
    radio = render_value(args["radio"])
    write(bridge, f"A32NX_NAV_{radio}_FREQUENCY", args["frequency"])
    write_if_present(bridge, args, "course", f"A32NX_NAV_{radio}_COURSE")

    message = f"NAV{radio} frequency set to {_arg(args, 'frequency')} MHz"
    if args.get("course"):
        message += f", course {_arg(args, 'course')}°"
    return message


def set_com_radio(bridge: VariableBridge, args: dict) -> str:
    radio = render_value(args["radio"])
    write(bridge, f"A32NX_COM_{radio}_FREQUENCY", args["frequency"])
    write_if_present(bridge, args, "standby_frequency", f"A32NX_COM_{radio}_STANDBY_FREQUENCY")

    message = f"COM{radio} frequency set to {_arg(args, 'frequency')} MHz"
    if args.get("standby_frequency"):
        message += f", standby {_arg(args, 'standby_frequency')} MHz"
    return message


def set_transponder(bridge: VariableBridge, args: dict) -> str:
    write(bridge, "A32NX_TRANSPONDER_CODE", args["code"])
    write(bridge, "A32NX_TRANSPONDER_MODE", args["mode"])
    return f"Transponder set to {args['code']} mode {args['mode']}"


def set_adirs(bridge: VariableBridge, args: dict) -> str:
    for unit in (1, 2, 3):
        write_if_present(bridge, args, f"adirs_{unit}", f"A32NX_ADIRS_{unit}_MODE")
    return (f"ADIRS: 1={_arg(args, 'adirs_1')}, 2={_arg(args, 'adirs_2')}, "
            f"3={_arg(args, 'adirs_3')}")


# =============================================================================
# FLIGHT MANAGEMENT
# =============================================================================

def set_fms_waypoint(bridge: VariableBridge, args: dict) -> str:
    write(bridge, "A32NX_FMS_WAYPOINT_ID", args["waypoint_id"])
    write_if_present(bridge, args, "latitude", "A32NX_FMS_WAYPOINT_LAT")
    write_if_present(bridge, args, "longitude", "A32NX_FMS_WAYPOINT_LON")
    write_if_present(bridge, args, "altitude", "A32NX_FMS_WAYPOINT_ALT")
    write_if_present(bridge, args, "speed", "A32NX_FMS_WAYPOINT_SPD")
    return f"FMS waypoint {args['waypoint_id']} set"


def set_fms_flight_plan(bridge: VariableBridge, args: dict) -> str:
    write_if_present(bridge, args, "departure", "A32NX_FMS_DEPARTURE")
    write_if_present(bridge, args, "arrival", "A32NX_FMS_ARRIVAL")
    write_if_present(bridge, args, "route", "A32NX_FMS_ROUTE")
    write_if_present(bridge, args, "cruise_altitude", "A32NX_FMS_CRUISE_ALT")

    message = f"Flight plan: {_arg(args, 'departure')} to {_arg(args, 'arrival')}"
    if args.get("cruise_altitude"):
        message += f" at FL{math.floor(args['cruise_altitude'] / 100)}"
    return message


def execute_fms_command(bridge: VariableBridge, args: dict) -> str:
    write(bridge, "A32NX_FMS_COMMAND", args["command"])
    write_if_present(bridge, args, "parameter", "A32NX_FMS_PARAMETER")

    message = f"FMS command {args['command']} executed"
    if args.get("parameter"):
        message += f" with parameter {args['parameter']}"
    return message


# =============================================================================
# SYSTEMS (composite handlers)
# =============================================================================

def _deployed(value: Any) -> str:
    return "DEPLOYED" if value else "STOWED"


def _suffixed(unit: str) -> Callable[[Any], str]:
    return lambda value: f"{render_value(value)}{unit}"


# (argument, variable, label, renderer) in schema order
ELECTRICAL_FIELDS = [
    ("battery_1", "A32NX_ELEC_BAT_1", "Battery 1", on_off),
    ("battery_2", "A32NX_ELEC_BAT_2", "Battery 2", on_off),
    ("generator_1", "A32NX_ELEC_GEN_1", "Generator 1", on_off),
    ("generator_2", "A32NX_ELEC_GEN_2", "Generator 2", on_off),
    ("apu_generator", "A32NX_ELEC_APU_GEN", "APU Generator", on_off),
    ("external_power", "A32NX_ELEC_EXT_PWR", "External Power", on_off),
]

HYDRAULIC_FIELDS = [
    ("green_system", "A32NX_HYD_GREEN_SYSTEM", "Green", on_off),
    ("blue_system", "A32NX_HYD_BLUE_SYSTEM", "Blue", on_off),
    ("yellow_system", "A32NX_HYD_YELLOW_SYSTEM", "Yellow", on_off),
    ("engine_1_pump", "A32NX_HYD_ENG_1_PUMP", "Eng 1 Pump", on_off),
    ("engine_2_pump", "A32NX_HYD_ENG_2_PUMP", "Eng 2 Pump", on_off),
    ("electric_pump", "A32NX_HYD_ELEC_PUMP", "Elec Pump", on_off),
]

PNEUMATIC_FIELDS = [
    ("engine_1_bleed", "A32NX_PNEU_ENG_1_BLEED", "Eng 1 Bleed", on_off),
    ("engine_2_bleed", "A32NX_PNEU_ENG_2_BLEED", "Eng 2 Bleed", on_off),
    ("apu_bleed", "A32NX_PNEU_APU_BLEED", "APU Bleed", on_off),
    ("pack_1", "A32NX_OVHD_COND_PACK_1_PB_IS_ON", "Pack 1", on_off),
    ("pack_2", "A32NX_OVHD_COND_PACK_2_PB_IS_ON", "Pack 2", on_off),
    ("wing_anti_ice", "A32NX_PNEU_WING_ANTI_ICE", "Wing Anti-Ice", on_off),
    ("engine_anti_ice", "A32NX_PNEU_ENG_ANTI_ICE", "Eng Anti-Ice", on_off),
]

LIGHTING_FIELDS = [
    ("nav_lights", "A32NX_LIGHTS_NAV", "Nav Lights", on_off),
    ("beacon", "A32NX_LIGHTS_BEACON", "Beacon", on_off),
    ("strobe", "A32NX_LIGHTS_STROBE", "Strobe", on_off),
    ("landing_lights", "A32NX_LIGHTS_LANDING", "Landing Lights", on_off),
    ("taxi_lights", "A32NX_LIGHTS_TAXI", "Taxi Lights", on_off),
    ("cabin_lights", "A32NX_LIGHTS_CABIN", "Cabin Lights", render_value),
]

APU_FIELDS = [
    ("master_switch", "A32NX_APU_MASTER_SWITCH", "Master", on_off),
    ("start_switch", "A32NX_APU_START_SWITCH", "Start", on_off),
    ("generator", "A32NX_ELEC_APU_GEN", "Generator", on_off),
    ("bleed_air", "A32NX_PNEU_APU_BLEED", "Bleed Air", on_off),
]

WEATHER_RADAR_FIELDS = [
    ("mode", "A32NX_WEATHER_RADAR_MODE", "Mode", render_value),
    ("range", "A32NX_WEATHER_RADAR_RANGE", "Range", _suffixed("NM")),
    ("tilt", "A32NX_WEATHER_RADAR_TILT", "Tilt", _suffixed("°")),
    ("gain", "A32NX_WEATHER_RADAR_GAIN", "Gain", _suffixed("%")),
]

CABIN_FIELDS = [
    ("cabin_altitude", "A32NX_CABIN_ALTITUDE", "Cabin Alt", _suffixed("ft")),
    ("cabin_pressure_mode", "A32NX_CABIN_PRESSURE_MODE", "Pressure Mode", render_value),
    ("cabin_temperature", "A32NX_CABIN_TEMPERATURE", "Cabin Temp", _suffixed("°C")),
    ("oxygen_system", "A32NX_CABIN_OXYGEN", "Oxygen", on_off),
]

EMERGENCY_FIELDS = [
    ("emergency_generator", "A32NX_EMERGENCY_GENERATOR", "Emergency Gen", on_off),
    ("ram_air_turbine", "A32NX_RAT_DEPLOYED", "RAT", _deployed),
    ("emergency_lights", "A32NX_EMERGENCY_LIGHTS", "Emergency Lights", on_off),
    ("oxygen_masks", "A32NX_OXYGEN_MASKS_DEPLOYED", "Oxygen Masks", _deployed),
]


def apply_composite(bridge: VariableBridge, args: dict, fields: list, title: str) -> str:
    """Write every supplied field of a composite tool.

    Args:
        bridge: Variable bridge
        args: Validated tool arguments
        fields: (argument, variable, label, renderer) rows in schema order
        title: Message prefix, e.g. "Electrical system updated"

    Returns:
        Message with one "Label: value" fragment per written field
    """
    updates = []
    for field, variable, label, render in fields:
        if field in args:
            write(bridge, variable, args[field])
            updates.append(f"{label}: {render(args[field])}")

    if not updates:
        return f"{title}: no changes"
    return f"{title}: {', '.join(updates)}"


def _composite(fields: list, title: str) -> Callable[[VariableBridge, dict], str]:
    def handler(bridge: VariableBridge, args: dict) -> str:
        return apply_composite(bridge, args, fields, title)
    return handler


set_electrical_system = _composite(ELECTRICAL_FIELDS, "Electrical system updated")
set_hydraulic_system = _composite(HYDRAULIC_FIELDS, "Hydraulic system updated")
set_pneumatic_system = _composite(PNEUMATIC_FIELDS, "Pneumatic system updated")
set_lighting_system = _composite(LIGHTING_FIELDS, "Lighting system updated")
set_apu = _composite(APU_FIELDS, "APU updated")
set_weather_radar = _composite(WEATHER_RADAR_FIELDS, "Weather radar updated")
set_cabin_systems = _composite(CABIN_FIELDS, "Cabin systems updated")
set_emergency_systems = _composite(EMERGENCY_FIELDS, "Emergency systems updated")


# =============================================================================
# STATUS
# =============================================================================

def get_flight_status(bridge: VariableBridge, args: dict) -> str:
    return get_status(bridge, args["category"])


def get_flight_data_tool(bridge: VariableBridge, args: dict) -> str:
    return json.dumps(get_flight_data(bridge, args["parameters"]), indent=2)


# =============================================================================
# ROUTING
# =============================================================================

TOOL_HANDLERS: dict[ToolName, Callable[[VariableBridge, dict], str]] = {
    ToolName.SET_AUTOPILOT_MASTER: set_autopilot_master,
    ToolName.SET_FLIGHT_DIRECTOR: set_flight_director,
    ToolName.SET_AUTOPILOT_ALTITUDE: set_autopilot_altitude,
    ToolName.SET_AUTOPILOT_HEADING: set_autopilot_heading,
    ToolName.SET_AUTOPILOT_SPEED: set_autopilot_speed,
    ToolName.SET_AUTOPILOT_VERTICAL_SPEED: set_autopilot_vertical_speed,
    ToolName.SET_AUTOPILOT_MODE: set_autopilot_mode,
    ToolName.SET_AUTOTHRUST: set_autothrust,
    ToolName.SET_THROTTLE_LEVERS: set_throttle_levers,
    ToolName.SET_SIDESTICK_INPUT: set_sidestick_input,
    ToolName.SET_RUDDER_PEDALS: set_rudder_pedals,
    ToolName.SET_BRAKE_PEDALS: set_brake_pedals,
    ToolName.SET_NOSE_WHEEL_STEERING: set_nose_wheel_steering,
    ToolName.SET_PRIORITY_TAKEOVER: set_priority_takeover,
    ToolName.DISCONNECT_AUTOTHRUST: disconnect_autothrust,
    ToolName.SET_FLIGHT_CONTROLS: set_flight_controls,
    ToolName.SET_FLAPS: set_flaps,
    ToolName.SET_SPOILERS: set_spoilers,
    ToolName.SET_TRIM: set_trim,
    ToolName.SET_ENGINE_POWER: set_engine_power,
    ToolName.SET_ENGINE_START_STOP: set_engine_start_stop,
    ToolName.SET_ENGINE_IGNITION: set_engine_ignition,
    ToolName.SET_FUEL_PUMPS: set_fuel_pumps,
    ToolName.SET_LANDING_GEAR: set_landing_gear,
    ToolName.SET_WHEEL_BRAKES: set_wheel_brakes,
    ToolName.SET_NAV_RADIO: set_nav_radio,
    ToolName.SET_COM_RADIO: set_com_radio,
    ToolName.SET_TRANSPONDER: set_transponder,
    ToolName.SET_ADIRS: set_adirs,
    ToolName.SET_FMS_WAYPOINT: set_fms_waypoint,
    ToolName.SET_FMS_FLIGHT_PLAN: set_fms_flight_plan,
    ToolName.EXECUTE_FMS_COMMAND: execute_fms_command,
    ToolName.SET_ELECTRICAL_SYSTEM: set_electrical_system,
    ToolName.SET_HYDRAULIC_SYSTEM: set_hydraulic_system,
    ToolName.SET_PNEUMATIC_SYSTEM: set_pneumatic_system,
    ToolName.SET_LIGHTING_SYSTEM: set_lighting_system,
    ToolName.SET_APU: set_apu,
    ToolName.SET_WEATHER_RADAR: set_weather_radar,
    ToolName.SET_CABIN_SYSTEMS: set_cabin_systems,
    ToolName.SET_EMERGENCY_SYSTEMS: set_emergency_systems,
    ToolName.GET_FLIGHT_STATUS: get_flight_status,
    ToolName.GET_FLIGHT_DATA: get_flight_data_tool,
}


def verify_routes():
    """Check that the catalogue and the routing table name the same tools.

    Raises:
        StopRule: On any mismatch, after emitting an anomaly receipt
    """
    catalogue = {d.name for d in list_tools()}
    routes = {t.value for t in TOOL_HANDLERS}
    if catalogue != routes:
        error = StopRule(
            f"Tool catalogue/route mismatch: unrouted={sorted(catalogue - routes)}, "
            f"uncatalogued={sorted(routes - catalogue)}",
            metric="tool_routes"
        )
        emit_stoprule(error, "tool_routes")
        raise error


def with_defaults(descriptor: ToolDescriptor, arguments: dict) -> dict:
    """Arguments with schema defaults filled in for omitted properties."""
    args = {
        name: node.default
        for name, node in descriptor.input_schema.properties.items()
        if node.has_default
    }
    args.update(arguments)
    return args


def invoke(descriptor: ToolDescriptor, handler: Callable, arguments: Any,
           bridge: VariableBridge) -> str:
    """Validate arguments, then run the handler.

    No bridge call happens unless every argument is valid.

    Raises:
        ValidationError: If arguments fail the input schema
    """
    result = validate_arguments(descriptor, arguments)
    if not result.is_valid:
        raise ValidationError(result.violations)

    logger.debug("Dispatching %s with %r", descriptor.name, arguments)
    return handler(bridge, with_defaults(descriptor, arguments))


def route_tool(tool_name: str) -> ToolName:
    """Resolve a requested name against the closed tool set.

    Raises:
        UnknownTool: If the name is not routed
    """
    try:
        return ToolName(tool_name)
    except ValueError:
        raise UnknownTool(tool_name) from None


def register_default_tools(server):
    """Register every routed tool with an MCP server.

    Args:
        server: MCPServer instance
    """
    verify_routes()
    for descriptor in list_tools():
        server.register_tool(descriptor, TOOL_HANDLERS[ToolName(descriptor.name)])
