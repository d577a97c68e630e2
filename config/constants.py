"""A32NX Flight Controller Constants

Single source of truth for server identity, catalogue scheme and the
default variable state the in-memory bridge starts from.
No magic numbers in module code.
"""

# =============================================================================
# SERVER IDENTITY
# =============================================================================

SERVER_NAME = "a32nx-flight-controller"
SERVER_VERSION = "2.0.0"

# Resource URIs live under a single scheme
URI_SCHEME = "a32nx"
RESOURCE_MIME_TYPE = "application/json"

# =============================================================================
# STATUS / DATA QUERIES
# =============================================================================

# Categories accepted by get_flight_status. Only the first six have a
# dedicated formatter; the rest render the full report.
STATUS_CATEGORIES = [
    "all", "autopilot", "engines", "flight_controls", "navigation",
    "systems", "fuel", "hydraulics", "electrical"
]

# Parameters accepted by get_flight_data
FLIGHT_DATA_PARAMETERS = [
    "altitude", "speed", "heading", "vertical_speed", "position",
    "attitude", "engine_data", "fuel_quantity"
]

# Placeholder rendered in tool messages for optional arguments not supplied
UNCHANGED = "unchanged"

# =============================================================================
# SLO THRESHOLDS
# =============================================================================

SLO_MCP_TOOL_MS = 200             # Tool invocation < 200ms
SLO_MCP_RESOURCE_MS = 200         # Resource read < 200ms

# =============================================================================
# DEFAULT AIRCRAFT STATE (cold and dark at the gate)
# =============================================================================

# Every variable read by a status query or resource must be seeded here,
# an unseeded read is a bridge error.
DEFAULT_SIM_STATE = {
    # Autopilot / FCU
    "A32NX_FMGC_AP_ENGAGED": False,
    "A32NX_FMGC_1_FD_ENGAGED": False,
    "A32NX_FMGC_2_FD_ENGAGED": False,
    "A32NX_FCU_ALT": 10000,
    "A32NX_FCU_HDG": 0,
    "A32NX_FCU_SPD": 250,
    "A32NX_FCU_VS": 0,
    "A32NX_AUTOTHRUST_ENGAGED": False,

    # Engines
    "A32NX_ENGINE_N1:1": 0,
    "A32NX_ENGINE_N1:2": 0,
    "A32NX_ENGINE_N2:1": 0,
    "A32NX_ENGINE_N2:2": 0,
    "A32NX_ENGINE_EGT:1": 15,
    "A32NX_ENGINE_EGT:2": 15,
    "A32NX_ENGINE_FF:1": 0,
    "A32NX_ENGINE_FF:2": 0,

    # Fuel (kg)
    "A32NX_FUEL_LEFT_QUANTITY": 2500,
    "A32NX_FUEL_RIGHT_QUANTITY": 2500,
    "A32NX_FUEL_CENTER_QUANTITY": 0,

    # Flight controls / gear
    "A32NX_FLAPS_HANDLE_INDEX": 0,
    "A32NX_FLAPS_HANDLE_PERCENT": 0,
    "A32NX_SPOILERS_ARMED": False,
    "A32NX_FLIGHT_CONTROLS_ELEVATOR_TRIM": 0,
    "A32NX_FLIGHT_CONTROLS_RUDDER_TRIM": 0,
    "A32NX_GEAR_HANDLE_POSITION": True,

    # ADIRS air data / inertial reference
    "A32NX_ADIRS_1_MODE": "OFF",
    "A32NX_ADIRS_2_MODE": "OFF",
    "A32NX_ADIRS_3_MODE": "OFF",
    "A32NX_ADIRS_IR_1_HEADING": 0,
    "A32NX_ADIRS_IR_1_TRACK": 0,
    "A32NX_ADIRS_IR_1_LATITUDE": 0.0,
    "A32NX_ADIRS_IR_1_LONGITUDE": 0.0,
    "A32NX_ADIRS_IR_1_PITCH": 0,
    "A32NX_ADIRS_IR_1_ROLL": 0,
    "A32NX_ADIRS_ADR_1_ALTITUDE": 0,
    "A32NX_ADIRS_ADR_1_COMPUTED_AIRSPEED": 0,
    "A32NX_ADIRS_ADR_1_VERTICAL_SPEED": 0,

    # Radios
    "A32NX_NAV_1_FREQUENCY": 108.0,
    "A32NX_NAV_2_FREQUENCY": 108.0,
    "A32NX_COM_1_FREQUENCY": 118.0,
    "A32NX_COM_2_FREQUENCY": 118.0,
    "A32NX_TRANSPONDER_CODE": "2000",

    # Electrical
    "A32NX_ELEC_BAT_1": False,
    "A32NX_ELEC_BAT_2": False,
    "A32NX_ELEC_GEN_1": False,
    "A32NX_ELEC_GEN_2": False,

    # Hydraulic (PSI)
    "A32NX_HYD_GREEN_SYSTEM_1_SECTION_PRESSURE": 0,
    "A32NX_HYD_BLUE_SYSTEM_1_SECTION_PRESSURE": 0,
    "A32NX_HYD_YELLOW_SYSTEM_1_SECTION_PRESSURE": 0,

    # Pneumatic
    "A32NX_PNEU_ENG_1_BLEED": False,
    "A32NX_PNEU_ENG_2_BLEED": False,
    "A32NX_PNEU_WING_ANTI_ICE": False,
    "A32NX_OVHD_COND_PACK_1_PB_IS_ON": False,
    "A32NX_OVHD_COND_PACK_2_PB_IS_ON": False,
}
