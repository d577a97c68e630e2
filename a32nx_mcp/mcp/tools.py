"""MCP Tools - A32NX Flight Controller Catalogue

Tools exposed via MCP for external AI orchestrators. The schemas below are
the published client contract: field names, types, enums and ranges must
not drift.
"""

from typing import Optional

from config.constants import FLIGHT_DATA_PARAMETERS, STATUS_CATEGORIES

from .schema import ToolDescriptor


# =============================================================================
# TOOL DEFINITIONS
# =============================================================================

_THROTTLE_AXIS = {"minimum": -16383, "maximum": 16384}
_ENGINE_NUMBER = {"type": "integer", "description": "Engine number (1 or 2)", "enum": [1, 2]}
_RADIO_NUMBER = {"type": "integer", "description": "Radio number (1 or 2)", "enum": [1, 2]}
_ADIRS_MODE = ["OFF", "NAV", "ATT"]

A32NX_TOOLS = [
    # AUTOPILOT
    {
        "name": "set_autopilot_master",
        "description": "Engage/disengage autopilot master",
        "inputSchema": {
            "type": "object",
            "properties": {
                "engaged": {"type": "boolean", "description": "Autopilot engagement state"}
            },
            "required": ["engaged"]
        }
    },
    {
        "name": "set_flight_director",
        "description": "Control flight director engagement",
        "inputSchema": {
            "type": "object",
            "properties": {
                "captain": {"type": "boolean", "description": "Captain FD state"},
                "first_officer": {"type": "boolean", "description": "First Officer FD state"}
            },
            "required": ["captain", "first_officer"]
        }
    },
    {
        "name": "set_autopilot_altitude",
        "description": "Set autopilot target altitude",
        "inputSchema": {
            "type": "object",
            "properties": {
                "altitude": {"type": "number", "description": "Target altitude in feet",
                             "minimum": 0, "maximum": 45000}
            },
            "required": ["altitude"]
        }
    },
    {
        "name": "set_autopilot_heading",
        "description": "Set autopilot target heading",
        "inputSchema": {
            "type": "object",
            "properties": {
                "heading": {"type": "number", "description": "Target heading in degrees",
                            "minimum": 0, "maximum": 360}
            },
            "required": ["heading"]
        }
    },
    {
        "name": "set_autopilot_speed",
        "description": "Set autopilot target speed",
        "inputSchema": {
            "type": "object",
            "properties": {
                "speed": {"type": "number", "description": "Target speed in knots",
                          "minimum": 100, "maximum": 400},
                "is_mach": {"type": "boolean", "description": "Whether speed is in Mach number",
                            "default": False}
            },
            "required": ["speed"]
        }
    },
    {
        "name": "set_autopilot_vertical_speed",
        "description": "Set autopilot vertical speed",
        "inputSchema": {
            "type": "object",
            "properties": {
                "vertical_speed": {"type": "number", "description": "Vertical speed in feet per minute",
                                   "minimum": -6000, "maximum": 6000}
            },
            "required": ["vertical_speed"]
        }
    },
    {
        "name": "set_autopilot_mode",
        "description": "Set autopilot lateral/vertical modes",
        "inputSchema": {
            "type": "object",
            "properties": {
                "lateral_mode": {"type": "string", "enum": ["HDG", "NAV", "LOC", "APPR"],
                                 "description": "Lateral mode"},
                "vertical_mode": {"type": "string", "enum": ["ALT", "VS", "ILS", "APPR"],
                                  "description": "Vertical mode"}
            }
        }
    },
    {
        "name": "set_autothrust",
        "description": "Control autothrust system",
        "inputSchema": {
            "type": "object",
            "properties": {
                "engaged": {"type": "boolean", "description": "Autothrust engagement state"},
                "thrust_limit": {"type": "string", "enum": ["TOGA", "FLX", "CLB", "CRZ", "IDLE"],
                                 "description": "Thrust limit mode"}
            },
            "required": ["engaged"]
        }
    },

    # DIRECT FLIGHT CONTROLS (primary pilot inputs)
    {
        "name": "set_throttle_levers",
        "description": "Control throttle/thrust levers directly",
        "inputSchema": {
            "type": "object",
            "properties": {
                "throttle_1": {"type": "number", "description": "Throttle 1 position (-16383 to 16384)",
                               **_THROTTLE_AXIS},
                "throttle_2": {"type": "number", "description": "Throttle 2 position (-16383 to 16384)",
                               **_THROTTLE_AXIS}
            }
        }
    },
    {
        "name": "set_sidestick_input",
        "description": "Control sidestick/yoke inputs for pitch and roll",
        "inputSchema": {
            "type": "object",
            "properties": {
                "aileron_input": {"type": "number", "description": "Aileron input (-16383 to 16384)",
                                  **_THROTTLE_AXIS},
                "elevator_input": {"type": "number", "description": "Elevator input (-16383 to 16384)",
                                   **_THROTTLE_AXIS}
            }
        }
    },
    {
        "name": "set_rudder_pedals",
        "description": "Control rudder pedal inputs",
        "inputSchema": {
            "type": "object",
            "properties": {
                "rudder_input": {"type": "number", "description": "Rudder input (-16383 to 16384)",
                                 **_THROTTLE_AXIS}
            }
        }
    },
    {
        "name": "set_brake_pedals",
        "description": "Control brake pedal inputs",
        "inputSchema": {
            "type": "object",
            "properties": {
                "left_brake": {"type": "number", "description": "Left brake pedal input (0-100)",
                               "minimum": 0, "maximum": 100},
                "right_brake": {"type": "number", "description": "Right brake pedal input (0-100)",
                                "minimum": 0, "maximum": 100}
            }
        }
    },
    {
        "name": "set_nose_wheel_steering",
        "description": "Control nose wheel steering tiller",
        "inputSchema": {
            "type": "object",
            "properties": {
                "tiller_input": {"type": "number", "description": "Tiller steering input (-1 to 1)",
                                 "minimum": -1, "maximum": 1}
            }
        }
    },
    {
        "name": "set_priority_takeover",
        "description": "Execute priority takeover (disconnects autopilot)",
        "inputSchema": {
            "type": "object",
            "properties": {
                "pilot_side": {"type": "integer", "description": "Pilot side (1=Captain, 2=First Officer)",
                               "enum": [1, 2]}
            },
            "required": ["pilot_side"]
        }
    },
    {
        "name": "disconnect_autothrust",
        "description": "Disconnect autothrust system",
        "inputSchema": {
            "type": "object",
            "properties": {
                "disconnect": {"type": "boolean", "description": "Disconnect autothrust", "default": True}
            }
        }
    },

    # FLIGHT CONTROLS (secondary)
    {
        "name": "set_flight_controls",
        "description": "Control primary flight surfaces",
        "inputSchema": {
            "type": "object",
            "properties": {
                "aileron": {"type": "number", "description": "Aileron deflection (-1 to 1)",
                            "minimum": -1, "maximum": 1},
                "elevator": {"type": "number", "description": "Elevator deflection (-1 to 1)",
                             "minimum": -1, "maximum": 1},
                "rudder": {"type": "number", "description": "Rudder deflection (-1 to 1)",
                           "minimum": -1, "maximum": 1}
            }
        }
    },
    {
        "name": "set_flaps",
        "description": "Control flap position",
        "inputSchema": {
            "type": "object",
            "properties": {
                "position": {"type": "integer", "description": "Flap position (0-5)",
                             "minimum": 0, "maximum": 5},
                "percent": {"type": "number", "description": "Flap extension percentage",
                            "minimum": 0, "maximum": 100}
            }
        }
    },
    {
        "name": "set_spoilers",
        "description": "Control spoiler system",
        "inputSchema": {
            "type": "object",
            "properties": {
                "armed": {"type": "boolean", "description": "Ground spoilers armed"},
                "position": {"type": "number", "description": "Spoiler position (0-1)",
                             "minimum": 0, "maximum": 1}
            }
        }
    },
    {
        "name": "set_trim",
        "description": "Control aircraft trim",
        "inputSchema": {
            "type": "object",
            "properties": {
                "elevator_trim": {"type": "number", "description": "Elevator trim position",
                                  "minimum": -1, "maximum": 1},
                "rudder_trim": {"type": "number", "description": "Rudder trim position",
                                "minimum": -1, "maximum": 1}
            }
        }
    },

    # ENGINES
    {
        "name": "set_engine_power",
        "description": "Control engine power/thrust",
        "inputSchema": {
            "type": "object",
            "properties": {
                "engine": _ENGINE_NUMBER,
                "thrust_percent": {"type": "number", "description": "Thrust percentage (0-100)",
                                   "minimum": 0, "maximum": 100}
            },
            "required": ["engine", "thrust_percent"]
        }
    },
    {
        "name": "set_engine_start_stop",
        "description": "Start or stop engines",
        "inputSchema": {
            "type": "object",
            "properties": {
                "engine": _ENGINE_NUMBER,
                "start": {"type": "boolean", "description": "Start engine if true, stop if false"}
            },
            "required": ["engine", "start"]
        }
    },
    {
        "name": "set_engine_ignition",
        "description": "Control engine ignition system",
        "inputSchema": {
            "type": "object",
            "properties": {
                "engine": _ENGINE_NUMBER,
                "ignition": {"type": "string", "enum": ["OFF", "IGN_A", "IGN_B", "START"],
                             "description": "Ignition mode"}
            },
            "required": ["engine", "ignition"]
        }
    },
    {
        "name": "set_fuel_pumps",
        "description": "Control fuel pump systems",
        "inputSchema": {
            "type": "object",
            "properties": {
                "tank": {"type": "string", "enum": ["LEFT", "RIGHT", "CENTER"], "description": "Fuel tank"},
                "pump_1": {"type": "boolean", "description": "Pump 1 state"},
                "pump_2": {"type": "boolean", "description": "Pump 2 state"}
            },
            "required": ["tank", "pump_1", "pump_2"]
        }
    },

    # LANDING GEAR
    {
        "name": "set_landing_gear",
        "description": "Control landing gear extension/retraction",
        "inputSchema": {
            "type": "object",
            "properties": {
                "gear_down": {"type": "boolean", "description": "Gear extended if true"},
                "gear_bay_doors": {"type": "boolean", "description": "Gear bay doors open if true"}
            },
            "required": ["gear_down"]
        }
    },
    {
        "name": "set_wheel_brakes",
        "description": "Control wheel brake system",
        "inputSchema": {
            "type": "object",
            "properties": {
                "left_brake": {"type": "number", "description": "Left brake pressure (0-1)",
                               "minimum": 0, "maximum": 1},
                "right_brake": {"type": "number", "description": "Right brake pressure (0-1)",
                                "minimum": 0, "maximum": 1},
                "parking_brake": {"type": "boolean", "description": "Parking brake engaged"}
            }
        }
    },

    # NAVIGATION AND COMMUNICATION
    {
        "name": "set_nav_radio",
        "description": "Configure navigation radio frequencies",
        "inputSchema": {
            "type": "object",
            "properties": {
                "radio": _RADIO_NUMBER,
                "frequency": {"type": "number", "description": "Frequency in MHz",
                              "minimum": 108.0, "maximum": 118.0},
                "course": {"type": "number", "description": "Course setting in degrees",
                           "minimum": 0, "maximum": 360}
            },
            "required": ["radio", "frequency"]
        }
    },
    {
        "name": "set_com_radio",
        "description": "Configure communication radio frequencies",
        "inputSchema": {
            "type": "object",
            "properties": {
                "radio": _RADIO_NUMBER,
                "frequency": {"type": "number", "description": "Frequency in MHz",
                              "minimum": 118.0, "maximum": 137.0},
                "standby_frequency": {"type": "number", "description": "Standby frequency in MHz",
                                      "minimum": 118.0, "maximum": 137.0}
            },
            "required": ["radio", "frequency"]
        }
    },
    {
        "name": "set_transponder",
        "description": "Configure transponder settings",
        "inputSchema": {
            "type": "object",
            "properties": {
                "code": {"type": "string", "description": "4-digit transponder code",
                         "pattern": "^[0-7]{4}$"},
                "mode": {"type": "string", "enum": ["STBY", "ON", "ALT"], "description": "Transponder mode"}
            },
            "required": ["code", "mode"]
        }
    },
    {
        "name": "set_adirs",
        "description": "Control ADIRS (Air Data Inertial Reference System)",
        "inputSchema": {
            "type": "object",
            "properties": {
                "adirs_1": {"type": "string", "enum": _ADIRS_MODE, "description": "ADIRS 1 mode"},
                "adirs_2": {"type": "string", "enum": _ADIRS_MODE, "description": "ADIRS 2 mode"},
                "adirs_3": {"type": "string", "enum": _ADIRS_MODE, "description": "ADIRS 3 mode"}
            }
        }
    },

    # FLIGHT MANAGEMENT SYSTEM
    {
        "name": "set_fms_waypoint",
        "description": "Set FMS waypoint or route",
        "inputSchema": {
            "type": "object",
            "properties": {
                "waypoint_id": {"type": "string", "description": "Waypoint identifier"},
                "latitude": {"type": "number", "description": "Latitude in degrees",
                             "minimum": -90, "maximum": 90},
                "longitude": {"type": "number", "description": "Longitude in degrees",
                              "minimum": -180, "maximum": 180},
                "altitude": {"type": "number", "description": "Altitude constraint in feet"},
                "speed": {"type": "number", "description": "Speed constraint in knots"}
            },
            "required": ["waypoint_id"]
        }
    },
    {
        "name": "set_fms_flight_plan",
        "description": "Load or modify flight plan",
        "inputSchema": {
            "type": "object",
            "properties": {
                "departure": {"type": "string", "description": "Departure airport ICAO code"},
                "arrival": {"type": "string", "description": "Arrival airport ICAO code"},
                "route": {"type": "string", "description": "Route string"},
                "cruise_altitude": {"type": "number", "description": "Cruise altitude in feet"}
            }
        }
    },
    {
        "name": "execute_fms_command",
        "description": "Execute FMS commands",
        "inputSchema": {
            "type": "object",
            "properties": {
                "command": {"type": "string", "enum": ["EXEC", "CLR", "DIR_TO"], "description": "FMS command"},
                "parameter": {"type": "string", "description": "Command parameter if needed"}
            },
            "required": ["command"]
        }
    },

    # SYSTEMS
    {
        "name": "set_electrical_system",
        "description": "Control electrical system components",
        "inputSchema": {
            "type": "object",
            "properties": {
                "battery_1": {"type": "boolean", "description": "Battery 1 state"},
                "battery_2": {"type": "boolean", "description": "Battery 2 state"},
                "generator_1": {"type": "boolean", "description": "Generator 1 state"},
                "generator_2": {"type": "boolean", "description": "Generator 2 state"},
                "apu_generator": {"type": "boolean", "description": "APU generator state"},
                "external_power": {"type": "boolean", "description": "External power state"}
            }
        }
    },
    {
        "name": "set_hydraulic_system",
        "description": "Control hydraulic system components",
        "inputSchema": {
            "type": "object",
            "properties": {
                "green_system": {"type": "boolean", "description": "Green hydraulic system state"},
                "blue_system": {"type": "boolean", "description": "Blue hydraulic system state"},
                "yellow_system": {"type": "boolean", "description": "Yellow hydraulic system state"},
                "engine_1_pump": {"type": "boolean", "description": "Engine 1 hydraulic pump"},
                "engine_2_pump": {"type": "boolean", "description": "Engine 2 hydraulic pump"},
                "electric_pump": {"type": "boolean", "description": "Electric hydraulic pump"}
            }
        }
    },
    {
        "name": "set_pneumatic_system",
        "description": "Control pneumatic system components",
        "inputSchema": {
            "type": "object",
            "properties": {
                "engine_1_bleed": {"type": "boolean", "description": "Engine 1 bleed air"},
                "engine_2_bleed": {"type": "boolean", "description": "Engine 2 bleed air"},
                "apu_bleed": {"type": "boolean", "description": "APU bleed air"},
                "pack_1": {"type": "boolean", "description": "Pack 1 state"},
                "pack_2": {"type": "boolean", "description": "Pack 2 state"},
                "wing_anti_ice": {"type": "boolean", "description": "Wing anti-ice system"},
                "engine_anti_ice": {"type": "boolean", "description": "Engine anti-ice system"}
            }
        }
    },
    {
        "name": "set_lighting_system",
        "description": "Control aircraft lighting systems",
        "inputSchema": {
            "type": "object",
            "properties": {
                "nav_lights": {"type": "boolean", "description": "Navigation lights"},
                "beacon": {"type": "boolean", "description": "Beacon light"},
                "strobe": {"type": "boolean", "description": "Strobe lights"},
                "landing_lights": {"type": "boolean", "description": "Landing lights"},
                "taxi_lights": {"type": "boolean", "description": "Taxi lights"},
                "cabin_lights": {"type": "number", "description": "Cabin light intensity (0-1)",
                                 "minimum": 0, "maximum": 1}
            }
        }
    },
    {
        "name": "set_apu",
        "description": "Control APU (Auxiliary Power Unit)",
        "inputSchema": {
            "type": "object",
            "properties": {
                "master_switch": {"type": "boolean", "description": "APU master switch"},
                "start_switch": {"type": "boolean", "description": "APU start switch"},
                "generator": {"type": "boolean", "description": "APU generator"},
                "bleed_air": {"type": "boolean", "description": "APU bleed air"}
            }
        }
    },
    {
        "name": "set_weather_radar",
        "description": "Control weather radar system",
        "inputSchema": {
            "type": "object",
            "properties": {
                "mode": {"type": "string", "enum": ["OFF", "STANDBY", "ON", "TEST"], "description": "Radar mode"},
                "range": {"type": "number", "description": "Radar range in nautical miles",
                          "enum": [10, 20, 40, 80, 160, 320]},
                "tilt": {"type": "number", "description": "Radar tilt angle in degrees",
                         "minimum": -15, "maximum": 15},
                "gain": {"type": "number", "description": "Radar gain setting",
                         "minimum": 0, "maximum": 100}
            }
        }
    },
    {
        "name": "set_cabin_systems",
        "description": "Control cabin systems",
        "inputSchema": {
            "type": "object",
            "properties": {
                "cabin_altitude": {"type": "number", "description": "Target cabin altitude in feet"},
                "cabin_pressure_mode": {"type": "string", "enum": ["AUTO", "MANUAL"],
                                        "description": "Cabin pressure mode"},
                "cabin_temperature": {"type": "number", "description": "Target cabin temperature in Celsius",
                                      "minimum": 15, "maximum": 30},
                "oxygen_system": {"type": "boolean", "description": "Oxygen system state"}
            }
        }
    },

    # STATUS AND MONITORING
    {
        "name": "get_flight_status",
        "description": "Get comprehensive flight status",
        "inputSchema": {
            "type": "object",
            "properties": {
                "category": {
                    "type": "string",
                    "enum": list(STATUS_CATEGORIES),
                    "description": "Status category to retrieve"
                }
            },
            "required": ["category"]
        }
    },
    {
        "name": "get_flight_data",
        "description": "Get current flight data parameters",
        "inputSchema": {
            "type": "object",
            "properties": {
                "parameters": {
                    "type": "array",
                    "items": {
                        "type": "string",
                        "enum": list(FLIGHT_DATA_PARAMETERS)
                    },
                    "description": "Flight data parameters to retrieve"
                }
            },
            "required": ["parameters"]
        }
    },
    {
        "name": "set_emergency_systems",
        "description": "Control emergency systems",
        "inputSchema": {
            "type": "object",
            "properties": {
                "emergency_generator": {"type": "boolean", "description": "Emergency generator state"},
                "ram_air_turbine": {"type": "boolean", "description": "RAT deployment"},
                "emergency_lights": {"type": "boolean", "description": "Emergency lighting"},
                "oxygen_masks": {"type": "boolean", "description": "Passenger oxygen masks"}
            }
        }
    }
]


TOOL_DESCRIPTORS = tuple(ToolDescriptor.from_dict(t) for t in A32NX_TOOLS)
_BY_NAME = {d.name: d for d in TOOL_DESCRIPTORS}


def list_tools() -> tuple[ToolDescriptor, ...]:
    """All tool descriptors in catalogue order."""
    return TOOL_DESCRIPTORS


def get_tool(name: str) -> Optional[ToolDescriptor]:
    """Look up a descriptor by tool name."""
    return _BY_NAME.get(name)
