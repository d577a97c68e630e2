"""A32NX Flight Controller Feature Flags

Receipts are on by default, the bridge journal is opt-in.
"""

import os

# =============================================================================
# FEATURE FLAGS
# =============================================================================

# One "mcp" receipt per tool call / resource read
FEATURE_MCP_RECEIPTS_ENABLED = True

# Wrap the variable bridge in a recording journal of every get/set
FEATURE_BRIDGE_JOURNAL_ENABLED = False


def is_feature_enabled(feature_name: str) -> bool:
    """Check if a feature is enabled.

    Supports environment variable override: A32NX_{FEATURE_NAME}=1

    Args:
        feature_name: Name of the feature flag

    Returns:
        True if enabled, False otherwise
    """
    env_var = f"A32NX_{feature_name.upper()}"
    env_value = os.environ.get(env_var)
    if env_value is not None:
        return env_value.lower() in ("1", "true", "yes", "on")

    return globals().get(feature_name, False)


def get_all_features() -> dict:
    """Get all feature flags and their current state.

    Returns:
        Dict of feature_name -> enabled
    """
    return {
        "FEATURE_MCP_RECEIPTS_ENABLED": is_feature_enabled("FEATURE_MCP_RECEIPTS_ENABLED"),
        "FEATURE_BRIDGE_JOURNAL_ENABLED": is_feature_enabled("FEATURE_BRIDGE_JOURNAL_ENABLED")
    }
