"""Variable Bridge - the aircraft state store

The dispatch layer never owns aircraft state. Every tool call and status
query goes through a VariableBridge: `get(name)` and `set(name, value)`
against the simulator's named variables (A32NX_FCU_ALT, A32NX_ENGINE_N1:1...).

Implementations here:
- InMemoryBridge: a plain dict seeded with the cold-and-dark default state
- RecordingBridge: wraps another bridge and journals every call
- load_snapshot: seed an in-memory bridge from a JSON state file
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from config.constants import DEFAULT_SIM_STATE
from config.features import is_feature_enabled

from .core import BridgeError

logger = logging.getLogger(__name__)


class VariableBridge(ABC):
    """Key-value interface to simulated aircraft variables."""

    @abstractmethod
    def get(self, name: str) -> Any:
        """Read a variable. Raises BridgeError if it cannot be read."""

    @abstractmethod
    def set(self, name: str, value: Any) -> bool:
        """Write a variable. Returns True if the write was accepted."""


class InMemoryBridge(VariableBridge):
    """Dict-backed bridge. Stands in for the simulator in tests and demos."""

    def __init__(self, initial_state: Optional[dict] = None, seed_defaults: bool = True):
        """Initialize the store.

        Args:
            initial_state: Variables to set on top of the defaults
            seed_defaults: Start from DEFAULT_SIM_STATE
        """
        self._variables: dict[str, Any] = dict(DEFAULT_SIM_STATE) if seed_defaults else {}
        if initial_state:
            self._variables.update(initial_state)

    def get(self, name: str) -> Any:
        if name not in self._variables:
            raise BridgeError(f"Unknown variable: {name}", variable=name)
        value = self._variables[name]
        logger.debug("Getting %s -> %r", name, value)
        return value

    def set(self, name: str, value: Any) -> bool:
        logger.debug("Setting %s to %r", name, value)
        self._variables[name] = value
        return True

    def snapshot(self) -> dict:
        """Copy of every variable currently held."""
        return dict(self._variables)


@dataclass
class BridgeCall:
    """One journaled bridge call."""
    op: str  # "get" or "set"
    name: str
    value: Any
    ts: str


class RecordingBridge(VariableBridge):
    """Journals every get/set before delegating to the wrapped bridge."""

    def __init__(self, inner: VariableBridge):
        self.inner = inner
        self.calls: list[BridgeCall] = []

    def get(self, name: str) -> Any:
        value = self.inner.get(name)
        self.calls.append(BridgeCall("get", name, value, _now()))
        return value

    def set(self, name: str, value: Any) -> bool:
        self.calls.append(BridgeCall("set", name, value, _now()))
        return self.inner.set(name, value)

    @property
    def reads(self) -> list[str]:
        """Variable names read, in call order."""
        return [c.name for c in self.calls if c.op == "get"]

    @property
    def writes(self) -> list[tuple[str, Any]]:
        """(name, value) pairs written, in call order."""
        return [(c.name, c.value) for c in self.calls if c.op == "set"]

    def reset(self):
        """Clear the journal."""
        self.calls = []


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def load_snapshot(path: Path) -> InMemoryBridge:
    """Seed an in-memory bridge from a JSON file of variable -> value.

    Args:
        path: JSON file holding a flat object of variable names

    Returns:
        InMemoryBridge with defaults overlaid by the snapshot

    Raises:
        BridgeError: If the file does not hold a JSON object
    """
    with open(path, "r") as f:
        state = json.load(f)

    if not isinstance(state, dict):
        raise BridgeError(f"State file {path} must contain a JSON object")

    logger.info("Loaded %d variables from %s", len(state), path)
    return InMemoryBridge(initial_state=state)


def create_bridge(state_file: Optional[Path] = None) -> VariableBridge:
    """Build the bridge the server runs against.

    Args:
        state_file: Optional snapshot; falls back to A32NX_STATE_FILE

    Returns:
        A bridge, journaled if FEATURE_BRIDGE_JOURNAL_ENABLED
    """
    if state_file is None and os.environ.get("A32NX_STATE_FILE"):
        state_file = Path(os.environ["A32NX_STATE_FILE"])

    bridge: VariableBridge = load_snapshot(state_file) if state_file else InMemoryBridge()

    if is_feature_enabled("FEATURE_BRIDGE_JOURNAL_ENABLED"):
        bridge = RecordingBridge(bridge)

    return bridge
