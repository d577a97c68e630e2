"""Core Foundation Functions

Every other module imports from here. Foundation for:
- Dual hashing (SHA256 + BLAKE3)
- Receipt emission (the request audit ledger)
- The dispatch error taxonomy
- StopRule exception handling
"""

import hashlib
import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import blake3

# Defaults, overridden by RECEIPTS_FILE / TENANT_ID in the environment
DEFAULT_RECEIPTS_FILE = "receipts.jsonl"
DEFAULT_TENANT_ID = "a32nx-sim-001"

# Global receipt counter for ordering
_receipt_counter = 0


class StopRule(Exception):
    """Raised when stoprule triggers. Never catch silently.

    StopRules indicate critical failures that require immediate attention.
    They emit an anomaly receipt before raising.
    """
    def __init__(self, message: str, metric: str = "unknown", action: str = "halt"):
        self.message = message
        self.metric = metric
        self.action = action
        super().__init__(message)


# =============================================================================
# DISPATCH ERRORS
# =============================================================================

class DispatchError(Exception):
    """Base class for failures raised while serving a tool call or resource read."""


class ValidationError(DispatchError):
    """Tool arguments failed the tool's input schema."""

    def __init__(self, violations: list[str]):
        self.violations = list(violations)
        super().__init__("; ".join(self.violations))


class UnknownTool(DispatchError):
    """No route for the requested tool name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class UnknownResource(DispatchError):
    """No route for the requested resource URI."""

    def __init__(self, uri: str):
        self.uri = uri
        super().__init__(f"Unknown resource: {uri}")


class BridgeError(DispatchError):
    """A variable bridge get/set failed."""

    def __init__(self, message: str, variable: Optional[str] = None):
        self.variable = variable
        super().__init__(message)


# =============================================================================
# RECEIPTS
# =============================================================================

def receipts_path() -> Path:
    """Receipts ledger path, read from the environment on every call."""
    return Path(os.environ.get("RECEIPTS_FILE", DEFAULT_RECEIPTS_FILE))


def default_tenant_id() -> str:
    return os.environ.get("TENANT_ID", DEFAULT_TENANT_ID)


def dual_hash(data: bytes | str) -> str:
    """Compute SHA256:BLAKE3 dual hash. ALWAYS use this, never single hash.

    Args:
        data: Input bytes or string to hash

    Returns:
        String in format "sha256_hex:blake3_hex"
    """
    if isinstance(data, str):
        data = data.encode('utf-8')

    sha256_hash = hashlib.sha256(data).hexdigest()
    blake3_hash = blake3.blake3(data).hexdigest()

    return f"{sha256_hash}:{blake3_hash}"


def emit_receipt(receipt_type: str, data: dict,
                 tenant_id: Optional[str] = None,
                 to_file: bool = True,
                 silent: bool = False) -> dict:
    """Emit a receipt to the audit ledger.

    Args:
        receipt_type: Type of receipt (mcp, system_event, anomaly, etc.)
        data: Receipt payload data
        tenant_id: Override default tenant ID
        to_file: Whether to append to the receipts file
        silent: Whether to suppress stdout printing. The stdio transport
            owns stdout, so server code always passes silent=True.

    Returns:
        Complete receipt dict with ts, tenant_id, payload_hash
    """
    global _receipt_counter
    _receipt_counter += 1

    ts = datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
    tid = tenant_id or data.get("tenant_id", default_tenant_id())

    receipt = {
        "receipt_type": receipt_type,
        "ts": ts,
        "tenant_id": tid,
        "sequence": _receipt_counter,
        **data
    }

    # Hash of the data without the hash itself
    data_for_hash = {k: v for k, v in receipt.items() if k != "payload_hash"}
    receipt["payload_hash"] = dual_hash(json.dumps(data_for_hash, sort_keys=True, default=str))

    receipt_json = json.dumps(receipt, sort_keys=True, default=str)

    if not silent:
        print(receipt_json, flush=True)

    if to_file:
        with open(receipts_path(), "a") as f:
            f.write(receipt_json + "\n")

    return receipt


def emit_stoprule(e: Exception, metric: str, action: str = "halt") -> dict:
    """Emit anomaly receipt for a stoprule violation.

    Args:
        e: The exception that triggered the stoprule
        metric: The metric that violated
        action: Action to take (halt, escalate, alert)

    Returns:
        The anomaly receipt
    """
    return emit_receipt("anomaly", {
        "metric": metric,
        "classification": "violation",
        "action": action,
        "error": str(e)
    }, silent=True)


def emit_latency_anomaly(metric: str, limit_ms: float, elapsed_ms: float) -> Optional[dict]:
    """Emit an anomaly receipt if an operation exceeded its SLO.

    Args:
        metric: Name of the measured operation
        limit_ms: SLO limit in milliseconds
        elapsed_ms: Measured latency

    Returns:
        The anomaly receipt, or None if within SLO
    """
    if elapsed_ms <= limit_ms:
        return None

    return emit_receipt("anomaly", {
        "metric": f"{metric}_latency",
        "baseline": limit_ms,
        "actual": elapsed_ms,
        "delta": elapsed_ms - limit_ms,
        "classification": "degradation",
        "action": "alert"
    }, silent=True)


def load_receipts(file_path: Optional[Path] = None) -> list[dict]:
    """Load all receipts from the ledger file.

    Args:
        file_path: Path to receipts file, defaults to receipts_path()

    Returns:
        List of receipt dicts
    """
    path = file_path or receipts_path()
    receipts = []

    try:
        with open(path, 'r') as f:
            for line in f:
                line = line.strip()
                if line:
                    receipts.append(json.loads(line))
    except FileNotFoundError:
        pass

    return receipts


def get_receipt_count() -> int:
    """Get the current receipt counter value."""
    return _receipt_counter


def reset_receipt_counter():
    """Reset the receipt counter (for testing)."""
    global _receipt_counter
    _receipt_counter = 0
