"""Tests for core foundation functions."""

import time

import pytest

from a32nx_mcp.core import (
    dual_hash,
    emit_receipt,
    emit_stoprule,
    emit_latency_anomaly,
    load_receipts,
    get_receipt_count,
    reset_receipt_counter,
    receipts_path,
    StopRule,
    DispatchError,
    ValidationError,
    UnknownTool,
    UnknownResource,
    BridgeError
)


class TestDualHash:
    """Tests for dual_hash function."""

    def test_returns_dual_format(self):
        """Hash must be in SHA256:BLAKE3 format."""
        result = dual_hash(b"test")
        parts = result.split(":")
        assert len(parts) == 2
        assert len(parts[0]) == 64  # SHA256 hex length
        assert len(parts[1]) == 64  # BLAKE3 hex length

    def test_string_matches_utf8_bytes(self):
        """Strings are hashed as their UTF-8 encoding."""
        assert dual_hash("Bank angle 15°") == dual_hash("Bank angle 15°".encode("utf-8"))

    def test_deterministic(self):
        """Same input should always produce same hash."""
        assert dual_hash(b"A32NX_FCU_ALT") == dual_hash(b"A32NX_FCU_ALT")

    def test_different_inputs_different_hashes(self):
        """Different inputs should produce different hashes."""
        assert dual_hash(b"ENG 1") != dual_hash(b"ENG 2")

    def test_latency_slo(self):
        """Hash computation should be under 10ms."""
        start = time.perf_counter()
        for _ in range(100):
            dual_hash(b"performance test data")
        elapsed_ms = (time.perf_counter() - start) * 1000 / 100

        assert elapsed_ms < 10, f"Hash latency {elapsed_ms}ms exceeds 10ms SLO"


class TestEmitReceipt:
    """Tests for emit_receipt function."""

    def test_contains_required_fields(self):
        """Receipt must carry type, timestamp, tenant, sequence and hash."""
        receipt = emit_receipt("test", {"data": "value"}, silent=True, to_file=False)

        for key in ("receipt_type", "ts", "tenant_id", "sequence", "payload_hash"):
            assert key in receipt

    def test_timestamp_format(self):
        """Timestamp should be ISO8601 with Z suffix."""
        receipt = emit_receipt("test", {}, silent=True, to_file=False)
        assert receipt["ts"].endswith("Z")

    def test_sequence_increments(self):
        """Each receipt gets the next sequence number."""
        first = emit_receipt("test", {}, silent=True, to_file=False)
        second = emit_receipt("test", {}, silent=True, to_file=False)
        assert second["sequence"] == first["sequence"] + 1
        assert get_receipt_count() == 2

    def test_reset_counter(self):
        """reset_receipt_counter starts the sequence over."""
        emit_receipt("test", {}, silent=True, to_file=False)
        reset_receipt_counter()
        assert get_receipt_count() == 0

    def test_tenant_override(self):
        """Explicit tenant_id wins over the default."""
        receipt = emit_receipt("test", {}, tenant_id="ops", silent=True, to_file=False)
        assert receipt["tenant_id"] == "ops"

    def test_silent_keeps_stdout_clean(self, capsys):
        """silent=True must not print; stdout belongs to the transport."""
        emit_receipt("test", {"k": 1}, silent=True, to_file=False)
        assert capsys.readouterr().out == ""

    def test_written_to_ledger(self):
        """to_file=True appends one JSON line that load_receipts returns."""
        emit_receipt("test", {"key": "value"}, silent=True)
        receipts = load_receipts()
        assert len(receipts) == 1
        assert receipts[0]["key"] == "value"

    def test_load_missing_ledger(self, tmp_path):
        """A missing ledger file reads as empty."""
        assert load_receipts(tmp_path / "absent.jsonl") == []

    def test_environment_read_at_emit_time(self, tmp_path, monkeypatch):
        """RECEIPTS_FILE and TENANT_ID set after import still apply."""
        ledger = tmp_path / "late.jsonl"
        monkeypatch.setenv("RECEIPTS_FILE", str(ledger))
        monkeypatch.setenv("TENANT_ID", "hangar-7")

        receipt = emit_receipt("test", {}, silent=True)

        assert receipt["tenant_id"] == "hangar-7"
        assert receipts_path() == ledger
        assert load_receipts(ledger)[0]["tenant_id"] == "hangar-7"


class TestAnomalies:
    """Tests for anomaly receipts."""

    def test_stoprule_receipt(self):
        """emit_stoprule records a violation anomaly."""
        receipt = emit_stoprule(StopRule("boom", metric="tool_routes"), "tool_routes")
        assert receipt["receipt_type"] == "anomaly"
        assert receipt["classification"] == "violation"
        assert receipt["error"] == "boom"

    def test_latency_within_slo(self):
        """No receipt when under the limit."""
        assert emit_latency_anomaly("mcp_tool_x", 200, 5.0) is None
        assert load_receipts() == []

    def test_latency_breach(self):
        """Breaching the limit emits a degradation anomaly."""
        receipt = emit_latency_anomaly("mcp_tool_x", 200, 250.0)
        assert receipt["metric"] == "mcp_tool_x_latency"
        assert receipt["delta"] == 50.0
        assert receipt["classification"] == "degradation"


class TestErrors:
    """Tests for the dispatch error taxonomy."""

    def test_all_dispatch_errors(self):
        """Every request-level error is a DispatchError."""
        for cls in (ValidationError, UnknownTool, UnknownResource, BridgeError):
            assert issubclass(cls, DispatchError)

    def test_validation_error_joins_violations(self):
        """Message joins violations with '; '."""
        error = ValidationError(["Missing required argument: a", "Missing required argument: b"])
        assert str(error) == "Missing required argument: a; Missing required argument: b"
        assert len(error.violations) == 2

    def test_unknown_tool_message(self):
        """UnknownTool names the tool."""
        error = UnknownTool("fly_to_moon")
        assert str(error) == "Unknown tool: fly_to_moon"
        assert error.name == "fly_to_moon"

    def test_unknown_resource_message(self):
        """UnknownResource names the URI."""
        assert str(UnknownResource("a32nx://nope")) == "Unknown resource: a32nx://nope"

    def test_bridge_error_variable(self):
        """BridgeError carries the variable name."""
        error = BridgeError("Failed to set A32NX_FCU_ALT", variable="A32NX_FCU_ALT")
        assert error.variable == "A32NX_FCU_ALT"


class TestStopRule:
    """Tests for StopRule exception."""

    def test_stoprule_is_exception(self):
        """StopRule should be an Exception."""
        assert issubclass(StopRule, Exception)

    def test_stoprule_attributes(self):
        """StopRule should have metric and action attributes."""
        sr = StopRule("error", metric="test_metric", action="halt")
        assert sr.metric == "test_metric"
        assert sr.action == "halt"
        assert "error" in str(sr)

    def test_stoprule_raises(self):
        """StopRule propagates like any exception."""
        with pytest.raises(StopRule):
            raise StopRule("halt")
