"""Tests for the command line entry point."""

import json
import sys

from a32nx_mcp.core import load_receipts
from cli import cmd_call, cmd_read, cmd_tools, main, run_test


class TestCli:
    """Tests for CLI commands."""

    def test_smoke_test(self):
        """--test exercises a call, a status query and a read."""
        assert run_test() is True

    def test_call_prints_envelope(self, mcp_server, capsys):
        assert cmd_call(mcp_server, "set_flaps", '{"position": 2}') is True
        envelope = json.loads(capsys.readouterr().out)
        assert envelope["content"][0]["text"] == "Flaps set to position 2"

    def test_call_bad_json(self, mcp_server, capsys):
        assert cmd_call(mcp_server, "set_flaps", "{position") is False
        assert "Invalid JSON arguments" in capsys.readouterr().err

    def test_call_error_envelope(self, mcp_server, capsys):
        assert cmd_call(mcp_server, "set_flaps", '{"position": 9}') is False
        assert json.loads(capsys.readouterr().out)["isError"] is True

    def test_call_rejects_nan(self, mcp_server, capsys):
        """json.loads accepts NaN; the range check must not."""
        assert cmd_call(mcp_server, "set_autopilot_altitude", '{"altitude": NaN}') is False
        assert "Out of range for altitude" in capsys.readouterr().out

    def test_read(self, mcp_server, capsys):
        cmd_read(mcp_server, "a32nx://checklist/emergency")
        assert "fire_engine" in json.loads(capsys.readouterr().out)

    def test_tools(self, mcp_server, capsys):
        cmd_tools(mcp_server)
        assert len(capsys.readouterr().out.strip().split("\n")) == 42


class TestDotenv:
    """Tests for .env loading in main."""

    def test_dotenv_sets_receipts_file(self, tmp_path, monkeypatch, capsys):
        """RECEIPTS_FILE from .env in the working directory reaches the ledger."""
        ledger = tmp_path / "env_receipts.jsonl"
        (tmp_path / ".env").write_text(f"RECEIPTS_FILE={ledger}\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("RECEIPTS_FILE")
        monkeypatch.setattr(sys, "argv", ["cli.py", "call", "set_trim", '{"elevator_trim": 0.2}'])

        main()

        receipts = load_receipts(ledger)
        calls = [r for r in receipts if r.get("tool_or_resource") == "set_trim"]
        assert len(calls) == 1
        assert json.loads(capsys.readouterr().out)["isError"] is False
