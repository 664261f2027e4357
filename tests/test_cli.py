"""Tests for the memory command line script."""

import importlib.util
import json
import os
import sys
from pathlib import Path
from types import ModuleType
from unittest.mock import patch

import pytest

SCRIPT = Path(__file__).parent.parent / "scripts" / "memory_cli.py"


@pytest.fixture(scope="module")
def cli() -> ModuleType:
    """Load the script as a module."""
    spec = importlib.util.spec_from_file_location("memory_cli", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def run_cli(cli: ModuleType, *args: str) -> int:
    with patch.object(sys, "argv", ["memory_cli.py", *args]), \
            patch.dict(os.environ, {"LOGGING_ENABLED": "false"}):
        return cli.main()


class TestMemoryCli:
    """Test suite for scripts/memory_cli.py."""

    def test_add(self, cli: ModuleType, capsys: pytest.CaptureFixture) -> None:
        """Test add prints the new memory id."""
        assert run_cli(cli, "--provider", "in-memory", "add", "notes", "The user likes tea") == 0

        output = json.loads(capsys.readouterr().out)
        assert output["memory_id"]

    def test_search(self, cli: ModuleType, capsys: pytest.CaptureFixture) -> None:
        """Test search prints matches and a count."""
        assert run_cli(cli, "--provider", "in-memory", "search", "notes", "tea", "-n", "3") == 0

        assert json.loads(capsys.readouterr().out) == {"memories": {}, "count": 0}

    def test_delete(self, cli: ModuleType, capsys: pytest.CaptureFixture) -> None:
        """Test delete echoes the id."""
        assert run_cli(cli, "-p", "in-memory", "delete", "notes", "abc") == 0

        assert json.loads(capsys.readouterr().out) == {"deleted": "abc"}

    def test_invalid_key(self, cli: ModuleType, capsys: pytest.CaptureFixture) -> None:
        """Test errors are printed to stderr with a non-zero exit."""
        assert run_cli(cli, "-p", "in-memory", "add", "bad-key", "content") == 1

        error = json.loads(capsys.readouterr().err)
        assert "bad-key" in error["error"]

    def test_invalid_n(self, cli: ModuleType) -> None:
        """Test a non-positive result count fails."""
        assert run_cli(cli, "-p", "in-memory", "search", "notes", "tea", "-n", "0") == 1

    def test_output_is_only_json(self, cli: ModuleType, capsys: pytest.CaptureFixture) -> None:
        """Test disabled logging leaves stdout with the result alone and stderr empty."""
        assert run_cli(cli, "-p", "in-memory", "add", "notes", "The user likes tea") == 0

        captured = capsys.readouterr()
        assert list(json.loads(captured.out)) == ["memory_id"]
        assert captured.err == ""

    def test_log_level_from_settings(self, cli: ModuleType) -> None:
        """Test LOG_LEVEL is applied, and --verbose switches to debug."""
        with patch.object(cli, "setup_observability") as mock_setup, \
                patch.dict(os.environ, {"LOG_LEVEL": "ERROR"}):
            run_cli(cli, "-p", "in-memory", "search", "notes", "tea")
            run_cli(cli, "-v", "-p", "in-memory", "search", "notes", "tea")

        first, second = mock_setup.call_args_list
        assert first.args[0].log_level == "ERROR"
        assert first.kwargs["log_level"] is None
        assert second.kwargs["log_level"] == "DEBUG"
