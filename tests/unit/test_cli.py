"""
Unit tests for CLI commands.
"""

import pytest
import typer
from typer.testing import CliRunner

from polymarket_mcp import __version__
from polymarket_mcp.cli.app import app
from polymarket_mcp.cli.commands import serve as serve_cmd
from polymarket_mcp.cli.commands import tools as tools_cmd
from polymarket_mcp.cli.commands.tools import parse_arguments
from polymarket_mcp.client import PolymarketClient


@pytest.fixture
def fake_client(monkeypatch, upstream):
    """Route CLI tool calls to the fake upstream."""
    monkeypatch.setattr(
        tools_cmd,
        "PolymarketClient",
        lambda api_config=None: PolymarketClient(api_config, transport=upstream.transport),
    )
    return upstream


def test_version(cli_runner: CliRunner) -> None:
    """Test --version flag."""
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_help(cli_runner: CliRunner) -> None:
    """Test --help flag."""
    result = cli_runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "serve" in result.stdout
    assert "tools" in result.stdout


def test_tools_list(cli_runner: CliRunner) -> None:
    """Test tools list shows every tool."""
    result = cli_runner.invoke(app, ["tools", "list"])
    assert result.exit_code == 0
    assert "get_markets" in result.stdout
    assert "get_market_prices" in result.stdout
    assert "Total: 8 tool(s)" in result.stdout


def test_tools_info(cli_runner: CliRunner) -> None:
    """Test tools info shows parameters and schema."""
    result = cli_runner.invoke(app, ["tools", "info", "get_order_book"])
    assert result.exit_code == 0
    assert "get_order_book" in result.stdout
    assert "include_spread_analysis" in result.stdout
    assert "Input Schema" in result.stdout


def test_tools_info_unknown(cli_runner: CliRunner) -> None:
    """Test tools info with an unknown name."""
    result = cli_runner.invoke(app, ["tools", "info", "get_weather"])
    assert result.exit_code == 1
    assert "Tool not found: get_weather" in result.stdout


def test_tools_call(cli_runner: CliRunner, fake_client) -> None:
    """Test tools call prints the report."""
    fake_client.add("/markets", [{"id": "1", "question": "Will it rain?"}])

    result = cli_runner.invoke(app, ["tools", "call", "get_markets", "--arg", "limit=5"])

    assert result.exit_code == 0
    assert "## 1. Will it rain?" in result.stdout
    assert fake_client.params("/markets")["limit"] == "5"


def test_tools_call_error_result(cli_runner: CliRunner, fake_client) -> None:
    """Test an error result exits non-zero."""
    result = cli_runner.invoke(app, ["tools", "call", "get_user_positions"])

    assert result.exit_code == 1
    assert "❌ Failed to fetch user positions" in result.stdout
    assert fake_client.requests == []


def test_tools_call_unknown(cli_runner: CliRunner, fake_client) -> None:
    """Test calling an unknown tool."""
    result = cli_runner.invoke(app, ["tools", "call", "get_weather"])

    assert result.exit_code == 1
    assert "Error: Unknown tool: get_weather" in result.stdout


def test_tools_call_bad_arguments(cli_runner: CliRunner) -> None:
    """Test malformed arguments are rejected before calling anything."""
    result = cli_runner.invoke(app, ["tools", "call", "get_markets", "--arg", "limit"])

    assert result.exit_code == 1
    assert "Invalid arguments" in result.stdout


def test_serve_invalid_log_level(cli_runner: CliRunner) -> None:
    """Test serve rejects unknown log levels."""
    result = cli_runner.invoke(app, ["serve", "--log-level", "verbose"])
    assert result.exit_code == 1
    assert "Invalid log level" in result.output


def test_serve_missing_config(cli_runner: CliRunner, temp_dir) -> None:
    """Test serve exits on a missing config file."""
    result = cli_runner.invoke(app, ["serve", "--config", str(temp_dir / "nope.yaml")])
    assert result.exit_code == 1
    assert "Configuration error" in result.output


def test_serve_errors_stay_off_stdout(capsys, temp_dir) -> None:
    """Test startup errors go to stderr, leaving stdout to the protocol."""
    with pytest.raises(typer.Exit) as exc_info:
        serve_cmd.run_server(config_path=temp_dir / "nope.yaml")

    captured = capsys.readouterr()
    assert exc_info.value.exit_code == 1
    assert captured.out == ""
    assert "Configuration error" in captured.err


class TestParseArguments:
    """Tests for key=value and JSON argument parsing."""

    def test_pairs_are_json_decoded(self):
        """Test numbers and booleans keep their type."""
        assert parse_arguments(["limit=5", "active=true", "search=rain"], None) == {
            "limit": 5,
            "active": True,
            "search": "rain",
        }

    def test_pairs_override_json(self):
        """Test pairs win over the JSON object."""
        assert parse_arguments(["limit=3"], '{"limit": 10, "offset": 2}') == {
            "limit": 3,
            "offset": 2,
        }

    def test_invalid_input(self):
        """Test malformed pairs and non-object JSON."""
        with pytest.raises(ValueError, match="Expected key=value"):
            parse_arguments(["limit"], None)
        with pytest.raises(ValueError, match="JSON object"):
            parse_arguments([], "[1, 2]")
