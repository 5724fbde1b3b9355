"""Tests for the command-line interface."""

import json

import pytest
from typer.testing import CliRunner

from liquidity_ledger import __version__
from liquidity_ledger.cli.main import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestQueryCommands:
    """Tests for commands that read a state file."""

    def test_top_json(self, runner, state_file):
        """top --output json lists pairs by descending incentive."""
        result = runner.invoke(app, ["top", str(state_file), "--limit", "2", "--output", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [p["pair_key"] for p in data] == ["ETH-USDC", "SOL-USDC"]

    def test_pairs_table(self, runner, state_file):
        """The default table output lists every pair."""
        result = runner.invoke(app, ["pairs", str(state_file)])

        assert result.exit_code == 0, result.output
        for key in ("ETH-USDC", "BTC-USDT", "SOL-USDC"):
            assert key in result.output

    def test_details_json(self, runner, state_file):
        """details reports the total and per-address shares."""
        result = runner.invoke(app, ["details", str(state_file), "USDC", "ETH", "-o", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["total_incentive"] == pytest.approx(0.62)
        assert data["normalized_contributions"]["address2"] == pytest.approx(0.2 / 0.62)

    def test_details_unknown_pair(self, runner, state_file):
        """Ledger errors exit with code 1."""
        result = runner.invoke(app, ["details", str(state_file), "DOGE", "ETH"])

        assert result.exit_code == 1
        assert "Token pair not found" in result.output

    def test_normalize_csv(self, runner, state_file):
        """normalize prints the address's weights."""
        result = runner.invoke(app, ["normalize", str(state_file), "address2", "-o", "csv"])

        assert result.exit_code == 0, result.output
        lines = result.output.strip().splitlines()
        assert lines[0] == "Address,Token A,Token B,Weight"
        assert len(lines) == 3

    def test_ownership_renormalized(self, runner, tmp_path):
        """--renormalize rescales stakes before printing."""
        path = tmp_path / "state.yaml"
        path.write_text(
            "ownership:\n"
            "  a: {stake_fraction: 0.5, token_count: 1, voting_power: 0.5}\n"
            "  b: {stake_fraction: 0.5, token_count: 1, voting_power: 0.5}\n"
            "  c: {stake_fraction: 1.0, token_count: 2, voting_power: 1.0}\n",
            encoding="utf-8",
        )
        result = runner.invoke(app, ["ownership", str(path), "c", "-r", "-o", "json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["c"]["voting_power"] == pytest.approx(0.5)

    def test_invalid_output_format(self, runner, state_file):
        """Unknown output formats are rejected."""
        result = runner.invoke(app, ["pairs", str(state_file), "--output", "xml"])
        assert result.exit_code == 1

    def test_missing_state_file(self, runner, tmp_path):
        """A missing state file is reported, not raised."""
        result = runner.invoke(app, ["pairs", str(tmp_path / "absent.json")])

        assert result.exit_code == 1
        assert "state file not found" in result.output


class TestOtherCommands:
    """Tests for demo and version."""

    def test_demo(self, runner):
        """The demo runs end to end on the bundled sample."""
        result = runner.invoke(app, ["demo"])

        assert result.exit_code == 0, result.output
        assert "Step 10" in result.output
        assert "Demo complete" in result.output

    def test_version(self, runner):
        result = runner.invoke(app, ["version"])
        assert __version__ in result.output
