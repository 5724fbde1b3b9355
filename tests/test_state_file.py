"""Tests for state file reading and output formatting."""

import json

import pytest

from liquidity_ledger.core.exceptions import InvalidInputError
from liquidity_ledger.output.formatters import (
    CSVFormatter,
    JSONFormatter,
    TableFormatter,
    get_formatter,
)
from liquidity_ledger.state_file import read_state_file


class TestReadStateFile:
    """Tests for read_state_file."""

    def test_reads_json(self, state_file, sample_state):
        """JSON payloads are parsed as-is."""
        assert read_state_file(state_file) == sample_state

    def test_reads_yaml(self, tmp_path):
        """YAML payloads are accepted too."""
        path = tmp_path / "state.yml"
        path.write_text(
            "preferences:\n  a:\n    - {token_a: X, token_b: Y, weight: 1.0}\n",
            encoding="utf-8",
        )
        assert read_state_file(path) == {
            "preferences": {"a": [{"token_a": "X", "token_b": "Y", "weight": 1.0}]}
        }

    def test_not_a_mapping(self, tmp_path):
        """Top-level lists are rejected."""
        path = tmp_path / "state.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(InvalidInputError):
            read_state_file(path)

    def test_unparseable(self, tmp_path):
        """Broken syntax raises InvalidInputError."""
        path = tmp_path / "state.yaml"
        path.write_text("preferences: {a: [", encoding="utf-8")
        with pytest.raises(InvalidInputError):
            read_state_file(path)

    def test_missing(self, tmp_path):
        with pytest.raises(InvalidInputError):
            read_state_file(tmp_path / "nope.json")


class TestFormatters:
    """Tests for output formatters."""

    def test_get_formatter(self):
        """Format names resolve case-insensitively."""
        assert isinstance(get_formatter("json"), JSONFormatter)
        assert isinstance(get_formatter("CSV"), CSVFormatter)
        assert isinstance(get_formatter("table"), TableFormatter)
        with pytest.raises(ValueError):
            get_formatter("xml")

    def test_json_pairs(self, loaded_ledger):
        """JSON output round-trips through json.loads."""
        pairs = loaded_ledger.top_incentivized_pairs(1)
        data = json.loads(JSONFormatter().format_pairs(pairs))

        assert data[0]["pair_key"] == "ETH-USDC"
        assert data[0]["contributions"]["address1"] == pytest.approx(0.42)

    def test_csv_details(self, loaded_ledger):
        """CSV details have one row per contributing address."""
        details = loaded_ledger.pair_details("ETH", "USDC")
        lines = CSVFormatter().format_details(details).strip().splitlines()

        assert lines[0] == "Pair,Address,Contribution,Share"
        assert lines[1].startswith("ETH-USDC,address1,0.420000,")

    def test_plain_table_state(self, loaded_ledger):
        """Plain tables include every address and pair."""
        text = TableFormatter(use_rich=False).format_state(loaded_ledger.get_snapshot())

        assert "OWNERSHIP" in text
        assert "address2" in text
        assert "SOL/USDC" in text

    def test_plain_table_empty_pairs(self):
        text = TableFormatter(use_rich=False).format_pairs([])
        assert "No incentivized pairs" in text
