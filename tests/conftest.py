"""Pytest configuration and fixtures for ledger tests."""

import json
from pathlib import Path
from typing import Any

import pytest

from liquidity_ledger.core.config import LedgerConfig
from liquidity_ledger.ledger import Ledger


@pytest.fixture
def sample_state() -> dict[str, Any]:
    """Two addresses with overlapping ETH/USDC preferences."""
    return {
        "preferences": {
            "address1": [
                {"token_a": "ETH", "token_b": "USDC", "weight": 0.7},
                {"token_a": "BTC", "token_b": "USDT", "weight": 0.3},
            ],
            "address2": [
                {"token_a": "ETH", "token_b": "USDC", "weight": 0.5},
                {"token_a": "SOL", "token_b": "USDC", "weight": 0.5},
            ],
        },
        "ownership": {
            "address1": {"stake_fraction": 0.6, "token_count": 1_000_000, "voting_power": 0.6},
            "address2": {"stake_fraction": 0.4, "token_count": 500_000, "voting_power": 0.4},
        },
    }


@pytest.fixture
def legacy_state() -> dict[str, Any]:
    """The same kind of payload in the legacy key layout."""
    return {
        "signedTxs": {
            "address1": [{"token1": "TOKEN_A", "token2": "TOKEN_B", "weight": 0.7}],
        },
        "addyOwnership": {
            "address1": {"percentage": 1.0, "tokens": 1_000_000, "voting_power": 1.0},
        },
    }


@pytest.fixture
def ledger() -> Ledger:
    """Empty ledger with default config."""
    return Ledger(LedgerConfig())


@pytest.fixture
def loaded_ledger(ledger: Ledger, sample_state: dict[str, Any]) -> Ledger:
    """Ledger bulk-loaded with sample_state."""
    ledger.bulk_load(sample_state)
    return ledger


@pytest.fixture
def state_file(tmp_path: Path, sample_state: dict[str, Any]) -> Path:
    """sample_state written as a JSON file."""
    path = tmp_path / "state.json"
    path.write_text(json.dumps(sample_state), encoding="utf-8")
    return path
