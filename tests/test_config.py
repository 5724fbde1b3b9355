"""Tests for ledger configuration."""

import os

import pytest

from liquidity_ledger.core.config import LedgerConfig, reload_config
from liquidity_ledger.core.exceptions import ConfigurationError


class TestLedgerConfig:
    """Tests for LedgerConfig."""

    def test_defaults(self):
        """Defaults match the documented tolerance, limit and separator."""
        config = LedgerConfig()
        assert config.normalization_tolerance == 1e-3
        assert config.default_top_limit == 5
        assert config.pair_separator == "-"

    def test_from_env(self, monkeypatch):
        """Environment variables override the defaults."""
        monkeypatch.setenv("LEDGER_NORMALIZATION_TOLERANCE", "0.01")
        monkeypatch.setenv("LEDGER_DEFAULT_TOP_LIMIT", "10")
        monkeypatch.setenv("LEDGER_PAIR_SEPARATOR", "/")

        config = LedgerConfig.from_env()
        assert config.normalization_tolerance == 0.01
        assert config.default_top_limit == 10
        assert config.pair_separator == "/"

    def test_from_env_blank_uses_default(self, monkeypatch):
        """Blank values fall back to defaults."""
        monkeypatch.setenv("LEDGER_DEFAULT_TOP_LIMIT", "  ")
        assert LedgerConfig.from_env().default_top_limit == 5

    def test_from_env_invalid_number(self, monkeypatch):
        """Non-numeric values raise ConfigurationError."""
        monkeypatch.setenv("LEDGER_DEFAULT_TOP_LIMIT", "many")
        with pytest.raises(ConfigurationError) as exc_info:
            LedgerConfig.from_env()
        assert exc_info.value.config_key == "LEDGER_DEFAULT_TOP_LIMIT"

    @pytest.mark.parametrize("tolerance", [-1.0, float("nan")])
    def test_invalid_tolerance(self, tolerance):
        """Tolerances must be non-negative numbers."""
        with pytest.raises(ConfigurationError):
            LedgerConfig(normalization_tolerance=tolerance)

    def test_nan_tolerance_from_env(self, monkeypatch):
        """float() parses "nan", so the env path must reject it too."""
        monkeypatch.setenv("LEDGER_NORMALIZATION_TOLERANCE", "nan")
        with pytest.raises(ConfigurationError):
            LedgerConfig.from_env()

    def test_empty_separator(self):
        """Pair keys need a separator."""
        with pytest.raises(ConfigurationError):
            LedgerConfig(pair_separator="")

    def test_load_env_file(self, tmp_path, monkeypatch):
        """Values in a .env file are picked up."""
        monkeypatch.delenv("LEDGER_DEFAULT_TOP_LIMIT", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("LEDGER_DEFAULT_TOP_LIMIT=7\n", encoding="utf-8")

        config = reload_config(env_file)
        # load_dotenv wrote into os.environ; drop it again for other tests
        os.environ.pop("LEDGER_DEFAULT_TOP_LIMIT", None)
        reload_config()

        assert config.default_top_limit == 7
