"""Configuration management for ledger tuning knobs.

Loads configuration from environment variables or a .env file. The ledger
never reads the environment itself; callers pass a config in.
"""

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, TypeVar

from dotenv import load_dotenv

from .exceptions import ConfigurationError

DEFAULT_NORMALIZATION_TOLERANCE = 1e-3
DEFAULT_TOP_LIMIT = 5
DEFAULT_PAIR_SEPARATOR = "-"

N = TypeVar("N", int, float)


@dataclass(frozen=True)
class LedgerConfig:
    """Tuning knobs for a Ledger instance."""

    # Sums within this distance of 1.0 are treated as already normalized
    normalization_tolerance: float = DEFAULT_NORMALIZATION_TOLERANCE

    # Number of pairs returned by top_incentivized_pairs() when no limit is given
    default_top_limit: int = DEFAULT_TOP_LIMIT

    # Joins the sorted tokens of a pair into its key ("ETH-USDC")
    pair_separator: str = DEFAULT_PAIR_SEPARATOR

    def __post_init__(self) -> None:
        # NaN fails every comparison, including the one below
        if math.isnan(self.normalization_tolerance) or self.normalization_tolerance < 0:
            raise ConfigurationError(
                "normalization_tolerance", "must be a non-negative number"
            )
        if not self.pair_separator:
            raise ConfigurationError("pair_separator", "must not be empty")

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Load configuration from environment variables."""
        return cls(
            normalization_tolerance=_env_number(
                "LEDGER_NORMALIZATION_TOLERANCE", DEFAULT_NORMALIZATION_TOLERANCE, float
            ),
            default_top_limit=_env_number(
                "LEDGER_DEFAULT_TOP_LIMIT", DEFAULT_TOP_LIMIT, int
            ),
            pair_separator=os.getenv("LEDGER_PAIR_SEPARATOR", DEFAULT_PAIR_SEPARATOR),
        )

    @classmethod
    def load(cls, env_file: Optional[Path] = None) -> "LedgerConfig":
        """
        Load configuration from .env file and environment variables.

        Args:
            env_file: Optional path to .env file. If not provided,
                      looks for .env in the project root.

        Returns:
            LedgerConfig instance with loaded values
        """
        if env_file:
            load_dotenv(env_file)
        else:
            project_root = Path(__file__).parent.parent.parent
            env_path = project_root / ".env"
            if env_path.exists():
                load_dotenv(env_path)

        return cls.from_env()


def _env_number(name: str, default: N, cast: Callable[[str], N]) -> N:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ConfigurationError(name, f"expected {cast.__name__}, got {raw!r}")


# Global config instance (lazy loaded)
_config: Optional[LedgerConfig] = None


def get_config() -> LedgerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = LedgerConfig.load()
    return _config


def reload_config(env_file: Optional[Path] = None) -> LedgerConfig:
    """Reload configuration from environment."""
    global _config
    _config = LedgerConfig.load(env_file)
    return _config
