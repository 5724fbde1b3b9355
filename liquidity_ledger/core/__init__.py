"""Core module - data models, types, config, and exceptions."""

from .models import (
    PreferenceRecord,
    OwnershipRecord,
    LedgerState,
    IncentivizedPair,
    PairIncentiveDetails,
)
from .types import (
    OutputFormat,
    LedgerTable,
)
from .config import LedgerConfig, get_config, reload_config
from .exceptions import (
    LedgerError,
    InvalidInputError,
    UnknownAddressError,
    InvalidRangeError,
    ZeroTotalWeightError,
    PairNotFoundError,
    DivisionUndefinedError,
    ConfigurationError,
)

__all__ = [
    # Models
    "PreferenceRecord",
    "OwnershipRecord",
    "LedgerState",
    "IncentivizedPair",
    "PairIncentiveDetails",
    # Types
    "OutputFormat",
    "LedgerTable",
    # Config
    "LedgerConfig",
    "get_config",
    "reload_config",
    # Exceptions
    "LedgerError",
    "InvalidInputError",
    "UnknownAddressError",
    "InvalidRangeError",
    "ZeroTotalWeightError",
    "PairNotFoundError",
    "DivisionUndefinedError",
    "ConfigurationError",
]
