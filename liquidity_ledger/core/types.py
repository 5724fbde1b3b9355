"""Type definitions and enums for the liquidity incentive ledger."""

from enum import Enum


class OutputFormat(str, Enum):
    """Output formats supported by the CLI formatters."""

    TABLE = "table"
    JSON = "json"
    CSV = "csv"


class LedgerTable(str, Enum):
    """The two mappings held by a ledger."""

    PREFERENCES = "preferences"
    OWNERSHIP = "ownership"


# Type aliases for common patterns
Address = str       # Opaque address key, never verified
TokenSymbol = str   # Token identifier, e.g. "ETH"
PairKey = str       # Canonical "TOKEN_A-TOKEN_B" key
Weight = float      # Preference weight, sums to 1.0 once normalized
Fraction = float    # 0-1 scale
