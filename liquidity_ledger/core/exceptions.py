"""Custom exceptions for the liquidity incentive ledger."""


class LedgerError(Exception):
    """Base exception for all ledger errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidInputError(LedgerError):
    """Raised when a bulk-load payload or a token symbol is malformed."""

    def __init__(self, reason: str):
        message = f"Invalid ledger state: {reason}"
        super().__init__(message, {"reason": reason})
        self.reason = reason


class UnknownAddressError(LedgerError):
    """Raised when an address is absent from the table an operation requires."""

    def __init__(self, address: str, table: str):
        message = f"Address not found in {table} table: {address}"
        super().__init__(message, {"address": address, "table": table})
        self.address = address
        self.table = table


class InvalidRangeError(LedgerError):
    """Raised when a numeric argument falls outside its allowed range."""

    def __init__(self, field: str, value: float, reason: str):
        message = f"Invalid {field}={value}: {reason}"
        super().__init__(message, {"field": field, "value": value})
        self.field = field
        self.value = value


class ZeroTotalWeightError(LedgerError):
    """Raised when an address's preference weights sum to zero."""

    def __init__(self, address: str):
        message = f"Cannot normalize preferences for {address}: total weight is zero"
        super().__init__(message, {"address": address})
        self.address = address


class PairNotFoundError(LedgerError):
    """Raised when no preference contributes to the queried token pair."""

    def __init__(self, token_a: str, token_b: str):
        message = f"Token pair not found in incentives: {token_a}/{token_b}"
        super().__init__(message, {"token_a": token_a, "token_b": token_b})
        self.token_a = token_a
        self.token_b = token_b


class DivisionUndefinedError(LedgerError):
    """Raised when contributions cannot be normalized against a zero total."""

    def __init__(self, pair_key: str):
        message = f"Total incentive for {pair_key} is zero, shares are undefined"
        super().__init__(message, {"pair_key": pair_key})
        self.pair_key = pair_key


class ConfigurationError(LedgerError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, config_key: str, message: str):
        full_message = f"Configuration error [{config_key}]: {message}"
        super().__init__(full_message, {"config_key": config_key})
        self.config_key = config_key
