"""Liquidity Incentive Ledger.

Tracks fractional ownership stakes and weighted token-pair preferences per
address, and derives stake-weighted incentive scores for each token pair.
"""

__version__ = "0.1.0"

from .ledger import Ledger

__all__ = ["Ledger", "__version__"]
