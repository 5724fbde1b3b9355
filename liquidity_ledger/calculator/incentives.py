"""Pair incentive aggregation.

All calculations use explicit formulas:
- contribution(address, pair) = voting_power(address) × weight(address, pair)
- total_incentive(pair) = Σ contribution(address, pair) over all addresses
- share(address, pair) = contribution(address, pair) / total_incentive(pair)
"""

import logging
from collections import defaultdict
from typing import Mapping, Sequence

from ..core.exceptions import DivisionUndefinedError
from ..core.models import (
    IncentivizedPair,
    OwnershipRecord,
    PairIncentiveDetails,
    PreferenceRecord,
)
from ..core.types import Address, PairKey, TokenSymbol

logger = logging.getLogger(__name__)


def canonical_pair(token_a: TokenSymbol, token_b: TokenSymbol) -> tuple[TokenSymbol, TokenSymbol]:
    """Return the two tokens in sorted order so (A, B) and (B, A) coincide."""
    if token_b < token_a:
        return token_b, token_a
    return token_a, token_b


def pair_key(token_a: TokenSymbol, token_b: TokenSymbol, separator: str = "-") -> PairKey:
    """
    Build the canonical key for an unordered token pair.

    Example:
        pair_key("USDC", "ETH") == "ETH-USDC"
    """
    first, second = canonical_pair(token_a, token_b)
    return f"{first}{separator}{second}"


def calc_contribution(voting_power: float, weight: float) -> float:
    """
    Calculate one address's incentive contribution to a pair.

    Formula: contribution = voting_power × weight
    """
    return voting_power * weight


def aggregate_pair_incentives(
    preferences: Mapping[Address, Sequence[PreferenceRecord]],
    ownership: Mapping[Address, OwnershipRecord],
    separator: str = "-",
) -> dict[PairKey, IncentivizedPair]:
    """
    Aggregate every address's weighted preferences into per-pair incentives.

    Addresses without an ownership record contribute with voting power 0.0
    rather than failing the whole aggregation.

    Args:
        preferences: address -> preference records
        ownership: address -> ownership record
        separator: joins the sorted tokens into the pair key

    Returns:
        pair_key -> IncentivizedPair, in first-seen order
    """
    tokens: dict[PairKey, tuple[TokenSymbol, TokenSymbol]] = {}
    totals: dict[PairKey, float] = defaultdict(float)
    contributions: dict[PairKey, dict[Address, float]] = defaultdict(dict)

    for address, records in preferences.items():
        record = ownership.get(address)
        voting_power = record.voting_power if record is not None else 0.0
        if record is None:
            logger.debug(f"No ownership for {address}, contributing with voting power 0")

        for pref in records:
            key = pair_key(pref.token_a, pref.token_b, separator)
            tokens.setdefault(key, canonical_pair(pref.token_a, pref.token_b))

            contribution = calc_contribution(voting_power, pref.weight)
            totals[key] += contribution
            per_address = contributions[key]
            per_address[address] = per_address.get(address, 0.0) + contribution

    pairs = {
        key: IncentivizedPair(
            pair_key=key,
            token_a=token_a,
            token_b=token_b,
            total_incentive=totals[key],
            contributions=dict(contributions[key]),
        )
        for key, (token_a, token_b) in tokens.items()
    }
    logger.debug(f"Aggregated {len(pairs)} pairs from {len(preferences)} addresses")
    return pairs


def rank_pairs(pairs: Sequence[IncentivizedPair], limit: int) -> list[IncentivizedPair]:
    """
    Sort pairs descending by total incentive and keep the first `limit`.

    Ties keep their input order. A non-positive limit yields an empty list.
    """
    if limit <= 0:
        return []
    ranked = sorted(pairs, key=lambda p: p.total_incentive, reverse=True)
    return ranked[:limit]


def calc_normalized_contributions(pair: IncentivizedPair) -> dict[Address, float]:
    """
    Calculate each address's share of a pair's total incentive.

    Formula: share = contribution / total_incentive

    Raises:
        DivisionUndefinedError: if the total incentive is zero
    """
    total = pair.total_incentive
    if total == 0:
        raise DivisionUndefinedError(pair.pair_key)
    return {address: value / total for address, value in pair.contributions.items()}


def build_pair_details(pair: IncentivizedPair) -> PairIncentiveDetails:
    """Attach normalized contributions to an aggregated pair."""
    return PairIncentiveDetails(
        **pair.model_dump(),
        normalized_contributions=calc_normalized_contributions(pair),
    )
