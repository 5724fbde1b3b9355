"""Incentive and normalization calculation module."""

from .incentives import (
    aggregate_pair_incentives,
    build_pair_details,
    calc_contribution,
    calc_normalized_contributions,
    canonical_pair,
    pair_key,
    rank_pairs,
)
from .normalization import needs_rescale, normalize_weights, renormalize_stakes

__all__ = [
    "aggregate_pair_incentives",
    "build_pair_details",
    "calc_contribution",
    "calc_normalized_contributions",
    "canonical_pair",
    "pair_key",
    "rank_pairs",
    "needs_rescale",
    "normalize_weights",
    "renormalize_stakes",
]
