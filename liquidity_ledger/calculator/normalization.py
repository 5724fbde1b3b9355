"""Weight and stake normalization.

Both rescalings are hysteretic: a sum already within `tolerance` of 1.0 is
left alone, so repeated calls never accumulate floating-point drift.
"""

import logging
from typing import Mapping, Sequence

from ..core.models import OwnershipRecord, PreferenceRecord
from ..core.types import Address

logger = logging.getLogger(__name__)


def needs_rescale(total: float, tolerance: float) -> bool:
    """Check if a sum is further than `tolerance` from 1.0."""
    return abs(total - 1.0) > tolerance


def normalize_weights(
    records: Sequence[PreferenceRecord],
    tolerance: float,
) -> list[PreferenceRecord]:
    """
    Rescale preference weights so they sum to 1.0.

    Formula: weight' = weight / Σ weight

    The caller guarantees a nonzero sum.

    Returns:
        New records when rescaling was needed, otherwise the input records
    """
    total = sum(r.weight for r in records)
    if not needs_rescale(total, tolerance):
        return list(records)

    logger.debug(f"Rescaling {len(records)} weights (Σ = {total:.6f})")
    return [r.model_copy(update={"weight": r.weight / total}) for r in records]


def renormalize_stakes(
    ownership: Mapping[Address, OwnershipRecord],
    tolerance: float,
) -> dict[Address, OwnershipRecord]:
    """
    Rescale stake fractions so they sum to 1.0 and align voting power with them.

    Formula: stake' = stake / Σ stake, voting_power' = stake'

    A zero total leaves every record untouched.
    """
    total = sum(r.stake_fraction for r in ownership.values())
    if total == 0 or not needs_rescale(total, tolerance):
        return dict(ownership)

    logger.debug(f"Renormalizing {len(ownership)} stakes (Σ = {total:.6f})")
    rescaled: dict[Address, OwnershipRecord] = {}
    for address, record in ownership.items():
        stake = record.stake_fraction / total
        rescaled[address] = record.model_copy(
            update={"stake_fraction": stake, "voting_power": stake}
        )
    return rescaled
