"""Ledger of ownership stakes and token-pair preferences.

The Ledger is the only stateful object in the package. It owns two mappings:

    preferences: { address: [PreferenceRecord, ...], ... }
    ownership:   { address: OwnershipRecord, ... }

Every derived value (normalized weights, pair incentives, rankings) is
recomputed from these mappings on each call by the pure functions in
:mod:`liquidity_ledger.calculator`. Failed calls leave state unchanged.

Update policy for preferences:
    - the address must already hold an ownership record
    - an existing record for the same unordered pair has its weight overwritten
    - weights are not normalized on insert; call normalize_preferences()
    - token symbols may not contain the configured pair separator, so
      every pair key maps back to exactly one pair

Thread safety:
    Not thread-safe. Serialize access to one instance or keep it on one task.
"""

import logging
from typing import Any, Mapping

from pydantic import ValidationError

from .calculator.incentives import (
    aggregate_pair_incentives,
    build_pair_details,
    canonical_pair,
    pair_key,
    rank_pairs,
)
from .calculator.normalization import normalize_weights, renormalize_stakes
from .core.config import LedgerConfig
from .core.exceptions import (
    InvalidInputError,
    InvalidRangeError,
    PairNotFoundError,
    UnknownAddressError,
    ZeroTotalWeightError,
)
from .core.models import (
    IncentivizedPair,
    LedgerState,
    OwnershipRecord,
    PairIncentiveDetails,
    PreferenceRecord,
)
from .core.types import Address, LedgerTable, PairKey, TokenSymbol

logger = logging.getLogger(__name__)


class Ledger:
    """
    Holds stakes and preferences and derives pair incentives from them.

    Usage:
        ledger = Ledger()
        ledger.set_ownership("alice", 600_000, 0.6)
        ledger.upsert_preference("alice", "ETH", "USDC", 0.7)

        top = ledger.top_incentivized_pairs(3)
        details = ledger.pair_details("USDC", "ETH")
    """

    def __init__(self, config: LedgerConfig | None = None):
        """
        Initialize an empty ledger.

        Args:
            config: Tuning knobs; defaults to LedgerConfig() so that
                    instances never depend on the environment
        """
        self.config = config or LedgerConfig()
        self._preferences: dict[Address, list[PreferenceRecord]] = {}
        self._ownership: dict[Address, OwnershipRecord] = {}

    def __repr__(self) -> str:
        return (
            f"Ledger(addresses={len(self._ownership)}, "
            f"preference_lists={len(self._preferences)})"
        )

    # ------------------------------------------------------------------ #
    # State lifecycle
    # ------------------------------------------------------------------ #
    def bulk_load(self, data: LedgerState | Mapping[str, Any] | None) -> None:
        """
        Replace both mappings with caller-supplied content.

        The payload is trusted verbatim: weights and stakes are neither
        range-checked nor normalized. Only its shape is validated.

        Args:
            data: A LedgerState, or a mapping validated into one

        Raises:
            InvalidInputError: if data is absent or not well-formed, or a
                               token contains the pair separator
        """
        if data is None:
            raise InvalidInputError("no data supplied")

        if isinstance(data, LedgerState):
            state = data
        elif isinstance(data, Mapping):
            try:
                state = LedgerState.model_validate(dict(data))
            except ValidationError as e:
                first = e.errors()[0]
                location = ".".join(str(part) for part in first["loc"])
                raise InvalidInputError(
                    f"{e.error_count()} validation error(s), first at {location}: {first['msg']}"
                ) from e
        else:
            raise InvalidInputError(f"expected a mapping, got {type(data).__name__}")

        for records in state.preferences.values():
            for record in records:
                self._check_tokens(record.token_a, record.token_b)

        self._preferences = {
            address: list(records) for address, records in state.preferences.items()
        }
        self._ownership = dict(state.ownership)
        logger.info(
            f"Loaded {len(self._ownership)} ownership records and "
            f"{len(self._preferences)} preference lists"
        )

    def reset(self) -> None:
        """Clear both mappings."""
        self._preferences = {}
        self._ownership = {}
        logger.debug("Ledger reset")

    def get_snapshot(self) -> LedgerState:
        """Return a deep copy of both mappings."""
        state = LedgerState(preferences=self._preferences, ownership=self._ownership)
        return state.model_copy(deep=True)

    # ------------------------------------------------------------------ #
    # Ownership
    # ------------------------------------------------------------------ #
    def get_ownership(self, address: Address) -> OwnershipRecord:
        """
        Look up an address's ownership record.

        Raises:
            UnknownAddressError: if the address holds no stake
        """
        record = self._ownership.get(address)
        if record is None:
            raise UnknownAddressError(address, LedgerTable.OWNERSHIP.value)
        return record.model_copy()

    def set_ownership(
        self,
        address: Address,
        token_count: int,
        stake_fraction: float,
    ) -> OwnershipRecord:
        """
        Write an address's stake, overwriting any previous record.

        Voting power is set equal to the stake fraction. Other addresses are
        not touched; call renormalize_voting_power() to rebalance.

        Args:
            address: Address key
            token_count: Tokens held (non-negative)
            stake_fraction: Share of the tracked supply (0-1)

        Returns:
            The new ownership record

        Raises:
            InvalidRangeError: if stake_fraction is outside [0, 1] or
                               token_count is not a non-negative integer
        """
        if not 0.0 <= stake_fraction <= 1.0:
            raise InvalidRangeError(
                "stake_fraction", stake_fraction, "must be between 0 and 1"
            )
        if isinstance(token_count, bool) or not isinstance(token_count, int):
            raise InvalidRangeError("token_count", token_count, "must be an integer")
        if token_count < 0:
            raise InvalidRangeError("token_count", token_count, "must be non-negative")

        record = OwnershipRecord(
            stake_fraction=stake_fraction,
            token_count=token_count,
            voting_power=stake_fraction,
        )
        self._ownership[address] = record
        logger.debug(f"Ownership for {address}: {stake_fraction:.6f} ({token_count:,} tokens)")
        return record.model_copy()

    def renormalize_voting_power(self) -> dict[Address, OwnershipRecord]:
        """
        Rescale all stakes so they sum to 1.0 and set voting power to match.

        No-op when the stakes sum to zero or are already within tolerance of
        1.0, which makes the operation idempotent.

        Returns:
            Copy of the ownership mapping after the rescale
        """
        self._ownership = renormalize_stakes(
            self._ownership, self.config.normalization_tolerance
        )
        return dict(self._ownership)

    # ------------------------------------------------------------------ #
    # Preferences
    # ------------------------------------------------------------------ #
    def upsert_preference(
        self,
        address: Address,
        token_a: TokenSymbol,
        token_b: TokenSymbol,
        weight: float,
    ) -> list[PreferenceRecord]:
        """
        Add or replace an address's preference for an unordered token pair.

        The record is stored with its tokens in sorted order. A record already
        present for the same pair (in either token order) is replaced in place
        with the new weight.

        Returns:
            Copy of the address's preference list

        Raises:
            UnknownAddressError: if the address holds no ownership record
            InvalidInputError: if a token contains the pair separator
        """
        if address not in self._ownership:
            raise UnknownAddressError(address, LedgerTable.OWNERSHIP.value)
        self._check_tokens(token_a, token_b)

        first, second = canonical_pair(token_a, token_b)
        record = PreferenceRecord(token_a=first, token_b=second, weight=weight)
        records = self._preferences.setdefault(address, [])

        for idx, existing in enumerate(records):
            if existing.tokens == (first, second):
                records[idx] = record
                logger.debug(f"Updated {address} preference {first}/{second} -> {weight}")
                break
        else:
            records.append(record)
            logger.debug(f"Added {address} preference {first}/{second} -> {weight}")

        return list(records)

    def normalize_preferences(self, address: Address) -> list[PreferenceRecord]:
        """
        Rescale an address's preference weights so they sum to 1.0.

        Weights already within tolerance of 1.0 are left untouched.

        Returns:
            Copy of the address's (possibly rescaled) preference list

        Raises:
            UnknownAddressError: if the address has no preference records
            ZeroTotalWeightError: if the weights sum to zero
        """
        records = self._preferences.get(address)
        if not records:
            raise UnknownAddressError(address, LedgerTable.PREFERENCES.value)

        if sum(r.weight for r in records) == 0:
            raise ZeroTotalWeightError(address)

        self._preferences[address] = normalize_weights(
            records, self.config.normalization_tolerance
        )
        return list(self._preferences[address])

    def _check_tokens(self, *tokens: TokenSymbol) -> None:
        separator = self.config.pair_separator
        for token in tokens:
            if separator in token:
                raise InvalidInputError(
                    f"token {token!r} contains the pair separator {separator!r}"
                )

    # ------------------------------------------------------------------ #
    # Pair incentives
    # ------------------------------------------------------------------ #
    def compute_incentivized_pairs(self) -> dict[PairKey, IncentivizedPair]:
        """
        Aggregate incentives for every token pair with a preference.

        Returns:
            pair_key -> IncentivizedPair, rebuilt on each call
        """
        return aggregate_pair_incentives(
            self._preferences, self._ownership, self.config.pair_separator
        )

    def top_incentivized_pairs(self, limit: int | None = None) -> list[IncentivizedPair]:
        """
        Return the most incentivized pairs, highest total first.

        Args:
            limit: Maximum number of pairs (default from config, 5).
                   Zero or negative returns an empty list.

        Ties keep aggregation order; callers should not depend on it.
        """
        if limit is None:
            limit = self.config.default_top_limit
        pairs = self.compute_incentivized_pairs()
        return rank_pairs(list(pairs.values()), limit)

    def pair_details(self, token_a: TokenSymbol, token_b: TokenSymbol) -> PairIncentiveDetails:
        """
        Return one pair's incentive with each address's share of the total.

        Token order does not matter.

        Raises:
            PairNotFoundError: if no preference targets the pair
            DivisionUndefinedError: if the pair's total incentive is zero
        """
        key = pair_key(token_a, token_b, self.config.pair_separator)
        pair = self.compute_incentivized_pairs().get(key)
        if pair is None:
            raise PairNotFoundError(token_a, token_b)
        return build_pair_details(pair)
