"""Pydantic data models for the liquidity incentive ledger.

Records are immutable (frozen); the ledger replaces a record instead of
editing it in place, so any record handed to a caller stays valid.

Validation accepts both the field names below and the legacy payload keys
(``signedTxs``/``addyOwnership``, ``token1``/``token2``,
``percentage``/``tokens``) so older exported snapshots load unchanged.
"""

from pydantic import AliasChoices, BaseModel, Field

from .types import Address, Fraction, PairKey, TokenSymbol, Weight


class PreferenceRecord(BaseModel):
    """An address's weighted preference for directing incentive to a token pair."""

    token_a: TokenSymbol = Field(validation_alias=AliasChoices("token_a", "token1"))
    token_b: TokenSymbol = Field(validation_alias=AliasChoices("token_b", "token2"))
    weight: Weight

    model_config = {"frozen": True, "extra": "forbid"}

    @property
    def tokens(self) -> tuple[TokenSymbol, TokenSymbol]:
        """Tokens in canonical (sorted) order."""
        return tuple(sorted((self.token_a, self.token_b)))  # type: ignore[return-value]


class OwnershipRecord(BaseModel):
    """Ownership stake held by one address."""

    stake_fraction: Fraction = Field(
        validation_alias=AliasChoices("stake_fraction", "percentage")
    )
    token_count: int = Field(ge=0, validation_alias=AliasChoices("token_count", "tokens"))
    voting_power: Fraction

    model_config = {"frozen": True, "extra": "forbid"}


class LedgerState(BaseModel):
    """Both ledger mappings: preferences and ownership, keyed by address."""

    preferences: dict[Address, list[PreferenceRecord]] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("preferences", "signedTxs", "signed_txs"),
    )
    ownership: dict[Address, OwnershipRecord] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("ownership", "addyOwnership", "addy_ownership"),
    )

    model_config = {"frozen": True, "extra": "forbid"}

    @property
    def is_empty(self) -> bool:
        """Check if neither mapping holds any entry."""
        return not self.preferences and not self.ownership


class IncentivizedPair(BaseModel):
    """Aggregated incentive for one unordered token pair (derived, never stored)."""

    pair_key: PairKey
    token_a: TokenSymbol
    token_b: TokenSymbol
    total_incentive: float = 0.0
    contributions: dict[Address, float] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @property
    def contributor_count(self) -> int:
        """Number of addresses contributing to this pair."""
        return len(self.contributions)


class PairIncentiveDetails(IncentivizedPair):
    """Incentive for one pair plus each address's share of the total."""

    normalized_contributions: dict[Address, float] = Field(default_factory=dict)
