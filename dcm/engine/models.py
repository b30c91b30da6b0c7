"""Pydantic models flowing through the payout engine.

Participant -> WeightedParticipant -> ParticipantResult, with PoolSummary
produced in between. Every model is frozen: the engine builds new records
at each stage instead of writing fields on the caller's objects.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

Side = Literal["YES", "NO"]

SIDES: tuple[Side, ...] = ("YES", "NO")


def opposite_side(side: Side) -> Side:
    return "NO" if side == "YES" else "YES"


class _FrozenModel(BaseModel):
    # strict: "100" or True are rejected for numeric fields instead of coerced
    model_config = ConfigDict(frozen=True, strict=True)


# ============================================================================
# Participant records
# ============================================================================


class Participant(_FrozenModel):
    """One row of the staking pool."""

    name: str = ""
    stake: float = Field(allow_inf_nan=False)
    confidence: float = Field(allow_inf_nan=False)
    side: Side


class WeightedParticipant(Participant):
    """Participant after weight assignment."""

    multiplier: float
    weight: float


class ParticipantResult(WeightedParticipant):
    """Final per-participant outcome. payout == stake + profit."""

    payout: float
    profit: float
    is_winner: bool


# ============================================================================
# Pool aggregation
# ============================================================================


class SideTotals(_FrozenModel):
    """Stake and weight summed over one side."""

    participants: int = 0
    total_stake: float = 0.0
    total_weight: float = 0.0


class PoolSummary(_FrozenModel):
    """Per-side totals plus the figures payout distribution needs."""

    winning_side: Side
    yes: SideTotals = Field(default_factory=SideTotals)
    no: SideTotals = Field(default_factory=SideTotals)

    def totals_for(self, side: Side) -> SideTotals:
        return self.yes if side == "YES" else self.no

    @computed_field
    @property
    def losing_side(self) -> Side:
        return opposite_side(self.winning_side)

    @computed_field
    @property
    def losing_pool(self) -> float:
        """Total stake of the side that did not win."""
        return self.totals_for(self.losing_side).total_stake

    @computed_field
    @property
    def winner_total_weight(self) -> float:
        return self.totals_for(self.winning_side).total_weight

    @computed_field
    @property
    def winner_total_stake(self) -> float:
        return self.totals_for(self.winning_side).total_stake


class PayoutReport(_FrozenModel):
    """Everything one computation produced, in input order."""

    winning_side: Side
    leverage_bound: float
    pools: PoolSummary
    results: list[ParticipantResult] = Field(default_factory=list)

    @computed_field
    @property
    def total_payout(self) -> float:
        return sum(r.payout for r in self.results)

    @computed_field
    @property
    def unclaimed_pool(self) -> float:
        """Losing stake nobody could claim because winners carry no weight."""
        if self.pools.winner_total_weight > 0:
            return 0.0
        return self.pools.losing_pool
