"""Payout engine: weight assignment, pool aggregation and payout distribution.

All stages are pure functions over frozen Pydantic models; caller input is
never modified.
"""

from .models import (
    SIDES,
    Participant,
    ParticipantResult,
    PayoutReport,
    PoolSummary,
    Side,
    SideTotals,
    WeightedParticipant,
    opposite_side,
)
from .payouts import (
    DEFAULT_LEVERAGE_BOUND,
    coerce_participants,
    compute_payouts,
    compute_report,
    distribute_payouts,
    validate_leverage_bound,
    validate_winning_side,
)
from .pools import aggregate_pools
from .weights import assign_weights, clamp_confidence, linear_multiplier

__all__ = [
    # Models
    "SIDES",
    "Side",
    "Participant",
    "WeightedParticipant",
    "ParticipantResult",
    "SideTotals",
    "PoolSummary",
    "PayoutReport",
    "opposite_side",
    # Stages
    "clamp_confidence",
    "linear_multiplier",
    "assign_weights",
    "aggregate_pools",
    "distribute_payouts",
    # Entry points
    "DEFAULT_LEVERAGE_BOUND",
    "coerce_participants",
    "validate_leverage_bound",
    "validate_winning_side",
    "compute_report",
    "compute_payouts",
]
