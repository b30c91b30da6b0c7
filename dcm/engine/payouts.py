"""Stage 3: Payout Distribution, and the end-to-end entry points.

compute_report() runs the whole engine:

1. Validate inputs (leverage bound, winning side, participant records)
2. Weight Assignment  -> WeightedParticipant per row
3. Pool Aggregation   -> PoolSummary
4. Payout Distribution -> ParticipantResult per row, input order preserved

Any validation failure rejects the whole call; there are no partial results.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from numbers import Real
from typing import Any

from pydantic import ValidationError

from dcm.engine.models import (
    SIDES,
    Participant,
    ParticipantResult,
    PayoutReport,
    PoolSummary,
    Side,
    WeightedParticipant,
)
from dcm.engine.pools import aggregate_pools
from dcm.engine.weights import assign_weights, stake_overflow
from dcm.exceptions import (
    InvalidLeverageBoundError,
    InvalidParticipantError,
    InvalidWinningSideError,
)

logger = logging.getLogger(__name__)

DEFAULT_LEVERAGE_BOUND = 5.0

WEIGHTED_FIELDS = set(WeightedParticipant.model_fields)


def distribute_payouts(
    weighted: Iterable[WeightedParticipant],
    pools: PoolSummary,
) -> list[ParticipantResult]:
    """
    Split the losing pool across winners by weight share.

    Losers always get payout 0 and profit -stake. If the winning side carries
    no weight, winners keep their stake with zero profit and the losing pool
    stays unclaimed.
    """
    losing_pool = pools.losing_pool
    winner_total_weight = pools.winner_total_weight

    results = []
    for index, participant in enumerate(weighted):
        if participant.side == pools.winning_side:
            share = participant.weight / winner_total_weight if winner_total_weight > 0 else 0.0
            profit = share * losing_pool
            payout = participant.stake + profit
            if not math.isfinite(payout):
                raise stake_overflow(index, participant, "its payout")
            is_winner = True
        else:
            payout = 0.0
            profit = -participant.stake
            is_winner = False

        results.append(
            ParticipantResult(
                **participant.model_dump(include=WEIGHTED_FIELDS),
                payout=payout,
                profit=profit,
                is_winner=is_winner,
            )
        )

    return results


# ============================================================================
# Input validation
# ============================================================================


def validate_leverage_bound(leverage_bound: Any) -> float:
    if isinstance(leverage_bound, bool) or not isinstance(leverage_bound, Real):
        raise InvalidLeverageBoundError(
            f"Leverage bound must be a number, got {leverage_bound!r}",
            field="leverage_bound",
        )
    if not math.isfinite(leverage_bound) or leverage_bound < 1:
        raise InvalidLeverageBoundError(
            f"Leverage bound must be a finite number >= 1, got {leverage_bound}",
            field="leverage_bound",
        )
    return float(leverage_bound)


def validate_winning_side(winning_side: Any) -> Side:
    if winning_side not in SIDES:
        raise InvalidWinningSideError(
            f"Winning side must be one of {', '.join(SIDES)}, got {winning_side!r}",
            field="winning_side",
        )
    return winning_side


def coerce_participants(
    participants: Iterable[Participant | Mapping[str, Any]],
) -> list[Participant]:
    """Turn mappings into Participant records, naming the row on failure."""
    coerced = []
    for index, item in enumerate(participants):
        if isinstance(item, Participant):
            coerced.append(item)
            continue

        try:
            coerced.append(Participant.model_validate(item))
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(x) for x in error["loc"]) or None
            name = item.get("name") if isinstance(item, Mapping) else None
            raise InvalidParticipantError(
                f"Participant #{index} ({name!r}) has invalid {field}: {error['msg']}",
                index=index,
                name=name,
                field=field,
                value=error.get("input"),
            ) from e

    return coerced


# ============================================================================
# Entry points
# ============================================================================


def compute_report(
    participants: Iterable[Participant | Mapping[str, Any]],
    winning_side: Side,
    leverage_bound: float = DEFAULT_LEVERAGE_BOUND,
) -> PayoutReport:
    """Run all three stages and return results together with the pool summary."""
    leverage_bound = validate_leverage_bound(leverage_bound)
    winning_side = validate_winning_side(winning_side)
    records = coerce_participants(participants)

    weighted = assign_weights(records, leverage_bound)
    pools = aggregate_pools(weighted, winning_side)
    results = distribute_payouts(weighted, pools)

    report = PayoutReport(
        winning_side=winning_side,
        leverage_bound=leverage_bound,
        pools=pools,
        results=results,
    )

    logger.info(
        f"Computed payouts for {len(results)} participants: {winning_side} wins, "
        f"losing pool ${pools.losing_pool:.2f} over winner weight "
        f"{pools.winner_total_weight:.2f}"
    )
    if report.unclaimed_pool > 0:
        logger.info(
            f"Winning side {winning_side} has no weight; "
            f"${report.unclaimed_pool:.2f} left unclaimed"
        )

    return report


def compute_payouts(
    participants: Iterable[Participant | Mapping[str, Any]],
    winning_side: Side,
    leverage_bound: float = DEFAULT_LEVERAGE_BOUND,
) -> list[ParticipantResult]:
    """Per-participant results in input order. Empty input gives []."""
    return compute_report(participants, winning_side, leverage_bound).results
