"""Stage 2: Pool Aggregation."""

import logging
import math
from collections.abc import Iterable

from dcm.engine.models import PoolSummary, Side, SideTotals, WeightedParticipant
from dcm.engine.weights import stake_overflow

logger = logging.getLogger(__name__)


def _side_totals(weighted: list[WeightedParticipant], side: Side) -> SideTotals:
    participants = 0
    total_stake = 0.0
    total_weight = 0.0
    for index, p in enumerate(weighted):
        if p.side != side:
            continue
        participants += 1
        total_stake += p.stake
        total_weight += p.weight
        if not (math.isfinite(total_stake) and math.isfinite(total_weight)):
            raise stake_overflow(index, p, f"the {side} pool totals")

    return SideTotals(
        participants=participants,
        total_stake=total_stake,
        total_weight=total_weight,
    )


def aggregate_pools(
    weighted: Iterable[WeightedParticipant],
    winning_side: Side,
) -> PoolSummary:
    """Sum stake and weight per side. Empty sides total to zero."""
    weighted = list(weighted)
    pools = PoolSummary(
        winning_side=winning_side,
        yes=_side_totals(weighted, "YES"),
        no=_side_totals(weighted, "NO"),
    )

    logger.debug(
        f"Pools: YES stake={pools.yes.total_stake:.2f} weight={pools.yes.total_weight:.2f} | "
        f"NO stake={pools.no.total_stake:.2f} weight={pools.no.total_weight:.2f}"
    )
    return pools
