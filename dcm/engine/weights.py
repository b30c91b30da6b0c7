"""Stage 1: Weight Assignment."""

import logging
import math
from collections.abc import Iterable

from dcm.engine.models import Participant, WeightedParticipant
from dcm.exceptions import InvalidStakeError

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = 0.0
MAX_CONFIDENCE = 100.0

PARTICIPANT_FIELDS = set(Participant.model_fields)


def clamp_confidence(confidence: float) -> float:
    """Clamp a confidence percentage into [0, 100]."""
    return min(max(confidence, MIN_CONFIDENCE), MAX_CONFIDENCE)


def linear_multiplier(confidence: float, leverage_bound: float) -> float:
    """
    Multiplier growing linearly from 1 at 0% confidence to leverage_bound at 100%.

    Out-of-range confidence is clamped first, so the result always lies in
    [1, leverage_bound].
    """
    confidence_factor = clamp_confidence(confidence) / MAX_CONFIDENCE
    return 1 + (leverage_bound - 1) * confidence_factor


def check_stakes(participants: list[Participant]) -> None:
    """Reject the whole batch if any stake is negative."""
    for index, participant in enumerate(participants):
        if participant.stake < 0:
            logger.warning(
                f"Rejected participant #{index} ({participant.name!r}): "
                f"negative stake {participant.stake}"
            )
            raise InvalidStakeError(
                f"Participant #{index} ({participant.name!r}) has negative stake "
                f"{participant.stake}",
                index=index,
                name=participant.name,
                field="stake",
                value=participant.stake,
            )


def stake_overflow(index: int, participant: Participant, quantity: str) -> InvalidStakeError:
    """Error for a stake so large that a derived amount is no longer finite."""
    logger.warning(
        f"Rejected participant #{index} ({participant.name!r}): "
        f"stake {participant.stake} overflows {quantity}"
    )
    return InvalidStakeError(
        f"Participant #{index} ({participant.name!r}) has stake {participant.stake} "
        f"too large to compute {quantity}",
        index=index,
        name=participant.name,
        field="stake",
        value=participant.stake,
    )


def assign_weights(
    participants: Iterable[Participant],
    leverage_bound: float,
) -> list[WeightedParticipant]:
    """Derive multiplier and weight for every participant, in input order."""
    participants = list(participants)
    check_stakes(participants)

    weighted = []
    for index, participant in enumerate(participants):
        if not MIN_CONFIDENCE <= participant.confidence <= MAX_CONFIDENCE:
            logger.debug(
                f"Clamping confidence {participant.confidence} for {participant.name!r}"
            )

        multiplier = linear_multiplier(participant.confidence, leverage_bound)
        weight = participant.stake * multiplier
        if not math.isfinite(weight):
            raise stake_overflow(index, participant, "its weight")

        weighted.append(
            WeightedParticipant(
                **participant.model_dump(include=PARTICIPANT_FIELDS),
                multiplier=multiplier,
                weight=weight,
            )
        )

    return weighted
