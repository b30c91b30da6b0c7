"""DCM: confidence-weighted payout distribution for binary staking pools."""

__version__ = "0.1.0"
__author__ = "DCM Team"

from dcm.engine import (
    Participant,
    ParticipantResult,
    PayoutReport,
    PoolSummary,
    compute_payouts,
    compute_report,
)
from dcm.exceptions import (
    InvalidLeverageBoundError,
    InvalidParticipantError,
    InvalidStakeError,
    InvalidWinningSideError,
    PayoutError,
)

__all__ = [
    "__version__",
    "__author__",
    "Participant",
    "ParticipantResult",
    "PayoutReport",
    "PoolSummary",
    "compute_payouts",
    "compute_report",
    "PayoutError",
    "InvalidStakeError",
    "InvalidParticipantError",
    "InvalidLeverageBoundError",
    "InvalidWinningSideError",
]
