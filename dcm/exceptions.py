"""Errors raised when a payout computation or its input is rejected."""

from typing import Any


class PayoutError(Exception):
    """Base exception for rejected payout computations."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        return {"error": type(self).__name__, "message": str(self), "field": self.field}


class ParticipantError(PayoutError):
    """A single participant record violated the input contract."""

    def __init__(
        self,
        message: str,
        index: int,
        name: str | None = None,
        field: str | None = None,
        value: Any = None,
    ):
        super().__init__(message, field=field)
        self.index = index
        self.name = name
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update({"index": self.index, "name": self.name})
        return data


class InvalidStakeError(ParticipantError):
    """Stake is negative."""

    pass


class InvalidParticipantError(ParticipantError):
    """Participant record failed type validation."""

    pass


class InvalidLeverageBoundError(PayoutError):
    """Leverage bound is below 1 or not a finite number."""

    pass


class InvalidWinningSideError(PayoutError):
    """Winning side is not YES or NO."""

    pass


class RosterError(PayoutError):
    """Roster file is missing, unreadable or malformed."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
