# boerenbridge/errors.py
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


class RejectionKind(enum.Enum):
    NOT_AN_INTEGER = "not_an_integer"
    OUT_OF_RANGE = "out_of_range"
    FORBIDDEN_TOTAL = "forbidden_total"
    ACHIEVED_EXCEEDS_TOTAL = "achieved_exceeds_total"
    ACHIEVED_TOTAL_MISMATCH = "achieved_total_mismatch"
    PREDICTED_TOTAL_EQUALS_AVAILABLE = "predicted_total_equals_available"
    TOO_FEW_PLAYERS = "too_few_players"
    TOO_MANY_PLAYERS = "too_many_players"
    NAME_TOO_LONG = "name_too_long"
    DUPLICATE_NAME = "duplicate_name"


_MESSAGES: Dict[RejectionKind, str] = {
    RejectionKind.NOT_AN_INTEGER: "Value {value!r} is not a whole number.",
    RejectionKind.OUT_OF_RANGE: (
        "Value {value} must be between {minimum} and {maximum}."
    ),
    RejectionKind.FORBIDDEN_TOTAL: (
        "Cannot predict {value}: the predictions would add up to {total}, "
        "the number of available tricks. Choose a different number."
    ),
    RejectionKind.ACHIEVED_EXCEEDS_TOTAL: (
        "Achieved tricks would add up to {attempted_total}, more than the "
        "{total} available."
    ),
    RejectionKind.ACHIEVED_TOTAL_MISMATCH: (
        "Achieved tricks add up to {actual_total} but must equal {total}."
    ),
    RejectionKind.PREDICTED_TOTAL_EQUALS_AVAILABLE: (
        "Predicted tricks add up to {total}, the number of available tricks."
    ),
    RejectionKind.TOO_FEW_PLAYERS: (
        "At least {minimum} players are needed; got {count}."
    ),
    RejectionKind.TOO_MANY_PLAYERS: (
        "At most {maximum} players can play; got {count}."
    ),
    RejectionKind.NAME_TOO_LONG: (
        "Name {name!r} is longer than {maximum} characters."
    ),
    RejectionKind.DUPLICATE_NAME: "Every player needs a unique name ({name!r}).",
}


@dataclass(frozen=True)
class Rejection:
    """
    Structured description of a refused input.

    `kind` identifies the violated constraint and `params` carries the values
    involved, so a presentation layer can render its own localized text.
    `message` is a plain English fallback.
    """
    kind: RejectionKind
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def message(self) -> str:
        return _MESSAGES[self.kind].format(**self.params)

    def as_pair(self) -> Tuple[str, Dict[str, Any]]:
        return self.kind.value, dict(self.params)


class BoerenbridgeError(Exception):
    """Base exception for scorekeeping errors."""


class GameStateError(BoerenbridgeError, RuntimeError):
    """Raised when an operation is attempted in a state that does not allow it."""


class InputRejected(BoerenbridgeError, ValueError):
    """Raised when a submitted value breaks a rule; the state is left unchanged."""

    def __init__(self, kind: RejectionKind, **params: Any) -> None:
        self.rejection = Rejection(kind=kind, params=params)
        super().__init__(self.rejection.message)

    @property
    def kind(self) -> RejectionKind:
        return self.rejection.kind

    @property
    def params(self) -> Dict[str, Any]:
        return self.rejection.params
