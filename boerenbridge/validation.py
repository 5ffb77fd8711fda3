# boerenbridge/validation.py
from __future__ import annotations

from typing import List, Sequence

from .errors import InputRejected, Rejection, RejectionKind
from .rules import is_last_in_sequence
from .state import Player, Round


def check_range(round_state: Round, value: object) -> None:
    """Reject anything that is not a whole number within 0..total tricks."""
    # bool is an int subclass but never a trick count
    if not isinstance(value, int) or isinstance(value, bool):
        raise InputRejected(RejectionKind.NOT_AN_INTEGER, value=value)

    total = round_state.total_tricks
    if value < 0 or value > total:
        raise InputRejected(
            RejectionKind.OUT_OF_RANGE,
            value=value,
            minimum=0,
            maximum=total,
        )


def forbidden_prediction(round_state: Round, player_id: int) -> int:
    """The one prediction that would make all predictions add up to the total."""
    others = sum(
        p.predicted for p in round_state.predictions if p.player_id != player_id
    )
    return round_state.total_tricks - others


def check_prediction(
    round_state: Round,
    players: Sequence[Player],
    player_id: int,
    value: int,
) -> None:
    """
    Validate a prediction from `player_id`.

    Any in-range value is fine, overbidding included, except for the last
    player in the sequence: their prediction may not bring the sum of all
    predictions to exactly the number of available tricks.
    """
    check_range(round_state, value)

    if not is_last_in_sequence(player_id, players, round_state.starter_id):
        return

    total = round_state.total_tricks
    if value == forbidden_prediction(round_state, player_id):
        raise InputRejected(
            RejectionKind.FORBIDDEN_TOTAL,
            value=value,
            total=total,
        )


def check_achieved(round_state: Round, player_id: int, value: int) -> None:
    """
    Validate an achieved-tricks value from `player_id`.

    The values recorded for everybody else plus this one may never exceed the
    number of tricks that were played.
    """
    check_range(round_state, value)

    total = round_state.total_tricks
    others = sum(
        p.achieved for p in round_state.predictions if p.player_id != player_id
    )
    if others + value > total:
        raise InputRejected(
            RejectionKind.ACHIEVED_EXCEEDS_TOTAL,
            value=value,
            attempted_total=others + value,
            total=total,
        )


def check_achieved_complete(round_state: Round) -> None:
    """All achieved tricks together must account for every trick played."""
    total = round_state.total_tricks
    actual = round_state.total_achieved
    if actual != total:
        raise InputRejected(
            RejectionKind.ACHIEVED_TOTAL_MISMATCH,
            actual_total=actual,
            total=total,
        )


def audit_round(round_state: Round) -> List[Rejection]:
    """
    Check a fully entered round as a whole and list every problem found.

    Used for rounds that claim to be complete, e.g. when reading a saved game.
    An empty list means the round is consistent.
    """
    problems: List[Rejection] = []
    total = round_state.total_tricks

    for prediction in round_state.predictions:
        for value in (prediction.predicted, prediction.achieved):
            try:
                check_range(round_state, value)
            except InputRejected as exc:
                problems.append(exc.rejection)

    if round_state.total_predicted == total:
        problems.append(
            Rejection(
                RejectionKind.PREDICTED_TOTAL_EQUALS_AVAILABLE,
                {"total": total},
            )
        )
    if round_state.total_achieved != total:
        problems.append(
            Rejection(
                RejectionKind.ACHIEVED_TOTAL_MISMATCH,
                {"actual_total": round_state.total_achieved, "total": total},
            )
        )
    return problems
