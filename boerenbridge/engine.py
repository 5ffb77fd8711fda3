# boerenbridge/engine.py
"""
Round and game state machine.

Every function takes a GameState and returns a new one; nothing is mutated in
place, so a rejected input (InputRejected) simply leaves the caller holding
the state it passed in. No I/O happens here: saving is up to the caller.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Sequence

from .errors import GameStateError
from .rules import (
    MAX_PLAYERS,
    MIN_PLAYERS,
    TOTAL_ROUNDS,
    create_round,
    is_game_complete,
    next_player,
    score_round,
    turn_order,
)
from .state import GameState, Player, Round, Stage
from .validation import check_achieved, check_achieved_complete, check_prediction

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Game lifecycle
# -----------------------------------------------------------------------------


def check_players(players: Sequence[Player]) -> None:
    """Raise GameStateError unless `players` can sit at one table."""
    if not MIN_PLAYERS <= len(players) <= MAX_PLAYERS:
        raise GameStateError(
            f"A game needs {MIN_PLAYERS} to {MAX_PLAYERS} players; got {len(players)}"
        )
    ids = [p.id for p in players]
    if len(set(ids)) != len(ids):
        raise GameStateError("Player ids must be unique")
    names = [p.name.strip().lower() for p in players]
    if "" in names or len(set(names)) != len(names):
        raise GameStateError("Player names must be non-empty and unique")


def initialize_new_game(players: Sequence[Player]) -> GameState:
    """Start a game for already validated players; no round exists yet."""
    check_players(players)
    logger.info(
        "Starting new game with %d players: %s",
        len(players),
        ", ".join(p.name for p in players),
    )
    return GameState(
        players=tuple(players),
        rounds=(),
        current_round=1,
        game_started=True,
        game_completed=False,
    )


def ensure_current_round(game_state: GameState) -> GameState:
    """Create and append the round for `current_round` if it does not exist yet."""
    if not game_state.game_started or game_state.game_completed:
        return game_state
    if game_state.active_round is not None:
        return game_state
    if len(game_state.rounds) != game_state.current_round - 1:
        raise GameStateError(
            f"Cannot create round {game_state.current_round} after "
            f"{len(game_state.rounds)} rounds"
        )

    round_state = create_round(game_state)
    logger.debug(
        "Created round %d: %d cards each, dealer %d, starter %d",
        round_state.round_number,
        round_state.cards_per_player,
        round_state.dealer_id,
        round_state.starter_id,
    )
    return replace(game_state, rounds=game_state.rounds + (round_state,))


# -----------------------------------------------------------------------------
# Player input
# -----------------------------------------------------------------------------


def submit(game_state: GameState, value: int) -> GameState:
    """Apply the active player's value to whichever stage the round is in."""
    game_state = ensure_current_round(game_state)
    round_state = _require_active_round(game_state)

    if round_state.stage == Stage.PREDICTION:
        return submit_prediction(game_state, value)
    if round_state.stage == Stage.ACHIEVED:
        return submit_achieved(game_state, value)
    raise GameStateError(f"Round {round_state.round_number} takes no more input")


def submit_prediction(game_state: GameState, value: int) -> GameState:
    """
    Record the active player's prediction and move on to the next player.

    Once every player has predicted, the round moves to the achieved stage and
    the starter is up again.
    """
    game_state = ensure_current_round(game_state)
    round_state = _require_stage(game_state, Stage.PREDICTION)
    player_id = _require_active_player(round_state)

    check_prediction(round_state, game_state.players, player_id, value)

    updated = round_state.with_prediction(player_id, predicted=value)
    following = next_player(player_id, game_state.players, round_state.starter_id)
    if following == round_state.starter_id:
        updated = replace(
            updated,
            stage=Stage.ACHIEVED,
            active_player_id=round_state.starter_id,
        )
        logger.debug(
            "Round %d predictions complete (total %d of %d)",
            updated.round_number,
            updated.total_predicted,
            updated.total_tricks,
        )
    else:
        updated = replace(updated, active_player_id=following)

    return game_state.with_active_round(updated)


def submit_achieved(game_state: GameState, value: int) -> GameState:
    """
    Record the tricks the active player won.

    The last player's entry completes the round, but only if all achieved
    values add up to the tricks played; otherwise it is rejected and earlier
    entries can be corrected with `amend_achieved`.
    """
    game_state = ensure_current_round(game_state)
    round_state = _require_stage(game_state, Stage.ACHIEVED)
    player_id = _require_active_player(round_state)

    check_achieved(round_state, player_id, value)

    updated = round_state.with_prediction(player_id, achieved=value)
    following = next_player(player_id, game_state.players, round_state.starter_id)
    if following != round_state.starter_id:
        return game_state.with_active_round(
            replace(updated, active_player_id=following)
        )

    check_achieved_complete(updated)
    completed = replace(
        score_round(updated),
        stage=Stage.COMPLETE,
        active_player_id=None,
    )
    return _advance(game_state.with_active_round(completed))


def amend_achieved(game_state: GameState, player_id: int, value: int) -> GameState:
    """
    Correct the achieved value of a player who already entered one this round.

    The active player stays the same; the running total rule still applies.
    """
    round_state = _require_stage(game_state, Stage.ACHIEVED)
    _require_active_player(round_state)

    if player_id not in submitted_players(round_state, game_state.players):
        raise GameStateError(
            f"Player {player_id} has not entered achieved tricks in round "
            f"{round_state.round_number}"
        )
    check_achieved(round_state, player_id, value)
    logger.debug(
        "Round %d: player %d achieved amended to %d",
        round_state.round_number,
        player_id,
        value,
    )
    return game_state.with_active_round(
        round_state.with_prediction(player_id, achieved=value)
    )


def submitted_players(round_state: Round, players: Sequence[Player]) -> List[int]:
    """Ids of players who already gave their value in the current stage."""
    if round_state.active_player_id is None:
        return []
    order = turn_order(players, round_state.starter_id)
    return order[: order.index(round_state.active_player_id)]


# -----------------------------------------------------------------------------
# Internals
# -----------------------------------------------------------------------------


def _advance(game_state: GameState) -> GameState:
    finished = game_state.current_round
    next_round = finished + 1
    logger.info("Finished round %d/%d", finished, TOTAL_ROUNDS)

    if is_game_complete(next_round):
        logger.info("Finished game")
        return replace(game_state, current_round=next_round, game_completed=True)

    return ensure_current_round(replace(game_state, current_round=next_round))


def _require_active_round(game_state: GameState) -> Round:
    if not game_state.game_started:
        raise GameStateError("No game has been started")
    if game_state.game_completed:
        raise GameStateError("The game is already completed")
    round_state = game_state.active_round
    if round_state is None:
        raise GameStateError(f"Round {game_state.current_round} has not been created")
    return round_state


def _require_stage(game_state: GameState, stage: Stage) -> Round:
    round_state = _require_active_round(game_state)
    if round_state.stage != stage:
        raise GameStateError(
            f"Round {round_state.round_number} is in the {round_state.stage.value} "
            f"stage, not {stage.value}"
        )
    return round_state


def _require_active_player(round_state: Round) -> int:
    if round_state.active_player_id is None:
        raise GameStateError(f"Round {round_state.round_number} has no active player")
    return round_state.active_player_id
