# boerenbridge/__init__.py
from .engine import (
    amend_achieved,
    ensure_current_round,
    initialize_new_game,
    submit,
    submit_achieved,
    submit_prediction,
)
from .errors import GameStateError, InputRejected, Rejection, RejectionKind
from .players import create_players
from .rules import (
    TOTAL_ROUNDS,
    cards_per_player,
    create_round,
    next_player,
    score,
    total_score,
)
from .session import ScoreKeeper
from .state import GameState, Player, Prediction, Round, Stage

__all__ = [
    "GameState",
    "Player",
    "Prediction",
    "Round",
    "Stage",
    "GameStateError",
    "InputRejected",
    "Rejection",
    "RejectionKind",
    "ScoreKeeper",
    "TOTAL_ROUNDS",
    "amend_achieved",
    "cards_per_player",
    "create_players",
    "create_round",
    "ensure_current_round",
    "initialize_new_game",
    "next_player",
    "score",
    "submit",
    "submit_achieved",
    "submit_prediction",
    "total_score",
]
