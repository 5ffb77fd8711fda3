# boerenbridge/storage.py
"""
Saving and loading a game as a JSON snapshot.

The snapshot is a plain key-value structure mirroring GameState. It carries no
schema version; a file that cannot be read back into a consistent GameState
is treated as if no game had been saved.
"""
from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional

from .config import default_save_path
from .engine import check_players
from .errors import GameStateError
from .rules import TOTAL_ROUNDS, create_round, is_game_complete
from .state import GameState, Player, Prediction, Round, Stage
from .validation import audit_round

logger = logging.getLogger(__name__)


def _prediction_to_dict(prediction: Prediction) -> Dict[str, Any]:
    return {
        "player_id": prediction.player_id,
        "predicted": prediction.predicted,
        "achieved": prediction.achieved,
        "score": prediction.score,
    }


def _round_to_dict(round_state: Round) -> Dict[str, Any]:
    return {
        "round_number": round_state.round_number,
        "cards_per_player": round_state.cards_per_player,
        "dealer_id": round_state.dealer_id,
        "starter_id": round_state.starter_id,
        "stage": round_state.stage.value,
        "active_player_id": round_state.active_player_id,
        "predictions": [_prediction_to_dict(p) for p in round_state.predictions],
    }


def _int(value: Any) -> int:
    # JSON booleans would otherwise pass as 0/1
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Expected an integer, got {value!r}")
    return value


def _round_from_dict(d: Dict[str, Any]) -> Round:
    active = d.get("active_player_id")
    return Round(
        round_number=_int(d["round_number"]),
        cards_per_player=_int(d["cards_per_player"]),
        dealer_id=_int(d["dealer_id"]),
        starter_id=_int(d["starter_id"]),
        stage=Stage(d["stage"]),
        active_player_id=None if active is None else _int(active),
        predictions=tuple(
            Prediction(
                player_id=_int(p["player_id"]),
                predicted=_int(p["predicted"]),
                achieved=_int(p["achieved"]),
                score=_int(p["score"]),
            )
            for p in d["predictions"]
        ),
    )


def game_state_to_dict(game_state: GameState) -> Dict[str, Any]:
    """Serialize a GameState to a JSON-compatible dict."""
    return {
        "players": [{"id": p.id, "name": p.name} for p in game_state.players],
        "rounds": [_round_to_dict(r) for r in game_state.rounds],
        "current_round": game_state.current_round,
        "game_started": game_state.game_started,
        "game_completed": game_state.game_completed,
    }


def game_state_from_dict(d: Dict[str, Any]) -> GameState:
    """
    Deserialize a GameState from a dict produced by `game_state_to_dict`.

    Raises ValueError (or KeyError/TypeError for missing or mistyped fields)
    when the data does not describe a consistent game.
    """
    players = tuple(
        Player(id=_int(p["id"]), name=str(p["name"])) for p in d["players"]
    )
    game_state = GameState(
        players=players,
        rounds=tuple(_round_from_dict(r) for r in d["rounds"]),
        current_round=_int(d["current_round"]),
        game_started=bool(d["game_started"]),
        game_completed=bool(d["game_completed"]),
    )
    _check_consistency(game_state)
    return game_state


def _check_consistency(game_state: GameState) -> None:
    try:
        check_players(game_state.players)
    except GameStateError as exc:
        raise ValueError(str(exc)) from exc
    player_ids = [p.id for p in game_state.players]

    current = game_state.current_round
    if not game_state.game_started:
        raise ValueError("Saved game was never started")
    if not 1 <= current <= TOTAL_ROUNDS + 1:
        raise ValueError(f"Invalid current round {current}")
    if game_state.game_completed != is_game_complete(current):
        raise ValueError("game_completed does not match current_round")
    # every earlier round is kept; the current one may not be created yet
    if len(game_state.rounds) not in (current - 1, min(current, TOTAL_ROUNDS)):
        raise ValueError(
            f"{len(game_state.rounds)} rounds stored for current round {current}"
        )

    for index, round_state in enumerate(game_state.rounds):
        number = index + 1
        if round_state.round_number != number:
            raise ValueError(f"Round at position {index} is numbered {round_state.round_number}")
        expected = create_round(replace(game_state, current_round=number))
        if (
            round_state.cards_per_player,
            round_state.dealer_id,
            round_state.starter_id,
        ) != (expected.cards_per_player, expected.dealer_id, expected.starter_id):
            raise ValueError(f"Round {number} does not match the deal for its number")
        if [p.player_id for p in round_state.predictions] != player_ids:
            raise ValueError(f"Round {number} does not match the players")

        if number == current:
            if round_state.stage == Stage.COMPLETE:
                raise ValueError(f"Round {number} is complete but still current")
            if round_state.active_player_id not in player_ids:
                raise ValueError(f"Round {number} has no valid active player")
        elif round_state.stage != Stage.COMPLETE:
            raise ValueError(f"Round {number} was left unfinished")
        else:
            problems = audit_round(round_state)
            if problems:
                raise ValueError(
                    f"Round {number} is inconsistent: "
                    + "; ".join(p.message for p in problems)
                )


def game_state_to_json(game_state: GameState) -> str:
    return json.dumps(game_state_to_dict(game_state), indent=2)


def game_state_from_json(s: str) -> GameState:
    return game_state_from_dict(json.loads(s))


def save_game_state(game_state: GameState, path: Optional[Path] = None) -> Path:
    """Write the snapshot to `path` (default: the configured save file)."""
    path = Path(path) if path is not None else default_save_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(game_state_to_dict(game_state), f, indent=2)
    logger.debug("Saved game state to %s", path)
    return path


def load_game_state(path: Optional[Path] = None) -> Optional[GameState]:
    """Return the saved GameState, or None if there is no usable snapshot."""
    path = Path(path) if path is not None else default_save_path()
    if not path.exists():
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return game_state_from_dict(data)
    except (OSError, AttributeError, KeyError, TypeError, ValueError) as exc:
        # json.JSONDecodeError is a ValueError
        logger.warning(
            "Failed to load saved game from %s: %s; ignoring it",
            path,
            exc,
        )
        return None


def clear_game_state(path: Optional[Path] = None) -> None:
    path = Path(path) if path is not None else default_save_path()
    if path.exists():
        path.unlink()
        logger.info("Removed saved game %s", path)
