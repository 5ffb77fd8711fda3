# boerenbridge/game_log.py
from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import resolve_data_path
from .state import GameState, Stage

logger = logging.getLogger(__name__)

FIELDNAMES = [
    "game_id",
    "round_number",
    "cards_per_player",
    "dealer_id",
    "starter_id",
    "player_id",
    "player_name",
    "predicted",
    "achieved",
    "round_score",
    "total_score",
]


def build_round_score_rows(
    game_state: GameState,
    game_id: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Build a list of rows summarizing per-round scores for CSV export.

    Each row corresponds to (round, player) and has keys in FIELDNAMES. Rounds
    that are not complete yet are skipped so a game in progress can still be
    exported.
    """
    running_scores: Dict[int, int] = {p.id: 0 for p in game_state.players}
    rows: List[Dict[str, Any]] = []

    for round_state in game_state.rounds:
        if round_state.stage != Stage.COMPLETE:
            continue

        for p in game_state.players:
            prediction = round_state.prediction_for(p.id)
            if prediction is None:
                continue
            running_scores[p.id] += prediction.score

            rows.append(
                {
                    "game_id": game_id,
                    "round_number": round_state.round_number,
                    "cards_per_player": round_state.cards_per_player,
                    "dealer_id": round_state.dealer_id,
                    "starter_id": round_state.starter_id,
                    "player_id": p.id,
                    "player_name": p.name,
                    "predicted": prediction.predicted,
                    "achieved": prediction.achieved,
                    "round_score": prediction.score,
                    "total_score": running_scores[p.id],
                }
            )

    return rows


def write_round_scores_csv(
    game_state: GameState,
    path: str | Path,
    game_id: Optional[str] = None,
) -> Path:
    """Export the round history; a relative `path` is placed in the data dir."""
    target = resolve_data_path(path)
    rows = build_round_score_rows(game_state, game_id=game_id)

    with open(target, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        writer.writerows(rows)
    logger.info("Wrote %d score rows to %s", len(rows), target)
    return target
