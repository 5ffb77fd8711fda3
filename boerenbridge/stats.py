# boerenbridge/stats.py
from __future__ import annotations

import pandas as pd

from .game_log import FIELDNAMES, build_round_score_rows
from .rules import total_score
from .state import GameState, Stage

STAT_COLUMNS = [
    "total_predicted",
    "average_prediction",
    "boldness_score",
    "correct_predictions",
]


def round_history_frame(game_state: GameState) -> pd.DataFrame:
    """One row per completed round and player (see game_log.FIELDNAMES)."""
    return pd.DataFrame(build_round_score_rows(game_state), columns=FIELDNAMES)


def score_progression(game_state: GameState) -> pd.DataFrame:
    """
    Cumulative score of every player after each completed round.

    Indexed by round number, one column per player name in table order.
    """
    names = [p.name for p in game_state.players]
    df = round_history_frame(game_state)
    if df.empty:
        return pd.DataFrame(columns=names, index=pd.Index([], name="round_number"))

    progression = df.pivot(
        index="round_number", columns="player_name", values="total_score"
    )
    progression = progression[names]
    progression.columns.name = None
    return progression


def prediction_stats(game_state: GameState) -> pd.DataFrame:
    """
    Per-player prediction statistics over the completed rounds.

    boldness_score sums predicted / cards_per_player per round, so a player
    who keeps claiming a large share of their hand ranks as the boldest.
    Rows are sorted by rank (1 = boldest); ties keep table order.
    """
    df = round_history_frame(game_state)
    completed_rounds = sum(
        1 for r in game_state.rounds if r.stage == Stage.COMPLETE
    )

    stats = pd.DataFrame(
        {
            "player_id": [p.id for p in game_state.players],
            "player_name": [p.name for p in game_state.players],
        }
    ).set_index("player_id")

    if df.empty:
        grouped = pd.DataFrame(0, index=stats.index, columns=STAT_COLUMNS)
    else:
        df["boldness"] = df["predicted"] / df["cards_per_player"]
        df["correct"] = df["predicted"] == df["achieved"]
        grouped = df.groupby("player_id").agg(
            total_predicted=("predicted", "sum"),
            average_prediction=("predicted", "mean"),
            boldness_score=("boldness", "sum"),
            correct_predictions=("correct", "sum"),
        )
    stats = stats.join(grouped).fillna(0)

    stats["total_predicted"] = stats["total_predicted"].astype(int)
    stats["correct_predictions"] = stats["correct_predictions"].astype(int)
    stats["average_prediction"] = stats["average_prediction"].astype(float)
    stats["boldness_score"] = stats["boldness_score"].astype(float)
    stats["success_ratio"] = (
        stats["correct_predictions"] / completed_rounds if completed_rounds else 0.0
    )

    stats = stats.sort_values("boldness_score", ascending=False, kind="stable")
    stats["rank"] = range(1, len(stats) + 1)
    return stats.reset_index()


def standings_frame(game_state: GameState) -> pd.DataFrame:
    """Players with their total score, highest first; ties keep table order."""
    standings = pd.DataFrame(
        {
            "player_id": [p.id for p in game_state.players],
            "player_name": [p.name for p in game_state.players],
            "total_score": [
                total_score(p.id, game_state.rounds) for p in game_state.players
            ],
        }
    )
    standings = standings.sort_values(
        "total_score", ascending=False, kind="stable"
    ).reset_index(drop=True)
    standings["position"] = range(1, len(standings) + 1)
    return standings
