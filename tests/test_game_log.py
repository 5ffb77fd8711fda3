# tests/test_game_log.py
import csv

from boerenbridge.engine import ensure_current_round, initialize_new_game, submit
from boerenbridge.game_log import (
    FIELDNAMES,
    build_round_score_rows,
    write_round_scores_csv,
)
from boerenbridge.rules import total_score
from boerenbridge.state import GameState, Player, Stage


def _make_sample_game() -> GameState:
    players = [Player(id=i, name=f"P{i}") for i in range(4)]
    game_state = ensure_current_round(initialize_new_game(players))
    # Round 1 (player 2 starts): predictions, then achieved.
    for value in (1, 0, 1, 1, 1, 1, 1, 1):
        game_state = submit(game_state, value)
    # Round 2 (player 3 starts).
    for value in (2, 2, 2, 0, 2, 2, 2, 2):
        game_state = submit(game_state, value)
    # Round 3 only partially entered.
    game_state = submit(game_state, 1)
    return game_state


def test_build_round_score_rows_basic():
    game_state = _make_sample_game()
    rows = build_round_score_rows(game_state, game_id="test-game")

    completed = [r for r in game_state.rounds if r.stage == Stage.COMPLETE]
    assert len(completed) == 2
    assert len(rows) == len(completed) * len(game_state.players)

    sample = rows[0]
    for field in FIELDNAMES:
        assert field in sample
    assert sample["game_id"] == "test-game"

    # last row per player carries the running total
    totals_from_rows = {}
    for row in rows:
        totals_from_rows[row["player_id"]] = row["total_score"]
    for p in game_state.players:
        assert totals_from_rows[p.id] == total_score(p.id, game_state.rounds)


def test_build_round_score_rows_values():
    rows = build_round_score_rows(_make_sample_game())
    by_key = {(row["round_number"], row["player_name"]): row for row in rows}

    assert by_key[(1, "P3")]["predicted"] == 0
    assert by_key[(1, "P3")]["achieved"] == 1
    assert by_key[(1, "P3")]["round_score"] == -2
    assert by_key[(2, "P3")]["round_score"] == 12
    assert by_key[(2, "P3")]["total_score"] == 10
    assert by_key[(2, "P2")]["total_score"] == 7
    assert by_key[(2, "P0")]["starter_id"] == 3


def test_write_round_scores_csv(tmp_path):
    game_state = _make_sample_game()
    path = tmp_path / "scores.csv"

    assert write_round_scores_csv(game_state, path, game_id="csv-game") == path

    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        assert reader.fieldnames == FIELDNAMES
        rows = list(reader)

    assert len(rows) == 8
    assert rows[0]["game_id"] == "csv-game"
    assert rows[-1]["round_number"] == "2"


def test_relative_csv_path_goes_to_data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("BOERENBRIDGE_DATA_DIR", str(tmp_path / "data"))

    written = write_round_scores_csv(_make_sample_game(), "exports/scores.csv")

    assert written == tmp_path / "data" / "exports" / "scores.csv"
    with open(written, newline="", encoding="utf-8") as f:
        assert len(list(csv.DictReader(f))) == 8
