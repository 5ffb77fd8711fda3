# tests/test_rules.py
import pytest

from boerenbridge.errors import GameStateError
from boerenbridge.rules import (
    TOTAL_ROUNDS,
    cards_per_player,
    create_round,
    is_game_complete,
    is_last_in_sequence,
    next_player,
    score,
    score_round,
    total_score,
    turn_order,
)
from boerenbridge.state import GameState, Player, Prediction, Round, Stage


def _players(num_players: int = 4):
    return tuple(Player(id=i, name=f"P{i}") for i in range(num_players))


def _game(num_players: int = 4, current_round: int = 1) -> GameState:
    return GameState(
        players=_players(num_players),
        current_round=current_round,
        game_started=True,
    )


def test_cards_per_player_ramps_up_then_down():
    for num_players in (4, 5, 6):
        for r in range(1, 8):
            assert cards_per_player(r, num_players) == r
        for r in range(8, TOTAL_ROUNDS + 1):
            assert cards_per_player(r, num_players) == 14 - r


def test_cards_per_player_capped_by_deck_size():
    # 52 // 10 == 5
    assert cards_per_player(7, 10) == 5
    assert cards_per_player(6, 10) == 5
    assert cards_per_player(4, 10) == 4
    for r in range(1, TOTAL_ROUNDS + 1):
        assert cards_per_player(r, 26) <= 2


def test_cards_per_player_rejects_bad_input():
    with pytest.raises(ValueError):
        cards_per_player(1, 0)
    with pytest.raises(ValueError):
        cards_per_player(0, 4)
    with pytest.raises(ValueError):
        cards_per_player(TOTAL_ROUNDS + 1, 4)


def test_create_round_rotates_dealer_with_round_number():
    for num_players in (4, 5, 6):
        for r in range(1, TOTAL_ROUNDS + 1):
            round_state = create_round(_game(num_players, r))
            assert round_state.round_number == r
            assert round_state.dealer_id == r % num_players
            assert round_state.starter_id == (r % num_players + 1) % num_players


def test_create_round_starts_in_prediction_stage():
    round_state = create_round(_game(4, 3))

    assert round_state.stage == Stage.PREDICTION
    assert round_state.active_player_id == round_state.starter_id
    assert round_state.cards_per_player == 3
    assert round_state.total_tricks == 12
    assert [p.player_id for p in round_state.predictions] == [0, 1, 2, 3]
    for p in round_state.predictions:
        assert (p.predicted, p.achieved, p.score) == (0, 0, 0)


def test_create_round_is_repeatable():
    game_state = _game(5, 9)
    assert create_round(game_state) == create_round(game_state)


def test_create_round_without_players_fails():
    with pytest.raises(ValueError):
        create_round(GameState(players=(), game_started=True))


def test_next_player_starts_with_starter_and_wraps():
    players = _players(4)
    assert next_player(None, players, starter_id=2) == 2
    assert next_player(2, players, starter_id=2) == 3
    assert next_player(3, players, starter_id=2) == 0
    assert next_player(1, players, starter_id=2) == 2


def test_next_player_visits_everybody_once_per_cycle():
    for num_players in (4, 5, 6):
        players = _players(num_players)
        for starter_id in range(num_players):
            seen = []
            current = starter_id
            for _ in range(num_players):
                seen.append(current)
                current = next_player(current, players, starter_id)
            assert current == starter_id
            assert sorted(seen) == list(range(num_players))


def test_next_player_unknown_id():
    with pytest.raises(GameStateError):
        next_player(7, _players(4), starter_id=0)


def test_turn_order_and_last_in_sequence():
    players = _players(4)
    assert turn_order(players, starter_id=2) == [2, 3, 0, 1]
    assert is_last_in_sequence(1, players, starter_id=2)
    assert not is_last_in_sequence(3, players, starter_id=2)


def test_score_exact_prediction_and_misses():
    assert score(3, 3) == 13
    assert score(0, 0) == 10
    assert score(3, 5) == -4
    assert score(5, 3) == -4
    # no floor on the penalty
    assert score(0, 12) == -24


def _scored_round(round_number: int, scores) -> Round:
    return Round(
        round_number=round_number,
        cards_per_player=1,
        dealer_id=0,
        starter_id=1,
        stage=Stage.COMPLETE,
        predictions=tuple(
            Prediction(player_id=pid, score=s) for pid, s in scores.items()
        ),
    )


def test_total_score_sums_all_rounds():
    rounds = [
        _scored_round(1, {0: 11, 1: -2}),
        _scored_round(2, {0: -4, 1: 12}),
        _scored_round(3, {1: 10}),  # player 0 missing: counts as 0
    ]
    assert total_score(0, rounds) == 7
    assert total_score(1, rounds) == 20
    assert total_score(0, list(reversed(rounds))) == 7
    assert total_score(5, rounds) == 0


def test_score_round_fills_in_scores():
    round_state = Round(
        round_number=3,
        cards_per_player=3,
        dealer_id=3,
        starter_id=0,
        stage=Stage.ACHIEVED,
        predictions=(
            Prediction(player_id=0, predicted=2, achieved=3),
            Prediction(player_id=1, predicted=3, achieved=3),
            Prediction(player_id=2, predicted=4, achieved=3),
            Prediction(player_id=3, predicted=2, achieved=3),
        ),
    )
    scored = score_round(round_state)
    assert [p.score for p in scored.predictions] == [-2, 13, -2, -2]
    # input untouched
    assert [p.score for p in round_state.predictions] == [0, 0, 0, 0]


def test_is_game_complete():
    assert not is_game_complete(TOTAL_ROUNDS)
    assert is_game_complete(TOTAL_ROUNDS + 1)
