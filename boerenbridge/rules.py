# boerenbridge/rules.py
from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List, Optional, Sequence

from .errors import GameStateError
from .state import GameState, Player, Prediction, Round, Stage

TOTAL_ROUNDS = 13
PEAK_ROUND = 7
DECK_SIZE = 52
MIN_PLAYERS = 4
MAX_PLAYERS = 6

CORRECT_BONUS = 10
MISS_PENALTY_PER_TRICK = 2


def cards_per_player(round_number: int, player_count: int) -> int:
    """
    Number of cards dealt to each player in a round.

    - Rounds 1-7: one more card each round (1..7).
    - Rounds 8-13: one fewer card each round (6..1), i.e. 14 - round.
    - Never more than the deck can give every player: floor(52 / players).
    """
    if player_count < 1:
        raise ValueError("player_count must be at least 1")
    if not 1 <= round_number <= TOTAL_ROUNDS:
        raise ValueError(
            f"round_number must be between 1 and {TOTAL_ROUNDS}; got {round_number}"
        )
    if round_number <= PEAK_ROUND:
        cards = round_number
    else:
        cards = 2 * PEAK_ROUND - round_number
    return min(cards, DECK_SIZE // player_count)


def is_game_complete(current_round: int) -> bool:
    return current_round > TOTAL_ROUNDS


def create_round(game_state: GameState) -> Round:
    """
    Build the Round for `game_state.current_round`.

    The dealer rotates with the round number (current_round mod players) and
    the player after the dealer starts. The result depends only on the round
    number and the players, so calling it twice gives equal rounds.
    """
    players = game_state.players
    num_players = len(players)
    if num_players < 1:
        raise ValueError("Cannot create a round without players")

    dealer_index = game_state.current_round % num_players
    starter_index = (dealer_index + 1) % num_players
    starter_id = players[starter_index].id

    return Round(
        round_number=game_state.current_round,
        cards_per_player=cards_per_player(game_state.current_round, num_players),
        dealer_id=players[dealer_index].id,
        starter_id=starter_id,
        stage=Stage.PREDICTION,
        active_player_id=starter_id,
        predictions=tuple(Prediction(player_id=p.id) for p in players),
    )


def next_player(
    current_player_id: Optional[int],
    players: Sequence[Player],
    starter_id: int,
) -> int:
    """
    Return the id of the player whose turn follows `current_player_id`.

    - No current player: the sequence starts with the starter.
    - Otherwise the next player in table order, wrapping after the last.
    """
    if current_player_id is None:
        return starter_id

    for index, player in enumerate(players):
        if player.id == current_player_id:
            return players[(index + 1) % len(players)].id

    raise GameStateError(f"Unknown player id {current_player_id}")


def is_last_in_sequence(
    player_id: int,
    players: Sequence[Player],
    starter_id: int,
) -> bool:
    """True when the sequence wraps back to the starter after `player_id`."""
    return next_player(player_id, players, starter_id) == starter_id


def turn_order(players: Sequence[Player], starter_id: int) -> List[int]:
    """Player ids in input order for one stage, beginning with the starter."""
    order = [starter_id]
    current = next_player(starter_id, players, starter_id)
    while current != starter_id:
        order.append(current)
        current = next_player(current, players, starter_id)
    return order


def score(predicted: int, achieved: int) -> int:
    """
    Score one player's round:

    - Exact prediction: 10 + tricks achieved.
    - Otherwise: -2 per trick of difference (no floor).
    """
    if predicted == achieved:
        return CORRECT_BONUS + achieved
    return -MISS_PENALTY_PER_TRICK * abs(predicted - achieved)


def score_round(round_state: Round) -> Round:
    """Return the round with every Prediction's score filled in."""
    predictions = tuple(
        replace(p, score=score(p.predicted, p.achieved))
        for p in round_state.predictions
    )
    return replace(round_state, predictions=predictions)


def total_score(player_id: int, rounds: Iterable[Round]) -> int:
    """Sum of a player's round scores; rounds without the player count as 0."""
    total = 0
    for round_state in rounds:
        prediction = round_state.prediction_for(player_id)
        if prediction is not None:
            total += prediction.score
    return total
