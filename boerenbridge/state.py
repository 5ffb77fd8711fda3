# boerenbridge/state.py
from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple


class Stage(enum.Enum):
    PREDICTION = "prediction"
    ACHIEVED = "achieved"
    COMPLETE = "complete"


@dataclass(frozen=True)
class Player:
    id: int
    name: str


@dataclass(frozen=True)
class Prediction:
    player_id: int
    predicted: int = 0
    achieved: int = 0
    # derived at round completion, never entered directly
    score: int = 0


@dataclass(frozen=True)
class Round:
    round_number: int
    cards_per_player: int
    dealer_id: int
    starter_id: int
    stage: Stage = Stage.PREDICTION
    active_player_id: Optional[int] = None
    # one per player, in table order
    predictions: Tuple[Prediction, ...] = ()

    @property
    def total_tricks(self) -> int:
        return self.cards_per_player * len(self.predictions)

    @property
    def total_predicted(self) -> int:
        return sum(p.predicted for p in self.predictions)

    @property
    def total_achieved(self) -> int:
        return sum(p.achieved for p in self.predictions)

    def prediction_for(self, player_id: int) -> Optional[Prediction]:
        for prediction in self.predictions:
            if prediction.player_id == player_id:
                return prediction
        return None

    def with_prediction(self, player_id: int, **changes) -> "Round":
        """Return a copy of the round with one player's Prediction updated."""
        if self.prediction_for(player_id) is None:
            raise KeyError(f"Round {self.round_number} has no player {player_id}")
        predictions = tuple(
            replace(p, **changes) if p.player_id == player_id else p
            for p in self.predictions
        )
        return replace(self, predictions=predictions)


@dataclass(frozen=True)
class GameState:
    players: Tuple[Player, ...]
    # rounds[i] holds round i + 1
    rounds: Tuple[Round, ...] = field(default_factory=tuple)
    current_round: int = 1
    game_started: bool = False
    game_completed: bool = False

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def active_round(self) -> Optional[Round]:
        """The round that may still change, if it has been created."""
        index = self.current_round - 1
        if 0 <= index < len(self.rounds):
            return self.rounds[index]
        return None

    def player_by_id(self, player_id: int) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def with_active_round(self, round_state: Round) -> "GameState":
        """Return a copy with the active round replaced by `round_state`."""
        index = self.current_round - 1
        if not 0 <= index < len(self.rounds):
            raise IndexError(f"Round {self.current_round} has not been created")
        rounds = self.rounds[:index] + (round_state,) + self.rounds[index + 1:]
        return replace(self, rounds=rounds)
