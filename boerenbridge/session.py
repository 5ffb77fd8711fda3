# boerenbridge/session.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from . import engine
from .errors import GameStateError, InputRejected
from .players import create_players
from .rules import total_score
from .state import GameState, Player
from .storage import clear_game_state, load_game_state, save_game_state

logger = logging.getLogger(__name__)


class ScoreKeeper:
    """
    Keeps the one active game of a scorekeeping app.

    The engine computes every transition as a new GameState; this class holds
    the latest accepted one and saves it after each change. A rejected value
    leaves the held state as it was.
    """

    def __init__(
        self,
        save_path: Optional[Path] = None,
        autosave: bool = True,
    ) -> None:
        self.save_path = save_path
        self.autosave = autosave
        self.game_state: Optional[GameState] = None

    @classmethod
    def resume(
        cls,
        save_path: Optional[Path] = None,
        autosave: bool = True,
    ) -> "ScoreKeeper":
        """Create a keeper holding the saved game, if a usable one exists."""
        keeper = cls(save_path=save_path, autosave=autosave)
        keeper.game_state = load_game_state(save_path)
        if keeper.game_state is not None:
            keeper.game_state = engine.ensure_current_round(keeper.game_state)
            logger.info(
                "Resumed game at round %d", keeper.game_state.current_round
            )
        return keeper

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def start_game(self, names: Iterable[str]) -> GameState:
        """Validate the names, start a new game and create its first round."""
        players = create_players(names)
        game_state = engine.initialize_new_game(players)
        return self._accept(engine.ensure_current_round(game_state))

    def submit(self, value: int) -> GameState:
        """Enter the active player's prediction or achieved tricks."""
        game_state = self._require_game()
        round_before = game_state.current_round
        try:
            updated = engine.submit(game_state, value)
        except InputRejected as exc:
            logger.warning(
                "Rejected %r in round %d: %s",
                value,
                round_before,
                exc,
            )
            raise
        return self._accept(updated)

    def amend_achieved(self, player_id: int, value: int) -> GameState:
        """Correct an achieved value entered earlier in the current round."""
        game_state = self._require_game()
        try:
            updated = engine.amend_achieved(game_state, player_id, value)
        except InputRejected as exc:
            logger.warning(
                "Rejected correction %r for player %d: %s",
                value,
                player_id,
                exc,
            )
            raise
        return self._accept(updated)

    def reset(self) -> None:
        """Forget the current game and delete its snapshot."""
        self.game_state = None
        clear_game_state(self.save_path)

    def standings(self) -> List[Tuple[Player, int]]:
        """(player, total score) pairs, highest score first."""
        game_state = self._require_game()
        totals = [
            (p, total_score(p.id, game_state.rounds)) for p in game_state.players
        ]
        return sorted(totals, key=lambda pair: pair[1], reverse=True)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _require_game(self) -> GameState:
        if self.game_state is None:
            raise GameStateError("No game in progress")
        return self.game_state

    def _accept(self, game_state: GameState) -> GameState:
        self.game_state = game_state
        if self.autosave:
            save_game_state(game_state, self.save_path)
        return game_state
