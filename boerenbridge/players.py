# boerenbridge/players.py
from __future__ import annotations

import random
from typing import Iterable, List, Optional, Tuple

from .errors import InputRejected, RejectionKind
from .rules import MAX_PLAYERS, MIN_PLAYERS
from .state import Player

MAX_NAME_LENGTH = 20

RANDOM_NAMES = [
    "Zeus", "Apollo", "Athena", "Hermes",
    "Artemis", "Poseidon", "Hera", "Ares",
    "Hades", "Iris", "Atlas", "Nike",
]


def create_players(names: Iterable[str]) -> Tuple[Player, ...]:
    """
    Turn the names entered at setup into players.

    - Names are stripped; blank entries are ignored.
    - 4 to 6 names must remain, none longer than 20 characters.
    - Names must be unique, ignoring case.
    - Ids are assigned 0..n-1 in the given order, which is the table order.
    """
    cleaned = [name.strip() for name in names if name and name.strip()]

    if len(cleaned) < MIN_PLAYERS:
        raise InputRejected(
            RejectionKind.TOO_FEW_PLAYERS, count=len(cleaned), minimum=MIN_PLAYERS
        )
    if len(cleaned) > MAX_PLAYERS:
        raise InputRejected(
            RejectionKind.TOO_MANY_PLAYERS, count=len(cleaned), maximum=MAX_PLAYERS
        )

    seen = set()
    for name in cleaned:
        if len(name) > MAX_NAME_LENGTH:
            raise InputRejected(
                RejectionKind.NAME_TOO_LONG, name=name, maximum=MAX_NAME_LENGTH
            )
        key = name.lower()
        if key in seen:
            raise InputRejected(RejectionKind.DUPLICATE_NAME, name=name)
        seen.add(key)

    return tuple(Player(id=i, name=name) for i, name in enumerate(cleaned))


def random_player_names(
    count: int,
    rng: Optional[random.Random] = None,
) -> List[str]:
    """Pick `count` distinct names from RANDOM_NAMES for a quick start."""
    if not MIN_PLAYERS <= count <= MAX_PLAYERS:
        raise ValueError(
            f"count must be between {MIN_PLAYERS} and {MAX_PLAYERS}; got {count}"
        )
    rng = rng or random.Random()
    return rng.sample(RANDOM_NAMES, count)
