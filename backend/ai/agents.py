from __future__ import annotations

import random
from typing import Optional

from engine.cells import Side
from engine.game import Game
from engine.player import PlayerController, PlayerKind

from .random_mover import choose_random_move

__all__ = ["create_random_controller"]


def create_random_controller(name: str, seed: Optional[int] = None) -> PlayerController:
    rng = random.Random(seed)

    def _policy(game: Game, side: Side) -> bool:
        return choose_random_move(game, side, rng=rng)

    suffix = f" (seed={seed})" if seed is not None else ""

    return PlayerController(
        kind=PlayerKind.RANDOM,
        name=f"{name} Random{suffix}",
        policy=_policy,
    )
