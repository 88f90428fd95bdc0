from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .cells import Side
    from .game import Game

# A policy plays one move for the given side through Game.handleClick and
# reports whether a move was completed.
MovePolicy = Callable[["Game", "Side"], bool]


class PlayerKind(str, Enum):
    HUMAN = "human"
    RANDOM = "random"


@dataclass
class PlayerController:
    kind: PlayerKind
    name: str
    policy: Optional[MovePolicy] = None

    @property
    def is_human(self) -> bool:
        return self.policy is None or self.kind == PlayerKind.HUMAN

    def play(self, game: "Game", side: "Side") -> bool:
        if self.policy is None:
            return False
        return self.policy(game, side)

    @classmethod
    def human(cls, name: str) -> "PlayerController":
        return cls(kind=PlayerKind.HUMAN, name=name)
