from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

Coordinate = tuple[int, int]


class Side(Enum):
    RED = "red"
    BLACK = "black"

    @property
    def opponent(self) -> "Side":
        return Side.BLACK if self is Side.RED else Side.RED


class Rank(Enum):
    MAN = "man"
    KING = "king"


class Hint(Enum):
    NONE = "none"
    REACHABLE = "reachable"
    CAPTURE = "capture"


@dataclass(frozen=True, slots=True)
class Piece:
    side: Side
    rank: Rank = Rank.MAN

    @property
    def is_king(self) -> bool:
        return self.rank is Rank.KING

    def promote(self) -> "Piece":
        return Piece(self.side, Rank.KING)

    def __repr__(self) -> str:
        piece_type = "K" if self.is_king else "M"
        return f"{piece_type}({self.side.name})"


@dataclass(frozen=True, slots=True)
class Cell:
    """One board position.

    Occupancy, piece attributes and transient UI state are kept apart:
    ``piece`` says who stands here, ``selected`` and ``hint`` are the markers
    painted while a piece is picked up.
    """

    playable: bool
    piece: Optional[Piece] = None
    selected: bool = False
    hint: Hint = Hint.NONE

    @property
    def is_invalid(self) -> bool:
        return not self.playable

    @property
    def is_empty(self) -> bool:
        return self.playable and self.piece is None and self.hint is Hint.NONE

    @property
    def is_reachable(self) -> bool:
        return self.hint is Hint.REACHABLE

    @property
    def is_capture_landing(self) -> bool:
        return self.hint is Hint.CAPTURE

    @property
    def is_hinted(self) -> bool:
        return self.hint is not Hint.NONE

    def with_piece(self, piece: Optional[Piece], *, selected: bool = False) -> "Cell":
        return Cell(playable=True, piece=piece, selected=selected and piece is not None)

    def with_hint(self, hint: Hint) -> "Cell":
        return replace(self, hint=hint)

    def cleared(self) -> "Cell":
        """Drop selection and hint markers, keep the occupant."""
        if not self.playable:
            return self
        return Cell(playable=True, piece=self.piece)

    @property
    def label(self) -> str:
        if not self.playable:
            return "invalid"
        if self.piece is None:
            return "empty" if self.hint is Hint.NONE else self.hint.value
        parts = [self.piece.side.value, self.piece.rank.value]
        if self.selected:
            parts.append("selected")
        return "_".join(parts)


INVALID = Cell(playable=False)
EMPTY = Cell(playable=True)
