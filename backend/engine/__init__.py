"""Click-driven checkers rules engine package."""

from .board import Board
from .cells import EMPTY, INVALID, Cell, Coordinate, Hint, Piece, Rank, Side
from .game import ClickOutcome, ClickResult, Game, GameStatus, MoveRecord, RejectReason, RuleOptions
from .player import PlayerController, PlayerKind

__all__ = [
	"Board",
	"Game",
	"GameStatus",
	"RuleOptions",
	"MoveRecord",
	"ClickOutcome",
	"ClickResult",
	"RejectReason",
	"Cell",
	"Coordinate",
	"Hint",
	"Piece",
	"Rank",
	"Side",
	"EMPTY",
	"INVALID",
	"PlayerController",
	"PlayerKind",
]
