from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .board import Board, Reachable
from .cells import EMPTY, Cell, Coordinate, Hint, Side
from .player import PlayerController

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    IN_PROGRESS = "in_progress"
    OVER = "over"


class ClickOutcome(Enum):
    MOVED = "moved"
    CAPTURED = "captured"
    SELECTED = "selected"
    DESELECTED = "deselected"
    REJECTED = "rejected"


class RejectReason(Enum):
    OUT_OF_RANGE = "out_of_range"
    GAME_OVER = "game_over"
    INVALID_CELL = "invalid_cell"
    EMPTY_CELL = "empty_cell"
    NOT_YOUR_PIECE = "not_your_piece"


@dataclass(frozen=True, slots=True)
class ClickResult:
    outcome: ClickOutcome
    reason: Optional[RejectReason] = None

    @property
    def completed(self) -> bool:
        return self.outcome in (ClickOutcome.MOVED, ClickOutcome.CAPTURED)

    @classmethod
    def rejected(cls, reason: RejectReason) -> "ClickResult":
        return cls(ClickOutcome.REJECTED, reason)


@dataclass(frozen=True, slots=True)
class RuleOptions:
    men_capture_backward: bool = False


@dataclass
class MoveRecord:
    side: Side
    start: Coordinate
    end: Coordinate
    captured: Optional[Coordinate] = None
    promoted: bool = False

    @property
    def is_capture(self) -> bool:
        return self.captured is not None


class Game:
    """Click-driven checkers rules engine.

    Every interaction is a click on a ``(col, row)`` cell. Clicking one of your
    own pieces selects it and paints its destinations on the board; clicking a
    painted destination completes the move. Invalid clicks are absorbed:
    ``handleClick`` returns False and ``click`` reports why.
    """

    def __init__(self, board_size: int = 8, rules: Optional[RuleOptions] = None):
        self.board_size = board_size
        self.rules = rules or RuleOptions()
        self.board = Board(board_size)
        self.current_player = Side.RED
        self.status = GameStatus.IN_PROGRESS
        self.winner: Optional[Side] = None
        self.move_history: list[MoveRecord] = []
        self.starting_pieces = self._count_starting_pieces()
        self.players: dict[Side, PlayerController] = {
            Side.RED: PlayerController.human("Red Human"),
            Side.BLACK: PlayerController.human("Black Human"),
        }

    @classmethod
    def newGame(cls, size: int = 8, rules: Optional[RuleOptions] = None) -> "Game":
        return cls(board_size=size, rules=rules)

    def reset(self, board_size: Optional[int] = None) -> None:
        size = self.board_size if board_size is None else board_size
        self.board = Board(size)
        self.board_size = size
        self.current_player = Side.RED
        self.status = GameStatus.IN_PROGRESS
        self.winner = None
        self.move_history.clear()
        self.starting_pieces = self._count_starting_pieces()

    def _count_starting_pieces(self) -> dict[Side, int]:
        return {side: self.board.starting_count(side) for side in Side}

    # read interface -------------------------------------------------------

    def cellAt(self, col: int, row: int) -> Cell:
        return self.board.getCell(col, row)

    def isGameOver(self) -> bool:
        return self.status is GameStatus.OVER

    def selectedPiece(self) -> Optional[Coordinate]:
        for col, row in self.board.iter_playable():
            if self.board.getCell(col, row).selected:
                return (col, row)
        return None

    def reachableFrom(self, col: int, row: int) -> Reachable:
        return self.board.reachable_from(
            col, row, men_capture_backward=self.rules.men_capture_backward
        )

    def hasMoves(self, col: int, row: int) -> bool:
        return self.board.has_moves(col, row, men_capture_backward=self.rules.men_capture_backward)

    def hintedCells(self) -> list[Coordinate]:
        return [
            (col, row)
            for col, row in self.board.iter_playable()
            if self.board.getCell(col, row).is_hinted
        ]

    def piecesRemaining(self, side: Side) -> int:
        return self.board.count_pieces(side)

    def scoreFor(self, side: Side) -> int:
        """Opposing pieces taken so far by ``side``."""
        opponent = side.opponent
        return self.starting_pieces[opponent] - self.piecesRemaining(opponent)

    def checkGameOver(self) -> GameStatus:
        red_left = self.piecesRemaining(Side.RED)
        black_left = self.piecesRemaining(Side.BLACK)
        if red_left and black_left:
            return self.status
        self.status = GameStatus.OVER
        if red_left:
            self.winner = Side.RED
        elif black_left:
            self.winner = Side.BLACK
        logger.info("Game over, winner: %s", self.winner.value if self.winner else "none")
        return self.status

    # write interface ------------------------------------------------------

    def handleClick(self, col: int, row: int) -> bool:
        return self.click(col, row).completed

    def click(self, col: int, row: int) -> ClickResult:
        if not self.board._is_within_bounds(col, row):
            return ClickResult.rejected(RejectReason.OUT_OF_RANGE)
        if self.status is not GameStatus.IN_PROGRESS:
            return ClickResult.rejected(RejectReason.GAME_OVER)

        cell = self.board.getCell(col, row)
        if cell.is_invalid:
            return ClickResult.rejected(RejectReason.INVALID_CELL)

        if cell.is_capture_landing or cell.is_reachable:
            origin = self.selectedPiece()
            if origin is None:
                # Hints without a selection cannot be produced by clicks.
                return ClickResult.rejected(RejectReason.EMPTY_CELL)
            return self._completeMove(origin, (col, row), capture=cell.is_capture_landing)

        if cell.piece is None:
            return ClickResult.rejected(RejectReason.EMPTY_CELL)

        if cell.selected:
            self.clearHints()
            return ClickResult(ClickOutcome.DESELECTED)

        if cell.piece.side is not self.current_player:
            return ClickResult.rejected(RejectReason.NOT_YOUR_PIECE)

        self.clearHints()
        self.board.setCell(col, row, cell.with_piece(cell.piece, selected=True))
        self._paintHints(col, row)
        return ClickResult(ClickOutcome.SELECTED)

    def clearHints(self) -> None:
        for col, row in self.board.iter_playable():
            cell = self.board.getCell(col, row)
            if cell.selected or cell.is_hinted:
                self.board.setCell(col, row, cell.cleared())

    def _paintHints(self, col: int, row: int) -> None:
        moves, captures = self.reachableFrom(col, row)
        for target in moves:
            self.board.setCell(*target, EMPTY.with_hint(Hint.REACHABLE))
        for target in captures:
            self.board.setCell(*target, EMPTY.with_hint(Hint.CAPTURE))

    def _completeMove(self, origin: Coordinate, landing: Coordinate, *, capture: bool) -> ClickResult:
        origin_col, origin_row = origin
        land_col, land_row = landing
        piece = self.board.getPiece(origin_col, origin_row)
        if piece is None:
            raise RuntimeError("Selected cell lost its piece.")

        self.board.setCell(origin_col, origin_row, EMPTY)
        captured: Optional[Coordinate] = None
        if capture:
            captured = ((origin_col + land_col) // 2, (origin_row + land_row) // 2)
            self.board.setCell(*captured, EMPTY)

        promoted = not piece.is_king and land_row == self.board.promotion_row(piece.side)
        if promoted:
            piece = piece.promote()
            logger.debug("%s man promoted at %s", piece.side.value, landing)
        self.board.setCell(land_col, land_row, EMPTY.with_piece(piece))
        self.clearHints()

        self.move_history.append(
            MoveRecord(
                side=piece.side,
                start=origin,
                end=landing,
                captured=captured,
                promoted=promoted,
            )
        )
        logger.debug(
            "%s %s %s -> %s", piece.side.value, "captured" if capture else "moved", origin, landing
        )
        self.switchTurn()
        self.checkGameOver()
        return ClickResult(ClickOutcome.CAPTURED if capture else ClickOutcome.MOVED)

    def switchTurn(self) -> None:
        self.current_player = self.current_player.opponent

    # players --------------------------------------------------------------

    def setPlayer(self, side: Side, controller: PlayerController) -> None:
        self.players[side] = controller

    def getPlayer(self, side: Side) -> PlayerController:
        return self.players[side]

    def currentController(self) -> PlayerController:
        return self.getPlayer(self.current_player)

    def isAITurn(self) -> bool:
        return not self.currentController().is_human

    def requestAIMove(self) -> bool:
        if self.isGameOver():
            return False
        controller = self.currentController()
        if controller.is_human:
            return False
        return controller.play(self, self.current_player)
