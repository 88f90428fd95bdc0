from __future__ import annotations

from typing import Iterator, Optional

from .cells import EMPTY, INVALID, Cell, Coordinate, Piece, Side

BoardState = tuple[int, tuple[tuple[str, ...], ...]]
Reachable = tuple[list[Coordinate], list[Coordinate]]

BLACK_ROWS_END = 3
RED_ROWS_START = 5
MIN_BOARD_SIZE = 1

_SIDEWAYS = (-1, 1)


class Board:
    """Square checkers grid addressed as ``(col, row)``.

    Storage is row-major (``self.board[row][col]``); callers never index it
    directly with a coordinate pair, they go through ``getCell``/``setCell``.
    """

    def __init__(self, boardSize: int = 8) -> None:
        if boardSize < MIN_BOARD_SIZE:
            raise ValueError(f"Board size must be at least {MIN_BOARD_SIZE}, got {boardSize}.")
        self.boardSize = boardSize
        self.board: list[list[Cell]] = self._blank_grid(boardSize)
        self._set_start_pieces()

    @classmethod
    def empty(cls, boardSize: int = 8) -> "Board":
        board = cls.__new__(cls)
        board.boardSize = boardSize
        board.board = cls._blank_grid(boardSize)
        return board

    @staticmethod
    def _blank_grid(boardSize: int) -> list[list[Cell]]:
        return [
            [EMPTY if Board.is_playable(col, row) else INVALID for col in range(boardSize)]
            for row in range(boardSize)
        ]

    @staticmethod
    def is_playable(col: int, row: int) -> bool:
        return (col + row) % 2 == 1

    def _is_within_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.boardSize and 0 <= row < self.boardSize

    def getCell(self, col: int, row: int) -> Cell:
        if self._is_within_bounds(col, row):
            return self.board[row][col]
        return INVALID

    def setCell(self, col: int, row: int, cell: Cell) -> bool:
        if not self._is_within_bounds(col, row) or not self.is_playable(col, row):
            return False
        self.board[row][col] = cell
        return True

    def getPiece(self, col: int, row: int) -> Optional[Piece]:
        return self.getCell(col, row).piece

    def iter_playable(self) -> Iterator[Coordinate]:
        for row in range(self.boardSize):
            for col in range(self.boardSize):
                if self.is_playable(col, row):
                    yield (col, row)

    def getAllPieces(self, side: Optional[Side] = None) -> list[tuple[Coordinate, Piece]]:
        pieces: list[tuple[Coordinate, Piece]] = []
        for col, row in self.iter_playable():
            piece = self.board[row][col].piece
            if piece is None:
                continue
            if side is None or piece.side is side:
                pieces.append(((col, row), piece))
        return pieces

    def count_pieces(self, side: Side) -> int:
        return len(self.getAllPieces(side))

    # layout ---------------------------------------------------------------

    def _opening_piece(self, col: int, row: int) -> Optional[Piece]:
        if not self.is_playable(col, row):
            return None
        if row < BLACK_ROWS_END:
            return Piece(Side.BLACK)
        if row >= RED_ROWS_START:
            return Piece(Side.RED)
        return None

    def _set_start_pieces(self) -> None:
        for col, row in self.iter_playable():
            piece = self._opening_piece(col, row)
            if piece is not None:
                self.board[row][col] = EMPTY.with_piece(piece)

    def starting_count(self, side: Side) -> int:
        """Number of pieces ``side`` owns in the opening layout of this board size."""
        return sum(
            1
            for col, row in self.iter_playable()
            if (piece := self._opening_piece(col, row)) is not None and piece.side is side
        )

    # geometry -------------------------------------------------------------

    @staticmethod
    def forward(side: Side) -> int:
        return 1 if side is Side.BLACK else -1

    def promotion_row(self, side: Side) -> int:
        return self.boardSize - 1 if side is Side.BLACK else 0

    def _is_vacant(self, col: int, row: int) -> bool:
        cell = self.getCell(col, row)
        return cell.playable and cell.piece is None

    def reachable_from(self, col: int, row: int, *, men_capture_backward: bool = False) -> Reachable:
        """Return ``(moves, captures)`` destinations for the piece at ``(col, row)``.

        Men slide along their two forward diagonals, kings along all four. A
        jump needs an opposing piece on the adjacent diagonal and a vacant
        landing right behind it. Mandatory capture is not enforced, so both
        lists may be non-empty at once.
        """
        piece = self.getPiece(col, row)
        if piece is None:
            return [], []

        forward = self.forward(piece.side)
        slide_rows = (forward, -forward) if piece.is_king else (forward,)
        if piece.is_king or men_capture_backward:
            jump_rows: tuple[int, ...] = (forward, -forward)
        else:
            jump_rows = (forward,)

        moves: list[Coordinate] = []
        for dr in slide_rows:
            for dc in _SIDEWAYS:
                if self._is_vacant(col + dc, row + dr):
                    moves.append((col + dc, row + dr))

        captures: list[Coordinate] = []
        for dr in jump_rows:
            for dc in _SIDEWAYS:
                jumped = self.getPiece(col + dc, row + dr)
                if jumped is None or jumped.side is piece.side:
                    continue
                if self._is_vacant(col + 2 * dc, row + 2 * dr):
                    captures.append((col + 2 * dc, row + 2 * dr))

        return moves, captures

    def has_moves(self, col: int, row: int, *, men_capture_backward: bool = False) -> bool:
        moves, captures = self.reachable_from(col, row, men_capture_backward=men_capture_backward)
        return bool(moves or captures)

    # snapshots ------------------------------------------------------------

    def to_state(self) -> BoardState:
        return (
            self.boardSize,
            tuple(tuple(cell.label for cell in line) for line in self.board),
        )
