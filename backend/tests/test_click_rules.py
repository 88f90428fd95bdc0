from __future__ import annotations

import sys
import unittest
from pathlib import Path
from typing import Optional


BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))


from engine.board import Board  # noqa: E402
from engine.cells import EMPTY, Coordinate, Piece, Rank, Side  # noqa: E402
from engine.game import ClickOutcome, Game, GameStatus, RejectReason, RuleOptions  # noqa: E402

RED_MAN = Piece(Side.RED)
RED_KING = Piece(Side.RED, Rank.KING)
BLACK_MAN = Piece(Side.BLACK)


def _game_with(
    pieces: dict[Coordinate, Piece],
    turn: Side = Side.RED,
    rules: Optional[RuleOptions] = None,
) -> Game:
    game = Game(8, rules=rules)
    board = Board.empty(8)
    for (col, row), piece in pieces.items():
        board.setCell(col, row, EMPTY.with_piece(piece))
    game.board = board
    game.current_player = turn
    return game


def _hints(game: Game) -> tuple[set[Coordinate], set[Coordinate]]:
    reachable = {coord for coord in game.hintedCells() if game.cellAt(*coord).is_reachable}
    captures = {coord for coord in game.hintedCells() if game.cellAt(*coord).is_capture_landing}
    return reachable, captures


class SelectionTests(unittest.TestCase):
    def test_selecting_man_paints_forward_diagonals(self) -> None:
        game = Game(8)
        self.assertFalse(game.handleClick(2, 5))

        self.assertTrue(game.cellAt(2, 5).selected)
        self.assertEqual(game.selectedPiece(), (2, 5))
        self.assertEqual(_hints(game), ({(1, 4), (3, 4)}, set()))

    def test_edge_man_has_single_destination(self) -> None:
        game = Game(8)
        game.handleClick(0, 5)
        self.assertEqual(_hints(game), ({(1, 4)}, set()))

    def test_black_man_sees_single_capture_landing(self) -> None:
        game = _game_with({(1, 2): BLACK_MAN, (2, 3): RED_MAN}, turn=Side.BLACK)
        result = game.click(1, 2)

        self.assertEqual(result.outcome, ClickOutcome.SELECTED)
        reachable, captures = _hints(game)
        self.assertEqual(captures, {(3, 4)})
        self.assertEqual(reachable, {(0, 3)})

    def test_king_paints_all_four_directions_and_backward_jump(self) -> None:
        game = _game_with({(3, 4): RED_KING, (4, 5): BLACK_MAN})
        game.handleClick(3, 4)

        reachable, captures = _hints(game)
        self.assertEqual(reachable, {(2, 3), (4, 3), (2, 5)})
        self.assertEqual(captures, {(5, 6)})

    def test_man_cannot_jump_backward_by_default(self) -> None:
        game = _game_with({(3, 4): RED_MAN, (4, 5): BLACK_MAN})
        game.handleClick(3, 4)
        self.assertEqual(_hints(game), ({(2, 3), (4, 3)}, set()))

    def test_backward_man_jump_when_enabled(self) -> None:
        rules = RuleOptions(men_capture_backward=True)
        game = _game_with({(3, 4): RED_MAN, (4, 5): BLACK_MAN}, rules=rules)
        game.handleClick(3, 4)
        self.assertEqual(_hints(game), ({(2, 3), (4, 3)}, {(5, 6)}))

    def test_jump_needs_vacant_landing(self) -> None:
        game = _game_with({(1, 2): BLACK_MAN, (2, 3): RED_MAN, (3, 4): RED_MAN}, turn=Side.BLACK)
        game.handleClick(1, 2)
        self.assertEqual(_hints(game), ({(0, 3)}, set()))

    def test_reselect_round_trip_restores_board(self) -> None:
        game = Game(8)
        before = game.board.to_state()

        self.assertEqual(game.click(2, 5).outcome, ClickOutcome.SELECTED)
        self.assertEqual(game.click(2, 5).outcome, ClickOutcome.DESELECTED)

        self.assertEqual(game.board.to_state(), before)
        self.assertIsNone(game.selectedPiece())
        self.assertEqual(game.current_player, Side.RED)

    def test_selecting_another_piece_moves_the_selection(self) -> None:
        game = Game(8)
        game.handleClick(2, 5)
        game.handleClick(4, 5)

        self.assertFalse(game.cellAt(2, 5).selected)
        self.assertTrue(game.cellAt(4, 5).selected)
        self.assertEqual(_hints(game), ({(3, 4), (5, 4)}, set()))


class RejectionTests(unittest.TestCase):
    def test_invalid_clicks_are_absorbed(self) -> None:
        game = Game(8)
        before = game.board.to_state()
        cases = {
            (1, 2): RejectReason.NOT_YOUR_PIECE,
            (0, 0): RejectReason.INVALID_CELL,
            (3, 4): RejectReason.EMPTY_CELL,
            (-1, 3): RejectReason.OUT_OF_RANGE,
            (3, 8): RejectReason.OUT_OF_RANGE,
        }
        for (col, row), reason in cases.items():
            result = game.click(col, row)
            self.assertEqual(result.outcome, ClickOutcome.REJECTED)
            self.assertEqual(result.reason, reason)
            self.assertFalse(result.completed)
            self.assertFalse(game.handleClick(col, row))

        self.assertEqual(game.board.to_state(), before)
        self.assertEqual(game.current_player, Side.RED)

    def test_click_on_unhinted_cell_keeps_selection(self) -> None:
        game = Game(8)
        game.handleClick(2, 5)
        self.assertFalse(game.handleClick(5, 4))
        self.assertEqual(game.selectedPiece(), (2, 5))


class MoveTests(unittest.TestCase):
    def test_simple_move_flips_turn_once(self) -> None:
        game = Game(8)
        game.handleClick(2, 5)
        self.assertTrue(game.handleClick(3, 4))

        self.assertTrue(game.cellAt(2, 5).is_empty)
        landed = game.cellAt(3, 4)
        self.assertEqual(landed.piece, RED_MAN)
        self.assertFalse(landed.selected)
        self.assertEqual(game.current_player, Side.BLACK)
        self.assertEqual(game.hintedCells(), [])
        self.assertIsNone(game.selectedPiece())

        record = game.move_history[-1]
        self.assertEqual((record.start, record.end, record.captured), ((2, 5), (3, 4), None))

    def test_capture_removes_jumped_piece(self) -> None:
        game = _game_with(
            {(1, 2): BLACK_MAN, (7, 0): BLACK_MAN, (2, 3): RED_MAN, (6, 7): RED_MAN},
            turn=Side.BLACK,
        )
        red_before = game.piecesRemaining(Side.RED)
        score_before = game.scoreFor(Side.BLACK)

        game.handleClick(1, 2)
        result = game.click(3, 4)

        self.assertEqual(result.outcome, ClickOutcome.CAPTURED)
        self.assertTrue(result.completed)
        self.assertTrue(game.cellAt(1, 2).is_empty)
        self.assertTrue(game.cellAt(2, 3).is_empty)
        self.assertEqual(game.cellAt(3, 4).piece, BLACK_MAN)
        self.assertEqual(game.piecesRemaining(Side.RED), red_before - 1)
        self.assertEqual(game.scoreFor(Side.BLACK), score_before + 1)
        self.assertEqual(game.current_player, Side.RED)
        self.assertEqual(game.status, GameStatus.IN_PROGRESS)
        self.assertEqual(game.move_history[-1].captured, (2, 3))

    def test_man_promoted_on_landing(self) -> None:
        game = _game_with({(2, 1): RED_MAN, (5, 2): BLACK_MAN})
        game.handleClick(2, 1)
        self.assertTrue(game.handleClick(1, 0))

        landed = game.cellAt(1, 0).piece
        self.assertEqual(landed, RED_KING)
        self.assertTrue(game.move_history[-1].promoted)

    def test_capture_promotes_in_same_move(self) -> None:
        game = _game_with(
            {(4, 5): BLACK_MAN, (5, 6): RED_MAN, (0, 7): RED_MAN},
            turn=Side.BLACK,
        )
        game.handleClick(4, 5)
        self.assertTrue(game.handleClick(6, 7))

        self.assertEqual(game.cellAt(6, 7).piece, Piece(Side.BLACK, Rank.KING))
        self.assertTrue(game.cellAt(5, 6).is_empty)

    def test_king_is_not_promoted_again(self) -> None:
        game = _game_with({(2, 1): RED_KING, (5, 2): BLACK_MAN})
        game.handleClick(2, 1)
        game.handleClick(1, 0)
        self.assertFalse(game.move_history[-1].promoted)
        self.assertEqual(game.cellAt(1, 0).piece, RED_KING)


class GameOverTests(unittest.TestCase):
    def test_last_capture_ends_game(self) -> None:
        game = _game_with({(1, 2): BLACK_MAN, (2, 3): RED_MAN}, turn=Side.BLACK)
        self.assertEqual(game.scoreFor(Side.BLACK), 11)
        self.assertEqual(game.status, GameStatus.IN_PROGRESS)

        game.handleClick(1, 2)
        self.assertTrue(game.handleClick(3, 4))

        self.assertEqual(game.piecesRemaining(Side.RED), 0)
        self.assertGreater(game.scoreFor(Side.BLACK), 11)
        self.assertEqual(game.scoreFor(Side.RED), 11)
        self.assertEqual(game.status, GameStatus.OVER)
        self.assertEqual(game.winner, Side.BLACK)

    def test_clicks_after_game_over_are_ignored(self) -> None:
        game = _game_with({(1, 2): BLACK_MAN, (2, 3): RED_MAN}, turn=Side.BLACK)
        game.handleClick(1, 2)
        game.handleClick(3, 4)
        before = game.board.to_state()

        result = game.click(3, 4)
        self.assertEqual(result.reason, RejectReason.GAME_OVER)
        self.assertEqual(game.board.to_state(), before)
        self.assertFalse(game.requestAIMove())

    def test_score_is_pure(self) -> None:
        game = _game_with({(1, 2): BLACK_MAN})
        for _ in range(3):
            self.assertEqual(game.scoreFor(Side.BLACK), 12)
        self.assertEqual(game.status, GameStatus.IN_PROGRESS)
        self.assertEqual(game.checkGameOver(), GameStatus.OVER)
        self.assertEqual(game.winner, Side.BLACK)


if __name__ == "__main__":
    unittest.main()
