import random
import unittest

import numpy as np

from c4engine.ai.bitboard import BoardCodec, PackedBoard
from c4engine.ai.win_detector import Outcome, WinDetector
from c4engine.game.board import Board
from c4engine.utils import BoardShape, GameResult, Player

SHAPE = BoardShape(4, 5, 4)


def tied_grid(shape=SHAPE):
    """Full grid with no line: vertical pairs, alternating by column."""
    grid = np.zeros((shape.rows, shape.cols), dtype=int)
    for row in range(shape.rows):
        for col in range(shape.cols):
            from_bottom = shape.rows - 1 - row
            grid[row, col] = 1 if (from_bottom // 2 + col) % 2 == 0 else 2
    return grid


class TestWinDetector(unittest.TestCase):
    def setUp(self):
        self.codec = BoardCodec(SHAPE)
        self.detector = WinDetector(SHAPE)

    def outcome(self, rows, col, mover=Player.ONE):
        board = self.codec.board(np.array(rows, dtype=int), mover)
        return self.detector.outcome(board, col)

    def test_vertical_win(self):
        rows = [
            [1, 0, 0, 0, 0],
            [1, 2, 0, 0, 0],
            [1, 2, 0, 0, 0],
            [1, 2, 0, 0, 0],
        ]
        self.assertEqual(self.outcome(rows, 0), Outcome.MOVER_WON)

    def test_vertical_three_is_live(self):
        rows = [
            [0, 0, 0, 0, 0],
            [1, 2, 0, 0, 0],
            [1, 2, 0, 0, 0],
            [1, 2, 0, 0, 0],
        ]
        self.assertEqual(self.outcome(rows, 0), Outcome.LIVE)

    def test_horizontal_win_from_any_piece(self):
        rows = [
            [0, 0, 0, 0, 0],
            [0, 0, 0, 0, 0],
            [2, 2, 2, 0, 0],
            [1, 1, 1, 1, 0],
        ]
        self.assertEqual(self.outcome(rows, 3), Outcome.MOVER_WON)
        self.assertEqual(self.outcome(rows, 3, Player.TWO), Outcome.OPPONENT_WON)

    def test_horizontal_three_is_live(self):
        rows = [
            [0, 0, 0, 0, 0],
            [0, 0, 0, 0, 0],
            [0, 2, 2, 0, 0],
            [0, 1, 1, 1, 2],
        ]
        self.assertEqual(self.outcome(rows, 3), Outcome.LIVE)

    def test_rising_diagonal_win(self):
        rows = [
            [0, 0, 0, 1, 0],
            [0, 0, 1, 2, 0],
            [0, 1, 2, 2, 0],
            [1, 2, 2, 2, 0],
        ]
        self.assertEqual(self.outcome(rows, 3), Outcome.MOVER_WON)
        # Completing piece in the middle of the line
        self.assertEqual(self.outcome(rows, 0), Outcome.MOVER_WON)

    def test_rising_diagonal_three_is_live(self):
        rows = [
            [0, 0, 0, 0, 0],
            [0, 0, 1, 2, 0],
            [0, 1, 2, 2, 0],
            [1, 2, 2, 2, 0],
        ]
        self.assertEqual(self.outcome(rows, 2), Outcome.LIVE)

    def test_falling_diagonal_win(self):
        rows = [
            [1, 0, 0, 0, 0],
            [2, 1, 0, 0, 0],
            [2, 2, 1, 0, 0],
            [2, 2, 2, 1, 0],
        ]
        self.assertEqual(self.outcome(rows, 0), Outcome.MOVER_WON)
        self.assertEqual(self.outcome(rows, 3), Outcome.MOVER_WON)

    def test_falling_diagonal_three_is_live(self):
        rows = [
            [0, 0, 0, 0, 0],
            [0, 1, 0, 0, 0],
            [0, 2, 1, 0, 0],
            [0, 2, 2, 1, 0],
        ]
        for col in (1, 2, 3):
            self.assertEqual(self.outcome(rows, col), Outcome.LIVE)

    def test_opponent_line_is_reported_for_opponent(self):
        rows = [
            [2, 0, 0, 0, 0],
            [2, 1, 0, 0, 0],
            [2, 1, 0, 0, 0],
            [2, 1, 1, 0, 0],
        ]
        self.assertEqual(self.outcome(rows, 0), Outcome.OPPONENT_WON)

    def test_cells_above_height_do_not_count(self):
        # A lone opponent piece: its clear bit must not join the clear bits above it
        board = PackedBoard(0, SHAPE)
        board.set_height(0, 1)
        self.assertEqual(self.detector.outcome(board, 0), Outcome.LIVE)

        # Stale mover bits above the heights must not complete a line either
        board = PackedBoard(0, SHAPE)
        for col in range(3):
            board.set_cell(0, col)
            board.set_height(col, 1)
        board.set_cell(0, 3)
        self.assertEqual(self.detector.outcome(board, 2), Outcome.LIVE)

    def test_full_board_without_line_is_tied(self):
        grid = tied_grid()
        board = self.codec.board(grid, Player.ONE)
        for col in range(SHAPE.cols):
            self.assertEqual(self.detector.outcome(board, col), Outcome.TIED)
        self.assertEqual(self.detector.any_win(board), Outcome.TIED)

    def test_any_win(self):
        rows = [
            [0, 0, 0, 0, 0],
            [0, 0, 0, 0, 0],
            [2, 2, 2, 0, 0],
            [1, 1, 1, 1, 0],
        ]
        board = self.codec.board(np.array(rows), Player.TWO)
        self.assertEqual(self.detector.any_win(board), Outcome.OPPONENT_WON)

        empty = PackedBoard(0, SHAPE)
        self.assertEqual(self.detector.any_win(empty), Outcome.LIVE)

    def test_agrees_with_game_board(self):
        rng = random.Random(7)
        for _ in range(200):
            game = Board(SHAPE)
            while not game.game_result.is_game_over():
                mover = game.current_player
                col = rng.choice(game.get_valid_moves())
                result = game.make_move(col)

                outcome = self.detector.outcome(self.codec.board(game.grid, mover), col)
                if result == GameResult.DRAW:
                    self.assertEqual(outcome, Outcome.TIED)
                elif result.is_game_over():
                    self.assertEqual(outcome, Outcome.MOVER_WON)
                else:
                    self.assertEqual(outcome, Outcome.LIVE)


if __name__ == '__main__':
    unittest.main()
