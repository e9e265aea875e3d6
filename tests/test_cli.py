import io
import random
import unittest
from contextlib import redirect_stdout
from unittest import mock

import numpy as np

from c4engine.ai.bitboard import BoardCodec
from c4engine.interfaces.cli import GameMode, SimpleCLI
from c4engine.utils import BoardShape, GameResult, Player

SHAPE = BoardShape(4, 5, 4)


def run_with_input(func, inputs):
    """Call func with input() answering from ``inputs``; returns (result, output)."""
    out = io.StringIO()
    with mock.patch('builtins.input', side_effect=list(inputs)), redirect_stdout(out):
        result = func()
    return result, out.getvalue()


class TestSimpleCLI(unittest.TestCase):
    def test_pvp_game(self):
        cli = SimpleCLI(SHAPE)
        result, output = run_with_input(lambda: cli.play_game(GameMode.PVP),
                                         ["1", "2", "1", "2", "1", "2", "1"])
        self.assertEqual(result, GameResult.PLAYER_ONE_WIN)
        self.assertIn("Player 1 won", output)

    def test_bad_input_reprompts(self):
        cli = SimpleCLI(SHAPE)
        result, output = run_with_input(lambda: cli.play_game(GameMode.PVP),
                                        ["9", "x", "q"])
        self.assertIsNone(result)
        self.assertEqual(output.count("Invalid input"), 2)
        self.assertIn("Quitting game.", output)

    def test_full_column_is_reported(self):
        cli = SimpleCLI(BoardShape(1, 3, 2))
        result, output = run_with_input(lambda: cli.play_game(GameMode.PVP),
                                        ["1", "1", "q"])
        self.assertIsNone(result)
        self.assertIn("Invalid move: column 0", output)

    def test_computer_moves_first_and_wins(self):
        cli = SimpleCLI(BoardShape(1, 3, 2))
        result, output = run_with_input(lambda: cli.play_game(GameMode.AI_PLAYER_1), ["1"])
        self.assertEqual(result, GameResult.PLAYER_ONE_WIN)
        self.assertIn(">> AI chose column: 2", output)
        self.assertIn(">> AI chose column: 3", output)

    def test_precomputed_computer(self):
        cli = SimpleCLI(BoardShape(1, 3, 2), precompute=True)
        result, output = run_with_input(lambda: cli.play_game(GameMode.AI_PLAYER_1), ["3"])
        self.assertEqual(result, GameResult.PLAYER_ONE_WIN)
        self.assertIn("Generating AI model...", output)

    def test_undo_takes_back_computer_reply(self):
        cli = SimpleCLI(BoardShape(1, 4, 3))
        result, output = run_with_input(lambda: cli.play_game(GameMode.AI_PLAYER_2),
                                        ["1", "u", "q"])
        self.assertIsNone(result)
        self.assertIn("Move undone.", output)
        self.assertEqual(cli.game.history, [])

    def test_menu(self):
        cli = SimpleCLI(SHAPE)
        _, output = run_with_input(cli.run_menu, ["1", "q", "7", "q"])
        self.assertIn("Welcome to Connect4!", output)
        self.assertIn("Play PvP [1]", output)
        self.assertIn("Invalid input", output)

    def test_analyze_position(self):
        cli = SimpleCLI(SHAPE)
        position = "0,0,0,0,0,0,0,0,0,0,2,2,0,0,0,1,1,1,0,2"
        scores, output = run_with_input(lambda: cli.analyze_position(position), [])
        self.assertEqual(scores, [-1.0, -1.0, -1.0, 1.0, -1.0])
        self.assertIn("Player 1 to move", output)
        self.assertIn("Best column: 4", output)

    def test_analyze_finished_position(self):
        cli = SimpleCLI(SHAPE)
        position = "0,0,0,0,0,0,0,0,0,0,2,2,2,0,0,1,1,1,1,0"
        scores, output = run_with_input(lambda: cli.analyze_position(position), [])
        self.assertIsNone(scores)
        self.assertIn("player 1 has a line", output)

    def test_analyze_bad_position(self):
        cli = SimpleCLI(SHAPE)
        scores, output = run_with_input(lambda: cli.analyze_position("1,2,3"), [])
        self.assertIsNone(scores)
        self.assertIn("Error parsing position", output)

    def test_benchmark(self):
        cli = SimpleCLI(BoardShape(3, 3, 3))
        _, output = run_with_input(lambda: cli.benchmark(iterations=20, seed=1), [])
        self.assertIn("Decoding 20 grids", output)
        self.assertIn("Solving 1 positions", output)

    def test_random_positions_are_live(self):
        cli = SimpleCLI(SHAPE)
        rng = random.Random(2)
        for moves in range(SHAPE.cells):
            game = cli._random_position(rng, moves)
            self.assertFalse(game.is_game_over())
            self.assertLessEqual(len(game.history), moves)

    def test_benchmark_decodes_for_side_to_move(self):
        cli = SimpleCLI(BoardShape(3, 3, 3))
        original = BoardCodec.board
        with mock.patch.object(BoardCodec, 'board', autospec=True, side_effect=original) as board:
            run_with_input(lambda: cli.benchmark(iterations=30, seed=4), [])

        movers = set()
        for call in board.call_args_list:
            _, grid, mover = call[0]
            ones = int(np.sum(grid == Player.ONE.value))
            twos = int(np.sum(grid == Player.TWO.value))
            self.assertEqual(mover, Player.ONE if ones == twos else Player.TWO)
            movers.add(mover)
        self.assertEqual(movers, {Player.ONE, Player.TWO})

    def test_benchmark_on_single_cell_board(self):
        cli = SimpleCLI(BoardShape(1, 1, 1))
        _, output = run_with_input(lambda: cli.benchmark(iterations=5), [])
        self.assertIn("Decoding 5 grids", output)
        self.assertIn("Solving 1 positions", output)


if __name__ == '__main__':
    unittest.main()
