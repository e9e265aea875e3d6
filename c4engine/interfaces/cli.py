"""
cli.py - Command-line interface for playing and analyzing Connect Four

This module provides the interactive text loop (menus, prompts and column
input), a position analyzer that prints the computer player's column scores,
and a small benchmark of the engine.
"""

import random
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np

from c4engine.ai.bitboard import BoardCodec
from c4engine.ai.player import PrecomputedPlayer, TreeSearchPlayer
from c4engine.ai.solver import UNSCORED, GameTreeSolver
from c4engine.ai.win_detector import WinDetector
from c4engine.debug import debug
from c4engine.exceptions import Connect4Error
from c4engine.game.rules import ConnectFourGame
from c4engine.utils import (DEFAULT_SHAPE, BoardShape, GameResult, Player,
                            find_winner, render_board_ascii)

# Special return codes from get_human_move
QUIT = -1
UNDO = -2
RESTART = -3

SEPARATOR = "-" * 46


class GameMode(Enum):
    PVP = "pvp"
    AI_PLAYER_1 = "ai-first"    # Computer moves first
    AI_PLAYER_2 = "ai-second"   # Computer moves second


class SimpleCLI:
    """Simple command-line interface for Connect Four."""

    def __init__(self, shape: BoardShape = DEFAULT_SHAPE, precompute: bool = False):
        """
        Initialize the CLI.

        Args:
            shape: Board dimensions and win length for every game
            precompute: Use a PrecomputedPlayer instead of solving on demand
        """
        self.shape = shape
        self.precompute = precompute
        self.game = ConnectFourGame(shape)

    @staticmethod
    def get_user_option(option_texts: Sequence[str], option_inputs: Sequence[str]) -> Optional[int]:
        """
        Show a menu until the user types one of ``option_inputs``.

        Returns:
            Index of the chosen input, or None on end of input
        """
        while True:
            for text in option_texts:
                print(text)
            try:
                user_input = input(">> ").strip().lower()
            except EOFError:
                return None
            if user_input in option_inputs:
                return list(option_inputs).index(user_input)
            print("Invalid input")

    def run_menu(self) -> None:
        """Main menu loop: PvP, or a game against the computer."""
        print("Welcome to Connect4!")
        while True:
            print(SEPARATOR)
            choice = self.get_user_option(["Play PvP [1]", "Play AI  [2]", "Quit     [q]"],
                                          ["1", "2", "q"])
            if choice is None or choice == 2:
                return
            if choice == 0:
                self.play_game(GameMode.PVP)
                continue

            seat = self.get_user_option(["Play as Player 1 [1]", "Play as Player 2 [2]"], ["1", "2"])
            if seat is None:
                return
            self.play_game(GameMode.AI_PLAYER_2 if seat == 0 else GameMode.AI_PLAYER_1)

    def _make_ai(self, is_player_one: bool) -> TreeSearchPlayer:
        if self.precompute:
            print("Generating AI model...")
            player = PrecomputedPlayer(is_player_one, self.shape)
            print(f"Model generated in {player.generation_time:.3f} seconds")
            return player
        return TreeSearchPlayer(is_player_one, self.shape)

    def play_game(self, mode: GameMode) -> Optional[GameResult]:
        """
        Play one game in the given mode.

        Returns:
            The final result, or None if the game was abandoned
        """
        self.game = ConnectFourGame(self.shape)
        ai = None
        if mode != GameMode.PVP:
            ai = self._make_ai(is_player_one=mode == GameMode.AI_PLAYER_1)
        ai_player = None if ai is None else (Player.ONE if ai.is_player_one else Player.TWO)

        while True:
            print(SEPARATOR)
            print(self.game.render())

            if self.game.get_current_player() == ai_player:
                try:
                    move = ai.get_move(self.game.board)
                except Connect4Error as e:
                    print(f"AI could not choose a column: {e}")
                    return None
                print(f">> AI chose column: {move + 1}")
            else:
                move = self.get_human_move()
                if move == QUIT:
                    print("Quitting game.")
                    return None
                elif move == UNDO:
                    self._undo(ai_player)
                    continue
                elif move == RESTART:
                    self.game.reset()
                    print("Game restarted.")
                    continue

            try:
                result = self.game.make_move(move)
            except Connect4Error as e:
                print(e)
                continue

            if result.is_game_over():
                print(self.game.render())
                print(self._result_message(result))
                return result

    def _undo(self, ai_player: Optional[Player]) -> None:
        if not self.game.undo_move():
            print("No moves to undo.")
            return
        # Take back the computer's reply as well
        if self.game.get_current_player() == ai_player:
            self.game.undo_move()
        print("Move undone.")

    @staticmethod
    def _result_message(result: GameResult) -> str:
        if result == GameResult.PLAYER_ONE_WIN:
            return "Player 1 won"
        elif result == GameResult.PLAYER_TWO_WIN:
            return "Player 2 won"
        return "Tied"

    def get_human_move(self) -> int:
        """
        Read a 1-based column number, or a special command, from the user.

        Returns:
            0-based column index, or one of QUIT, UNDO, RESTART
        """
        cols = self.shape.cols
        while True:
            try:
                user_input = input(f"Enter column to place token (1-{cols}, q/u/r): ").strip().lower()
            except EOFError:
                return QUIT

            if user_input == 'q':
                return QUIT
            elif user_input == 'u':
                return UNDO
            elif user_input == 'r':
                return RESTART

            if user_input.isdigit() and 1 <= int(user_input) <= cols:
                return int(user_input) - 1
            print("Invalid input")

    def parse_position(self, position: str) -> np.ndarray:
        """
        Parse a comma-separated, row-major position (top row first).

        Raises:
            ValueError: on a wrong number of cells or an unknown cell value
        """
        values = [int(v) for v in position.split(',')]
        if len(values) != self.shape.cells:
            raise ValueError(f"Position string must have {self.shape.cells} values, got {len(values)}")
        allowed = {p.value for p in Player}
        if not set(values) <= allowed:
            raise ValueError(f"Cell values must be one of {sorted(allowed)}")
        return np.array(values, dtype=int).reshape(self.shape.rows, self.shape.cols)

    def analyze_position(self, position: str, player: Optional[int] = None) -> Optional[List[float]]:
        """
        Print the engine's view of a position.

        Args:
            position: Comma-separated cell values (see parse_position)
            player: 1 or 2 to force the side to move; inferred from piece counts otherwise

        Returns:
            The score vector, or None if the position could not be analyzed
        """
        try:
            grid = self.parse_position(position)
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return None

        print("Loaded position:")
        print(render_board_ascii(grid))

        winner = find_winner(grid, self.shape)
        if winner != Player.EMPTY:
            print(f"Game over: player {winner.value} has a line")
            return None
        if np.all(grid != Player.EMPTY.value):
            print("Game over: board is full (tied)")
            return None

        if player is None:
            ones = int(np.sum(grid == Player.ONE.value))
            twos = int(np.sum(grid == Player.TWO.value))
            player = 1 if ones == twos else 2
        print(f"Player {player} to move")

        ai = TreeSearchPlayer(player == 1, self.shape)
        try:
            scores = ai.score_columns(grid)
        except Connect4Error as e:
            print(f"Error: {e}")
            return None

        print("Scores: " + ", ".join("  -  " if s == UNSCORED else f"{s:.3f}" for s in scores))
        column = GameTreeSolver.select_column(scores)
        print(f"Best column: {column + 1}")
        print(f"Positions evaluated: {ai.positions_evaluated}")
        return list(scores)

    def _random_position(self, rng: random.Random, moves: int) -> ConnectFourGame:
        """Play up to ``moves`` random moves, stopping short of one that ends the game."""
        game = ConnectFourGame(self.shape)
        for _ in range(moves):
            if game.make_move(rng.choice(game.get_valid_moves())).is_game_over():
                game.undo_move()
                break
        return game

    def benchmark(self, iterations: int = 1000, seed: int = 0) -> None:
        """Benchmark the packed board, the win detector and the solver."""
        print(f"Running benchmark with {iterations} iterations on a "
              f"{self.shape.rows}x{self.shape.cols} board...")
        rng = random.Random(seed)
        codec = BoardCodec(self.shape)
        detector = WinDetector(self.shape)

        positions = []
        for _ in range(iterations):
            game = self._random_position(rng, rng.randint(0, self.shape.cells - 1))
            positions.append((game.board.get_state(), game.get_current_player()))

        debug.start_timer("decode")
        boards = [codec.board(grid, mover) for grid, mover in positions]
        decode_time = debug.end_timer("decode")
        print(f"Decoding {iterations} grids: {decode_time:.6f} seconds total, "
              f"{decode_time / max(iterations, 1) * 1000:.6f} ms per grid")

        debug.start_timer("win_check")
        checks = 0
        for board in boards:
            for col in range(self.shape.cols):
                if board.is_full(col):
                    continue
                with board.placed(col):
                    detector.outcome(board, col)
                checks += 1
        win_time = debug.end_timer("win_check")
        print(f"Performing {checks} win checks: {win_time:.6f} seconds total, "
              f"{win_time / max(checks, 1) * 1000:.6f} ms per check")

        # Solver queries start from half-filled boards to stay tractable
        solver = GameTreeSolver(self.shape)
        queries = []
        for _ in range(max(1, iterations // 100)):
            game = self._random_position(rng, self.shape.cells // 2)
            queries.append(codec.board(game.board.grid, game.get_current_player()))

        debug.start_timer("solve_cold")
        for board in queries:
            solver.solve(board)
        cold_time = debug.end_timer("solve_cold")

        debug.start_timer("solve_warm")
        for board in queries:
            solver.solve(board)
        warm_time = debug.end_timer("solve_warm")

        print(f"Solving {len(queries)} positions: cold {cold_time:.6f} s, warm {warm_time:.6f} s, "
              f"{solver.positions_evaluated} positions in table")
