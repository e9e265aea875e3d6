"""
board.py - Board representation and core game mechanics for Connect Four

This module implements the Board class which holds the authoritative grid,
applies moves for whichever player's turn it is, and tracks the game result.
"""

from typing import List, Optional, Tuple

import numpy as np

from c4engine.debug import debug
from c4engine.exceptions import GameOverError, InvalidMoveError
from c4engine.utils import (DEFAULT_SHAPE, BoardShape, GameResult, Player,
                            check_win_at_position, empty_grid, get_line_through,
                            render_board_ascii)


class Board:
    """
    Represents a Connect Four game board.

    The grid is a numpy array with row 0 at the top, holding Player values.
    """

    def __init__(self, shape: BoardShape = DEFAULT_SHAPE):
        """Initialize an empty board of the given shape."""
        debug.debug(f"Initializing new Board {shape.rows}x{shape.cols}", "board")
        self.shape = shape
        self.reset()

    def reset(self):
        """Reset the board to an empty state."""
        self.grid = empty_grid(self.shape)
        self.moves_made: List[int] = []
        self.current_player = Player.ONE
        self.game_result = GameResult.IN_PROGRESS
        self.last_move: Optional[Tuple[int, int]] = None

    def is_valid_move(self, column: int) -> bool:
        """
        Check if a move is valid.

        Args:
            column: The column to place a piece (0-indexed)

        Returns:
            True if the move is valid, False otherwise
        """
        if self.game_result.is_game_over():
            return False

        if not (0 <= column < self.shape.cols):
            return False

        return bool(self.grid[0, column] == Player.EMPTY.value)

    def get_valid_moves(self) -> List[int]:
        """
        Get a list of valid columns where a piece can be placed.

        Returns:
            List of valid column indices
        """
        if self.game_result.is_game_over():
            return []

        return [col for col in range(self.shape.cols) if self.is_valid_move(col)]

    def make_move(self, column: int) -> GameResult:
        """
        Drop the current player's piece into the specified column.

        Args:
            column: The column to place a piece (0-indexed)

        Returns:
            The game result after the move

        Raises:
            GameOverError: if the game has already finished
            InvalidMoveError: if the column is out of range or full
        """
        debug.debug(f"Attempting move in column {column} for player {self.current_player}", "board")

        if self.game_result.is_game_over():
            raise GameOverError()
        if not (0 <= column < self.shape.cols):
            raise InvalidMoveError(column, "out of range")
        if self.grid[0, column] != Player.EMPTY.value:
            raise InvalidMoveError(column)

        # Find the lowest empty row in the column
        for row in range(self.shape.rows - 1, -1, -1):
            if self.grid[row, column] == Player.EMPTY.value:
                debug.trace(f"Placing piece at position ({row}, {column})", "board")
                self.grid[row, column] = self.current_player.value
                self.last_move = (row, column)
                self.moves_made.append(column)
                break

        if self._check_win():
            self.game_result = GameResult.win_for(self.current_player)
            debug.info(f"Player {self.current_player.name} wins after move at {self.last_move}", "board")
        elif len(self.moves_made) == self.shape.cells:
            self.game_result = GameResult.DRAW
            debug.info("Game ends in a draw", "board")

        # Switch player if game is still in progress
        if not self.game_result.is_game_over():
            self.current_player = self.current_player.other()

        return self.game_result

    def undo_move(self) -> bool:
        """
        Undo the last move.

        Returns:
            True if a move was undone, False if no moves to undo
        """
        if not self.moves_made:
            debug.debug("No moves to undo", "board")
            return False

        last_column = self.moves_made.pop()
        for row in range(self.shape.rows):
            if self.grid[row, last_column] != Player.EMPTY.value:
                self.grid[row, last_column] = Player.EMPTY.value
                break

        # A finished game did not switch turns, a live one did
        if not self.game_result.is_game_over():
            self.current_player = self.current_player.other()
        self.game_result = GameResult.IN_PROGRESS

        if self.moves_made:
            last_column = self.moves_made[-1]
            for row in range(self.shape.rows):
                if self.grid[row, last_column] != Player.EMPTY.value:
                    self.last_move = (row, last_column)
                    break
        else:
            self.last_move = None

        return True

    def _check_win(self) -> bool:
        """Check if the last move completed a line."""
        if self.last_move is None:
            return False

        row, col = self.last_move
        return check_win_at_position(self.grid, row, col, self.shape)

    def get_winning_line(self) -> List[Tuple[int, int]]:
        """
        Get the positions of the winning line if the game is won.

        Returns:
            List of (row, col) positions forming the winning line, or empty list if no win
        """
        if self.game_result in (GameResult.IN_PROGRESS, GameResult.DRAW) or self.last_move is None:
            return []

        row, col = self.last_move
        return get_line_through(self.grid, row, col, self.shape)

    def get_state(self) -> np.ndarray:
        """Get a copy of the grid."""
        return self.grid.copy()

    def render(self) -> str:
        """Render the board as a string."""
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()
