"""
rules.py - Turn management for a Connect Four game

ConnectFourGame owns the authoritative Board: it applies the column chosen by
a human or the computer, advances the turn, and reports whether the game is
still live, tied or won.
"""

from typing import List, Optional

from c4engine.debug import debug
from c4engine.game.board import Board
from c4engine.utils import DEFAULT_SHAPE, BoardShape, GameResult, Player


class ConnectFourGame:
    """
    High-level Connect Four game manager.

    This class provides the interface the text loop plays through.
    """

    def __init__(self, shape: BoardShape = DEFAULT_SHAPE):
        """Initialize a new Connect Four game."""
        debug.debug("Initializing ConnectFourGame", "game")
        self.shape = shape
        self.board = Board(shape)
        self.history: List[int] = []

    def reset(self) -> None:
        """Reset the game to initial state."""
        debug.debug("Resetting game", "game")
        self.board.reset()
        self.history = []

    def make_move(self, column: int) -> GameResult:
        """
        Make a move in the game.

        Args:
            column: Column to place a piece (0-indexed)

        Returns:
            The game result after the move

        Raises:
            InvalidMoveError, GameOverError: propagated from the board
        """
        debug.debug(f"Game: Making move in column {column}", "game")
        result = self.board.make_move(column)
        self.history.append(column)
        return result

    def undo_move(self) -> bool:
        """
        Undo the last move.

        Returns:
            True if a move was undone, False otherwise
        """
        if not self.history:
            debug.debug("No moves to undo", "game")
            return False

        self.history.pop()
        return self.board.undo_move()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self.board.game_result.is_game_over()

    def get_winner(self) -> Optional[Player]:
        """
        Get the winner of the game.

        Returns:
            The winning player, or None if no winner yet or draw
        """
        if self.board.game_result == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        elif self.board.game_result == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        else:
            return None

    def get_current_player(self) -> Player:
        return self.board.current_player

    def get_valid_moves(self) -> List[int]:
        return self.board.get_valid_moves()

    def render(self) -> str:
        return self.board.render()
