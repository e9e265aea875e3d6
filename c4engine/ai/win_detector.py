"""
win_detector.py - Terminal-state detection on packed boards

Only lines through the most recently placed piece can change status after a
drop, so the check walks outward from that piece along four axes instead of
scanning the whole board.
"""

from enum import Enum, auto

from c4engine.ai.bitboard import PackedBoard
from c4engine.utils import BoardShape

# (row, col) steps with row counted from the bottom: vertical, horizontal,
# rising diagonal, falling diagonal. The opposite step is walked as well.
AXES = ((1, 0), (0, 1), (1, 1), (-1, 1))


class Outcome(Enum):
    """State of a packed board after a drop."""
    LIVE = auto()
    TIED = auto()
    MOVER_WON = auto()      # Owner of the set bits
    OPPONENT_WON = auto()   # Owner of the clear bits below the heights

    def is_terminal(self) -> bool:
        return self != Outcome.LIVE


class WinDetector:
    """Classifies packed boards for one board shape."""

    def __init__(self, shape: BoardShape):
        self.shape = shape

    def _streak(self, board: PackedBoard, row: int, col: int, dr: int, dc: int, bit: bool) -> int:
        """Count cells from (row, col) stepping by (dr, dc) that hold ``bit``."""
        rows, cols = self.shape.rows, self.shape.cols
        count = 0
        while (0 <= row < rows and 0 <= col < cols
               and row < board.height(col) and board.cell(row, col) == bit):
            count += 1
            row += dr
            col += dc
        return count

    def outcome(self, board: PackedBoard, col: int) -> Outcome:
        """
        Classify the board after a piece was dropped into ``col``.

        Args:
            board: Packed board including the new piece
            col: Column of the most recent drop

        Returns:
            MOVER_WON or OPPONENT_WON for the owner of the dropped piece if it
            completes a line, otherwise TIED when every column is full, else LIVE
        """
        row = board.height(col) - 1
        bit = board.cell(row, col)

        for dr, dc in AXES:
            # The origin is counted by both walks
            streak = (self._streak(board, row, col, dr, dc, bit)
                      + self._streak(board, row, col, -dr, -dc, bit) - 1)
            if streak >= self.shape.connect_n:
                return Outcome.MOVER_WON if bit else Outcome.OPPONENT_WON

        if board.is_board_full():
            return Outcome.TIED
        return Outcome.LIVE

    def any_win(self, board: PackedBoard) -> Outcome:
        """
        Look for a finished line through the top piece of any column.

        On a board reached by legal play the winning drop is always the top
        piece of its column, so this finds every win that ended a game.

        Returns:
            The first winning outcome found, TIED for a full board, else LIVE
        """
        for col in range(self.shape.cols):
            if board.height(col) == 0:
                continue
            result = self.outcome(board, col)
            if result in (Outcome.MOVER_WON, Outcome.OPPONENT_WON):
                return result

        if board.is_board_full():
            return Outcome.TIED
        return Outcome.LIVE
