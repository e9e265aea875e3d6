"""
utils.py - Constants, enumerations and grid helpers for Connect Four

This module holds the default board dimensions, the player and result
enumerations, the BoardShape description shared by the game and the engine,
and a few helpers that operate on the numpy grid representation.
"""

from enum import Enum, auto
from typing import List, Tuple

import numpy as np

from c4engine.exceptions import DimensionOverflowError

# Game constants
ROWS = 4
COLS = 5
CONNECT_N = 4  # Number of pieces in a row to win

# Packed board limits
HEIGHT_BITS = 3  # Bits per column height field
WORD_BITS = 64
MAX_ROWS = (1 << HEIGHT_BITS) - 1


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self):
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    def __str__(self):
        if self == Player.EMPTY:
            return " "
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @staticmethod
    def win_for(player: 'Player') -> 'GameResult':
        return GameResult.PLAYER_ONE_WIN if player == Player.ONE else GameResult.PLAYER_TWO_WIN


class Direction(Enum):
    """Line directions checked for a win."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()    # Bottom-left to top-right
    DIAGONAL_DOWN = auto()  # Top-left to bottom-right


# Direction vectors (row, col) in grid coordinates, row 0 at the top.
# Opposite directions are covered by walking both ways.
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_UP: (-1, 1),
    Direction.DIAGONAL_DOWN: (1, 1)
}


class BoardShape:
    """
    Board dimensions plus the bit layout of the packed representation.

    Occupancy bits come first, one per cell at ``col * rows + row`` with row
    counted from the bottom. A 3-bit height field per column follows. The
    whole layout has to fit in one 64-bit word, which is checked here once so
    the engine never has to check it per query.
    """

    __slots__ = ('rows', 'cols', 'connect_n', 'cells', 'height_offset',
                 'occupancy_mask', 'total_bits')

    def __init__(self, rows: int = ROWS, cols: int = COLS, connect_n: int = CONNECT_N):
        if rows < 1 or cols < 1:
            raise ValueError(f"Board needs at least one row and column, got {rows}x{cols}")
        if connect_n < 1:
            raise ValueError(f"Win length must be positive, got {connect_n}")

        if rows > MAX_ROWS:
            raise DimensionOverflowError(
                rows, cols, f"{rows} rows do not fit a {HEIGHT_BITS}-bit height field")
        total_bits = rows * cols + HEIGHT_BITS * cols
        if total_bits > WORD_BITS:
            raise DimensionOverflowError(
                rows, cols, f"needs {total_bits} bits, more than the {WORD_BITS} available")

        self.rows = rows
        self.cols = cols
        self.connect_n = connect_n
        self.cells = rows * cols
        self.height_offset = self.cells
        self.occupancy_mask = (1 << self.cells) - 1
        self.total_bits = total_bits

    def height_shift(self, col: int) -> int:
        """Bit offset of a column's height field."""
        return self.height_offset + HEIGHT_BITS * col

    def bit_index(self, row: int, col: int) -> int:
        """Bit offset of a cell, row counted from the bottom."""
        return col * self.rows + row

    def __eq__(self, other):
        if not isinstance(other, BoardShape):
            return NotImplemented
        return (self.rows, self.cols, self.connect_n) == (other.rows, other.cols, other.connect_n)

    def __hash__(self):
        return hash((self.rows, self.cols, self.connect_n))

    def __repr__(self):
        return f"BoardShape(rows={self.rows}, cols={self.cols}, connect_n={self.connect_n})"


DEFAULT_SHAPE = BoardShape()


def empty_grid(shape: BoardShape = DEFAULT_SHAPE) -> np.ndarray:
    """Create an empty grid for the given shape."""
    return np.full((shape.rows, shape.cols), Player.EMPTY.value, dtype=int)


def is_valid_position(row: int, col: int, shape: BoardShape = DEFAULT_SHAPE) -> bool:
    """Check if a position is within the board boundaries."""
    return 0 <= row < shape.rows and 0 <= col < shape.cols


def get_line_through(grid: np.ndarray, row: int, col: int,
                     shape: BoardShape = DEFAULT_SHAPE) -> List[Tuple[int, int]]:
    """
    Find the longest line of same-colored pieces passing through a cell.

    Args:
        grid: The game grid
        row: Row index of the piece
        col: Column index of the piece
        shape: Board dimensions and win length

    Returns:
        Positions of a line of at least ``shape.connect_n`` pieces, or an
        empty list if there is none through this cell
    """
    player_value = grid[row, col]
    if player_value == Player.EMPTY.value:
        return []

    for dr, dc in DIRECTION_VECTORS.values():
        positions = [(row, col)]

        r, c = row + dr, col + dc
        while is_valid_position(r, c, shape) and grid[r, c] == player_value:
            positions.append((r, c))
            r += dr
            c += dc

        r, c = row - dr, col - dc
        while is_valid_position(r, c, shape) and grid[r, c] == player_value:
            positions.append((r, c))
            r -= dr
            c -= dc

        if len(positions) >= shape.connect_n:
            return positions

    return []


def check_win_at_position(grid: np.ndarray, row: int, col: int,
                          shape: BoardShape = DEFAULT_SHAPE) -> bool:
    """Check if the piece at (row, col) is part of a winning line."""
    return bool(get_line_through(grid, row, col, shape))


def find_winner(grid: np.ndarray, shape: BoardShape = DEFAULT_SHAPE) -> Player:
    """
    Scan the whole grid for a winning line.

    Returns:
        The player owning the first line found, or Player.EMPTY
    """
    for row in range(shape.rows):
        for col in range(shape.cols):
            if grid[row, col] != Player.EMPTY.value and check_win_at_position(grid, row, col, shape):
                return Player(int(grid[row, col]))
    return Player.EMPTY


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render the grid as text, one ``| X |`` cell per column, with 1-based
    column numbers underneath.
    """
    rows, cols = grid.shape
    lines = []
    for row in range(rows):
        cells = [f" {Player(int(grid[row, col]))} " for col in range(cols)]
        lines.append("|" + "|".join(cells) + "|")

    footer = [f" {col + 1} " for col in range(cols)]
    lines.append(" " + " ".join(footer) + " ")
    return "\n".join(lines)
