"""
bitboard.py - Bit-packed board representation used by the tree search

A packed board is a single integer. The low ``rows * cols`` bits hold one
occupancy bit per cell (index ``col * rows + row``, row 0 at the bottom): a set
bit is a piece of the player about to move, a clear bit below the column
height is an opponent piece, and anything at or above the height is empty.
After the occupancy bits come one 3-bit height field per column.

PackedBoard wraps that integer and is the only code that touches raw bits.
BoardCodec converts between packed keys and the numpy grid used by the game.
"""

from contextlib import contextmanager
from typing import Iterator, Sequence, Union

import numpy as np

from c4engine.debug import debug
from c4engine.utils import DEFAULT_SHAPE, HEIGHT_BITS, BoardShape, Player

HEIGHT_FIELD_MASK = (1 << HEIGHT_BITS) - 1

Grid = Union[np.ndarray, Sequence[Sequence[int]]]


class PackedBoard:
    """Mutable bit-packed board for one shape."""

    __slots__ = ('shape', 'bits')

    def __init__(self, bits: int = 0, shape: BoardShape = DEFAULT_SHAPE):
        self.shape = shape
        self.bits = bits

    # Primitive accessors

    def height(self, col: int) -> int:
        return (self.bits >> self.shape.height_shift(col)) & HEIGHT_FIELD_MASK

    def set_height(self, col: int, height: int) -> None:
        shift = self.shape.height_shift(col)
        self.bits = (self.bits & ~(HEIGHT_FIELD_MASK << shift)) | (height << shift)

    def cell(self, row: int, col: int) -> bool:
        """Raw occupancy bit. Only meaningful below the column height."""
        return (self.bits >> self.shape.bit_index(row, col)) & 1 == 1

    def set_cell(self, row: int, col: int) -> None:
        self.bits |= 1 << self.shape.bit_index(row, col)

    def clear_cell(self, row: int, col: int) -> None:
        self.bits &= ~(1 << self.shape.bit_index(row, col))

    def is_full(self, col: int) -> bool:
        return self.height(col) == self.shape.rows

    def is_board_full(self) -> bool:
        return all(self.is_full(col) for col in range(self.shape.cols))

    # Derived operations

    def canonical_key(self) -> int:
        """
        Occupancy bits masked to each column's height, plus the height fields.

        Positions that differ only in bits above a column height (left over
        from perspective flips) share the same canonical key.
        """
        shape = self.shape
        heights = self.bits & ~shape.occupancy_mask
        occupied = 0
        for col in range(shape.cols):
            height = self.height(col)
            occupied |= ((1 << height) - 1) << (shape.rows * col)
        return heights | (self.bits & occupied)

    def invert_occupancy(self) -> None:
        """Swap the roles of mover and opponent. Height fields are untouched."""
        self.bits ^= self.shape.occupancy_mask

    @contextmanager
    def placed(self, col: int) -> Iterator[int]:
        """
        Drop a mover piece into ``col`` for the duration of the block.

        Yields the row (from the bottom) the piece landed on. The piece is
        removed again on every exit path, and the stale bit that was in the
        cell before is put back. The caller must not place into a full column.
        """
        row = self.height(col)
        stale = self.cell(row, col)
        self.set_cell(row, col)
        self.set_height(col, row + 1)
        try:
            yield row
        finally:
            self.set_height(col, row)
            if not stale:
                self.clear_cell(row, col)

    @contextmanager
    def perspective_flipped(self) -> Iterator['PackedBoard']:
        """Look at the board from the opponent's side for the duration of the block."""
        self.invert_occupancy()
        try:
            yield self
        finally:
            self.invert_occupancy()

    def __repr__(self):
        return f"PackedBoard({self.bits:#x}, {self.shape!r})"


class BoardCodec:
    """Converts between numpy grids and packed board keys for one shape."""

    def __init__(self, shape: BoardShape = DEFAULT_SHAPE):
        self.shape = shape

    def _as_grid(self, grid: Grid) -> np.ndarray:
        array = np.asarray(grid, dtype=int)
        expected = (self.shape.rows, self.shape.cols)
        if array.shape != expected:
            raise ValueError(f"Grid shape {array.shape} does not match board shape {expected}")
        return array

    def decode(self, grid: Grid, mover: Player = Player.ONE) -> int:
        """
        Pack a grid into a key from ``mover``'s point of view.

        Each column is scanned from the bottom up to the first empty cell;
        the scanned count becomes the height and every ``mover`` piece sets
        its occupancy bit.

        Args:
            grid: ROWS x COLS grid of Player values, row 0 at the top
            mover: The player whose pieces become set bits

        Returns:
            The packed key
        """
        array = self._as_grid(grid)
        rows = self.shape.rows
        board = PackedBoard(0, self.shape)

        for col in range(self.shape.cols):
            height = 0
            while height < rows and array[rows - 1 - height, col] != Player.EMPTY.value:
                if array[rows - 1 - height, col] == mover.value:
                    board.set_cell(height, col)
                height += 1
            board.set_height(col, height)

            if height < rows and np.any(array[:rows - 1 - height, col] != Player.EMPTY.value):
                debug.warning(f"Ignoring floating pieces above row {height} in column {col}", "bitboard")

        debug.trace(f"Decoded grid to key {board.bits:#x}", "bitboard")
        return board.bits

    def encode(self, key: int, mover: Player = Player.ONE) -> np.ndarray:
        """
        Unpack a key into a grid.

        Args:
            key: Packed board
            mover: The player owning the set bits

        Returns:
            ROWS x COLS grid of Player values, row 0 at the top
        """
        rows = self.shape.rows
        board = PackedBoard(key, self.shape)
        grid = np.full((rows, self.shape.cols), Player.EMPTY.value, dtype=int)
        opponent = mover.other()

        for col in range(self.shape.cols):
            for row in range(board.height(col)):
                owner = mover if board.cell(row, col) else opponent
                grid[rows - 1 - row, col] = owner.value

        return grid

    def canonical_key(self, key: int) -> int:
        """Canonical form of a packed key (see PackedBoard.canonical_key)."""
        return PackedBoard(key, self.shape).canonical_key()

    def board(self, grid: Grid, mover: Player = Player.ONE) -> PackedBoard:
        """Decode a grid straight into a PackedBoard."""
        return PackedBoard(self.decode(grid, mover), self.shape)
