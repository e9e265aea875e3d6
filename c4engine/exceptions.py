"""
exceptions.py - Error types raised by the Connect Four game and engine
"""


class Connect4Error(Exception):
    """Base class for all errors raised by this package."""


class InvalidMoveError(Connect4Error):
    """A token was dropped into a full or out-of-range column."""

    def __init__(self, column: int, reason: str = "column is full"):
        self.column = column
        self.reason = reason
        super().__init__(f"Invalid move: column {column} ({reason})")


class GameOverError(Connect4Error):
    """The board is already won or full."""

    def __init__(self, message: str = "Game is over"):
        super().__init__(message)


class MissingModelKeyError(Connect4Error, KeyError):
    """A precomputed player was asked about a position it never enumerated."""

    def __init__(self, key: int):
        self.key = key
        super().__init__(f"model does not have key {key:#x}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class DimensionOverflowError(Connect4Error, ValueError):
    """The board shape does not fit the 64-bit packed representation."""

    def __init__(self, rows: int, cols: int, detail: str):
        self.rows = rows
        self.cols = cols
        super().__init__(f"{rows}x{cols} board cannot be packed: {detail}")
