"""
c4engine - Connect Four with an exhaustive-search computer opponent

This package provides a small Connect Four game, a bit-packed board
representation, and a memoized tree search that scores every column for the
player about to move. It is sized for small boards such as the default 4x5.
"""

# Version number
__version__ = '0.1.0'
