"""
c4engine.game - Core game mechanics for Connect Four

This package contains the authoritative board and the turn manager the
text interface and the computer player work against.
"""

from c4engine.game.board import Board
from c4engine.game.rules import ConnectFourGame

__all__ = ['Board', 'ConnectFourGame']
