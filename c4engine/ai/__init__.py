"""
c4engine/ai/__init__.py - Computer opponent for Connect Four

The opponent packs the board into a single integer, detects wins from the
last drop, and scores columns with a memoized average-reply tree search.
"""

from c4engine.ai.bitboard import BoardCodec, PackedBoard
from c4engine.ai.player import PrecomputedPlayer, TreeSearchPlayer
from c4engine.ai.solver import GameTreeSolver
from c4engine.ai.transposition import TranspositionTable
from c4engine.ai.win_detector import Outcome, WinDetector

__all__ = ['BoardCodec', 'PackedBoard', 'WinDetector', 'Outcome', 'TranspositionTable',
           'GameTreeSolver', 'TreeSearchPlayer', 'PrecomputedPlayer']
