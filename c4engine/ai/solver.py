"""
solver.py - Exhaustive average-reply tree search for Connect Four

The solver scores every column for the player about to move. A column that
wins on the spot scores 1 and ends the scan, a column that fills the board
without a winner scores 0.5, and any other column scores the mean of
``1 - reply`` over all of the opponent's legal replies. Replies are weighted
equally, so this is an estimate of the mover's chance of not losing against
an opponent picking uniformly, not a minimax value.

Positions are memoized on their canonical packed key, which makes the search
practical for small boards only (4x5 and below).
"""

from typing import List, Optional, Sequence

from c4engine.ai.bitboard import PackedBoard
from c4engine.ai.transposition import ScoreVector, TranspositionTable
from c4engine.ai.win_detector import Outcome, WinDetector
from c4engine.debug import DebugLevel, debug
from c4engine.utils import DEFAULT_SHAPE, BoardShape

WIN_SCORE = 1.0
TIE_SCORE = 0.5
UNSCORED = -1.0  # Full column, or not scored because another column wins at once


class GameTreeSolver:
    """
    Scores board positions by exhaustive search with memoization.

    The table is a collaborator so several players can share one, or a test
    can inspect it; by default each solver owns a fresh one.
    """

    def __init__(self, shape: BoardShape = DEFAULT_SHAPE,
                 table: Optional[TranspositionTable] = None):
        self.shape = shape
        self.table = table if table is not None else TranspositionTable()
        self.detector = WinDetector(shape)
        self.positions_evaluated = 0

    def solve(self, board: PackedBoard) -> ScoreVector:
        """
        Score every column of ``board`` for the player about to move.

        Entry point for callers; logs search statistics once the query is done.
        The board must not be terminal. It is returned in the state it came in.
        """
        if board.shape != self.shape:
            raise ValueError(f"Board shape {board.shape!r} does not match solver shape {self.shape!r}")

        before = self.positions_evaluated
        with debug.timer("solve", "solver") as timing:
            scores = self.evaluate(board)

        if debug.is_enabled_for(DebugLevel.INFO, "solver"):
            stats = self.table.stats()
            debug.info(f"Solved {board.canonical_key():#x}: {self.positions_evaluated - before} new positions "
                       f"in {timing['elapsed']:.3f}s, table has {stats['entries']} entries "
                       f"({stats['hits']} hits)", "solver")
        return scores

    def evaluate_key(self, key: int) -> ScoreVector:
        return self.solve(PackedBoard(key, self.shape))

    def evaluate(self, board: PackedBoard) -> ScoreVector:
        """Memoized score vector of ``board``; mutates and restores it while searching."""
        key = board.canonical_key()
        cached = self.table.get(key)
        if cached is not None:
            return cached

        scores = self._score_columns(board)
        self.table.put(key, scores)
        self.positions_evaluated += 1
        return scores

    def _score_columns(self, board: PackedBoard) -> ScoreVector:
        cols = self.shape.cols
        scores: List[float] = [UNSCORED] * cols

        # The first winning column short-circuits; draws are only noted
        for col in range(cols):
            if board.is_full(col):
                continue
            with board.placed(col):
                outcome = self.detector.outcome(board, col)
                if outcome == Outcome.MOVER_WON:
                    scores[col] = WIN_SCORE
                    return tuple(scores)
            if outcome == Outcome.TIED:
                scores[col] = TIE_SCORE

        for col in range(cols):
            if board.is_full(col) or scores[col] != UNSCORED:
                continue
            with board.placed(col), board.perspective_flipped():
                replies = self.evaluate(board)

            # A live position always leaves the opponent at least one reply
            outcomes = [1.0 - reply for reply in replies if reply != UNSCORED]
            scores[col] = sum(outcomes) / len(outcomes)

        return tuple(scores)

    @staticmethod
    def select_column(scores: Sequence[float]) -> int:
        """Index of the highest score; the leftmost one wins ties."""
        best_score = UNSCORED
        best_column = 0
        for col, score in enumerate(scores):
            if score > best_score:
                best_score = score
                best_column = col
        return best_column
