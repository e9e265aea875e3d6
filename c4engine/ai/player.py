"""
player.py - Computer players backed by the average-reply tree search

TreeSearchPlayer solves each position on demand and keeps the table between
moves. PrecomputedPlayer enumerates every position reachable from the empty
board up front and afterwards only looks positions up; asking it about a
position it never enumerated raises MissingModelKeyError instead of quietly
searching, so a mismatch between its parameters and the game is visible.
"""

from typing import Optional

from c4engine.ai.bitboard import BoardCodec, Grid, PackedBoard
from c4engine.ai.solver import GameTreeSolver
from c4engine.ai.transposition import ScoreVector
from c4engine.debug import DebugLevel, debug
from c4engine.exceptions import GameOverError, MissingModelKeyError
from c4engine.utils import DEFAULT_SHAPE, BoardShape, Player


class TreeSearchPlayer:
    """
    A Connect Four player that scores every column by exhaustive search.

    Scores are estimates of the chance of not losing when the opponent picks
    its replies uniformly at random; the highest-scoring column is played.
    """

    def __init__(self, is_player_one: bool = True, shape: BoardShape = DEFAULT_SHAPE,
                 solver: Optional[GameTreeSolver] = None):
        """
        Initialize the player.

        Args:
            is_player_one: Role used when a query does not name one
            shape: Board dimensions and win length the player is built for
            solver: Solver to use; a new one with its own table by default
        """
        self.is_player_one = is_player_one
        self.shape = shape
        self.codec = BoardCodec(shape)
        self.solver = solver if solver is not None else GameTreeSolver(shape)
        self.last_scores: Optional[ScoreVector] = None

    @property
    def positions_evaluated(self) -> int:
        return self.solver.positions_evaluated

    def _mover(self, is_player_one: Optional[bool]) -> Player:
        if is_player_one is None:
            is_player_one = self.is_player_one
        return Player.ONE if is_player_one else Player.TWO

    def score_columns(self, grid: Grid, is_player_one: Optional[bool] = None) -> ScoreVector:
        """
        Score every column of ``grid`` for the given role.

        Args:
            grid: ROWS x COLS grid of Player values, row 0 at the top
            is_player_one: Role to move; defaults to the player's own role

        Returns:
            One score per column, -1 for columns that are not scored

        Raises:
            GameOverError: if the grid already holds a winning line or is full
        """
        board = self.codec.board(grid, self._mover(is_player_one))
        if self.solver.detector.any_win(board).is_terminal():
            raise GameOverError("Cannot choose a column: the game is already over")

        scores = self._lookup(board)
        self.last_scores = scores
        if debug.is_enabled_for(DebugLevel.INFO, "player"):
            debug.info(",".join(f"{score:.2f}" for score in scores), "player")
        return scores

    def choose_column(self, grid: Grid, is_player_one: Optional[bool] = None) -> int:
        """
        Pick the column to play.

        Returns:
            The highest-scoring column, the leftmost one on ties
        """
        scores = self.score_columns(grid, is_player_one)
        column = GameTreeSolver.select_column(scores)
        debug.debug(f"Chose column {column} with score {scores[column]:.3f}", "player")
        return column

    def get_move(self, board) -> int:
        """Pick a column for whoever is to move on a game Board."""
        return self.choose_column(board.get_state(), board.current_player == Player.ONE)

    def _lookup(self, board: PackedBoard) -> ScoreVector:
        return self.solver.solve(board)


class PrecomputedPlayer(TreeSearchPlayer):
    """
    A TreeSearchPlayer that solves the empty board once at construction and
    answers every later query from that table alone.
    """

    def __init__(self, is_player_one: bool = True, shape: BoardShape = DEFAULT_SHAPE,
                 solver: Optional[GameTreeSolver] = None):
        super().__init__(is_player_one, shape, solver)

        debug.info("Generating AI model...", "player")
        with debug.timer("generate_model", "player") as timing:
            self.solver.solve(PackedBoard(0, shape))
        self.generation_time = timing['elapsed']
        debug.info(f"Model generated with {len(self.solver.table)} positions "
                   f"in {self.generation_time:.3f}s", "player")

    def _lookup(self, board: PackedBoard) -> ScoreVector:
        key = board.canonical_key()
        if key not in self.solver.table:
            debug.error(f"Model does not have key {key:#x}", "player")
            raise MissingModelKeyError(key)
        return self.solver.table.get(key)
