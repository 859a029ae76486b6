"""
AI player for tic-tac-toe.
Uses the Minimax algorithm to choose the best move.
"""

import logging
from typing import Dict, List, Optional, Sequence

from .errors import NoLegalMoveError
from .game_state import Cell, CENTER, Mark, empty_cells
from .win_checker import WinChecker

logger = logging.getLogger(__name__)

WIN_SCORE = 10


class AIPlayer:
    """
    An AI that plays tic-tac-toe using the Minimax algorithm.

    The AI will always play optimally - it will win if possible,
    block the opponent if needed, and never lose (at worst, draw).
    Wins score `10 - depth` and losses `depth - 10`, so faster wins
    and slower losses are preferred.
    """

    def __init__(
        self,
        player: Mark = Mark.O,
        open_with_center: bool = True,
        win_checker: Optional[WinChecker] = None
    ):
        """
        Initialize the AI player.

        Args:
            player: Which mark the AI plays (default: O)
            open_with_center: Answer an empty board with the center
                without searching.
            win_checker: Checker used at every search node.
        """
        self.player = player
        self.opponent = player.opposite()
        self.open_with_center = open_with_center
        self.win_checker = win_checker or WinChecker()

        # Positions visited by the last search (for debugging)
        self.positions_evaluated = 0

    def choose_move(self, board: Sequence[Cell]) -> int:
        """
        Get the best move for the current position.

        Empty cells are tried in ascending order and the first one
        with the highest score wins ties.

        Args:
            board: Current board. Never modified.

        Returns:
            Index of the chosen cell.

        Raises:
            NoLegalMoveError: the board is full or already decided.
        """
        self.positions_evaluated = 0
        moves = self._playable_moves(board)

        # Center is always optimal on an empty board
        if self.open_with_center and len(moves) == len(board):
            logger.debug("%s opens with the center", self.player.value)
            return CENTER

        work = list(board)
        best_score = float("-inf")
        best_move = moves[0]

        for index in moves:
            score = self._score_candidate(work, index)
            if score > best_score:
                best_score = score
                best_move = index

        logger.debug(
            "%s evaluated %d positions. Best move: %d (score: %d)",
            self.player.value, self.positions_evaluated, best_move, best_score
        )
        return best_move

    def score_moves(self, board: Sequence[Cell]) -> Dict[int, int]:
        """
        Minimax score of every empty cell for the AI.

        Positive means a forced win, zero a draw, negative a forced loss.

        Raises:
            NoLegalMoveError: the board is full or already decided.
        """
        self.positions_evaluated = 0
        moves = self._playable_moves(board)
        work = list(board)
        return {index: self._score_candidate(work, index) for index in moves}

    def _playable_moves(self, board: Sequence[Cell]) -> List[int]:
        if self.win_checker.evaluate(board).is_terminal:
            raise NoLegalMoveError("No legal moves: the game is already over")
        return empty_cells(board)

    def _score_candidate(self, work: List[Cell], index: int) -> int:
        """Score the AI playing `index`, restoring the cell afterwards."""
        work[index] = self.player
        try:
            return self._minimax(work, depth=1, is_maximizing=False)
        finally:
            work[index] = None

    def _minimax(self, work: List[Cell], depth: int, is_maximizing: bool) -> int:
        """
        Minimax algorithm.

        Args:
            work: Working board, mutated and restored in place.
            depth: Plies played since the search started.
            is_maximizing: True if it is the AI's turn.

        Returns:
            The score of the position.
        """
        self.positions_evaluated += 1

        # Check terminal states
        winner = self.win_checker.check_winner(work)
        if winner == self.player:
            return WIN_SCORE - depth
        elif winner is not None:
            return depth - WIN_SCORE

        valid_moves = empty_cells(work)
        if not valid_moves:
            return 0  # Draw

        mark = self.player if is_maximizing else self.opponent
        best_score = float("-inf") if is_maximizing else float("inf")

        for index in valid_moves:
            work[index] = mark
            try:
                score = self._minimax(work, depth + 1, not is_maximizing)
            finally:
                work[index] = None

            if is_maximizing:
                best_score = max(best_score, score)
            else:
                best_score = min(best_score, score)

        return best_score


def choose_move(board: Sequence[Cell], player: Mark) -> int:
    """Optimal move for `player` on `board`."""
    return AIPlayer(player).choose_move(board)
