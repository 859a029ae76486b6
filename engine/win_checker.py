"""
Win checker for tic-tac-toe.
Decides whether a board is won, drawn or still in progress.
"""

from typing import Optional, Sequence, Tuple

from .game_state import Cell, GameOutcome, Line, Mark, is_full


# All possible winning lines, in canonical order
WINNING_LINES: Tuple[Line, ...] = (
    # Rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
)


class WinChecker:
    """
    Checks for win conditions in tic-tac-toe.

    Win condition: 3 identical marks in a row
    (horizontally, vertically, or diagonally).
    When several lines are complete, the first one in
    WINNING_LINES order is reported.
    """

    WINNING_LINES = WINNING_LINES

    def evaluate(self, board: Sequence[Cell]) -> GameOutcome:
        """
        Evaluate a board.

        Args:
            board: 9 cells in row-major order.

        Returns:
            Win(player, line), Draw, or InProgress.
        """
        line = self.get_winning_line(board)
        if line is not None:
            return GameOutcome.win(board[line[0]], line)

        if is_full(board):
            return GameOutcome.draw()

        return GameOutcome.in_progress()

    def check_winner(self, board: Sequence[Cell]) -> Optional[Mark]:
        """Return the winning mark, or None if nobody has a line."""
        line = self.get_winning_line(board)
        return board[line[0]] if line is not None else None

    def get_winning_line(self, board: Sequence[Cell]) -> Optional[Line]:
        """Return the first complete line, or None."""
        for line in self.WINNING_LINES:
            if self._check_line(board, line):
                return line
        return None

    @staticmethod
    def _check_line(board: Sequence[Cell], line: Line) -> bool:
        a, b, c = line
        return board[a] is not None and board[a] == board[b] == board[c]


_default_checker = WinChecker()


def evaluate(board: Sequence[Cell]) -> GameOutcome:
    """Evaluate a board with the default checker."""
    return _default_checker.evaluate(board)
