"""
Move validator for tic-tac-toe.
Validates moves and applies them to a board.
"""

from typing import Optional, List, Sequence
from dataclasses import dataclass

from .errors import IllegalMoveError
from .game_state import Board, Cell, CELL_COUNT, Mark, empty_cells
from .win_checker import WinChecker


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates tic-tac-toe moves.

    Rules:
    1. The index must be an integer in 0-8
    2. Can only place on empty cells
    """

    def __init__(self, win_checker: Optional[WinChecker] = None):
        self.win_checker = win_checker or WinChecker()

    def validate_move(self, board: Sequence[Cell], index) -> ValidationResult:
        """
        Validate a move.

        Args:
            board: Current board.
            index: Cell to place a mark on (0-8).

        Returns:
            ValidationResult with is_valid and error_message.
        """
        # bool is an int subclass but never a cell index
        if not isinstance(index, int) or isinstance(index, bool):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position {index!r}. Must be an integer."
            )

        if not 0 <= index < CELL_COUNT:
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position {index}. Must be 0-{CELL_COUNT - 1}."
            )

        if board[index] is not None:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {index} is already occupied by {board[index].value}"
            )

        return ValidationResult(is_valid=True)

    def apply_move(self, board: Sequence[Cell], index: int, player: Mark) -> Board:
        """
        Place `player` on `index` and return the new board.

        The input board is left untouched.

        Raises:
            IllegalMoveError: index out of range or cell occupied.
        """
        result = self.validate_move(board, index)
        if not result.is_valid:
            raise IllegalMoveError(index, result.error_message)

        cells = list(board)
        cells[index] = player
        return tuple(cells)

    def get_valid_moves(self, board: Sequence[Cell]) -> List[int]:
        """
        Get all legal moves.

        Returns:
            Empty cell indices, or an empty list once the game is decided.
        """
        if self.win_checker.evaluate(board).is_terminal:
            return []
        return empty_cells(board)


_default_validator = MoveValidator()


def apply_move(board: Sequence[Cell], index: int, player: Mark) -> Board:
    """Apply a move with the default validator."""
    return _default_validator.apply_move(board, index, player)
