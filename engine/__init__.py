"""
Engine module for tic-tac-toe.
Handles board state, rules, and the minimax AI opponent.
"""

from .errors import TicTacToeError, IllegalMoveError, NoLegalMoveError
from .game_state import (
    Board,
    GameOutcome,
    Mark,
    OutcomeStatus,
    empty_cells,
    format_board,
    is_full,
    new_board,
    parse_board,
)
from .move_validator import MoveValidator, ValidationResult, apply_move
from .win_checker import WinChecker, WINNING_LINES, evaluate
from .ai_player import AIPlayer, choose_move

__version__ = "1.0.0"
