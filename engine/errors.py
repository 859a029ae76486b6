"""
Exceptions raised by the tic-tac-toe engine.
"""


class TicTacToeError(Exception):
    """Base class for all engine errors."""


class IllegalMoveError(TicTacToeError):
    """A move targets a cell outside 0-8 or a cell that is already taken."""

    def __init__(self, index, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"Illegal move at {index!r}: {reason}")


class NoLegalMoveError(TicTacToeError):
    """Search was asked for a move on a full or already decided board."""
