"""
Board state for the tic-tac-toe engine.
Defines the marks, the 9-cell board and the game outcome.
"""

from enum import Enum
from typing import Optional, List, Tuple, Sequence
from dataclasses import dataclass


class Mark(Enum):
    """The two players in the game."""
    X = "X"
    O = "O"

    def opposite(self) -> "Mark":
        """Get the opposite player."""
        return Mark.O if self == Mark.X else Mark.X


# A cell is either empty (None) or holds a mark
Cell = Optional[Mark]
Board = Tuple[Cell, ...]
Line = Tuple[int, int, int]

BOARD_SIZE = 3
CELL_COUNT = BOARD_SIZE * BOARD_SIZE
CENTER = 4

# Characters used by parse_board / format_board
_EMPTY_CHARS = "_. "


class OutcomeStatus(Enum):
    """Where a game stands after the last move."""
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class GameOutcome:
    """
    Result of evaluating a board.

    For a win, `winner` is the mark that completed `line`, so the
    presentation can highlight exactly those three cells.
    """
    status: OutcomeStatus
    winner: Optional[Mark] = None
    line: Optional[Line] = None

    @classmethod
    def in_progress(cls) -> "GameOutcome":
        return cls(OutcomeStatus.IN_PROGRESS)

    @classmethod
    def win(cls, winner: Mark, line: Line) -> "GameOutcome":
        return cls(OutcomeStatus.WIN, winner, tuple(line))

    @classmethod
    def draw(cls) -> "GameOutcome":
        return cls(OutcomeStatus.DRAW)

    @property
    def is_terminal(self) -> bool:
        return self.status != OutcomeStatus.IN_PROGRESS

    @property
    def is_win(self) -> bool:
        return self.status == OutcomeStatus.WIN

    @property
    def is_draw(self) -> bool:
        return self.status == OutcomeStatus.DRAW


def new_board() -> Board:
    """Create an empty board."""
    return (None,) * CELL_COUNT


def empty_cells(board: Sequence[Cell]) -> List[int]:
    """
    Get all empty cells on the board.

    Returns:
        Cell indices in ascending order.
    """
    return [index for index, cell in enumerate(board) if cell is None]


def is_full(board: Sequence[Cell]) -> bool:
    """True when no cell is empty."""
    return all(cell is not None for cell in board)


def index_to_row_col(index: int) -> Tuple[int, int]:
    """Convert a flat index to (row, col)."""
    return divmod(index, BOARD_SIZE)


def parse_board(text: str) -> Board:
    """
    Build a board from a 9-character string such as "XX_OO____".

    "X" and "O" are marks (case-insensitive); "_", "." and " " are empty.
    Whitespace around the string and "|" or "/" separators are ignored.
    """
    chars = [ch for ch in text.strip() if ch not in "|/\n"]
    if len(chars) != CELL_COUNT:
        raise ValueError(f"Board string must have {CELL_COUNT} cells, got {len(chars)}")

    cells: List[Cell] = []
    for ch in chars:
        if ch in _EMPTY_CHARS:
            cells.append(None)
        elif ch.upper() in ("X", "O"):
            cells.append(Mark(ch.upper()))
        else:
            raise ValueError(f"Unknown cell character {ch!r}")
    return tuple(cells)


def format_board(board: Sequence[Cell]) -> str:
    """
    Render the board for the console.

    Empty cells show their 1-9 number so players know what to type.
    """
    rows = []
    for row in range(BOARD_SIZE):
        parts = []
        for col in range(BOARD_SIZE):
            index = row * BOARD_SIZE + col
            cell = board[index]
            parts.append(cell.value if cell is not None else str(index + 1))
        rows.append(" " + " | ".join(parts))
    return "\n---+---+---\n".join(rows)
