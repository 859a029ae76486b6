"""
Keyboard handling for the tic-tac-toe board.

Stateless helpers over Tk keysyms: the caller keeps the focused cell
and passes it in.
"""

from typing import Optional

from engine.game_state import BOARD_SIZE, index_to_row_col

# (row step, col step) per arrow key; focus wraps around the edges
ARROW_STEPS = {
    "Left": (0, -1),
    "Right": (0, 1),
    "Up": (-1, 0),
    "Down": (1, 0),
}

ACTIVATE_KEYS = ("Return", "KP_Enter", "space")


def digit_to_index(key: str) -> Optional[int]:
    """Map "1".."9" (or keypad "KP_1".."KP_9") to cell 0..8."""
    if key.startswith("KP_"):
        key = key[3:]
    if len(key) == 1 and "1" <= key <= "9":
        return int(key) - 1
    return None


def move_focus(index: int, key: str) -> int:
    """Focused cell after an arrow key; other keys leave it alone."""
    if key not in ARROW_STEPS:
        return index
    row, col = index_to_row_col(index)
    d_row, d_col = ARROW_STEPS[key]
    return ((row + d_row) % BOARD_SIZE) * BOARD_SIZE + (col + d_col) % BOARD_SIZE


def is_activate_key(key: str) -> bool:
    return key in ACTIVATE_KEYS
