"""
Shell configuration for tic-tac-toe.
Window, storage and drawing settings for the desktop and console front ends.
"""

import os


class ShellConfig:
    """
    Configuration class for the presentation shell.
    Change these values to restyle the board or move the save file.
    """

    # ==================== WINDOW ====================
    WINDOW_TITLE = "Tic-Tac-Toe"
    FONT_FAMILY = "Segoe UI"

    # ==================== STORAGE ====================
    # JSON file holding the key-value pairs below
    STORE_PATH = os.path.join("data", "tictactoe.json")

    # Scores plus last mode / first-player selection
    PREFERENCES_KEY = "ttt:v1"
    THEME_KEY = "ttt:theme"

    THEMES = ("dark", "light")
    DEFAULT_THEME = "dark"

    # ==================== BOARD DRAWING ====================
    # Board image is square; cells are separated by GRID_GAP pixels
    BOARD_PIXELS = 360
    GRID_GAP = 8
    CELL_RADIUS = 12

    # Marks are inset from the cell edge by this fraction of the cell size
    MARK_PADDING = 0.24
    MARK_WIDTH = 10
    FOCUS_WIDTH = 4

    PALETTES = {
        "dark": {
            "background": "#0f172a",
            "cell": "#1e293b",
            "win": "#14532d",
            "focus": "#facc15",
            "x": "#38bdf8",
            "o": "#f472b6",
            "text": "#e2e8f0",
        },
        "light": {
            "background": "#e2e8f0",
            "cell": "#ffffff",
            "win": "#bbf7d0",
            "focus": "#ca8a04",
            "x": "#0369a1",
            "o": "#be185d",
            "text": "#0f172a",
        },
    }

    # ==================== HELP ====================
    HELP_TEXT = (
        "Get three of your marks in a row, column or diagonal.\n\n"
        "Mouse: click a cell.\n"
        "Keyboard: 1-9 play a cell, arrow keys move the focus,\n"
        "Enter or Space play the focused cell.\n\n"
        "Mode 'ai' pits you against the computer, which plays O\n"
        "and never loses."
    )
