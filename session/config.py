"""
Session configuration for tic-tac-toe.
Turn order, play modes and AI timing.
"""

from engine.game_state import Mark


class SessionConfig:
    """
    Configuration class for game sessions.
    Override attributes on an instance to change them per session.
    """

    # ==================== PLAYERS ====================
    # The computer always plays this mark in "ai" mode
    AI_MARK = Mark.O

    # Who moves first when a new game does not say
    DEFAULT_FIRST = Mark.X

    # ==================== MODES ====================
    MODES = ("pvp", "ai")
    DEFAULT_MODE = "pvp"

    # ==================== AI TIMING ====================
    # Pause before the computer moves, so the human move renders first
    AI_MOVE_DELAY_MS = 250

    # ==================== SCORES ====================
    # Tally keys: X wins, O wins, draws
    SCORE_KEYS = ("X", "O", "D")
