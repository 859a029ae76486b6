"""
Session module for tic-tac-toe.
Turn order, play modes and scores across games.
"""

from .config import SessionConfig
from .controller import GameSession, GameMode, SessionSnapshot, SessionState, run_immediately
