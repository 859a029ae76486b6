"""
Presentation shell for tic-tac-toe.
Storage, board drawing and keyboard handling shared by the front ends.
"""

from .config import ShellConfig
from .storage import KeyValueStore, load_preferences, save_preferences, load_theme, save_theme
from .render import BoardRenderer
from .keys import digit_to_index, move_focus, is_activate_key
