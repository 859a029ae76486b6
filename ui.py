"""
Tic-Tac-Toe UI
A graphical interface for the game using Tkinter.

Shows:
- The board (drawn with Pillow), with the winning line highlighted
- Game status and the X / O / draw tally
- Mode and first-player selection
- Light/dark theme toggle and a help dialog
"""

import logging
import tkinter as tk
from tkinter import ttk
from typing import Optional

from PIL import ImageTk

from engine.game_state import CENTER, Mark
from session.config import SessionConfig
from session.controller import GameSession, SessionSnapshot, SessionState
from shell.config import ShellConfig
from shell.storage import KeyValueStore, load_preferences, save_preferences, load_theme, save_theme
from shell.render import BoardRenderer
from shell.keys import digit_to_index, move_focus, is_activate_key, ARROW_STEPS

logger = logging.getLogger(__name__)


class TicTacToeUI:
    """
    Main UI class for tic-tac-toe.

    The window only turns clicks and keys into session intents and
    redraws from the snapshots the session publishes.
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        config: Optional[ShellConfig] = None,
        session_config: Optional[SessionConfig] = None
    ):
        """Initialize the UI."""
        self.config = config or ShellConfig()
        self.store = store or KeyValueStore(self.config.STORE_PATH)

        # Computer moves go through Tk's event loop
        self.session = GameSession(session_config, scheduler=self._schedule)
        self.session.restore(load_preferences(self.store, self.config))
        self._saved_record = self.session.to_record()

        self.renderer = BoardRenderer(self.config, load_theme(self.store, self.config))
        self.focus_index = CENTER
        self._photo = None

        # Create UI
        self._create_ui()
        self._apply_theme()

        self.session.subscribe(self._on_session_change)
        self._new_game()

    def _schedule(self, delay_ms: int, callback):
        return self.root.after(delay_ms, callback)

    def _create_ui(self):
        """Create the Tkinter UI."""
        self.root = tk.Tk()
        self.root.title(self.config.WINDOW_TITLE)
        self.root.resizable(False, False)

        self.style = ttk.Style()
        self.style.theme_use('clam')

        main_frame = ttk.Frame(self.root, padding=16)
        main_frame.pack(fill=tk.BOTH, expand=True)

        ttk.Label(main_frame, text="Tic-Tac-Toe", style='Title.TLabel').pack(pady=(0, 8))

        self.status_label = ttk.Label(main_frame, text="", style='Status.TLabel')
        self.status_label.pack(pady=(0, 8))

        # Scores
        score_frame = ttk.Frame(main_frame)
        score_frame.pack(pady=(0, 8))
        self.score_labels = {}
        for key, caption in (("X", "X"), ("O", "O"), ("D", "Draws")):
            label = ttk.Label(score_frame, text=f"{caption}: 0")
            label.pack(side=tk.LEFT, padx=10)
            self.score_labels[key] = (label, caption)

        # Board
        size = self.config.BOARD_PIXELS
        self.canvas = tk.Canvas(main_frame, width=size, height=size, highlightthickness=0)
        self.canvas.pack(pady=8)
        self.canvas.bind("<Button-1>", self._on_click)

        # Mode / first player
        options_frame = ttk.Frame(main_frame)
        options_frame.pack(pady=8)

        ttk.Label(options_frame, text="Mode").pack(side=tk.LEFT)
        self.mode_var = tk.StringVar(value=self.session.mode.value)
        ttk.Combobox(
            options_frame,
            textvariable=self.mode_var,
            values=list(self.session.config.MODES),
            state='readonly',
            width=5
        ).pack(side=tk.LEFT, padx=(4, 12))

        ttk.Label(options_frame, text="First").pack(side=tk.LEFT)
        self.first_var = tk.StringVar(value=self.session.first.value)
        ttk.Combobox(
            options_frame,
            textvariable=self.first_var,
            values=[mark.value for mark in Mark],
            state='readonly',
            width=3
        ).pack(side=tk.LEFT, padx=4)

        # Control buttons
        control_frame = ttk.Frame(main_frame)
        control_frame.pack(pady=8)

        ttk.Button(control_frame, text="New Game", command=self._new_game).pack(side=tk.LEFT, padx=5)
        ttk.Button(control_frame, text="Reset Scores", command=self._reset_scores).pack(side=tk.LEFT, padx=5)
        ttk.Button(control_frame, text="Help", command=self._show_help).pack(side=tk.LEFT, padx=5)

        self.light_var = tk.BooleanVar(value=self.renderer.theme == "light")
        ttk.Checkbutton(
            main_frame,
            text="Light theme",
            variable=self.light_var,
            command=self._toggle_theme
        ).pack(pady=(4, 0))

        self.root.bind("<KeyPress>", self._on_key)
        self.root.protocol("WM_DELETE_WINDOW", self._quit)

    def _apply_theme(self):
        """Recolour the widgets for the current theme."""
        palette = self.renderer.palette
        font = self.config.FONT_FAMILY
        background = palette["background"]
        foreground = palette["text"]

        self.root.configure(bg=background)
        self.canvas.configure(bg=background)
        self.style.configure('TFrame', background=background)
        self.style.configure('TLabel', background=background, foreground=foreground, font=(font, 11))
        self.style.configure('TCheckbutton', background=background, foreground=foreground)
        self.style.configure('Title.TLabel', font=(font, 16, 'bold'))
        self.style.configure('Status.TLabel', font=(font, 12))
        self.style.configure('TButton', font=(font, 10, 'bold'))

    # ==================== SESSION EVENTS ====================

    def _on_session_change(self, snapshot: SessionSnapshot):
        """Redraw, and persist when scores or selections changed."""
        self._redraw(snapshot)
        self._update_status(snapshot)
        self._update_scores(snapshot)

        record = self.session.to_record()
        if record != self._saved_record:
            save_preferences(self.store, record, self.config)
            self._saved_record = record

    def _redraw(self, snapshot: Optional[SessionSnapshot] = None):
        """Update the board image on the canvas."""
        snapshot = snapshot or self.session.snapshot()
        image = self.renderer.render(snapshot.board, snapshot.outcome, self.focus_index)
        photo = ImageTk.PhotoImage(image)

        self.canvas.delete("all")
        self.canvas.create_image(0, 0, anchor=tk.NW, image=photo)
        self._photo = photo  # Keep reference

    def _update_status(self, snapshot: SessionSnapshot):
        if snapshot.state == SessionState.IDLE:
            text = "Press New Game to start."
        elif snapshot.state == SessionState.FINISHED:
            if snapshot.outcome.is_draw:
                text = "Draw!  Press New Game to play again."
            else:
                text = f"{snapshot.outcome.winner.value} wins!  Press New Game to play again."
        else:
            text = f"Turn: {snapshot.turn.value}"
            if self.session.is_ai_turn:
                text += " (computer thinking...)"
        self.status_label.configure(text=text)

    def _update_scores(self, snapshot: SessionSnapshot):
        for key, (label, caption) in self.score_labels.items():
            label.configure(text=f"{caption}: {snapshot.scores.get(key, 0)}")

    # ==================== INPUT ====================

    def _on_click(self, event):
        index = self.renderer.cell_at(event.x, event.y)
        if index is None:
            return
        self.focus_index = index
        self._play(index)

    def _on_key(self, event):
        # Leave arrow keys to an open selector
        if isinstance(event.widget, ttk.Combobox):
            return

        key = event.keysym
        index = digit_to_index(key)
        if index is not None:
            self.focus_index = index
            self._play(index)
        elif key in ARROW_STEPS:
            self.focus_index = move_focus(self.focus_index, key)
            self._redraw()
        elif is_activate_key(key):
            self._play(self.focus_index)

    def _play(self, index: int):
        if not self.session.move(index):
            # Rejected moves still move the focus ring
            self._redraw()

    # ==================== BUTTONS ====================

    def _new_game(self):
        self.session.new_game(self.mode_var.get(), self.first_var.get())

    def _reset_scores(self):
        self.session.reset_scores()

    def _toggle_theme(self):
        theme = "light" if self.light_var.get() else "dark"
        self.renderer.set_theme(theme)
        save_theme(self.store, theme, self.config)
        self._apply_theme()
        self._redraw()
        logger.debug("Theme set to %s", theme)

    def _show_help(self):
        """Modal help dialog; closes on the button or Escape."""
        palette = self.renderer.palette
        dialog = tk.Toplevel(self.root, bg=palette["background"])
        dialog.title("How to play")
        dialog.transient(self.root)
        dialog.resizable(False, False)

        ttk.Label(dialog, text=self.config.HELP_TEXT, justify=tk.LEFT, padding=16).pack()
        ttk.Button(dialog, text="Close", command=dialog.destroy).pack(pady=(0, 12))
        dialog.bind("<Escape>", lambda _event: dialog.destroy())
        dialog.grab_set()

    def _quit(self):
        """Quit the application."""
        self.root.quit()
        self.root.destroy()

    def run(self):
        """Run the UI main loop."""
        self.root.mainloop()
