"""
Main entry point for tic-tac-toe.

Launches the Tkinter window by default, or plays in the terminal
with --no-ui. Both front ends drive the same GameSession and share
the saved scores and selections.
"""

import argparse
import logging
from typing import Optional

from engine.game_state import Board, Mark, format_board, new_board
from session.config import SessionConfig
from session.controller import GameSession, GameMode
from shell.config import ShellConfig
from shell.storage import KeyValueStore, load_preferences, save_preferences


class ConsoleGame:
    """
    Terminal front end.

    Game flow:
    1. The current player types a cell number 1-9
    2. In "ai" mode the computer answers right away
    3. Repeat until someone wins or it's a draw
    4. Scores are saved after every game
    """

    def __init__(
        self,
        store: KeyValueStore,
        mode: Optional[str] = None,
        first: Optional[str] = None,
        config: Optional[ShellConfig] = None
    ):
        """
        Initialize the console game.

        Args:
            store: Where scores and selections are kept.
            mode: "pvp" or "ai". Uses the saved selection if not provided.
            first: "X" or "O". Uses the saved selection if not provided.
        """
        self.store = store
        self.config = config or ShellConfig()
        self.session = GameSession(SessionConfig())
        self.session.restore(load_preferences(self.store, self.config))
        self.mode = mode
        self.first = first

    def reset_scores(self):
        self.session.reset_scores()
        self._save()
        print("Scores reset.")

    def start(self):
        """Play games until the user stops."""
        print("\n" + "=" * 60)
        print("   Tic-Tac-Toe")
        print("=" * 60)

        while True:
            self.session.new_game(self.mode, self.first)
            self._save()

            if not self._play_game():
                break

            self._show_game_result()
            self._save()

            choice = self._ask("Play again? (y/n): ")
            if choice is None or choice.lower() not in {"y", "yes"}:
                break

    def _play_game(self) -> bool:
        """Run one game. Returns False if the user quit midway."""
        # The computer may already have opened
        self._announce_computer_move(new_board())
        while self.session.running:
            print()
            print(format_board(self.session.board))

            text = self._ask(f"\nPlayer {self.session.turn.value}, choose a cell 1-9 (q to quit): ")
            if text is None or text.lower() in {"q", "quit"}:
                return False
            if not text.isdigit():
                print("Please type a number from 1 to 9.")
                continue

            index = int(text) - 1
            result = self.session.validator.validate_move(self.session.board, index)
            if not result.is_valid:
                print(result.error_message)
                continue

            before = self.session.board
            if self.session.move(index):
                self._announce_computer_move(before)

        return True

    def _announce_computer_move(self, before: Board):
        """Print the cell the computer took since `before`, if any."""
        if self.session.mode != GameMode.AI:
            return
        ai_mark = self.session.config.AI_MARK
        for index, (old, new) in enumerate(zip(before, self.session.board)):
            if old is None and new == ai_mark:
                print(f"\nComputer ({ai_mark.value}) plays cell {index + 1}.")

    def _show_game_result(self):
        """Show the final board, result and tally."""
        snapshot = self.session.snapshot()
        print("\n" + "=" * 60)
        print(format_board(snapshot.board))
        print()
        if snapshot.outcome.is_draw:
            print("It's a draw!")
        else:
            line = ", ".join(str(index + 1) for index in snapshot.outcome.line)
            print(f"{snapshot.outcome.winner.value} wins on cells {line}!")
        scores = snapshot.scores
        print(f"Scores - X: {scores['X']}  O: {scores['O']}  Draws: {scores['D']}")
        print("=" * 60)

    def _save(self):
        save_preferences(self.store, self.session.to_record(), self.config)

    @staticmethod
    def _ask(prompt: str) -> Optional[str]:
        try:
            return input(prompt).strip()
        except EOFError:
            return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tic-Tac-Toe with an unbeatable computer opponent")
    parser.add_argument(
        "--no-ui",
        action="store_true",
        help="Play in the terminal instead of opening a window"
    )
    parser.add_argument(
        "--mode",
        choices=SessionConfig.MODES,
        help="pvp (two humans) or ai (against the computer, which plays O)"
    )
    parser.add_argument(
        "--first",
        choices=[mark.value for mark in Mark],
        help="Which mark moves first"
    )
    parser.add_argument(
        "--store",
        default=ShellConfig.STORE_PATH,
        help="JSON file for scores and settings (default: %(default)s)"
    )
    parser.add_argument(
        "--reset-scores",
        action="store_true",
        help="Zero the saved scores before playing"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log engine and session details"
    )
    return parser


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s: %(message)s"
    )

    store = KeyValueStore(args.store)

    # Console mode (--no-ui)
    if args.no_ui:
        game = ConsoleGame(store, mode=args.mode, first=args.first)
        if args.reset_scores:
            game.reset_scores()
        try:
            game.start()
        except KeyboardInterrupt:
            print("\n\nGame interrupted by user.")
        finally:
            print("Goodbye!")
        return

    # Selections from the command line become the saved defaults
    record = load_preferences(store)
    if args.mode:
        record["mode"] = args.mode
    if args.first:
        record["first"] = args.first
    if args.reset_scores:
        record["scores"] = {}
    save_preferences(store, record)

    from ui import TicTacToeUI
    ui = TicTacToeUI(store=store)
    ui.run()


if __name__ == "__main__":
    main()
