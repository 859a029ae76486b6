"""
Game session controller for tic-tac-toe.
Owns turn order, play mode and the score tally, and drives the engine.
"""

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Union
from dataclasses import dataclass

from engine.errors import IllegalMoveError
from engine.game_state import Board, GameOutcome, Mark, new_board
from engine.move_validator import MoveValidator
from engine.win_checker import WinChecker
from engine.ai_player import AIPlayer
from .config import SessionConfig

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Lifecycle of a session."""
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"


class GameMode(Enum):
    """Human vs human, or human vs computer."""
    PVP = "pvp"
    AI = "ai"


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything the presentation layer needs to render one state."""
    board: Board
    turn: Mark
    state: SessionState
    mode: GameMode
    first: Mark
    outcome: GameOutcome
    scores: Dict[str, int]

    @property
    def running(self) -> bool:
        return self.state == SessionState.RUNNING


# scheduler(delay_ms, callback) runs callback later; its return value is ignored
Scheduler = Callable[[int, Callable[[], None]], object]
Listener = Callable[[SessionSnapshot], None]


def run_immediately(delay_ms: int, callback: Callable[[], None]) -> None:
    """Default scheduler: no deferral at all."""
    callback()


class GameSession:
    """
    A series of tic-tac-toe games with a running score.

    States:
    - IDLE: created, no game started yet
    - RUNNING: a game is in progress and accepts moves
    - FINISHED: the last game ended; scores include it

    In "ai" mode the computer plays SessionConfig.AI_MARK. Its move is
    handed to the scheduler, so a UI can render the human move first.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        scheduler: Optional[Scheduler] = None,
        win_checker: Optional[WinChecker] = None
    ):
        """
        Initialize the session.

        Args:
            config: Session configuration. Uses defaults if not provided.
            scheduler: Defers the AI move. Runs it immediately if not provided.
            win_checker: Checker shared by the validator and the AI.
        """
        self.config = config or SessionConfig()
        self.scheduler = scheduler or run_immediately
        self.win_checker = win_checker or WinChecker()
        self.validator = MoveValidator(self.win_checker)
        self.ai = AIPlayer(self.config.AI_MARK, win_checker=self.win_checker)

        self.board: Board = new_board()
        self.first = self.config.DEFAULT_FIRST
        self.turn = self.first
        self.mode = GameMode(self.config.DEFAULT_MODE)
        self.state = SessionState.IDLE
        self.outcome = GameOutcome.in_progress()
        self.scores = self._zero_scores()

        # Bumped on every new game so stale AI callbacks can be dropped
        self._generation = 0
        self._listeners: List[Listener] = []

    # ==================== INTENTS ====================

    def new_game(
        self,
        mode: Union[GameMode, str, None] = None,
        first: Union[Mark, str, None] = None
    ) -> SessionSnapshot:
        """
        Start a fresh game.

        Args:
            mode: "pvp" or "ai". Keeps the current mode if not provided.
            first: Mark that moves first. Keeps the current choice if not provided.

        Returns:
            Snapshot after the game started (and after the AI opened,
            if the scheduler runs immediately).
        """
        if mode is not None:
            self.mode = GameMode(mode)
        if first is not None:
            self.first = Mark(first)

        self._generation += 1
        self.board = new_board()
        self.turn = self.first
        self.outcome = GameOutcome.in_progress()
        self.state = SessionState.RUNNING
        logger.info("New game: mode=%s, first=%s", self.mode.value, self.first.value)

        self._notify()
        if self.is_ai_turn:
            self._schedule_ai_move()
        return self.snapshot()

    def move(self, index: int) -> bool:
        """
        Play the current turn's mark at `index` for a human player.

        Returns:
            True if the move was applied. Moves after the game ended,
            during the computer's turn, or on illegal cells are ignored.
        """
        if self.state != SessionState.RUNNING:
            logger.debug("Ignoring move %r: no game running", index)
            return False

        if self.is_ai_turn:
            logger.debug("Ignoring move %r: waiting for the computer", index)
            return False

        return self._play(index)

    def reset_scores(self) -> SessionSnapshot:
        """Zero the tally. The board is left as it is."""
        self.scores = self._zero_scores()
        logger.info("Scores reset")
        self._notify()
        return self.snapshot()

    # ==================== STATE ====================

    @property
    def running(self) -> bool:
        return self.state == SessionState.RUNNING

    @property
    def is_ai_turn(self) -> bool:
        """True while a running ai-mode game waits for the computer."""
        return (
            self.running
            and self.mode == GameMode.AI
            and self.turn == self.config.AI_MARK
        )

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            board=self.board,
            turn=self.turn,
            state=self.state,
            mode=self.mode,
            first=self.first,
            outcome=self.outcome,
            scores=dict(self.scores),
        )

    def subscribe(self, listener: Listener) -> Listener:
        """Call `listener` with a snapshot after every state change."""
        self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ==================== PLAIN DATA ====================

    def to_record(self) -> Dict[str, object]:
        """Scores and last selections as a flat, JSON-friendly record."""
        return {
            "scores": dict(self.scores),
            "mode": self.mode.value,
            "first": self.first.value,
        }

    def restore(self, record: Optional[Dict[str, object]]) -> None:
        """
        Load scores and selections from a record made by to_record().

        Missing or malformed values fall back to their defaults. The
        board is not touched; the selections apply from the next game.
        """
        if not isinstance(record, dict):
            record = {}

        self.scores = self._valid_scores(record.get("scores"))

        try:
            self.mode = GameMode(record.get("mode"))
        except (TypeError, ValueError):
            self.mode = GameMode(self.config.DEFAULT_MODE)

        try:
            self.first = Mark(record.get("first"))
        except (TypeError, ValueError):
            self.first = self.config.DEFAULT_FIRST

        self._notify()

    # ==================== INTERNALS ====================

    def _play(self, index: int) -> bool:
        try:
            self.board = self.validator.apply_move(self.board, index, self.turn)
        except IllegalMoveError as exc:
            logger.debug("Ignoring move: %s", exc)
            return False

        self.outcome = self.win_checker.evaluate(self.board)
        if self.outcome.is_terminal:
            self._finish()
        else:
            self.turn = self.turn.opposite()

        self._notify()
        if self.is_ai_turn:
            self._schedule_ai_move()
        return True

    def _finish(self) -> None:
        self.state = SessionState.FINISHED
        key = "D" if self.outcome.is_draw else self.outcome.winner.value
        self.scores[key] += 1
        if self.outcome.is_draw:
            logger.info("Game over: draw")
        else:
            logger.info("Game over: %s wins on %s", key, self.outcome.line)

    def _schedule_ai_move(self) -> None:
        generation = self._generation
        self.scheduler(
            self.config.AI_MOVE_DELAY_MS,
            lambda: self._ai_turn(generation)
        )

    def _ai_turn(self, generation: int) -> None:
        if generation != self._generation or not self.is_ai_turn:
            logger.debug("Dropping stale computer move")
            return

        index = self.ai.choose_move(self.board)
        logger.debug("Computer plays %d", index)
        self._play(index)

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    def _zero_scores(self) -> Dict[str, int]:
        return {key: 0 for key in self.config.SCORE_KEYS}

    def _valid_scores(self, data) -> Dict[str, int]:
        scores = self._zero_scores()
        if not isinstance(data, dict):
            return scores
        for key in scores:
            try:
                scores[key] = max(0, int(data.get(key, 0)))
            except (TypeError, ValueError, OverflowError):
                scores[key] = 0
        return scores
