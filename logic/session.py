"""
Game session for TicTacToe.

A GameSession owns one board and drives a game from start to finish:
whose turn it is, applying moves, scheduling the AI's turn, and
handing a GameResult to listeners when the game ends.

States:
    SETUP     difficulty / symbol being chosen (AI mode only)
    PLAYING   moves are accepted
    FINISHED  the board is won or drawn; nothing changes until start/reset
"""

import logging
import random
import time
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional
from dataclasses import dataclass, field

from .config import GameConfig
from .difficulty import Difficulty, choose_move
from .game_state import Board, Symbol
from .move_validator import MoveValidator
from .scheduler import ManualScheduler
from .win_checker import TerminalStatus, WinChecker

logger = logging.getLogger(__name__)


class GameMode(Enum):
    AI = "ai"
    LOCAL = "local"


class GamePhase(Enum):
    SETUP = "setup"
    PLAYING = "playing"
    FINISHED = "finished"


@dataclass(frozen=True)
class GameResult:
    """
    Outcome of one finished game, handed to statistics collaborators.

    winner is None for a draw. duration is in seconds.
    """
    mode: GameMode
    difficulty: Optional[Difficulty]
    winner: Optional[Symbol]
    human_symbol: Symbol
    moves: int
    duration: float
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    finished_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_draw(self) -> bool:
        return self.winner is None

    @property
    def outcome(self) -> str:
        """
        "win", "loss" or "draw" from the human's side.

        Against the AI a win means the human's symbol won. A local game
        always has a winner to celebrate, so any non-draw is a win.
        """
        if self.winner is None:
            return "draw"
        if self.mode == GameMode.LOCAL:
            return "win"
        return "win" if self.winner == self.human_symbol else "loss"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.finished_at.isoformat(),
            "mode": self.mode.value,
            "difficulty": self.difficulty.value if self.difficulty else None,
            "winner": self.winner.value if self.winner else "draw",
            "playerSymbol": self.human_symbol.value,
            "moves": self.moves,
            "duration": self.duration,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameResult":
        winner = data.get("winner")
        difficulty = data.get("difficulty")
        return cls(
            mode=GameMode(data["mode"]),
            difficulty=Difficulty(difficulty) if difficulty else None,
            winner=None if winner in (None, "draw") else Symbol(winner),
            human_symbol=Symbol(data["playerSymbol"]),
            moves=int(data["moves"]),
            duration=float(data["duration"]),
            id=data["id"],
            finished_at=datetime.fromisoformat(data["date"]),
        )


@dataclass(frozen=True)
class MoveResult:
    """Outcome of one attempted move."""
    success: bool
    status: TerminalStatus
    index: Optional[int] = None
    symbol: Optional[Symbol] = None
    error_message: Optional[str] = None

    def __bool__(self) -> bool:
        return self.success


@dataclass(frozen=True)
class SessionView:
    """Read model for rendering."""
    board: Board
    active_symbol: Symbol
    status: TerminalStatus
    move_count: int
    is_ai_computing: bool
    phase: GamePhase
    mode: GameMode
    difficulty: Optional[Difficulty]
    human_symbol: Symbol


Listener = Callable[[Any], None]


class GameSession:
    """
    One active game at a time.

    The session is the only writer of its board. The AI gets an
    immutable snapshot, runs as deferred work on the session's
    scheduler, and returns a cell index that the session applies.

    Example:
        session = GameSession()
        session.add_result_listener(store.record_result)
        session.start(GameMode.AI, Difficulty.HARD, Symbol.X)
        session.submit_move(4)
        session.scheduler.run_pending()   # the AI answers
    """

    def __init__(
        self,
        scheduler=None,
        rng=None,
        clock: Callable[[], float] = time.monotonic,
        config: Optional[GameConfig] = None
    ):
        """
        Initialize the session in the SETUP phase.

        Args:
            scheduler: Anything with after(delay_ms, callback, *args) and
                after_cancel(handle), e.g. a tkinter root. Defaults to a
                ManualScheduler.
            rng: Source of randomness for the AI and thinking delay.
            clock: Seconds counter used for game duration.
            config: Game configuration.
        """
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.rng = rng or random.Random()
        self.clock = clock
        self.config = config or GameConfig()

        self.validator = MoveValidator()
        self.win_checker = WinChecker()

        # Last chosen options, reused by reset()
        self.mode = GameMode.AI
        self.difficulty: Optional[Difficulty] = Difficulty.MEDIUM
        self.human_symbol = Symbol.X

        self.phase = GamePhase.SETUP
        self.board = Board.empty()
        self.active_symbol = Symbol.X
        self.move_count = 0
        self.started_at: Optional[float] = None
        self.last_result: Optional[GameResult] = None

        # AI turn bookkeeping
        self.is_ai_computing = False
        self._pending_ai = None
        self._generation = 0

        self._move_listeners: List[Listener] = []
        self._result_listeners: List[Listener] = []

    # ==================== LISTENERS ====================

    def add_move_listener(self, callback: Listener) -> None:
        """callback(MoveResult) after every applied move."""
        self._move_listeners.append(callback)

    def add_result_listener(self, callback: Listener) -> None:
        """callback(GameResult) once per finished game."""
        self._result_listeners.append(callback)

    def _notify(self, listeners: List[Listener], payload: Any) -> None:
        for callback in list(listeners):
            try:
                callback(payload)
            except Exception:
                logger.exception("Listener %r failed", callback)

    # ==================== STATE ====================

    @property
    def status(self) -> TerminalStatus:
        """Recomputed from the board on every access."""
        return self.win_checker.get_status(self.board)

    @property
    def ai_symbol(self) -> Optional[Symbol]:
        if self.mode != GameMode.AI:
            return None
        return self.human_symbol.opposite()

    def view(self) -> SessionView:
        return SessionView(
            board=self.board,
            active_symbol=self.active_symbol,
            status=self.status,
            move_count=self.move_count,
            is_ai_computing=self.is_ai_computing,
            phase=self.phase,
            mode=self.mode,
            difficulty=self.difficulty,
            human_symbol=self.human_symbol,
        )

    def is_human_turn(self) -> bool:
        if self.phase != GamePhase.PLAYING:
            return False
        if self.mode == GameMode.LOCAL:
            return True
        return self.active_symbol == self.human_symbol and not self.is_ai_computing

    # ==================== TRANSITIONS ====================

    def prepare(self, mode=GameMode.AI) -> None:
        """
        Open a game of the given mode.

        AI games wait in SETUP for difficulty and symbol; local games
        start right away.
        """
        mode = GameMode(mode)
        if mode == GameMode.LOCAL:
            self.start(mode)
            return

        self._cancel_ai_turn()
        self._generation += 1
        self.mode = mode
        self.phase = GamePhase.SETUP
        self.board = Board.empty()
        self.active_symbol = Symbol.X
        self.move_count = 0
        self.started_at = None

    def start(
        self,
        mode=GameMode.AI,
        difficulty: Optional[Difficulty] = None,
        human_symbol: Optional[Symbol] = None
    ) -> None:
        """
        Start a new game, discarding any game in progress.

        X always moves first. In AI mode, if the human picked O the
        AI's first move is scheduled immediately.

        Args:
            mode: GameMode or its value ("ai" / "local").
            difficulty: AI tier (AI mode only); keeps the last one if None.
            human_symbol: The human's symbol; keeps the last one if None.
        """
        mode = GameMode(mode)

        self._cancel_ai_turn()
        self._generation += 1

        self.mode = mode
        if mode == GameMode.AI:
            self.difficulty = Difficulty(difficulty) if difficulty else (self.difficulty or Difficulty.MEDIUM)
        else:
            self.difficulty = None
        if human_symbol is not None:
            self.human_symbol = Symbol(human_symbol)

        self.board = Board.empty()
        self.active_symbol = Symbol.X
        self.move_count = 0
        self.started_at = self.clock()
        self.phase = GamePhase.PLAYING

        if mode == GameMode.AI:
            logger.info(
                "Game started: vs %s AI, human plays %s",
                self.difficulty.label, self.human_symbol.value
            )
        else:
            logger.info("Game started: local two-player")

        self._maybe_schedule_ai()

    def reset(self) -> None:
        """Start again with the last mode, difficulty and symbol."""
        logger.info("Resetting game")
        self.start(self.mode, self.difficulty, self.human_symbol)

    def submit_move(self, index: int) -> bool:
        """
        Apply a move from the player at the screen.

        Returns:
            True if the move was applied. False (and no change) if the
            game is not being played, it is the AI's turn, or the cell
            is invalid.
        """
        if self.phase != GamePhase.PLAYING:
            logger.warning("Move %r ignored: game is %s", index, self.phase.value)
            return False

        if self.mode == GameMode.AI and (
            self.active_symbol != self.human_symbol or self.is_ai_computing
        ):
            logger.warning("Move %r ignored: it's the AI's turn", index)
            return False

        return self._apply_move(index).success

    def _apply_move(self, index: int) -> MoveResult:
        validation = self.validator.validate_move(self.board, index)
        if not validation.is_valid:
            logger.warning("Invalid move: %s", validation.error_message)
            return MoveResult(False, self.status, index, self.active_symbol, validation.error_message)

        symbol = self.active_symbol
        self.board = self.board.apply_move(index, symbol)
        self.move_count += 1
        status = self.status
        self.active_symbol = symbol.opposite()

        result = None
        if status.is_over:
            self.phase = GamePhase.FINISHED
            result = self._build_result(status)
            self.last_result = result
            logger.info("Game finished: %s after %d moves", status.describe(), self.move_count)

        move_result = MoveResult(True, status, index, symbol)
        self._notify(self._move_listeners, move_result)

        if result is not None:
            self._notify(self._result_listeners, result)
        else:
            self._maybe_schedule_ai()

        return move_result

    def _build_result(self, status: TerminalStatus) -> GameResult:
        started = self.started_at if self.started_at is not None else self.clock()
        return GameResult(
            mode=self.mode,
            difficulty=self.difficulty if self.mode == GameMode.AI else None,
            winner=status.winner,
            human_symbol=self.human_symbol,
            moves=self.move_count,
            duration=max(0.0, self.clock() - started),
        )

    # ==================== AI TURN ====================

    def _think_delay_ms(self) -> int:
        low = self.config.THINK_DELAY_MIN_MS
        high = self.config.THINK_DELAY_MAX_MS
        if high <= low:
            return low
        return low + int(self.rng.random() * (high - low))

    def _maybe_schedule_ai(self) -> None:
        """Schedule the AI's turn if it is due and not already pending."""
        if (
            self.mode != GameMode.AI
            or self.phase != GamePhase.PLAYING
            or self.active_symbol != self.ai_symbol
            or self.is_ai_computing
        ):
            return

        self.is_ai_computing = True
        delay = self._think_delay_ms()
        self._pending_ai = self.scheduler.after(
            delay, self._run_ai_turn, self._generation, self.board
        )
        logger.debug("AI turn scheduled in %d ms", delay)

    def _cancel_ai_turn(self) -> None:
        if self._pending_ai is not None:
            self.scheduler.after_cancel(self._pending_ai)
            self._pending_ai = None
        self.is_ai_computing = False

    def _is_stale(self, generation: int, snapshot: Board) -> bool:
        return (
            generation != self._generation
            or self.phase != GamePhase.PLAYING
            or self.board != snapshot
            or self.active_symbol != self.ai_symbol
        )

    def _run_ai_turn(self, generation: int, snapshot: Board) -> None:
        """Deferred AI work: pick a move on the snapshot and apply it if still current."""
        if generation != self._generation:
            # A newer game owns the computing flag
            logger.warning("Discarding AI turn from a previous game")
            return

        self._pending_ai = None

        if self._is_stale(generation, snapshot):
            logger.warning("Discarding stale AI turn")
            self.is_ai_computing = False
            return

        move = choose_move(snapshot, self.ai_symbol, self.difficulty, self.rng, self.config)

        if self._is_stale(generation, snapshot):
            logger.warning("Discarding stale AI move %d", move)
            self.is_ai_computing = False
            return

        self.is_ai_computing = False
        result = self._apply_move(move)
        if not result.success:
            logger.error("AI produced an invalid move %d: %s", move, result.error_message)
