"""Tests for the game session state machine and AI turn scheduling."""

import logging
import random

import pytest

from logic.config import GameConfig
from logic.difficulty import Difficulty
from logic.game_state import Board, Symbol
from logic.scheduler import ManualScheduler
from logic.session import GameMode, GamePhase, GameResult, GameSession
from logic.win_checker import GameStatus

X, O = Symbol.X, Symbol.O


class RecordingScheduler(ManualScheduler):
    """ManualScheduler that remembers every after() call."""

    def __init__(self):
        super().__init__()
        self.calls = []

    def after(self, delay_ms, callback, *args):
        self.calls.append((delay_ms, callback, args))
        return super().after(delay_ms, callback, *args)


class NoCancelScheduler(RecordingScheduler):
    """A scheduler whose cancel arrives too late to stop the callback."""

    def after_cancel(self, handle):
        pass


def _fast_config():
    config = GameConfig()
    config.THINK_DELAY_MIN_MS = 0
    config.THINK_DELAY_MAX_MS = 0
    return config


def _session(scheduler=None, **kwargs):
    return GameSession(scheduler=scheduler or ManualScheduler(), config=_fast_config(), **kwargs)


# ==================== LOCAL GAMES ====================

def test_local_game_to_draw():
    session = _session()
    results = []
    session.add_result_listener(results.append)
    session.start(GameMode.LOCAL)

    for index in (0, 1, 2, 4, 3, 5, 7, 6, 8):
        assert session.submit_move(index)

    assert session.status.state == GameStatus.DRAW
    assert session.phase == GamePhase.FINISHED
    assert session.move_count == 9
    assert len(results) == 1
    assert results[0].is_draw
    assert results[0].moves == 9
    assert results[0].difficulty is None
    assert results[0].outcome == "draw"

    # Finished games accept nothing more
    assert not session.submit_move(0)
    assert len(results) == 1


def test_local_game_alternates_and_reports_win():
    session = _session()
    results = []
    session.add_result_listener(results.append)
    session.start("local")

    for index in (0, 3, 1, 4):
        assert session.submit_move(index)
    assert session.active_symbol == X
    assert session.submit_move(2)

    assert session.status.winner == X
    assert session.status.line == (0, 1, 2)
    assert results[0].winner == X
    assert results[0].outcome == "win"


def test_move_listener_gets_every_move():
    session = _session()
    moves = []
    session.add_move_listener(moves.append)
    session.start(GameMode.LOCAL)
    session.submit_move(4)
    session.submit_move(0)

    assert [(m.index, m.symbol) for m in moves] == [(4, X), (0, O)]
    assert all(m.success for m in moves)


def test_invalid_moves_change_nothing():
    session = _session()
    session.start(GameMode.LOCAL)
    session.submit_move(4)
    before = session.view()

    assert not session.submit_move(4)
    assert not session.submit_move(9)
    assert not session.submit_move(-1)

    assert session.view() == before


# ==================== SETUP PHASE ====================

def test_prepare_ai_waits_in_setup():
    session = _session()
    session.prepare(GameMode.AI)

    assert session.phase == GamePhase.SETUP
    assert not session.is_human_turn()
    assert not session.submit_move(0)
    assert session.board == Board.empty()


def test_prepare_local_starts_playing():
    session = _session()
    session.prepare(GameMode.LOCAL)
    assert session.phase == GamePhase.PLAYING
    assert session.submit_move(0)


# ==================== AI TURNS ====================

def test_ai_answers_after_human_move():
    scheduler = ManualScheduler()
    session = _session(scheduler)
    session.start(GameMode.AI, Difficulty.EASY, X)

    assert session.submit_move(4)
    assert session.is_ai_computing
    assert scheduler.pending() == 1

    # Human can't move while the AI is thinking
    assert not session.submit_move(0)

    assert scheduler.run_pending() == 1
    assert not session.is_ai_computing
    assert session.move_count == 2
    assert session.board.count(O) == 1
    assert session.active_symbol == X
    assert session.is_human_turn()


def test_ai_moves_first_when_human_is_o():
    scheduler = ManualScheduler()
    session = _session(scheduler)
    session.start(GameMode.AI, Difficulty.IMPOSSIBLE, O)

    assert session.is_ai_computing
    assert not session.is_human_turn()
    assert not session.submit_move(4)

    scheduler.run_pending()
    # Every opening draws, so the lowest index wins the tie
    assert session.board[0] == X
    assert session.active_symbol == O
    assert session.is_human_turn()


def test_think_delay_within_bounds():
    scheduler = RecordingScheduler()
    session = GameSession(scheduler=scheduler, rng=random.Random(3))
    session.start(GameMode.AI, Difficulty.EASY, X)

    for _ in range(4):
        if session.phase != GamePhase.PLAYING:
            break
        session.submit_move(session.board.empty_cells()[0])
        scheduler.run_pending()

    assert scheduler.calls
    for delay, _, _ in scheduler.calls:
        assert GameConfig.THINK_DELAY_MIN_MS <= delay <= GameConfig.THINK_DELAY_MAX_MS


def test_reset_cancels_pending_ai_turn():
    scheduler = ManualScheduler()
    session = _session(scheduler)
    session.start(GameMode.AI, Difficulty.MEDIUM, X)
    session.submit_move(4)
    assert scheduler.pending() == 1

    session.reset()

    assert scheduler.pending() == 0
    assert not session.is_ai_computing
    assert session.board == Board.empty()
    assert session.difficulty == Difficulty.MEDIUM
    assert session.is_human_turn()


def test_late_ai_turn_from_previous_game_is_discarded():
    scheduler = NoCancelScheduler()
    session = _session(scheduler)
    session.start(GameMode.AI, Difficulty.IMPOSSIBLE, X)
    session.submit_move(4)
    session.reset()

    # The old callback is still queued; the new game moves on
    assert session.submit_move(0)
    assert scheduler.pending() == 2

    scheduler.run_pending()

    assert session.board[0] == X
    assert session.board.count(X) == 1
    assert session.board.count(O) == 1
    assert session.move_count == 2
    assert not session.is_ai_computing


def test_ai_turn_on_outdated_board_is_discarded():
    scheduler = RecordingScheduler()
    session = _session(scheduler)
    session.start(GameMode.AI, Difficulty.IMPOSSIBLE, X)
    session.submit_move(4)

    _, callback, args = scheduler.calls[-1]
    generation = args[0]
    callback(generation, Board.empty())

    assert not session.is_ai_computing
    assert session.board.count(O) == 0
    assert session.move_count == 1


def test_ai_turn_after_game_started_again_is_discarded():
    scheduler = NoCancelScheduler()
    session = _session(scheduler)
    session.start(GameMode.AI, Difficulty.EASY, X)
    session.submit_move(4)
    session.start(GameMode.LOCAL)

    scheduler.run_pending()
    assert session.board == Board.empty()
    assert session.active_symbol == X


def test_failing_listener_does_not_stop_others(caplog):
    session = _session()

    def broken(result):
        raise RuntimeError("boom")

    seen = []
    session.add_move_listener(broken)
    session.add_move_listener(seen.append)
    session.start(GameMode.LOCAL)

    with caplog.at_level(logging.ERROR, logger="logic.session"):
        assert session.submit_move(4)

    assert len(seen) == 1
    assert session.board[4] == X
    assert any("failed" in record.getMessage() for record in caplog.records)


@pytest.mark.parametrize("seed", range(10))
def test_impossible_ai_never_loses_to_random_player(seed):
    scheduler = ManualScheduler()
    rng = random.Random(seed)
    human = X if seed % 2 == 0 else O
    session = _session(scheduler, rng=random.Random(seed))
    results = []
    session.add_result_listener(results.append)
    session.start(GameMode.AI, Difficulty.IMPOSSIBLE, human)

    while session.phase == GamePhase.PLAYING:
        if session.is_human_turn():
            assert session.submit_move(rng.choice(session.board.empty_cells()))
        else:
            assert scheduler.run_pending() == 1

    assert len(results) == 1
    assert results[0].outcome in ("loss", "draw")


# ==================== RESULTS ====================

def test_duration_from_clock():
    now = [100.0]
    session = _session(clock=lambda: now[0])
    results = []
    session.add_result_listener(results.append)
    session.start(GameMode.LOCAL)

    for index in (0, 3, 1, 4):
        session.submit_move(index)
    now[0] = 112.5
    session.submit_move(2)

    assert results[0].duration == pytest.approx(12.5)
    assert session.last_result is results[0]


def test_result_outcomes():
    def result(mode, winner, human=X):
        difficulty = Difficulty.HARD if mode == GameMode.AI else None
        return GameResult(mode, difficulty, winner, human, moves=5, duration=1.0)

    assert result(GameMode.AI, X).outcome == "win"
    assert result(GameMode.AI, O).outcome == "loss"
    assert result(GameMode.AI, X, human=O).outcome == "loss"
    assert result(GameMode.AI, None).outcome == "draw"
    assert result(GameMode.LOCAL, O).outcome == "win"


def test_result_to_dict():
    original = GameResult(GameMode.AI, Difficulty.HARD, None, O, moves=9, duration=42.0)
    data = original.to_dict()

    assert data["winner"] == "draw"
    assert data["difficulty"] == "hard"
    assert data["playerSymbol"] == "O"
    assert GameResult.from_dict(data) == original


def test_view_reflects_session():
    session = _session()
    session.start(GameMode.AI, Difficulty.HARD, O)
    view = session.view()

    assert view.phase == GamePhase.PLAYING
    assert view.mode == GameMode.AI
    assert view.difficulty == Difficulty.HARD
    assert view.human_symbol == O
    assert view.is_ai_computing
    assert session.ai_symbol == X
