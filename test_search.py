"""Tests for the minimax search engine."""

import pytest

from logic.ai_player import AIPlayer, NoLegalMoves, best_move
from logic.game_state import Board, Symbol
from logic.win_checker import terminal_status

X, O = Symbol.X, Symbol.O


def _plain_minimax(board, ai_symbol, depth, maximizing):
    """Reference minimax without pruning."""
    status = terminal_status(board)
    if status.winner == ai_symbol:
        return 10 - depth
    if status.winner is not None:
        return depth - 10
    if status.is_draw:
        return 0

    mover = ai_symbol if maximizing else ai_symbol.opposite()
    scores = [
        _plain_minimax(board.apply_move(i, mover), ai_symbol, depth + 1, not maximizing)
        for i in board.empty_cells()
    ]
    return max(scores) if maximizing else min(scores)


def _plain_best_move(board, ai_symbol):
    best_score, best = None, None
    for index in board.empty_cells():
        score = _plain_minimax(board.apply_move(index, ai_symbol), ai_symbol, 0, False)
        if best_score is None or score > best_score:
            best_score, best = score, index
    return best


def _reachable_positions(max_empty):
    """In-progress positions reachable in legal play, with the side to move."""
    seen = set()
    stack = [(Board.empty(), X)]
    while stack:
        board, to_move = stack.pop()
        if board in seen or terminal_status(board).is_over:
            continue
        seen.add(board)
        for index in board.empty_cells():
            stack.append((board.apply_move(index, to_move), to_move.opposite()))
    return [
        (board, X if board.count(X) == board.count(O) else O)
        for board in seen
        if len(board.empty_cells()) <= max_empty
    ]


def _count_games_never_lost(board, to_move, ai, results):
    status = terminal_status(board)
    if status.is_over:
        assert status.winner != ai.symbol.opposite(), f"AI lost: {board}"
        results.append(status.winner)
        return

    if to_move == ai.symbol:
        move = ai.get_best_move(board)
        assert board[move] is None
        _count_games_never_lost(board.apply_move(move, to_move), to_move.opposite(), ai, results)
        return

    for index in board.empty_cells():
        _count_games_never_lost(board.apply_move(index, to_move), to_move.opposite(), ai, results)


@pytest.mark.parametrize("ai_symbol", [X, O])
def test_never_loses_against_any_sequence(ai_symbol):
    ai = AIPlayer(ai_symbol)
    results = []
    _count_games_never_lost(Board.empty(), X, ai, results)

    assert results
    assert ai_symbol.opposite() not in results


def test_center_opening_answered_with_corner():
    board = Board.empty().apply_move(4, X)
    move = best_move(board, O)
    assert move in (0, 2, 6, 8)
    # Ties go to the lowest index
    assert move == 0


def test_takes_immediate_win():
    board = Board.from_string("OO./XX./X..")
    assert best_move(board, O) == 2


def test_prefers_faster_win():
    # Winning at 5 outranks blocking at 2
    board = Board.from_string("XX./OO./X..")
    assert best_move(board, O) == 5


def test_blocks_when_no_win():
    board = Board.from_string("XX./.O./...")
    assert best_move(board, O) == 2


def test_lost_position_still_returns_lowest_move():
    # X threatens 2 and 6; every reply loses on the next ply
    board = Board.from_string("XX./XO./..O")
    assert best_move(board, O) == 2


def test_single_empty_cell():
    board = Board.from_string("XOX/XOO/OX.")
    assert best_move(board, X) == 8


def test_full_board_raises():
    with pytest.raises(NoLegalMoves):
        best_move(Board.from_string("XOX/XOO/OXX"), O)


def test_pruning_matches_plain_minimax():
    ai = {X: AIPlayer(X), O: AIPlayer(O)}
    positions = _reachable_positions(max_empty=5)
    assert positions

    for board, to_move in positions:
        assert ai[to_move].get_best_move(board) == _plain_best_move(board, to_move), str(board)


def test_nodes_evaluated_resets_per_search():
    ai = AIPlayer(O)
    board = Board.empty().apply_move(0, X)
    ai.get_best_move(board)
    first = ai.nodes_evaluated
    ai.get_best_move(board)
    assert ai.nodes_evaluated == first > 0


def test_search_does_not_mutate_board():
    board = Board.from_string("X...O....")
    before = board.cells
    best_move(board, X)
    assert board.cells == before
