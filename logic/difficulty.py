"""
Difficulty policy for the TicTacToe AI.

Each tier is a strategy function that blends simple heuristics,
randomness and the minimax search. choose_move() dispatches through
a fixed table keyed by the Difficulty enum.
"""

import logging
import random
from enum import Enum
from typing import Callable, Dict, Optional
from dataclasses import dataclass

from .ai_player import AIPlayer, NoLegalMoves
from .config import GameConfig
from .game_state import Board, Symbol
from .win_checker import WinChecker

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    """AI difficulty levels."""
    EASY = "easy"              # Random moves, sometimes spots a win
    MEDIUM = "medium"          # Wins, blocks, likes good squares
    HARD = "hard"              # Minimax with occasional mistakes
    IMPOSSIBLE = "impossible"  # Full minimax

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def description(self) -> str:
        return GameConfig.DIFFICULTY_DESCRIPTIONS[self.value]

    @classmethod
    def parse(cls, value: str) -> "Difficulty":
        return cls(value.strip().lower())


_checker = WinChecker()


def find_winning_move(board: Board, symbol: Symbol) -> Optional[int]:
    """
    First empty cell (ascending) that wins immediately for `symbol`.

    Returns:
        The cell index, or None if no single move wins.
    """
    for index in board.empty_cells():
        if _checker.check_winner(board.apply_move(index, symbol)) == symbol:
            return index
    return None


def find_blocking_move(board: Board, ai_symbol: Symbol) -> Optional[int]:
    """The cell the opponent would win on next turn, if any."""
    return find_winning_move(board, ai_symbol.opposite())


def _first_strategic_cell(board: Board, config: GameConfig) -> Optional[int]:
    for index in config.STRATEGIC_ORDER:
        if board.is_empty_cell(index):
            return index
    return None


def easy_move(board: Board, symbol: Symbol, rng, config: GameConfig) -> int:
    """Random cell, with a small chance of noticing an immediate win."""
    if rng.random() < config.EASY_SMART_CHANCE:
        win = find_winning_move(board, symbol)
        if win is not None:
            return win

    return rng.choice(board.empty_cells())


def medium_move(board: Board, symbol: Symbol, rng, config: GameConfig) -> int:
    """Takes wins and blocks, likes the center, otherwise half-strategic."""
    win = find_winning_move(board, symbol)
    if win is not None:
        return win

    block = find_blocking_move(board, symbol)
    if block is not None:
        return block

    if board.is_empty_cell(4):
        return 4

    if rng.random() < config.MEDIUM_STRATEGIC_CHANCE:
        return _first_strategic_cell(board, config)

    return rng.choice(board.empty_cells())


def hard_move(board: Board, symbol: Symbol, rng, config: GameConfig) -> int:
    """Takes wins and blocks, otherwise minimax with an occasional slip."""
    win = find_winning_move(board, symbol)
    if win is not None:
        return win

    block = find_blocking_move(board, symbol)
    if block is not None:
        return block

    if rng.random() < config.HARD_MISTAKE_CHANCE:
        logger.debug("Hard AI makes a deliberate mistake")
        return rng.choice(board.empty_cells())

    return AIPlayer(symbol, config).get_best_move(board)


def impossible_move(board: Board, symbol: Symbol, rng, config: GameConfig) -> int:
    """Perfect play."""
    return AIPlayer(symbol, config).get_best_move(board)


Strategy = Callable[[Board, Symbol, object, GameConfig], int]

STRATEGIES: Dict[Difficulty, Strategy] = {
    Difficulty.EASY: easy_move,
    Difficulty.MEDIUM: medium_move,
    Difficulty.HARD: hard_move,
    Difficulty.IMPOSSIBLE: impossible_move,
}


def choose_move(
    board: Board,
    symbol: Symbol,
    difficulty: Difficulty,
    rng=None,
    config: Optional[GameConfig] = None
) -> int:
    """
    Pick the AI's move for one turn.

    Args:
        board: Snapshot of the current board, still in progress.
        symbol: The AI's symbol.
        difficulty: Which tier's strategy to use.
        rng: Source of randomness with random() and choice(); defaults
            to the `random` module.
        config: Game configuration (tier probabilities).

    Returns:
        An empty cell index.

    Raises:
        NoLegalMoves: the board is full.
    """
    if board.is_full():
        raise NoLegalMoves(board)

    move = STRATEGIES[difficulty](board, symbol, rng or random, config or GameConfig())
    logger.debug("%s AI (%s) picks cell %d on %s", difficulty.label, symbol.value, move, board)
    return move


# ==================== HINTS ====================

@dataclass(frozen=True)
class BoardEvaluation:
    """A rough read of the position for the player."""
    status: str   # "winning", "losing" or "neutral"
    message: str


def get_hint(board: Board, symbol: Symbol, config: Optional[GameConfig] = None) -> Optional[int]:
    """
    Suggest a move for a human player.

    Own win first, then a block, then the strategic order.
    None when the board is full.
    """
    if board.is_full():
        return None

    win = find_winning_move(board, symbol)
    if win is not None:
        return win

    block = find_blocking_move(board, symbol)
    if block is not None:
        return block

    return _first_strategic_cell(board, config or GameConfig())


def evaluate_board(board: Board, symbol: Symbol) -> BoardEvaluation:
    """
    Judge the position from `symbol`'s point of view.

    Immediate threats decide first; otherwise the center counts 2 and
    each corner 1 towards whoever holds it.
    """
    opponent = symbol.opposite()

    if find_winning_move(board, symbol) is not None:
        return BoardEvaluation("winning", "You can win!")

    if find_winning_move(board, opponent) is not None:
        return BoardEvaluation("losing", "Block the opponent!")

    advantage = 0
    if board[4] == symbol:
        advantage += 2
    elif board[4] == opponent:
        advantage -= 2

    for corner in (0, 2, 6, 8):
        if board[corner] == symbol:
            advantage += 1
        elif board[corner] == opponent:
            advantage -= 1

    if advantage > 0:
        return BoardEvaluation("winning", "Good position!")
    if advantage < 0:
        return BoardEvaluation("losing", "Be careful!")
    return BoardEvaluation("neutral", "Game is even")
