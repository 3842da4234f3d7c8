"""
Search engine for the TicTacToe AI.
Uses the Minimax algorithm with alpha-beta pruning to choose the optimal move.
"""

import logging
from typing import Optional

from .config import GameConfig
from .game_state import Board, Symbol
from .win_checker import WinChecker

logger = logging.getLogger(__name__)


class NoLegalMoves(RuntimeError):
    """The AI was asked to move on a board with no empty cell."""

    def __init__(self, board: Optional[Board] = None):
        detail = f" (board {board})" if board is not None else ""
        super().__init__(f"No empty cells available{detail}")
        self.board = board


class AIPlayer:
    """
    An AI that plays TicTacToe using the Minimax algorithm.

    The AI always plays optimally: it wins if possible, blocks when it
    has to, and never loses. Among equally good moves it prefers the
    lowest cell index, and its scoring prefers the fastest win and the
    slowest loss.
    """

    def __init__(self, symbol: Symbol = Symbol.O, config: Optional[GameConfig] = None):
        """
        Initialize the AI player.

        Args:
            symbol: Which symbol the AI places.
            config: Game configuration (win score).
        """
        self.symbol = symbol
        self.config = config or GameConfig()
        self.win_checker = WinChecker()

        # How many positions the last search visited (for debugging)
        self.nodes_evaluated = 0

    def get_best_move(self, board: Board) -> int:
        """
        Get the best move for the current position.

        Args:
            board: Current board, still in progress.

        Returns:
            Index of the best move.

        Raises:
            NoLegalMoves: the board is full.
        """
        self.nodes_evaluated = 0

        valid_moves = board.empty_cells()
        if not valid_moves:
            raise NoLegalMoves(board)

        if len(valid_moves) == 1:
            return valid_moves[0]

        best_score = float('-inf')
        best_move = valid_moves[0]

        for index in valid_moves:
            child = board.apply_move(index, self.symbol)
            score = self._minimax(child, depth=0, is_maximizing=False)

            # Strict comparison keeps the lowest index on ties
            if score > best_score:
                best_score = score
                best_move = index

        logger.debug(
            "AI %s evaluated %d positions. Best move: %d (score: %s)",
            self.symbol.value, self.nodes_evaluated, best_move, best_score
        )

        return best_move

    def _minimax(
        self,
        board: Board,
        depth: int,
        is_maximizing: bool,
        alpha: float = float('-inf'),
        beta: float = float('inf')
    ) -> float:
        """
        Minimax algorithm with alpha-beta pruning.

        Args:
            board: Position to evaluate.
            depth: Plies below the position where the search began.
            is_maximizing: True if it's the AI's turn.
            alpha: Best score the maximizer can guarantee.
            beta: Best score the minimizer can guarantee.

        Returns:
            The score of the position from the AI's point of view.
        """
        self.nodes_evaluated += 1

        status = self.win_checker.get_status(board)
        if status.winner == self.symbol:
            return self.config.WIN_SCORE - depth
        if status.winner is not None:
            return depth - self.config.WIN_SCORE
        if status.is_draw:
            return 0

        if is_maximizing:
            max_score = float('-inf')
            for index in board.empty_cells():
                child = board.apply_move(index, self.symbol)
                score = self._minimax(child, depth + 1, False, alpha, beta)
                max_score = max(max_score, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    break  # Prune
            return max_score
        else:
            min_score = float('inf')
            opponent = self.symbol.opposite()
            for index in board.empty_cells():
                child = board.apply_move(index, opponent)
                score = self._minimax(child, depth + 1, True, alpha, beta)
                min_score = min(min_score, score)
                beta = min(beta, score)
                if beta <= alpha:
                    break  # Prune
            return min_score


def best_move(board: Board, ai_symbol: Symbol, config: Optional[GameConfig] = None) -> int:
    """Optimal move for `ai_symbol` on `board`. See AIPlayer.get_best_move."""
    return AIPlayer(ai_symbol, config).get_best_move(board)
