"""
Win checker for TicTacToe.
Derives the terminal status (in progress, won, draw) from a board.
"""

from enum import Enum
from typing import Optional, Tuple
from dataclasses import dataclass

from .game_state import Board, Symbol


WinLine = Tuple[int, int, int]

# All possible winning lines, in the order they are checked
WIN_LINES: Tuple[WinLine, ...] = (
    # Rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
)


class GameStatus(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


@dataclass(frozen=True)
class TerminalStatus:
    """
    Where a board stands.

    Always computed from a Board, never stored apart from it.
    """
    state: GameStatus
    winner: Optional[Symbol] = None
    line: Optional[WinLine] = None

    @classmethod
    def in_progress(cls) -> "TerminalStatus":
        return cls(GameStatus.IN_PROGRESS)

    @classmethod
    def draw(cls) -> "TerminalStatus":
        return cls(GameStatus.DRAW)

    @classmethod
    def won(cls, winner: Symbol, line: WinLine) -> "TerminalStatus":
        return cls(GameStatus.WON, winner, line)

    @property
    def is_over(self) -> bool:
        return self.state != GameStatus.IN_PROGRESS

    @property
    def is_draw(self) -> bool:
        return self.state == GameStatus.DRAW

    def describe(self) -> str:
        if self.state == GameStatus.WON:
            return f"{self.winner.value} wins"
        if self.state == GameStatus.DRAW:
            return "Draw"
        return "In progress"


class WinChecker:
    """
    Checks for win conditions in TicTacToe.

    Win condition: 3 of the same symbol in a row
    (horizontally, vertically, or diagonally)
    """

    WINNING_LINES = WIN_LINES

    def check_winner(self, board: Board) -> Optional[Symbol]:
        """
        Check if there's a winner.

        Returns:
            The winning Symbol, or None if no winner yet.
        """
        line = self.get_winning_line(board)
        return board[line[0]] if line is not None else None

    def get_winning_line(self, board: Board) -> Optional[WinLine]:
        """
        Get the first completed line in WINNING_LINES order, if any.

        Boards with two completed lines cannot come from legal play,
        but they still resolve to the first line found.
        """
        for line in self.WINNING_LINES:
            a, b, c = line
            if board[a] is not None and board[a] == board[b] == board[c]:
                return line
        return None

    def check_draw(self, board: Board) -> bool:
        """A draw is a full board with no winner."""
        return board.is_full() and self.get_winning_line(board) is None

    def get_status(self, board: Board) -> TerminalStatus:
        """
        Derive the terminal status of a board.

        Returns:
            Won(symbol, line) for the first completed line,
            Draw when the board is full, otherwise InProgress.
        """
        line = self.get_winning_line(board)
        if line is not None:
            return TerminalStatus.won(board[line[0]], line)

        if board.is_full():
            return TerminalStatus.draw()

        return TerminalStatus.in_progress()


_checker = WinChecker()


def terminal_status(board: Board) -> TerminalStatus:
    """Pure function form of WinChecker.get_status."""
    return _checker.get_status(board)
