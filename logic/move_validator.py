"""
Move validator for TicTacToe.
Validates that moves follow the rules and lists the legal ones.
"""

from typing import Optional, List
from dataclasses import dataclass

from .game_state import Board
from .win_checker import WinChecker


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates TicTacToe moves.

    Rules:
    1. Index must be 0-8
    2. Can only place on empty cells
    3. Game must not be over
    """

    def __init__(self):
        self.win_checker = WinChecker()

    def validate_move(self, board: Board, index: int) -> ValidationResult:
        """
        Validate a move.

        Args:
            board: Current board.
            index: Cell to place a symbol on (0-8).

        Returns:
            ValidationResult with is_valid and error_message.
        """
        # bool is an int subclass, but True/False are not cell indices
        if not isinstance(index, int) or isinstance(index, bool):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid index {index!r}. Must be an integer 0-8."
            )

        if not (0 <= index <= 8):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid index {index}. Must be 0-8."
            )

        if self.win_checker.get_status(board).is_over:
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!"
            )

        if board[index] is not None:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {index} is already occupied by {board[index].value}"
            )

        return ValidationResult(is_valid=True)

    def get_valid_moves(self, board: Board) -> List[int]:
        """
        Get all legal moves, ascending. None once the game is over.
        """
        if self.win_checker.get_status(board).is_over:
            return []

        return board.empty_cells()
