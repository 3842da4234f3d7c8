"""
Logic module for TicTacToe.
Handles the board, rules, AI opponent and game session.
"""

from .config import GameConfig
from .game_state import Board, Symbol, InvalidMove, CellOccupied, IndexOutOfRange, apply_move, empty_cells
from .win_checker import WinChecker, TerminalStatus, GameStatus, WIN_LINES, terminal_status
from .move_validator import MoveValidator, ValidationResult
from .ai_player import AIPlayer, NoLegalMoves, best_move
from .difficulty import Difficulty, choose_move, find_winning_move, find_blocking_move, get_hint, evaluate_board
from .scheduler import ManualScheduler
from .session import GameSession, GameMode, GamePhase, GameResult, MoveResult, SessionView
