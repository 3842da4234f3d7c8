"""
Player statistics for TicTacToe.
Aggregates finished games into win/loss/draw counts, streaks and records.
"""

from typing import Any, Dict, Optional
from dataclasses import dataclass, field

from logic.difficulty import Difficulty
from logic.session import GameMode, GameResult

from .config import ProgressConfig


def _empty_ai_wins() -> Dict[str, int]:
    return {difficulty.value: 0 for difficulty in Difficulty}


@dataclass
class Statistics:
    """
    Running totals over every recorded game.

    fastest_win is in seconds and stays None until the first win.
    ai_wins counts wins against the AI per difficulty value.
    """
    total_games: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    current_streak: int = 0
    best_streak: int = 0
    total_moves: int = 0
    fastest_win: Optional[float] = None
    ai_wins: Dict[str, int] = field(default_factory=_empty_ai_wins)
    last_played: Optional[str] = None

    def record(self, result: GameResult, config: Optional[ProgressConfig] = None) -> int:
        """
        Add one finished game.

        Args:
            result: The game to add.
            config: Points table.

        Returns:
            Points earned for the game.
        """
        config = config or ProgressConfig()
        outcome = result.outcome

        self.total_games += 1
        self.total_moves += result.moves
        self.last_played = result.finished_at.isoformat()

        if outcome == "win":
            self.wins += 1
            self.current_streak += 1
            self.best_streak = max(self.best_streak, self.current_streak)
            if self.fastest_win is None or result.duration < self.fastest_win:
                self.fastest_win = result.duration
            if result.mode == GameMode.AI and result.difficulty is not None:
                key = result.difficulty.value
                self.ai_wins[key] = self.ai_wins.get(key, 0) + 1
            return config.POINTS_WIN

        self.current_streak = 0
        if outcome == "draw":
            self.draws += 1
            return config.POINTS_DRAW

        self.losses += 1
        return config.POINTS_LOSS

    @property
    def win_rate(self) -> int:
        """Wins as a whole percentage of games played."""
        if self.total_games == 0:
            return 0
        return round(self.wins * 100 / self.total_games)

    @property
    def average_moves(self) -> int:
        if self.total_games == 0:
            return 0
        return round(self.total_moves / self.total_games)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalGames": self.total_games,
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
            "currentStreak": self.current_streak,
            "bestStreak": self.best_streak,
            "totalMoves": self.total_moves,
            "fastestWin": self.fastest_win,
            "aiWins": dict(self.ai_wins),
            "lastPlayed": self.last_played,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Statistics":
        ai_wins = _empty_ai_wins()
        ai_wins.update(data.get("aiWins", {}))
        return cls(
            total_games=data.get("totalGames", 0),
            wins=data.get("wins", 0),
            losses=data.get("losses", 0),
            draws=data.get("draws", 0),
            current_streak=data.get("currentStreak", 0),
            best_streak=data.get("bestStreak", 0),
            total_moves=data.get("totalMoves", 0),
            fastest_win=data.get("fastestWin"),
            ai_wins=ai_wins,
            last_played=data.get("lastPlayed"),
        )
