"""
Progress store for TicTacToe.

Collects finished games from a GameSession and keeps everything that
outlives a single game: settings, statistics, achievements, history,
the daily challenge and points. Persistence is a plain-data snapshot
written as JSON.
"""

import json
import logging
import random
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union
from dataclasses import dataclass, asdict

from logic.session import GameResult, GameSession

from .achievements import Achievement, check_achievements, default_achievements, restore_achievements
from .config import ProgressConfig
from .daily_challenge import DailyChallenge, generate_challenge
from .statistics import Statistics

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Player preferences. Cosmetic and feedback switches only."""
    theme_id: str = "neonNights"
    symbol_style_id: str = "classic"
    sound_enabled: bool = True
    music_enabled: bool = False
    haptic_enabled: bool = True
    show_hints: bool = True


class ProgressStore:
    """
    Everything that persists between games.

    Constructed explicitly and attached to a session:

        store = ProgressStore.load("progress.json")
        store.attach(session)
        ...
        store.save("progress.json")
    """

    def __init__(
        self,
        config: Optional[ProgressConfig] = None,
        rng=None,
        today: Callable[[], date] = date.today
    ):
        self.config = config or ProgressConfig()
        self.rng = rng or random.Random()
        self.today = today

        self.settings = Settings()
        self.statistics = Statistics()
        self.achievements: List[Achievement] = default_achievements()
        self.history: List[GameResult] = []
        self.daily_challenge: Optional[DailyChallenge] = None
        self.daily_completed = 0
        self.points = 0

    def attach(self, session: GameSession) -> None:
        """Record every game the session finishes."""
        session.add_result_listener(self.record_result)

    def ensure_daily_challenge(self) -> DailyChallenge:
        """Today's challenge, rolling a new one when the date has changed."""
        today = self.today()
        if self.daily_challenge is None or self.daily_challenge.date != today.isoformat():
            self.daily_challenge = generate_challenge(today, self.rng, self.config)
            logger.info("New daily challenge: %s", self.daily_challenge.describe())
        return self.daily_challenge

    def record_result(self, result: GameResult) -> List[Achievement]:
        """
        Add one finished game.

        Updates statistics and points, history, the daily challenge and
        achievements, in that order.

        Returns:
            Achievements unlocked by this game.
        """
        earned = self.statistics.record(result, self.config)
        self.points += earned

        self.history.insert(0, result)
        del self.history[self.config.HISTORY_LIMIT:]

        challenge = self.ensure_daily_challenge()
        if challenge.update(result, self.config):
            self.daily_completed += 1
            self.points += challenge.reward
            logger.info("Daily challenge completed: +%d points", challenge.reward)

        unlocked = check_achievements(
            self.achievements, self.statistics, self.daily_completed, self.config
        )
        for achievement in unlocked:
            self.points += self.config.POINTS_ACHIEVEMENT
            logger.info("Achievement unlocked: %s", achievement.name)

        logger.info(
            "Recorded %s (%d moves, %.1fs): +%d points",
            result.outcome, result.moves, result.duration, earned
        )
        return unlocked

    # ==================== SNAPSHOT ====================

    def to_dict(self) -> Dict[str, Any]:
        return {
            "settings": asdict(self.settings),
            "statistics": self.statistics.to_dict(),
            "achievements": [a.to_dict() for a in self.achievements],
            "gameHistory": [r.to_dict() for r in self.history],
            "dailyChallenge": self.daily_challenge.to_dict() if self.daily_challenge else None,
            "dailyCompleted": self.daily_completed,
            "points": self.points,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], **kwargs) -> "ProgressStore":
        store = cls(**kwargs)
        store.settings = Settings(**data.get("settings", {}))
        store.statistics = Statistics.from_dict(data.get("statistics", {}))
        store.achievements = restore_achievements(data.get("achievements", []))
        store.history = [GameResult.from_dict(r) for r in data.get("gameHistory", [])]
        challenge = data.get("dailyChallenge")
        store.daily_challenge = DailyChallenge.from_dict(challenge) if challenge else None
        store.daily_completed = data.get("dailyCompleted", 0)
        store.points = data.get("points", 0)
        return store

    def save(self, path: Union[str, Path]) -> None:
        path = Path(path)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        logger.debug("Progress saved to %s", path)

    @classmethod
    def load(cls, path: Union[str, Path], **kwargs) -> "ProgressStore":
        """
        Read a saved snapshot. A missing file gives a fresh store.

        Raises:
            ValueError: the file is not valid JSON.
        """
        path = Path(path)
        if not path.exists():
            logger.info("No saved progress at %s, starting fresh", path)
            return cls(**kwargs)

        data = json.loads(path.read_text(encoding="utf-8"))
        return cls.from_dict(data, **kwargs)
