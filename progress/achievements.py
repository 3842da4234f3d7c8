"""
Achievements for TicTacToe.
A fixed catalogue of goals, checked against statistics after every game.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple
from dataclasses import dataclass

from .config import ProgressConfig
from .statistics import Statistics


@dataclass
class Achievement:
    """One goal and the player's progress towards it."""
    id: str
    name: str
    description: str
    icon: str
    target: int
    progress: int = 0
    unlocked: bool = False
    unlocked_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "progress": self.progress,
            "unlocked": self.unlocked,
            "unlockedAt": self.unlocked_at,
        }


# (progress, should_unlock) for one achievement
Check = Callable[[Statistics, int, ProgressConfig], Tuple[int, bool]]


def _streak(target: int) -> Check:
    def check(stats, daily_completed, config):
        return min(stats.current_streak, target), stats.best_streak >= target
    return check


def _games(target: int) -> Check:
    def check(stats, daily_completed, config):
        return min(stats.total_games, target), stats.total_games >= target
    return check


def _beat(difficulty: str) -> Check:
    def check(stats, daily_completed, config):
        wins = stats.ai_wins.get(difficulty, 0)
        return min(wins, 1), wins >= 1
    return check


def _daily(target: int) -> Check:
    def check(stats, daily_completed, config):
        return min(daily_completed, target), daily_completed >= target
    return check


def _first_win(stats, daily_completed, config):
    return min(stats.wins, 1), stats.wins >= 1


def _speed_demon(stats, daily_completed, config):
    fast = stats.fastest_win is not None and stats.fastest_win <= config.SPEED_DEMON_SECONDS
    return (1 if fast else 0), fast


def _perfectionist(stats, daily_completed, config):
    if stats.losses > 0:
        return 0, False
    return min(stats.wins, 10), stats.wins >= 10


# id, name, description, icon, target, check
CATALOGUE: List[Tuple[str, str, str, str, int, Check]] = [
    ("first_win", "First Victory", "Win your first game", "🏆", 1, _first_win),
    ("streak_3", "Hot Streak", "Win 3 games in a row", "🔥", 3, _streak(3)),
    ("streak_5", "On Fire", "Win 5 games in a row", "💥", 5, _streak(5)),
    ("streak_10", "Unstoppable", "Win 10 games in a row", "⚡", 10, _streak(10)),
    ("games_10", "Getting Started", "Play 10 games", "🎮", 10, _games(10)),
    ("games_50", "Dedicated", "Play 50 games", "🎯", 50, _games(50)),
    ("games_100", "Master Player", "Play 100 games", "👑", 100, _games(100)),
    ("beat_easy", "Baby Steps", "Beat AI on Easy", "🌱", 1, _beat("easy")),
    ("beat_medium", "Rising Star", "Beat AI on Medium", "⭐", 1, _beat("medium")),
    ("beat_hard", "Challenger", "Beat AI on Hard", "💪", 1, _beat("hard")),
    ("beat_impossible", "Legend", "Beat AI on Impossible", "🏅", 1, _beat("impossible")),
    ("speed_demon", "Speed Demon", "Win in under 10 seconds", "⏱️", 1, _speed_demon),
    ("daily_3", "Daily Warrior", "Complete 3 daily challenges", "📅", 3, _daily(3)),
    ("daily_7", "Weekly Champion", "Complete 7 daily challenges", "🗓️", 7, _daily(7)),
    ("perfectionist", "Perfectionist", "Win 10 games without a loss", "💎", 10, _perfectionist),
]

_CHECKS: Dict[str, Check] = {entry[0]: entry[5] for entry in CATALOGUE}


def default_achievements() -> List[Achievement]:
    """A fresh, all-locked copy of the catalogue."""
    return [
        Achievement(id=id_, name=name, description=description, icon=icon, target=target)
        for id_, name, description, icon, target, _ in CATALOGUE
    ]


def check_achievements(
    achievements: List[Achievement],
    stats: Statistics,
    daily_completed: int = 0,
    config: Optional[ProgressConfig] = None,
    now: Optional[datetime] = None
) -> List[Achievement]:
    """
    Update progress in place and unlock what has been reached.

    Unlocked achievements stay unlocked even if the underlying numbers
    drop later (e.g. a streak ends).

    Returns:
        The achievements unlocked by this call.
    """
    config = config or ProgressConfig()
    stamp = (now or datetime.now(timezone.utc)).isoformat()
    unlocked_now = []

    for achievement in achievements:
        if achievement.unlocked:
            continue

        check = _CHECKS.get(achievement.id)
        if check is None:
            continue

        progress, should_unlock = check(stats, daily_completed, config)
        achievement.progress = progress

        if should_unlock:
            achievement.progress = achievement.target
            achievement.unlocked = True
            achievement.unlocked_at = stamp
            unlocked_now.append(achievement)

    return unlocked_now


def restore_achievements(data: List[Dict[str, Any]]) -> List[Achievement]:
    """Rebuild the catalogue and apply saved progress by id."""
    achievements = default_achievements()
    saved = {entry.get("id"): entry for entry in data}
    for achievement in achievements:
        entry = saved.get(achievement.id)
        if entry is None:
            continue
        achievement.progress = entry.get("progress", 0)
        achievement.unlocked = entry.get("unlocked", False)
        achievement.unlocked_at = entry.get("unlockedAt")
    return achievements
