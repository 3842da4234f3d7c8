"""
Daily challenge for TicTacToe.
One randomly chosen goal per calendar day, advanced by each finished game.
"""

import random
from datetime import date
from typing import Any, Dict, Optional
from dataclasses import dataclass, asdict

from logic.difficulty import Difficulty
from logic.session import GameMode, GameResult

from .config import ProgressConfig


@dataclass
class DailyChallenge:
    """
    Today's goal.

    Types:
        win_streak  win `target` games in a row
        no_loss     play `target` games without losing
        fast_win    win a game within FAST_WIN_SECONDS
        beat_ai     beat the AI on `difficulty`
    """
    id: str
    date: str
    type: str
    target: int
    reward: int
    progress: int = 0
    completed: bool = False
    difficulty: Optional[str] = None

    def describe(self) -> str:
        if self.type == "win_streak":
            return f"Win {self.target} games in a row"
        if self.type == "no_loss":
            return f"Play {self.target} games without losing"
        if self.type == "fast_win":
            return "Win a game in under 15 seconds"
        return f"Beat AI on {self.difficulty} difficulty"

    def update(self, result: GameResult, config: Optional[ProgressConfig] = None) -> bool:
        """
        Advance progress with one finished game.

        Returns:
            True if this game completed the challenge (reward is due).
        """
        if self.completed:
            return False

        config = config or ProgressConfig()
        outcome = result.outcome

        if self.type == "win_streak":
            self.progress = self.progress + 1 if outcome == "win" else 0
        elif self.type == "no_loss":
            self.progress = 0 if outcome == "loss" else self.progress + 1
        elif self.type == "fast_win":
            if outcome == "win" and result.duration <= config.FAST_WIN_SECONDS:
                self.progress = 1
        elif self.type == "beat_ai":
            if (
                result.mode == GameMode.AI
                and outcome == "win"
                and result.difficulty is not None
                and result.difficulty.value == self.difficulty
            ):
                self.progress = 1

        if self.progress >= self.target:
            self.completed = True
            return True
        return False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DailyChallenge":
        return cls(**data)


def generate_challenge(
    today: Optional[date] = None,
    rng=None,
    config: Optional[ProgressConfig] = None
) -> DailyChallenge:
    """
    Roll a new challenge for `today`.

    Args:
        today: The calendar day (defaults to date.today()).
        rng: Source of randomness with choice() and randint().
        config: Target ranges and rewards.
    """
    today = today or date.today()
    rng = rng or random
    config = config or ProgressConfig()
    stamp = today.isoformat()

    challenge_type = rng.choice(config.CHALLENGE_TYPES)
    difficulty = None

    if challenge_type == "win_streak":
        low, high, per_target = config.WIN_STREAK_RANGE
        target = rng.randint(low, high)
        reward = target * per_target
    elif challenge_type == "no_loss":
        low, high, per_target = config.NO_LOSS_RANGE
        target = rng.randint(low, high)
        reward = target * per_target
    elif challenge_type == "fast_win":
        target = 1
        reward = config.FAST_WIN_REWARD
    else:
        difficulty = rng.choice([d.value for d in Difficulty])
        target = 1
        reward = config.BEAT_AI_REWARDS[difficulty]

    return DailyChallenge(
        id=stamp,
        date=stamp,
        type=challenge_type,
        target=target,
        reward=reward,
        difficulty=difficulty,
    )
