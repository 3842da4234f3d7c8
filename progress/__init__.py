"""
Progress module for TicTacToe.
Handles statistics, achievements, the daily challenge and saved progress.
"""

from .config import ProgressConfig
from .statistics import Statistics
from .achievements import Achievement, check_achievements, default_achievements
from .daily_challenge import DailyChallenge, generate_challenge
from .store import ProgressStore, Settings
