"""
Progress configuration for TicTacToe.
Points, history size and the thresholds used by achievements and challenges.
"""


class ProgressConfig:
    """
    Configuration for statistics, achievements and daily challenges.
    """

    # ==================== POINTS ====================
    POINTS_WIN = 10
    POINTS_DRAW = 3
    POINTS_LOSS = 1
    POINTS_ACHIEVEMENT = 50

    # ==================== HISTORY ====================
    # Newest results are kept, oldest dropped
    HISTORY_LIMIT = 100

    # ==================== THRESHOLDS (seconds) ====================
    SPEED_DEMON_SECONDS = 10
    FAST_WIN_SECONDS = 15

    # ==================== DAILY CHALLENGE ====================
    CHALLENGE_TYPES = ("win_streak", "no_loss", "fast_win", "beat_ai")

    # (min target, max target, reward per target)
    WIN_STREAK_RANGE = (2, 4, 10)
    NO_LOSS_RANGE = (3, 5, 8)

    FAST_WIN_REWARD = 30

    BEAT_AI_REWARDS = {
        "easy": 25,
        "medium": 25,
        "hard": 35,
        "impossible": 50,
    }

    # ==================== STORAGE ====================
    DEFAULT_STORE_PATH = "tictactoe-progress.json"
