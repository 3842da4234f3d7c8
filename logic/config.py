"""
Game configuration for TicTacToe.
All the tunable values for the AI opponent and session pacing.
"""


class GameConfig:
    """
    Configuration class for game settings.
    Override attributes on an instance to tweak a single session.
    """

    # ==================== BOARD SETTINGS ====================
    BOARD_CELLS = 9

    # Fallback placement order: center, corners, edges
    STRATEGIC_ORDER = (4, 0, 2, 6, 8, 1, 3, 5, 7)

    # ==================== SEARCH SETTINGS ====================
    # Win at depth d scores WIN_SCORE - d, loss scores d - WIN_SCORE
    WIN_SCORE = 10

    # ==================== DIFFICULTY SETTINGS ====================
    # Easy: chance of looking for an immediate win before playing randomly
    EASY_SMART_CHANCE = 0.2

    # Medium: chance of using the strategic order instead of a random cell
    MEDIUM_STRATEGIC_CHANCE = 0.6

    # Hard: chance of a deliberate random mistake
    HARD_MISTAKE_CHANCE = 0.1

    DIFFICULTY_DESCRIPTIONS = {
        "easy": "Perfect for beginners",
        "medium": "A balanced challenge",
        "hard": "For experienced players",
        "impossible": "Unbeatable AI",
    }

    # ==================== PACING SETTINGS ====================
    # The AI "thinks" for a random delay in this range (milliseconds)
    THINK_DELAY_MIN_MS = 300
    THINK_DELAY_MAX_MS = 800
