"""
TicTacToe
=========
Tic-tac-toe against a four-tier AI opponent or a friend at the same screen.
The AI ranges from mostly random (Easy) to perfect minimax play (Impossible).
Finished games feed statistics, achievements and a daily challenge.

Difficulty tiers: Easy -> Medium -> Hard -> Impossible
"""

__version__ = "1.0.0"
