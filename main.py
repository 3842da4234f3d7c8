"""
Main script for TicTacToe.

Plays in the console against the AI or a friend, or launches the
Tkinter UI with --ui. Finished games are recorded to a progress file.

Run this script to play TicTacToe!
"""

import logging
import time
from typing import Optional

from logic.config import GameConfig
from logic.difficulty import Difficulty, get_hint
from logic.game_state import Symbol
from logic.scheduler import ManualScheduler
from logic.session import GameMode, GamePhase, GameSession

from progress.config import ProgressConfig
from progress.store import ProgressStore


class ConsoleGame:
    """
    Console controller for TicTacToe.

    Game flow:
    1. Human types a cell number (1-9)
    2. Session applies the move and schedules the AI's turn
    3. Console waits out the AI's thinking delay and runs the turn
    4. Repeat until someone wins or it's a draw
    """

    def __init__(
        self,
        mode: GameMode = GameMode.AI,
        difficulty: Difficulty = Difficulty.MEDIUM,
        human_symbol: Symbol = Symbol.X,
        store_path: Optional[str] = None
    ):
        self.mode = mode
        self.difficulty = difficulty
        self.human_symbol = human_symbol
        self.store_path = store_path

        self.scheduler = ManualScheduler()
        self.session = GameSession(scheduler=self.scheduler, config=GameConfig())

        self.store = ProgressStore.load(store_path) if store_path else ProgressStore()
        self.store.attach(self.session)
        self.store.ensure_daily_challenge()

        self.is_running = False

        print("\n" + "="*60)
        print("   TicTacToe - Ready!")
        if mode == GameMode.AI:
            print(f"   You play: {human_symbol.value}  (AI: {difficulty.label})")
        else:
            print("   Local game: X and O take turns at this keyboard")
        print("="*60 + "\n")

    def start(self):
        """Start the game."""
        print("Type 1-9 to place, 'h' for a hint, 'r' to restart, 'q' to quit\n")
        print(f"Daily challenge: {self.store.daily_challenge.describe()}\n")

        self.session.start(self.mode, self.difficulty, self.human_symbol)
        self.is_running = True
        self._game_loop()

    def _game_loop(self):
        """Main game loop."""
        self._print_board()

        while self.is_running:
            if self.session.is_ai_computing:
                self._run_ai_turn()
                continue

            if self.session.phase == GamePhase.FINISHED:
                self._show_game_result()
                if not self._ask_play_again():
                    break
                self.session.reset()
                self._print_board()
                continue

            self._handle_input(input(f"{self.session.active_symbol.value} > ").strip().lower())

    def _handle_input(self, command: str):
        if command == "q":
            print("\nGame quit by user.")
            self.is_running = False
        elif command == "r":
            self.session.reset()
            print("\nGame reset!")
            self._print_board()
        elif command == "h":
            hint = get_hint(self.session.board, self.session.active_symbol)
            if hint is not None:
                print(f"Hint: try cell {hint + 1}")
        elif command.isdigit() and 1 <= int(command) <= 9:
            if self.session.submit_move(int(command) - 1):
                self._print_board()
            else:
                print("You can't play there!")
        else:
            print("Type a cell number 1-9")

    def _run_ai_turn(self):
        """Wait out the thinking delay, then let the AI move."""
        print("\n>>> AI is thinking...")
        time.sleep(self.scheduler.max_delay_ms() / 1000)
        self.scheduler.run_pending()
        self._print_board()

    def _print_board(self):
        print()
        print(self.session.board.render(numbered=True))
        print()

    def _ask_play_again(self) -> bool:
        answer = input("Play again? [y/N] ").strip().lower()
        return answer in ("y", "yes")

    def _show_game_result(self):
        """Show the final game result."""
        result = self.session.last_result

        print("\n" + "="*60)
        print("   GAME OVER!")
        print("="*60)

        if result.is_draw:
            print("\n🤝 It's a draw! Good game!")
        elif result.mode == GameMode.LOCAL:
            print(f"\n🎉 {result.winner.value} wins!")
        elif result.outcome == "win":
            print("\n🎉 Congratulations! You won!")
        else:
            print("\n🤖 AI wins! Better luck next time!")

        stats = self.store.statistics
        print(f"\nPoints: {self.store.points}   Wins: {stats.wins}   "
              f"Losses: {stats.losses}   Draws: {stats.draws}   Streak: {stats.current_streak}")

        if self.store_path:
            self.store.save(self.store_path)

        print("\n" + "="*60)


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="TicTacToe")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in GameMode],
        default=GameMode.AI.value,
        help="Play against the AI or a friend"
    )
    parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default=Difficulty.MEDIUM.value,
        help="AI difficulty"
    )
    parser.add_argument(
        "--symbol",
        choices=["X", "O", "x", "o"],
        default="X",
        help="Your symbol (X moves first)"
    )
    parser.add_argument(
        "--stats",
        default=ProgressConfig.DEFAULT_STORE_PATH,
        help="Where to keep statistics and achievements"
    )
    parser.add_argument(
        "--ui",
        action="store_true",
        help="Open the Tkinter window instead of the console"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logging"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    if args.ui:
        from ui import TicTacToeUI
        print("\n" + "="*60)
        print("   TicTacToe UI")
        print("="*60 + "\n")
        ui = TicTacToeUI(store_path=args.stats)
        ui.run()
        return

    game = ConsoleGame(
        mode=GameMode(args.mode),
        difficulty=Difficulty(args.difficulty),
        human_symbol=Symbol.parse(args.symbol),
        store_path=args.stats
    )

    try:
        game.start()
    except (KeyboardInterrupt, EOFError):
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")


if __name__ == "__main__":
    main()
