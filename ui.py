"""
TicTacToe UI
A graphical interface for TicTacToe using Tkinter.

Shows:
- The 3x3 board (click a cell to play)
- Game status and whose turn it is
- Mode, symbol and difficulty selection
- Statistics, points and the daily challenge
"""

import logging
import tkinter as tk
from tkinter import ttk
from typing import Optional

from logic.difficulty import Difficulty, get_hint
from logic.game_state import Symbol
from logic.session import GameMode, GamePhase, GameResult, GameSession, MoveResult

from progress.config import ProgressConfig
from progress.store import ProgressStore


DIFFICULTY_COLORS = {
    Difficulty.EASY: "#4ade80",
    Difficulty.MEDIUM: "#fbbf24",
    Difficulty.HARD: "#f87171",
    Difficulty.IMPOSSIBLE: "#a78bfa",
}

SYMBOL_COLORS = {
    Symbol.X: "#f87171",
    Symbol.O: "#10b981",
}


class TicTacToeUI:
    """
    Main UI class for TicTacToe.

    The Tk root is the session's scheduler: the AI's turn is queued with
    root.after() and cancelled with root.after_cancel() on reset.
    """

    def __init__(self, store_path: Optional[str] = None):
        """Initialize the UI."""
        self.store_path = store_path
        self.difficulty = Difficulty.MEDIUM
        self.mode = GameMode.AI
        self.human_symbol = Symbol.X

        self.store = ProgressStore.load(store_path) if store_path else ProgressStore()
        self.store.ensure_daily_challenge()

        # Create UI first: the root doubles as the scheduler
        self._create_ui()

        self.session = GameSession(scheduler=self.root)
        self.store.attach(self.session)
        self.session.add_move_listener(self._on_move)
        self.session.add_result_listener(self._on_result)

    def _create_ui(self):
        """Create the Tkinter UI."""
        self.root = tk.Tk()
        self.root.title("TicTacToe")
        self.root.configure(bg='#1a1a2e')
        self.root.geometry("760x560")
        self.root.minsize(700, 520)

        main_frame = ttk.Frame(self.root)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=10, pady=10)

        style = ttk.Style()
        style.theme_use('clam')
        style.configure('TFrame', background='#1a1a2e')
        style.configure('TLabel', background='#1a1a2e', foreground='white', font=('Segoe UI', 11))
        style.configure('Title.TLabel', font=('Segoe UI', 16, 'bold'), foreground='#00d4ff')
        style.configure('Status.TLabel', font=('Segoe UI', 12), foreground='#ffd700')
        style.configure('Move.TLabel', font=('Segoe UI', 11), foreground='#00ff88')

        # Left panel - board
        left_frame = ttk.Frame(main_frame)
        left_frame.pack(side=tk.LEFT, fill=tk.BOTH, expand=True, padx=(0, 10))

        ttk.Label(left_frame, text="🎮 Game Board", style='Title.TLabel').pack(pady=(0, 10))

        self.board_frame = ttk.Frame(left_frame)
        self.board_frame.pack(pady=10)

        self.board_cells = []
        for index in range(9):
            cell = tk.Button(
                self.board_frame,
                text="",
                font=('Segoe UI', 28, 'bold'),
                width=3,
                height=1,
                bg='#16213e',
                fg='white',
                activebackground='#1f2b4d',
                relief='ridge',
                borderwidth=2,
                command=lambda i=index: self._on_cell_click(i)
            )
            cell.grid(row=index // 3, column=index % 3, padx=3, pady=3)
            self.board_cells.append(cell)

        self.status_label = ttk.Label(left_frame, text="Choose options and press Start", style='Status.TLabel')
        self.status_label.pack(pady=5)

        self.turn_label = ttk.Label(left_frame, text="Turn: -")
        self.turn_label.pack()

        self.hint_label = ttk.Label(left_frame, text="", style='Move.TLabel')
        self.hint_label.pack(pady=5)

        # Right panel - options and stats
        right_frame = ttk.Frame(main_frame, width=330)
        right_frame.pack(side=tk.RIGHT, fill=tk.Y, padx=(10, 0))
        right_frame.pack_propagate(False)

        ttk.Label(right_frame, text="⚙️ Mode", style='Title.TLabel').pack()
        mode_frame = ttk.Frame(right_frame)
        mode_frame.pack(pady=5)
        self.mode_var = tk.StringVar(value=self.mode.value)
        for text, value in (("vs AI", GameMode.AI.value), ("Local", GameMode.LOCAL.value)):
            tk.Radiobutton(
                mode_frame, text=text, value=value, variable=self.mode_var,
                bg='#1a1a2e', fg='white', selectcolor='#2d3748',
                command=self._on_mode_change
            ).pack(side=tk.LEFT, padx=5)

        symbol_frame = ttk.Frame(right_frame)
        symbol_frame.pack(pady=5)
        ttk.Label(symbol_frame, text="You play:").pack(side=tk.LEFT)
        self.symbol_var = tk.StringVar(value=self.human_symbol.value)
        for symbol in Symbol:
            tk.Radiobutton(
                symbol_frame, text=symbol.value, value=symbol.value, variable=self.symbol_var,
                bg='#1a1a2e', fg=SYMBOL_COLORS[symbol], selectcolor='#2d3748'
            ).pack(side=tk.LEFT, padx=5)

        ttk.Separator(right_frame, orient='horizontal').pack(fill=tk.X, pady=10)
        ttk.Label(right_frame, text="🤖 Difficulty", style='Title.TLabel').pack()

        diff_frame = ttk.Frame(right_frame)
        diff_frame.pack(pady=5)

        self.difficulty_buttons = {}
        for difficulty in Difficulty:
            btn = tk.Button(
                diff_frame,
                text=difficulty.label,
                font=('Segoe UI', 9, 'bold'),
                width=8,
                command=lambda d=difficulty: self._set_difficulty(d)
            )
            btn.pack(side=tk.LEFT, padx=2)
            self.difficulty_buttons[difficulty] = btn
        self.difficulty_desc = ttk.Label(right_frame, text="")
        self.difficulty_desc.pack()
        self._set_difficulty(self.difficulty)

        control_frame = ttk.Frame(right_frame)
        control_frame.pack(pady=10)

        tk.Button(
            control_frame, text="▶ Start", font=('Segoe UI', 11, 'bold'),
            bg='#10b981', fg='white', width=10, command=self._start_game
        ).pack(side=tk.LEFT, padx=5)

        tk.Button(
            control_frame, text="🔄 Reset", font=('Segoe UI', 11, 'bold'),
            bg='#6366f1', fg='white', width=10, command=self._reset_game
        ).pack(side=tk.LEFT, padx=5)

        ttk.Separator(right_frame, orient='horizontal').pack(fill=tk.X, pady=10)
        ttk.Label(right_frame, text="📊 Statistics", style='Title.TLabel').pack()

        self.stats_label = ttk.Label(right_frame, text="", justify=tk.LEFT)
        self.stats_label.pack(pady=5)

        self.challenge_label = ttk.Label(right_frame, text="", style='Move.TLabel', wraplength=300)
        self.challenge_label.pack(pady=5)

        tk.Button(
            right_frame, text="✕ Quit", font=('Segoe UI', 10),
            bg='#ef4444', fg='white', width=26, command=self._quit
        ).pack(side=tk.BOTTOM, pady=10)

        self.root.protocol("WM_DELETE_WINDOW", self._quit)

    # ==================== CONTROLS ====================

    def _set_difficulty(self, difficulty: Difficulty):
        """Set the AI difficulty level for the next game."""
        self.difficulty = difficulty

        for diff, btn in self.difficulty_buttons.items():
            if diff == difficulty:
                btn.configure(bg=DIFFICULTY_COLORS[diff], fg='black')
            else:
                btn.configure(bg='#2d3748', fg='white')

        self.difficulty_desc.configure(text=difficulty.description)

    def _on_mode_change(self):
        self.mode = GameMode(self.mode_var.get())
        state = 'normal' if self.mode == GameMode.AI else 'disabled'
        for btn in self.difficulty_buttons.values():
            btn.configure(state=state)

    def _start_game(self):
        """Start a new game with the selected options."""
        self.human_symbol = Symbol(self.symbol_var.get())
        self.session.start(self.mode, self.difficulty, self.human_symbol)
        self.hint_label.configure(text="")
        self._refresh()

    def _reset_game(self):
        """Restart with the same options."""
        self.session.reset()
        self.hint_label.configure(text="")
        self._refresh()

    def _on_cell_click(self, index: int):
        if not self.session.is_human_turn():
            return
        self.session.submit_move(index)
        self._refresh()

    # ==================== SESSION EVENTS ====================

    def _on_move(self, move: MoveResult):
        self._show_hint()
        self._refresh()

    def _on_result(self, result: GameResult):
        if self.store_path:
            self.store.save(self.store_path)
        self._refresh()

    # ==================== DISPLAY ====================

    def _show_hint(self):
        if not self.store.settings.show_hints or self.session.mode != GameMode.AI:
            return
        if not self.session.is_human_turn():
            self.hint_label.configure(text="")
            return
        hint = get_hint(self.session.board, self.session.human_symbol)
        if hint is not None:
            self.hint_label.configure(text=f"Hint: row {hint // 3 + 1}, column {hint % 3 + 1}")

    def _refresh(self):
        """Redraw board, status and statistics."""
        view = self.session.view()

        winning = set(view.status.line or ())
        for index, cell in enumerate(self.board_cells):
            symbol = view.board[index]
            if symbol is None:
                cell.configure(text="", bg='#16213e')
            else:
                bg = '#854d0e' if index in winning else '#16213e'
                cell.configure(text=symbol.value, fg=SYMBOL_COLORS[symbol], bg=bg)

        if view.phase == GamePhase.SETUP:
            self.status_label.configure(text="Choose options and press Start")
            self.turn_label.configure(text="Turn: -")
        elif view.phase == GamePhase.FINISHED:
            self.status_label.configure(text=self._result_text(self.session.last_result))
            self.turn_label.configure(text="Game Over")
        else:
            self.status_label.configure(text="Game in progress")
            if view.is_ai_computing:
                self.turn_label.configure(text="AI is thinking...")
            elif view.mode == GameMode.AI:
                self.turn_label.configure(text=f"Your turn ({view.active_symbol.value})")
            else:
                self.turn_label.configure(text=f"Turn: {view.active_symbol.value}")

        stats = self.store.statistics
        self.stats_label.configure(text=(
            f"Points: {self.store.points}\n"
            f"Games: {stats.total_games}   Win rate: {stats.win_rate}%\n"
            f"Wins: {stats.wins}   Losses: {stats.losses}   Draws: {stats.draws}\n"
            f"Streak: {stats.current_streak}   Best: {stats.best_streak}"
        ))

        challenge = self.store.daily_challenge
        if challenge is not None:
            done = " ✓" if challenge.completed else ""
            self.challenge_label.configure(
                text=f"📅 {challenge.describe()} ({challenge.progress}/{challenge.target}) "
                     f"+{challenge.reward} pts{done}"
            )

    def _result_text(self, result: Optional[GameResult]) -> str:
        if result is None:
            return ""
        if result.is_draw:
            return "🤝 It's a DRAW!"
        if result.mode == GameMode.LOCAL:
            return f"🏆 {result.winner.value} WINS!"
        return "🏆 You WIN!" if result.outcome == "win" else "🤖 AI WINS!"

    def _quit(self):
        """Quit the application."""
        print("Quitting...")
        if self.store_path:
            self.store.save(self.store_path)
        self.root.quit()
        self.root.destroy()

    def run(self):
        """Run the UI main loop."""
        self._refresh()
        self.root.mainloop()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="TicTacToe UI")
    parser.add_argument(
        "--stats",
        default=ProgressConfig.DEFAULT_STORE_PATH,
        help="Where to keep statistics and achievements"
    )

    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(message)s', datefmt='%H:%M:%S')

    print("\n" + "="*60)
    print("   TicTacToe UI")
    print("="*60 + "\n")

    ui = TicTacToeUI(store_path=args.stats)
    ui.run()


if __name__ == "__main__":
    main()
