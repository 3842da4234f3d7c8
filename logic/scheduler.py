"""
Deferred work for the game session.

The session schedules the AI's turn with after(delay_ms, callback) and
cancels it with after_cancel(handle), the same calls a tkinter root
offers. A Tk root can therefore drive a session directly; anything else
(console front end, tests) uses ManualScheduler.
"""

import itertools
from typing import Callable, Dict, List, Tuple


class ManualScheduler:
    """
    Holds deferred callbacks until the owner runs them.

    Callbacks run on the caller's thread, one at a time and in the order
    they were scheduled. The delay is only recorded; the owner decides
    when to wait (see max_delay_ms).
    """

    def __init__(self):
        self._ids = itertools.count(1)
        self._pending: Dict[str, Tuple[int, Callable, tuple]] = {}

    def after(self, delay_ms: int, callback: Callable, *args) -> str:
        """Schedule callback(*args). Returns a handle for after_cancel."""
        handle = f"after#{next(self._ids)}"
        self._pending[handle] = (delay_ms, callback, args)
        return handle

    def after_cancel(self, handle: str) -> None:
        """Drop a scheduled callback. Unknown or finished handles are ignored."""
        self._pending.pop(handle, None)

    def pending(self) -> int:
        return len(self._pending)

    def max_delay_ms(self) -> int:
        """Longest delay among pending callbacks (0 if none)."""
        return max((delay for delay, _, _ in self._pending.values()), default=0)

    def run_pending(self) -> int:
        """
        Run the callbacks pending right now.

        Callbacks scheduled while running wait for the next call.

        Returns:
            How many callbacks ran.
        """
        batch: List[Tuple[str, Callable, tuple]] = [
            (handle, callback, args)
            for handle, (_, callback, args) in self._pending.items()
        ]
        ran = 0
        for handle, callback, args in batch:
            # An earlier callback in the batch may have cancelled this one
            if self._pending.pop(handle, None) is None:
                continue
            callback(*args)
            ran += 1
        return ran

    def run_all(self, limit: int = 100) -> int:
        """Run pending callbacks until none remain (at most `limit` rounds)."""
        total = 0
        for _ in range(limit):
            ran = self.run_pending()
            if ran == 0:
                break
            total += ran
        return total
