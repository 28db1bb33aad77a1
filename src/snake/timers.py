# timers.py
"""
Cooperative timer scheduler.

Nothing runs on its own: the embedding loop moves time forward with
``advance``/``advance_to`` (the pygame loop feeds it ``get_ticks()``, tests feed
it simulated milliseconds) and due callbacks fire synchronously, one at a time,
in due-time order.
"""
from dataclasses import dataclass
import itertools
from typing import Callable, Dict, Optional

Callback = Callable[[], None]


@dataclass
class _Timer:
    handle: int
    due: float
    period: Optional[float]   # None for one-shot timeouts
    callback: Callback


class Scheduler:
    def __init__(self, now_ms: float = 0, catch_up: bool = True):
        """
        With ``catch_up`` off, an interval that fell more than a period behind
        fires once and then resumes one period after the current time, the way
        a browser setInterval behaves after a stall.
        """
        self._now = now_ms
        self.catch_up = catch_up
        self._timers: Dict[int, _Timer] = {}
        self._ids = itertools.count(1)

    @property
    def now(self) -> float:
        return self._now

    # ---------- Arming / cancelling ----------
    def set_interval(self, callback: Callback, period_ms: float) -> int:
        if period_ms <= 0:
            raise ValueError(f"interval must be positive, got {period_ms}")
        return self._add(callback, period_ms, period_ms)

    def set_timeout(self, callback: Callback, delay_ms: float) -> int:
        if delay_ms <= 0:
            raise ValueError(f"timeout must be positive, got {delay_ms}")
        return self._add(callback, delay_ms, None)

    def clear(self, handle: Optional[int]) -> None:
        if handle is not None:
            self._timers.pop(handle, None)

    def remaining(self, handle: Optional[int]) -> Optional[float]:
        """Milliseconds until ``handle`` fires next, or None if it is not active."""
        timer = self._timers.get(handle) if handle is not None else None
        if timer is None:
            return None
        return timer.due - self._now

    def pending(self) -> int:
        return len(self._timers)

    def intervals(self) -> int:
        return sum(1 for t in self._timers.values() if t.period is not None)

    def _add(self, callback: Callback, delay: float, period: Optional[float]) -> int:
        handle = next(self._ids)
        self._timers[handle] = _Timer(handle, self._now + delay, period, callback)
        return handle

    # ---------- Driving time ----------
    def advance(self, delta_ms: float) -> int:
        return self.advance_to(self._now + delta_ms)

    def advance_to(self, now_ms: float) -> int:
        """
        Fire every callback due at or before ``now_ms``. Returns how many fired.
        Callbacks may arm or clear timers; a cleared timer never fires again,
        even later in the same call.
        """
        fired = 0
        while True:
            timer = self._next_due(now_ms)
            if timer is None:
                break
            self._now = max(self._now, timer.due)
            if timer.period is None:
                del self._timers[timer.handle]
            else:
                timer.due += timer.period
                if not self.catch_up and timer.due <= now_ms:
                    timer.due = now_ms + timer.period
            timer.callback()
            fired += 1
        self._now = max(self._now, now_ms)
        return fired

    def _next_due(self, limit: float) -> Optional[_Timer]:
        best: Optional[_Timer] = None
        for timer in self._timers.values():
            if timer.due > limit:
                continue
            if best is None or (timer.due, timer.handle) < (best.due, best.handle):
                best = timer
        return best
