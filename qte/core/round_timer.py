from __future__ import annotations

import math
from typing import Callable, Optional

from qte.core.timers import TimerHandle, TimerQueue

TICK_MS = 100


class RoundTimer:
    """
    Round countdown. Two schedules feed the same end-of-round call: a 100 ms
    tick that recomputes the remaining time, and a one-shot backstop at the
    deadline in case the ticks never land exactly on zero. The receiver of
    on_expire must tolerate being called more than once.
    """

    def __init__(self, timers: TimerQueue,
                 on_tick: Callable[[float], None],
                 on_expire: Callable[[], None]):
        self.timers = timers
        self.on_tick = on_tick
        self.on_expire = on_expire
        self.end_at: Optional[float] = None
        self._interval: Optional[TimerHandle] = None
        self._backstop: Optional[TimerHandle] = None

    @property
    def running(self) -> bool:
        return any(h is not None and h.active
                   for h in (self._interval, self._backstop))

    def start(self, duration_sec: Optional[int]) -> None:
        """duration_sec=None means an infinite round."""
        self.stop()
        if duration_sec is None:
            self.end_at = None
            self.on_tick(math.inf)
            return

        duration_ms = duration_sec * 1000
        self.end_at = self.timers.time() + duration_ms
        self.on_tick(duration_ms)
        self._interval = self.timers.call_every(TICK_MS, self._tick)
        self._backstop = self.timers.call_later(duration_ms, self._finish)

    def stop(self) -> None:
        self.timers.cancel(self._interval)
        self.timers.cancel(self._backstop)
        self._interval = None
        self._backstop = None

    def remaining_ms(self) -> float:
        if self.end_at is None:
            return math.inf
        return max(0.0, self.end_at - self.timers.time())

    def _tick(self) -> None:
        remaining = self.remaining_ms()
        if remaining <= 0:
            self._finish()
            return
        self.on_tick(remaining)

    def _finish(self) -> None:
        self.stop()
        self.on_tick(0)
        self.on_expire()
