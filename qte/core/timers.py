from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import pygame

Clock = Callable[[], int]


@dataclass(order=True)
class TimerHandle:
    deadline: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    interval: Optional[int] = field(default=None, compare=False)
    cancelled: bool = field(default=False, compare=False)

    @property
    def active(self) -> bool:
        return not self.cancelled


class TimerQueue:
    """
    Single-threaded scheduler for one-shot and repeating callbacks.

    Nothing fires on its own: the owner calls run_due() (once per frame in
    the game loop). Due callbacks fire in deadline order, and while a
    callback runs time() reports that callback's deadline, so a large clock
    jump plays out exactly like the same span arriving frame by frame.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self._clock: Clock = clock or pygame.time.get_ticks
        self._heap: List[TimerHandle] = []
        self._seq = itertools.count()
        self._now: float = self._clock()
        self._dispatching = False

    def time(self) -> float:
        if not self._dispatching:
            self._now = max(self._now, self._clock())
        return self._now

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(self.time() + max(0, delay_ms),
                             next(self._seq), callback)
        heapq.heappush(self._heap, handle)
        return handle

    def call_every(self, interval_ms: int, callback: Callable[[], None]) -> TimerHandle:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        handle = TimerHandle(self.time() + interval_ms,
                             next(self._seq), callback, interval=interval_ms)
        heapq.heappush(self._heap, handle)
        return handle

    def cancel(self, handle: Optional[TimerHandle]) -> None:
        # lazy removal; run_due drops cancelled entries
        if handle is not None:
            handle.cancelled = True

    def cancel_all(self) -> None:
        for handle in self._heap:
            handle.cancelled = True
        self._heap.clear()

    def pending(self) -> int:
        return sum(1 for h in self._heap if not h.cancelled)

    def run_due(self) -> int:
        """Fire everything due at the current clock time; returns the count fired."""
        if self._dispatching:
            return 0
        now = max(self._now, self._clock())
        fired = 0
        self._dispatching = True
        try:
            while self._heap and self._heap[0].deadline <= now:
                handle = heapq.heappop(self._heap)
                if handle.cancelled:
                    continue
                self._now = max(self._now, handle.deadline)
                if handle.interval is not None:
                    handle.deadline += handle.interval
                    handle.seq = next(self._seq)
                    heapq.heappush(self._heap, handle)
                else:
                    handle.cancelled = True
                handle.callback()
                fired += 1
        finally:
            self._dispatching = False
            self._now = now
        return fired
