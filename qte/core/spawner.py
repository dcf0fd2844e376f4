from __future__ import annotations

import logging
from typing import Callable, List, Tuple

import numpy as np

from qte.core.config import DifficultyPreset
from qte.core.targets import Target, find_spot_anywhere, new_target_id, random_size
from qte.core.timers import TimerHandle, TimerQueue

logger = logging.getLogger(__name__)

SECOND_BEAT_FACTOR = 0.45   # second spawn lands early so the opening isn't empty


class SpawnScheduler:
    """
    Creates targets at the preset's cadence: one immediately, one after
    round(spawn_every_ms * 0.45), then one every spawn_every_ms until stopped.
    """

    def __init__(self, timers: TimerQueue, preset: DifficultyPreset,
                 field_size: Callable[[], Tuple[float, float]],
                 rng: np.random.Generator,
                 on_spawn: Callable[[Target], None]):
        self.timers = timers
        self.preset = preset
        self.field_size = field_size
        self.rng = rng
        self.on_spawn = on_spawn
        self._handles: List[TimerHandle] = []

    @property
    def running(self) -> bool:
        return any(h.active for h in self._handles)

    def start(self) -> None:
        self.stop()
        self.spawn_one()
        second_beat = round(self.preset.spawn_every_ms * SECOND_BEAT_FACTOR)
        self._handles.append(self.timers.call_later(second_beat, self.spawn_one))
        self._handles.append(self.timers.call_every(
            self.preset.spawn_every_ms, self.spawn_one))

    def stop(self) -> None:
        for handle in self._handles:
            self.timers.cancel(handle)
        self._handles.clear()

    def spawn_one(self) -> Target:
        w, h = self.field_size()
        size = random_size(self.rng)
        x, y = find_spot_anywhere(w, h, size, self.rng)
        target = Target(
            id=new_target_id(),
            x=x,
            y=y,
            size=size,
            lifetime_ms=self.preset.lifetime_ms,
            created_ms=self.timers.time(),
        )
        logger.debug("spawn %s at (%.0f, %.0f) size=%d", target.id, x, y, size)
        self.on_spawn(target)
        return target
