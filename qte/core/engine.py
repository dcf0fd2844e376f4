from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

import numpy as np

from qte.core.config import RoundConfig
from qte.core.lifecycle import TargetLifecycle
from qte.core.round_timer import RoundTimer
from qte.core.spawner import SpawnScheduler
from qte.core.targets import Target, TargetPool
from qte.core.timers import Clock, TimerHandle, TimerQueue

logger = logging.getLogger(__name__)

MISS_FLASH_MS = 140


class RoundStatus(Enum):
    READY = "READY"
    PLAYING = "PLAYING"
    FAILED = "FAILED"
    COMPLETE = "COMPLETE"


@dataclass(frozen=True)
class LiveTarget:
    id: str
    position: Tuple[float, float]
    size: int
    lifetime_ms: int
    created_ms: float
    hit: bool


@dataclass(frozen=True)
class RoundSnapshot:
    status: RoundStatus
    score: int
    lives: int
    max_lives: int
    time_left_ms: float
    is_infinite_lives: bool
    is_infinite_duration: bool
    difficulty: str
    miss_flash: bool
    live_targets: Tuple[LiveTarget, ...]

    @property
    def time_label(self) -> str:
        if self.is_infinite_duration or math.isinf(self.time_left_ms):
            return "INF"
        return f"{math.ceil(max(0.0, self.time_left_ms) / 1000)}s"


@dataclass
class RoundState:
    status: RoundStatus = RoundStatus.READY
    lives: int = 0
    score: int = 0
    time_left_ms: float = 0.0
    miss_flash: bool = False


class RoundEngine:
    """
    Owns one session's round: status, lives, score and remaining time. Input
    commands and timer callbacks are the only things that mutate it, and all
    of them run on the caller's thread through the shared TimerQueue.

    The game loop calls update() every frame; every public command also
    flushes due timers first, so a tap never overtakes an expiry that has
    already happened.
    """

    def __init__(self, config: Optional[RoundConfig] = None,
                 field_size: Tuple[float, float] = (800, 600),
                 clock: Optional[Clock] = None,
                 rng: Optional[np.random.Generator] = None):
        self.config = config or RoundConfig()
        # captured at round start; mid-round config edits wait for the next one
        self.round_config = self.config
        self.field_size = field_size
        self.rng = rng if rng is not None else np.random.default_rng()

        self.timers = TimerQueue(clock)
        self.pool = TargetPool()
        self.lifecycle = TargetLifecycle(self.timers, self.pool, self._on_target_expired)
        self.round_timer = RoundTimer(self.timers, self._on_time_tick, self._attempt_complete)
        self.spawner: Optional[SpawnScheduler] = None

        self.state = RoundState()
        self._flash_handle: Optional[TimerHandle] = None
        self._listeners: List[Callable[[RoundSnapshot], Any]] = []
        self._seed_idle_values()

    # ------------- observation -------------
    @property
    def status(self) -> RoundStatus:
        return self.state.status

    def subscribe(self, listener: Callable[[RoundSnapshot], Any]) -> Callable[[], None]:
        """Call listener with a fresh snapshot after every mutation; returns an unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def snapshot(self) -> RoundSnapshot:
        # a live round shows the rules it started with; otherwise the current settings
        cfg = self.round_config if self.state.status == RoundStatus.PLAYING else self.config
        return RoundSnapshot(
            status=self.state.status,
            score=self.state.score,
            lives=self.state.lives,
            max_lives=cfg.max_lives,
            time_left_ms=self.state.time_left_ms,
            is_infinite_lives=cfg.infinite_lives,
            is_infinite_duration=cfg.infinite_duration,
            difficulty=cfg.difficulty,
            miss_flash=self.state.miss_flash,
            live_targets=tuple(
                LiveTarget(t.id, (t.x, t.y), t.size, t.lifetime_ms, t.created_ms, t.hit)
                for t in self.pool
            ),
        )

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)

    # ------------- loop -------------
    def update(self) -> None:
        self.timers.run_due()

    def set_field_size(self, width: float, height: float) -> None:
        self.field_size = (max(0.0, float(width)), max(0.0, float(height)))

    # ------------- lifecycle commands -------------
    def start(self) -> None:
        self.update()
        if self.state.status == RoundStatus.PLAYING:
            logger.debug("start ignored: round already playing")
            return
        self._begin_round()

    def restart(self) -> None:
        self.update()
        self._begin_round()

    def reset(self) -> None:
        self.update()
        self._halt_round()
        self.timers.cancel_all()
        self.state.status = RoundStatus.READY
        self.state.score = 0
        self.state.miss_flash = False
        self.round_config = self.config
        self._seed_idle_values()
        logger.info("round reset")
        self._notify()

    # ------------- configuration -------------
    def set_difficulty(self, name: Any) -> None:
        self._apply_config(self.config.with_difficulty(name))

    def set_max_lives(self, value: Any) -> None:
        self._apply_config(self.config.with_max_lives(value))

    def adjust_max_lives(self, delta: int) -> None:
        if self.config.infinite_lives:
            return
        self._apply_config(self.config.with_max_lives(self.config.max_lives + delta))

    def set_infinite_lives(self, flag: bool) -> None:
        self._apply_config(self.config.with_infinite_lives(flag))

    def set_duration_sec(self, value: Any) -> None:
        self._apply_config(self.config.with_duration_sec(value))

    def set_infinite_duration(self, flag: bool) -> None:
        self._apply_config(self.config.with_infinite_duration(flag))

    def _apply_config(self, config: RoundConfig) -> None:
        self.update()
        self.config = config
        if self.state.status == RoundStatus.READY:
            self.round_config = config
            self._seed_idle_values()
        elif self.state.status != RoundStatus.PLAYING:
            # a finished round keeps its final lives but shows the new duration
            self.state.time_left_ms = config.duration_ms
        self._notify()

    def _seed_idle_values(self) -> None:
        self.state.lives = self.config.starting_lives
        self.state.time_left_ms = self.config.duration_ms

    # ------------- input -------------
    def tap(self, x: float, y: float) -> Optional[str]:
        """Pointer down at field coords; returns the id of the target hit, if any."""
        self.update()
        if self.state.status != RoundStatus.PLAYING:
            return None
        target = self.pool.hit_test(x, y)
        if target is None:
            self.tap_background()
            return None
        self.tap_target(target.id)
        return target.id

    def tap_target(self, target_id: str) -> None:
        self.update()
        if self.state.status != RoundStatus.PLAYING:
            return
        target = self.pool.get(target_id)
        if target is None or target.hit:
            return
        target.hit = True
        self.state.score += 1
        self.lifecycle.settle(target_id)
        self._notify()

    def tap_background(self) -> None:
        self.update()
        if self.state.status != RoundStatus.PLAYING:
            return
        self._miss()
        self._notify()

    # ------------- internals -------------
    def _begin_round(self) -> None:
        self._halt_round()
        self.timers.cancel_all()

        self.round_config = self.config
        cfg = self.round_config
        self.state.lives = cfg.starting_lives
        self.state.score = 0
        self.state.miss_flash = False
        self.state.time_left_ms = cfg.duration_ms
        self.state.status = RoundStatus.PLAYING
        logger.info("round start: difficulty=%s lives=%s duration=%s",
                    cfg.difficulty,
                    "INF" if cfg.infinite_lives else cfg.max_lives,
                    "INF" if cfg.infinite_duration else f"{cfg.duration_sec}s")

        self.spawner = SpawnScheduler(self.timers, cfg.preset, lambda: self.field_size,
                                      self.rng, self._admit_target)
        self.round_timer.start(None if cfg.infinite_duration else cfg.duration_sec)
        self.spawner.start()
        self._notify()

    def _halt_round(self) -> None:
        if self.spawner is not None:
            self.spawner.stop()
        self.round_timer.stop()
        self.lifecycle.disarm_all()
        self.pool.clear()

    def _admit_target(self, target: Target) -> None:
        if self.state.status != RoundStatus.PLAYING:
            return
        self.pool.add(target)
        self.lifecycle.arm(target)
        self._notify()

    def _on_target_expired(self, target_id: str, was_hit: bool) -> None:
        if self.state.status != RoundStatus.PLAYING:
            return
        self.lifecycle.remove(target_id)
        if not was_hit:
            self._miss()
        self._notify()

    def _on_time_tick(self, remaining_ms: float) -> None:
        if self.state.status != RoundStatus.PLAYING:
            return
        self.state.time_left_ms = remaining_ms
        self._notify()

    def _miss(self) -> None:
        if self.round_config.infinite_lives:
            self._flash_miss()
            return
        if self.state.lives <= 0:
            return
        self.state.lives -= 1
        self._flash_miss()
        logger.debug("miss: %d lives left", self.state.lives)
        if self.state.lives == 0:
            self._fail()

    def _flash_miss(self) -> None:
        self.state.miss_flash = True
        self.timers.cancel(self._flash_handle)
        self._flash_handle = self.timers.call_later(MISS_FLASH_MS, self._clear_flash)

    def _clear_flash(self) -> None:
        self._flash_handle = None
        self.state.miss_flash = False
        self._notify()

    def _fail(self) -> None:
        self.state.status = RoundStatus.FAILED
        self._halt_round()
        logger.info("round failed: score=%d", self.state.score)

    def _attempt_complete(self) -> None:
        # both the tick and the backstop land here; only the first one counts
        if self.state.status != RoundStatus.PLAYING:
            return
        self.state.time_left_ms = 0
        self.state.status = RoundStatus.COMPLETE
        self._halt_round()
        logger.info("round complete: score=%d lives=%d", self.state.score, self.state.lives)
        self._notify()
