from __future__ import annotations

from typing import Callable, Dict

from qte.core.targets import Target, TargetPool
from qte.core.timers import TimerHandle, TimerQueue

HIT_SETTLE_MS = 60   # a hit target lingers briefly before removal (cosmetic)


class TargetLifecycle:
    """
    Per-target timers: one expiry at lifetime_ms after creation, plus the short
    settle delay before a hit target leaves the pool. Removing a target always
    cancels both, so nothing ever fires for a target that is gone.
    """

    def __init__(self, timers: TimerQueue, pool: TargetPool,
                 on_expire: Callable[[str, bool], None]):
        self.timers = timers
        self.pool = pool
        self.on_expire = on_expire
        self._expiry: Dict[str, TimerHandle] = {}
        self._settle: Dict[str, TimerHandle] = {}

    def arm(self, target: Target) -> None:
        self.disarm(target.id)
        delay = max(0.0, target.expires_at_ms - self.timers.time())
        self._expiry[target.id] = self.timers.call_later(
            delay, lambda: self._fire(target.id))

    def settle(self, target_id: str) -> None:
        if target_id in self._settle:
            return
        self._settle[target_id] = self.timers.call_later(
            HIT_SETTLE_MS, lambda: self.remove(target_id))

    def remove(self, target_id: str) -> None:
        self.disarm(target_id)
        self.pool.remove(target_id)

    def disarm(self, target_id: str) -> None:
        self.timers.cancel(self._expiry.pop(target_id, None))
        self.timers.cancel(self._settle.pop(target_id, None))

    def disarm_all(self) -> None:
        for handle in list(self._expiry.values()) + list(self._settle.values()):
            self.timers.cancel(handle)
        self._expiry.clear()
        self._settle.clear()

    def armed(self) -> int:
        return len(self._expiry)

    def _fire(self, target_id: str) -> None:
        self._expiry.pop(target_id, None)
        target = self.pool.get(target_id)
        if target is None:
            return
        # hit flag read at fire time; the engine decides whether it's a miss
        self.on_expire(target_id, target.hit)
