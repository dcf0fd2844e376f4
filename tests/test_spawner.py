from __future__ import annotations

from qte.core.config import DIFFICULTY_PRESETS
from qte.core.spawner import SpawnScheduler
from qte.core.targets import FIELD_PADDING
from qte.core.timers import TimerQueue


def make_scheduler(clock, rng, difficulty="Medium", field=(800, 600)):
    timers = TimerQueue(clock)
    spawned = []
    scheduler = SpawnScheduler(timers, DIFFICULTY_PRESETS[difficulty],
                               lambda: field, rng, spawned.append)
    return timers, scheduler, spawned


def test_start_spawns_now_then_fast_second_beat_then_cadence(clock, rng):
    timers, scheduler, spawned = make_scheduler(clock, rng)
    scheduler.start()
    assert [t.created_ms for t in spawned] == [0]

    clock.advance(2000)
    timers.run_due()
    # Medium: second beat at round(660 * 0.45) = 297, then every 660
    assert [t.created_ms for t in spawned] == [0, 297, 660, 1320, 1980]


def test_spawned_targets_carry_preset_lifetime_and_fit_field(clock, rng):
    timers, scheduler, spawned = make_scheduler(clock, rng, difficulty="Agony", field=(400, 300))
    scheduler.start()
    clock.advance(4000)
    timers.run_due()

    assert len(spawned) > 5
    for t in spawned:
        assert t.lifetime_ms == DIFFICULTY_PRESETS["Agony"].lifetime_ms
        assert 56 <= t.size <= 110
        assert FIELD_PADDING <= t.x <= 400 - FIELD_PADDING - t.size
        assert FIELD_PADDING <= t.y <= 300 - FIELD_PADDING - t.size
        assert t.hit is False
    assert len({t.id for t in spawned}) == len(spawned)


def test_stop_cancels_everything_and_is_idempotent(clock, rng):
    timers, scheduler, spawned = make_scheduler(clock, rng)
    scheduler.stop()  # nothing scheduled yet
    scheduler.start()
    assert scheduler.running

    scheduler.stop()
    scheduler.stop()
    assert not scheduler.running
    assert timers.pending() == 0

    clock.advance(5000)
    timers.run_due()
    assert len(spawned) == 1


def test_restart_does_not_double_schedule(clock, rng):
    timers, scheduler, spawned = make_scheduler(clock, rng)
    scheduler.start()
    scheduler.start()
    assert timers.pending() == 2
