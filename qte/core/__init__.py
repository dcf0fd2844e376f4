from .config import DIFFICULTY_PRESETS, DifficultyPreset, RoundConfig, resolve_difficulty
from .engine import LiveTarget, RoundEngine, RoundSnapshot, RoundStatus
from .targets import Target, TargetPool
from .timers import TimerQueue

__all__ = [
    "DIFFICULTY_PRESETS",
    "DifficultyPreset",
    "RoundConfig",
    "resolve_difficulty",
    "LiveTarget",
    "RoundEngine",
    "RoundSnapshot",
    "RoundStatus",
    "Target",
    "TargetPool",
    "TimerQueue",
]
