from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DifficultyPreset:
    lifetime_ms: int       # how long a target stays tappable
    spawn_every_ms: int    # cadence of the repeating spawn


# Ordered easiest -> hardest; both values strictly decrease.
DIFFICULTY_PRESETS: Dict[str, DifficultyPreset] = {
    "Easy": DifficultyPreset(lifetime_ms=1200, spawn_every_ms=720),
    "Medium": DifficultyPreset(lifetime_ms=1000, spawn_every_ms=660),
    "Hard": DifficultyPreset(lifetime_ms=900, spawn_every_ms=600),
    "Extreme": DifficultyPreset(lifetime_ms=750, spawn_every_ms=500),
    "Agony": DifficultyPreset(lifetime_ms=600, spawn_every_ms=400),
}
DEFAULT_DIFFICULTY = "Medium"

DEFAULT_LIVES = 3
MIN_LIVES = 1

MIN_DURATION_SEC = 5
MAX_DURATION_SEC = 30
DEFAULT_DURATION_SEC = 10


def clamp(n, a, b):
    return max(a, min(b, n))


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


def resolve_difficulty_name(name: Any) -> str:
    """Return a known preset name, falling back to Medium for anything else."""
    if isinstance(name, str):
        if name in DIFFICULTY_PRESETS:
            return name
        # be lenient about case coming from yaml / CLI
        for key in DIFFICULTY_PRESETS:
            if key.lower() == name.strip().lower():
                return key
    logger.debug("unknown difficulty %r, using %s", name, DEFAULT_DIFFICULTY)
    return DEFAULT_DIFFICULTY


def resolve_difficulty(name: Any) -> DifficultyPreset:
    return DIFFICULTY_PRESETS[resolve_difficulty_name(name)]


def clamp_lives(value: Any) -> int:
    n = _to_int(value)
    if n is None or n < MIN_LIVES:
        return MIN_LIVES
    return n


def clamp_duration(value: Any) -> int:
    n = _to_int(value)
    if n is None:
        return DEFAULT_DURATION_SEC
    return clamp(n, MIN_DURATION_SEC, MAX_DURATION_SEC)


@dataclass(frozen=True)
class RoundConfig:
    """
    User-tunable rules for a round. Immutable: the engine captures one at
    round start and mutators produce a new instance.
    """

    difficulty: str = DEFAULT_DIFFICULTY
    max_lives: int = DEFAULT_LIVES
    infinite_lives: bool = False
    duration_sec: int = DEFAULT_DURATION_SEC
    infinite_duration: bool = False

    @property
    def preset(self) -> DifficultyPreset:
        return resolve_difficulty(self.difficulty)

    @property
    def starting_lives(self) -> int:
        # pinned to 1 when infinite so displays never special-case it
        return 1 if self.infinite_lives else self.max_lives

    @property
    def duration_ms(self) -> float:
        if self.infinite_duration:
            return float("inf")
        return self.duration_sec * 1000

    def with_difficulty(self, name: Any) -> "RoundConfig":
        return replace(self, difficulty=resolve_difficulty_name(name))

    def with_max_lives(self, value: Any) -> "RoundConfig":
        return replace(self, max_lives=clamp_lives(value))

    def with_infinite_lives(self, flag: bool) -> "RoundConfig":
        return replace(self, infinite_lives=bool(flag))

    def with_duration_sec(self, value: Any) -> "RoundConfig":
        return replace(self, duration_sec=clamp_duration(value))

    def with_infinite_duration(self, flag: bool) -> "RoundConfig":
        return replace(self, infinite_duration=bool(flag))

    @classmethod
    def from_options(cls, options: Optional[Dict[str, Any]]) -> "RoundConfig":
        """
        Build from a manifest ``options`` mapping, e.g.

            options:
              difficulty: Hard
              max_lives: 5
              infinite_lives: false
              duration_sec: 20
              infinite_duration: false

        Missing keys keep their defaults; bad values are clamped.
        """
        options = options or {}
        return cls(
            difficulty=resolve_difficulty_name(
                options.get("difficulty", DEFAULT_DIFFICULTY)),
            max_lives=clamp_lives(options.get("max_lives", DEFAULT_LIVES)),
            infinite_lives=bool(options.get("infinite_lives", False)),
            duration_sec=clamp_duration(
                options.get("duration_sec", DEFAULT_DURATION_SEC)),
            infinite_duration=bool(options.get("infinite_duration", False)),
        )
