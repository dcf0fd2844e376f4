from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np

MIN_SIZE = 56          # px, smallest target diameter
MAX_SIZE = 110         # px, largest target diameter
FIELD_PADDING = 10     # px kept clear on every edge of the field


def new_target_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Target:
    id: str
    x: float            # top-left of the bounding box, field coords
    y: float
    size: int           # diameter
    lifetime_ms: int
    created_ms: float = 0.0
    hit: bool = False

    @property
    def center(self) -> Tuple[float, float]:
        r = self.size / 2.0
        return self.x + r, self.y + r

    @property
    def expires_at_ms(self) -> float:
        return self.created_ms + self.lifetime_ms


def find_spot_anywhere(width: float, height: float, size: int,
                       rng: np.random.Generator,
                       pad: int = FIELD_PADDING) -> Tuple[float, float]:
    """
    Uniform point for a target's top-left corner so the whole box stays inside
    the padded field. A field too small for the target pins that axis to `pad`.
    """
    x = rng.uniform(pad, max(pad, width - pad - size))
    y = rng.uniform(pad, max(pad, height - pad - size))
    return float(x), float(y)


def random_size(rng: np.random.Generator) -> int:
    return int(rng.integers(MIN_SIZE, MAX_SIZE, endpoint=True))


@dataclass
class TargetPool:
    """Live targets keyed by id, kept in spawn order (last = drawn on top)."""

    _targets: Dict[str, Target] = field(default_factory=dict)

    def add(self, target: Target) -> None:
        self._targets[target.id] = target

    def get(self, target_id: str) -> Optional[Target]:
        return self._targets.get(target_id)

    def remove(self, target_id: str) -> Optional[Target]:
        return self._targets.pop(target_id, None)

    def clear(self) -> None:
        self._targets.clear()

    def __contains__(self, target_id: object) -> bool:
        return target_id in self._targets

    def __len__(self) -> int:
        return len(self._targets)

    def __iter__(self) -> Iterator[Target]:
        return iter(list(self._targets.values()))

    def hit_test(self, x: float, y: float) -> Optional[Target]:
        """Topmost target whose circle contains (x, y), or None."""
        targets: List[Target] = list(self._targets.values())
        if not targets:
            return None

        geo = np.array([(t.x, t.y, t.size) for t in targets], dtype=np.float64)
        r = geo[:, 2] / 2.0
        dx = x - (geo[:, 0] + r)
        dy = y - (geo[:, 1] + r)
        inside = np.flatnonzero(dx * dx + dy * dy <= r * r)
        if inside.size == 0:
            return None
        return targets[int(inside[-1])]
