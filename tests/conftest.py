from __future__ import annotations

import os
import sys
from pathlib import Path

import numpy as np
import pytest

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "hide")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from qte.core.config import RoundConfig  # noqa: E402
from qte.core.engine import RoundEngine  # noqa: E402


class FakeClock:
    """Millisecond clock the tests move by hand."""

    def __init__(self, start: int = 0) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def make_engine(clock, rng):
    def _make(**config) -> RoundEngine:
        return RoundEngine(
            config=RoundConfig(**config),
            field_size=(800, 600),
            clock=clock,
            rng=rng,
        )
    return _make
