from __future__ import annotations
import pygame
from typing import List, Tuple

from qte.api.config import EngineConfig
from qte.api.frame_data import Point


class PointerInput:
    """
    Turns pointer-down events into taps:
    - Left mouse button and touch fingers each produce one tap per press.
    - Positions are converted to logical coords (respects --mirror).
    - Taps queue up between frames and are drained once per frame.
    """

    def __init__(self, cfg: EngineConfig):
        self.mirror = cfg.mirror
        self._taps: List[Point] = []

    def _to_logical(self, x: float, y: float, w: int, h: int) -> Tuple[float, float]:
        if self.mirror:
            x = (w - 1) - x
        return float(x), float(y)

    def handle_pygame_event(self, event: pygame.event.Event, screen_size: Tuple[int, int]) -> None:
        w, h = screen_size

        if event.type == pygame.MOUSEBUTTONDOWN:
            if event.button != 1:
                return
            # SDL mirrors touches as mouse events too; keep only one of them
            if getattr(event, "touch", False):
                return
            self._taps.append(Point(*self._to_logical(*event.pos, w, h)))

        elif event.type == pygame.FINGERDOWN:
            # finger coords are normalized 0..1
            self._taps.append(Point(*self._to_logical(event.x * w, event.y * h, w, h)))

        elif event.type == pygame.WINDOWFOCUSLOST:
            self._taps.clear()

    def emit_taps(self) -> List[Point]:
        """Return and clear the taps collected since the last call."""
        taps, self._taps = self._taps, []
        return taps
