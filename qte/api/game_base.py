from __future__ import annotations

from typing import TYPE_CHECKING

import pygame

from .frame_data import FrameData

if TYPE_CHECKING:
    from qte.app.context import Context


class Game:
    """
    A tap-driven game plugin. `games/<id>/main.py` exposes `get_game()`
    returning one of these.

    The platform owns the window: it quits on Esc or window close, turns
    mouse clicks and finger touches into taps, and mirrors the output when
    asked. A game only sees those taps, already in logical screen coords,
    plus whatever raw events it wants for its own controls.
    """

    def on_load(self, ctx: Context, manifest: dict) -> None:
        """
        Called once before the first frame. `manifest["options"]` already
        has the launcher's overrides merged in.
        """
        ...

    def on_update(self, dt_ms: float, frame: FrameData) -> None:
        """Advance by dt_ms and consume frame.taps; each tap is delivered exactly once."""
        ...

    def on_draw(self, surface: pygame.Surface) -> None:
        ...

    def on_event(self, event: pygame.event.Event) -> None:
        """
        Every pygame event, after the platform has seen it. Use it for
        keyboard settings (start, reset, round rules) and VIDEORESIZE;
        taps should come from on_update, not from mouse events here.
        """
        ...

    def on_unload(self) -> None:
        ...
