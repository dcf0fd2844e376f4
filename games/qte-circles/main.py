from __future__ import annotations
from typing import List, Tuple, Union

import numpy as np
import pygame

from qte.api import Game, FrameData
from qte.core import RoundConfig, RoundEngine, RoundSnapshot, RoundStatus
from qte.render.shapes import draw_countdown_ring, draw_text, draw_text_centered


# Layout
TOP_BAR_H = 64
BOTTOM_BAR_H = 72
ARENA_MARGIN = 20

# Lives HUD
MAX_PIPS = 7                       # above this, show "lives/max" text instead
PIP_RADIUS = 8
PIP_GAP = 8

# Colors
HUD_COLOR = (230, 230, 230)
DIM_COLOR = (150, 150, 160)
ARENA_BORDER = (90, 95, 110)
MISS_BORDER = (235, 70, 70)
TARGET_COLOR = (90, 170, 255)
TARGET_HIT_COLOR = (255, 210, 60)
RING_COLOR = (235, 235, 235)
PIP_ALIVE = (80, 220, 120)
PIP_DEAD = (70, 70, 80)
OVERLAY_COLOR = (0, 0, 0, 170)

DIFFICULTY_KEYS = {
    pygame.K_1: "Easy",
    pygame.K_2: "Medium",
    pygame.K_3: "Hard",
    pygame.K_4: "Extreme",
    pygame.K_5: "Agony",
}

LivesDisplay = Tuple[str, Union[str, List[bool]]]


def lives_display(snap: RoundSnapshot) -> LivesDisplay:
    """("badge", "INF"), ("text", "2/9") or ("pips", [alive, ...])."""
    if snap.is_infinite_lives:
        return "badge", "INF"
    if snap.max_lives > MAX_PIPS:
        return "text", f"{snap.lives}/{snap.max_lives}"
    return "pips", [i < snap.lives for i in range(snap.max_lives)]


def arena_rect(screen_size: Tuple[int, int]) -> pygame.Rect:
    w, h = screen_size
    return pygame.Rect(ARENA_MARGIN, TOP_BAR_H,
                       max(0, w - ARENA_MARGIN * 2),
                       max(0, h - TOP_BAR_H - BOTTOM_BAR_H))


class QteCircles(Game):
    def on_load(self, ctx, manifest):
        self.ctx = ctx
        self.manifest = manifest
        self.engine = RoundEngine(
            config=RoundConfig.from_options(manifest.get("options")),
            rng=np.random.default_rng(ctx.cfg.seed),
        )
        self._measure_arena(ctx.screen_size)
        self.snap: RoundSnapshot = self.engine.snapshot()
        self.engine.subscribe(self._on_snapshot)

    def _on_snapshot(self, snap: RoundSnapshot) -> None:
        self.snap = snap

    def _measure_arena(self, screen_size: Tuple[int, int]) -> None:
        # spawns read the field size at creation time, so a resize applies to the next target
        self.arena = arena_rect(screen_size)
        self.engine.set_field_size(self.arena.width, self.arena.height)

    # ------------- loop hooks -------------
    def on_update(self, dt_ms: float, frame: FrameData) -> None:
        self.engine.update()
        for p in frame.taps:
            # only taps inside the arena are game input; the bars are chrome
            if not self.arena.collidepoint(int(p.x), int(p.y)):
                continue
            self.engine.tap(p.x - self.arena.x, p.y - self.arena.y)
        self.snap = self.engine.snapshot()

    def on_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.VIDEORESIZE:
            self._measure_arena((event.w, event.h))
            return
        if event.type != pygame.KEYDOWN:
            return
        e = self.engine
        if event.key in (pygame.K_SPACE, pygame.K_RETURN):
            # start() is a no-op mid-round, so this doubles as restart after an overlay
            e.start()
        elif event.key == pygame.K_r:
            e.reset()
        elif event.key in DIFFICULTY_KEYS:
            e.set_difficulty(DIFFICULTY_KEYS[event.key])
        elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            e.adjust_max_lives(1)
        elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            e.adjust_max_lives(-1)
        elif event.key == pygame.K_i:
            e.set_infinite_lives(not e.config.infinite_lives)
        elif event.key == pygame.K_LEFTBRACKET:
            e.set_duration_sec(e.config.duration_sec - 1)
        elif event.key == pygame.K_RIGHTBRACKET:
            e.set_duration_sec(e.config.duration_sec + 1)
        elif event.key == pygame.K_d:
            e.set_infinite_duration(not e.config.infinite_duration)

    # ------------- drawing -------------
    def on_draw(self, surface: pygame.Surface) -> None:
        snap = self.snap
        w, h = self.ctx.screen_size

        draw_text(surface, "Quick Time Events", (ARENA_MARGIN, 20), HUD_COLOR, size=34)
        self._draw_lives(surface, snap, right=w - ARENA_MARGIN, y=32)

        border = MISS_BORDER if snap.miss_flash else ARENA_BORDER
        pygame.draw.rect(surface, border, self.arena, width=3 if snap.miss_flash else 2,
                         border_radius=12)

        now = self.engine.timers.time()
        for t in snap.live_targets:
            self._draw_target(surface, t, now)

        if snap.status == RoundStatus.READY:
            self._draw_hint(surface)
        elif snap.status == RoundStatus.FAILED:
            self._draw_overlay(surface, "Failure", snap.score)
        elif snap.status == RoundStatus.COMPLETE:
            self._draw_overlay(surface, "Time Up", snap.score)

        draw_text(surface,
                  f"Status: {snap.status.value} | Score: {snap.score} | Time: {snap.time_label}"
                  f" | {snap.difficulty}",
                  (ARENA_MARGIN, h - BOTTOM_BAR_H + 14), HUD_COLOR, size=28)
        draw_text(surface,
                  "Space start  R reset  1-5 difficulty  +/- lives  I inf lives  [ ] duration  D inf time",
                  (ARENA_MARGIN, h - BOTTOM_BAR_H + 44), DIM_COLOR, size=20)

    def _draw_target(self, surface, t, now: float) -> None:
        x, y = t.position
        r = t.size / 2
        cx, cy = self.arena.x + x + r, self.arena.y + y + r
        color = TARGET_HIT_COLOR if t.hit else TARGET_COLOR
        pygame.draw.circle(surface, color, (int(cx), int(cy)), int(r * 0.55))

        remaining = max(0.0, t.created_ms + t.lifetime_ms - now)
        pct = remaining / t.lifetime_ms if t.lifetime_ms > 0 else 0.0
        draw_countdown_ring(surface, (cx, cy), r - 2, pct, RING_COLOR, width=4)

    def _draw_lives(self, surface, snap: RoundSnapshot, right: int, y: int) -> None:
        kind, value = lives_display(snap)
        if kind != "pips":
            draw_text(surface, f"Lives {value}", (right - 140, y - 10), HUD_COLOR, size=28)
            return
        step = PIP_RADIUS * 2 + PIP_GAP
        x0 = right - step * len(value) + PIP_RADIUS
        for i, alive in enumerate(value):
            pygame.draw.circle(surface, PIP_ALIVE if alive else PIP_DEAD,
                               (x0 + i * step, y), PIP_RADIUS)

    def _draw_hint(self, surface) -> None:
        c = self.arena.center
        draw_text_centered(surface, "Tap the QTE circles before the ring ends.",
                           (c[0], c[1] - 16), HUD_COLOR, size=30)
        draw_text_centered(surface, "Clicking anywhere else costs a life.",
                           (c[0], c[1] + 16), HUD_COLOR, size=30)

    def _draw_overlay(self, surface, title: str, score: int) -> None:
        shade = pygame.Surface(self.arena.size, pygame.SRCALPHA)
        shade.fill(OVERLAY_COLOR)
        surface.blit(shade, self.arena.topleft)
        c = self.arena.center
        draw_text_centered(surface, title, (c[0], c[1] - 40), HUD_COLOR, size=56)
        draw_text_centered(surface, f"Score: {score}", c, HUD_COLOR, size=34)
        draw_text_centered(surface, "Press Space to restart", (c[0], c[1] + 40), DIM_COLOR, size=26)

    def on_unload(self) -> None:
        pass


def get_game():
    return QteCircles()
