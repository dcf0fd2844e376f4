from __future__ import annotations
import logging
import time
import pygame

from qte.api.config import EngineConfig
from qte.api.frame_data import FrameData
from qte.app.context import Context
from qte.app.loader import load_game_manifest, load_game_module, merge_options, resolve_game_root
from qte.input.pointer_input import PointerInput

logger = logging.getLogger(__name__)


def run_game(game_id: str, cfg: EngineConfig):
    game_root = resolve_game_root(game_id)
    manifest = merge_options(load_game_manifest(game_root), cfg.options)
    module = load_game_module(game_root)
    game = module.get_game()

    pygame.init()
    pygame.display.set_caption(manifest.get("title", f"QTE Platform - {game_id}"))
    screen = pygame.display.set_mode(cfg.screen_size, pygame.RESIZABLE)
    clock = pygame.time.Clock()

    input_layer = PointerInput(cfg)

    # Render target: draw to off-screen if mirroring, otherwise draw directly to screen
    render_surface = screen if not cfg.mirror else pygame.Surface(
        cfg.screen_size).convert()

    ctx = Context(
        screen=render_surface,
        clock=clock,
        cfg=cfg,
        resources={},
        screen_size=cfg.screen_size,
    )

    game.on_load(ctx, manifest)
    logger.info("loaded game %s (%dx%d)", game_id, *cfg.screen_size)

    running = True
    try:
        while running:
            dt = clock.tick(cfg.fps)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    ctx.screen_size = (event.w, event.h)
                    screen = pygame.display.get_surface()
                    render_surface = screen if not cfg.mirror else pygame.Surface(
                        ctx.screen_size).convert()
                    ctx.screen = render_surface
                    logger.debug("window resized to %dx%d", event.w, event.h)
                input_layer.handle_pygame_event(event, ctx.screen_size)
                game.on_event(event)

            frame_data = FrameData(timestamp=time.time(),
                                   taps=input_layer.emit_taps())

            # ---- draw to render_surface ----
            render_surface.fill((12, 14, 18))
            game.on_update(dt, frame_data)
            game.on_draw(render_surface)

            # ---- present to window ----
            if cfg.mirror:
                flipped = pygame.transform.flip(render_surface, True, False)
                screen.blit(flipped, (0, 0))

            pygame.display.flip()

    finally:
        game.on_unload()
        pygame.quit()
