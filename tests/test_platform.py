from __future__ import annotations

import pygame
import pytest

from qte.api import EngineConfig, FrameData, Point
from qte.app.context import Context
from qte.app.loader import (
    GAMES_DIR,
    load_game_manifest,
    load_game_module,
    merge_options,
    resolve_game_root,
)
from qte.core import RoundStatus
from qte.input.pointer_input import PointerInput


# --------------------------------------------------------------------------
# Loader
# --------------------------------------------------------------------------

def test_bundled_manifest_loads():
    manifest = load_game_manifest(resolve_game_root("qte-circles"))
    assert manifest["options"]["difficulty"] == "Medium"
    assert manifest["options"]["max_lives"] == 3


def test_missing_game_folder_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        resolve_game_root("no-such-game", games_dir=tmp_path)


def test_missing_manifest_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_game_manifest(tmp_path)


def test_empty_manifest_gets_options(tmp_path):
    (tmp_path / "manifest.yaml").write_text("", encoding="utf-8")
    assert load_game_manifest(tmp_path) == {"options": {}}


def test_module_without_factory_raises(tmp_path):
    (tmp_path / "main.py").write_text("x = 1\n", encoding="utf-8")
    with pytest.raises(AttributeError):
        load_game_module(tmp_path)


def test_launcher_overrides_win_and_none_is_ignored():
    manifest = {"title": "t", "options": {"difficulty": "Easy", "max_lives": 3}}
    merged = merge_options(manifest, {"difficulty": "Hard", "max_lives": None, "duration_sec": 20})
    assert merged["options"] == {"difficulty": "Hard", "max_lives": 3, "duration_sec": 20}
    assert manifest["options"]["difficulty"] == "Easy"


# --------------------------------------------------------------------------
# Pointer input
# --------------------------------------------------------------------------

def test_left_clicks_become_taps_and_drain():
    inp = PointerInput(EngineConfig(screen_size=(640, 480)))
    inp.handle_pygame_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(10, 20)), (640, 480))
    inp.handle_pygame_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=3, pos=(50, 50)), (640, 480))

    assert inp.emit_taps() == [Point(10.0, 20.0)]
    assert inp.emit_taps() == []


def test_mirror_flips_x_and_fingers_scale():
    inp = PointerInput(EngineConfig(screen_size=(640, 480), mirror=True))
    inp.handle_pygame_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(0, 5)), (640, 480))
    inp.handle_pygame_event(pygame.event.Event(pygame.FINGERDOWN, x=0.5, y=0.5), (640, 480))

    taps = inp.emit_taps()
    assert taps[0] == Point(639.0, 5.0)
    assert taps[1] == Point(319.0, 240.0)


# --------------------------------------------------------------------------
# qte-circles game plugin
# --------------------------------------------------------------------------

@pytest.fixture
def game():
    root = resolve_game_root("qte-circles")
    module = load_game_module(root)
    g = module.get_game()
    cfg = EngineConfig(screen_size=(800, 600), seed=7)
    ctx = Context(screen=None, clock=None, cfg=cfg, resources={}, screen_size=cfg.screen_size)
    g.on_load(ctx, merge_options(load_game_manifest(root), {"max_lives": 2}))
    return module, g


def test_game_picks_up_manifest_and_overrides(game):
    _, g = game
    assert g.snap.status == RoundStatus.READY
    assert g.snap.max_lives == 2
    assert g.engine.field_size == (g.arena.width, g.arena.height)


def test_taps_are_mapped_into_the_arena(game):
    _, g = game
    g.engine.start()
    target = next(iter(g.engine.pool))
    cx, cy = target.center

    taps = [
        Point(g.arena.x + cx, g.arena.y + cy),   # on the target
        Point(5, 5),                             # top bar, ignored
        Point(g.arena.x + 2, g.arena.y + 2),     # arena corner, a miss
    ]
    g.on_update(16, FrameData(timestamp=0.0, taps=taps))

    assert g.snap.score == 1
    assert g.snap.lives == 1
    assert g.snap.miss_flash


def test_keyboard_controls(game):
    _, g = game
    key = lambda k: g.on_event(pygame.event.Event(pygame.KEYDOWN, key=k))

    key(pygame.K_5)
    key(pygame.K_EQUALS)
    key(pygame.K_RIGHTBRACKET)
    assert g.engine.config.difficulty == "Agony"
    assert g.engine.config.max_lives == 3
    assert g.engine.config.duration_sec == 11

    key(pygame.K_SPACE)
    assert g.snap.status == RoundStatus.PLAYING
    key(pygame.K_r)
    assert g.snap.status == RoundStatus.READY


def test_window_resize_remeasures_the_arena(game):
    module, g = game
    g.on_event(pygame.event.Event(pygame.VIDEORESIZE, w=1280, h=720, size=(1280, 720)))

    assert g.arena == module.arena_rect((1280, 720))
    assert g.engine.field_size == (g.arena.width, g.arena.height) == (1240, 584)

    g.engine.start()
    target = next(iter(g.engine.pool))
    assert 0 <= target.x and target.x + target.size <= 1240
    assert 0 <= target.y and target.y + target.size <= 584


def test_lives_display_modes(game):
    module, g = game
    assert module.lives_display(g.snap) == ("pips", [True, True])

    g.engine.set_max_lives(9)
    assert module.lives_display(g.engine.snapshot()) == ("text", "9/9")

    g.engine.set_infinite_lives(True)
    assert module.lives_display(g.engine.snapshot()) == ("badge", "INF")


def test_games_dir_points_at_repo():
    assert (GAMES_DIR / "qte-circles" / "main.py").exists()
