"""Plugin surface for games: the Game hooks, per-frame taps and launcher config."""
from .config import EngineConfig
from .frame_data import FrameData, Point
from .game_base import Game

__all__ = ["Game", "FrameData", "Point", "EngineConfig"]
