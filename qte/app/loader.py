from __future__ import annotations
import importlib.util
from pathlib import Path
import yaml
from typing import Dict, Any

GAMES_DIR = Path(__file__).resolve().parents[2] / "games"


def resolve_game_root(game_id: str, games_dir: Path = GAMES_DIR) -> Path:
    game_root = games_dir / game_id
    if not game_root.is_dir():
        raise FileNotFoundError(f"No game folder named {game_id!r} in {games_dir}")
    return game_root


def load_game_manifest(game_root: Path) -> Dict[str, Any]:
    manifest = game_root / "manifest.yaml"
    if not manifest.exists():
        raise FileNotFoundError(f"Missing manifest.yaml in {game_root}")
    with open(manifest, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    data.setdefault("options", {})
    return data


def merge_options(manifest: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Launcher flags win over manifest options; None means 'not given'."""
    options = dict(manifest.get("options") or {})
    options.update({k: v for k, v in overrides.items() if v is not None})
    return {**manifest, "options": options}


def load_game_module(game_root: Path):
    """
    Loads games/<id>/main.py module and returns the module object.
    The file must define a get_game() -> Game factory.
    """
    main_py = game_root / "main.py"
    if not main_py.exists():
        raise FileNotFoundError(f"Missing main.py in {game_root}")
    spec = importlib.util.spec_from_file_location(f"games.{game_root.name}.main", main_py)
    assert spec and spec.loader
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)  # type: ignore[attr-defined]
    if not hasattr(module, "get_game"):
        raise AttributeError("Game module must define get_game()")
    return module
