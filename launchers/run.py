import argparse
import logging
import sys
from pathlib import Path
import os
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = "hide"

# Ensure repo root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from qte.api.config import EngineConfig
from qte.app.loop import run_game


def main():
    parser = argparse.ArgumentParser(description="QTE Platform Launcher")
    parser.add_argument("--game", default="qte-circles", help="Game folder name under games/")
    parser.add_argument("--screen", default="1280x720", help="Screen size WxH, e.g. 1280x720")
    parser.add_argument("--fps", type=int, default=60, help="Frame rate cap")
    parser.add_argument("--mirror", action="store_true", help="Mirror the game window horizontally")
    parser.add_argument("--seed", type=int, default=None, help="Seed for target placement")
    parser.add_argument("--difficulty", default=None, help="Easy, Medium, Hard, Extreme or Agony")
    parser.add_argument("--lives", type=int, default=None, help="Max lives (>= 1)")
    parser.add_argument("--infinite-lives", action="store_true", default=None)
    parser.add_argument("--duration", type=int, default=None, help="Round length in seconds (5-30)")
    parser.add_argument("--infinite-duration", action="store_true", default=None)
    parser.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING, ...")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        w, h = map(int, args.screen.lower().split("x"))
    except ValueError:
        print(f"ERROR: bad --screen value {args.screen!r}, expected WxH", file=sys.stderr)
        sys.exit(2)

    cfg = EngineConfig(
        screen_size=(w, h),
        fps=args.fps,
        mirror=args.mirror,
        seed=args.seed,
        options={
            "difficulty": args.difficulty,
            "max_lives": args.lives,
            "infinite_lives": args.infinite_lives,
            "duration_sec": args.duration,
            "infinite_duration": args.infinite_duration,
        },
    )

    try:
        run_game(args.game, cfg)
    except (FileNotFoundError, AttributeError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
