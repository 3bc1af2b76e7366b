"""
Run a script in a window:

    python -m lyrebird story.txt --assets assets
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from lyrebird.app import Player, RuntimeConfig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lyrebird", description="Play a branching dialogue script.")
    parser.add_argument("script", type=Path, help="Script file (UTF-8)")
    parser.add_argument("--assets", type=Path, default=Path("assets"), help="Asset root directory")
    parser.add_argument("--width", type=int, default=1600)
    parser.add_argument("--height", type=int, default=900)
    parser.add_argument("--fps", type=int, default=60)
    parser.add_argument(
        "--skip-unknown",
        action="store_true",
        help="Step over entries with unknown type tags instead of stopping on them",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        script = args.script.read_text(encoding="utf-8")
    except OSError as e:
        logging.error(f"Cannot read script {args.script}: {e}")
        return 1

    config = RuntimeConfig(
        title=f"Lyrebird - {args.script.name}",
        width=args.width,
        height=args.height,
        target_fps=args.fps,
        asset_root=args.assets,
        skip_unknown_entries=args.skip_unknown,
    )
    player = Player(config)
    player.narrative.start(script)
    player.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
