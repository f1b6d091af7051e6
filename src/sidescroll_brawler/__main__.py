"""Command-line entry point: ``python -m sidescroll_brawler``."""

import argparse
import logging
from typing import List, Optional

from .config import CONFIGS, get_config
from .level_gen import LevelGenerator, default_level
from .sounds import PygameSoundBus, SoundBus


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sidescroll-brawler",
        description="Play the side-scrolling brawler platformer.",
    )
    parser.add_argument(
        "--config", default="default", choices=sorted(CONFIGS),
        help="Rule/tuning preset",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Generate a random level from this seed instead of the default level",
    )
    parser.add_argument(
        "--sounds", default=None,
        help="Directory with <name>.wav/.ogg sound files (silent if omitted)",
    )
    parser.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = get_config(args.config)
    if args.seed is not None:
        level = LevelGenerator(config).generate(seed=args.seed)
    else:
        level = default_level(config)
    sounds = PygameSoundBus(args.sounds) if args.sounds else SoundBus()

    # Imported here so --help works without opening a window
    from .engine import PlatformerEngine

    engine = PlatformerEngine(config, level=level, sounds=sounds, seed=args.seed)
    engine.run()


if __name__ == "__main__":
    main()
