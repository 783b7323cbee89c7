"""Command line launcher: python -m spike_platformer."""

import argparse
import sys
from dataclasses import replace

from .assets import AssetLoadError, default_manifest, missing_assets
from .config import CONFIGS
from .engine import PlatformerEngine


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run the spike platformer demo.")
    parser.add_argument(
        "--config", default="default", choices=sorted(CONFIGS),
        help="Named configuration preset",
    )
    parser.add_argument("--assets", default=None, help="Directory containing the sprite images")
    parser.add_argument("--fps", type=int, default=None, help="Ticks per second")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    config = CONFIGS[args.config]
    if args.assets is not None:
        config = replace(config, asset_dir=args.assets)
    if args.fps is not None:
        config = replace(config, fps=args.fps)

    missing = missing_assets(default_manifest(), config.asset_dir)
    if missing:
        print(f"Missing {len(missing)} sprite file(s) in '{config.asset_dir}':", file=sys.stderr)
        for path in missing:
            print(f"  {path}", file=sys.stderr)
        return 1

    try:
        engine = PlatformerEngine(config)
    except AssetLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Config: {args.config} | assets: {config.asset_dir} | fps: {config.fps}")
    engine.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
