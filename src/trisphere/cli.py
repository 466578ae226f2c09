"""trisphere command-line interface."""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from .config import PlanetConfig, load_config
from .log import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="trisphere", description="Tiled sphere CLI")
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument("--log-json", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_planet_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--config", dest="config_path", help="PlanetConfig JSON file")
        p.add_argument("--level", type=int, help="Subdivision level (1-10)")
        p.add_argument("--refinements", type=int, help="Icosphere refinements")
        p.add_argument("--strict", action="store_true", help="Reject out-of-range levels")

    build = sub.add_parser("build", help="Build a planet and export it")
    add_planet_args(build)
    build.add_argument("--json", dest="json_path", help="Write the tile payload here")
    build.add_argument("--atlas-png", dest="atlas_path", help="Write the colour atlas PNG here")

    pick = sub.add_parser("pick", help="Resolve a hit point to a tile id")
    add_planet_args(pick)
    pick.add_argument("--face", type=int, required=True)
    pick.add_argument("--point", type=float, nargs=3, required=True, metavar=("X", "Y", "Z"))

    stats = sub.add_parser("stats", help="Print tile counts per biome")
    add_planet_args(stats)

    return parser


def _planet_config(args) -> PlanetConfig:
    config = load_config(args.config_path) if args.config_path else PlanetConfig()
    if args.level is not None:
        config.subdivision_level = args.level
    if args.refinements is not None:
        config.refinements = args.refinements
    if args.strict:
        config.strict_level = True
    return config


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, json=args.log_json)

    from .errors import InvalidSubdivisionLevelError
    from .planet import TilePlanet

    try:
        planet = TilePlanet.from_config(_planet_config(args))
    except InvalidSubdivisionLevelError as exc:
        print(exc, file=sys.stderr)
        raise SystemExit(2)

    if args.command == "build":
        _cmd_build(args, planet)
    elif args.command == "pick":
        _cmd_pick(args, planet)
    elif args.command == "stats":
        _cmd_stats(planet)


def _cmd_build(args, planet) -> None:
    from .export import export_planet_json, save_atlas_png

    print(
        f"Built {planet.total_tiles} tiles "
        f"({planet.face_count} faces x {planet.sub_tiles_per_face}), "
        f"atlas {planet.atlas.size}x{planet.atlas.size}"
    )
    if args.json_path:
        print(f"Saved {export_planet_json(planet, args.json_path)}")
    if args.atlas_path:
        print(f"Saved {save_atlas_png(planet.atlas, args.atlas_path)}")


def _cmd_pick(args, planet) -> None:
    tile_id = planet.pick(args.face, tuple(args.point))
    if tile_id is None:
        print("no tile")
        raise SystemExit(1)
    tile = planet.tile(tile_id)
    print(json.dumps({
        "tile_id": tile_id,
        "face": tile.face_index,
        "sub_index": tile.sub_index,
        "cell": list(tile.cell),
        "biome": tile.biome.value,
    }))


def _cmd_stats(planet) -> None:
    print(f"level {planet.subdivision_level}: {planet.total_tiles} tiles")
    for biome, count in planet.biome_counts().items():
        share = count / planet.total_tiles if planet.total_tiles else 0.0
        print(f"  {biome.value:<9} {count:>7}  {share:6.1%}")


if __name__ == "__main__":
    main()
