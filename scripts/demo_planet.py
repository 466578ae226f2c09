#!/usr/bin/env python3
"""Demo: build a tiled planet, recolour a few picked tiles and export it.

Usage:
    python scripts/demo_planet.py [--level N] [--refinements K] [--out DIR]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure src/ is on the path when running as a script
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from trisphere import (
    PlanetConfig,
    TilePlanet,
    configure_logging,
    export_planet_json,
    save_atlas_png,
)


def main() -> None:
    parser = argparse.ArgumentParser(description="Tiled planet demo")
    parser.add_argument("--level", type=int, default=6, help="Subdivision level (default: 6)")
    parser.add_argument("--refinements", type=int, default=0, help="Icosphere refinements")
    parser.add_argument("--out", type=str, default="exports", help="Output directory")
    args = parser.parse_args()

    configure_logging("INFO")
    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)

    config = PlanetConfig(subdivision_level=args.level, refinements=args.refinements)
    print(f"Building planet (level={config.subdivision_level}, refinements={config.refinements})...")
    planet = TilePlanet.from_config(config)
    print(f"  → {planet.total_tiles} tiles, atlas {planet.atlas.size}x{planet.atlas.size}")

    for biome, count in planet.biome_counts().items():
        print(f"     {biome.value:<9} {count}")

    # Simulate clicks at each face centroid and paint the hit tiles red
    for face in planet.faces:
        tile_id = planet.pick(face.index, face.centroid())
        if tile_id is not None:
            planet.set_tile_color(tile_id, (1.0, 0.0, 0.0))
    changed = planet.atlas.consume_dirty()
    print(f"  → painted {planet.face_count} tiles (full upload: {changed is None})")

    json_path = export_planet_json(planet, out_dir / f"planet_l{planet.subdivision_level}.json")
    png_path = save_atlas_png(planet.atlas, out_dir / f"atlas_l{planet.subdivision_level}.png")
    print(f"Saved {json_path}")
    print(f"Saved {png_path}")


if __name__ == "__main__":
    main()
