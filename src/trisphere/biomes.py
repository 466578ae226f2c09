"""Biome classification — elevation thresholds and the colour table.

Usage
-----
>>> from trisphere.biomes import classify_elevation, biome_color
>>> classify_elevation(0.62)
<Biome.PLAINS: 'plains'>
>>> biome_color(Biome.OCEAN)
(0.12, 0.32, 0.7)
"""

from __future__ import annotations

from bisect import bisect_right
from collections import Counter
from typing import Dict, Iterable, List, Tuple

from .config import DEFAULT_BIOME_CONFIG, BiomeConfig
from .models import RGB, Biome, Tile, Vec3
from .noise import layered_elevation


# ═══════════════════════════════════════════════════════════════════
# Colour table
# ═══════════════════════════════════════════════════════════════════

BIOME_COLORS: Dict[Biome, RGB] = {
    Biome.OCEAN: (0.12, 0.32, 0.70),
    Biome.PLAINS: (0.62, 0.76, 0.32),
    Biome.FOREST: (0.10, 0.40, 0.16),
    Biome.MOUNTAIN: (0.52, 0.46, 0.40),
    Biome.DESERT: (0.88, 0.68, 0.28),
    Biome.CITY: (0.55, 0.55, 0.55),
}


def biome_color(biome: Biome) -> RGB:
    return BIOME_COLORS[biome]


# ═══════════════════════════════════════════════════════════════════
# Classification
# ═══════════════════════════════════════════════════════════════════

def classify_elevation(
    elevation: float,
    config: BiomeConfig = DEFAULT_BIOME_CONFIG,
) -> Biome:
    """Map *elevation* to a biome using *config*'s ordered thresholds.

    Total over all floats: values below the first threshold get
    ``config.base_biome``, values at or above a threshold get that
    threshold's biome.
    """
    bounds = [t for t, _ in config.thresholds]
    i = bisect_right(bounds, elevation)
    if i == 0:
        return config.base_biome
    return config.thresholds[i - 1][1]


def biome_ranges(config: BiomeConfig = DEFAULT_BIOME_CONFIG) -> List[Tuple[float, float, Biome]]:
    """Half-open ``(lo, hi, biome)`` ranges covering the whole real line."""
    edges = [float("-inf")] + [t for t, _ in config.thresholds] + [float("inf")]
    biomes = [config.base_biome] + [b for _, b in config.thresholds]
    return [(edges[i], edges[i + 1], biomes[i]) for i in range(len(biomes))]


def classify_point(
    point: Vec3,
    config: BiomeConfig = DEFAULT_BIOME_CONFIG,
) -> Tuple[float, Biome]:
    """Sample the layered noise at *point* and classify it."""
    elevation = layered_elevation(point, config.octaves, seed=config.seed)
    return elevation, classify_elevation(elevation, config)


def biome_histogram(tiles: Iterable[Tile]) -> Dict[Biome, int]:
    """Tile count per biome (every biome present, zero if unused)."""
    counts = Counter(t.biome for t in tiles)
    return {b: counts.get(b, 0) for b in Biome}
