"""Configuration dataclasses and JSON helpers.

Usage
-----
>>> from trisphere.config import PlanetConfig, load_config
>>> cfg = PlanetConfig(subdivision_level=6)
>>> cfg = load_config("planet.json")
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from .models import Biome

PathLike = Union[str, Path]

# Generation is seedless from the caller's point of view; this fixes
# the permutation table so the same position always gives the same value.
NOISE_SEED = 0


# ═══════════════════════════════════════════════════════════════════
# Biome / noise
# ═══════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class NoiseOctave:
    """One layer of the elevation field."""

    name: str
    frequency: float
    weight: float


@dataclass(frozen=True)
class BiomeConfig:
    """Parameters of the elevation → biome classification.

    Attributes
    ----------
    octaves : tuple of NoiseOctave
        Layers summed into the elevation.  Weights should total 1.0.
    base_biome : Biome
        Category for elevations below the first threshold.
    thresholds : tuple of (float, Biome)
        Ascending lower bounds.  An elevation ``e`` gets the biome of
        the last threshold ``<= e``.
    seed : int
        Noise permutation seed.
    """

    octaves: Tuple[NoiseOctave, ...] = (
        NoiseOctave("continental", 1.2, 0.6),
        NoiseOctave("regional", 3.5, 0.3),
        NoiseOctave("local", 9.0, 0.1),
    )
    base_biome: Biome = Biome.OCEAN
    thresholds: Tuple[Tuple[float, Biome], ...] = (
        (0.45, Biome.DESERT),
        (0.50, Biome.PLAINS),
        (0.70, Biome.FOREST),
        (0.80, Biome.MOUNTAIN),
    )
    seed: int = NOISE_SEED

    def __post_init__(self) -> None:
        bounds = [t for t, _ in self.thresholds]
        if any(hi <= lo for lo, hi in zip(bounds, bounds[1:])):
            raise ValueError(f"Biome thresholds must be strictly ascending: {bounds}")
        if not self.octaves:
            raise ValueError("At least one noise octave is required")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "octaves": [
                {"name": o.name, "frequency": o.frequency, "weight": o.weight}
                for o in self.octaves
            ],
            "base_biome": self.base_biome.value,
            "thresholds": [[t, b.value] for t, b in self.thresholds],
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> BiomeConfig:
        default = cls()
        octaves = tuple(
            NoiseOctave(o["name"], float(o["frequency"]), float(o["weight"]))
            for o in payload.get("octaves", [])
        ) or default.octaves
        thresholds = tuple(
            (float(t), Biome(b)) for t, b in payload.get("thresholds", [])
        ) or default.thresholds
        return cls(
            octaves=octaves,
            base_biome=Biome(payload.get("base_biome", default.base_biome.value)),
            thresholds=thresholds,
            seed=int(payload.get("seed", default.seed)),
        )


DEFAULT_BIOME_CONFIG = BiomeConfig()


# ═══════════════════════════════════════════════════════════════════
# Planet
# ═══════════════════════════════════════════════════════════════════


@dataclass
class PlanetConfig:
    """Everything needed to build a :class:`~trisphere.planet.TilePlanet`.

    *refinements* only applies when the base mesh is built here (see
    :func:`~trisphere.sphere.build_icosphere`); a mesh supplied by the
    renderer ignores it.
    """

    subdivision_level: int = 4
    refinements: int = 0
    radius: float = 1.0
    strict_level: bool = False
    biome: BiomeConfig = field(default_factory=BiomeConfig)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subdivision_level": self.subdivision_level,
            "refinements": self.refinements,
            "radius": self.radius,
            "strict_level": self.strict_level,
            "biome": self.biome.to_dict(),
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> PlanetConfig:
        return cls(
            subdivision_level=int(payload.get("subdivision_level", 4)),
            refinements=int(payload.get("refinements", 0)),
            radius=float(payload.get("radius", 1.0)),
            strict_level=bool(payload.get("strict_level", False)),
            biome=BiomeConfig.from_dict(payload.get("biome", {})),
        )


def load_config(path: PathLike) -> PlanetConfig:
    """Read a :class:`PlanetConfig` from a JSON file."""
    return PlanetConfig.from_dict(json.loads(Path(path).read_text(encoding="utf-8")))


def save_config(config: PlanetConfig, path: PathLike) -> None:
    """Write *config* to a JSON file."""
    Path(path).write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")
