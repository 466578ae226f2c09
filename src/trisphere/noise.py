"""3-D noise primitives for biome elevation.

Pure functions over ``(x, y, z)`` with no knowledge of faces or tiles.
Sampling in 3-D keeps the field seamless across the sphere.

Functions
---------
- :func:`noise3` — coherent OpenSimplex noise, roughly ``[-1, 1]``
- :func:`to_unit` — remap ``[-1, 1] → [0, 1]`` (unclamped)
- :func:`layered_elevation` — weighted sum of remapped octaves
"""

from __future__ import annotations

from functools import lru_cache
from typing import Iterable

from opensimplex import OpenSimplex

from .config import NOISE_SEED, NoiseOctave
from .models import Vec3


@lru_cache(maxsize=8)
def _generator(seed: int) -> OpenSimplex:
    return OpenSimplex(seed=seed)


def noise3(x: float, y: float, z: float, *, seed: int = NOISE_SEED) -> float:
    """OpenSimplex 3-D noise at ``(x, y, z)``, approximately in ``[-1, 1]``."""
    return float(_generator(seed).noise3(x, y, z))


def to_unit(value: float) -> float:
    """Linear remap from ``[-1, 1]`` to ``[0, 1]``.

    Not clamped: inputs slightly outside the native range stay slightly
    outside the target range.
    """
    return (value + 1.0) * 0.5


def layered_elevation(
    point: Vec3,
    octaves: Iterable[NoiseOctave],
    *,
    seed: int = NOISE_SEED,
) -> float:
    """Combine several noise octaves into a single elevation.

    Each octave samples :func:`noise3` at ``point * frequency``, remaps
    the result to ``[0, 1]`` and contributes ``weight`` times that value.
    With weights summing to 1 the result is approximately in ``[0, 1]``.

    Parameters
    ----------
    point : (x, y, z)
        Sample position, typically on or near the unit sphere.
    octaves : iterable of NoiseOctave
        Frequency / weight pairs, e.g. continental, regional, local.
    seed : int
        Noise permutation seed.

    Returns
    -------
    float
    """
    x, y, z = point
    elevation = 0.0
    for octave in octaves:
        f = octave.frequency
        elevation += octave.weight * to_unit(noise3(x * f, y * f, z * f, seed=seed))
    return elevation
