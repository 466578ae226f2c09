from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Tuple

Vec3 = Tuple[float, float, float]
RGB = Tuple[float, float, float]
RGBA = Tuple[float, float, float, float]


class Biome(str, Enum):
    """Discrete terrain category of a tile."""

    OCEAN = "ocean"
    PLAINS = "plains"
    FOREST = "forest"
    MOUNTAIN = "mountain"
    DESERT = "desert"
    # Not reachable from elevation; reserved for manual assignment.
    CITY = "city"


class CellAddress(NamedTuple):
    """Position of a sub-tile inside its base face's barycentric grid.

    *row* steps along the ``v`` axis, *col* along ``u``.  *orientation*
    is 0 for the lower half-cell and 1 for the upper one.
    """

    row: int
    col: int
    orientation: int


@dataclass(frozen=True)
class BaseFace:
    """One triangle of the coarse sphere mesh.

    Barycentric weights ``(u, v, w)`` map to ``w*v1 + u*v2 + v*v3``.
    """

    index: int
    v1: Vec3
    v2: Vec3
    v3: Vec3

    @property
    def vertices(self) -> Tuple[Vec3, Vec3, Vec3]:
        return (self.v1, self.v2, self.v3)

    def centroid(self) -> Vec3:
        return (
            (self.v1[0] + self.v2[0] + self.v3[0]) / 3.0,
            (self.v1[1] + self.v2[1] + self.v3[1]) / 3.0,
            (self.v1[2] + self.v2[2] + self.v3[2]) / 3.0,
        )


@dataclass(frozen=True)
class Tile:
    """A generated sub-tile.

    *color* is the biome's base colour.  Overrides are written to the
    :class:`~trisphere.atlas.ColorAtlas`, never to the tile itself.
    """

    tile_id: int
    face_index: int
    sub_index: int
    cell: CellAddress
    center: Vec3
    elevation: float
    biome: Biome
    color: RGB = field(default=(0.0, 0.0, 0.0))
