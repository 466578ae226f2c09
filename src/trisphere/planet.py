"""TilePlanet — the build-time and interaction-time flows in one object.

Build time::

    faces ─► SubdivisionIndexer ─► generate_tiles ─► ColorAtlas.build

Interaction time::

    (face, hit point) ─► TilePicker ─► tile id ─► ColorAtlas.update

Usage
-----
>>> from trisphere import TilePlanet, build_icosphere
>>> planet = TilePlanet.build(build_icosphere(), subdivision_level=4)
>>> tile_id = planet.pick(0, hit_point)
>>> planet.set_tile_color(tile_id, (1.0, 0.0, 0.0))
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

import structlog

from .atlas import ColorAtlas
from .biomes import biome_histogram
from .config import PlanetConfig
from .models import RGB, Biome, BaseFace, Tile, Vec3
from .picking import TilePicker
from .sphere import build_icosphere
from .subdivision import SubdivisionIndexer
from .tiles import TileSet, generate_tiles

logger = structlog.get_logger(__name__)


class TilePlanet:
    """A subdivided, classified and colour-packed sphere.

    Use :meth:`build` (or :meth:`from_config`) rather than calling the
    constructor directly.
    """

    def __init__(
        self,
        faces: Sequence[BaseFace],
        indexer: SubdivisionIndexer,
        tiles: TileSet,
        atlas: ColorAtlas,
        config: PlanetConfig,
    ) -> None:
        self._faces = list(faces)
        self._indexer = indexer
        self._tiles = tiles
        self._atlas = atlas
        self._config = config
        self._picker = TilePicker(self._faces, indexer)

    # ── construction ────────────────────────────────────────────────

    @classmethod
    def build(
        cls,
        faces: Sequence[BaseFace],
        subdivision_level: Optional[int] = None,
        *,
        config: Optional[PlanetConfig] = None,
    ) -> TilePlanet:
        """Subdivide *faces*, classify every tile and pack the atlas.

        *subdivision_level* overrides ``config.subdivision_level`` and is
        clamped to ``[1, 10]``.
        """
        config = config or PlanetConfig()
        level = config.subdivision_level if subdivision_level is None else subdivision_level
        indexer = SubdivisionIndexer(level, strict=config.strict_level)
        tiles = generate_tiles(faces, indexer, config.biome)
        atlas = ColorAtlas.build(tiles)
        logger.info(
            "planet_built",
            faces=len(faces),
            level=indexer.level,
            total_tiles=len(tiles),
            atlas_size=atlas.size,
        )
        return cls(faces, indexer, tiles, atlas, config)

    @classmethod
    def from_config(cls, config: PlanetConfig) -> TilePlanet:
        """Build on an icosphere described by *config*."""
        faces = build_icosphere(config.refinements, radius=config.radius)
        return cls.build(faces, config=config)

    def rebuild(self, subdivision_level: int) -> TilePlanet:
        """A new planet over the same faces at another level.

        Tiles and atlas are regenerated from scratch; colour overrides
        do not carry over.
        """
        return type(self).build(self._faces, subdivision_level, config=self._config)

    # ── properties ──────────────────────────────────────────────────

    @property
    def faces(self) -> List[BaseFace]:
        return self._faces

    @property
    def face_count(self) -> int:
        return len(self._faces)

    @property
    def subdivision_level(self) -> int:
        return self._indexer.level

    @property
    def sub_tiles_per_face(self) -> int:
        return self._indexer.sub_tiles_per_face

    @property
    def total_tiles(self) -> int:
        return len(self._tiles)

    @property
    def indexer(self) -> SubdivisionIndexer:
        return self._indexer

    @property
    def tiles(self) -> TileSet:
        return self._tiles

    @property
    def atlas(self) -> ColorAtlas:
        return self._atlas

    @property
    def config(self) -> PlanetConfig:
        return self._config

    # ── queries ─────────────────────────────────────────────────────

    def tile(self, tile_id: int) -> Tile:
        return self._tiles.get(tile_id)

    def pick(self, face_index: int, point: Vec3) -> Optional[int]:
        """Tile id under *point* on *face_index*, or ``None``."""
        return self._picker.pick(face_index, point)

    def biome_counts(self) -> Dict[Biome, int]:
        return biome_histogram(self._tiles)

    # ── colour ──────────────────────────────────────────────────────

    def set_tile_color(self, tile_id: int, color: Sequence[float]) -> None:
        """Override *tile_id*'s colour in the atlas."""
        self._atlas.update(tile_id, color)

    def reset_tile_color(self, tile_id: int) -> RGB:
        """Restore *tile_id*'s biome colour; returns that colour."""
        color = self._tiles.get(tile_id).color
        self._atlas.update(tile_id, color)
        return color

    def __repr__(self) -> str:
        return (
            f"TilePlanet(faces={self.face_count}, level={self.subdivision_level}, "
            f"total_tiles={self.total_tiles})"
        )
