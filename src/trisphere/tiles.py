"""Tile generation and the dense tile arena.

Tile ids are dense integers from construction, so tiles live in a flat
list indexed by id (no mapping, no aliasing).

Functions / classes
-------------------
- :func:`compose_tile_id` / :func:`split_tile_id`
- :class:`TileSet` — dense, read-only tile storage
- :func:`generate_tiles` — sequential batch build over faces × sub-tiles
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

import structlog

from .biomes import biome_color, classify_point
from .config import DEFAULT_BIOME_CONFIG, BiomeConfig
from .errors import MissingTileDataError, TileIdOutOfRangeError
from .models import BaseFace, Tile
from .subdivision import SubdivisionIndexer

logger = structlog.get_logger(__name__)


def compose_tile_id(face_index: int, sub_index: int, sub_tiles_per_face: int) -> int:
    return face_index * sub_tiles_per_face + sub_index


def split_tile_id(tile_id: int, sub_tiles_per_face: int) -> Tuple[int, int]:
    """``(face_index, sub_index)`` of *tile_id*."""
    return divmod(tile_id, sub_tiles_per_face)


class TileSet:
    """Dense tile storage indexed by tile id.

    Slots may be empty (``None``) when a caller assembles a partial set;
    looking one up raises :class:`MissingTileDataError`.
    """

    def __init__(
        self,
        tiles: Sequence[Optional[Tile]],
        *,
        face_count: int,
        sub_tiles_per_face: int,
    ) -> None:
        expected = face_count * sub_tiles_per_face
        if len(tiles) != expected:
            raise ValueError(
                f"Expected {expected} tile slots "
                f"({face_count} faces x {sub_tiles_per_face}), got {len(tiles)}"
            )
        self._tiles: List[Optional[Tile]] = list(tiles)
        self._face_count = face_count
        self._per_face = sub_tiles_per_face

    @property
    def face_count(self) -> int:
        return self._face_count

    @property
    def sub_tiles_per_face(self) -> int:
        return self._per_face

    def __len__(self) -> int:
        return len(self._tiles)

    def __getitem__(self, tile_id: int) -> Tile:
        return self.get(tile_id)

    def __iter__(self) -> Iterator[Tile]:
        return (t for t in self._tiles if t is not None)

    def get(self, tile_id: int) -> Tile:
        if not 0 <= tile_id < len(self._tiles):
            raise TileIdOutOfRangeError(tile_id, len(self._tiles))
        tile = self._tiles[tile_id]
        if tile is None:
            raise MissingTileDataError(tile_id)
        return tile

    def tiles_for_face(self, face_index: int) -> List[Tile]:
        if not 0 <= face_index < self._face_count:
            raise IndexError(f"Face {face_index} outside [0, {self._face_count})")
        start = face_index * self._per_face
        return [t for t in self._tiles[start:start + self._per_face] if t is not None]

    def __repr__(self) -> str:
        return (
            f"TileSet(faces={self._face_count}, "
            f"sub_tiles_per_face={self._per_face}, tiles={len(self._tiles)})"
        )


def generate_tiles(
    faces: Sequence[BaseFace],
    indexer: SubdivisionIndexer,
    config: BiomeConfig = DEFAULT_BIOME_CONFIG,
) -> TileSet:
    """Generate every tile of *faces* at *indexer*'s level.

    Each tile is sampled at the 3-D centroid of its half-cell,
    classified, and coloured from the biome table.  The pass is
    sequential and deterministic.

    Parameters
    ----------
    faces : sequence of BaseFace
        Base mesh; ``faces[i].index`` must equal ``i``.
    indexer : SubdivisionIndexer
    config : BiomeConfig

    Returns
    -------
    TileSet
    """
    per_face = indexer.sub_tiles_per_face
    tiles: List[Optional[Tile]] = [None] * (len(faces) * per_face)

    for position, face in enumerate(faces):
        if face.index != position:
            raise ValueError(f"Face at position {position} has index {face.index}")
        for sub_index, cell in indexer.iter_cells():
            center = indexer.sample_point(face, sub_index)
            elevation, biome = classify_point(center, config)
            tile_id = compose_tile_id(face.index, sub_index, per_face)
            tiles[tile_id] = Tile(
                tile_id=tile_id,
                face_index=face.index,
                sub_index=sub_index,
                cell=cell,
                center=center,
                elevation=elevation,
                biome=biome,
                color=biome_color(biome),
            )

    logger.info(
        "tiles_generated",
        faces=len(faces),
        level=indexer.level,
        total_tiles=len(tiles),
    )
    return TileSet(tiles, face_count=len(faces), sub_tiles_per_face=per_face)
