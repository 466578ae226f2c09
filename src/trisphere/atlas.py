"""Tile colour atlas — one RGBA cell per tile in a square float buffer.

Layout
------
``size = ceil(sqrt(total_tiles))``; the buffer is ``(size, size, 4)``
float32, row-major, and cell ``(x, y)`` holds tile ``y * size + x``.
Cells at or beyond ``total_tiles`` carry :data:`PADDING_COLOR` and are
never addressed.

The atlas is the only writer of tile colour.  Consumers read
:attr:`ColorAtlas.buffer` (a read-only view) and re-upload after
:meth:`ColorAtlas.consume_dirty` reports changes.
"""

from __future__ import annotations

import math
import operator
from typing import Iterable, Optional, Sequence, Set, Tuple

import numpy as np
import structlog

from .errors import MissingTileDataError, TileIdOutOfRangeError
from .models import RGBA, Tile

logger = structlog.get_logger(__name__)

PADDING_COLOR: RGBA = (0.0, 0.0, 0.0, 1.0)
MISSING_COLOR: RGBA = (1.0, 0.0, 1.0, 1.0)


def atlas_size(total_tiles: int) -> int:
    """Side length of the square atlas for *total_tiles* (at least 1)."""
    if total_tiles < 0:
        raise ValueError("total_tiles must be >= 0")
    side = math.isqrt(total_tiles)
    if side * side < total_tiles:
        side += 1
    return max(side, 1)


def _as_rgba(color: Sequence[float]) -> RGBA:
    if len(color) == 3:
        return (float(color[0]), float(color[1]), float(color[2]), 1.0)
    if len(color) == 4:
        return (float(color[0]), float(color[1]), float(color[2]), float(color[3]))
    raise ValueError(f"Colour must have 3 or 4 channels, got {len(color)}")


class ColorAtlas:
    """Square RGBA buffer addressed by tile id.

    Parameters
    ----------
    total_tiles : int
        Number of addressable tiles.
    """

    def __init__(self, total_tiles: int) -> None:
        self._total = int(total_tiles)
        self._size = atlas_size(self._total)
        self._data = np.empty((self._size, self._size, 4), dtype=np.float32)
        self._data[...] = PADDING_COLOR
        self._dirty: Set[int] = set()
        self._all_dirty = True

    # ── construction ────────────────────────────────────────────────

    @classmethod
    def build(cls, tiles, total_tiles: Optional[int] = None) -> ColorAtlas:
        """Allocate an atlas and fill it from *tiles*.

        *tiles* is anything indexable by tile id that raises
        :class:`MissingTileDataError` for ids without a record (a
        :class:`~trisphere.tiles.TileSet`), or a plain sequence of
        :class:`Tile` / ``None``.  Missing records get
        :data:`MISSING_COLOR` instead of failing the build.
        """
        total = len(tiles) if total_tiles is None else int(total_tiles)
        atlas = cls(total)
        flat = atlas._data.reshape(-1, 4)
        missing = 0
        for tile_id in range(total):
            try:
                tile = tiles[tile_id]
            except (MissingTileDataError, IndexError):
                tile = None
            if tile is None:
                flat[tile_id] = MISSING_COLOR
                missing += 1
                continue
            flat[tile_id] = (*tile.color, 1.0)
        if missing:
            logger.warning("atlas_missing_tiles", missing=missing, total=total)
        logger.debug("atlas_built", size=atlas.size, total_tiles=total)
        return atlas

    # ── properties ──────────────────────────────────────────────────

    @property
    def size(self) -> int:
        return self._size

    @property
    def total_tiles(self) -> int:
        return self._total

    @property
    def buffer(self) -> np.ndarray:
        """Read-only ``(size, size, 4)`` view of the packed colours."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    @property
    def dirty(self) -> bool:
        return self._all_dirty or bool(self._dirty)

    @property
    def dirty_tiles(self) -> Set[int]:
        return set(self._dirty)

    # ── addressing ──────────────────────────────────────────────────

    def _check(self, tile_id: int) -> int:
        # integral ids only, floats raise TypeError
        tile_id = operator.index(tile_id)
        if not 0 <= tile_id < self._total:
            raise TileIdOutOfRangeError(tile_id, self._total)
        return tile_id

    def cell_of(self, tile_id: int) -> Tuple[int, int]:
        """``(x, y)`` cell of *tile_id*."""
        tile_id = self._check(tile_id)
        return (tile_id % self._size, tile_id // self._size)

    def tile_at(self, x: int, y: int) -> Optional[int]:
        """Tile id stored at cell ``(x, y)``, or ``None`` for padding."""
        if not (0 <= x < self._size and 0 <= y < self._size):
            raise IndexError(f"Cell ({x}, {y}) outside {self._size}x{self._size} atlas")
        tile_id = y * self._size + x
        return tile_id if tile_id < self._total else None

    # ── read / write ────────────────────────────────────────────────

    def read(self, tile_id: int) -> RGBA:
        x, y = self.cell_of(tile_id)
        r, g, b, a = self._data[y, x]
        return (float(r), float(g), float(b), float(a))

    def update(self, tile_id: int, color: Sequence[float]) -> None:
        """Write *color* (RGB or RGBA) to *tile_id*'s cell and mark it dirty.

        Raises :class:`TileIdOutOfRangeError` without touching the buffer
        when *tile_id* is not addressable, and ``TypeError`` when it is not
        an integer.
        """
        try:
            x, y = self.cell_of(tile_id)
        except TileIdOutOfRangeError:
            logger.warning("atlas_update_out_of_range", tile_id=tile_id, total=self._total)
            raise
        rgba = _as_rgba(color)
        self._data[y, x] = rgba
        self._dirty.add(y * self._size + x)

    def update_many(self, updates: Iterable[Tuple[int, Sequence[float]]]) -> None:
        """Apply several updates; all ids are checked before any write."""
        staged = [(self._check(tid), _as_rgba(c)) for tid, c in updates]
        flat = self._data.reshape(-1, 4)
        for tile_id, rgba in staged:
            flat[tile_id] = rgba
            self._dirty.add(tile_id)

    def consume_dirty(self) -> Optional[Set[int]]:
        """Return the tile ids changed since the last call and clear them.

        Returns ``None`` when the whole buffer needs uploading (first call
        after construction).
        """
        if self._all_dirty:
            self._all_dirty = False
            self._dirty.clear()
            return None
        changed, self._dirty = self._dirty, set()
        return changed

    def __repr__(self) -> str:
        return f"ColorAtlas(size={self._size}, total_tiles={self._total}, dirty={self.dirty})"
