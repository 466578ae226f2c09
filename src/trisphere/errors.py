"""Error hierarchy for trisphere.

Every error is local and recoverable.  The classes double-inherit from
the matching built-in so callers that already catch ``ValueError``,
``IndexError`` or ``KeyError`` keep working.
"""

from __future__ import annotations


class TrisphereError(Exception):
    """Root of all trisphere errors."""


class InvalidSubdivisionLevelError(TrisphereError, ValueError):
    """Subdivision level outside ``[MIN_LEVEL, MAX_LEVEL]`` (strict mode only)."""

    def __init__(self, level: int, lo: int, hi: int) -> None:
        super().__init__(f"Subdivision level {level} outside [{lo}, {hi}]")
        self.level = level


class DegenerateFaceError(TrisphereError, ValueError):
    """Barycentric determinant is (near) zero: a collinear or collapsed face."""


class TileIdOutOfRangeError(TrisphereError, IndexError):
    """Tile id outside ``[0, total_tiles)``."""

    def __init__(self, tile_id: int, total_tiles: int) -> None:
        super().__init__(f"Tile id {tile_id} outside [0, {total_tiles})")
        self.tile_id = tile_id
        self.total_tiles = total_tiles


class MissingTileDataError(TrisphereError, KeyError):
    """A valid tile id has no generated record."""

    def __init__(self, tile_id: int) -> None:
        super().__init__(f"No tile record for id {tile_id}")
        self.tile_id = tile_id

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]
