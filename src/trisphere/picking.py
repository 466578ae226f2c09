"""Tile picker — resolve a surface hit on a base face to a tile id.

The renderer's intersection test supplies the hit point and the base
face it landed on.  The picker recovers barycentric weights on that
face and runs them through the same :class:`SubdivisionIndexer` used at
generation time, so picking and generation cannot disagree.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

import structlog

from .errors import DegenerateFaceError
from .geometry import barycentric_weights
from .models import BaseFace, Vec3
from .subdivision import SubdivisionIndexer
from .tiles import compose_tile_id

logger = structlog.get_logger(__name__)


class TilePicker:
    """Map ``(face_index, hit_point)`` to a global tile id.

    Parameters
    ----------
    faces : sequence of BaseFace
        The base mesh, indexed by face index.
    indexer : SubdivisionIndexer
        Must be the indexer the tiles were generated with.
    """

    def __init__(self, faces: Sequence[BaseFace], indexer: SubdivisionIndexer) -> None:
        self._faces = faces
        self._indexer = indexer

    @property
    def indexer(self) -> SubdivisionIndexer:
        return self._indexer

    def _face(self, face_index: int) -> Optional[BaseFace]:
        if not 0 <= face_index < len(self._faces):
            logger.warning("pick_unknown_face", face_index=face_index, faces=len(self._faces))
            return None
        return self._faces[face_index]

    def pick_bary(self, face_index: int, u: float, v: float) -> Optional[int]:
        """Tile id for barycentric ``(u, v)`` on *face_index*."""
        if self._face(face_index) is None:
            return None
        if not (math.isfinite(u) and math.isfinite(v)):
            logger.warning("pick_non_finite", face_index=face_index, u=u, v=v)
            return None
        sub_index = self._indexer.bary_to_index(u, v)
        return compose_tile_id(face_index, sub_index, self._indexer.sub_tiles_per_face)

    def pick(self, face_index: int, point: Vec3) -> Optional[int]:
        """Tile id under *point* on *face_index*, or ``None``.

        ``None`` is returned for an unknown face, a degenerate one or a
        non-finite hit point; none of these raise.
        """
        face = self._face(face_index)
        if face is None:
            return None
        try:
            u, v, _ = barycentric_weights(face, point)
        except DegenerateFaceError as exc:
            logger.warning("pick_degenerate_face", face_index=face_index, error=str(exc))
            return None
        if not (math.isfinite(u) and math.isfinite(v)):
            logger.warning("pick_non_finite", face_index=face_index, point=point)
            return None
        sub_index = self._indexer.bary_to_index(u, v)
        return compose_tile_id(face_index, sub_index, self._indexer.sub_tiles_per_face)
