"""Subdivision indexer — the one bijection shared by generation and picking.

A base face at level *N* is cut into an ``N × N`` grid of parallelogram
cells by stepping the barycentric weights ``u`` (columns) and ``v``
(rows) in increments of ``1/N``.  Only cells with ``row + col < N`` lie
inside the triangle.  Each cell splits along its diagonal into a lower
half (``localU + localV <= 1``, orientation 0) and an upper half
(orientation 1); the last cell of each row has no upper half inside the
triangle.

Sub-tiles are numbered row by row::

    sub_index = row * (2N - row) + col * 2 + orientation

Row *r* holds ``2(N - r) - 1`` half-cells and ``r(2N - r)`` half-cells
precede it, so the numbering is dense over ``[0, N²)``.

Functions / classes
-------------------
- :func:`clamp_subdivision_level` — clamp to ``[MIN_LEVEL, MAX_LEVEL]``
- :class:`SubdivisionIndexer` — forward, inverse and barycentric lookup
"""

from __future__ import annotations

import math
from typing import Iterator, Tuple

import structlog

from .errors import InvalidSubdivisionLevelError
from .geometry import bary_to_point
from .models import BaseFace, CellAddress, Vec3

logger = structlog.get_logger(__name__)

MIN_LEVEL = 1
MAX_LEVEL = 10

# Weights this close to 0 or 1 are snapped before bucketing so shared
# edges classify the same way from both neighbouring faces.
EDGE_EPS = 1e-9

_THIRD = 1.0 / 3.0
_TWO_THIRDS = 2.0 / 3.0


def clamp_subdivision_level(level: int, *, strict: bool = False) -> int:
    """Clamp *level* into ``[MIN_LEVEL, MAX_LEVEL]``.

    Out-of-range input is logged and clamped.  With ``strict=True`` an
    :class:`InvalidSubdivisionLevelError` is raised instead.
    """
    level = int(level)
    if MIN_LEVEL <= level <= MAX_LEVEL:
        return level
    if strict:
        raise InvalidSubdivisionLevelError(level, MIN_LEVEL, MAX_LEVEL)
    clamped = max(MIN_LEVEL, min(MAX_LEVEL, level))
    logger.warning("subdivision_level_clamped", requested=level, used=clamped)
    return clamped


def _snap(weight: float) -> float:
    if weight < EDGE_EPS:
        return 0.0
    if weight > 1.0 - EDGE_EPS:
        return 1.0
    return weight


class SubdivisionIndexer:
    """Bijection between ``sub_index`` and barycentric half-cells at level *N*.

    Parameters
    ----------
    level : int
        Subdivision level, clamped to ``[1, 10]``.
    strict : bool
        Raise instead of clamping an out-of-range level.
    """

    def __init__(self, level: int, *, strict: bool = False) -> None:
        self._level = clamp_subdivision_level(level, strict=strict)

    # ── properties ──────────────────────────────────────────────────

    @property
    def level(self) -> int:
        return self._level

    @property
    def sub_tiles_per_face(self) -> int:
        return self._level * self._level

    # ── forward ─────────────────────────────────────────────────────

    def cell_to_index(self, row: int, col: int, orientation: int) -> int:
        """Linear sub-tile index of the half-cell ``(row, col, orientation)``.

        Raises ``ValueError`` for cells outside the triangle.
        """
        n = self._level
        if row < 0 or col < 0 or row + col >= n:
            raise ValueError(f"Cell ({row}, {col}) outside level-{n} triangle")
        if orientation not in (0, 1):
            raise ValueError(f"orientation must be 0 or 1, got {orientation!r}")
        if orientation == 1 and row + col == n - 1:
            raise ValueError(f"Cell ({row}, {col}) has no upper half at level {n}")
        return row * (2 * n - row) + col * 2 + orientation

    # ── inverse ─────────────────────────────────────────────────────

    def index_to_cell(self, sub_index: int) -> CellAddress:
        """Inverse of :meth:`cell_to_index`."""
        n = self._level
        if not 0 <= sub_index < n * n:
            raise ValueError(f"sub_index {sub_index} outside [0, {n * n})")
        # Rows remaining below this one: ceil(sqrt(N² - sub_index)).
        remaining = math.isqrt(n * n - sub_index - 1) + 1
        row = n - remaining
        offset = sub_index - row * (2 * n - row)
        return CellAddress(row, offset // 2, offset % 2)

    def bary_to_index(self, u: float, v: float) -> int:
        """Sub-tile index of the half-cell containing barycentric ``(u, v)``.

        Points on an edge, or nudged slightly outside by floating error,
        are pulled into the nearest valid cell rather than rejected.
        """
        n = self._level
        u = min(1.0, max(0.0, _snap(u)))
        v = min(1.0, max(0.0, _snap(v)))

        su = u * n
        sv = v * n
        col = min(int(math.floor(su)), n - 1)
        row = min(int(math.floor(sv)), n - 1)
        local_u = su - col
        local_v = sv - row

        if row + col > n - 1:
            col = n - 1 - row

        if row + col == n - 1:
            orientation = 0
        else:
            orientation = 1 if local_u + local_v > 1.0 else 0
        return row * (2 * n - row) + col * 2 + orientation

    # ── barycentric geometry of a sub-tile ──────────────────────────

    def cell_center_bary(self, sub_index: int) -> Tuple[float, float, float]:
        """Barycentric ``(u, v, w)`` of the centroid of *sub_index*'s half-cell."""
        row, col, orientation = self.index_to_cell(sub_index)
        offset = _TWO_THIRDS if orientation else _THIRD
        n = float(self._level)
        u = (col + offset) / n
        v = (row + offset) / n
        return (u, v, 1.0 - u - v)

    def cell_corners_bary(
        self, sub_index: int
    ) -> Tuple[Tuple[float, float], Tuple[float, float], Tuple[float, float]]:
        """The three ``(u, v)`` corners of the half-cell, in face winding order."""
        row, col, orientation = self.index_to_cell(sub_index)
        n = float(self._level)
        if orientation == 0:
            corners = ((col, row), (col + 1, row), (col, row + 1))
        else:
            corners = ((col + 1, row + 1), (col, row + 1), (col + 1, row))
        return tuple((cu / n, cv / n) for cu, cv in corners)  # type: ignore[return-value]

    def sample_point(self, face: BaseFace, sub_index: int) -> Vec3:
        """3-D centroid of *sub_index* on *face* (the biome sample point)."""
        u, v, _ = self.cell_center_bary(sub_index)
        return bary_to_point(face, u, v)

    def sub_tile_vertices(self, face: BaseFace, sub_index: int) -> Tuple[Vec3, Vec3, Vec3]:
        """3-D corners of *sub_index* on *face*."""
        a, b, c = self.cell_corners_bary(sub_index)
        return (
            bary_to_point(face, *a),
            bary_to_point(face, *b),
            bary_to_point(face, *c),
        )

    def iter_cells(self) -> Iterator[Tuple[int, CellAddress]]:
        """Yield ``(sub_index, CellAddress)`` in index order."""
        n = self._level
        for row in range(n):
            for col in range(n - row):
                yield self.cell_to_index(row, col, 0), CellAddress(row, col, 0)
                if row + col < n - 1:
                    yield self.cell_to_index(row, col, 1), CellAddress(row, col, 1)

    def __repr__(self) -> str:
        return f"SubdivisionIndexer(level={self._level})"
