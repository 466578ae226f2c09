"""Barycentric frame helpers for base faces.

Each :class:`~trisphere.models.BaseFace` defines its own local frame:
a point is ``w*v1 + u*v2 + v*v3`` with ``w = 1 - u - v``.  These
functions convert between that frame and 3-D space and carry no
knowledge of subdivision.

Functions
---------
- :func:`bary_to_point` — barycentric ``(u, v)`` → 3-D point
- :func:`barycentric_weights` — 3-D point → ``(u, v, w)`` (Cramer's rule)
- :func:`normalize` / :func:`scale` / :func:`sub` / :func:`dot` / :func:`cross`
- :func:`face_normal` / :func:`face_area`
"""

from __future__ import annotations

import math
from typing import Tuple

from .errors import DegenerateFaceError
from .models import BaseFace, Vec3

# Relative tolerance on the Gram determinant.  Anything smaller is a
# collapsed triangle for double precision purposes.
DEGENERATE_EPS = 1e-12


# ═══════════════════════════════════════════════════════════════════
# Vector helpers
# ═══════════════════════════════════════════════════════════════════

def sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def scale(a: Vec3, s: float) -> Vec3:
    return (a[0] * s, a[1] * s, a[2] * s)


def length(a: Vec3) -> float:
    return math.sqrt(dot(a, a))


def normalize(a: Vec3, radius: float = 1.0) -> Vec3:
    """Return *a* rescaled to length *radius* (zero vectors pass through)."""
    n = length(a)
    if n == 0.0:
        return a
    return scale(a, radius / n)


def face_normal(face: BaseFace) -> Vec3:
    """Unnormalised normal ``(v2 - v1) × (v3 - v1)``."""
    return cross(sub(face.v2, face.v1), sub(face.v3, face.v1))


def face_area(face: BaseFace) -> float:
    return 0.5 * length(face_normal(face))


# ═══════════════════════════════════════════════════════════════════
# Barycentric frame
# ═══════════════════════════════════════════════════════════════════

def bary_to_point(face: BaseFace, u: float, v: float) -> Vec3:
    """Project barycentric ``(u, v)`` on *face* into 3-D."""
    w = 1.0 - u - v
    a, b, c = face.v1, face.v2, face.v3
    return (
        w * a[0] + u * b[0] + v * c[0],
        w * a[1] + u * b[1] + v * c[1],
        w * a[2] + u * b[2] + v * c[2],
    )


def barycentric_weights(face: BaseFace, point: Vec3) -> Tuple[float, float, float]:
    """Recover ``(u, v, w)`` of *point* relative to *face*.

    Uses the dot-product form of Cramer's rule, which implicitly
    projects *point* onto the face plane.  The weights are not clamped;
    points outside the triangle produce negative components.

    Raises
    ------
    DegenerateFaceError
        If the face's Gram determinant is (relatively) zero.
    """
    e0 = sub(face.v2, face.v1)
    e1 = sub(face.v3, face.v1)
    ep = sub(point, face.v1)

    d00 = dot(e0, e0)
    d01 = dot(e0, e1)
    d11 = dot(e1, e1)
    d20 = dot(ep, e0)
    d21 = dot(ep, e1)

    denom = d00 * d11 - d01 * d01
    if d00 == 0.0 or d11 == 0.0 or abs(denom) <= DEGENERATE_EPS * d00 * d11:
        raise DegenerateFaceError(
            f"Face {face.index} is degenerate (determinant {denom:.3e})"
        )

    u = (d11 * d20 - d01 * d21) / denom
    v = (d00 * d21 - d01 * d20) / denom
    return (u, v, 1.0 - u - v)
