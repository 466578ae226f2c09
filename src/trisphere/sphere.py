"""Base sphere meshes.

The renderer normally owns the base mesh; these builders exist so the
library, CLI and tests can produce one without it.

Functions
---------
- :func:`icosahedron` — 20 outward-wound faces
- :func:`build_icosphere` — icosahedron with *k* geodesic refinements
- :func:`faces_from_arrays` — adapt an indexed triangle mesh
- :func:`validate_faces` — structural checks on a face list
"""

from __future__ import annotations

import math
from typing import Dict, List, Sequence, Tuple

from .geometry import DEGENERATE_EPS, dot, face_normal, normalize, sub
from .models import BaseFace, Vec3

_PHI = (1.0 + math.sqrt(5.0)) / 2.0

_ICOSAHEDRON_VERTICES: Tuple[Vec3, ...] = (
    (-1.0, _PHI, 0.0),
    (1.0, _PHI, 0.0),
    (-1.0, -_PHI, 0.0),
    (1.0, -_PHI, 0.0),
    (0.0, -1.0, _PHI),
    (0.0, 1.0, _PHI),
    (0.0, -1.0, -_PHI),
    (0.0, 1.0, -_PHI),
    (_PHI, 0.0, -1.0),
    (_PHI, 0.0, 1.0),
    (-_PHI, 0.0, -1.0),
    (-_PHI, 0.0, 1.0),
)

_ICOSAHEDRON_FACES: Tuple[Tuple[int, int, int], ...] = (
    (0, 11, 5), (0, 5, 1), (0, 1, 7), (0, 7, 10), (0, 10, 11),
    (1, 5, 9), (5, 11, 4), (11, 10, 2), (10, 7, 6), (7, 1, 8),
    (3, 9, 4), (3, 4, 2), (3, 2, 6), (3, 6, 8), (3, 8, 9),
    (4, 9, 5), (2, 4, 11), (6, 2, 10), (8, 6, 7), (9, 8, 1),
)


def faces_from_arrays(
    vertices: Sequence[Sequence[float]],
    triangles: Sequence[Sequence[int]],
) -> List[BaseFace]:
    """Build :class:`BaseFace` records from an indexed triangle mesh.

    Face indices follow the order of *triangles*.
    """
    faces: List[BaseFace] = []
    for i, tri in enumerate(triangles):
        if len(tri) != 3:
            raise ValueError(f"Triangle {i} has {len(tri)} vertices")
        a, b, c = (tuple(float(x) for x in vertices[j]) for j in tri)
        faces.append(BaseFace(i, a, b, c))  # type: ignore[arg-type]
    return faces


def icosahedron(radius: float = 1.0) -> List[BaseFace]:
    """Regular icosahedron inscribed in a sphere of *radius*."""
    verts = [normalize(v, radius) for v in _ICOSAHEDRON_VERTICES]
    return faces_from_arrays(verts, _ICOSAHEDRON_FACES)


def build_icosphere(refinements: int = 0, *, radius: float = 1.0) -> List[BaseFace]:
    """Geodesic sphere: an icosahedron refined *refinements* times.

    Each refinement splits every triangle into four, pushing edge
    midpoints out onto the sphere.  Face count is ``20 * 4**refinements``.
    Winding stays outward.
    """
    if refinements < 0:
        raise ValueError("refinements must be >= 0")

    verts: List[Vec3] = [normalize(v, radius) for v in _ICOSAHEDRON_VERTICES]
    tris: List[Tuple[int, int, int]] = list(_ICOSAHEDRON_FACES)

    for _ in range(refinements):
        cache: Dict[Tuple[int, int], int] = {}

        def midpoint(i: int, j: int) -> int:
            key = (i, j) if i < j else (j, i)
            if key not in cache:
                a, b = verts[i], verts[j]
                m = ((a[0] + b[0]) / 2.0, (a[1] + b[1]) / 2.0, (a[2] + b[2]) / 2.0)
                verts.append(normalize(m, radius))
                cache[key] = len(verts) - 1
            return cache[key]

        refined: List[Tuple[int, int, int]] = []
        for a, b, c in tris:
            ab = midpoint(a, b)
            bc = midpoint(b, c)
            ca = midpoint(c, a)
            refined.extend([(a, ab, ca), (b, bc, ab), (c, ca, bc), (ab, bc, ca)])
        tris = refined

    return faces_from_arrays(verts, tris)


def validate_faces(faces: Sequence[BaseFace]) -> List[str]:
    """Return a list of problems with *faces* (empty = valid).

    Checks dense indexing, finite coordinates, degenerate triangles and
    outward winding (normal pointing away from the origin).
    """
    errors: List[str] = []
    for position, face in enumerate(faces):
        if face.index != position:
            errors.append(f"Face at position {position} has index {face.index}")
        coords = [c for v in face.vertices for c in v]
        if len(coords) != 9 or not all(math.isfinite(c) for c in coords):
            errors.append(f"Face {face.index} has non-finite or malformed vertices")
            continue
        e0 = sub(face.v2, face.v1)
        e1 = sub(face.v3, face.v1)
        d00, d11, d01 = dot(e0, e0), dot(e1, e1), dot(e0, e1)
        if d00 * d11 == 0.0 or abs(d00 * d11 - d01 * d01) <= DEGENERATE_EPS * d00 * d11:
            errors.append(f"Face {face.index} is degenerate")
            continue
        if dot(face_normal(face), face.centroid()) <= 0.0:
            errors.append(f"Face {face.index} is wound inward")
    return errors
