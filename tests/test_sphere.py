"""Tests for base sphere meshes."""

from __future__ import annotations

import math

import pytest

from trisphere.geometry import length
from trisphere.models import BaseFace
from trisphere.sphere import build_icosphere, faces_from_arrays, icosahedron, validate_faces


class TestIcosahedron:

    def test_twenty_faces(self):
        faces = icosahedron()
        assert len(faces) == 20
        assert [f.index for f in faces] == list(range(20))

    def test_vertices_on_sphere(self):
        for face in icosahedron(2.5):
            for v in face.vertices:
                assert length(v) == pytest.approx(2.5)

    def test_valid(self):
        assert validate_faces(icosahedron()) == []


class TestIcosphere:

    @pytest.mark.parametrize("k", [0, 1, 2])
    def test_face_count(self, k):
        assert len(build_icosphere(k)) == 20 * 4 ** k

    @pytest.mark.parametrize("k", [1, 2])
    def test_valid_and_outward(self, k):
        assert validate_faces(build_icosphere(k)) == []

    def test_vertices_on_sphere(self):
        for face in build_icosphere(2, radius=3.0):
            for v in face.vertices:
                assert length(v) == pytest.approx(3.0)

    def test_negative_refinements(self):
        with pytest.raises(ValueError):
            build_icosphere(-1)


class TestFacesFromArrays:

    def test_indexed_mesh(self):
        verts = [(0, 0, 1), (1, 0, 1), (0, 1, 1)]
        faces = faces_from_arrays(verts, [(0, 1, 2)])
        assert faces == [BaseFace(0, (0.0, 0.0, 1.0), (1.0, 0.0, 1.0), (0.0, 1.0, 1.0))]

    def test_bad_triangle(self):
        with pytest.raises(ValueError, match="Triangle 0"):
            faces_from_arrays([(0, 0, 0)], [(0, 0)])


class TestValidateFaces:

    def test_index_mismatch(self):
        faces = icosahedron()
        assert any("position 0" in e for e in validate_faces(faces[1:]))

    def test_inward_winding(self):
        f = icosahedron()[0]
        flipped = BaseFace(0, f.v1, f.v3, f.v2)
        assert validate_faces([flipped]) == ["Face 0 is wound inward"]

    def test_degenerate(self):
        face = BaseFace(0, (0.0, 0.0, 1.0), (1.0, 0.0, 1.0), (2.0, 0.0, 1.0))
        assert validate_faces([face]) == ["Face 0 is degenerate"]

    def test_non_finite(self):
        face = BaseFace(0, (math.nan, 0.0, 1.0), (1.0, 0.0, 1.0), (0.0, 1.0, 1.0))
        assert "non-finite" in validate_faces([face])[0]
