"""Tests for the tile picker — end-to-end agreement with generation."""

from __future__ import annotations

import math

import pytest

from trisphere.geometry import bary_to_point
from trisphere.models import BaseFace
from trisphere.picking import TilePicker
from trisphere.sphere import build_icosphere, icosahedron
from trisphere.subdivision import SubdivisionIndexer
from trisphere.tiles import compose_tile_id, split_tile_id


@pytest.fixture(scope="module")
def ico_faces():
    return icosahedron()


class TestTileIdComposition:

    def test_compose(self):
        assert compose_tile_id(3, 5, 16) == 53

    def test_split_inverse(self):
        for tile_id in range(0, 320, 7):
            face, sub = split_tile_id(tile_id, 16)
            assert compose_tile_id(face, sub, 16) == tile_id


class TestPick:

    @pytest.mark.parametrize("level", [1, 2, 4, 8, 10])
    def test_round_trip_every_tile(self, ico_faces, level):
        indexer = SubdivisionIndexer(level)
        picker = TilePicker(ico_faces, indexer)
        per_face = indexer.sub_tiles_per_face
        for face in ico_faces:
            for sub_index in range(per_face):
                point = indexer.sample_point(face, sub_index)
                expected = compose_tile_id(face.index, sub_index, per_face)
                assert picker.pick(face.index, point) == expected

    def test_level_four_first_cell_centroid_is_tile_zero(self, ico_faces):
        indexer = SubdivisionIndexer(4)
        picker = TilePicker(ico_faces, indexer)
        sub_index = indexer.cell_to_index(0, 0, 0)
        u, v, _ = indexer.cell_center_bary(sub_index)
        point = bary_to_point(ico_faces[0], u, v)
        assert picker.pick(0, point) == 0

    def test_level_one_face_is_tile(self, ico_faces):
        picker = TilePicker(ico_faces, SubdivisionIndexer(1))
        for face in ico_faces:
            assert picker.pick(face.index, face.centroid()) == face.index

    def test_point_on_sphere_above_face(self, ico_faces):
        # Hit points on the curved surface sit outside the flat face plane.
        indexer = SubdivisionIndexer(3)
        picker = TilePicker(ico_faces, indexer)
        cx, cy, cz = ico_faces[5].centroid()
        scale = 1.0 / (cx * cx + cy * cy + cz * cz) ** 0.5
        tile_id = picker.pick(5, (cx * scale, cy * scale, cz * scale))
        assert tile_id is not None
        assert split_tile_id(tile_id, 9)[0] == 5

    def test_refined_mesh(self):
        faces = build_icosphere(1)
        indexer = SubdivisionIndexer(3)
        picker = TilePicker(faces, indexer)
        for face in faces[::7]:
            for sub_index in range(9):
                point = indexer.sample_point(face, sub_index)
                assert picker.pick(face.index, point) == face.index * 9 + sub_index

    def test_vertex_hit_resolves(self, ico_faces):
        indexer = SubdivisionIndexer(4)
        picker = TilePicker(ico_faces, indexer)
        assert picker.pick(2, ico_faces[2].v1) == 2 * 16
        assert picker.pick(2, ico_faces[2].v3) == 2 * 16 + 15

    def test_pick_bary(self, ico_faces):
        indexer = SubdivisionIndexer(4)
        picker = TilePicker(ico_faces, indexer)
        u, v, _ = indexer.cell_center_bary(9)
        assert picker.pick_bary(1, u, v) == 16 + 9


class TestNoTile:

    def test_degenerate_face_returns_none(self):
        faces = [BaseFace(0, (0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (2.0, 0.0, 0.0))]
        picker = TilePicker(faces, SubdivisionIndexer(2))
        assert picker.pick(0, (0.5, 0.0, 0.0)) is None

    @pytest.mark.parametrize("face_index", [-1, 20, 999])
    def test_unknown_face_returns_none(self, ico_faces, face_index):
        picker = TilePicker(ico_faces, SubdivisionIndexer(2))
        assert picker.pick(face_index, (0.0, 0.0, 1.0)) is None
        assert picker.pick_bary(face_index, 0.1, 0.1) is None

    @pytest.mark.parametrize(
        "point",
        [
            (math.nan, 0.0, 0.0),
            (0.0, math.nan, 1.0),
            (math.inf, 0.0, 0.0),
            (0.0, -math.inf, 1.0),
        ],
    )
    def test_non_finite_point_returns_none(self, ico_faces, point):
        picker = TilePicker(ico_faces, SubdivisionIndexer(4))
        assert picker.pick(3, point) is None

    @pytest.mark.parametrize("u,v", [(math.nan, 0.2), (0.2, math.inf)])
    def test_non_finite_weights_return_none(self, ico_faces, u, v):
        picker = TilePicker(ico_faces, SubdivisionIndexer(4))
        assert picker.pick_bary(3, u, v) is None
