"""Tests for planet JSON export, atlas PNG and the sub-tile mesh."""

from __future__ import annotations

import json

import numpy as np
import pytest
from PIL import Image

from trisphere.export import (
    build_tile_mesh,
    export_planet_json,
    export_planet_payload,
    save_atlas_png,
    validate_planet_payload,
)
from trisphere.planet import TilePlanet
from trisphere.sphere import icosahedron


@pytest.fixture(scope="module")
def planet():
    return TilePlanet.build(icosahedron(), subdivision_level=3)


# ═══════════════════════════════════════════════════════════════════
# Payload
# ═══════════════════════════════════════════════════════════════════


class TestPayload:

    def test_metadata(self, planet):
        meta = export_planet_payload(planet)["metadata"]
        assert meta["subdivision_level"] == 3
        assert meta["face_count"] == 20
        assert meta["sub_tiles_per_face"] == 9
        assert meta["total_tiles"] == 180
        assert meta["atlas_size"] == 14
        assert sum(meta["biome_counts"].values()) == 180

    def test_tiles_in_id_order(self, planet):
        tiles = export_planet_payload(planet)["tiles"]
        assert [t["id"] for t in tiles] == list(range(180))
        assert tiles[10]["face"] == 1
        assert tiles[10]["sub_index"] == 1

    def test_valid(self, planet):
        assert validate_planet_payload(export_planet_payload(planet)) == []

    def test_schema_errors_reported(self, planet):
        payload = export_planet_payload(planet)
        payload["tiles"][0]["biome"] = "lava"
        errors = validate_planet_payload(payload)
        assert len(errors) == 1
        assert errors[0].startswith("tiles/0/biome")

    def test_count_mismatch_reported(self, planet):
        payload = export_planet_payload(planet)
        payload["tiles"] = payload["tiles"][:-1]
        assert any("tile count mismatch" in e for e in validate_planet_payload(payload))

    def test_color_reflects_override(self):
        planet = TilePlanet.build(icosahedron(), subdivision_level=1)
        planet.set_tile_color(4, (0.0, 1.0, 0.0))
        assert export_planet_payload(planet)["tiles"][4]["color"] == [0.0, 1.0, 0.0, 1.0]

    def test_json_file(self, planet, tmp_path):
        path = export_planet_json(planet, tmp_path / "out" / "planet.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["metadata"]["total_tiles"] == 180
        assert validate_planet_payload(data) == []


# ═══════════════════════════════════════════════════════════════════
# Atlas PNG
# ═══════════════════════════════════════════════════════════════════


class TestAtlasPng:

    def test_saved_image(self, planet, tmp_path):
        path = save_atlas_png(planet.atlas, tmp_path / "atlas.png")
        with Image.open(path) as img:
            assert img.size == (14, 14)
            assert img.mode == "RGBA"
            pixels = np.asarray(img)
        expected = np.asarray(planet.atlas.read(0)) * 255.0
        assert np.all(np.abs(pixels[0, 0].astype(np.float64) - expected) <= 1.0)


# ═══════════════════════════════════════════════════════════════════
# Tile mesh
# ═══════════════════════════════════════════════════════════════════


class TestTileMesh:

    def test_shapes(self, planet):
        mesh = build_tile_mesh(planet)
        assert mesh.triangle_count == 180
        assert mesh.positions.shape == (540, 3)
        assert mesh.tile_ids.shape == (540,)
        assert mesh.colors.shape == (540, 4)

    def test_triangle_centroid_picks_own_tile(self, planet):
        mesh = build_tile_mesh(planet)
        for tile_id in (0, 8, 9, 95, 179):
            tri = mesh.positions[tile_id * 3:tile_id * 3 + 3].astype(np.float64)
            centroid = tuple(float(c) for c in tri.mean(axis=0))
            assert int(mesh.tile_ids[tile_id * 3]) == tile_id
            assert planet.pick(tile_id // 9, centroid) == tile_id

    def test_colors_from_atlas(self, planet):
        mesh = build_tile_mesh(planet)
        assert tuple(mesh.colors[3 * 42]) == pytest.approx(planet.atlas.read(42))
