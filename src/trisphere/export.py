"""Planet export — JSON payload, atlas PNG and sub-tile mesh arrays.

Functions
---------
- :func:`export_planet_payload` — JSON-serialisable description of a planet
- :func:`export_planet_json` — write the payload to disk
- :func:`validate_planet_payload` — jsonschema check, returns error list
- :func:`save_atlas_png` — 8-bit RGBA image of the colour atlas
- :func:`build_tile_mesh` — flat per-tile triangle arrays for a renderer
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

import jsonschema
import numpy as np
from PIL import Image

from .atlas import ColorAtlas
from .planet import TilePlanet

_EXPORT_VERSION = "1.0"

PathLike = Union[str, Path]

_VEC3 = {"type": "array", "items": {"type": "number"}, "minItems": 3, "maxItems": 3}
_RGBA = {"type": "array", "items": {"type": "number"}, "minItems": 4, "maxItems": 4}

PLANET_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["metadata", "tiles"],
    "properties": {
        "metadata": {
            "type": "object",
            "required": [
                "version",
                "subdivision_level",
                "face_count",
                "sub_tiles_per_face",
                "total_tiles",
                "atlas_size",
            ],
            "properties": {
                "version": {"type": "string"},
                "subdivision_level": {"type": "integer", "minimum": 1, "maximum": 10},
                "face_count": {"type": "integer", "minimum": 0},
                "sub_tiles_per_face": {"type": "integer", "minimum": 1},
                "total_tiles": {"type": "integer", "minimum": 0},
                "atlas_size": {"type": "integer", "minimum": 1},
            },
        },
        "tiles": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "face", "sub_index", "cell", "biome", "color"],
                "properties": {
                    "id": {"type": "integer", "minimum": 0},
                    "face": {"type": "integer", "minimum": 0},
                    "sub_index": {"type": "integer", "minimum": 0},
                    "cell": {
                        "type": "array",
                        "items": {"type": "integer", "minimum": 0},
                        "minItems": 3,
                        "maxItems": 3,
                    },
                    "center": _VEC3,
                    "elevation": {"type": "number"},
                    "biome": {
                        "enum": ["ocean", "plains", "forest", "mountain", "desert", "city"],
                    },
                    "color": _RGBA,
                },
            },
        },
    },
}


# ═══════════════════════════════════════════════════════════════════
# JSON payload
# ═══════════════════════════════════════════════════════════════════

def export_planet_payload(planet: TilePlanet) -> Dict[str, Any]:
    """Build a JSON-serialisable export of *planet*.

    ``color`` is the current atlas colour (including overrides), so the
    payload reflects what the renderer shows.
    """
    metadata = {
        "version": _EXPORT_VERSION,
        "generator": "trisphere.export",
        "subdivision_level": planet.subdivision_level,
        "face_count": planet.face_count,
        "sub_tiles_per_face": planet.sub_tiles_per_face,
        "total_tiles": planet.total_tiles,
        "atlas_size": planet.atlas.size,
        "biome_counts": {b.value: n for b, n in planet.biome_counts().items()},
    }

    tiles: List[Dict[str, Any]] = []
    for tile in planet.tiles:
        tiles.append({
            "id": tile.tile_id,
            "face": tile.face_index,
            "sub_index": tile.sub_index,
            "cell": list(tile.cell),
            "center": [round(c, 8) for c in tile.center],
            "elevation": round(tile.elevation, 6),
            "biome": tile.biome.value,
            "color": [round(c, 4) for c in planet.atlas.read(tile.tile_id)],
        })

    return {"metadata": metadata, "tiles": tiles}


def export_planet_json(planet: TilePlanet, path: PathLike, *, indent: int = 2) -> Path:
    """Write :func:`export_planet_payload` to *path*; returns the path."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(export_planet_payload(planet), indent=indent), encoding="utf-8")
    return out


def validate_planet_payload(payload: Dict[str, Any]) -> List[str]:
    """Validate *payload* against :data:`PLANET_SCHEMA` plus count checks.

    Returns a list of error messages (empty = valid).
    """
    validator = jsonschema.Draft202012Validator(PLANET_SCHEMA)
    errors = [
        f"{'/'.join(str(p) for p in err.absolute_path) or '<root>'}: {err.message}"
        for err in sorted(validator.iter_errors(payload), key=lambda e: list(e.absolute_path))
    ]
    if errors:
        return errors

    meta = payload["metadata"]
    expected = meta["face_count"] * meta["sub_tiles_per_face"]
    if meta["total_tiles"] != expected:
        errors.append(
            f"total_tiles mismatch: {meta['total_tiles']} != "
            f"{meta['face_count']} x {meta['sub_tiles_per_face']}"
        )
    if meta["sub_tiles_per_face"] != meta["subdivision_level"] ** 2:
        errors.append("sub_tiles_per_face must equal subdivision_level squared")
    if len(payload["tiles"]) != meta["total_tiles"]:
        errors.append(
            f"tile count mismatch: metadata says {meta['total_tiles']}, "
            f"got {len(payload['tiles'])}"
        )
    return errors


# ═══════════════════════════════════════════════════════════════════
# Atlas image
# ═══════════════════════════════════════════════════════════════════

def save_atlas_png(atlas: ColorAtlas, path: PathLike) -> Path:
    """Save the atlas as an 8-bit RGBA PNG, one pixel per cell."""
    pixels = (np.clip(atlas.buffer, 0.0, 1.0) * 255.0).round().astype(np.uint8)
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(pixels).save(out)
    return out


# ═══════════════════════════════════════════════════════════════════
# Sub-tile mesh
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TileMesh:
    """Unindexed triangle soup, three vertices per tile in tile-id order.

    *positions* is ``(3T, 3)`` float32, *tile_ids* ``(3T,)`` int32 and
    *colors* ``(3T, 4)`` float32.
    """

    positions: np.ndarray
    tile_ids: np.ndarray
    colors: np.ndarray

    @property
    def triangle_count(self) -> int:
        return len(self.positions) // 3


def build_tile_mesh(planet: TilePlanet) -> TileMesh:
    """Flat sub-tile triangles of *planet* with atlas colours.

    Vertices lie on the base faces (not re-projected to the sphere) so
    the renderer's face hit test agrees with :meth:`TilePlanet.pick`.
    """
    total = planet.total_tiles
    indexer = planet.indexer
    per_face = indexer.sub_tiles_per_face

    positions = np.empty((total * 3, 3), dtype=np.float32)
    for face in planet.faces:
        base = face.index * per_face
        for sub_index in range(per_face):
            row = (base + sub_index) * 3
            positions[row:row + 3] = indexer.sub_tile_vertices(face, sub_index)

    tile_ids = np.repeat(np.arange(total, dtype=np.int32), 3)
    flat = planet.atlas.buffer.reshape(-1, 4)[:total]
    colors = np.repeat(flat, 3, axis=0).astype(np.float32)
    return TileMesh(positions=positions, tile_ids=tile_ids, colors=colors)
