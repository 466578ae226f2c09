"""trisphere — addressable triangular tiles on a subdivided sphere.

Public API is organised into layers:

- **Core** — models, errors, barycentric geometry, subdivision indexer
- **Terrain** — noise, biome classification, tile generation
- **Colour** — tile colour atlas
- **Interaction** — tile picker and the ``TilePlanet`` facade
- **Export** — JSON payload, atlas PNG, sub-tile mesh arrays
"""

# ── Core ────────────────────────────────────────────────────────────
from .models import BaseFace, Biome, CellAddress, Tile
from .errors import (
    TrisphereError,
    InvalidSubdivisionLevelError,
    DegenerateFaceError,
    TileIdOutOfRangeError,
    MissingTileDataError,
)
from .geometry import bary_to_point, barycentric_weights
from .subdivision import (
    MAX_LEVEL,
    MIN_LEVEL,
    SubdivisionIndexer,
    clamp_subdivision_level,
)
from .sphere import build_icosphere, faces_from_arrays, icosahedron, validate_faces
from .config import (
    BiomeConfig,
    NoiseOctave,
    PlanetConfig,
    DEFAULT_BIOME_CONFIG,
    load_config,
    save_config,
)

# ── Terrain ─────────────────────────────────────────────────────────
from .noise import layered_elevation, noise3, to_unit
from .biomes import (
    BIOME_COLORS,
    biome_color,
    biome_histogram,
    biome_ranges,
    classify_elevation,
    classify_point,
)
from .tiles import TileSet, compose_tile_id, generate_tiles, split_tile_id

# ── Colour ──────────────────────────────────────────────────────────
from .atlas import ColorAtlas, MISSING_COLOR, PADDING_COLOR, atlas_size

# ── Interaction ─────────────────────────────────────────────────────
from .picking import TilePicker
from .planet import TilePlanet

# ── Export ──────────────────────────────────────────────────────────
from .export import (
    TileMesh,
    build_tile_mesh,
    export_planet_json,
    export_planet_payload,
    save_atlas_png,
    validate_planet_payload,
)

from .log import configure_logging, install_library_defaults

install_library_defaults()

__all__ = [
    # Core
    "BaseFace",
    "Biome",
    "CellAddress",
    "Tile",
    "TrisphereError",
    "InvalidSubdivisionLevelError",
    "DegenerateFaceError",
    "TileIdOutOfRangeError",
    "MissingTileDataError",
    "bary_to_point",
    "barycentric_weights",
    "MIN_LEVEL",
    "MAX_LEVEL",
    "SubdivisionIndexer",
    "clamp_subdivision_level",
    "build_icosphere",
    "faces_from_arrays",
    "icosahedron",
    "validate_faces",
    "BiomeConfig",
    "NoiseOctave",
    "PlanetConfig",
    "DEFAULT_BIOME_CONFIG",
    "load_config",
    "save_config",
    # Terrain
    "layered_elevation",
    "noise3",
    "to_unit",
    "BIOME_COLORS",
    "biome_color",
    "biome_histogram",
    "biome_ranges",
    "classify_elevation",
    "classify_point",
    "TileSet",
    "compose_tile_id",
    "generate_tiles",
    "split_tile_id",
    # Colour
    "ColorAtlas",
    "MISSING_COLOR",
    "PADDING_COLOR",
    "atlas_size",
    # Interaction
    "TilePicker",
    "TilePlanet",
    # Export
    "TileMesh",
    "build_tile_mesh",
    "export_planet_json",
    "export_planet_payload",
    "save_atlas_png",
    "validate_planet_payload",
    # Logging
    "configure_logging",
    "install_library_defaults",
]
