"""Jigsaw shapes - interlocking piece geometry for rectangular puzzle grids.

This package generates tab/slot edge curves from seeded randomness, keeps
both sides of every shared edge exactly matched and composes them into
closed cubic Bezier outlines for each piece.
"""

from .edge_profile import (
    JIGSAW_PRESETS,
    PRECISION,
    get_preset,
    invert_profile,
    make_edge_profile,
    make_flat_profile,
    matching_profile,
    reverse_profile,
    round_coord,
)
from .geometry import (
    SIDE_TRANSFORMS,
    build_piece_path,
    create_jigsaw_geometry,
    generate_edge_grid,
    geometry_from_edge_grid,
    sample_piece_outline,
)
from .grid import (
    GRID_BY_DIFFICULTY,
    Difficulty,
    GridSize,
    JigsawPieceGeometry,
    PieceEdgeKinds,
    grid_for_difficulty,
    piece_id,
)
from .models import (
    CubicSegment,
    EdgeGrid,
    EdgeKind,
    EdgeProfile,
    EdgeProfileOptions,
    JigsawOptions,
    JigsawPreset,
    PieceEdgeProfiles,
    Point,
)
from .seeded_random import SeededRandom, hash_seed, shuffled

__all__ = [
    # Models
    "Point",
    "CubicSegment",
    "EdgeKind",
    "EdgeProfile",
    "EdgeProfileOptions",
    "PieceEdgeProfiles",
    "JigsawPreset",
    "JigsawOptions",
    "EdgeGrid",
    # Randomness
    "SeededRandom",
    "hash_seed",
    "shuffled",
    # Edge profiles
    "PRECISION",
    "JIGSAW_PRESETS",
    "get_preset",
    "round_coord",
    "make_flat_profile",
    "make_edge_profile",
    "invert_profile",
    "reverse_profile",
    "matching_profile",
    # Grid
    "Difficulty",
    "GridSize",
    "GRID_BY_DIFFICULTY",
    "grid_for_difficulty",
    "piece_id",
    "PieceEdgeKinds",
    "JigsawPieceGeometry",
    # Geometry
    "SIDE_TRANSFORMS",
    "build_piece_path",
    "generate_edge_grid",
    "geometry_from_edge_grid",
    "create_jigsaw_geometry",
    "sample_piece_outline",
]
