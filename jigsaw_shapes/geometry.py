"""Assemble interlocking piece shapes for a whole puzzle grid."""

import logging
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

import numpy as np

from .edge_profile import get_preset, make_edge_profile, make_flat_profile, matching_profile, round_coord
from .grid import JigsawPieceGeometry, PieceEdgeKinds, piece_id
from .models import (
    EDGE_SIDES,
    EdgeGrid,
    EdgeKind,
    EdgeProfile,
    EdgeProfileOptions,
    JigsawOptions,
    JigsawPreset,
    PieceEdgeProfiles,
)
from .seeded_random import SeededRandom

logger = logging.getLogger(__name__)


class SideTransform:
    """Affine map from an edge's local frame onto one side of a piece.

    ``offset_scale`` is multiplied by (piece_width, piece_height) to place the
    side's origin corner.
    """

    def __init__(self, linear: List[List[float]], offset_scale: Tuple[float, float]):
        self.linear = np.array(linear, dtype=float)
        self.offset_scale = np.array(offset_scale, dtype=float)

    def apply(self, points: np.ndarray, piece_width: float, piece_height: float) -> np.ndarray:
        """Map an (N, 2) array of edge-local points into piece coordinates."""
        offset = self.offset_scale * np.array([piece_width, piece_height])
        return points @ self.linear.T + offset


# Sides are walked clockwise starting at the top-left corner. Positive edge
# displacement always points away from the piece.
SIDE_TRANSFORMS: Dict[str, SideTransform] = {
    "top": SideTransform([[1, 0], [0, -1]], (0, 0)),
    "right": SideTransform([[0, 1], [1, 0]], (1, 0)),
    "bottom": SideTransform([[-1, 0], [0, 1]], (1, 1)),
    "left": SideTransform([[0, -1], [-1, 0]], (0, 1)),
}


def format_number(value: float) -> str:
    """Print a coordinate in its shortest decimal form ("12", "12.5", "0.001")."""
    text = f"{round_coord(value):.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _segment_points(profile: EdgeProfile) -> np.ndarray:
    """Return a (segments, 3, 2) array of cp1, cp2 and end for each segment."""
    return np.array([[[s.cp1.x, s.cp1.y], [s.cp2.x, s.cp2.y], [s.end.x, s.end.y]] for s in profile.segments])


def build_piece_path(piece_width: float, piece_height: float, edges: PieceEdgeProfiles) -> str:
    """Compose four edge profiles into one closed ``M``/``C``/``Z`` path string."""
    commands = ["M 0 0"]
    for side in EDGE_SIDES:
        controls = _segment_points(edges.by_side(side))
        mapped = SIDE_TRANSFORMS[side].apply(controls.reshape(-1, 2), piece_width, piece_height).reshape(-1, 3, 2)
        for cp1, cp2, end in mapped:
            commands.append(
                "C "
                + " ".join(f"{format_number(point[0])} {format_number(point[1])}" for point in (cp1, cp2, end))
            )
    commands.append("Z")
    return " ".join(commands)


def _edge_options(
    length: float,
    min_dimension: float,
    preset: JigsawPreset,
    options: JigsawOptions,
    rng: SeededRandom,
) -> EdgeProfileOptions:
    return EdgeProfileOptions(
        min_dimension=min_dimension,
        tab_depth=options.tab_depth if options.tab_depth is not None else min_dimension * preset.tab_depth_ratio,
        tab_width=options.tab_width if options.tab_width is not None else length * preset.tab_width_ratio,
        neck_width=options.neck_width if options.neck_width is not None else length * preset.neck_width_ratio,
        bulb_roundness=options.bulb_roundness if options.bulb_roundness is not None else preset.bulb_roundness,
        shoulder_smoothness=(
            options.shoulder_smoothness if options.shoulder_smoothness is not None else preset.shoulder_smoothness
        ),
        jitter=options.jitter if options.jitter is not None else preset.jitter,
        rng=rng.random,
    )


def _seam_profile(
    seed: str,
    length: float,
    min_dimension: float,
    preset: JigsawPreset,
    options: JigsawOptions,
) -> EdgeProfile:
    rng = SeededRandom(seed)
    kind: EdgeKind = "tab" if rng.random() < 0.5 else "slot"
    return make_edge_profile(kind, length, _edge_options(length, min_dimension, preset, options, rng))


def generate_edge_grid(
    rows: int,
    cols: int,
    piece_width: float,
    piece_height: float,
    options: Optional[JigsawOptions] = None,
) -> EdgeGrid:
    """Assign every interior seam a tab or slot and derive both sides' profiles.

    Each seam draws from its own seeded stream, so its shape depends only on
    the base seed and its coordinates. The profile is generated once for one
    side and the neighbour gets its exact inverse; border edges stay flat.

    Args:
        rows: Number of rows (raised to at least 1).
        cols: Number of columns (raised to at least 1).
        piece_width: Width of a grid cell.
        piece_height: Height of a grid cell.
        options: Preset, seed and shape overrides.

    Returns:
        EdgeGrid with the four profiles of every cell.
    """
    options = options or JigsawOptions()
    preset = get_preset(options.preset)
    rows = max(1, int(rows))
    cols = max(1, int(cols))
    piece_width = max(1.0, piece_width)
    piece_height = max(1.0, piece_height)
    base_seed = options.seed
    min_dimension = min(piece_width, piece_height)

    flat_horizontal = make_flat_profile(piece_width)
    flat_vertical = make_flat_profile(piece_height)

    cells = [
        [PieceEdgeProfiles(flat_horizontal, flat_vertical, flat_horizontal, flat_vertical) for _ in range(cols)]
        for _ in range(rows)
    ]

    for row in range(rows):
        for col in range(cols - 1):
            right = _seam_profile(f"{base_seed}:vertical:{row}:{col}", piece_height, min_dimension, preset, options)
            cells[row][col].right = right
            cells[row][col + 1].left = matching_profile(right)

    for row in range(rows - 1):
        for col in range(cols):
            top = _seam_profile(f"{base_seed}:horizontal:{row}:{col}", piece_width, min_dimension, preset, options)
            cells[row + 1][col].top = top
            cells[row][col].bottom = matching_profile(top)

    return EdgeGrid(rows=rows, cols=cols, piece_width=piece_width, piece_height=piece_height, cells=cells)


def geometry_from_edge_grid(edge_grid: EdgeGrid) -> Tuple[JigsawPieceGeometry, ...]:
    """Render every cell of an edge grid into its closed boundary path."""
    pieces = []
    for row in range(edge_grid.rows):
        for col in range(edge_grid.cols):
            edges = edge_grid.profiles(row, col)
            pieces.append(
                JigsawPieceGeometry(
                    id=piece_id(row, col),
                    row=row,
                    col=col,
                    edges=PieceEdgeKinds(
                        top=edges.top.kind, right=edges.right.kind, bottom=edges.bottom.kind, left=edges.left.kind
                    ),
                    path=build_piece_path(edge_grid.piece_width, edge_grid.piece_height, edges),
                )
            )
    return tuple(pieces)


@lru_cache(maxsize=32)
def create_jigsaw_geometry(
    rows: int,
    cols: int,
    piece_width: float,
    piece_height: float,
    options: Optional[JigsawOptions] = None,
) -> Tuple[JigsawPieceGeometry, ...]:
    """Generate the render-ready shapes of every piece in the grid.

    Results are cached per argument tuple; the returned tuple and its models
    are immutable.
    """
    edge_grid = generate_edge_grid(rows, cols, piece_width, piece_height, options)
    logger.info(
        "Generated %dx%d jigsaw geometry (%d seams, piece %.3gx%.3g)",
        edge_grid.rows,
        edge_grid.cols,
        edge_grid.seam_count,
        edge_grid.piece_width,
        edge_grid.piece_height,
    )
    return geometry_from_edge_grid(edge_grid)


def sample_piece_outline(edge_grid: EdgeGrid, row: int, col: int, points_per_curve: int = 20) -> np.ndarray:
    """Sample a piece's outline as an (N, 2) polygon in piece-local coordinates.

    Args:
        edge_grid: Grid produced by generate_edge_grid.
        row: Piece row.
        col: Piece column.
        points_per_curve: Number of points to sample from each cubic segment.

    Returns:
        Closed polygon whose last point repeats the first.
    """
    edges = edge_grid.profiles(row, col)
    chunks = []
    for side in EDGE_SIDES:
        transform = SIDE_TRANSFORMS[side]
        for segment in edges.by_side(side).segments:
            points = segment.get_points(points_per_curve)
            # Drop each segment's last point, the next one starts there
            chunks.append(transform.apply(points[:-1], edge_grid.piece_width, edge_grid.piece_height))
    outline = np.concatenate(chunks)
    return np.vstack([outline, outline[:1]])
