"""Data models for jigsaw edge profiles and piece geometry."""

from dataclasses import dataclass, field
from typing import Callable, List, Literal, Optional, Tuple

import numpy as np

EdgeKind = Literal["flat", "tab", "slot"]

EDGE_SIDES: Tuple[str, str, str, str] = ("top", "right", "bottom", "left")


@dataclass(frozen=True)
class Point:
    """A 2D coordinate in a piece-local or board-local frame."""

    x: float
    y: float


@dataclass(frozen=True)
class CubicSegment:
    """A cubic Bezier segment defined by 4 control points."""

    start: Point
    cp1: Point
    cp2: Point
    end: Point

    def evaluate(self, t: float) -> Tuple[float, float]:
        """Evaluate the segment at parameter t (0 to 1)."""
        t2 = t * t
        t3 = t2 * t
        mt = 1 - t
        mt2 = mt * mt
        mt3 = mt2 * mt

        x = mt3 * self.start.x + 3 * mt2 * t * self.cp1.x + 3 * mt * t2 * self.cp2.x + t3 * self.end.x
        y = mt3 * self.start.y + 3 * mt2 * t * self.cp1.y + 3 * mt * t2 * self.cp2.y + t3 * self.end.y
        return (x, y)

    def get_points(self, num_points: int = 50) -> np.ndarray:
        """Generate points along the segment."""
        t_values = np.linspace(0, 1, num_points)
        points = [self.evaluate(t) for t in t_values]
        return np.array(points)


@dataclass(frozen=True)
class EdgeProfile:
    """A directed edge curve from (0, 0) to (length, 0).

    The curve is authored in the edge's own frame: x runs along the edge and
    y is the perpendicular displacement. ``depth`` is the signed peak
    displacement (0 for flat, positive for tab, negative for slot).
    """

    kind: EdgeKind
    length: float
    depth: float
    segments: Tuple[CubicSegment, ...]


@dataclass
class PieceEdgeProfiles:
    """The four edge profiles bounding one grid cell."""

    top: EdgeProfile
    right: EdgeProfile
    bottom: EdgeProfile
    left: EdgeProfile

    def by_side(self, side: str) -> EdgeProfile:
        """Return the profile for ``side`` (one of top/right/bottom/left)."""
        return getattr(self, side)


@dataclass(frozen=True)
class JigsawPreset:
    """Shape ratios for a family of tabs.

    Depth is relative to the piece's smaller dimension; widths are relative
    to the edge length.
    """

    tab_depth_ratio: float
    tab_width_ratio: float
    neck_width_ratio: float
    bulb_roundness: float
    shoulder_smoothness: float
    jitter: float


@dataclass
class EdgeProfileOptions:
    """Inputs for building a single tab or slot profile."""

    # Smaller of the piece's width/height, scales protrusion depth
    min_dimension: float
    tab_depth: Optional[float] = None
    tab_width: Optional[float] = None
    neck_width: Optional[float] = None
    bulb_roundness: Optional[float] = None
    shoulder_smoothness: Optional[float] = None
    jitter: Optional[float] = None
    # Source of uniform draws in [0, 1); a constant 0.5 when omitted
    rng: Optional[Callable[[], float]] = None


@dataclass(frozen=True)
class JigsawOptions:
    """Options for generating a full puzzle's piece shapes.

    Absolute overrides (``tab_depth``, ``tab_width``, ``neck_width``) and shape
    factors take precedence over the preset's ratios.
    """

    preset: str = "soft_realistic"
    seed: object = "jigsaw-seed"
    tab_depth: Optional[float] = None
    tab_width: Optional[float] = None
    neck_width: Optional[float] = None
    bulb_roundness: Optional[float] = None
    shoulder_smoothness: Optional[float] = None
    jitter: Optional[float] = None


@dataclass
class EdgeGrid:
    """Per-cell edge profiles for a rows x cols puzzle."""

    rows: int
    cols: int
    piece_width: float
    piece_height: float
    cells: List[List[PieceEdgeProfiles]] = field(default_factory=list)

    def profiles(self, row: int, col: int) -> PieceEdgeProfiles:
        """Return the edge profiles of the piece at (row, col)."""
        return self.cells[row][col]

    @property
    def seam_count(self) -> int:
        """Number of interior seams carrying a tab/slot pair."""
        return self.rows * (self.cols - 1) + (self.rows - 1) * self.cols
