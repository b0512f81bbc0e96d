"""Geometric logic for a single jigsaw edge: flat, tab or slot."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Sequence

from .models import CubicSegment, EdgeKind, EdgeProfile, EdgeProfileOptions, JigsawPreset, Point

# Decimal places kept on every emitted coordinate
PRECISION = 3
_QUANTUM = Decimal(1).scaleb(-PRECISION)

# Maximum perpendicular overshoot relative to the tab depth
Y_HEADROOM = 1.12

MAX_JITTER = 0.12

JIGSAW_PRESETS: Dict[str, JigsawPreset] = {
    "soft_realistic": JigsawPreset(
        tab_depth_ratio=0.22,
        tab_width_ratio=0.46,
        neck_width_ratio=0.24,
        bulb_roundness=0.66,
        shoulder_smoothness=0.58,
        jitter=0.05,
    ),
    "very_soft": JigsawPreset(
        tab_depth_ratio=0.2,
        tab_width_ratio=0.5,
        neck_width_ratio=0.29,
        bulb_roundness=0.82,
        shoulder_smoothness=0.74,
        jitter=0.04,
    ),
}


def get_preset(name: str) -> JigsawPreset:
    """Look up a named shape preset.

    Raises:
        ValueError: If ``name`` is not a known preset.
    """
    try:
        return JIGSAW_PRESETS[name]
    except KeyError:
        raise ValueError(f"Unknown jigsaw preset {name!r}; expected one of {sorted(JIGSAW_PRESETS)}") from None


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into [low, high]; ``high`` wins if the bounds cross."""
    return min(max(value, low), high)


def round_coord(value: float) -> float:
    """Round half away from zero to PRECISION decimals, never returning -0.0."""
    rounded = float(Decimal(value).quantize(_QUANTUM, rounding=ROUND_HALF_UP))
    return rounded + 0.0


def _round_point(point: Point) -> Point:
    return Point(round_coord(point.x), round_coord(point.y))


def make_flat_profile(length: float) -> EdgeProfile:
    """Build a straight border edge from (0, 0) to (length, 0)."""
    safe_length = max(1.0, length)
    segment = CubicSegment(
        start=Point(0.0, 0.0),
        cp1=Point(safe_length / 3, 0.0),
        cp2=Point(safe_length * 2 / 3, 0.0),
        end=Point(safe_length, 0.0),
    )
    return EdgeProfile(kind="flat", length=safe_length, depth=0.0, segments=(segment,))


def build_hermite_segments(points: Sequence[Point], tangents: Sequence[Point], y_limit: float) -> List[CubicSegment]:
    """Fit cubic segments through ``points`` with the given end tangents.

    Each Hermite span (p0, m0, p1, m1) becomes a Bezier with control points
    p0 + m0/3 and p1 - m1/3. Control x values are kept strictly inside the
    span so the curve stays monotonic in x, and control y values are limited
    to +/- ``y_limit``.
    """
    segments = []
    for index in range(len(points) - 1):
        start = points[index]
        end = points[index + 1]
        tangent_start = tangents[index]
        tangent_end = tangents[index + 1]

        span = end.x - start.x
        cp1x = start.x + tangent_start.x / 3
        cp2x = end.x - tangent_end.x / 3

        if span > 1e-4:
            epsilon = min(span * 0.2, max(0.001, span * 0.06))
            cp1x = clamp(cp1x, start.x + epsilon, end.x - epsilon)
            cp2x = clamp(cp2x, start.x + epsilon, end.x - epsilon)

        cp1y = clamp(start.y + tangent_start.y / 3, -y_limit, y_limit)
        cp2y = clamp(end.y - tangent_end.y / 3, -y_limit, y_limit)

        segments.append(CubicSegment(start, Point(cp1x, cp1y), Point(cp2x, cp2y), end))
    return segments


def make_edge_profile(kind: EdgeKind, length: float, options: EdgeProfileOptions) -> EdgeProfile:
    """Generate one edge's boundary curve.

    Random draws happen in a fixed order: depth, tab width, neck width, bulb
    roundness, shoulder smoothness. Anything other than ``"tab"`` or
    ``"slot"`` produces a flat edge.

    Args:
        kind: "tab" for a protrusion, "slot" for an indentation, "flat" otherwise.
        length: Edge length; values below 1 are raised to 1.
        options: Shape overrides, scale and random source.

    Returns:
        An EdgeProfile whose coordinates are rounded to PRECISION decimals.
    """
    safe_length = max(1.0, length)

    if kind not in ("tab", "slot"):
        return make_flat_profile(safe_length)

    rng = options.rng if options.rng is not None else (lambda: 0.5)
    jitter_amount = clamp(options.jitter if options.jitter is not None else 0.0, 0.0, MAX_JITTER)

    def jitter_factor() -> float:
        return 1 + (rng() * 2 - 1) * jitter_amount

    min_dimension = max(1.0, options.min_dimension)

    base_depth = options.tab_depth if options.tab_depth is not None else min_dimension * 0.22
    depth_abs = clamp(base_depth * jitter_factor(), min_dimension * 0.18, min_dimension * 0.26)

    corner_safe_margin = clamp(safe_length * 0.14, 6, safe_length * 0.22)
    base_tab_width = options.tab_width if options.tab_width is not None else safe_length * 0.46
    tab_width = clamp(base_tab_width * jitter_factor(), safe_length * 0.34, safe_length - corner_safe_margin * 2)

    base_neck_width = options.neck_width if options.neck_width is not None else safe_length * 0.24
    neck_width = clamp(base_neck_width * jitter_factor(), tab_width * 0.38, tab_width * 0.78)

    bulb_roundness = clamp(
        (options.bulb_roundness if options.bulb_roundness is not None else 0.66) * jitter_factor(), 0.35, 0.95
    )
    shoulder_smoothness = clamp(
        (options.shoulder_smoothness if options.shoulder_smoothness is not None else 0.58) * jitter_factor(),
        0.35,
        0.95,
    )

    direction = 1 if kind == "tab" else -1
    depth = direction * depth_abs

    shoulder_start = (safe_length - tab_width) / 2
    shoulder_end = shoulder_start + tab_width
    neck_start = shoulder_start + (tab_width - neck_width) / 2
    neck_end = neck_start + neck_width
    center = safe_length / 2

    neck_height = depth * (0.53 + bulb_roundness * 0.24)
    peak_height = depth

    # corner, shoulder-start, neck, peak, neck, shoulder-end, corner
    points = [
        Point(0.0, 0.0),
        Point(shoulder_start, 0.0),
        Point(neck_start, neck_height),
        Point(center, peak_height),
        Point(neck_end, neck_height),
        Point(shoulder_end, 0.0),
        Point(safe_length, 0.0),
    ]

    shoulder_span = max(4.0, neck_start - shoulder_start)
    shoulder_tangent = shoulder_span * (0.9 + shoulder_smoothness * 0.85)

    neck_dx = max(neck_width * 0.22, shoulder_span * (0.45 + bulb_roundness * 0.35))
    neck_dy = peak_height * (0.7 + bulb_roundness * 0.25)

    crown_dx = max(3.0, neck_width * (0.35 + bulb_roundness * 0.2))
    crown_dy = peak_height * (0.06 + (1 - bulb_roundness) * 0.08)

    trailing_span = max(4.0, safe_length - shoulder_end)
    trailing_tangent = trailing_span * (0.9 + shoulder_smoothness * 0.85)

    tangents = [
        Point(max(6.0, shoulder_start * 0.9), 0.0),
        Point(shoulder_tangent, 0.0),
        Point(neck_dx, neck_dy),
        Point(crown_dx, crown_dy),
        Point(neck_dx, -neck_dy),
        Point(trailing_tangent, 0.0),
        Point(max(6.0, trailing_span * 0.9), 0.0),
    ]

    segments = tuple(
        CubicSegment(
            _round_point(segment.start),
            _round_point(segment.cp1),
            _round_point(segment.cp2),
            _round_point(segment.end),
        )
        for segment in build_hermite_segments(points, tangents, depth_abs * Y_HEADROOM)
    )

    return EdgeProfile(kind=kind, length=round_coord(safe_length), depth=round_coord(depth), segments=segments)


def invert_profile(profile: EdgeProfile) -> EdgeProfile:
    """Flip a profile across its edge line: tab <-> slot, y and depth negated."""
    inverted_kind: EdgeKind = {"flat": "flat", "tab": "slot", "slot": "tab"}[profile.kind]

    def flip(point: Point) -> Point:
        return Point(point.x, round_coord(-point.y))

    return EdgeProfile(
        kind=inverted_kind,
        length=profile.length,
        depth=round_coord(-profile.depth),
        segments=tuple(
            CubicSegment(flip(s.start), flip(s.cp1), flip(s.cp2), flip(s.end)) for s in profile.segments
        ),
    )


def reverse_profile(profile: EdgeProfile) -> EdgeProfile:
    """Walk a profile from its far corner back to the origin.

    Segment order is reversed, x is mirrored about length/2 and each segment
    swaps start/end and cp1/cp2.
    """

    def mirror(point: Point) -> Point:
        return Point(round_coord(profile.length - point.x), point.y)

    return EdgeProfile(
        kind=profile.kind,
        length=profile.length,
        depth=profile.depth,
        segments=tuple(
            CubicSegment(mirror(s.end), mirror(s.cp2), mirror(s.cp1), mirror(s.start))
            for s in reversed(profile.segments)
        ),
    )


def matching_profile(profile: EdgeProfile) -> EdgeProfile:
    """Return the profile the neighbouring piece needs on the shared edge."""
    return reverse_profile(invert_profile(profile))
