"""Grid sizing and the render-ready piece models shared with renderers."""

from typing import Dict, Literal

from pydantic import BaseModel, ConfigDict, Field

Difficulty = Literal["basic", "intermediate", "advanced"]


class GridSize(BaseModel):
    """Rows and columns of a puzzle; fixed for a session."""

    model_config = ConfigDict(frozen=True)

    rows: int = Field(..., ge=1)
    cols: int = Field(..., ge=1)

    @property
    def total(self) -> int:
        """Number of pieces in the grid."""
        return self.rows * self.cols


GRID_BY_DIFFICULTY: Dict[str, GridSize] = {
    "basic": GridSize(rows=3, cols=3),
    "intermediate": GridSize(rows=4, cols=4),
    "advanced": GridSize(rows=5, cols=5),
}


def grid_for_difficulty(difficulty: str) -> GridSize:
    """Map a difficulty level to its grid size.

    Raises:
        ValueError: If the difficulty is unknown.
    """
    if difficulty not in GRID_BY_DIFFICULTY:
        raise ValueError(f"Unknown difficulty {difficulty!r}; expected one of {list(GRID_BY_DIFFICULTY)}")
    return GRID_BY_DIFFICULTY[difficulty]


def piece_id(row: int, col: int) -> str:
    """Identifier of the piece at (row, col), e.g. ``"2-1"``."""
    return f"{row}-{col}"


class PieceEdgeKinds(BaseModel):
    """Edge kinds of one piece, clockwise from the top."""

    model_config = ConfigDict(frozen=True)

    top: Literal["flat", "tab", "slot"]
    right: Literal["flat", "tab", "slot"]
    bottom: Literal["flat", "tab", "slot"]
    left: Literal["flat", "tab", "slot"]


class JigsawPieceGeometry(BaseModel):
    """Closed boundary of one piece in piece-local coordinates.

    ``path`` uses absolute ``M``, ``C`` and ``Z`` commands starting at the
    piece's top-left corner.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    row: int
    col: int
    edges: PieceEdgeKinds
    path: str
