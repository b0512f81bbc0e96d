"""Data models for puzzle pieces and pointer input."""

from dataclasses import dataclass
from typing import Literal, Optional

from pydantic import BaseModel, Field

PieceLocation = Literal["tray", "board"]
DragSource = Literal["tray", "board"]


class Position(BaseModel):
    """Model representing a position in 2D space."""

    x: float
    y: float


class PuzzlePiece(BaseModel):
    """Mutable placement state of one piece for the current session.

    ``(tx, ty)`` is the correct board position and never changes; ``(x, y)``
    is where the piece is currently drawn. ``locked`` is terminal.
    """

    id: str
    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)
    location: PieceLocation = "tray"
    x: float
    y: float
    tx: float
    ty: float
    tray_slot: Optional[int] = None
    locked: bool = False

    @property
    def state(self) -> str:
        """One of "tray", "board-free" or "board-locked"."""
        if self.location == "tray":
            return "tray"
        return "board-locked" if self.locked else "board-free"


@dataclass(frozen=True)
class PointerEvent:
    """A pointer sample in client (screen) coordinates."""

    pointer_id: int
    client_x: float
    client_y: float
    pointer_type: str = "mouse"
    # 0 is the primary mouse button
    button: int = 0


@dataclass(frozen=True)
class SurfaceRect:
    """Measured client-space rectangle of a rendering surface."""

    left: float
    top: float
    width: float
    height: float

    @property
    def is_empty(self) -> bool:
        """True when the surface has no measurable area."""
        return self.width == 0 or self.height == 0


@dataclass
class DragState:
    """Ownership record of an in-flight drag."""

    piece_id: str
    pointer_id: int
    source: DragSource
    offset_x: float
    offset_y: float
    # Placement at grab time, restored on cancel
    origin_location: PieceLocation
    origin_x: float
    origin_y: float
