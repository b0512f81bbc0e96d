"""Jigsaw play - drag, snap and lock handling for jigsaw puzzle sessions."""

from .models import PointerEvent, Position, PuzzlePiece, SurfaceRect
from .services import DragPositionBuffer, InteractionEngine, PuzzleModel, create_tray_order
from .session import PuzzleSession

__all__ = [
    "DragPositionBuffer",
    "InteractionEngine",
    "PointerEvent",
    "Position",
    "PuzzleModel",
    "PuzzlePiece",
    "PuzzleSession",
    "SurfaceRect",
    "create_tray_order",
]
