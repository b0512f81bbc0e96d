"""Data models for puzzle sessions."""

from .puzzle_model import DragSource, DragState, PieceLocation, PointerEvent, Position, PuzzlePiece, SurfaceRect

__all__ = ["DragSource", "DragState", "PieceLocation", "PointerEvent", "Position", "PuzzlePiece", "SurfaceRect"]
