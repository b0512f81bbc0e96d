"""Session services: piece state, drag buffering and pointer interaction."""

from .drag_buffer import DragPositionBuffer
from .interaction import InteractionEngine
from .puzzle_state import PuzzleModel, create_tray_order

__all__ = ["DragPositionBuffer", "InteractionEngine", "PuzzleModel", "create_tray_order"]
