"""Pointer-driven drag, snap and lock handling for a puzzle session.

The engine owns the session's PuzzleModel and is its only mutator. Every
transition happens synchronously inside one of the ``drag_*`` handlers or in
``flush()``, which the host calls once per rendered frame. Events that do not
match an active drag (unknown piece, other pointer, wrong source) are
ignored rather than raised.
"""

import logging
import math
from typing import Callable, Dict, Optional, Tuple, Union

from jigsaw_shapes import GridSize

from ..models.puzzle_model import DragSource, DragState, PointerEvent, Position, PuzzlePiece, SurfaceRect
from .drag_buffer import DragPositionBuffer
from .puzzle_state import PuzzleModel, create_tray_order

logger = logging.getLogger(__name__)

Seed = Optional[Union[str, int]]


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into [low, high]; ``high`` wins if the bounds cross."""
    return min(max(value, low), high)


class InteractionEngine:
    """Drag lifecycle and solved detection over one session's pieces."""

    def __init__(
        self,
        grid: GridSize,
        board_width: float,
        board_height: float,
        snap_distance: float,
        seed: Seed = None,
        on_solved: Optional[Callable[[], None]] = None,
        coalesce_moves: bool = True,
        board_rect: Optional[SurfaceRect] = None,
    ):
        """Initialize the engine and lay out a fresh session.

        Args:
            grid: Puzzle grid size.
            board_width: Board width in board units.
            board_height: Board height in board units.
            snap_distance: Largest drop distance from the target that still locks a piece.
            seed: Tray shuffle seed; a non-repeatable shuffle when None.
            on_solved: Called once when the last piece locks.
            coalesce_moves: Buffer drag moves until ``flush()`` instead of applying them at once.
            board_rect: Client-space rectangle of the board; identity mapping when None.
        """
        self.grid = grid
        self.board_width = board_width
        self.board_height = board_height
        self.piece_width = board_width / grid.cols
        self.piece_height = board_height / grid.rows
        self.snap_distance = snap_distance
        self.seed = seed
        self.on_solved = on_solved
        self.coalesce_moves = coalesce_moves
        self.board_rect = board_rect or SurfaceRect(0, 0, board_width, board_height)

        self._drags: Dict[int, DragState] = {}
        self._buffers: Dict[int, DragPositionBuffer] = {}
        self._solved_notified = False
        self.model = self._new_model()

    # Session lifecycle

    def _new_model(self) -> PuzzleModel:
        tray_order = create_tray_order(self.grid, self.seed)
        return PuzzleModel(self.grid, self.piece_width, self.piece_height, tray_order)

    def reset(self) -> None:
        """Rebuild every piece in a freshly shuffled tray and abort any drag."""
        self._drags.clear()
        self._buffers.clear()
        self._solved_notified = False
        self.model = self._new_model()
        logger.info("Puzzle reset: %dx%d grid, seed=%r", self.grid.rows, self.grid.cols, self.seed)

    def reseed(self, seed: Seed) -> None:
        """Change the tray seed and start over."""
        self.seed = seed
        self.reset()

    # Read-only views

    @property
    def pieces(self) -> Tuple[PuzzlePiece, ...]:
        """Pieces in render order, topmost last."""
        return tuple(self.model.pieces)

    @property
    def tray_order(self) -> Tuple[str, ...]:
        return tuple(self.model.tray_order)

    @property
    def active_piece_id(self) -> Optional[str]:
        """Piece of the most recently started drag still in flight."""
        if not self._drags:
            return None
        return list(self._drags.values())[-1].piece_id

    @property
    def active_drag_source(self) -> Optional[DragSource]:
        if not self._drags:
            return None
        return list(self._drags.values())[-1].source

    @property
    def is_dragging(self) -> bool:
        return bool(self._drags)

    @property
    def locked_count(self) -> int:
        return self.model.locked_count

    @property
    def board_piece_count(self) -> int:
        return self.model.board_piece_count

    @property
    def tray_piece_count(self) -> int:
        return self.model.tray_piece_count

    @property
    def total_pieces(self) -> int:
        return self.model.total_pieces

    @property
    def is_solved(self) -> bool:
        return self.model.is_solved

    # Coordinate helpers

    def client_to_board(self, client_x: float, client_y: float) -> Position:
        """Map a client-space point onto the board; the origin if the board has no size."""
        rect = self.board_rect
        if rect.is_empty:
            return Position(x=0.0, y=0.0)
        return Position(
            x=(client_x - rect.left) / rect.width * self.board_width,
            y=(client_y - rect.top) / rect.height * self.board_height,
        )

    def point_in_board(self, point: Position) -> bool:
        return 0 <= point.x <= self.board_width and 0 <= point.y <= self.board_height

    def _clamped_position(self, pointer: Position, drag: DragState) -> Position:
        return Position(
            x=clamp(pointer.x - drag.offset_x, 0, self.board_width - self.piece_width),
            y=clamp(pointer.y - drag.offset_y, 0, self.board_height - self.piece_height),
        )

    def _tray_offset(self, event: PointerEvent, source_rect: Optional[SurfaceRect]) -> Position:
        if source_rect is None or source_rect.is_empty:
            return Position(x=0.0, y=0.0)
        return Position(
            x=clamp((event.client_x - source_rect.left) / source_rect.width * self.piece_width, 0, self.piece_width),
            y=clamp((event.client_y - source_rect.top) / source_rect.height * self.piece_height, 0, self.piece_height),
        )

    def _match_drag(self, piece_id: str, event: PointerEvent, source: DragSource) -> Optional[DragState]:
        drag = self._drags.get(event.pointer_id)
        if drag is None or drag.piece_id != piece_id or drag.source != source:
            logger.debug("Ignoring %s event for piece %s from pointer %d", source, piece_id, event.pointer_id)
            return None
        return drag

    def _release(self, pointer_id: int) -> None:
        self._drags.pop(pointer_id, None)
        buffer = self._buffers.pop(pointer_id, None)
        if buffer is not None:
            buffer.clear()

    # Drag lifecycle

    def drag_start(
        self,
        piece_id: str,
        event: PointerEvent,
        source: DragSource,
        source_rect: Optional[SurfaceRect] = None,
    ) -> bool:
        """Claim a piece for a pointer.

        Args:
            piece_id: Piece being grabbed.
            event: Pointer-down sample.
            source: Where the piece is grabbed from ("tray" or "board").
            source_rect: Client rectangle of the tray thumbnail, for tray grabs.

        Returns:
            True if the drag started; False if the event was ignored.
        """
        if event.pointer_type == "mouse" and event.button != 0:
            return False
        if event.pointer_id in self._drags:
            logger.debug("Pointer %d already owns a drag", event.pointer_id)
            return False

        piece = self.model.get(piece_id)
        if piece is None or piece.locked or piece.location != source:
            logger.debug("Drag start rejected for piece %s from %s", piece_id, source)
            return False
        if any(drag.piece_id == piece_id for drag in self._drags.values()):
            logger.debug("Piece %s is already claimed by another pointer", piece_id)
            return False

        if source == "board":
            pointer = self.client_to_board(event.client_x, event.client_y)
            offset = Position(x=pointer.x - piece.x, y=pointer.y - piece.y)
        else:
            offset = self._tray_offset(event, source_rect)

        self._drags[event.pointer_id] = DragState(
            piece_id=piece_id,
            pointer_id=event.pointer_id,
            source=source,
            offset_x=offset.x,
            offset_y=offset.y,
            origin_location=piece.location,
            origin_x=piece.x,
            origin_y=piece.y,
        )
        self._buffers[event.pointer_id] = DragPositionBuffer()
        self.model.bring_to_front(piece_id)
        logger.debug("Pointer %d grabbed piece %s from %s", event.pointer_id, piece_id, source)
        return True

    def drag_move(self, piece_id: str, event: PointerEvent, source: DragSource) -> bool:
        """Follow the pointer, keeping the piece rectangle inside the board.

        With coalescing enabled the position waits in the pointer's buffer
        until the next ``flush()``.
        """
        drag = self._match_drag(piece_id, event, source)
        if drag is None:
            return False

        piece = self.model.get(piece_id)
        if piece is None or piece.locked:
            return False
        if source == "board" and piece.location != "board":
            return False

        position = self._clamped_position(self.client_to_board(event.client_x, event.client_y), drag)
        if self.coalesce_moves:
            self._buffers[event.pointer_id].apply_incoming(position)
        else:
            self._apply_position(piece, position)
        return True

    def flush(self) -> int:
        """Apply each drag's newest buffered position; call once per frame.

        Returns:
            Number of pieces moved.
        """
        applied = 0
        for pointer_id, drag in list(self._drags.items()):
            position = self._buffers[pointer_id].flush()
            if position is None:
                continue
            piece = self.model.get(drag.piece_id)
            if piece is not None and self._apply_position(piece, position):
                applied += 1
        return applied

    def _apply_position(self, piece: PuzzlePiece, position: Position) -> bool:
        if piece.locked:
            return False
        if piece.location == "board" and piece.x == position.x and piece.y == position.y:
            return False
        # A piece dragged out of the tray is shown on the board under the pointer
        piece.location = "board"
        piece.x = position.x
        piece.y = position.y
        return True

    def drag_end(self, piece_id: str, event: PointerEvent, source: DragSource) -> bool:
        """Drop the piece: back to the tray, free on the board, or locked on target.

        Returns:
            True if the event ended a drag; False if it was ignored.
        """
        drag = self._match_drag(piece_id, event, source)
        if drag is None:
            return False
        self._release(event.pointer_id)

        piece = self.model.get(piece_id)
        if piece is None or piece.locked:
            return True

        pointer = self.client_to_board(event.client_x, event.client_y)
        if not self.point_in_board(pointer):
            if source == "tray" and piece.location == "tray":
                return True
            piece.location = "tray"
            piece.locked = False
            logger.debug("Piece %s dropped outside the board, back to tray", piece_id)
            return True

        position = self._clamped_position(pointer, drag)
        piece.location = "board"
        if math.hypot(position.x - piece.tx, position.y - piece.ty) <= self.snap_distance:
            piece.x = piece.tx
            piece.y = piece.ty
            piece.locked = True
            logger.debug("Piece %s locked at (%.3f, %.3f)", piece_id, piece.tx, piece.ty)
        else:
            piece.x = position.x
            piece.y = position.y
            piece.locked = False
            logger.debug("Piece %s placed at (%.3f, %.3f)", piece_id, position.x, position.y)

        self._notify_if_solved()
        return True

    def drag_cancel(self, piece_id: str, event: PointerEvent, source: DragSource) -> bool:
        """Abort a drag and put the piece back where it was grabbed."""
        drag = self._match_drag(piece_id, event, source)
        if drag is None:
            return False
        self.cancel_pointer(event.pointer_id)
        return True

    def cancel_pointer(self, pointer_id: int) -> None:
        """Abort whatever drag ``pointer_id`` owns, e.g. after losing pointer capture."""
        drag = self._drags.get(pointer_id)
        if drag is None:
            return
        self._release(pointer_id)

        piece = self.model.get(drag.piece_id)
        if piece is not None and not piece.locked:
            piece.location = drag.origin_location
            piece.x = drag.origin_x
            piece.y = drag.origin_y
        logger.debug("Drag of piece %s by pointer %d cancelled", drag.piece_id, pointer_id)

    def _notify_if_solved(self) -> None:
        if self._solved_notified or not self.model.is_solved:
            return
        self._solved_notified = True
        logger.info("Puzzle solved: %d pieces locked", self.model.total_pieces)
        if self.on_solved is not None:
            self.on_solved()
