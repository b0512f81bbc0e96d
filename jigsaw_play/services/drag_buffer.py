"""Last-write-wins slot for coalescing drag positions to one per frame."""

from typing import Optional

from ..models.puzzle_model import Position


class DragPositionBuffer:
    """Hold the newest pending position until the next frame tick.

    Intermediate positions written between two flushes are overwritten; only
    the last one is handed out.
    """

    def __init__(self) -> None:
        self._pending: Optional[Position] = None

    def apply_incoming(self, position: Position) -> None:
        """Store ``position``, replacing any position not yet flushed."""
        self._pending = position

    def flush(self) -> Optional[Position]:
        """Take the pending position, leaving the slot empty."""
        position, self._pending = self._pending, None
        return position

    def clear(self) -> None:
        """Drop the pending position without applying it."""
        self._pending = None

    @property
    def has_pending(self) -> bool:
        return self._pending is not None
