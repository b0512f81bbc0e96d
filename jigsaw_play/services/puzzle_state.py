"""Placement state for every piece of a puzzle session."""

import random
from typing import Dict, List, Optional, Union

from jigsaw_shapes import GridSize, SeededRandom, piece_id, shuffled

from ..models.puzzle_model import PuzzlePiece


def create_tray_order(grid: GridSize, seed: Optional[Union[str, int]] = None) -> List[str]:
    """Shuffle the piece ids into tray order.

    Args:
        grid: Puzzle grid size.
        seed: Seed for a repeatable order; a fresh random order when None.

    Returns:
        List of piece ids, first tray slot first.
    """
    ids = [piece_id(row, col) for row in range(grid.rows) for col in range(grid.cols)]
    draw = random.random if seed is None else SeededRandom(f"{seed}:tray:{grid.rows}x{grid.cols}").random
    return shuffled(ids, draw)


class PuzzleModel:
    """Pieces of one session in render order (last piece is drawn on top)."""

    def __init__(self, grid: GridSize, piece_width: float, piece_height: float, tray_order: List[str]):
        """Create every piece in the tray with its correct board target.

        Args:
            grid: Puzzle grid size.
            piece_width: Width of a grid cell on the board.
            piece_height: Height of a grid cell on the board.
            tray_order: Piece ids in tray slot order.
        """
        self.grid = grid
        self.piece_width = piece_width
        self.piece_height = piece_height
        self.tray_order = list(tray_order)
        slots = {pid: index for index, pid in enumerate(self.tray_order)}

        self.pieces: List[PuzzlePiece] = []
        for row in range(grid.rows):
            for col in range(grid.cols):
                pid = piece_id(row, col)
                self.pieces.append(
                    PuzzlePiece(
                        id=pid,
                        row=row,
                        col=col,
                        location="tray",
                        x=col * piece_width,
                        y=row * piece_height,
                        tx=col * piece_width,
                        ty=row * piece_height,
                        tray_slot=slots.get(pid),
                        locked=False,
                    )
                )
        self._by_id: Dict[str, PuzzlePiece] = {piece.id: piece for piece in self.pieces}

    def get(self, pid: str) -> Optional[PuzzlePiece]:
        """Return the piece with id ``pid``, or None if it is not in this puzzle."""
        return self._by_id.get(pid)

    def bring_to_front(self, pid: str) -> None:
        """Move a piece to the end of the render order."""
        piece = self._by_id.get(pid)
        if piece is None or self.pieces[-1] is piece:
            return
        self.pieces.remove(piece)
        self.pieces.append(piece)

    def tray_pieces(self) -> List[PuzzlePiece]:
        """Pieces currently in the tray, ordered by tray slot."""
        in_tray = [piece for piece in self.pieces if piece.location == "tray"]
        return sorted(in_tray, key=lambda piece: (piece.tray_slot is None, piece.tray_slot or 0))

    @property
    def total_pieces(self) -> int:
        return len(self.pieces)

    @property
    def locked_count(self) -> int:
        return sum(1 for piece in self.pieces if piece.locked)

    @property
    def board_piece_count(self) -> int:
        return sum(1 for piece in self.pieces if piece.location == "board")

    @property
    def tray_piece_count(self) -> int:
        return sum(1 for piece in self.pieces if piece.location == "tray")

    @property
    def is_solved(self) -> bool:
        """True when every piece is locked on the board."""
        return self.total_pieces > 0 and self.locked_count == self.total_pieces
