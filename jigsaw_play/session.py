"""A puzzle session: generated piece shapes plus the interaction engine."""

import logging
from typing import Callable, Dict, Optional, Tuple, Union, cast

from jigsaw_shapes import JigsawOptions, JigsawPieceGeometry, create_jigsaw_geometry, grid_for_difficulty

from .config import Settings
from .services.interaction import InteractionEngine

logger = logging.getLogger(__name__)

# Shapes still need a seed when the session has none
DEFAULT_SHAPE_SEED = "jigsaw-seed"

_KEEP = object()


class PuzzleSession:
    """Ties a difficulty, board size and seed to piece geometry and live state.

    Geometry is regenerated as a whole whenever the grid, piece size or seed
    changes; the engine is rebuilt at the same time so pieces and shapes
    always describe the same puzzle.

    Without a seed the shapes come from DEFAULT_SHAPE_SEED and the tray is
    shuffled afresh on every start.
    """

    def __init__(
        self,
        difficulty: str,
        board_width: float,
        board_height: float,
        snap_distance: float,
        seed: Optional[str] = None,
        preset: str = "soft_realistic",
        on_solved: Optional[Callable[[], None]] = None,
        coalesce_moves: bool = True,
        image_source: Optional[str] = None,
    ):
        self.board_width = board_width
        self.board_height = board_height
        self.snap_distance = snap_distance
        self.preset = preset
        self.on_solved = on_solved
        self.coalesce_moves = coalesce_moves
        self.image_source = image_source
        self._configure(difficulty, seed)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        difficulty: Optional[str] = None,
        on_solved: Optional[Callable[[], None]] = None,
    ) -> "PuzzleSession":
        """Build a session from application settings."""
        return cls(
            difficulty=difficulty or settings.DIFFICULTY,
            board_width=settings.BOARD_WIDTH,
            board_height=settings.BOARD_HEIGHT,
            snap_distance=settings.SNAP_DISTANCE,
            seed=settings.SEED,
            preset=settings.PRESET,
            on_solved=on_solved,
            coalesce_moves=settings.COALESCE_DRAG_MOVES,
            image_source=settings.IMAGE_SOURCE,
        )

    def _configure(self, difficulty: str, seed: Optional[str]) -> None:
        grid = grid_for_difficulty(difficulty)
        # Shapes and tray order share one seed per difficulty
        session_seed = None if seed is None else f"{seed}-{difficulty}"
        shape_seed = session_seed if session_seed is not None else f"{DEFAULT_SHAPE_SEED}-{difficulty}"
        piece_width = self.board_width / grid.cols
        piece_height = self.board_height / grid.rows

        geometry = create_jigsaw_geometry(
            grid.rows,
            grid.cols,
            piece_width,
            piece_height,
            JigsawOptions(preset=self.preset, seed=shape_seed),
        )
        engine = InteractionEngine(
            grid,
            self.board_width,
            self.board_height,
            self.snap_distance,
            seed=session_seed,
            on_solved=self.on_solved,
            coalesce_moves=self.coalesce_moves,
        )

        self.difficulty = difficulty
        self.seed = seed
        self.grid = grid
        self.piece_width = piece_width
        self.piece_height = piece_height
        self.geometry: Tuple[JigsawPieceGeometry, ...] = geometry
        self._geometry_by_id: Dict[str, JigsawPieceGeometry] = {piece.id: piece for piece in geometry}
        self.engine = engine
        logger.info("Session ready: %s (%dx%d), seed=%r", difficulty, grid.rows, grid.cols, session_seed)

    def geometry_for(self, piece_id: str) -> Optional[JigsawPieceGeometry]:
        """Look up the outline of a piece by id."""
        return self._geometry_by_id.get(piece_id)

    def restart(self, seed: Union[Optional[str], object] = _KEEP, difficulty: Optional[str] = None) -> None:
        """Start the puzzle over, regenerating shapes if the seed or difficulty changed.

        Leaving ``seed`` out keeps the current one; passing None drops it.
        """
        new_seed = self.seed if seed is _KEEP else cast(Optional[str], seed)
        difficulty = difficulty or self.difficulty
        if new_seed == self.seed and difficulty == self.difficulty:
            self.engine.reset()
        else:
            self._configure(difficulty, new_seed)
