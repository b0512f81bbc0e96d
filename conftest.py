"""Shared pytest fixtures for puzzle geometry and interaction tests."""

from typing import Callable, List

import pytest

from jigsaw_play import InteractionEngine
from jigsaw_shapes import GridSize

BOARD_SIZE = 300.0
SNAP_DISTANCE = 20.0


@pytest.fixture
def solved_calls() -> List[int]:
    """Collects one entry per solved notification."""
    return []


@pytest.fixture
def make_engine(solved_calls: List[int]) -> Callable[..., InteractionEngine]:
    """Factory for a 300x300 board engine seeded with "test"."""

    def factory(rows: int = 3, cols: int = 3, **kwargs: object) -> InteractionEngine:
        params: dict = {
            "seed": "test",
            "on_solved": lambda: solved_calls.append(1),
        }
        params.update(kwargs)
        return InteractionEngine(GridSize(rows=rows, cols=cols), BOARD_SIZE, BOARD_SIZE, SNAP_DISTANCE, **params)

    return factory


@pytest.fixture
def engine(make_engine: Callable[..., InteractionEngine]) -> InteractionEngine:
    """A 3x3 engine that buffers drag moves until flush()."""
    return make_engine()

