"""Tests for settings and the puzzle session façade."""

from typing import List

import pytest
from pydantic import ValidationError

from jigsaw_play import PointerEvent, PuzzleSession
from jigsaw_play.config import Settings, get_settings
from jigsaw_play.session import DEFAULT_SHAPE_SEED
from jigsaw_shapes import JigsawOptions, create_jigsaw_geometry


def test_default_settings() -> None:
    settings = Settings()
    assert settings.BOARD_WIDTH == 720
    assert settings.BOARD_HEIGHT == 720
    assert settings.SNAP_DISTANCE == 28
    assert settings.DIFFICULTY == "basic"
    assert settings.PRESET == "soft_realistic"
    assert settings.COALESCE_DRAG_MOVES is True


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JIGSAW_SNAP_DISTANCE", "12.5")
    monkeypatch.setenv("JIGSAW_DIFFICULTY", "advanced")
    monkeypatch.setenv("JIGSAW_SEED", "from-env")
    settings = Settings()
    assert settings.SNAP_DISTANCE == 12.5
    assert settings.DIFFICULTY == "advanced"
    assert settings.SEED == "from-env"


def test_settings_config_is_a_settings_dict() -> None:
    assert Settings.model_config["env_prefix"] == "JIGSAW_"
    assert Settings.model_config["case_sensitive"] is True
    assert Settings(SEED=None).SEED is None


@pytest.mark.parametrize(
    "field,value",
    [("PRESET", "jagged"), ("DIFFICULTY", "impossible"), ("BOARD_WIDTH", 0), ("SNAP_DISTANCE", -1)],
)
def test_invalid_settings_are_rejected(field: str, value: object) -> None:
    with pytest.raises(ValidationError):
        Settings(**{field: value})


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()


class TestPuzzleSession:
    @pytest.fixture
    def session(self) -> PuzzleSession:
        return PuzzleSession.from_settings(Settings(SEED="session"))

    def test_geometry_and_pieces_describe_the_same_grid(self, session: PuzzleSession) -> None:
        assert (session.grid.rows, session.grid.cols) == (3, 3)
        assert session.piece_width == 240
        assert len(session.geometry) == session.engine.total_pieces == 9
        for piece in session.engine.pieces:
            geometry = session.geometry_for(piece.id)
            assert geometry is not None
            assert (geometry.row, geometry.col) == (piece.row, piece.col)
        assert session.geometry_for("7-7") is None

    def test_image_source_is_passed_through(self, session: PuzzleSession) -> None:
        assert session.image_source == "/assets/puzzle.jpg"

    def test_restart_with_same_parameters_keeps_shapes(self, session: PuzzleSession) -> None:
        geometry = session.geometry
        session.engine.drag_start("0-0", PointerEvent(pointer_id=1, client_x=0, client_y=0), "tray")
        session.engine.drag_end("0-0", PointerEvent(pointer_id=1, client_x=5, client_y=5), "tray")
        assert session.engine.locked_count == 1

        session.restart()
        assert session.geometry is geometry
        assert session.engine.locked_count == 0

    def test_restart_with_new_seed_regenerates_shapes(self, session: PuzzleSession) -> None:
        paths = [piece.path for piece in session.geometry]
        session.restart(seed="another")
        assert [piece.path for piece in session.geometry] != paths
        assert session.seed == "another"

    def test_restart_with_new_difficulty_resizes_grid(self, session: PuzzleSession) -> None:
        session.restart(difficulty="intermediate")
        assert len(session.geometry) == 16
        assert session.engine.total_pieces == 16
        assert session.piece_width == 180

    def test_solved_callback_reaches_the_engine(self) -> None:
        calls: List[int] = []
        session = PuzzleSession(
            difficulty="basic",
            board_width=300,
            board_height=300,
            snap_distance=10,
            seed="cb",
            on_solved=lambda: calls.append(1),
        )
        for index, piece in enumerate(list(session.engine.pieces)):
            session.engine.drag_start(piece.id, PointerEvent(pointer_id=index, client_x=0, client_y=0), "tray")
            session.engine.drag_end(
                piece.id, PointerEvent(pointer_id=index, client_x=piece.tx, client_y=piece.ty), "tray"
            )
        assert calls == [1]

    def test_unknown_difficulty_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown difficulty"):
            PuzzleSession("expert", 300, 300, 10, "seed")


class TestUnseededSession:
    @pytest.fixture
    def session(self) -> PuzzleSession:
        return PuzzleSession.from_settings(Settings(SEED=None, BOARD_WIDTH=300, BOARD_HEIGHT=300))

    def test_shapes_fall_back_to_the_default_seed(self, session: PuzzleSession) -> None:
        assert session.seed is None
        assert session.engine.seed is None
        expected = create_jigsaw_geometry(3, 3, 100, 100, JigsawOptions(seed=f"{DEFAULT_SHAPE_SEED}-basic"))
        assert session.geometry is expected

    def test_tray_is_still_a_full_permutation(self, session: PuzzleSession) -> None:
        assert sorted(session.engine.tray_order) == sorted(piece.id for piece in session.geometry)

    def test_restart_keeps_missing_seed(self, session: PuzzleSession) -> None:
        geometry = session.geometry
        session.restart()
        assert session.seed is None
        assert session.geometry is geometry

    def test_restart_can_add_and_drop_a_seed(self, session: PuzzleSession) -> None:
        session.restart(seed="picked")
        assert session.seed == "picked"
        assert session.engine.seed == "picked-basic"

        session.restart(seed=None)
        assert session.seed is None
        assert session.engine.seed is None
