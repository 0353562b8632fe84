"""Integration tests for editing a generated layout.

These tests drive an EditingSession end-to-end and verify:
- Tile and mask edits are undoable and redoable
- Grouped edits undo as one entry, and a failing block leaves nothing behind
- Pattern changes keep locks, hand-set visibility and masks
- Statistics follow the visible cells after every edit
"""

from datetime import timedelta

import pytest

from tilesetup.application.factory import ServiceFactory
from tilesetup.application.services import EditingSession
from tilesetup.domain import units
from tilesetup.domain.entities import MaskShape, tile_id
from tilesetup.domain.exceptions import CommandTargetMissingError, MaskedTileError
from tilesetup.domain.services import HistoryConfig, LayoutResult, PatternId
from tilesetup.domain.value_objects import (
    CircleGeometry,
    Point,
    PolygonGeometry,
    RectangleGeometry,
    Rotation,
)

MM = units.MICRO_PER_MM


def _over_tile(row: int, col: int) -> RectangleGeometry:
    return RectangleGeometry(col * 200 * MM, row * 200 * MM, 200 * MM, 200 * MM)


@pytest.fixture
def session(layout_800_by_200: LayoutResult) -> EditingSession:
    """Session over a 4x4 grid of 200 mm tiles with a generous merge window."""
    factory = ServiceFactory(history_config=HistoryConfig(merge_window=timedelta(minutes=1)))
    return factory.create_editing_session(layout_800_by_200)


class TestTileEditing:
    """Tile edits through the session."""

    def test_move_undo_redo(self, session: EditingSession) -> None:
        result = session.move_tile(tile_id(0, 0), 5 * MM, 0)

        assert result.success
        assert session.grid.get(tile_id(0, 0)).position == Point(5 * MM, 0)

        session.undo()
        assert session.grid.get(tile_id(0, 0)).position == Point(0, 0)
        assert session.can_redo

        session.redo()
        assert session.grid.get(tile_id(0, 0)).position == Point(5 * MM, 0)

    def test_repeated_moves_merge(self, session: EditingSession) -> None:
        """Nudging one tile repeatedly leaves one undo entry."""
        for _ in range(3):
            session.move_tile(tile_id(2, 2), MM, 0)

        assert session.history.undo_stack_size == 1

        session.undo()
        assert session.grid.get(tile_id(2, 2)).position == Point(400 * MM, 400 * MM)

    def test_rotate(self, session: EditingSession) -> None:
        session.rotate_tile(tile_id(0, 0), Rotation.R90)
        assert session.grid.get(tile_id(0, 0)).rotation == Rotation.R90

        session.undo()
        assert session.grid.get(tile_id(0, 0)).rotation == Rotation.R0

    def test_hide_tile_updates_statistics(self, session: EditingSession) -> None:
        session.set_tile_visible(tile_id(3, 3), False)
        assert session.statistics().total_count == 15

        session.undo()
        assert session.statistics().total_count == 16

    def test_missing_tile(self, session: EditingSession) -> None:
        result = session.set_tile_locked("tile_9_9", True)

        assert not result.success
        assert isinstance(result.error, CommandTargetMissingError)
        assert not session.can_undo


class TestMaskEditing:
    """Mask edits through the session."""

    def test_add_rectangle_hides_tile(self, session: EditingSession) -> None:
        result = session.add_rectangle_mask("vanity", _over_tile(1, 1), label="Vanity")

        assert result.success
        assert not session.grid.get(tile_id(1, 1)).visible
        assert session.statistics().total_count == 15

        session.undo()
        assert session.grid.get(tile_id(1, 1)).visible
        assert session.get_masks() == []

    def test_add_circle_and_polygon(self, session: EditingSession) -> None:
        session.add_circle_mask("drain", CircleGeometry(100 * MM, 100 * MM, 50 * MM))
        session.add_polygon_mask(
            "notch",
            PolygonGeometry(
                (
                    Point(650 * MM, 650 * MM),
                    Point(750 * MM, 650 * MM),
                    Point(750 * MM, 750 * MM),
                    Point(650 * MM, 750 * MM),
                )
            ),
        )

        ids = [mask.id for mask in session.get_masks()]
        assert ids == ["drain", "notch"]
        assert not session.grid.get(tile_id(0, 0)).visible
        assert not session.grid.get(tile_id(3, 3)).visible

    def test_move_mask(self, session: EditingSession) -> None:
        session.add_rectangle_mask("vanity", _over_tile(1, 1))

        session.move_mask("vanity", Point(0, 0))

        assert not session.grid.get(tile_id(0, 0)).visible
        assert session.grid.get(tile_id(1, 1)).visible

        session.undo()
        assert session.grid.get(tile_id(0, 0)).visible
        assert not session.grid.get(tile_id(1, 1)).visible

    def test_resize_mask(self, session: EditingSession) -> None:
        session.add_rectangle_mask("vanity", _over_tile(1, 1))

        session.resize_mask("vanity", width=400 * MM)

        assert session.masking.get_mask("vanity").covered_tiles == {
            tile_id(1, 1),
            tile_id(1, 2),
        }

        session.undo()
        assert session.masking.get_mask("vanity").covered_tiles == {tile_id(1, 1)}

    def test_remove_mask_and_undo(self, session: EditingSession) -> None:
        session.add_rectangle_mask("vanity", _over_tile(1, 1))

        session.remove_mask("vanity")
        assert session.grid.get(tile_id(1, 1)).visible

        session.undo()
        assert not session.grid.get(tile_id(1, 1)).visible

    def test_edits_of_missing_mask(self, session: EditingSession) -> None:
        assert not session.move_mask("ghost", Point(0, 0)).success
        assert not session.resize_mask("ghost", width=MM).success

    def test_masked_tile_cannot_be_shown(self, session: EditingSession) -> None:
        session.add_rectangle_mask("vanity", _over_tile(1, 1))

        result = session.set_tile_visible(tile_id(1, 1), True)

        assert not result.success
        assert isinstance(result.error, MaskedTileError)
        assert not session.grid.get(tile_id(1, 1)).visible
        assert session.history.undo_stack_size == 1

    def test_import_masks_is_not_recorded(self, session: EditingSession) -> None:
        session.import_masks([MaskShape(id="saved", geometry=_over_tile(0, 0))])

        assert not session.grid.get(tile_id(0, 0)).visible
        assert not session.can_undo


class TestGrouping:
    """Grouped edits."""

    def test_group_undoes_as_one(self, session: EditingSession) -> None:
        with session.group("Prepare wall"):
            session.set_tile_locked(tile_id(0, 0), True)
            session.add_rectangle_mask("vanity", _over_tile(1, 1))
            session.move_tile(tile_id(3, 0), MM, MM)

        assert session.history.undo_stack_size == 1
        assert session.history.last_undo_description == "Prepare wall"

        session.undo()

        assert not session.grid.get(tile_id(0, 0)).locked
        assert session.get_masks() == []
        assert session.grid.get(tile_id(3, 0)).position == Point(0, 600 * MM)

    def test_failing_block_is_rolled_back(self, session: EditingSession) -> None:
        with pytest.raises(RuntimeError):
            with session.group("Broken"):
                session.move_tile(tile_id(0, 0), MM, 0)
                raise RuntimeError("stop")

        assert session.grid.get(tile_id(0, 0)).position == Point(0, 0)
        assert not session.can_undo


class TestPatternChanges:
    """Changing the pattern of an edited layout."""

    def test_change_and_undo(self, session: EditingSession) -> None:
        result = session.change_pattern(PatternId.RUNNING_BOND_SQUARE)

        assert result.success
        assert session.pattern_id == PatternId.RUNNING_BOND_SQUARE
        assert session.grid.get(tile_id(1, 0)).position == Point(100 * MM, 200 * MM)

        session.undo()

        assert session.pattern_id == PatternId.LINEAR_SQUARE
        assert session.grid.get(tile_id(1, 0)).position == Point(0, 200 * MM)

    def test_moves_survive_pattern_change(self, session: EditingSession) -> None:
        """A moved tile keeps its offset from its laid position."""
        session.move_tile(tile_id(1, 0), 50 * MM, 0)

        session.change_pattern(PatternId.RUNNING_BOND_SQUARE)
        assert session.grid.get(tile_id(1, 0)).position == Point(150 * MM, 200 * MM)

        session.undo()
        assert session.grid.get(tile_id(1, 0)).position == Point(50 * MM, 200 * MM)

        session.undo()
        assert session.grid.get(tile_id(1, 0)).position == Point(0, 200 * MM)

    def test_redo_pattern_change_keeps_moves(self, session: EditingSession) -> None:
        session.move_tile(tile_id(1, 0), 50 * MM, 0)
        session.change_pattern(PatternId.RUNNING_BOND_SQUARE)
        session.undo()

        session.redo()

        assert session.grid.get(tile_id(1, 0)).position == Point(150 * MM, 200 * MM)

    def test_locks_and_hidden_tiles_survive(self, session: EditingSession) -> None:
        session.set_tile_locked(tile_id(0, 0), True)
        session.set_tile_visible(tile_id(3, 3), False)

        session.change_pattern(PatternId.RUNNING_BOND_SQUARE)

        assert session.grid.get(tile_id(0, 0)).locked
        assert not session.grid.get(tile_id(3, 3)).visible

    def test_masks_follow_new_positions(self, session: EditingSession) -> None:
        session.add_rectangle_mask("vanity", _over_tile(1, 1))

        session.change_pattern(PatternId.RUNNING_BOND_SQUARE)

        assert session.masking.get_mask("vanity").covered_tiles == {
            tile_id(1, 0),
            tile_id(1, 1),
        }
        assert not session.grid.get(tile_id(1, 0)).visible

        session.undo()

        assert session.masking.get_mask("vanity").covered_tiles == {tile_id(1, 1)}
        assert session.grid.get(tile_id(1, 0)).visible
