"""Interactive editing of one generated layout.

An editing session owns the grid being edited (through a ``GridHandle``),
the masking engine bound to it and the undo/redo history. Every edit is
issued as a history command so it can be undone.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from tilesetup.domain.entities import Grid, GridHandle, MaskShape
from tilesetup.domain.services import (
    ApplyPatternOptions,
    CommandResult,
    GridStatistics,
    HistoryConfig,
    HistoryEngine,
    LayoutResult,
    MaskAddCommand,
    MaskingConfig,
    MaskingEngine,
    MaskMoveCommand,
    MaskRemoveCommand,
    MaskResizeCommand,
    PatternChangeCommand,
    PatternId,
    TileLockCommand,
    TileMoveCommand,
    TileRotateCommand,
    TileVisibilityCommand,
    apply_pattern,
    summarize_grid,
)
from tilesetup.domain.exceptions import CommandTargetMissingError
from tilesetup.domain.value_objects import (
    CircleGeometry,
    MaskGeometry,
    Point,
    PolygonGeometry,
    RectangleGeometry,
    Rotation,
)

logger = logging.getLogger(__name__)

_REPATTERN_OPTIONS = ApplyPatternOptions(
    preserve_visibility=False, preserve_masking=False, preserve_locks=False
)


class EditingSession:
    """Undoable editing of a generated layout.

    Pattern changes re-derive the grid from the unpatterned base grid and
    carry hand edits over by tile id (see ``set_pattern``). The masking
    engine is then re-bound so masks apply to the new cell positions.
    A cell covered by a mask cannot be shown by hand.

    Example:
        session = EditingSession(result, PatternId.RUNNING_BOND_SQUARE)
        with session.group("Nudge row"):
            for col in range(3):
                session.move_tile(tile_id(0, col), 1000, 0)
        session.undo()  # all three moves reverted
    """

    def __init__(
        self,
        result: LayoutResult,
        pattern_id: PatternId = PatternId.LINEAR_SQUARE,
        masking_config: MaskingConfig | None = None,
        history_config: HistoryConfig | None = None,
        history: HistoryEngine | None = None,
    ) -> None:
        self._base = result.grid.copy()
        self._pattern_id = PatternId(pattern_id)
        self.handle = GridHandle(apply_pattern(self._base, self._pattern_id))
        self.masking = MaskingEngine(self.handle.grid, masking_config)
        self.history = history or HistoryEngine(history_config)

    @property
    def grid(self) -> Grid:
        return self.handle.grid

    @property
    def pattern_id(self) -> PatternId:
        return self._pattern_id

    def statistics(self) -> GridStatistics:
        """Statistics over the currently visible cells."""
        return summarize_grid(self.handle.grid)

    # -------------------------------------------------------------------------
    # Tile edits
    # -------------------------------------------------------------------------

    def move_tile(self, tile_id: str, dx: int, dy: int) -> CommandResult:
        """Move a tile by (dx, dy) micro-units."""
        return self.history.execute(
            TileMoveCommand(self.handle, tile_id, dx, dy, command_id=self.history.next_id())
        )

    def rotate_tile(self, tile_id: str, rotation: Rotation) -> CommandResult:
        cell = self.handle.resolve(tile_id)
        if cell is None:
            return CommandResult.failed(CommandTargetMissingError(tile_id))
        return self.history.execute(
            TileRotateCommand(
                self.handle, tile_id, cell.rotation, rotation, command_id=self.history.next_id()
            )
        )

    def set_tile_locked(self, tile_id: str, locked: bool) -> CommandResult:
        cell = self.handle.resolve(tile_id)
        if cell is None:
            return CommandResult.failed(CommandTargetMissingError(tile_id))
        return self.history.execute(
            TileLockCommand(
                self.handle, tile_id, cell.locked, locked, command_id=self.history.next_id()
            )
        )

    def set_tile_visible(self, tile_id: str, visible: bool) -> CommandResult:
        cell = self.handle.resolve(tile_id)
        if cell is None:
            return CommandResult.failed(CommandTargetMissingError(tile_id))
        return self.history.execute(
            TileVisibilityCommand(
                self.handle, tile_id, cell.visible, visible, command_id=self.history.next_id()
            )
        )

    # -------------------------------------------------------------------------
    # Mask edits
    # -------------------------------------------------------------------------

    def add_rectangle_mask(
        self, mask_id: str, geometry: RectangleGeometry, label: str = ""
    ) -> CommandResult:
        return self._add_mask(mask_id, geometry, label)

    def add_circle_mask(self, mask_id: str, geometry: CircleGeometry, label: str = "") -> CommandResult:
        return self._add_mask(mask_id, geometry, label)

    def add_polygon_mask(
        self, mask_id: str, geometry: PolygonGeometry, label: str = ""
    ) -> CommandResult:
        return self._add_mask(mask_id, geometry, label)

    def _add_mask(self, mask_id: str, geometry: MaskGeometry, label: str) -> CommandResult:
        return self.history.execute(
            MaskAddCommand(self.masking, mask_id, geometry, label, command_id=self.history.next_id())
        )

    def remove_mask(self, mask_id: str) -> CommandResult:
        return self.history.execute(
            MaskRemoveCommand(self.masking, mask_id, command_id=self.history.next_id())
        )

    def move_mask(self, mask_id: str, position: Point) -> CommandResult:
        """Move a mask so its bounding box starts at ``position``."""
        mask = self.masking.get_mask(mask_id)
        if mask is None:
            return CommandResult.failed(CommandTargetMissingError(mask_id, "mask"))
        return self.history.execute(
            MaskMoveCommand(
                self.masking, mask_id, mask.position, position, command_id=self.history.next_id()
            )
        )

    def resize_mask(
        self,
        mask_id: str,
        width: int | None = None,
        height: int | None = None,
        radius: int | None = None,
    ) -> CommandResult:
        """Resize a mask with its bounding box's top-left corner fixed.

        The new geometry is computed up front so undo restores the exact
        previous shape.
        """
        mask = self.masking.get_mask(mask_id)
        if mask is None:
            return CommandResult.failed(CommandTargetMissingError(mask_id, "mask"))
        before = mask.geometry
        match before:
            case RectangleGeometry():
                after: MaskGeometry = before.resized(
                    width if width is not None else before.width,
                    height if height is not None else before.height,
                )
            case CircleGeometry():
                after = before.resized(radius if radius is not None else before.radius)
            case PolygonGeometry():
                box = before.bounds
                after = before.resized(
                    width if width is not None else box.width,
                    height if height is not None else box.height,
                )
        return self.history.execute(
            MaskResizeCommand(self.masking, mask_id, before, after, command_id=self.history.next_id())
        )

    def get_masks(self) -> list[MaskShape]:
        return self.masking.get_all_masks()

    # -------------------------------------------------------------------------
    # Pattern
    # -------------------------------------------------------------------------

    def change_pattern(self, pattern_id: PatternId) -> CommandResult:
        return self.history.execute(
            PatternChangeCommand(
                self, self._pattern_id, PatternId(pattern_id), command_id=self.history.next_id()
            )
        )

    def set_pattern(self, pattern_id: PatternId) -> list[str]:
        """Re-lay the grid in ``pattern_id`` and re-apply masks.

        Locks and hand-set visibility are copied by tile id. Each tile also
        keeps its offset from where the current pattern laid it, so tile
        moves recorded before the change still undo to the right place.

        Raises:
            UnknownPatternError: If ``pattern_id`` is not registered.
        """
        current = self.handle.grid
        laid_out = apply_pattern(self._base, self._pattern_id, _REPATTERN_OPTIONS)
        replacement = apply_pattern(self._base, pattern_id, _REPATTERN_OPTIONS)
        for cell in replacement:
            previous = current.get(cell.id)
            if previous is None:
                continue
            origin = laid_out.get(cell.id)
            if origin is not None:
                cell.position = cell.position.translate(
                    previous.position.x - origin.position.x,
                    previous.position.y - origin.position.y,
                )
            cell.locked = previous.locked
            if not previous.masked_by:
                cell.visible = previous.visible

        self.handle.replace(replacement)
        self.masking.attach_grid(replacement)
        self._pattern_id = PatternId(pattern_id)
        logger.debug(f"Session pattern set to {self._pattern_id.value}")
        return [cell.id for cell in replacement]

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    def undo(self) -> CommandResult | None:
        return self.history.undo()

    def redo(self) -> CommandResult | None:
        return self.history.redo()

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    @contextmanager
    def group(self, description: str = "Group") -> Iterator[None]:
        """Record every edit inside the block as one undo entry."""
        with self.history.group(description):
            yield

    def import_masks(self, masks: Sequence[MaskShape]) -> None:
        """Add masks without recording history (for loading a saved project)."""
        self.masking.import_masks(masks)
