"""Reversible edit commands.

Each command stores only the delta needed to apply and reverse one edit.
Tile commands hold a ``GridHandle`` plus a tile id and resolve the cell on
every execute/undo, so they keep working after the grid behind the handle
is replaced. A command whose target has disappeared reports a failed
``CommandResult`` instead of raising.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import ClassVar

from tilesetup.domain.entities import GridHandle, TileCell
from tilesetup.domain.exceptions import (
    CommandTargetMissingError,
    MaskedTileError,
    TileSetupError,
)
from tilesetup.domain.services.pattern_engine import PatternId
from tilesetup.domain.value_objects import MaskGeometry, Point, Rotation

from .targets import MaskRepository, PatternTarget


class CommandType(str, Enum):
    """Kinds of recorded edits."""

    TILE_MOVE = "tile_move"
    TILE_ROTATE = "tile_rotate"
    TILE_VISIBILITY = "tile_visibility"
    TILE_LOCK = "tile_lock"
    MASK_ADD = "mask_add"
    MASK_REMOVE = "mask_remove"
    MASK_MOVE = "mask_move"
    MASK_RESIZE = "mask_resize"
    PATTERN_CHANGE = "pattern_change"
    BATCH = "batch"


@dataclass(frozen=True)
class CommandResult:
    """Outcome of executing or undoing a command.

    Attributes:
        success: Whether the edit was applied.
        affected_ids: Ids of tiles, masks or other targets that changed.
        error: Why the edit failed, when it did.
    """

    success: bool
    affected_ids: list[str] = field(default_factory=list)
    error: TileSetupError | None = None

    @classmethod
    def ok(cls, affected_ids: list[str] | None = None) -> CommandResult:
        return cls(success=True, affected_ids=list(dict.fromkeys(affected_ids or [])))

    @classmethod
    def failed(cls, error: TileSetupError) -> CommandResult:
        return cls(success=False, error=error)


def new_command_id() -> str:
    """Random command id, for commands created outside a history engine."""
    return f"cmd_{uuid.uuid4().hex[:12]}"


class Command(ABC):
    """Base class for reversible edits.

    Subclasses implement ``execute`` and ``undo``. Merging is opt-in:
    the defaults report that a command never merges.
    """

    command_type: ClassVar[CommandType]

    def __init__(
        self,
        description: str,
        command_id: str | None = None,
        timestamp: datetime | None = None,
    ) -> None:
        self.id = command_id or new_command_id()
        self.timestamp = timestamp or datetime.now()
        self.description = description

    @abstractmethod
    def execute(self) -> CommandResult:
        """Apply the edit."""

    @abstractmethod
    def undo(self) -> CommandResult:
        """Reverse the edit."""

    def can_merge_with(self, other: Command) -> bool:
        """Whether ``other`` can be folded into this command."""
        return False

    def merge_with(self, other: Command) -> Command | None:
        """A single command equivalent to this one followed by ``other``."""
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, description={self.description!r})"


# =============================================================================
# Tile commands
# =============================================================================


class _TileCommand(Command):
    """Shared target resolution for commands editing one cell."""

    def __init__(
        self,
        handle: GridHandle,
        tile_id: str,
        description: str,
        command_id: str | None = None,
        timestamp: datetime | None = None,
    ) -> None:
        super().__init__(description, command_id, timestamp)
        self.handle = handle
        self.tile_id = tile_id

    def _apply(self, forward: bool) -> CommandResult:
        cell = self.handle.resolve(self.tile_id)
        if cell is None:
            return CommandResult.failed(CommandTargetMissingError(self.tile_id, "tile"))
        self._update(cell, forward)
        return CommandResult.ok([self.tile_id])

    @abstractmethod
    def _update(self, cell: TileCell, forward: bool) -> None: ...

    def execute(self) -> CommandResult:
        return self._apply(forward=True)

    def undo(self) -> CommandResult:
        return self._apply(forward=False)


class TileMoveCommand(_TileCommand):
    """Move a tile by (dx, dy) micro-units."""

    command_type = CommandType.TILE_MOVE

    def __init__(
        self,
        handle: GridHandle,
        tile_id: str,
        dx: int,
        dy: int,
        command_id: str | None = None,
        timestamp: datetime | None = None,
    ) -> None:
        super().__init__(handle, tile_id, f"Move {tile_id} by ({dx}, {dy})", command_id, timestamp)
        self.dx = dx
        self.dy = dy

    def _update(self, cell: TileCell, forward: bool) -> None:
        sign = 1 if forward else -1
        cell.position = cell.position.translate(sign * self.dx, sign * self.dy)

    def can_merge_with(self, other: Command) -> bool:
        return isinstance(other, TileMoveCommand) and other.tile_id == self.tile_id

    def merge_with(self, other: Command) -> Command | None:
        if not isinstance(other, TileMoveCommand) or not self.can_merge_with(other):
            return None
        return TileMoveCommand(
            self.handle,
            self.tile_id,
            self.dx + other.dx,
            self.dy + other.dy,
            command_id=self.id,
            timestamp=other.timestamp,
        )


class TileRotateCommand(_TileCommand):
    """Set a tile's rotation."""

    command_type = CommandType.TILE_ROTATE

    def __init__(
        self,
        handle: GridHandle,
        tile_id: str,
        from_rotation: Rotation,
        to_rotation: Rotation,
        command_id: str | None = None,
        timestamp: datetime | None = None,
    ) -> None:
        super().__init__(
            handle,
            tile_id,
            f"Rotate {tile_id} {int(from_rotation)}° -> {int(to_rotation)}°",
            command_id,
            timestamp,
        )
        self.from_rotation = Rotation(from_rotation)
        self.to_rotation = Rotation(to_rotation)

    def _update(self, cell: TileCell, forward: bool) -> None:
        cell.rotation = self.to_rotation if forward else self.from_rotation


class TileVisibilityCommand(_TileCommand):
    """Show or hide a tile by hand, independent of masks."""

    command_type = CommandType.TILE_VISIBILITY

    def __init__(
        self,
        handle: GridHandle,
        tile_id: str,
        from_visible: bool,
        to_visible: bool,
        command_id: str | None = None,
        timestamp: datetime | None = None,
    ) -> None:
        action = "Show" if to_visible else "Hide"
        super().__init__(handle, tile_id, f"{action} {tile_id}", command_id, timestamp)
        self.from_visible = from_visible
        self.to_visible = to_visible

    def execute(self) -> CommandResult:
        cell = self.handle.resolve(self.tile_id)
        if self.to_visible and cell is not None and cell.masked_by:
            return CommandResult.failed(MaskedTileError(self.tile_id, cell.masked_by))
        return super().execute()

    def _update(self, cell: TileCell, forward: bool) -> None:
        # A masked cell stays hidden whatever its hand-set state.
        visible = self.to_visible if forward else self.from_visible
        cell.visible = visible and not cell.masked_by


class TileLockCommand(_TileCommand):
    """Lock or unlock a tile."""

    command_type = CommandType.TILE_LOCK

    def __init__(
        self,
        handle: GridHandle,
        tile_id: str,
        from_locked: bool,
        to_locked: bool,
        command_id: str | None = None,
        timestamp: datetime | None = None,
    ) -> None:
        action = "Lock" if to_locked else "Unlock"
        super().__init__(handle, tile_id, f"{action} {tile_id}", command_id, timestamp)
        self.from_locked = from_locked
        self.to_locked = to_locked

    def _update(self, cell: TileCell, forward: bool) -> None:
        cell.locked = self.to_locked if forward else self.from_locked


# =============================================================================
# Mask commands
# =============================================================================


class MaskAddCommand(Command):
    """Add a mask; undo removes it again."""

    command_type = CommandType.MASK_ADD

    def __init__(
        self,
        repository: MaskRepository,
        mask_id: str,
        geometry: MaskGeometry,
        label: str = "",
        command_id: str | None = None,
        timestamp: datetime | None = None,
    ) -> None:
        super().__init__(
            f"Add {geometry.shape_type.value} mask {mask_id}", command_id, timestamp
        )
        self.repository = repository
        self.mask_id = mask_id
        self.geometry = geometry
        self.label = label

    def execute(self) -> CommandResult:
        try:
            mask = self.repository.add_mask(self.mask_id, self.geometry, self.label)
        except TileSetupError as exc:
            return CommandResult.failed(exc)
        return CommandResult.ok([self.mask_id, *sorted(mask.covered_tiles)])

    def undo(self) -> CommandResult:
        if self.repository.get_mask(self.mask_id) is None:
            return CommandResult.failed(CommandTargetMissingError(self.mask_id, "mask"))
        restored = self.repository.remove_mask(self.mask_id)
        return CommandResult.ok([self.mask_id, *restored])


class MaskRemoveCommand(Command):
    """Remove a mask, remembering its geometry so undo can recreate it.

    The geometry is captured when the command is created, and again on
    execute if it was not available then.
    """

    command_type = CommandType.MASK_REMOVE

    def __init__(
        self,
        repository: MaskRepository,
        mask_id: str,
        command_id: str | None = None,
        timestamp: datetime | None = None,
    ) -> None:
        super().__init__(f"Remove mask {mask_id}", command_id, timestamp)
        self.repository = repository
        self.mask_id = mask_id
        self.removed_geometry: MaskGeometry | None = None
        self.removed_label = ""
        self.removed_active = True
        self._capture()

    def _capture(self) -> None:
        mask = self.repository.get_mask(self.mask_id)
        if mask is not None:
            self.removed_geometry = mask.geometry
            self.removed_label = mask.label
            self.removed_active = mask.active

    def execute(self) -> CommandResult:
        self._capture()
        if self.removed_geometry is None or self.repository.get_mask(self.mask_id) is None:
            return CommandResult.failed(CommandTargetMissingError(self.mask_id, "mask"))
        restored = self.repository.remove_mask(self.mask_id)
        return CommandResult.ok([self.mask_id, *restored])

    def undo(self) -> CommandResult:
        if self.removed_geometry is None:
            return CommandResult.failed(CommandTargetMissingError(self.mask_id, "mask"))
        try:
            mask = self.repository.add_mask(
                self.mask_id, self.removed_geometry, self.removed_label, self.removed_active
            )
        except TileSetupError as exc:
            return CommandResult.failed(exc)
        return CommandResult.ok([self.mask_id, *sorted(mask.covered_tiles)])


class MaskMoveCommand(Command):
    """Move a mask's bounding box from one top-left position to another."""

    command_type = CommandType.MASK_MOVE

    def __init__(
        self,
        repository: MaskRepository,
        mask_id: str,
        from_position: Point,
        to_position: Point,
        command_id: str | None = None,
        timestamp: datetime | None = None,
    ) -> None:
        super().__init__(f"Move mask {mask_id}", command_id, timestamp)
        self.repository = repository
        self.mask_id = mask_id
        self.from_position = from_position
        self.to_position = to_position

    def _move(self, position: Point) -> CommandResult:
        if self.repository.get_mask(self.mask_id) is None:
            return CommandResult.failed(CommandTargetMissingError(self.mask_id, "mask"))
        affected = self.repository.move_shape(self.mask_id, position)
        return CommandResult.ok([self.mask_id, *affected])

    def execute(self) -> CommandResult:
        return self._move(self.to_position)

    def undo(self) -> CommandResult:
        return self._move(self.from_position)

    def can_merge_with(self, other: Command) -> bool:
        return isinstance(other, MaskMoveCommand) and other.mask_id == self.mask_id

    def merge_with(self, other: Command) -> Command | None:
        if not isinstance(other, MaskMoveCommand) or not self.can_merge_with(other):
            return None
        return MaskMoveCommand(
            self.repository,
            self.mask_id,
            self.from_position,
            other.to_position,
            command_id=self.id,
            timestamp=other.timestamp,
        )


class MaskResizeCommand(Command):
    """Swap a mask's geometry for a resized one."""

    command_type = CommandType.MASK_RESIZE

    def __init__(
        self,
        repository: MaskRepository,
        mask_id: str,
        from_geometry: MaskGeometry,
        to_geometry: MaskGeometry,
        command_id: str | None = None,
        timestamp: datetime | None = None,
    ) -> None:
        super().__init__(f"Resize mask {mask_id}", command_id, timestamp)
        self.repository = repository
        self.mask_id = mask_id
        self.from_geometry = from_geometry
        self.to_geometry = to_geometry

    def _set(self, geometry: MaskGeometry) -> CommandResult:
        if self.repository.get_mask(self.mask_id) is None:
            return CommandResult.failed(CommandTargetMissingError(self.mask_id, "mask"))
        affected = self.repository.set_geometry(self.mask_id, geometry)
        return CommandResult.ok([self.mask_id, *affected])

    def execute(self) -> CommandResult:
        return self._set(self.to_geometry)

    def undo(self) -> CommandResult:
        return self._set(self.from_geometry)


# =============================================================================
# Pattern and composite commands
# =============================================================================


class PatternChangeCommand(Command):
    """Switch the layout pattern."""

    command_type = CommandType.PATTERN_CHANGE

    def __init__(
        self,
        target: PatternTarget,
        from_pattern: PatternId,
        to_pattern: PatternId,
        command_id: str | None = None,
        timestamp: datetime | None = None,
    ) -> None:
        super().__init__(
            f"Change pattern {from_pattern.value} -> {to_pattern.value}", command_id, timestamp
        )
        self.target = target
        self.from_pattern = from_pattern
        self.to_pattern = to_pattern

    def _switch(self, pattern_id: PatternId) -> CommandResult:
        try:
            affected = self.target.set_pattern(pattern_id)
        except TileSetupError as exc:
            return CommandResult.failed(exc)
        return CommandResult.ok(["pattern", *affected])

    def execute(self) -> CommandResult:
        return self._switch(self.to_pattern)

    def undo(self) -> CommandResult:
        return self._switch(self.from_pattern)


class BatchCommand(Command):
    """Several commands applied and reversed as one unit.

    ``execute`` runs the children in order; if one fails, the children
    already applied are undone in reverse before the failure is returned.
    ``undo`` runs the children in reverse order.
    """

    command_type = CommandType.BATCH

    def __init__(
        self,
        commands: list[Command],
        description: str | None = None,
        command_id: str | None = None,
        timestamp: datetime | None = None,
    ) -> None:
        super().__init__(
            description or f"Batch of {len(commands)} commands", command_id, timestamp
        )
        self.commands = list(commands)

    @property
    def command_count(self) -> int:
        return len(self.commands)

    def execute(self) -> CommandResult:
        affected: list[str] = []
        for index, command in enumerate(self.commands):
            result = command.execute()
            if not result.success:
                for applied in reversed(self.commands[:index]):
                    applied.undo()
                return result
            affected.extend(result.affected_ids)
        return CommandResult.ok(affected)

    def undo(self) -> CommandResult:
        affected: list[str] = []
        for index in range(len(self.commands) - 1, -1, -1):
            result = self.commands[index].undo()
            if not result.success:
                for undone in self.commands[index + 1 :]:
                    undone.execute()
                return result
            affected.extend(result.affected_ids)
        return CommandResult.ok(affected)
