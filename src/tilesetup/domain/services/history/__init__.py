"""Command-based undo/redo history."""

from .commands import (
    BatchCommand,
    Command,
    CommandResult,
    CommandType,
    MaskAddCommand,
    MaskMoveCommand,
    MaskRemoveCommand,
    MaskResizeCommand,
    PatternChangeCommand,
    TileLockCommand,
    TileMoveCommand,
    TileRotateCommand,
    TileVisibilityCommand,
    new_command_id,
)
from .manager import (
    CommandIdGenerator,
    HistoryChangeEvent,
    HistoryConfig,
    HistoryEngine,
    HistoryEventType,
)
from .targets import MaskRepository, PatternTarget

__all__ = [
    # Commands
    "BatchCommand",
    "Command",
    "CommandResult",
    "CommandType",
    "MaskAddCommand",
    "MaskMoveCommand",
    "MaskRemoveCommand",
    "MaskResizeCommand",
    "PatternChangeCommand",
    "TileLockCommand",
    "TileMoveCommand",
    "TileRotateCommand",
    "TileVisibilityCommand",
    "new_command_id",
    # Engine
    "CommandIdGenerator",
    "HistoryChangeEvent",
    "HistoryConfig",
    "HistoryEngine",
    "HistoryEventType",
    # Targets
    "MaskRepository",
    "PatternTarget",
]
