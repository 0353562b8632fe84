"""Domain services: grid generation, patterns, masking and history."""

from .grid_engine import (
    MAX_TILES,
    GridEngine,
    GridStatistics,
    LayoutInput,
    LayoutResult,
    calculate_area_ratio,
    calculate_axis,
    classify_piece,
    summarize_grid,
    validate_layout_input,
)
from .history import (
    BatchCommand,
    Command,
    CommandIdGenerator,
    CommandResult,
    CommandType,
    HistoryChangeEvent,
    HistoryConfig,
    HistoryEngine,
    HistoryEventType,
    MaskAddCommand,
    MaskMoveCommand,
    MaskRemoveCommand,
    MaskRepository,
    MaskResizeCommand,
    PatternChangeCommand,
    PatternTarget,
    TileLockCommand,
    TileMoveCommand,
    TileRotateCommand,
    TileVisibilityCommand,
)
from .masking import (
    MaskingConfig,
    MaskingEngine,
    circle_intersection,
    polygon_intersection,
    rectangle_intersection,
    shape_intersection,
)
from .pattern_engine import (
    ApplyPatternOptions,
    OffsetType,
    PatternDefinition,
    PatternId,
    PatternOffset,
    PatternRegistry,
    PatternValidation,
    apply_pattern,
    compatible_patterns,
    generate_pattern_preview,
    get_all_patterns,
    get_pattern,
    pattern_registry,
    validate_pattern_application,
)

__all__ = [
    # Grid engine
    "MAX_TILES",
    "GridEngine",
    "GridStatistics",
    "LayoutInput",
    "LayoutResult",
    "calculate_area_ratio",
    "calculate_axis",
    "classify_piece",
    "summarize_grid",
    "validate_layout_input",
    # Patterns
    "ApplyPatternOptions",
    "OffsetType",
    "PatternDefinition",
    "PatternId",
    "PatternOffset",
    "PatternRegistry",
    "PatternValidation",
    "apply_pattern",
    "compatible_patterns",
    "generate_pattern_preview",
    "get_all_patterns",
    "get_pattern",
    "pattern_registry",
    "validate_pattern_application",
    # Masking
    "MaskingConfig",
    "MaskingEngine",
    "circle_intersection",
    "polygon_intersection",
    "rectangle_intersection",
    "shape_intersection",
    # History
    "BatchCommand",
    "Command",
    "CommandIdGenerator",
    "CommandResult",
    "CommandType",
    "HistoryChangeEvent",
    "HistoryConfig",
    "HistoryEngine",
    "HistoryEventType",
    "MaskAddCommand",
    "MaskMoveCommand",
    "MaskRemoveCommand",
    "MaskRepository",
    "MaskResizeCommand",
    "PatternChangeCommand",
    "PatternTarget",
    "TileLockCommand",
    "TileMoveCommand",
    "TileRotateCommand",
    "TileVisibilityCommand",
]
